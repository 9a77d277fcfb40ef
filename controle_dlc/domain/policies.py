"""
Políticas de classificação de status por dias até o vencimento.

Os limites são fixos e avaliados em ordem (a primeira regra que casa vence).
Rótulos e classes de estilo são tabelas de consulta totais sobre os cinco
status; pedir um status fora da tabela é erro de programação.
"""

from __future__ import annotations

from typing import Dict, Union

from controle_dlc.domain.models import Status


LIMITE_CRITICO = 3
LIMITE_ALERTA = 7


def status_por_dias(dias: int) -> Status:
    """Classifica um produto pelos dias até o vencimento.

    Regras:
        - ``dias < 0``  → ``expired``
        - ``dias == 0`` → ``today``
        - ``dias <= 3`` → ``critical``
        - ``dias <= 7`` → ``warning``
        - caso contrário → ``ok``
    """
    if dias < 0:
        return Status.EXPIRED
    if dias == 0:
        return Status.TODAY
    if dias <= LIMITE_CRITICO:
        return Status.CRITICAL
    if dias <= LIMITE_ALERTA:
        return Status.WARNING
    return Status.OK


ROTULOS: Dict[Status, str] = {
    Status.EXPIRED: "Vencido",
    Status.TODAY: "Vence Hoje",
    Status.CRITICAL: "Alerta Crítico",
    Status.WARNING: "Vence em Breve",
    Status.OK: "OK",
}

CORES: Dict[Status, str] = {
    Status.EXPIRED: "bg-expired text-expired-foreground",
    Status.TODAY: "bg-warning text-warning-foreground",
    Status.CRITICAL: "bg-destructive text-destructive-foreground animate-pulse",
    Status.WARNING: "bg-warning/80 text-warning-foreground",
    Status.OK: "bg-success/20 text-success border border-success/30",
}

# Estilos equivalentes para o terminal (rich)
ESTILOS_TERMINAL: Dict[Status, str] = {
    Status.EXPIRED: "bold white on red",
    Status.TODAY: "bold yellow",
    Status.CRITICAL: "bold red",
    Status.WARNING: "yellow",
    Status.OK: "green",
}


def _consulta(tabela: Dict[Status, str], status: Union[Status, str]) -> str:
    # Status(...) levanta ValueError para valores desconhecidos
    return tabela[Status(status)]


def rotulo_status(status: Union[Status, str]) -> str:
    return _consulta(ROTULOS, status)


def cor_status(status: Union[Status, str]) -> str:
    return _consulta(CORES, status)


def estilo_terminal(status: Union[Status, str]) -> str:
    return _consulta(ESTILOS_TERMINAL, status)
