# controle_dlc/usecases/verificacao_diaria.py
"""
UC: verificação diária da DLC Secundária.

- confirmar_verificacao: registra uma verificação com a contagem atual de
  produtos da DLC Secundária;
- exportar_verificacoes: grava o histórico em CSV;
- status_verificacao: último registro, "verificado hoje" e lembrete pendente.
"""
from __future__ import annotations

import dataclasses
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from controle_dlc.config import DB_PATH
from controle_dlc.adapters.exportacao import exportar_csv, nome_arquivo_exportacao
from controle_dlc.domain.models import EstadoApp, RegistroVerificacao, TipoDLC
from controle_dlc.domain.verificacao import (
    lembrete_pendente,
    registrar_verificacao,
    ultimo_registro,
    verificado_hoje,
)
from controle_dlc.usecases.estado import carregar_estado, salvar_estado
from controle_dlc.infra.logger import (
    log_transaction, log_verificacao, log_file_operation
)


def contar_secundaria(estado: EstadoApp) -> int:
    return sum(1 for p in estado.produtos if p.tipo_dlc == TipoDLC.SECUNDARIA)


def confirmar_verificacao(
    estado: EstadoApp,
    responsavel: Optional[str] = None,
    observacao: Optional[str] = None,
    agora: Optional[datetime] = None,
) -> Tuple[RegistroVerificacao, EstadoApp]:
    registro, registros = registrar_verificacao(
        estado.registros, contar_secundaria(estado), responsavel, observacao, agora
    )
    return registro, dataclasses.replace(estado, registros=registros)


def exportar_verificacoes(
    estado: EstadoApp,
    destino: str = ".",
    agora: Optional[datetime] = None,
) -> Path:
    """Grava o CSV em ``destino`` e devolve o caminho do arquivo."""
    hoje = (agora or datetime.now()).date()
    pasta = Path(destino)
    pasta.mkdir(parents=True, exist_ok=True)
    caminho = pasta / nome_arquivo_exportacao(hoje)
    caminho.write_text(exportar_csv(estado.registros), encoding="utf-8")
    log_file_operation("export", str(caminho), rows_processed=len(estado.registros))
    return caminho


def status_verificacao(estado: EstadoApp, agora: Optional[datetime] = None) -> Dict[str, Any]:
    ultimo = ultimo_registro(estado.registros)
    return {
        "ultimo": ultimo.to_dict() if ultimo else None,
        "verificado_hoje": verificado_hoje(estado.registros, agora),
        "lembrete_pendente": lembrete_pendente(estado.registros, agora),
        "produtos_secundaria": contar_secundaria(estado),
        "total_registros": len(estado.registros),
    }


# -----------------------
# run_* (carrega → aplica → grava)
# -----------------------

def run_confirmar_verificacao(
    responsavel: Optional[str] = None,
    observacao: Optional[str] = None,
    db_path: str = DB_PATH,
    agora: Optional[datetime] = None,
) -> RegistroVerificacao:
    dados = {"responsavel": responsavel, "observacao": observacao}
    try:
        estado = carregar_estado(db_path, agora)
        registro, estado = confirmar_verificacao(estado, responsavel, observacao, agora)
        salvar_estado(estado, db_path)

        log_verificacao("confirm", **registro.to_dict())
        log_transaction("confirmar_verificacao", dados, result={"id": registro.id})
        return registro
    except Exception as e:
        log_transaction("confirmar_verificacao", dados, error=str(e))
        raise


def run_exportar_verificacoes(
    destino: str = ".",
    db_path: str = DB_PATH,
    agora: Optional[datetime] = None,
) -> Path:
    estado = carregar_estado(db_path, agora)
    caminho = exportar_verificacoes(estado, destino, agora)
    log_transaction("exportar_verificacoes", {"destino": destino}, result=str(caminho))
    return caminho


def run_status_verificacao(db_path: str = DB_PATH, agora: Optional[datetime] = None) -> Dict[str, Any]:
    return status_verificacao(carregar_estado(db_path, agora), agora)
