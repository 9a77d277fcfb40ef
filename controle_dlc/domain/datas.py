"""
Cálculo de dias até o vencimento.

Uma data de validade pode ser só a data (``YYYY-MM-DD``) ou data e hora
(``YYYY-MM-DDTHH:MM``). As duas formas têm precisões diferentes:

- só data: diferença em dias de calendário entre a data de validade e a
  data de hoje, ignorando a hora atual;
- data e hora: ``floor((validade - agora) / 1 dia)``, que pode mudar
  várias vezes no mesmo dia conforme ``agora`` avança.

Tudo é interpretado no horário local. O relógio é sempre injetado
(``agora``); ``None`` significa ``datetime.now()``.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional

_UM_DIA = timedelta(days=1)


def _agora(agora: Optional[datetime]) -> datetime:
    return agora if agora is not None else datetime.now()


def tem_hora(instante: str) -> bool:
    """Indica se o texto traz componente de hora."""
    return "T" in instante or len(instante) > 10


def para_local(dt: datetime) -> datetime:
    """Converte um datetime com fuso para o horário local, sem tzinfo."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def parse_datetime(instante: str) -> datetime:
    """Lê um instante ISO (aceita sufixo ``Z``) e devolve horário local ingênuo."""
    s = instante.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return para_local(datetime.fromisoformat(s))


def dias_para_vencer(instante: str, agora: Optional[datetime] = None) -> int:
    """Dias inteiros até ``instante`` em relação a ``agora``.

    >>> dias_para_vencer("2025-03-10", datetime(2025, 3, 10, 23, 59))
    0
    >>> dias_para_vencer("2025-03-11T10:00", datetime(2025, 3, 10, 11, 0))
    0
    """
    ref = para_local(_agora(agora))
    if tem_hora(instante):
        return (parse_datetime(instante) - ref) // _UM_DIA
    validade = date.fromisoformat(instante.strip()[:10])
    return (validade - ref.date()).days


def instante_local(agora: Optional[datetime] = None) -> str:
    """Instante atual no formato ``YYYY-MM-DDTHH:MM`` (precisão de minuto)."""
    return para_local(_agora(agora)).strftime("%Y-%m-%dT%H:%M")


def formatar_instante(instante: str) -> str:
    """Formato de exibição: ``DD/MM/AAAA`` ou ``DD/MM/AAAA HH:MM``."""
    if tem_hora(instante):
        return parse_datetime(instante).strftime("%d/%m/%Y %H:%M")
    return date.fromisoformat(instante.strip()[:10]).strftime("%d/%m/%Y")
