"""
Utilidades de parsing para datas de validade e tipos de DLC digitados.

As datas são normalizadas para os dois formatos aceitos pelo domínio:
``YYYY-MM-DD`` (só data) ou ``YYYY-MM-DDTHH:MM`` (data e hora, precisão
de minuto). Entradas aceitas:

    "2025-12-01"          → "2025-12-01"
    "2025-12-01T18:00"    → "2025-12-01T18:00"
    "2025-12-01 18:00:59" → "2025-12-01T18:00"
    "01/12/2025"          → "2025-12-01"
    "1/12/2025 8:05"      → "2025-12-01T08:05"
"""

from __future__ import annotations

import re
import unicodedata
from datetime import datetime
from typing import Optional

from controle_dlc.domain.models import TipoDLC

_ISO_RE = re.compile(
    r"^(?P<a>\d{4})-(?P<m>\d{1,2})-(?P<d>\d{1,2})"
    r"(?:[T ](?P<h>\d{1,2}):(?P<mi>\d{2})(?::\d{2}(?:\.\d+)?)?)?$"
)
_BR_RE = re.compile(
    r"^(?P<d>\d{1,2})/(?P<m>\d{1,2})/(?P<a>\d{4})"
    r"(?:[ ,]+(?P<h>\d{1,2}):(?P<mi>\d{2})(?::\d{2})?)?$"
)


def parse_instante(txt: Optional[str]) -> str:
    """Normaliza uma data de validade digitada.

    Raises:
        ValueError: texto vazio ou fora dos formatos aceitos, ou data inexistente.
    """
    if txt is None or not str(txt).strip():
        raise ValueError("Data de validade vazia")
    s = str(txt).strip()
    m = _ISO_RE.match(s) or _BR_RE.match(s)
    if not m:
        raise ValueError(f"Data de validade inválida: {s!r}")

    ano, mes, dia = int(m.group("a")), int(m.group("m")), int(m.group("d"))
    if m.group("h") is None:
        # valida a data (ex.: 31/02 levanta ValueError)
        return datetime(ano, mes, dia).strftime("%Y-%m-%d")
    dt = datetime(ano, mes, dia, int(m.group("h")), int(m.group("mi")))
    return dt.strftime("%Y-%m-%dT%H:%M")


def slug(s: Optional[str]) -> str:
    """Minúsculas, sem acentos, espaços simples."""
    if s is None:
        return ""
    s = unicodedata.normalize("NFKD", str(s).strip().lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"[^a-z0-9]+", " ", s)
    return re.sub(r"\s+", " ", s).strip()


_TIPOS = {
    "primaria": TipoDLC.PRIMARIA,
    "dlc primaria": TipoDLC.PRIMARIA,
    "secundaria": TipoDLC.SECUNDARIA,
    "dlc secundaria": TipoDLC.SECUNDARIA,
    "stock": TipoDLC.STOCK,
    "estoque": TipoDLC.STOCK,
}


def parse_tipo_dlc(txt: Optional[str], default: TipoDLC = TipoDLC.PRIMARIA) -> TipoDLC:
    """Interpreta o tipo de DLC sem diferenciar maiúsculas ou acentos."""
    chave = slug(txt)
    if not chave:
        return default
    try:
        return _TIPOS[chave]
    except KeyError:
        raise ValueError(f"Tipo de DLC inválido: {txt!r}") from None
