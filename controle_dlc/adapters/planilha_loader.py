# controle_dlc/adapters/planilha_loader.py
"""
Loader de planilhas (XLSX ou CSV) com produtos a cadastrar.

A função pública:
- lê a planilha usando pandas (tudo como texto);
- normaliza cabeçalhos (acentos, variações, sinônimos);
- normaliza datas para ``YYYY-MM-DD`` / ``YYYY-MM-DDTHH:MM``;
- retorna rascunhos de produto (dicionários) para a camada de casos de uso.

Observações:
- Linhas sem nenhum valor são ignoradas.
- Datas inválidas são mantidas como texto: a validação fica para o
  cadastro, que reporta o erro por linha.
- A coluna "Datas adicionais" aceita várias datas separadas por ``;``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Optional

import pandas as pd

from controle_dlc.adapters.parsers import parse_instante, parse_tipo_dlc, slug


# ---------------------------
# utilitários de normalização
# ---------------------------

_MEIA_NOITE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2}) 00:00:00$")


def _safe_get(row, key) -> Optional[str]:
    """Valor da linha sem NA e sem espaços sobrando."""
    val = row.get(key)
    if val is None or pd.isna(val):
        return None
    s = str(val).strip()
    return s or None


def _to_instante(val: Optional[str]) -> Optional[str]:
    if val is None:
        return None
    # células de data do Excel chegam como "YYYY-MM-DD 00:00:00"
    m = _MEIA_NOITE_RE.match(val)
    if m:
        return m.group(1)
    try:
        return parse_instante(val)
    except ValueError:
        return val


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Renomeia colunas com base em sinônimos/variações."""
    aliases = {
        "categoria": "categoria",
        "category": "categoria",

        "subcategoria": "subcategoria",
        "sub categoria": "subcategoria",
        "subcategory": "subcategoria",

        "produto": "nome",
        "nome": "nome",
        "nome do produto": "nome",
        "name": "nome",

        "validade": "data_validade",
        "data validade": "data_validade",
        "data de validade": "data_validade",
        "dlc": "data_validade",
        "expiry date": "data_validade",

        "datas adicionais": "datas_adicionais",
        "outras datas": "datas_adicionais",

        "tipo": "tipo_dlc",
        "tipo dlc": "tipo_dlc",
        "dlc type": "tipo_dlc",

        "observacao": "observacao",
        "observacoes": "observacao",
        "obs": "observacao",
    }

    new_cols = {}
    for col in df.columns:
        key = slug(col)
        new_cols[col] = aliases.get(key, key)
    return df.rename(columns=new_cols)


def _read(path: str) -> pd.DataFrame:
    if Path(path).suffix.lower() == ".csv":
        return pd.read_csv(path, dtype="string", keep_default_na=False, na_values=[""])
    return pd.read_excel(path, dtype="string")


# ---------------------------
# loader público
# ---------------------------

def load_produtos_from_planilha(path: str) -> List[Dict[str, Any]]:
    """Lê a planilha e retorna rascunhos de produto.

    Campos de saída (chaves do dict por linha):
      - categoria, nome, subcategoria, observacao: str | None
      - data_validade: ``YYYY-MM-DD`` | ``YYYY-MM-DDTHH:MM`` | texto original | None
      - datas_adicionais: lista de datas (mesmo formato)
      - tipo_dlc: valor de TipoDLC (padrão Primária)

    Raises:
        ValueError: tipo de DLC desconhecido em alguma linha.
    """
    df = _normalize_columns(_read(path))
    out: List[Dict[str, Any]] = []
    for _, row in df.iterrows():
        valores = {k: _safe_get(row, k) for k in df.columns}
        if not any(valores.values()):
            continue
        extras = valores.get("datas_adicionais") or ""
        out.append({
            "categoria": valores.get("categoria"),
            "nome": valores.get("nome"),
            "subcategoria": valores.get("subcategoria"),
            "data_validade": _to_instante(valores.get("data_validade")),
            "datas_adicionais": [
                _to_instante(d.strip()) for d in extras.split(";") if d.strip()
            ],
            "tipo_dlc": parse_tipo_dlc(valores.get("tipo_dlc")).value,
            "observacao": valores.get("observacao"),
        })
    return out
