"""
Filtros e agrupamento de produtos para exibição.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Union

from controle_dlc.domain.models import Produto, Status, TipoDLC


# Ordem fixa das categorias; categorias desconhecidas vão ao fim, em ordem alfabética
ORDEM_CATEGORIAS: List[str] = [
    "McCafé",
    "Queijos",
    "Molhos",
    "Pães",
    "Sobremesas",
    "Outros",
]

TODOS = "all"


def _ativo(valor: Optional[str]) -> bool:
    return valor is not None and valor != "" and valor != TODOS


def filtrar_produtos(
    produtos: Iterable[Produto],
    busca: Optional[str] = None,
    categoria: Optional[str] = None,
    status: Optional[Union[Status, str]] = None,
    tipo: Optional[Union[TipoDLC, str]] = None,
) -> List[Produto]:
    """Busca por nome/categoria/subcategoria (sem diferenciar maiúsculas)
    e filtros exatos por categoria, status e tipo de DLC."""
    out = list(produtos)

    if busca:
        termo = busca.lower()
        out = [
            p for p in out
            if termo in p.nome.lower()
            or termo in p.categoria.lower()
            or (p.subcategoria and termo in p.subcategoria.lower())
        ]

    if _ativo(categoria):
        out = [p for p in out if p.categoria == categoria]

    if _ativo(status):
        alvo = Status(status)
        out = [p for p in out if p.status == alvo]

    if _ativo(tipo):
        alvo_tipo = TipoDLC(tipo)
        out = [p for p in out if p.tipo_dlc == alvo_tipo]

    return out


def categorias(produtos: Iterable[Produto]) -> List[str]:
    """Categorias distintas, na ordem em que aparecem."""
    vistas: Dict[str, None] = {}
    for p in produtos:
        vistas.setdefault(p.categoria, None)
    return list(vistas)


def _chave_categoria(categoria: str):
    if categoria in ORDEM_CATEGORIAS:
        return (0, ORDEM_CATEGORIAS.index(categoria), "")
    return (1, 0, categoria.lower())


def agrupar_por_categoria(produtos: Iterable[Produto]) -> Dict[str, List[Produto]]:
    grupos: Dict[str, List[Produto]] = {}
    for p in produtos:
        grupos.setdefault(p.categoria, []).append(p)
    return {c: grupos[c] for c in sorted(grupos, key=_chave_categoria)}
