"""
Reconciliação do cadastro salvo com o catálogo padrão.

O cadastro salvo pelo usuário tem precedência: um produto padrão já
presente (mesmo id) mantém a versão editada. Produtos padrão ausentes
são inseridos com os valores de fábrica. O reset equivale a reconciliar
um cadastro vazio.

Ids estáveis:
    ``id_estavel`` codifica em Base64 o texto ``"{categoria}-{nome}-{tipo}"``.
    Dois itens com a mesma tripla (categoria, nome, tipo) colidem e só o
    primeiro inserido permanece. Não há resolução de colisão além disso e o
    id não tem pretensão criptográfica.
"""

from __future__ import annotations

import base64
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from controle_dlc.config import DEFAULTS
from controle_dlc.domain.calculos import recalcular_produto
from controle_dlc.domain.catalogo_padrao import (
    DLC_NEGATIVA_PROTEINAS_PADRAO,
    PRIMARIA_PADRAO,
    SECUNDARIA_PADRAO,
)
from controle_dlc.domain.models import Produto, TipoDLC


def id_estavel(categoria: str, nome: str, tipo_dlc: Union[TipoDLC, str]) -> str:
    texto = f"{categoria}-{nome}-{TipoDLC(tipo_dlc).value}"
    try:
        dados = texto.encode("latin-1")
    except UnicodeEncodeError:
        dados = texto.encode("utf-8")
    return base64.b64encode(dados).decode("ascii")


def _semente(item: Mapping[str, Any], tipo: TipoDLC, data_forcada: Optional[str] = None) -> Produto:
    data = data_forcada or item.get("expiryDate") or DEFAULTS.data_validade_padrao
    return Produto(
        id=id_estavel(item["category"], item["name"], tipo),
        categoria=item["category"],
        nome=item["name"],
        data_validade=data,
        tipo_dlc=tipo,
        subcategoria=item.get("subCategory"),
        observacao=item.get("observation"),
    )


def itens_padrao() -> List[Produto]:
    """Catálogo padrão completo, com ids estáveis e sem campos derivados.

    A lista da DLC Secundária usa sempre a data padrão, ignorando qualquer
    data definida no item.
    """
    itens = [_semente(i, TipoDLC.PRIMARIA) for i in PRIMARIA_PADRAO]
    itens += [_semente(i, TipoDLC.PRIMARIA) for i in DLC_NEGATIVA_PROTEINAS_PADRAO]
    itens += [
        _semente(i, TipoDLC.SECUNDARIA, DEFAULTS.data_validade_padrao)
        for i in SECUNDARIA_PADRAO
    ]
    return itens


def reconciliar(
    armazenados: Iterable[Produto],
    sementes: Optional[Iterable[Produto]] = None,
    agora: Optional[datetime] = None,
) -> List[Produto]:
    """Une o cadastro salvo ao catálogo padrão.

    1. Todo produto salvo entra no mapa por id, com os cálculos refeitos.
    2. Cada semente cujo id ainda não está no mapa é inserida (recalculada).
    3. O resultado são os valores do mapa; a ordem não é significativa.
    """
    if sementes is None:
        sementes = itens_padrao()

    por_id: Dict[str, Produto] = {}
    for p in armazenados:
        por_id[p.id] = recalcular_produto(p, agora)

    for s in sementes:
        if s.id not in por_id:
            por_id[s.id] = recalcular_produto(s, agora)

    return list(por_id.values())


def resetar(sementes: Optional[Iterable[Produto]] = None, agora: Optional[datetime] = None) -> List[Produto]:
    """Cadastro de fábrica: ``reconciliar([], sementes)``."""
    return reconciliar([], sementes, agora)
