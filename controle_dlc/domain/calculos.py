"""
Cálculos sobre produtos: recálculo dos campos derivados e resumo de conformidade.

As funções são puras: dependem apenas das entradas (incluindo o relógio
injetado ``agora``) e não alteram o produto recebido.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Union

from controle_dlc.domain.datas import dias_para_vencer
from controle_dlc.domain.models import (
    Produto,
    ProdutoInvalidoError,
    Resumo,
    Status,
    TipoDLC,
)
from controle_dlc.domain.policies import status_por_dias


def recalcular_produto(produto: Produto, agora: Optional[datetime] = None) -> Produto:
    """Recalcula ``dias_para_vencer``, ``status`` e normaliza ``data_validade``.

    Com várias datas candidatas, a mais próxima do vencimento domina:
    basta uma data vencida para o produto ficar ``expired``. Em caso de
    empate, vale a primeira candidata na ordem da lista.

    Raises:
        ProdutoInvalidoError: se o produto não tiver nenhuma data candidata.
    """
    datas = produto.candidatos()
    if not datas:
        raise ProdutoInvalidoError(f"Produto sem data de validade: {produto.id!r}")

    dias = [dias_para_vencer(d, agora) for d in datas]
    minimo = min(dias)
    return dataclasses.replace(
        produto,
        data_validade=datas[dias.index(minimo)],
        dias_para_vencer=minimo,
        status=status_por_dias(minimo),
    )


def _taxa(ok: int, total: int) -> int:
    if total == 0:
        return 0
    # meio para cima, como Math.round
    return int((Decimal(100 * ok) / Decimal(total)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def resumir(produtos: Iterable[Produto], tipo: Optional[Union[TipoDLC, str]] = None) -> Resumo:
    """Reduz uma coleção de produtos às contagens por status.

    ``vencem_em_7_dias`` soma ``critical`` e ``warning``: é um indicador
    agregado, não um sexto status. Com ``tipo`` informado, só os produtos
    daquele tipo de DLC entram na conta.
    """
    filtro = TipoDLC(tipo) if tipo is not None else None
    contagem = {s: 0 for s in Status}
    total = 0
    for p in produtos:
        if filtro is not None and p.tipo_dlc != filtro:
            continue
        total += 1
        if p.status is not None:
            contagem[Status(p.status)] += 1

    return Resumo(
        total=total,
        vencidos=contagem[Status.EXPIRED],
        vencem_hoje=contagem[Status.TODAY],
        vencem_em_7_dias=contagem[Status.CRITICAL] + contagem[Status.WARNING],
        ok=contagem[Status.OK],
        taxa_conformidade=_taxa(contagem[Status.OK], total),
    )
