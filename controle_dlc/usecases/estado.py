# controle_dlc/usecases/estado.py
"""
UC: carregar, salvar, atualizar e resetar o estado da aplicação.

Fluxo de carga:
1) Aplica migrações.
2) Lê `products` e `verificationLogs` (JSON malformado → lista vazia);
   produtos salvos com data ilegível são descartados com aviso.
3) Reconcilia os produtos salvos com o catálogo padrão, refazendo os cálculos.

A gravação é sempre total (sobrescreve as duas chaves) e acontece depois de
cada transição de estado; não é atômica em relação ao estado em memória.
"""

from __future__ import annotations

import dataclasses
from datetime import datetime
from typing import Iterable, List, Optional

from controle_dlc.config import DB_PATH
from controle_dlc.domain.calculos import recalcular_produto
from controle_dlc.domain.catalogo import reconciliar, resetar
from controle_dlc.domain.models import EstadoApp, Produto
from controle_dlc.infra.migrations import apply_migrations
from controle_dlc.infra.repositories import ProdutoRepo, VerificacaoRepo
from controle_dlc.infra.logger import log_system_event, log_transaction


def _descartar_invalidos(armazenados: Iterable[Produto], agora: Optional[datetime]) -> List[Produto]:
    """Produtos salvos cujas datas não podem ser calculadas ficam de fora."""
    validos: List[Produto] = []
    for p in armazenados:
        try:
            recalcular_produto(p, agora)
        except ValueError as e:
            log_system_event("produto_descartado", {"id": p.id, "error": str(e)}, level="warning")
            continue
        validos.append(p)
    return validos


def carregar_estado(db_path: str = DB_PATH, agora: Optional[datetime] = None) -> EstadoApp:
    apply_migrations(db_path)
    armazenados = _descartar_invalidos(ProdutoRepo(db_path).get_all(), agora)
    registros = VerificacaoRepo(db_path).get_all()
    produtos = reconciliar(armazenados, agora=agora)
    log_system_event("estado_carregado", {
        "produtos_salvos": len(armazenados),
        "produtos": len(produtos),
        "registros": len(registros),
    })
    return EstadoApp(produtos=produtos, registros=registros)


def salvar_estado(estado: EstadoApp, db_path: str = DB_PATH) -> None:
    apply_migrations(db_path)
    ProdutoRepo(db_path).replace_all(estado.produtos)
    VerificacaoRepo(db_path).replace_all(estado.registros)


def atualizar_calculos(estado: EstadoApp, agora: Optional[datetime] = None) -> EstadoApp:
    """Refaz dias/status de todos os produtos (o relógio andou)."""
    return dataclasses.replace(
        estado,
        produtos=[recalcular_produto(p, agora) for p in estado.produtos],
    )


def resetar_estado(db_path: str = DB_PATH, agora: Optional[datetime] = None) -> EstadoApp:
    """Descarta produtos e histórico salvos e volta ao catálogo padrão."""
    log_system_event("reset_start", {"db_path": db_path})
    try:
        apply_migrations(db_path)
        ProdutoRepo(db_path).clear()
        VerificacaoRepo(db_path).clear()

        estado = EstadoApp(produtos=resetar(agora=agora), registros=[])
        salvar_estado(estado, db_path)

        log_transaction("reset", {"db_path": db_path}, result={"produtos": len(estado.produtos)})
        return estado
    except Exception as e:
        log_transaction("reset", {"db_path": db_path}, error=str(e))
        log_system_event("reset_error", {"error": str(e)}, level="error")
        raise
