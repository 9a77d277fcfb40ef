# controle_dlc/infra/repositories.py
"""
Repositórios para o armazenamento chave/valor (SQLite).

Classes:
- ArmazenamentoRepo: acesso cru às chaves
- ProdutoRepo:       chave `products` (lista JSON de produtos)
- VerificacaoRepo:   chave `verificationLogs` (lista JSON, mais recente primeiro)

Cada gravação sobrescreve a chave inteira. JSON malformado em uma chave é
tratado como falha de leitura daquela chave: o repositório devolve lista
vazia e registra um aviso.
"""

from __future__ import annotations

import json
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from controle_dlc.config import DEFAULTS
from controle_dlc.domain.models import Produto, RegistroVerificacao
from .db import connect
from .logger import log_database_operation, log_system_event


T = TypeVar("T")


# -------------------------
# Chave/valor
# -------------------------

class ArmazenamentoRepo:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        with connect(self.db_path) as c:
            row = c.execute("SELECT valor FROM armazenamento WHERE chave = ?", (key,)).fetchone()
            return row[0] if row else default

    def set(self, key: str, value: str) -> None:
        with connect(self.db_path) as c:
            c.execute(
                """
                INSERT INTO armazenamento (chave, valor)
                VALUES (?, ?)
                ON CONFLICT(chave) DO UPDATE SET valor=excluded.valor
                """,
                (key, value),
            )

    def remove(self, key: str) -> None:
        with connect(self.db_path) as c:
            c.execute("DELETE FROM armazenamento WHERE chave = ?", (key,))

    def get_json_list(self, key: str, decode: Callable[[Any], T]) -> List[T]:
        raw = self.get(key)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError(f"esperava lista JSON, recebi {type(data).__name__}")
            out = [decode(item) for item in data]
        except (ValueError, KeyError, TypeError) as e:
            log_system_event("storage_load_failed", {"key": key, "error": str(e)}, level="warning")
            return []
        log_database_operation(key, "READ", len(out))
        return out

    def set_json_list(self, key: str, items: Iterable[Any]) -> int:
        data = list(items)
        self.set(key, json.dumps(data, ensure_ascii=False))
        log_database_operation(key, "WRITE", len(data))
        return len(data)


# -------------------------
# Produtos
# -------------------------

class ProdutoRepo:
    def __init__(self, db_path: str, key: str = DEFAULTS.chave_produtos):
        self.store = ArmazenamentoRepo(db_path)
        self.key = key

    def get_all(self) -> List[Produto]:
        return self.store.get_json_list(self.key, Produto.from_dict)

    def replace_all(self, produtos: Iterable[Produto]) -> int:
        return self.store.set_json_list(self.key, (p.to_dict() for p in produtos))

    def clear(self) -> None:
        self.store.remove(self.key)
        log_database_operation(self.key, "DELETE", 0)


# -------------------------
# Histórico de verificações
# -------------------------

class VerificacaoRepo:
    def __init__(self, db_path: str, key: str = DEFAULTS.chave_verificacoes):
        self.store = ArmazenamentoRepo(db_path)
        self.key = key

    def get_all(self) -> List[RegistroVerificacao]:
        return self.store.get_json_list(self.key, RegistroVerificacao.from_dict)

    def replace_all(self, registros: Iterable[RegistroVerificacao]) -> int:
        """Grava o histórico; histórico vazio remove a chave."""
        registros = list(registros)
        if not registros:
            self.clear()
            return 0
        return self.store.set_json_list(self.key, (r.to_dict() for r in registros))

    def clear(self) -> None:
        self.store.remove(self.key)
        log_database_operation(self.key, "DELETE", 0)
