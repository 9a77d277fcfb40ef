# controle_dlc/usecases/gerenciar_produtos.py
"""
UC: cadastro de produtos (salvar, editar, remover, renovar DLC Secundária, importar).

As operações puras recebem e devolvem um `EstadoApp`; as funções `run_*`
carregam o estado do banco, aplicam a operação e gravam o resultado.

Rascunho de produto (dicionário):
    categoria, nome, data_validade        (obrigatórios)
    tipo_dlc, subcategoria, observacao    (opcionais)
    datas_adicionais                      (opcional; lista de datas extras)
"""
from __future__ import annotations

import dataclasses
import uuid
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from controle_dlc.config import DB_PATH
from controle_dlc.adapters.planilha_loader import load_produtos_from_planilha
from controle_dlc.domain.calculos import recalcular_produto
from controle_dlc.domain.datas import instante_local
from controle_dlc.domain.models import (
    EstadoApp,
    Produto,
    ProdutoInvalidoError,
    ProdutoNaoEncontradoError,
    TipoDLC,
)
from controle_dlc.usecases.estado import carregar_estado, salvar_estado
from controle_dlc.infra.logger import (
    log_transaction, log_produto, log_system_event, log_file_operation
)


def _normalize_str(x: Any) -> Optional[str]:
    if x is None:
        return None
    s = str(x).strip()
    return s or None


def produto_de_rascunho(rascunho: Mapping[str, Any], produto_id: str) -> Produto:
    """Monta um Produto (sem campos derivados) a partir de um rascunho.

    Quando há datas adicionais, ``datas_validade`` passa a ser a data
    principal seguida das adicionais (vazias e repetidas descartadas).
    """
    categoria = _normalize_str(rascunho.get("categoria"))
    nome = _normalize_str(rascunho.get("nome"))
    principal = _normalize_str(rascunho.get("data_validade"))
    if not categoria or not nome:
        raise ProdutoInvalidoError("Categoria e nome são obrigatórios")
    if not principal:
        raise ProdutoInvalidoError(f"Produto sem data de validade: {nome!r}")

    datas: List[str] = [principal]
    for d in rascunho.get("datas_adicionais") or []:
        d = _normalize_str(d)
        if d and d not in datas:
            datas.append(d)

    return Produto(
        id=produto_id,
        categoria=categoria,
        nome=nome,
        data_validade=principal,
        tipo_dlc=TipoDLC(rascunho.get("tipo_dlc") or TipoDLC.PRIMARIA),
        subcategoria=_normalize_str(rascunho.get("subcategoria")),
        datas_validade=datas if len(datas) > 1 else None,
        observacao=_normalize_str(rascunho.get("observacao")),
    )


def rascunho_de_produto(produto: Produto) -> Dict[str, Any]:
    """Rascunho equivalente a um produto existente (ponto de partida da edição)."""
    return {
        "categoria": produto.categoria,
        "nome": produto.nome,
        "data_validade": produto.data_validade,
        "datas_adicionais": [d for d in (produto.datas_validade or []) if d != produto.data_validade],
        "tipo_dlc": TipoDLC(produto.tipo_dlc).value,
        "subcategoria": produto.subcategoria,
        "observacao": produto.observacao,
    }


def buscar_produto(estado: EstadoApp, produto_id: str) -> Produto:
    for p in estado.produtos:
        if p.id == produto_id:
            return p
    raise ProdutoNaoEncontradoError(produto_id)


def salvar_produto(
    estado: EstadoApp,
    rascunho: Mapping[str, Any],
    produto_id: Optional[str] = None,
    agora: Optional[datetime] = None,
) -> tuple[Produto, EstadoApp]:
    """Cria (id aleatório) ou substitui por id um produto."""
    if produto_id is None:
        produto = recalcular_produto(produto_de_rascunho(rascunho, str(uuid.uuid4())), agora)
        return produto, dataclasses.replace(estado, produtos=[*estado.produtos, produto])

    buscar_produto(estado, produto_id)
    produto = recalcular_produto(produto_de_rascunho(rascunho, produto_id), agora)
    produtos = [produto if p.id == produto_id else p for p in estado.produtos]
    return produto, dataclasses.replace(estado, produtos=produtos)


def remover_produto(estado: EstadoApp, produto_id: str) -> EstadoApp:
    buscar_produto(estado, produto_id)
    return dataclasses.replace(estado, produtos=[p for p in estado.produtos if p.id != produto_id])


def renovar_secundaria(estado: EstadoApp, agora: Optional[datetime] = None) -> EstadoApp:
    """Produtos da DLC Secundária passam a vencer no instante atual (minuto).

    As datas adicionais são descartadas para que a nova data seja a única
    candidata.
    """
    novo = instante_local(agora)
    produtos = [
        recalcular_produto(
            dataclasses.replace(p, data_validade=novo, datas_validade=None), agora
        )
        if p.tipo_dlc == TipoDLC.SECUNDARIA else p
        for p in estado.produtos
    ]
    return dataclasses.replace(estado, produtos=produtos)


# -----------------------
# run_* (carrega → aplica → grava)
# -----------------------

def run_salvar_produto(
    rascunho: Mapping[str, Any],
    produto_id: Optional[str] = None,
    db_path: str = DB_PATH,
    agora: Optional[datetime] = None,
) -> Produto:
    acao = "insert" if produto_id is None else "update"
    log_system_event("salvar_produto_start", {"id": produto_id, "acao": acao})
    try:
        estado = carregar_estado(db_path, agora)
        produto, estado = salvar_produto(estado, rascunho, produto_id, agora)
        salvar_estado(estado, db_path)

        log_produto(acao, produto.id, produto.nome, status=produto.status.value)
        log_transaction("salvar_produto", dict(rascunho), result={"id": produto.id})
        return produto
    except Exception as e:
        log_transaction("salvar_produto", dict(rascunho), error=str(e))
        log_system_event("salvar_produto_error", {"error": str(e)}, level="error")
        raise


def run_remover_produto(produto_id: str, db_path: str = DB_PATH) -> Produto:
    try:
        estado = carregar_estado(db_path)
        produto = buscar_produto(estado, produto_id)
        salvar_estado(remover_produto(estado, produto_id), db_path)

        log_produto("delete", produto.id, produto.nome)
        log_transaction("remover_produto", {"id": produto_id}, result="success")
        return produto
    except Exception as e:
        log_transaction("remover_produto", {"id": produto_id}, error=str(e))
        raise


def run_renovar_secundaria(db_path: str = DB_PATH, agora: Optional[datetime] = None) -> List[Produto]:
    estado = renovar_secundaria(carregar_estado(db_path, agora), agora)
    salvar_estado(estado, db_path)

    renovados = [p for p in estado.produtos if p.tipo_dlc == TipoDLC.SECUNDARIA]
    for p in renovados:
        log_produto("renew", p.id, p.nome, data_validade=p.data_validade)
    log_transaction("renovar_secundaria", {"db_path": db_path}, result={"renovados": len(renovados)})
    return renovados


def run_importar_planilha(path: str, db_path: str = DB_PATH, agora: Optional[datetime] = None) -> Dict[str, Any]:
    """Lê uma planilha (XLSX/CSV) e cadastra cada linha como produto novo."""
    log_system_event("importar_planilha_start", {"file_path": path})
    log_file_operation("import", path)
    try:
        rascunhos = load_produtos_from_planilha(path)
        estado = carregar_estado(db_path, agora)

        erros: List[Dict[str, Any]] = []
        sucessos = 0
        for linha, rascunho in enumerate(rascunhos, start=2):  # linha 1 = cabeçalho
            try:
                produto, estado = salvar_produto(estado, rascunho, agora=agora)
            except ValueError as e:
                erros.append({"linha": linha, "mensagem": str(e)})
                continue
            sucessos += 1
            log_produto("import", produto.id, produto.nome)

        salvar_estado(estado, db_path)
        log_file_operation("import", path, rows_processed=len(rascunhos))

        result = {
            "tipo": "Importação de Produtos",
            "arquivo": path,
            "total": len(rascunhos),
            "sucessos": sucessos,
            "erros": erros,
        }
        log_transaction("importar_planilha", {"file": path}, result={"sucessos": sucessos, "erros": len(erros)})
        return result
    except Exception as e:
        log_transaction("importar_planilha", {"file": path}, error=str(e))
        log_system_event("importar_planilha_error", {"file_path": path, "error": str(e)}, level="error")
        raise
