# controle_dlc/usecases/relatorios.py
"""
Relatórios do controle de DLC:
- listagem de produtos (filtros + agrupamento por categoria)
- resumo de conformidade (geral e por tipo de DLC)
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from controle_dlc.config import DB_PATH
from controle_dlc.domain.calculos import resumir
from controle_dlc.domain.datas import formatar_instante
from controle_dlc.domain.filtros import agrupar_por_categoria, filtrar_produtos
from controle_dlc.domain.models import Produto, TipoDLC
from controle_dlc.domain.policies import rotulo_status
from controle_dlc.usecases.estado import carregar_estado
from controle_dlc.infra.logger import log_system_event


def linha_produto(p: Produto) -> Dict[str, Any]:
    """Linha de exibição de um produto."""
    extras = len(p.datas_validade or []) - 1
    validade = formatar_instante(p.data_validade)
    if extras > 0:
        validade += f" (+{extras} {'data' if extras == 1 else 'datas'})"
    return {
        "id": p.id,
        "categoria": p.categoria,
        "subcategoria": p.subcategoria or "",
        "produto": p.nome,
        "validade": validade,
        "tipo": TipoDLC(p.tipo_dlc).value,
        "dias": p.dias_para_vencer,
        "status": p.status.value if p.status else "",
        "rotulo": rotulo_status(p.status) if p.status else "",
        "observacao": p.observacao or "",
    }


def relatorio_produtos(
    busca: Optional[str] = None,
    categoria: Optional[str] = None,
    status: Optional[str] = None,
    tipo: Optional[str] = None,
    db_path: str = DB_PATH,
    agora: Optional[datetime] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """Produtos filtrados, agrupados por categoria (ordem fixa de categorias)."""
    estado = carregar_estado(db_path, agora)
    filtrados = filtrar_produtos(estado.produtos, busca, categoria, status, tipo)
    log_system_event("relatorio_produtos", {
        "busca": busca, "categoria": categoria, "status": status, "tipo": tipo,
        "resultado": len(filtrados),
    })
    return {
        cat: [linha_produto(p) for p in itens]
        for cat, itens in agrupar_por_categoria(filtrados).items()
    }


def relatorio_resumo(
    tipo: Optional[str] = None,
    db_path: str = DB_PATH,
    agora: Optional[datetime] = None,
) -> Dict[str, Dict[str, int]]:
    """Resumo geral e por aba (Primária / Secundária); com ``tipo``, só aquele."""
    estado = carregar_estado(db_path, agora)
    if tipo:
        return {TipoDLC(tipo).value: resumir(estado.produtos, tipo).to_dict()}
    return {
        "Geral": resumir(estado.produtos).to_dict(),
        TipoDLC.PRIMARIA.value: resumir(estado.produtos, TipoDLC.PRIMARIA).to_dict(),
        TipoDLC.SECUNDARIA.value: resumir(estado.produtos, TipoDLC.SECUNDARIA).to_dict(),
    }
