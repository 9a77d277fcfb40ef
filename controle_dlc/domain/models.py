# controle_dlc/domain/models.py
"""
Modelos (dataclasses) do domínio.

Observação importante:
- No armazenamento os registros são dicionários com as chaves em camelCase
  (``expiryDate``, ``dlcType``...). As conversões ficam em ``to_dict`` /
  ``from_dict`` de cada modelo.
- ``dias_para_vencer`` e ``status`` de um Produto são campos derivados:
  só ``recalcular_produto`` deve preenchê-los.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TipoDLC(str, Enum):
    PRIMARIA = "Primária"
    SECUNDARIA = "Secundária"
    STOCK = "Stock"


class Status(str, Enum):
    EXPIRED = "expired"
    TODAY = "today"
    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"


class ProdutoInvalidoError(ValueError):
    """Produto sem nenhuma data de validade candidata."""


class ProdutoNaoEncontradoError(KeyError):
    """Nenhum produto com o id informado."""


def _opcional(valor: Any) -> Optional[str]:
    if valor is None:
        return None
    s = str(valor).strip()
    return s or None


@dataclass
class Produto:
    """Produto controlado por DLC."""
    id: str
    categoria: str
    nome: str
    data_validade: str
    tipo_dlc: TipoDLC = TipoDLC.PRIMARIA
    subcategoria: Optional[str] = None
    datas_validade: Optional[List[str]] = None  # quando não vazia, é o conjunto oficial
    observacao: Optional[str] = None
    dias_para_vencer: Optional[int] = None      # derivado
    status: Optional[Status] = None             # derivado

    def candidatos(self) -> List[str]:
        """Datas consideradas no cálculo: ``datas_validade`` ou a data principal."""
        if self.datas_validade:
            return list(self.datas_validade)
        return [self.data_validade] if self.data_validade else []

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "category": self.categoria,
            "name": self.nome,
            "expiryDate": self.data_validade,
            "dlcType": TipoDLC(self.tipo_dlc).value,
        }
        if self.subcategoria is not None:
            out["subCategory"] = self.subcategoria
        if self.datas_validade is not None:
            out["expiryDates"] = list(self.datas_validade)
        if self.observacao is not None:
            out["observation"] = self.observacao
        if self.dias_para_vencer is not None:
            out["daysToExpiry"] = self.dias_para_vencer
        if self.status is not None:
            out["status"] = Status(self.status).value
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Produto":
        datas = d.get("expiryDates")
        status = d.get("status")
        return cls(
            id=str(d["id"]),
            categoria=str(d["category"]),
            nome=str(d["name"]),
            data_validade=str(d["expiryDate"]),
            tipo_dlc=TipoDLC(d.get("dlcType") or TipoDLC.PRIMARIA.value),
            subcategoria=_opcional(d.get("subCategory")),
            datas_validade=[str(x) for x in datas] if datas is not None else None,
            observacao=_opcional(d.get("observation")),
            dias_para_vencer=d.get("daysToExpiry"),
            status=Status(status) if status else None,
        )


@dataclass(frozen=True)
class Resumo:
    """Contagens por status de uma coleção de produtos em um instante."""
    total: int = 0
    vencidos: int = 0
    vencem_hoje: int = 0
    vencem_em_7_dias: int = 0  # critical + warning
    ok: int = 0
    taxa_conformidade: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {
            "total": self.total,
            "expired": self.vencidos,
            "expiringToday": self.vencem_hoje,
            "expiringIn7Days": self.vencem_em_7_dias,
            "ok": self.ok,
            "conformityRate": self.taxa_conformidade,
        }


@dataclass(frozen=True)
class RegistroVerificacao:
    """Entrada imutável do histórico de verificações da DLC Secundária."""
    id: str
    data: str  # instante ISO (UTC, sufixo Z)
    quantidade_produtos: int
    responsavel: Optional[str] = None
    observacao: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "date": self.data,
            "productsCount": self.quantidade_produtos,
        }
        if self.responsavel is not None:
            out["verifiedBy"] = self.responsavel
        if self.observacao is not None:
            out["observation"] = self.observacao
        return out

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "RegistroVerificacao":
        return cls(
            id=str(d["id"]),
            data=str(d["date"]),
            quantidade_produtos=int(d["productsCount"]),
            responsavel=_opcional(d.get("verifiedBy")),
            observacao=_opcional(d.get("observation")),
        )


@dataclass
class EstadoApp:
    """Estado da aplicação: coleção de produtos e histórico de verificações."""
    produtos: List[Produto] = field(default_factory=list)
    registros: List[RegistroVerificacao] = field(default_factory=list)
