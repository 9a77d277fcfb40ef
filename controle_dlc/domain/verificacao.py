"""
Histórico de verificações diárias da DLC Secundária.

O histórico é uma lista somente de acréscimo, do mais recente para o mais
antigo: cada novo registro entra na cabeça da lista. Nenhum registro é
alterado ou removido, exceto no reset completo.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

from controle_dlc.config import DEFAULTS
from controle_dlc.domain.datas import para_local, parse_datetime
from controle_dlc.domain.models import RegistroVerificacao


def _texto_opcional(valor: Optional[str]) -> Optional[str]:
    if valor is None:
        return None
    s = valor.strip()
    return s or None


def _instante_utc(agora: Optional[datetime]) -> str:
    ref = agora if agora is not None else datetime.now()
    # datetime sem fuso é tratado como horário local
    utc = ref.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def registrar_verificacao(
    registros: Sequence[RegistroVerificacao],
    quantidade_produtos: int,
    responsavel: Optional[str] = None,
    observacao: Optional[str] = None,
    agora: Optional[datetime] = None,
) -> Tuple[RegistroVerificacao, List[RegistroVerificacao]]:
    """Cria um registro e devolve ``(registro, novo_historico)``.

    O histórico recebido não é alterado; o novo histórico tem o registro na
    primeira posição, seguido dos anteriores na mesma ordem.
    """
    registro = RegistroVerificacao(
        id=str(uuid.uuid4()),
        data=_instante_utc(agora),
        quantidade_produtos=int(quantidade_produtos),
        responsavel=_texto_opcional(responsavel),
        observacao=_texto_opcional(observacao),
    )
    return registro, [registro, *registros]


def ultimo_registro(registros: Sequence[RegistroVerificacao]) -> Optional[RegistroVerificacao]:
    return registros[0] if registros else None


def data_local(registro: RegistroVerificacao) -> datetime:
    """Instante do registro no horário local."""
    return parse_datetime(registro.data)


def verificado_hoje(registros: Sequence[RegistroVerificacao], agora: Optional[datetime] = None) -> bool:
    ultimo = ultimo_registro(registros)
    if ultimo is None:
        return False
    ref = para_local(agora if agora is not None else datetime.now())
    return data_local(ultimo).date() == ref.date()


def lembrete_pendente(registros: Sequence[RegistroVerificacao], agora: Optional[datetime] = None) -> bool:
    """Depois do meio-dia, sem verificação registrada hoje."""
    ref = para_local(agora if agora is not None else datetime.now())
    return ref.hour >= DEFAULTS.hora_lembrete and not verificado_hoje(registros, ref)
