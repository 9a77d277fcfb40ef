# controle_dlc/adapters/exportacao.py
"""
Exportação do histórico de verificações para CSV (pandas).

Formato:
- cabeçalho fixo: Data e Hora,Responsável,Produtos Verificados,Observações
- cada campo das linhas entre aspas;
- campos opcionais ausentes viram "-";
- linhas na ordem do histórico (mais recente primeiro), sem reordenar.
"""

from __future__ import annotations

import csv
from datetime import date
from typing import List, Optional, Sequence

import pandas as pd

from controle_dlc.domain.models import RegistroVerificacao
from controle_dlc.domain.verificacao import data_local


COLUNAS: List[str] = ["Data e Hora", "Responsável", "Produtos Verificados", "Observações"]
VAZIO = "-"


def formatar_data_hora(registro: RegistroVerificacao) -> str:
    """Data/hora local no estilo pt-BR: ``DD/MM/AAAA, HH:MM:SS``."""
    return data_local(registro).strftime("%d/%m/%Y, %H:%M:%S")


def registros_para_dataframe(registros: Sequence[RegistroVerificacao]) -> pd.DataFrame:
    linhas = [
        [
            formatar_data_hora(r),
            r.responsavel or VAZIO,
            str(r.quantidade_produtos),
            r.observacao or VAZIO,
        ]
        for r in registros
    ]
    return pd.DataFrame(linhas, columns=COLUNAS, dtype=str)


def exportar_csv(registros: Sequence[RegistroVerificacao]) -> str:
    """Texto CSV do histórico."""
    cabecalho = ",".join(COLUNAS)
    if not registros:
        return cabecalho
    corpo = registros_para_dataframe(registros).to_csv(
        index=False,
        header=False,
        quoting=csv.QUOTE_ALL,
        lineterminator="\n",
    )
    return cabecalho + "\n" + corpo.rstrip("\n")


def nome_arquivo_exportacao(hoje: Optional[date] = None) -> str:
    hoje = hoje or date.today()
    return f"verificacoes_dlc_secundaria_{hoje.isoformat()}.csv"
