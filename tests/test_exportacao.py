from datetime import date

from controle_dlc.adapters.exportacao import (
    COLUNAS,
    exportar_csv,
    formatar_data_hora,
    nome_arquivo_exportacao,
)
from controle_dlc.domain.models import RegistroVerificacao


def _registro(rid, data, qtd, responsavel=None, observacao=None):
    return RegistroVerificacao(id=rid, data=data, quantidade_produtos=qtd,
                               responsavel=responsavel, observacao=observacao)


def test_cabecalho_fixo():
    assert exportar_csv([]).splitlines() == ["Data e Hora,Responsável,Produtos Verificados,Observações"]
    assert COLUNAS[2] == "Produtos Verificados"


def test_campos_ausentes_viram_traco():
    r = _registro("1", "2025-01-01T10:00:00Z", 5)
    linhas = exportar_csv([r]).splitlines()
    assert len(linhas) == 2
    assert linhas[1] == f'"{formatar_data_hora(r)}","-","5","-"'


def test_linhas_na_ordem_do_historico():
    novo = _registro("2", "2025-01-02T10:00:00.000Z", 8, "Bruno", "Tudo conforme")
    antigo = _registro("1", "2025-01-01T10:00:00.000Z", 5, "Ana")
    linhas = exportar_csv([novo, antigo]).splitlines()
    assert '"Bruno"' in linhas[1] and '"Tudo conforme"' in linhas[1]
    assert '"Ana"' in linhas[2]


def test_aspas_internas_sao_escapadas():
    r = _registro("1", "2025-01-01T10:00:00Z", 1, observacao='molho "especial", aberto')
    linha = exportar_csv([r]).splitlines()[1]
    assert linha.endswith('"molho ""especial"", aberto"')


def test_nome_do_arquivo():
    assert nome_arquivo_exportacao(date(2025, 1, 2)) == "verificacoes_dlc_secundaria_2025-01-02.csv"
