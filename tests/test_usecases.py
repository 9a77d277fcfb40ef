import json
from datetime import datetime
from pathlib import Path

import pytest

from controle_dlc.domain.catalogo import id_estavel, itens_padrao, resetar
from controle_dlc.domain.models import EstadoApp, ProdutoNaoEncontradoError, Status, TipoDLC
from controle_dlc.infra.migrations import apply_migrations
from controle_dlc.infra.repositories import ArmazenamentoRepo
from controle_dlc.usecases.estado import atualizar_calculos, carregar_estado, resetar_estado, salvar_estado
from controle_dlc.usecases.gerenciar_produtos import (
    produto_de_rascunho,
    remover_produto,
    renovar_secundaria,
    run_importar_planilha,
    run_remover_produto,
    run_salvar_produto,
    salvar_produto,
)
from controle_dlc.usecases.relatorios import relatorio_produtos, relatorio_resumo
from controle_dlc.usecases.verificacao_diaria import (
    confirmar_verificacao,
    exportar_verificacoes,
    run_confirmar_verificacao,
    run_status_verificacao,
)


AGORA = datetime(2025, 11, 20, 10, 30)
N_PADRAO = len(itens_padrao())
N_SECUNDARIA = sum(1 for p in itens_padrao() if p.tipo_dlc == TipoDLC.SECUNDARIA)
TOMATE = id_estavel("DLC Positiva", "Tomate Fatiado", TipoDLC.PRIMARIA)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    return str(tmp_path / "dlc_test.sqlite")


def _rascunho(**kw):
    base = {"categoria": "Molhos", "nome": "Molho Caril", "data_validade": "2025-11-22"}
    base.update(kw)
    return base


def test_carregar_banco_vazio_traz_o_catalogo(db_path):
    estado = carregar_estado(db_path, AGORA)
    assert len(estado.produtos) == N_PADRAO
    assert estado.registros == []


def test_rascunho_com_datas_adicionais():
    p = produto_de_rascunho(_rascunho(datas_adicionais=["2025-11-25", "", "2025-11-22"]), "id1")
    assert p.datas_validade == ["2025-11-22", "2025-11-25"]
    assert produto_de_rascunho(_rascunho(), "id2").datas_validade is None


def test_rascunho_sem_data_falha():
    with pytest.raises(ValueError):
        produto_de_rascunho(_rascunho(data_validade=" "), "id1")


def test_salvar_novo_e_editar(db_path):
    estado = carregar_estado(db_path, AGORA)
    novo, estado = salvar_produto(estado, _rascunho(), agora=AGORA)
    assert novo.id and novo.status == Status.CRITICAL
    assert len(estado.produtos) == N_PADRAO + 1

    editado, estado = salvar_produto(estado, _rascunho(nome="Molho Caril Picante"), novo.id, AGORA)
    assert editado.id == novo.id
    assert [p.nome for p in estado.produtos if p.id == novo.id] == ["Molho Caril Picante"]
    assert len(estado.produtos) == N_PADRAO + 1


def test_editar_id_desconhecido_falha(db_path):
    estado = carregar_estado(db_path, AGORA)
    with pytest.raises(ProdutoNaoEncontradoError):
        salvar_produto(estado, _rascunho(), "nao-existe", AGORA)
    with pytest.raises(ProdutoNaoEncontradoError):
        remover_produto(estado, "nao-existe")


def test_edicao_de_produto_padrao_sobrevive_a_recarga(db_path):
    run_salvar_produto(
        _rascunho(categoria="DLC Positiva", nome="Tomate Fatiado", observacao="lote novo"),
        produto_id=TOMATE, db_path=db_path, agora=AGORA,
    )
    estado = carregar_estado(db_path, AGORA)
    tomate = [p for p in estado.produtos if p.id == TOMATE]
    assert len(tomate) == 1
    assert tomate[0].observacao == "lote novo"
    assert tomate[0].data_validade == "2025-11-22"
    assert len(estado.produtos) == N_PADRAO


def test_produto_padrao_removido_volta_na_recarga(db_path):
    carregar_estado(db_path, AGORA)
    run_remover_produto(TOMATE, db_path=db_path)
    assert any(p.id == TOMATE for p in carregar_estado(db_path, AGORA).produtos)


def test_produto_do_usuario_removido_nao_volta(db_path):
    p = run_salvar_produto(_rascunho(), db_path=db_path, agora=AGORA)
    run_remover_produto(p.id, db_path=db_path)
    assert all(x.id != p.id for x in carregar_estado(db_path, AGORA).produtos)


def test_json_malformado_volta_ao_catalogo(db_path):
    carregar_estado(db_path, AGORA)
    ArmazenamentoRepo(db_path).set("products", "not json")
    assert len(carregar_estado(db_path, AGORA).produtos) == N_PADRAO


def test_renovar_secundaria():
    estado = renovar_secundaria(EstadoApp(produtos=resetar(agora=AGORA)), AGORA)
    sec = [p for p in estado.produtos if p.tipo_dlc == TipoDLC.SECUNDARIA]
    prim = [p for p in estado.produtos if p.tipo_dlc == TipoDLC.PRIMARIA]
    assert {p.data_validade for p in sec} == {"2025-11-20T10:30"}
    assert {p.status for p in sec} == {Status.TODAY}
    assert all(p.data_validade != "2025-11-20T10:30" for p in prim)


def test_atualizar_calculos_acompanha_o_relogio(db_path):
    estado = carregar_estado(db_path, AGORA)
    depois = atualizar_calculos(estado, datetime(2026, 1, 1))
    assert {p.status for p in depois.produtos} == {Status.EXPIRED}


def test_confirmar_verificacao_conta_secundaria_e_persiste(db_path):
    r1 = run_confirmar_verificacao("Ana", None, db_path=db_path, agora=AGORA)
    r2 = run_confirmar_verificacao(None, "ok", db_path=db_path, agora=datetime(2025, 11, 21, 9, 0))
    assert r1.quantidade_produtos == N_SECUNDARIA

    estado = carregar_estado(db_path, AGORA)
    assert [r.id for r in estado.registros] == [r2.id, r1.id]

    st = run_status_verificacao(db_path=db_path, agora=datetime(2025, 11, 21, 15, 0))
    assert st["verificado_hoje"] is True
    assert st["lembrete_pendente"] is False
    assert st["ultimo"]["id"] == r2.id


def test_reset_limpa_historico_e_edicoes(db_path):
    run_salvar_produto(_rascunho(), db_path=db_path, agora=AGORA)
    run_confirmar_verificacao("Ana", db_path=db_path, agora=AGORA)

    estado = resetar_estado(db_path=db_path, agora=AGORA)
    assert len(estado.produtos) == N_PADRAO
    assert estado.registros == []
    assert ArmazenamentoRepo(db_path).get("verificationLogs") is None
    assert len(carregar_estado(db_path, AGORA).produtos) == N_PADRAO


def test_exportar_verificacoes_grava_arquivo(db_path, tmp_path):
    estado = carregar_estado(db_path, AGORA)
    _, estado = confirmar_verificacao(estado, "Ana", agora=AGORA)
    caminho = exportar_verificacoes(estado, str(tmp_path / "exp"), AGORA)
    assert caminho.name == "verificacoes_dlc_secundaria_2025-11-20.csv"
    linhas = caminho.read_text(encoding="utf-8").splitlines()
    assert len(linhas) == 2 and '"Ana"' in linhas[1]


def test_salvar_estado_sobrescreve_tudo(db_path):
    estado = carregar_estado(db_path, AGORA)
    estado.produtos = estado.produtos[:2]
    salvar_estado(estado, db_path)
    # os padrões ausentes voltam, mas nada duplica
    assert len(carregar_estado(db_path, AGORA).produtos) == N_PADRAO


def test_relatorios(db_path):
    grupos = relatorio_produtos(tipo="Secundária", db_path=db_path, agora=AGORA)
    assert list(grupos)[:3] == ["McCafé", "Queijos", "Molhos"]
    assert sum(len(v) for v in grupos.values()) == N_SECUNDARIA

    res = relatorio_resumo(db_path=db_path, agora=AGORA)
    assert set(res) == {"Geral", "Primária", "Secundária"}
    assert res["Geral"]["total"] == N_PADRAO


def test_importar_planilha_csv(db_path, tmp_path):
    planilha = tmp_path / "produtos.csv"
    planilha.write_text(
        "Categoria,Produto,Validade,Tipo DLC,Datas adicionais,Observação\n"
        "Molhos,Molho Caril,22/11/2025,Secundária,2025-11-25;2025-11-30,\n"
        "Molhos,Molho Ruim,amanhã,Secundária,,\n"
        "Outros,Copos,2026-01-01,Stock,,caixa fechada\n",
        encoding="utf-8",
    )
    info = run_importar_planilha(str(planilha), db_path=db_path, agora=AGORA)
    assert info["total"] == 3
    assert info["sucessos"] == 2
    assert [e["linha"] for e in info["erros"]] == [3]

    nomes = {p.nome: p for p in carregar_estado(db_path, AGORA).produtos}
    assert nomes["Molho Caril"].datas_validade == ["2025-11-22", "2025-11-25", "2025-11-30"]
    assert nomes["Copos"].tipo_dlc == TipoDLC.STOCK
    assert nomes["Copos"].observacao == "caixa fechada"


def test_produto_salvo_sem_data_volta_ao_catalogo(db_path):
    apply_migrations(db_path)
    ArmazenamentoRepo(db_path).set("products", '[{"id": "x", "category": "Molhos", "name": "Sem Data"}]')
    estado = carregar_estado(db_path, AGORA)
    assert len(estado.produtos) == N_PADRAO
    assert all(p.id != "x" for p in estado.produtos)


def test_produto_salvo_com_data_ilegivel_e_descartado(db_path):
    apply_migrations(db_path)
    ArmazenamentoRepo(db_path).set("products", json.dumps([
        {"id": "ruim", "category": "Molhos", "name": "Molho Velho", "expiryDate": "31/12/2025"},
        {"id": "bom", "category": "Molhos", "name": "Molho Novo", "expiryDate": "2025-11-25"},
    ]))
    estado = carregar_estado(db_path, AGORA)
    ids = {p.id for p in estado.produtos}
    assert "ruim" not in ids
    assert "bom" in ids
    assert len(estado.produtos) == N_PADRAO + 1
