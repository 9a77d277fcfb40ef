from pathlib import Path

import pytest

from controle_dlc.domain.models import Produto, RegistroVerificacao, Status, TipoDLC
from controle_dlc.infra.migrations import apply_migrations
from controle_dlc.infra.repositories import ArmazenamentoRepo, ProdutoRepo, VerificacaoRepo


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    path = str(tmp_path / "dlc_test.sqlite")
    apply_migrations(path)
    return path


def test_migracao_e_idempotente(db_path):
    apply_migrations(db_path)
    assert ArmazenamentoRepo(db_path).get("products") is None


def test_produtos_gravados_com_chaves_camelcase(db_path):
    p = Produto(id="x1", categoria="Molhos", nome="Ketchup", data_validade="2025-03-14",
                datas_validade=["2025-03-20", "2025-03-14"], tipo_dlc=TipoDLC.SECUNDARIA,
                subcategoria="Frio", dias_para_vencer=4, status=Status.WARNING)
    repo = ProdutoRepo(db_path)
    assert repo.replace_all([p]) == 1

    raw = ArmazenamentoRepo(db_path).get("products")
    assert '"expiryDates"' in raw and '"dlcType": "Secundária"' in raw

    assert repo.get_all() == [p]


def test_json_malformado_carrega_vazio(db_path):
    store = ArmazenamentoRepo(db_path)
    store.set("products", "[{not json")
    store.set("verificationLogs", '{"id": 1}')
    assert ProdutoRepo(db_path).get_all() == []
    assert VerificacaoRepo(db_path).get_all() == []


def test_registro_sem_campos_obrigatorios_carrega_vazio(db_path):
    ArmazenamentoRepo(db_path).set("verificationLogs", '[{"id": "1"}]')
    assert VerificacaoRepo(db_path).get_all() == []


def test_historico_vazio_remove_a_chave(db_path):
    repo = VerificacaoRepo(db_path)
    r = RegistroVerificacao(id="1", data="2025-01-01T10:00:00.000Z", quantidade_produtos=2)
    repo.replace_all([r])
    assert repo.get_all() == [r]

    repo.replace_all([])
    assert ArmazenamentoRepo(db_path).get("verificationLogs") is None
    assert repo.get_all() == []
