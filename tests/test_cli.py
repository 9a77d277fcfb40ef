import json
from pathlib import Path

from typer.testing import CliRunner

from controle_dlc.adapters.cli import app
from controle_dlc.domain.catalogo import itens_padrao
from controle_dlc.domain.models import TipoDLC

runner = CliRunner()

N_SECUNDARIA = sum(1 for p in itens_padrao() if p.tipo_dlc == TipoDLC.SECUNDARIA)


def _db(tmp_path: Path) -> str:
    return str(tmp_path / "dlc_test.sqlite")


def _listar(db: str, *args) -> dict:
    result = runner.invoke(app, ["produtos", "listar", "--json", "--db", db, *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


def test_cli_migrate(tmp_path: Path):
    result = runner.invoke(app, ["migrate", "--db", _db(tmp_path)])
    assert result.exit_code == 0, result.output
    assert "Migrações aplicadas" in result.stdout


def test_cli_listar_secundaria_por_categoria(tmp_path: Path):
    grupos = _listar(_db(tmp_path), "--tipo", "secundaria")
    assert list(grupos)[0] == "McCafé"
    assert sum(len(v) for v in grupos.values()) == N_SECUNDARIA


def test_cli_tipo_invalido(tmp_path: Path):
    result = runner.invoke(app, ["produtos", "listar", "--tipo", "Terciária", "--db", _db(tmp_path)])
    assert result.exit_code == 1
    assert "Tipo de DLC inválido" in result.stdout


def test_cli_adicionar_editar_remover(tmp_path: Path):
    db = _db(tmp_path)
    result = runner.invoke(app, [
        "produtos", "adicionar", "--db", db,
        "--categoria", "Molhos", "--nome", "Molho Caril",
        "--validade", "01/01/2099", "--data-extra", "2099-02-01",
        "--tipo", "Secundária", "--observacao", "frasco aberto",
    ])
    assert result.exit_code == 0, result.output

    linhas = [r for g in _listar(db, "--busca", "caril").values() for r in g]
    assert len(linhas) == 1
    caril = linhas[0]
    assert caril["tipo"] == "Secundária"
    assert caril["status"] == "ok"
    assert caril["validade"].endswith("(+1 data)")

    result = runner.invoke(app, [
        "produtos", "editar", caril["id"], "--db", db,
        "--observacao", "novo lote", "--limpar-datas-extras",
    ])
    assert result.exit_code == 0, result.output
    caril = [r for g in _listar(db, "--busca", "caril").values() for r in g][0]
    assert caril["observacao"] == "novo lote"
    assert caril["validade"] == "01/01/2099"

    result = runner.invoke(app, ["produtos", "remover", caril["id"], "--db", db])
    assert result.exit_code == 0, result.output
    assert _listar(db, "--busca", "caril") == {}


def test_cli_data_invalida_e_id_desconhecido(tmp_path: Path):
    db = _db(tmp_path)
    result = runner.invoke(app, [
        "produtos", "adicionar", "--db", db,
        "--categoria", "Molhos", "--nome", "X", "--validade", "31/02/2099",
    ])
    assert result.exit_code == 1

    result = runner.invoke(app, ["produtos", "remover", "nao-existe", "--db", db])
    assert result.exit_code == 1
    assert "Produto não encontrado" in result.stdout


def test_cli_resumo_json(tmp_path: Path):
    result = runner.invoke(app, ["resumo", "--json", "--db", _db(tmp_path)])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert set(data) == {"Geral", "Primária", "Secundária"}
    assert data["Geral"]["total"] == data["Primária"]["total"] + data["Secundária"]["total"]
    assert data["Secundária"]["total"] == N_SECUNDARIA


def test_cli_verificacao_fluxo(tmp_path: Path):
    db = _db(tmp_path)
    result = runner.invoke(app, ["verificacao", "confirmar", "--responsavel", "Ana", "--db", db])
    assert result.exit_code == 0, result.output
    assert f"{N_SECUNDARIA} produtos verificados" in result.stdout

    result = runner.invoke(app, ["verificacao", "status", "--json", "--db", db])
    assert result.exit_code == 0, result.output
    st = json.loads(result.stdout)
    assert st["ultimo"]["verifiedBy"] == "Ana"
    assert st["total_registros"] == 1

    result = runner.invoke(app, ["verificacao", "historico", "--db", db])
    assert result.exit_code == 0, result.output
    assert "Ana" in result.stdout

    destino = tmp_path / "exportados"
    result = runner.invoke(app, ["verificacao", "exportar", "--destino", str(destino), "--db", db])
    assert result.exit_code == 0, result.output
    arquivos = list(destino.glob("verificacoes_dlc_secundaria_*.csv"))
    assert len(arquivos) == 1
    assert arquivos[0].read_text(encoding="utf-8").startswith("Data e Hora,Responsável,")


def test_cli_reset_sem_confirmacao_aborta(tmp_path: Path):
    db = _db(tmp_path)
    runner.invoke(app, ["verificacao", "confirmar", "--db", db])

    result = runner.invoke(app, ["reset", "--db", db], input="n\n")
    assert result.exit_code != 0

    result = runner.invoke(app, ["reset", "--yes", "--db", db])
    assert result.exit_code == 0, result.output
    result = runner.invoke(app, ["verificacao", "status", "--json", "--db", db])
    assert json.loads(result.stdout)["total_registros"] == 0


def test_cli_renovar_secundaria(tmp_path: Path):
    result = runner.invoke(app, ["renovar-secundaria", "--db", _db(tmp_path)])
    assert result.exit_code == 0, result.output
    assert f"{N_SECUNDARIA} produtos DLC Secundária" in result.stdout


def test_cli_importar_planilha(tmp_path: Path):
    planilha = tmp_path / "novos.csv"
    planilha.write_text(
        "Categoria,Nome do Produto,Data de Validade,Tipo\n"
        "Pães,Pão Brioche,2099-03-01,Secundária\n"
        "Pães,Pão Velho,,Secundária\n",
        encoding="utf-8",
    )
    db = _db(tmp_path)
    result = runner.invoke(app, ["produtos", "importar", str(planilha), "--db", db])
    assert result.exit_code == 0, result.output
    assert "Processados com sucesso: 1" in result.stdout
    assert "Erros Encontrados" in result.stdout
    assert "Pão Brioche" in json.dumps(_listar(db, "--categoria", "Pães"), ensure_ascii=False)


def test_cli_editar_limpa_subcategoria_e_observacao(tmp_path: Path):
    db = _db(tmp_path)
    runner.invoke(app, [
        "produtos", "adicionar", "--db", db,
        "--categoria", "Queijos", "--nome", "Queijo Brie", "--validade", "2099-01-01",
        "--subcategoria", "Fatiados", "--observacao", "aberto",
    ])
    brie = [r for g in _listar(db, "--busca", "brie").values() for r in g][0]
    assert (brie["subcategoria"], brie["observacao"]) == ("Fatiados", "aberto")

    result = runner.invoke(app, [
        "produtos", "editar", brie["id"], "--db", db,
        "--limpar-subcategoria", "--limpar-observacao",
    ])
    assert result.exit_code == 0, result.output
    brie = [r for g in _listar(db, "--busca", "brie").values() for r in g][0]
    assert (brie["subcategoria"], brie["observacao"]) == ("", "")
