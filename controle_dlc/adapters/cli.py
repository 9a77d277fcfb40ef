# controle_dlc/adapters/cli.py
"""
CLI do controle de DLC (Typer).

Comandos principais:
- migrate                          -> aplica migrações
- produtos listar|adicionar|editar|remover|importar
- resumo                           -> resumo de conformidade (geral e por aba)
- renovar-secundaria               -> produtos da DLC Secundária vencem agora
- reset                            -> volta ao catálogo padrão e limpa o histórico
- verificacao confirmar|status|historico|exportar
- lembrete                         -> checa uma vez se a verificação está pendente
- vigiar                           -> checagem periódica até Ctrl+C
"""

from __future__ import annotations

import json
import time
from typing import Any, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from controle_dlc.config import DB_PATH, DEFAULTS
from controle_dlc.adapters.lembrete import LembreteVerificacao
from controle_dlc.adapters.parsers import parse_instante, parse_tipo_dlc
from controle_dlc.domain.datas import formatar_instante
from controle_dlc.domain.models import ProdutoNaoEncontradoError, Status
from controle_dlc.domain.policies import estilo_terminal, rotulo_status
from controle_dlc.domain.verificacao import lembrete_pendente
from controle_dlc.infra.migrations import apply_migrations
from controle_dlc.usecases.estado import carregar_estado, resetar_estado
from controle_dlc.usecases.gerenciar_produtos import (
    buscar_produto,
    rascunho_de_produto,
    run_importar_planilha,
    run_remover_produto,
    run_renovar_secundaria,
    run_salvar_produto,
)
from controle_dlc.usecases.relatorios import relatorio_produtos, relatorio_resumo
from controle_dlc.usecases.verificacao_diaria import (
    run_confirmar_verificacao,
    run_exportar_verificacoes,
    run_status_verificacao,
)


app = typer.Typer(help="Controle DLC (CLI)")
console = Console()


# -----------------------
# util
# -----------------------

def _print_json(obj) -> None:
    typer.echo(json.dumps(obj, ensure_ascii=False, indent=2))


def _falha(msg: str) -> None:
    console.print(f"[bold red]Erro:[/bold red] {msg}")
    raise typer.Exit(code=1)


def _status_cell(status: str, rotulo: str) -> str:
    if not status:
        return ""
    return f"[{estilo_terminal(status)}]{rotulo}[/]"


def _display_produtos(grupos: Dict[str, List[Dict[str, Any]]]) -> None:
    if not grupos:
        console.print(Panel("Nenhum produto encontrado", title="Produtos", border_style="yellow"))
        return

    for categoria, linhas in grupos.items():
        table = Table(title=categoria.upper(), box=box.ROUNDED)
        table.add_column("Produto")
        table.add_column("Validade", justify="center")
        table.add_column("Tipo DLC")
        table.add_column("Dias", justify="right")
        table.add_column("Status")
        table.add_column("Observação")
        table.add_column("ID", style="dim")
        for r in linhas:
            nome = r["produto"]
            if r["subcategoria"]:
                nome += f" [dim]({r['subcategoria']})[/dim]"
            table.add_row(
                nome,
                r["validade"],
                r["tipo"],
                str(r["dias"]),
                _status_cell(r["status"], r["rotulo"]),
                r["observacao"],
                r["id"],
            )
        console.print(table)


def _display_resumo(resumos: Dict[str, Dict[str, int]]) -> None:
    table = Table(title="Resumo de Conformidade", box=box.ROUNDED)
    table.add_column("Aba")
    for col in ["Total", "Vencidos", "Vencem Hoje", "Vencem em 7 dias", "Dentro do Prazo", "Conformidade"]:
        table.add_column(col, justify="right")
    for aba, r in resumos.items():
        table.add_row(
            aba,
            str(r["total"]),
            f"[red]{r['expired']}[/]",
            f"[yellow]{r['expiringToday']}[/]",
            str(r["expiringIn7Days"]),
            f"[green]{r['ok']}[/]",
            f"{r['conformityRate']}%",
        )
    console.print(table)


def _parse_datas(validade: Optional[str], extras: Optional[List[str]]) -> tuple[Optional[str], Optional[List[str]]]:
    try:
        principal = parse_instante(validade) if validade else None
        adicionais = [parse_instante(d) for d in extras] if extras else None
    except ValueError as e:
        _falha(str(e))
    return principal, adicionais


# -----------------------
# comandos de infra
# -----------------------

@app.command("migrate")
def cmd_migrate(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Aplica migrações do armazenamento."""
    apply_migrations(db_path)
    typer.echo(f">> Migrações aplicadas em: {db_path}")


# -----------------------
# produtos
# -----------------------

produtos_app = typer.Typer(help="Cadastro de produtos.")
app.add_typer(produtos_app, name="produtos")


@produtos_app.command("listar")
def cmd_produtos_listar(
    busca: Optional[str] = typer.Option(None, help="Busca por produto, categoria ou subcategoria"),
    categoria: Optional[str] = typer.Option(None, help="Categoria exata"),
    status: Optional[Status] = typer.Option(None, case_sensitive=False, help="Status"),
    tipo: Optional[str] = typer.Option(None, help="Primária | Secundária | Stock"),
    como_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Lista produtos agrupados por categoria."""
    try:
        tipo_dlc = parse_tipo_dlc(tipo).value if tipo else None
    except ValueError as e:
        _falha(str(e))
    grupos = relatorio_produtos(
        busca=busca,
        categoria=categoria,
        status=status.value if status else None,
        tipo=tipo_dlc,
        db_path=db_path,
    )
    if como_json:
        _print_json(grupos)
    else:
        _display_produtos(grupos)


@produtos_app.command("adicionar")
def cmd_produtos_adicionar(
    categoria: str = typer.Option(..., help="Categoria"),
    nome: str = typer.Option(..., help="Nome do produto"),
    validade: str = typer.Option(..., help="YYYY-MM-DD[THH:MM] ou DD/MM/AAAA [HH:MM]"),
    data_extra: Optional[List[str]] = typer.Option(None, "--data-extra", help="Data adicional (repetível)"),
    tipo: str = typer.Option("Primária", help="Primária | Secundária | Stock"),
    subcategoria: Optional[str] = typer.Option(None, help="Subcategoria"),
    observacao: Optional[str] = typer.Option(None, help="Observação"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Cadastra um novo produto."""
    principal, adicionais = _parse_datas(validade, data_extra)
    try:
        produto = run_salvar_produto(
            {
                "categoria": categoria,
                "nome": nome,
                "data_validade": principal,
                "datas_adicionais": adicionais or [],
                "tipo_dlc": parse_tipo_dlc(tipo).value,
                "subcategoria": subcategoria,
                "observacao": observacao,
            },
            db_path=db_path,
        )
    except ValueError as e:
        _falha(str(e))
    console.print(
        f"[green]Produto adicionado:[/green] {produto.nome} "
        f"({rotulo_status(produto.status)}, {produto.dias_para_vencer} dias) [dim]{produto.id}[/dim]"
    )


@produtos_app.command("editar")
def cmd_produtos_editar(
    produto_id: str = typer.Argument(..., help="ID do produto"),
    categoria: Optional[str] = typer.Option(None),
    nome: Optional[str] = typer.Option(None),
    validade: Optional[str] = typer.Option(None, help="Nova data principal"),
    data_extra: Optional[List[str]] = typer.Option(None, "--data-extra", help="Substitui as datas adicionais"),
    limpar_datas_extras: bool = typer.Option(False, help="Remove as datas adicionais"),
    limpar_subcategoria: bool = typer.Option(False, help="Remove a subcategoria"),
    limpar_observacao: bool = typer.Option(False, help="Remove a observação"),
    tipo: Optional[str] = typer.Option(None),
    subcategoria: Optional[str] = typer.Option(None),
    observacao: Optional[str] = typer.Option(None),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Edita um produto existente (apenas os campos informados mudam)."""
    principal, adicionais = _parse_datas(validade, data_extra)
    try:
        rascunho = rascunho_de_produto(buscar_produto(carregar_estado(db_path), produto_id))
        alteracoes = {
            "categoria": categoria,
            "nome": nome,
            "data_validade": principal,
            "datas_adicionais": adicionais,
            "tipo_dlc": parse_tipo_dlc(tipo).value if tipo else None,
            "subcategoria": subcategoria,
            "observacao": observacao,
        }
        rascunho.update({k: v for k, v in alteracoes.items() if v is not None})
        if limpar_datas_extras:
            rascunho["datas_adicionais"] = []
        if limpar_subcategoria:
            rascunho["subcategoria"] = None
        if limpar_observacao:
            rascunho["observacao"] = None
        produto = run_salvar_produto(rascunho, produto_id=produto_id, db_path=db_path)
    except ProdutoNaoEncontradoError:
        _falha(f"Produto não encontrado: {produto_id}")
    except ValueError as e:
        _falha(str(e))
    console.print(
        f"[green]Produto atualizado:[/green] {produto.nome} "
        f"({rotulo_status(produto.status)}, {produto.dias_para_vencer} dias)"
    )


@produtos_app.command("remover")
def cmd_produtos_remover(
    produto_id: str = typer.Argument(..., help="ID do produto"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Remove um produto."""
    try:
        produto = run_remover_produto(produto_id, db_path=db_path)
    except ProdutoNaoEncontradoError:
        _falha(f"Produto não encontrado: {produto_id}")
    console.print(f"[green]Produto removido:[/green] {produto.nome}")


@produtos_app.command("importar")
def cmd_produtos_importar(
    path: str = typer.Argument(..., help="Planilha XLSX ou CSV"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Cadastra produtos a partir de uma planilha."""
    try:
        info = run_importar_planilha(path, db_path=db_path)
    except ValueError as e:
        _falha(str(e))

    console.print(Panel(
        f"Total de registros: {info['total']}\nProcessados com sucesso: {info['sucessos']}"
        + (f"\nErros: {len(info['erros'])}" if info["erros"] else ""),
        title=info["tipo"],
    ))
    if info["erros"]:
        erro_table = Table(title="Erros Encontrados")
        erro_table.add_column("Linha")
        erro_table.add_column("Erro")
        for erro in info["erros"]:
            erro_table.add_row(str(erro["linha"]), erro["mensagem"])
        console.print(erro_table)


# -----------------------
# resumo / manutenção
# -----------------------

@app.command("resumo")
def cmd_resumo(
    tipo: Optional[str] = typer.Option(None, help="Primária | Secundária | Stock"),
    como_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Resumo de conformidade."""
    try:
        tipo_dlc = parse_tipo_dlc(tipo).value if tipo else None
    except ValueError as e:
        _falha(str(e))
    res = relatorio_resumo(tipo=tipo_dlc, db_path=db_path)
    if como_json:
        _print_json(res)
    else:
        _display_resumo(res)


@app.command("renovar-secundaria")
def cmd_renovar_secundaria(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Atualiza data e hora dos produtos da DLC Secundária para agora."""
    renovados = run_renovar_secundaria(db_path=db_path)
    console.print(f"[green]Datas e horas de {len(renovados)} produtos DLC Secundária atualizadas![/green]")


@app.command("reset")
def cmd_reset(
    sim: bool = typer.Option(False, "--yes", "-y", help="Não pedir confirmação"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Volta os produtos ao catálogo padrão e apaga o histórico de verificações."""
    if not sim:
        typer.confirm("Resetar produtos e histórico para os valores padrão?", abort=True)
    estado = resetar_estado(db_path=db_path)
    console.print(f"[green]Produtos e histórico resetados ({len(estado.produtos)} produtos padrão).[/green]")


# -----------------------
# verificação diária
# -----------------------

verif_app = typer.Typer(help="Verificação diária da DLC Secundária.")
app.add_typer(verif_app, name="verificacao")


@verif_app.command("confirmar")
def cmd_verificacao_confirmar(
    responsavel: Optional[str] = typer.Option(None, help="Nome do responsável"),
    observacao: Optional[str] = typer.Option(None, help="Observações"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Registra a verificação diária."""
    registro = run_confirmar_verificacao(responsavel, observacao, db_path=db_path)
    console.print(
        f"[green]Verificação registrada com sucesso![/green] "
        f"{registro.quantidade_produtos} produtos verificados."
    )


@verif_app.command("status")
def cmd_verificacao_status(
    como_json: bool = typer.Option(False, "--json", help="Saída em JSON"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Status da verificação diária."""
    st = run_status_verificacao(db_path=db_path)
    if como_json:
        _print_json(st)
        return

    if st["verificado_hoje"]:
        linhas = ["[bold green]✅ Verificado Hoje[/bold green]"]
    else:
        linhas = ["[bold red]⚠️ Aguardando Verificação[/bold red]"]
    ultimo = st["ultimo"]
    if ultimo:
        linhas.append(f"Última verificação: {formatar_instante(ultimo['date'])}")
        if ultimo.get("verifiedBy"):
            linhas.append(f"Responsável: {ultimo['verifiedBy']}")
        linhas.append(f"Produtos verificados: {ultimo['productsCount']}")
    else:
        linhas.append("[dim]Nenhuma verificação registrada ainda[/dim]")
    console.print(Panel("\n".join(linhas), title="Status da Verificação Diária"))


@verif_app.command("historico")
def cmd_verificacao_historico(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Histórico de verificações (mais recente primeiro)."""
    registros = carregar_estado(db_path).registros
    if not registros:
        console.print(Panel("Nenhuma verificação registrada", title="Histórico", border_style="yellow"))
        return
    table = Table(title="Histórico de Verificações", box=box.ROUNDED)
    table.add_column("Data e Hora", justify="center")
    table.add_column("Responsável")
    table.add_column("Produtos", justify="right")
    table.add_column("Observações")
    for r in registros:
        table.add_row(
            formatar_instante(r.data),
            r.responsavel or "-",
            str(r.quantidade_produtos),
            r.observacao or "-",
        )
    console.print(table)


@verif_app.command("exportar")
def cmd_verificacao_exportar(
    destino: str = typer.Option(".", help="Pasta de destino do CSV"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Exporta o histórico de verificações em CSV."""
    caminho = run_exportar_verificacoes(destino, db_path=db_path)
    console.print(f"[green]Histórico exportado:[/green] {caminho}")


# -----------------------
# lembrete
# -----------------------

def _avisar(agora) -> None:
    console.print(Panel(
        "Lembre-se de registrar a verificação diária dos produtos.",
        title="⚠️ Verificação DLC Secundária Pendente",
        border_style="yellow",
    ))


@app.command("lembrete")
def cmd_lembrete(db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite")):
    """Checa uma vez se a verificação diária está pendente."""
    if lembrete_pendente(carregar_estado(db_path).registros):
        _avisar(None)
    else:
        console.print("[green]Nenhuma verificação pendente.[/green]")


@app.command("vigiar")
def cmd_vigiar(
    intervalo: float = typer.Option(DEFAULTS.intervalo_lembrete_segundos, help="Segundos entre checagens"),
    db_path: str = typer.Option(DB_PATH, "--db", help="Caminho do SQLite"),
):
    """Checa periodicamente a verificação diária até Ctrl+C."""
    lembrete = LembreteVerificacao(
        obter_registros=lambda: carregar_estado(db_path).registros,
        ao_lembrar=_avisar,
        intervalo=intervalo,
    )
    console.print(f"[dim]Checando a cada {intervalo:g} s. Ctrl+C para sair.[/dim]")
    with lembrete:
        try:
            while lembrete.ativo:
                time.sleep(1)
        except KeyboardInterrupt:
            console.print("\n[dim]Encerrando lembrete...[/dim]")


# Entry point opcional:
def main():
    app()


if __name__ == "__main__":
    main()
