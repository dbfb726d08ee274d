"""
DDL 카탈로그 CLI.
- ddl-catalog: 서브커맨드 (replay / export / watch)
- ddl-replay: replay 단독 실행
"""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ddl_catalog.config import settings
from ddl_catalog.commands.replay import load_catalog, run_replay
from ddl_catalog.errors import CatalogError
from ddl_catalog.model import TableDefinition

console = Console()


def _setup_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _render_table(t: TableDefinition) -> Table:
    title = f"{t.name}" + (f" - {t.comment}" if t.comment else "")
    rt = Table(title=title, title_justify="left")
    rt.add_column("#", justify="right")
    rt.add_column("Column", style="bold")
    rt.add_column("Type")
    rt.add_column("Scan")
    rt.add_column("Flags")
    rt.add_column("Default")
    rt.add_column("Comment")
    for i, c in enumerate(t.columns, 1):
        flags = []
        if c.primary_key: flags.append("PK")
        if c.auto_increment: flags.append("AI")
        if c.unique: flags.append("UNIQUE")
        if not c.nullable: flags.append("NOT NULL")
        rt.add_row(
            str(i), c.name, c.column_type, c.scan_type.value, " ".join(flags),
            c.default if c.default is not None else "", c.comment or "",
        )
    for idx in t.indexes:
        kind = "PRIMARY" if idx.primary_key else "UNIQUE" if idx.unique else "INDEX"
        rt.caption = (rt.caption + "\n" if rt.caption else "") + f"{kind} {idx.name or '(unnamed)'} ({', '.join(idx.columns)})"
    return rt


def _replay(path: Path, dialect: Optional[str], table: Optional[str]) -> None:
    try:
        catalog = load_catalog(path, dialect=dialect)
    except (CatalogError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)

    tables = catalog.tables()
    if table is not None:
        if table not in tables:
            console.print(f"[bold red]Error:[/bold red] 테이블이 없습니다: {table}")
            raise typer.Exit(code=1)
        tables = {table: tables[table]}

    for _, t in sorted(tables.items()):
        console.print(_render_table(t))
    console.print(f"[bold green]Tables:[/bold green] {len(tables)}")


app = typer.Typer(
    name="ddl-catalog",
    add_completion=False,
    help="DDL 마이그레이션을 재생해 최종 테이블 구조를 보여주는 도구",
)


@app.callback()
def main():
    _setup_logging()


@app.command("replay")
def cmd_replay(
    path: Path = typer.Argument(..., help="SQL 파일 또는 마이그레이션 디렉터리"),
    dialect: Optional[str] = typer.Option(None, help="SQL 방언 (기본: 설정값)"),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="특정 테이블만 출력"),
):
    """마이그레이션을 재생하고 결과 테이블을 출력."""
    _replay(path, dialect, table)


@app.command("export")
def cmd_export(
    path: Path = typer.Argument(..., help="SQL 파일 또는 마이그레이션 디렉터리"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리 (기본: 설정값)"),
    dialect: Optional[str] = typer.Option(None, help="SQL 방언 (기본: 설정값)"),
    dbml: bool = typer.Option(True, "--dbml/--no-dbml", help="DBML 출력"),
    md: bool = typer.Option(True, "--md/--no-md", help="요약 MD 출력"),
    json: bool = typer.Option(True, "--json/--no-json", help="JSON 출력"),
):
    """재생 결과를 DBML / MD / JSON 파일로 기록."""
    try:
        run_replay(path, out_dir=out_dir, dbml=dbml, md=md, json=json, dialect=dialect)
    except (CatalogError, FileNotFoundError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command("watch")
def cmd_watch(
    path: Path = typer.Argument(..., help="감시할 SQL 파일 또는 디렉터리"),
    out_dir: Optional[Path] = typer.Option(None, help="출력 디렉터리 (기본: 설정값)"),
    dialect: Optional[str] = typer.Option(None, help="SQL 방언 (기본: 설정값)"),
):
    """.sql 파일이 바뀔 때마다 export 를 다시 실행."""
    from ddl_catalog.watch import watch

    if not path.exists():
        raise typer.BadParameter(f"경로를 찾을 수 없습니다: {path}")
    console.print(f"[bold]Watching[/bold] {path} (Ctrl+C 로 종료)")
    watch(path, out_dir=out_dir, dialect=dialect)


# ----- 개별 진입점: ddl-replay -----

replay_app = typer.Typer(add_completion=False)


@replay_app.command()
def replay_main(
    path: Path = typer.Argument(..., help="SQL 파일 또는 마이그레이션 디렉터리"),
    dialect: Optional[str] = typer.Option(None, help="SQL 방언 (기본: 설정값)"),
    table: Optional[str] = typer.Option(None, "--table", "-t", help="특정 테이블만 출력"),
):
    """재생 결과만 출력 (ddl-replay ./migrations)."""
    _setup_logging()
    _replay(path, dialect, table)
