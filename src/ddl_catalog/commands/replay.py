"""마이그레이션 재생: SQL 파일 스캔 → 카탈로그 적용 → DBML / MD / JSON 출력."""
from __future__ import annotations
import logging
from pathlib import Path

from rich.console import Console

from ddl_catalog.catalog import Catalog
from ddl_catalog.config import settings
from ddl_catalog.dbml_writer import write_dbml
from ddl_catalog.docs_writer import write_summary_md
from ddl_catalog.parsers.sqlglot_parser import SqlglotParser
from ddl_catalog.scanner import read_sql, scan_migrations
from ddl_catalog.schema_models import catalog_to_model

console = Console()
logger = logging.getLogger(__name__)


def load_catalog(path: Path, dialect: str | None = None) -> Catalog:
    """
    path(파일 또는 디렉터리)의 SQL 을 순서대로 재생한 카탈로그를 반환한다.
    실패하면 CatalogError 를 그대로 올린다.
    """
    catalog = Catalog(parser=SqlglotParser(dialect or settings.dialect))
    files = scan_migrations(Path(path))
    console.print(f"Found [green]{len(files)}[/green] migration files")
    for f in files:
        logger.info("replaying %s", f)
        catalog.apply_sql(read_sql(f))
    return catalog


def run_replay(
    path: Path,
    out_dir: Path | None = None,
    dbml: bool = True,
    md: bool = True,
    json: bool = True,
    dialect: str | None = None,
) -> list[Path]:
    """재생 결과를 out_dir 에 기록하고 생성된 파일 경로 목록을 반환한다."""
    catalog = load_catalog(path, dialect=dialect)
    tables = catalog.tables()

    base = out_dir or settings.output_dir
    base.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []

    if dbml:
        written.append(write_dbml(tables, base / "schema.dbml"))
    if md:
        written.append(write_summary_md(tables, base / "schema_summary.md"))
    if json:
        out = base / "schema.json"
        model = catalog_to_model(tables, dialect=dialect or settings.dialect)
        out.write_text(model.model_dump_json(indent=2), encoding="utf-8")
        written.append(out)

    for p in written:
        console.print(f"[bold green]Wrote:[/bold green] {p}")
    return written
