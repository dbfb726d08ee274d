from __future__ import annotations
from pathlib import Path
from ddl_catalog.model import ColumnDefinition, IndexDefinition, TableDefinition

def _quote(s: str) -> str:
    return s.replace("\\", "\\\\").replace("'", "\\'")

def col_settings(c: ColumnDefinition) -> str:
    settings = []
    if c.primary_key:
        settings.append("pk")
    if c.auto_increment:
        settings.append("increment")
    if c.unique:
        settings.append("unique")
    if not c.nullable:
        settings.append("not null")
    if c.default is not None:
        settings.append(f"default: '{_quote(c.default)}'")
    if c.comment:
        settings.append(f"note: '{_quote(c.comment)}'")
    return f" [{', '.join(settings)}]" if settings else ""

def index_line(idx: IndexDefinition) -> str:
    cols = idx.columns[0] if len(idx.columns) == 1 else f"({', '.join(idx.columns)})"
    settings = []
    if idx.primary_key:
        settings.append("pk")
    if idx.unique:
        settings.append("unique")
    if idx.name:
        settings.append(f"name: '{_quote(idx.name)}'")
    return f"    {cols}" + (f" [{', '.join(settings)}]" if settings else "")

def to_dbml(tables: dict[str, TableDefinition]) -> str:
    lines: list[str] = []

    for tname, table in sorted(tables.items()):
        lines.append(f"Table {tname} {{")
        # 컬럼 순서는 카탈로그 순서 그대로 유지
        for col in table.columns:
            col_type = col.column_type.replace(" ", "_") or "unknown"
            lines.append(f"  {col.name} {col_type}{col_settings(col)}")
        if table.indexes:
            lines.append("")
            lines.append("  indexes {")
            for idx in table.indexes:
                lines.append(index_line(idx))
            lines.append("  }")
        if table.comment:
            lines.append(f"  Note: '{_quote(table.comment)}'")
        lines.append("}\n")

    lines.append("")
    return "\n".join(lines)

def write_dbml(tables: dict[str, TableDefinition], out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_dbml(tables), encoding="utf-8")
    return out_path
