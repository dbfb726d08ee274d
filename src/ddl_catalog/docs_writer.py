from __future__ import annotations
from pathlib import Path
from ddl_catalog.model import TableDefinition

def to_summary_md(tables: dict[str, TableDefinition]) -> str:
    lines = []
    lines.append("# Schema Summary\n")
    lines.append(f"- Tables: {len(tables)}")
    lines.append(f"- Columns: {sum(len(t.columns) for t in tables.values())}\n")

    lines.append("## Tables\n")
    for tname, table in sorted(tables.items()):
        lines.append(f"### {tname}")
        if table.comment:
            lines.append(f"> {table.comment}\n")
        lines.append("| Column | Type | Scan type | Flags | Default | Comment |")
        lines.append("|--------|------|-----------|-------|---------|---------|")
        for col in table.columns:
            flags = []
            if col.primary_key: flags.append("PK")
            if col.auto_increment: flags.append("AI")
            if col.unique: flags.append("UNIQUE")
            if not col.nullable: flags.append("NOT NULL")
            lines.append(
                f"| `{col.name}` | {col.column_type} | {col.scan_type.value} | {', '.join(flags) or '-'} "
                f"| {col.default if col.default is not None else '-'} | {col.comment or '-'} |"
            )
        if table.indexes:
            lines.append("")
            lines.append("Indexes:")
            for idx in table.indexes:
                kind = "PRIMARY" if idx.primary_key else "UNIQUE" if idx.unique else "INDEX"
                lines.append(f"- {kind} `{idx.name or '(unnamed)'}` ({', '.join(idx.columns)})")
        lines.append("")

    return "\n".join(lines)

def write_summary_md(tables: dict[str, TableDefinition], out_path: Path) -> Path:
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(to_summary_md(tables), encoding="utf-8")
    return out_path
