from __future__ import annotations
from typing import Iterable

from ddl_catalog.model import IndexDefinition
from ddl_catalog.statements import Constraint, ConstraintKind

INDEXED_KINDS = {ConstraintKind.PRIMARY_KEY, ConstraintKind.UNIQUE, ConstraintKind.INDEX}


def extract_indexes(table_name: str, constraints: Iterable[Constraint]) -> tuple[IndexDefinition, ...]:
    # FOREIGN KEY / CHECK 는 인덱스로 취급하지 않음
    indexes: list[IndexDefinition] = []
    for cons in constraints:
        if cons.kind not in INDEXED_KINDS:
            continue
        indexes.append(IndexDefinition(
            table_name=table_name,
            name=cons.name or "",
            columns=tuple(cons.columns),
            primary_key=cons.kind == ConstraintKind.PRIMARY_KEY,
            unique=cons.kind == ConstraintKind.UNIQUE,
        ))
    return tuple(indexes)
