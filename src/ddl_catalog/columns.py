from __future__ import annotations
from typing import Sequence

from ddl_catalog.model import ColumnDefinition
from ddl_catalog.statements import ColumnPosition, PositionKind


def index_of(columns: Sequence[ColumnDefinition], name: str) -> int:
    for i, c in enumerate(columns):
        if c.name == name:
            return i
    return -1


def remove_column(columns: Sequence[ColumnDefinition], name: str) -> tuple[ColumnDefinition, ...]:
    """이름이 같은 첫 번째 컬럼만 제거한다. 없으면 그대로 반환."""
    i = index_of(columns, name)
    if i < 0:
        return tuple(columns)
    return tuple(columns[:i]) + tuple(columns[i + 1:])


def resolve_position(columns: Sequence[ColumnDefinition], position: ColumnPosition) -> int:
    if position.kind == PositionKind.FIRST:
        return 0
    if position.kind == PositionKind.AFTER and position.column is not None:
        i = index_of(columns, position.column)
        if i >= 0:
            return i + 1
    return len(columns)


def insert_column(
    columns: Sequence[ColumnDefinition],
    column: ColumnDefinition,
    position: ColumnPosition = ColumnPosition(),
) -> tuple[ColumnDefinition, ...]:
    """
    같은 이름의 기존 컬럼을 먼저 제거한 뒤 position 위치에 삽입한다.
    삽입 위치는 제거 이후 목록 기준으로 계산한다.
    """
    remaining = remove_column(columns, column.name)
    at = resolve_position(remaining, position)
    return remaining[:at] + (column,) + remaining[at:]
