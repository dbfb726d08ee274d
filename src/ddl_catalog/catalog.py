"""DDL 문장을 순서대로 적용해 테이블 정의를 관리하는 카탈로그."""
from __future__ import annotations
import logging
from dataclasses import replace
from typing import Iterable, Iterator, Optional

from ddl_catalog.columns import insert_column, remove_column
from ddl_catalog.errors import DuplicateTableError, TableNotFoundError
from ddl_catalog.indexes import extract_indexes
from ddl_catalog.model import ColumnDefinition, TableDefinition
from ddl_catalog.parsers.base import Parser
from ddl_catalog.statements import (
    AddColumn,
    AlterTable,
    ConstraintKind,
    CreateTable,
    DropColumn,
    DropTable,
    Statement,
)
from ddl_catalog.type_mapper import map_column

logger = logging.getLogger(__name__)


class Catalog:
    """
    테이블명 → TableDefinition 매핑.
    단일 writer 기준이며, 여러 스레드에서 쓰려면 호출 측에서 lock 으로 감싼다.
    """

    def __init__(self, parser: Optional[Parser] = None):
        self._tables: dict[str, TableDefinition] = {}
        self._parser = parser

    # ----- 조회 -----

    def tables(self) -> dict[str, TableDefinition]:
        # TableDefinition 은 불변이라 얕은 복사만으로 스냅샷이 된다
        return dict(self._tables)

    def get(self, name: str) -> Optional[TableDefinition]:
        return self._tables.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._tables))

    # ----- 적용 -----

    def apply(self, stmt: Statement) -> None:
        if isinstance(stmt, CreateTable):
            self._create(stmt)
        elif isinstance(stmt, AlterTable):
            self._alter(stmt)
        elif isinstance(stmt, DropTable):
            self._drop(stmt)
        else:
            logger.debug("ignored statement: %s", stmt)

    def apply_all(self, statements: Iterable[Statement]) -> None:
        for stmt in statements:
            self.apply(stmt)

    def apply_sql(self, sql: str) -> None:
        """SQL 스크립트 전체를 파싱해 순서대로 적용한다. 첫 실패에서 멈춘다."""
        self.apply_all(self._get_parser().parse(sql))

    def _get_parser(self) -> Parser:
        if self._parser is None:
            from ddl_catalog.parsers.sqlglot_parser import SqlglotParser
            self._parser = SqlglotParser()
        return self._parser

    def _create(self, stmt: CreateTable) -> None:
        if not stmt.table:
            logger.warning("CREATE TABLE without a table name skipped")
            return
        if stmt.table in self._tables:
            if stmt.if_not_exists:
                logger.debug("table %s exists, skipped (IF NOT EXISTS)", stmt.table)
                return
            raise DuplicateTableError(stmt.table)

        self._tables[stmt.table] = TableDefinition(
            name=stmt.table,
            comment=stmt.comment or "",
            columns=self._build_columns(stmt),
            indexes=extract_indexes(stmt.table, stmt.constraints),
        )
        logger.debug("created table %s", stmt.table)

    def _build_columns(self, stmt: CreateTable) -> tuple[ColumnDefinition, ...]:
        pk_names: set[str] = set()
        for cons in stmt.constraints:
            if cons.kind == ConstraintKind.PRIMARY_KEY:
                pk_names.update(cons.columns)

        cols: tuple[ColumnDefinition, ...] = ()
        for decl in stmt.columns:
            ct = map_column(decl)
            if ct.name in pk_names:
                ct = replace(ct, primary_key=True)
            cols = insert_column(cols, ct)
        return cols

    def _alter(self, stmt: AlterTable) -> None:
        table = self._tables.get(stmt.table)
        if table is None:
            raise TableNotFoundError(stmt.table)

        cols = table.columns
        for spec in stmt.specs:
            if isinstance(spec, DropColumn):
                cols = remove_column(cols, spec.name)
            elif isinstance(spec, AddColumn):
                cols = insert_column(cols, map_column(spec.column), spec.position)

        self._tables[stmt.table] = replace(table, columns=cols)
        logger.debug("altered table %s: %s", stmt.table, [c.name for c in cols])

    def _drop(self, stmt: DropTable) -> None:
        # 모두 검증한 뒤에 삭제 (부분 적용 방지)
        if not stmt.if_exists:
            for name in stmt.tables:
                if name not in self._tables:
                    raise TableNotFoundError(name)
        for name in stmt.tables:
            self._tables.pop(name, None)
        logger.debug("dropped tables %s", list(stmt.tables))
