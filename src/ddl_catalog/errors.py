"""카탈로그 예외 정의."""
from __future__ import annotations


class CatalogError(Exception):
    """카탈로그 적용 실패의 기본 예외."""


class DuplicateTableError(CatalogError):
    def __init__(self, table_name: str):
        super().__init__(f"이미 존재하는 테이블입니다: {table_name}")
        self.table_name = table_name


class TableNotFoundError(CatalogError):
    def __init__(self, table_name: str):
        super().__init__(f"존재하지 않는 테이블입니다: {table_name}")
        self.table_name = table_name


class ParseFailure(CatalogError):
    """SQL 파서가 실패한 경우. 원래 예외는 __cause__ 로 보존된다."""
