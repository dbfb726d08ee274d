"""DDL 문장 재생 기반 인메모리 스키마 카탈로그."""
from ddl_catalog.catalog import Catalog
from ddl_catalog.errors import CatalogError, DuplicateTableError, ParseFailure, TableNotFoundError
from ddl_catalog.model import ColumnDefinition, IndexDefinition, ScanType, TableDefinition

__all__ = [
    "Catalog",
    "CatalogError",
    "DuplicateTableError",
    "ParseFailure",
    "TableNotFoundError",
    "ColumnDefinition",
    "IndexDefinition",
    "ScanType",
    "TableDefinition",
]
