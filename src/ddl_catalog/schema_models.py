"""카탈로그 JSON 출력용 Pydantic 모델."""
from __future__ import annotations
from pydantic import BaseModel, Field
from typing import List, Optional

from ddl_catalog.model import ScanType, TableDefinition


class ColumnModel(BaseModel):
    name: str
    data_type: str
    column_type: str
    scan_type: ScanType = ScanType.STRING
    pk: bool = False
    unique: bool = False
    nullable: bool = True
    increment: bool = False
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default: Optional[str] = None
    comment: Optional[str] = None


class IndexModel(BaseModel):
    name: str = ""
    columns: List[str] = Field(default_factory=list)
    pk: bool = False
    unique: bool = False


class TableModel(BaseModel):
    name: str
    comment: str = ""
    columns: List[ColumnModel] = Field(default_factory=list)
    indexes: List[IndexModel] = Field(default_factory=list)


class CatalogModel(BaseModel):
    dialect: str = "mysql"
    tables: List[TableModel] = Field(default_factory=list)


def table_to_model(t: TableDefinition) -> TableModel:
    return TableModel(
        name=t.name,
        comment=t.comment,
        columns=[
            ColumnModel(
                name=c.name,
                data_type=c.data_type,
                column_type=c.column_type,
                scan_type=c.scan_type,
                pk=c.primary_key,
                unique=c.unique,
                nullable=c.nullable,
                increment=c.auto_increment,
                length=c.length,
                precision=c.precision,
                scale=c.scale,
                default=c.default,
                comment=c.comment,
            )
            for c in t.columns
        ],
        indexes=[
            IndexModel(name=i.name, columns=list(i.columns), pk=i.primary_key, unique=i.unique)
            for i in t.indexes
        ],
    )


def catalog_to_model(tables: dict[str, TableDefinition], dialect: str = "mysql") -> CatalogModel:
    return CatalogModel(
        dialect=dialect,
        tables=[table_to_model(t) for _, t in sorted(tables.items())],
    )
