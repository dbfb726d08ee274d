from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple


class ScanType(str, Enum):
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BOOL = "bool"
    STRING = "string"
    TIMESTAMP = "timestamp"

    @property
    def python_type(self) -> type:
        return _PYTHON_TYPES[self]


_PYTHON_TYPES = {
    ScanType.INT32: int,
    ScanType.INT64: int,
    ScanType.FLOAT32: float,
    ScanType.FLOAT64: float,
    ScanType.BOOL: bool,
    ScanType.STRING: str,
    ScanType.TIMESTAMP: datetime,
}


@dataclass(frozen=True)
class ColumnDefinition:
    name: str
    data_type: str                  # varchar, int, decimal ...
    column_type: str                # varchar(50), decimal(10,2), int unsigned ...
    scan_type: ScanType = ScanType.STRING
    primary_key: bool = False
    unique: bool = False
    nullable: bool = True
    auto_increment: bool = False
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default: Optional[str] = None
    comment: Optional[str] = None


@dataclass(frozen=True)
class IndexDefinition:
    table_name: str
    name: str = ""                  # 이름 없는 제약조건은 빈 문자열
    columns: Tuple[str, ...] = ()
    primary_key: bool = False
    unique: bool = False


@dataclass(frozen=True)
class TableDefinition:
    name: str
    comment: str = ""
    columns: Tuple[ColumnDefinition, ...] = field(default_factory=tuple)
    indexes: Tuple[IndexDefinition, ...] = field(default_factory=tuple)

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]

    @property
    def primary_key(self) -> list[str]:
        return [c.name for c in self.columns if c.primary_key]

    def column(self, name: str) -> Optional[ColumnDefinition]:
        for c in self.columns:
            if c.name == name:
                return c
        return None
