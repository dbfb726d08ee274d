"""파서가 카탈로그에 넘겨주는 구조화된 DDL 문장 모델.

문장 종류는 닫힌 집합이다: CreateTable / AlterTable / DropTable / OtherStatement.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple, Union


class OptionKind(str, Enum):
    NOT_NULL = "not_null"
    NULL = "null"
    PRIMARY_KEY = "primary_key"
    UNIQUE = "unique"
    AUTO_INCREMENT = "auto_increment"
    DEFAULT = "default"
    COMMENT = "comment"


class ConstraintKind(str, Enum):
    PRIMARY_KEY = "primary_key"
    UNIQUE = "unique"
    INDEX = "index"
    FOREIGN_KEY = "foreign_key"
    CHECK = "check"


class PositionKind(str, Enum):
    FIRST = "first"
    AFTER = "after"
    END = "end"


@dataclass(frozen=True)
class LiteralDefault:
    value: Union[int, float, bool, str, None]


@dataclass(frozen=True)
class FunctionDefault:
    name: str                       # CURRENT_TIMESTAMP, uuid ...


DefaultValue = Union[LiteralDefault, FunctionDefault]


@dataclass(frozen=True)
class TypeDeclaration:
    name: str                       # varchar, int, decimal ...
    args: Tuple[str, ...] = ()      # ("50",) / ("10", "2") / ("'a'", "'b'")
    unsigned: bool = False
    primary_key_flag: bool = False
    unique_key_flag: bool = False


@dataclass(frozen=True)
class ColumnOption:
    kind: OptionKind
    value: Union[DefaultValue, str, None] = None


@dataclass(frozen=True)
class ColumnDeclaration:
    name: str
    type: TypeDeclaration
    options: Tuple[ColumnOption, ...] = ()


@dataclass(frozen=True)
class Constraint:
    kind: ConstraintKind
    columns: Tuple[str, ...] = ()
    name: str = ""


@dataclass(frozen=True)
class ColumnPosition:
    kind: PositionKind = PositionKind.END
    column: Optional[str] = None

    @classmethod
    def first(cls) -> "ColumnPosition":
        return cls(PositionKind.FIRST)

    @classmethod
    def after(cls, column: str) -> "ColumnPosition":
        return cls(PositionKind.AFTER, column)

    @classmethod
    def end(cls) -> "ColumnPosition":
        return cls(PositionKind.END)


@dataclass(frozen=True)
class AddColumn:
    column: ColumnDeclaration
    position: ColumnPosition = ColumnPosition()


@dataclass(frozen=True)
class DropColumn:
    name: str


AlterSpec = Union[AddColumn, DropColumn]


@dataclass(frozen=True)
class CreateTable:
    table: str
    columns: Tuple[ColumnDeclaration, ...] = ()
    constraints: Tuple[Constraint, ...] = ()
    comment: str = ""
    if_not_exists: bool = False


@dataclass(frozen=True)
class AlterTable:
    table: str
    specs: Tuple[AlterSpec, ...] = ()


@dataclass(frozen=True)
class DropTable:
    tables: Tuple[str, ...]
    if_exists: bool = False


@dataclass(frozen=True)
class OtherStatement:
    kind: str = ""                  # SELECT, INSERT, CREATE VIEW ...


Statement = Union[CreateTable, AlterTable, DropTable, OtherStatement]
