"""컬럼 선언 → ColumnDefinition 변환 (타입 문자열, 길이/정밀도, 옵션, scan type)."""
from __future__ import annotations
from typing import Optional

from ddl_catalog.model import ColumnDefinition, ScanType
from ddl_catalog.statements import (
    ColumnDeclaration,
    FunctionDefault,
    LiteralDefault,
    OptionKind,
    TypeDeclaration,
)

SCAN_TYPE_MAP = {
    "tinyint": ScanType.INT32,
    "smallint": ScanType.INT32,
    "int": ScanType.INT32,
    "integer": ScanType.INT32,
    "mediumint": ScanType.INT64,
    "bigint": ScanType.INT64,
    # MySQL TIMESTAMP 는 epoch 기반이라 64-bit 정수로 취급
    "timestamp": ScanType.INT64,
    "float": ScanType.FLOAT32,
    "double": ScanType.FLOAT64,
    "real": ScanType.FLOAT64,
    "bool": ScanType.BOOL,
    "boolean": ScanType.BOOL,
    "date": ScanType.TIMESTAMP,
    "datetime": ScanType.TIMESTAMP,
}

# 길이 미지정 시 MySQL 기본 최대 길이
VAR_LENGTH_DEFAULTS: dict[str, Optional[int]] = {
    "varchar": None,
    "varbinary": None,
    "tinytext": 255,
    "tinyblob": 255,
    "text": 65535,
    "blob": 65535,
    "mediumtext": 16777215,
    "mediumblob": 16777215,
    "longtext": 4294967295,
    "longblob": 4294967295,
}

DECIMAL_TYPES = {"decimal", "numeric", "dec", "fixed"}
FLOAT_TYPES = {"float", "double", "real"}


def base_type(tp: TypeDeclaration) -> str:
    # "double precision" → "double"
    return tp.name.strip().lower().split(" ")[0]


def column_type_string(tp: TypeDeclaration) -> str:
    s = tp.name.strip().lower()
    if tp.args:
        s += "(" + ",".join(a.strip() for a in tp.args) + ")"
    if tp.unsigned:
        s += " unsigned"
    return s


def scan_type_of(tp: TypeDeclaration) -> ScanType:
    return SCAN_TYPE_MAP.get(base_type(tp), ScanType.STRING)


def _int_arg(tp: TypeDeclaration, i: int) -> Optional[int]:
    if len(tp.args) <= i:
        return None
    try:
        return int(tp.args[i])
    except ValueError:
        return None


def _length(tp: TypeDeclaration) -> Optional[int]:
    name = base_type(tp)
    if name not in VAR_LENGTH_DEFAULTS:
        return None
    n = _int_arg(tp, 0)
    return n if n is not None else VAR_LENGTH_DEFAULTS[name]


def _decimal_size(tp: TypeDeclaration) -> tuple[Optional[int], Optional[int]]:
    name = base_type(tp)
    if name in DECIMAL_TYPES:
        precision = _int_arg(tp, 0)
        scale = _int_arg(tp, 1)
        return (10 if precision is None else precision), (0 if scale is None else scale)
    if name in FLOAT_TYPES and len(tp.args) == 2:
        return _int_arg(tp, 0), _int_arg(tp, 1)
    return None, None


def render_default(value) -> Optional[str]:
    if isinstance(value, FunctionDefault):
        return value.name
    if isinstance(value, LiteralDefault):
        v = value.value
        if v is None:
            return None
        if isinstance(v, bool):
            return "1" if v else "0"
        # int 는 10진수 텍스트, 나머지는 문자열 형태
        return str(v)
    return None


def map_column(col: ColumnDeclaration) -> ColumnDefinition:
    tp = col.type
    precision, scale = _decimal_size(tp)

    primary_key = tp.primary_key_flag
    unique = tp.unique_key_flag
    nullable = True
    auto_increment = False
    default: Optional[str] = None
    comment: Optional[str] = None

    for opt in col.options:
        if opt.kind == OptionKind.NOT_NULL:
            nullable = False
        elif opt.kind == OptionKind.NULL:
            nullable = True
        elif opt.kind == OptionKind.PRIMARY_KEY:
            primary_key = True
        elif opt.kind == OptionKind.UNIQUE:
            unique = True
        elif opt.kind == OptionKind.AUTO_INCREMENT:
            auto_increment = True
        elif opt.kind == OptionKind.DEFAULT:
            default = render_default(opt.value)
        elif opt.kind == OptionKind.COMMENT:
            comment = None if opt.value is None else str(opt.value)

    return ColumnDefinition(
        name=col.name,
        data_type=base_type(tp),
        column_type=column_type_string(tp),
        scan_type=scan_type_of(tp),
        primary_key=primary_key,
        unique=unique,
        nullable=nullable,
        auto_increment=auto_increment,
        length=_length(tp),
        precision=precision,
        scale=scale,
        default=default,
        comment=comment,
    )
