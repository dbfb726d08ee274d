"""sqlglot 기반 SQL 파서: SQL 텍스트 → CreateTable / AlterTable / DropTable / OtherStatement."""
from __future__ import annotations
import logging
import re
from typing import Optional

import sqlglot
from sqlglot import expressions as exp
from sqlglot.errors import ParseError, TokenError
from sqlglot.tokens import TokenType

from ddl_catalog.config import settings
from ddl_catalog.errors import ParseFailure
from ddl_catalog.parsers.base import Parser
from ddl_catalog.statements import (
    AddColumn,
    AlterSpec,
    AlterTable,
    ColumnDeclaration,
    ColumnOption,
    ColumnPosition,
    Constraint,
    ConstraintKind,
    CreateTable,
    DefaultValue,
    DropColumn,
    DropTable,
    FunctionDefault,
    LiteralDefault,
    OptionKind,
    OtherStatement,
    Statement,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)

# sqlglot 내부 타입명 → 선언 타입명
TYPE_ALIASES = {
    "TIMESTAMPTZ": "timestamp",
    "TIMESTAMPLTZ": "timestamp",
    "DATETIME64": "datetime",
}

# UNSIGNED 가 붙으면 sqlglot 이 U 접두사 타입으로 바꾼다 (UINT, UBIGINT ...)
UNSIGNED_BASES = {"TINYINT", "SMALLINT", "MEDIUMINT", "INT", "BIGINT", "DECIMAL", "DOUBLE", "FLOAT"}

_FLAGS = re.IGNORECASE | re.DOTALL
_IDENT = r"(`[^`]+`|[\w$]+)"

DROP_TABLE_RE = re.compile(r"^\s*DROP\s+(?:TEMPORARY\s+)?TABLES?\s+(IF\s+EXISTS\s+)?(.+?)\s*(?:RESTRICT|CASCADE)?\s*;?\s*$", _FLAGS)
ALTER_TABLE_RE = re.compile(r"^\s*ALTER\s+(?:ONLINE\s+|IGNORE\s+)*TABLE\s+(\S+)\s+(.*?)\s*;?\s*$", _FLAGS)

# ALTER TABLE 액션 (텍스트 경로)
ADD_MANY_RE = re.compile(r"^ADD\s+(?:COLUMN\s+)?\((.*)\)$", _FLAGS)
ADD_RE = re.compile(
    r"^ADD\s+(?:COLUMN\s+)?(?!(?:INDEX|KEY|UNIQUE|PRIMARY|CONSTRAINT|FOREIGN|FULLTEXT|SPATIAL|CHECK|PARTITION)\b)(.+)$",
    _FLAGS,
)
DROP_COLUMN_RE = re.compile(
    r"^DROP\s+(?:COLUMN\s+)?(?!(?:INDEX|KEY|PRIMARY|FOREIGN|CONSTRAINT|CHECK|PARTITION)\b)" + _IDENT + r"$",
    _FLAGS,
)
MODIFY_RE = re.compile(r"^MODIFY\s+(?:COLUMN\s+)?(.+)$", _FLAGS)
CHANGE_RE = re.compile(r"^CHANGE\s+(?:COLUMN\s+)?" + _IDENT + r"\s+(.+)$", _FLAGS)
POSITION_RE = re.compile(r"^(.*?)\s+(FIRST|AFTER\s+" + _IDENT + r")\s*$", _FLAGS)

# sqlglot 트리로는 안정적으로 읽을 수 없어 텍스트로 처리하는 액션
TEXT_ONLY_ACTIONS = re.compile(r"^(MODIFY|CHANGE)\b|^ADD\s+(?:COLUMN\s+)?\(", re.IGNORECASE)


def _name(node: Optional[exp.Expression]) -> str:
    if node is None:
        return ""
    if isinstance(node, exp.Ordered):
        return _name(node.this)
    return node.name or ""


def _names(nodes) -> tuple[str, ...]:
    return tuple(n for n in (_name(x) for x in (nodes or [])) if n)


def _strip_quotes(s: str) -> str:
    return s.strip().strip("`\"")


def _table_name(s: str) -> str:
    return _strip_quotes(s).split(".")[-1].strip("`\"")


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """괄호/따옴표 밖의 sep 기준으로 자른다."""
    parts: list[str] = []
    depth = 0
    quote: Optional[str] = None
    buf: list[str] = []
    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in "'\"`":
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == sep and depth == 0:
            parts.append("".join(buf).strip())
            buf = []
            continue
        buf.append(ch)
    tail = "".join(buf).strip()
    if tail:
        parts.append(tail)
    return [p for p in parts if p]


class SqlglotParser(Parser):
    def __init__(self, dialect: Optional[str] = None):
        self.dialect = dialect or settings.dialect

    def parse(self, sql: str) -> list[Statement]:
        out: list[Statement] = []
        for text in self.split_statements(sql):
            if self._needs_text_path(text):
                out.append(self._alter_from_text(text))
                continue
            tree = self._parse_one(text)
            if tree is not None:
                out.append(self.convert(tree, text))
        return out

    def split_statements(self, sql: str) -> list[str]:
        """토큰 위치 기준으로 문장별 원문을 잘라낸다 (주석만 있는 구간은 버림)."""
        try:
            tokens = sqlglot.tokenize(sql, read=self.dialect)
        except TokenError as e:
            raise ParseFailure(str(e)) from e

        chunks: list[str] = []
        start: Optional[int] = None
        end = 0
        for tok in tokens:
            if tok.token_type == TokenType.SEMICOLON:
                if start is not None:
                    chunks.append(sql[start:end + 1])
                start = None
                continue
            if start is None:
                start = tok.start
            end = tok.end
        if start is not None:
            chunks.append(sql[start:end + 1])
        return chunks

    def _parse_one(self, text: str) -> Optional[exp.Expression]:
        try:
            return sqlglot.parse_one(text, read=self.dialect)
        except (ParseError, TokenError) as e:
            raise ParseFailure(str(e)) from e

    # ----- 문장 분류 -----

    def convert(self, node: exp.Expression, text: Optional[str] = None) -> Statement:
        if isinstance(node, exp.Create):
            kind = (node.args.get("kind") or "").upper()
            if kind == "TABLE":
                return self._create_table(node)
            return OtherStatement(kind=f"CREATE {kind}".strip())
        if isinstance(node, exp.Alter):
            kind = (node.args.get("kind") or "").upper()
            if kind == "TABLE":
                return self._alter_table(node, text)
            return OtherStatement(kind=f"ALTER {kind}".strip())
        if isinstance(node, exp.Drop):
            kind = (node.args.get("kind") or "").upper()
            if kind == "TABLE":
                return self._drop_table(node, text)
            return OtherStatement(kind=f"DROP {kind}".strip())
        if isinstance(node, exp.Command):
            return self._command(node, text)
        return OtherStatement(kind=node.key.upper())

    def _command(self, node: exp.Command, text: Optional[str] = None) -> Statement:
        # sqlglot 이 구조화하지 못한 문장은 Command 로 남는다
        text = text or node.sql(dialect=self.dialect)
        m = DROP_TABLE_RE.match(text)
        if m:
            tables = tuple(_table_name(t) for t in m.group(2).split(",") if t.strip())
            return DropTable(tables=tables, if_exists=bool(m.group(1)))
        alter = self._alter_from_text(text)
        if alter is not None:
            return alter
        if re.match(r"^\s*CREATE\s+TABLE\b", text, re.IGNORECASE):
            logger.warning("unsupported table DDL ignored: %s", text[:120])
        return OtherStatement(kind=str(node.this or "COMMAND").upper())

    # ----- CREATE TABLE -----

    def _create_table(self, node: exp.Create) -> CreateTable:
        target = node.this
        columns: list[ColumnDeclaration] = []
        constraints: list[Constraint] = []

        if isinstance(target, exp.Schema):
            table_name = _name(target.this)
            for e in target.expressions or []:
                if isinstance(e, exp.ColumnDef):
                    columns.append(self._column(e))
                else:
                    constraints.extend(self._constraints(e))
        else:
            # CREATE TABLE ... AS SELECT / LIKE: 컬럼 목록 없음
            table_name = _name(target)

        return CreateTable(
            table=table_name,
            columns=tuple(columns),
            constraints=tuple(constraints),
            comment=self._table_comment(node),
            if_not_exists=bool(node.args.get("exists")),
        )

    def _table_comment(self, node: exp.Create) -> str:
        props = node.args.get("properties")
        for prop in (props.expressions if props else []):
            if isinstance(prop, exp.SchemaCommentProperty):
                return prop.name
        return ""

    def _constraints(self, e: exp.Expression, name: str = "") -> list[Constraint]:
        if isinstance(e, exp.Constraint):
            out: list[Constraint] = []
            for inner in e.expressions or []:
                out.extend(self._constraints(inner, name=_name(e.this)))
            return out
        if isinstance(e, exp.PrimaryKey):
            return [Constraint(ConstraintKind.PRIMARY_KEY, _names(e.expressions), name)]
        if isinstance(e, exp.UniqueColumnConstraint):
            this = e.this
            if isinstance(this, exp.Schema):
                return [Constraint(ConstraintKind.UNIQUE, _names(this.expressions), name or _name(this.this))]
            return [Constraint(ConstraintKind.UNIQUE, _names(e.expressions), name or _name(this))]
        if isinstance(e, exp.IndexColumnConstraint):
            return [Constraint(ConstraintKind.INDEX, _names(e.expressions), name or _name(e.this))]
        if isinstance(e, exp.ForeignKey):
            return [Constraint(ConstraintKind.FOREIGN_KEY, _names(e.expressions), name)]
        if isinstance(e, exp.CheckColumnConstraint):
            return [Constraint(ConstraintKind.CHECK, (), name)]
        logger.debug("ignored table element: %s", e.sql(dialect=self.dialect))
        return []

    # ----- 컬럼 -----

    def _column(self, col: exp.ColumnDef) -> ColumnDeclaration:
        options: list[ColumnOption] = []
        for c in col.args.get("constraints") or []:
            opt = self._option(c.kind if isinstance(c, exp.ColumnConstraint) else c)
            if opt is not None:
                options.append(opt)
        return ColumnDeclaration(
            name=col.name,
            type=self._type(col.args.get("kind")),
            options=tuple(options),
        )

    def _columns_from_text(self, text: str) -> tuple[ColumnDeclaration, ...]:
        # 컬럼 정의 조각은 임시 CREATE TABLE 로 감싸 sqlglot 에 맡긴다
        tree = self._parse_one(f"CREATE TABLE _t ({text})")
        if not isinstance(tree, exp.Create):
            raise ParseFailure(f"컬럼 정의를 해석할 수 없습니다: {text}")
        columns = self._create_table(tree).columns
        if not columns:
            raise ParseFailure(f"컬럼 정의를 해석할 수 없습니다: {text}")
        return columns

    def _type(self, dt: Optional[exp.DataType]) -> TypeDeclaration:
        if dt is None:
            return TypeDeclaration(name="")
        raw = dt.this.value if isinstance(dt.this, exp.DataType.Type) else str(dt.this)
        raw = raw.upper()
        if raw in ("USERDEFINED", "USER-DEFINED") and dt.args.get("kind"):
            raw = str(dt.args["kind"]).upper()

        unsigned = False
        if raw.startswith("U") and raw[1:] in UNSIGNED_BASES:
            unsigned, raw = True, raw[1:]

        name = TYPE_ALIASES.get(raw, raw.lower())
        args = tuple(p.sql(dialect=self.dialect) for p in dt.expressions or [])
        return TypeDeclaration(name=name, args=args, unsigned=unsigned)

    def _option(self, kind: exp.Expression) -> Optional[ColumnOption]:
        if isinstance(kind, exp.NotNullColumnConstraint):
            if kind.args.get("allow_null"):
                return ColumnOption(OptionKind.NULL)
            return ColumnOption(OptionKind.NOT_NULL)
        if isinstance(kind, exp.PrimaryKeyColumnConstraint):
            return ColumnOption(OptionKind.PRIMARY_KEY)
        if isinstance(kind, exp.UniqueColumnConstraint):
            return ColumnOption(OptionKind.UNIQUE)
        if isinstance(kind, exp.AutoIncrementColumnConstraint):
            return ColumnOption(OptionKind.AUTO_INCREMENT)
        if isinstance(kind, exp.DefaultColumnConstraint):
            return ColumnOption(OptionKind.DEFAULT, self._default(kind.this))
        if isinstance(kind, exp.CommentColumnConstraint):
            return ColumnOption(OptionKind.COMMENT, kind.name)
        return None

    def _default(self, e: Optional[exp.Expression]) -> Optional[DefaultValue]:
        if isinstance(e, exp.Paren):
            return self._default(e.this)
        if isinstance(e, exp.Null):
            return LiteralDefault(None)
        if isinstance(e, exp.Boolean):
            return LiteralDefault(bool(e.this))
        if isinstance(e, exp.Literal):
            if e.is_string:
                return LiteralDefault(e.this)
            return LiteralDefault(_number(e.this))
        if isinstance(e, exp.Neg) and isinstance(e.this, exp.Literal) and not e.this.is_string:
            return LiteralDefault(_number("-" + e.this.this))
        if isinstance(e, exp.Anonymous):
            return FunctionDefault(e.name)
        if isinstance(e, exp.Func):
            return FunctionDefault(e.sql_name())
        if isinstance(e, (exp.Column, exp.Var)):
            # CURRENT_TIMESTAMP 같은 괄호 없는 키워드
            return FunctionDefault(e.name)
        return None

    # ----- DROP TABLE -----

    def _drop_table(self, node: exp.Drop, text: Optional[str] = None) -> DropTable:
        # sqlglot 버전에 따라 대상 테이블이 tables 또는 this/expressions 에 들어 있다
        targets = node.args.get("tables") or [node.this, *(node.expressions or [])]
        names = tuple(n for n in (_name(t) for t in targets if t is not None) if n)
        if not names and text:
            m = DROP_TABLE_RE.match(text)
            if m:
                names = tuple(_table_name(t) for t in m.group(2).split(",") if t.strip())
        return DropTable(tables=names, if_exists=bool(node.args.get("exists")))

    # ----- ALTER TABLE -----

    def _alter_table(self, node: exp.Alter, text: Optional[str] = None) -> AlterTable:
        specs: list[AlterSpec] = []
        for act in node.args.get("actions") or []:
            converted = self._alter_action(act)
            if converted is None:
                if text:
                    alter = self._alter_from_text(text)
                    if alter is not None:
                        return alter
                logger.warning("unsupported ALTER action ignored: %s", act.sql(dialect=self.dialect))
                continue
            specs.extend(converted)
        return AlterTable(table=_name(node.this), specs=tuple(specs))

    def _alter_action(self, act: exp.Expression) -> Optional[list[AlterSpec]]:
        if isinstance(act, exp.ColumnDef):
            return [AddColumn(self._column(act), self._position(act.args.get("position")))]
        if isinstance(act, exp.Drop) and (act.args.get("kind") or "COLUMN").upper() == "COLUMN":
            target = (act.args.get("tables") or [act.this])[0]
            name = _name(target)
            return [DropColumn(name)] if name else None
        return None

    def _position(self, pos: Optional[exp.Expression]) -> ColumnPosition:
        if pos is None:
            return ColumnPosition.end()
        where = str(pos.args.get("position") or "").upper()
        if where == "FIRST":
            return ColumnPosition.first()
        if where == "AFTER":
            return ColumnPosition.after(_name(pos.this))
        return ColumnPosition.end()

    def _needs_text_path(self, text: str) -> bool:
        m = ALTER_TABLE_RE.match(text)
        if not m:
            return False
        return any(TEXT_ONLY_ACTIONS.match(a) for a in split_top_level(m.group(2)))

    def _alter_from_text(self, text: str) -> Optional[AlterTable]:
        """
        ALTER TABLE 원문을 액션 단위로 나눠 처리한다.
        - ADD [COLUMN] def [FIRST | AFTER c] / ADD [COLUMN] (def, ...)
        - DROP [COLUMN] c
        - MODIFY [COLUMN] def [pos]: 같은 이름 컬럼 교체
        - CHANGE [COLUMN] old def [pos]: old 제거 후 새 컬럼 추가
        그 외 액션은 경고 후 무시한다.
        """
        m = ALTER_TABLE_RE.match(text)
        if not m:
            return None

        specs: list[AlterSpec] = []
        for action in split_top_level(m.group(2)):
            many = ADD_MANY_RE.match(action)
            if many:
                specs.extend(AddColumn(c) for c in self._columns_from_text(many.group(1)))
                continue
            add = ADD_RE.match(action) or MODIFY_RE.match(action)
            if add:
                specs.append(self._add_from_text(add.group(1)))
                continue
            change = CHANGE_RE.match(action)
            if change:
                specs.append(DropColumn(_strip_quotes(change.group(1))))
                specs.append(self._add_from_text(change.group(2)))
                continue
            drop = DROP_COLUMN_RE.match(action)
            if drop:
                specs.append(DropColumn(_strip_quotes(drop.group(1))))
                continue
            logger.warning("unsupported ALTER action ignored: %s", action[:120])
        return AlterTable(table=_table_name(m.group(1)), specs=tuple(specs))

    def _add_from_text(self, definition: str) -> AddColumn:
        position = ColumnPosition.end()
        m = POSITION_RE.match(definition)
        if m:
            definition = m.group(1)
            if m.group(3):
                position = ColumnPosition.after(_strip_quotes(m.group(3)))
            else:
                position = ColumnPosition.first()
        return AddColumn(self._columns_from_text(definition)[0], position)


def _number(text: str):
    # 정수가 아닌 숫자는 선언된 텍스트 그대로 둔다 (1.50, 1e3)
    try:
        return int(text)
    except ValueError:
        return text
