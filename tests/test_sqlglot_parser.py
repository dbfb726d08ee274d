import pytest

from ddl_catalog.catalog import Catalog
from ddl_catalog.errors import ParseFailure, TableNotFoundError
from ddl_catalog.model import ScanType
from ddl_catalog.parsers.sqlglot_parser import SqlglotParser, split_top_level
from ddl_catalog.statements import (
    AddColumn,
    AlterTable,
    CreateTable,
    DropColumn,
    DropTable,
    OtherStatement,
    PositionKind,
)


@pytest.fixture
def parser():
    return SqlglotParser("mysql")


@pytest.fixture
def sql_catalog(parser):
    return Catalog(parser=parser)


def test_create_table(parser):
    (stmt,) = parser.parse("CREATE TABLE users (id INT PRIMARY KEY, name VARCHAR(50));")
    assert isinstance(stmt, CreateTable)
    assert stmt.table == "users"
    assert [c.name for c in stmt.columns] == ["id", "name"]
    assert stmt.columns[1].type.name == "varchar"
    assert stmt.columns[1].type.args == ("50",)
    assert stmt.if_not_exists is False


def test_create_if_not_exists(parser):
    (stmt,) = parser.parse("CREATE TABLE IF NOT EXISTS t (a INT)")
    assert stmt.if_not_exists is True


def test_alter_add_after(parser):
    (stmt,) = parser.parse("ALTER TABLE users ADD COLUMN age INT AFTER id")
    assert isinstance(stmt, AlterTable)
    assert stmt.table == "users"
    (spec,) = stmt.specs
    assert isinstance(spec, AddColumn)
    assert spec.column.name == "age"
    assert spec.position.kind == PositionKind.AFTER
    assert spec.position.column == "id"


def test_alter_add_first(parser):
    (stmt,) = parser.parse("ALTER TABLE users ADD COLUMN seq INT FIRST")
    assert stmt.specs[0].position.kind == PositionKind.FIRST


def test_alter_add_without_position(parser):
    (stmt,) = parser.parse("ALTER TABLE users ADD COLUMN note TEXT")
    assert stmt.specs[0].position.kind == PositionKind.END


def test_alter_drop_column(parser):
    (stmt,) = parser.parse("ALTER TABLE users DROP COLUMN name")
    assert isinstance(stmt, AlterTable)
    assert stmt.specs == (DropColumn("name"),)


def test_drop_table_if_exists(parser):
    (stmt,) = parser.parse("DROP TABLE IF EXISTS users")
    assert stmt == DropTable(("users",), if_exists=True)


def test_drop_table(parser):
    (stmt,) = parser.parse("DROP TABLE users;")
    assert stmt == DropTable(("users",), if_exists=False)


def test_non_ddl_is_other_statement(parser):
    stmts = parser.parse("SELECT 1; INSERT INTO t VALUES (1)")
    assert all(isinstance(s, OtherStatement) for s in stmts)
    assert stmts[0].kind == "SELECT"


def test_create_view_is_other_statement(parser):
    (stmt,) = parser.parse("CREATE VIEW v AS SELECT 1")
    assert isinstance(stmt, OtherStatement)


def test_syntax_error_raises_parse_failure(parser):
    with pytest.raises(ParseFailure) as exc:
        parser.parse("CREATE TABLE t (id INT")
    assert exc.value.__cause__ is not None


def test_column_options(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE t ("
        " id INT NOT NULL AUTO_INCREMENT,"
        " qty INT DEFAULT 0,"
        " label VARCHAR(20) DEFAULT 'x' COMMENT 'display label',"
        " created_at DATETIME DEFAULT CURRENT_TIMESTAMP,"
        " PRIMARY KEY (id)"
        ")"
    )
    t = sql_catalog.get("t")
    id_col = t.column("id")
    assert id_col.nullable is False
    assert id_col.auto_increment is True
    assert id_col.primary_key is True
    assert t.column("qty").default == "0"
    assert t.column("label").default == "x"
    assert t.column("label").comment == "display label"
    assert t.column("label").length == 20
    assert t.column("created_at").default == "CURRENT_TIMESTAMP"
    assert t.column("created_at").scan_type == ScanType.TIMESTAMP


def test_table_constraints_become_indexes(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE users ("
        " id INT, email VARCHAR(100),"
        " PRIMARY KEY (id),"
        " UNIQUE KEY uk_email (email)"
        ")"
    )
    t = sql_catalog.get("users")
    pk = [i for i in t.indexes if i.primary_key]
    uq = [i for i in t.indexes if i.unique]
    assert pk[0].columns == ("id",)
    assert uq[0].columns == ("email",)
    assert uq[0].name == "uk_email"
    assert t.primary_key == ["id"]


def test_decimal_and_unsigned(sql_catalog):
    sql_catalog.apply_sql("CREATE TABLE p (price DECIMAL(10,2), n INT UNSIGNED)")
    t = sql_catalog.get("p")
    price = t.column("price")
    assert price.column_type == "decimal(10,2)"
    assert (price.precision, price.scale) == (10, 2)
    n = t.column("n")
    assert n.column_type == "int unsigned"
    assert n.scan_type == ScanType.INT32


def test_table_comment(sql_catalog):
    sql_catalog.apply_sql("CREATE TABLE t (a INT) COMMENT='users table'")
    assert sql_catalog.get("t").comment == "users table"


def test_script_replays_end_to_end(sql_catalog):
    sql_catalog.apply_sql(
        """
        CREATE TABLE users (id INT PRIMARY KEY, name VARCHAR(50));
        ALTER TABLE users ADD COLUMN age INT AFTER id;
        ALTER TABLE users DROP COLUMN name;
        CREATE TABLE tmp (x INT);
        DROP TABLE tmp;
        """
    )
    assert list(sql_catalog) == ["users"]
    assert sql_catalog.get("users").column_names == ["id", "age"]


def test_drop_table_removes_table(sql_catalog):
    sql_catalog.apply_sql("CREATE TABLE users (id INT); DROP TABLE users;")
    assert "users" not in sql_catalog


def test_drop_missing_table_raises(sql_catalog):
    with pytest.raises(TableNotFoundError) as exc:
        sql_catalog.apply_sql("DROP TABLE ghost")
    assert exc.value.table_name == "ghost"


def test_drop_several_if_exists(parser, sql_catalog):
    (stmt,) = parser.parse("DROP TABLE IF EXISTS ghost, users")
    assert stmt == DropTable(("ghost", "users"), if_exists=True)

    sql_catalog.apply_sql("CREATE TABLE users (id INT)")
    sql_catalog.apply(stmt)
    assert len(sql_catalog) == 0


def test_add_and_drop_column_in_one_alter(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE users (id INT, d INT);"
        "ALTER TABLE users ADD x INT, DROP COLUMN d;"
    )
    assert sql_catalog.get("users").column_names == ["id", "x"]


def test_drop_column_without_keyword(sql_catalog):
    sql_catalog.apply_sql("CREATE TABLE t (a INT, b INT); ALTER TABLE t DROP b;")
    assert sql_catalog.get("t").column_names == ["a"]


def test_add_column_list(parser, sql_catalog):
    (stmt,) = parser.parse("ALTER TABLE t ADD COLUMN (a INT, b VARCHAR(5))")
    assert isinstance(stmt, AlterTable)
    assert [s.column.name for s in stmt.specs] == ["a", "b"]
    assert all(s.position.kind == PositionKind.END for s in stmt.specs)

    sql_catalog.apply_sql("CREATE TABLE t (id INT)")
    sql_catalog.apply(stmt)
    assert sql_catalog.get("t").column_names == ["id", "a", "b"]
    assert sql_catalog.get("t").column("b").column_type == "varchar(5)"


def test_modify_replaces_column(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE t (a INT, b INT, c INT);"
        "ALTER TABLE t MODIFY COLUMN a BIGINT NOT NULL;"
    )
    t = sql_catalog.get("t")
    assert t.column_names == ["b", "c", "a"]
    assert t.column("a").column_type == "bigint"
    assert t.column("a").nullable is False


def test_modify_with_position(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE t (a INT, b INT, c INT);"
        "ALTER TABLE t MODIFY c VARCHAR(3) FIRST;"
    )
    assert sql_catalog.get("t").column_names == ["c", "a", "b"]


def test_change_renames_column(parser, sql_catalog):
    (stmt,) = parser.parse("ALTER TABLE t CHANGE COLUMN b bee VARCHAR(10) AFTER a")
    assert stmt.specs[0] == DropColumn("b")
    assert stmt.specs[1].column.name == "bee"
    assert stmt.specs[1].position.kind == PositionKind.AFTER
    assert stmt.specs[1].position.column == "a"

    sql_catalog.apply_sql("CREATE TABLE t (a INT, b INT, c INT)")
    sql_catalog.apply(stmt)
    t = sql_catalog.get("t")
    assert t.column_names == ["a", "bee", "c"]
    assert t.column("bee").length == 10


def test_numeric_defaults_keep_declared_text(sql_catalog):
    sql_catalog.apply_sql(
        "CREATE TABLE p ("
        " price DECIMAL(10,2) DEFAULT 1.50,"
        " ratio DOUBLE DEFAULT 1e3,"
        " delta INT DEFAULT -5,"
        " qty INT DEFAULT 10"
        ")"
    )
    t = sql_catalog.get("p")
    assert t.column("price").default == "1.50"
    assert t.column("ratio").default == "1e3"
    assert t.column("delta").default == "-5"
    assert t.column("qty").default == "10"


def test_split_statements_skips_empty_and_comment_only(parser):
    chunks = parser.split_statements("CREATE TABLE a (x INT);;\n-- done\n; SELECT 'a;b'")
    assert chunks == ["CREATE TABLE a (x INT)", "SELECT 'a;b'"]


def test_split_top_level():
    assert split_top_level("ADD a DECIMAL(10,2), DROP b, ADD c VARCHAR(3) COMMENT 'x,y'") == [
        "ADD a DECIMAL(10,2)",
        "DROP b",
        "ADD c VARCHAR(3) COMMENT 'x,y'",
    ]
