import pytest

from ddl_catalog.catalog import Catalog
from ddl_catalog.statements import (
    ColumnDeclaration,
    ColumnOption,
    CreateTable,
    OptionKind,
    TypeDeclaration,
)


def make_column(name, type_name="int", args=(), *options, unsigned=False):
    return ColumnDeclaration(
        name=name,
        type=TypeDeclaration(name=type_name, args=tuple(args), unsigned=unsigned),
        options=tuple(options),
    )


def make_create(table, *names, constraints=(), comment=""):
    return CreateTable(
        table=table,
        columns=tuple(make_column(n) for n in names),
        constraints=tuple(constraints),
        comment=comment,
    )


@pytest.fixture
def catalog():
    return Catalog()


@pytest.fixture
def column():
    return make_column


@pytest.fixture
def create():
    return make_create


@pytest.fixture
def opt():
    def _opt(kind: OptionKind, value=None):
        return ColumnOption(kind, value)
    return _opt


@pytest.fixture
def migrations_dir(tmp_path):
    d = tmp_path / "migrations"
    d.mkdir()
    (d / "V1__init.sql").write_text(
        "CREATE TABLE users (id INT PRIMARY KEY, name VARCHAR(50));\n",
        encoding="utf-8",
    )
    (d / "V2__age.sql").write_text(
        "ALTER TABLE users ADD COLUMN age INT AFTER id;\n",
        encoding="utf-8",
    )
    (d / "V10__drop_name.sql").write_text(
        "ALTER TABLE users DROP COLUMN name;\n",
        encoding="utf-8",
    )
    return d
