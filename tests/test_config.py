from pathlib import Path

from ddl_catalog.config import Settings


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    s = Settings()
    assert s.dialect == "mysql"
    assert s.output_dir == Path("./out")
    assert s.sql_glob == "*.sql"
    assert s.encoding == "utf-8"
    assert s.log_level == "WARNING"
    assert s.watch_debounce == 0.8


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("DDL_CATALOG_DIALECT", "postgres")
    monkeypatch.setenv("DDL_CATALOG_OUTPUT_DIR", str(tmp_path / "build"))
    monkeypatch.setenv("DDL_CATALOG_WATCH_DEBOUNCE", "2.5")
    s = Settings()
    assert s.dialect == "postgres"
    assert s.output_dir == tmp_path / "build"
    assert s.watch_debounce == 2.5


def test_env_file(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text("DDL_CATALOG_SQL_GLOB=V*.sql\n", encoding="utf-8")
    assert Settings().sql_glob == "V*.sql"
