from ddl_catalog.parsers.base import Parser
from ddl_catalog.parsers.sqlglot_parser import SqlglotParser

__all__ = ["Parser", "SqlglotParser"]
