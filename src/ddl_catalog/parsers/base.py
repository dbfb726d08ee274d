from __future__ import annotations
from abc import ABC, abstractmethod
from ddl_catalog.statements import Statement

class Parser(ABC):
    @abstractmethod
    def parse(self, sql: str) -> list[Statement]: ...
