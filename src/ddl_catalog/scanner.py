from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import List
import re

from ddl_catalog.config import settings

_DIGITS_RE = re.compile(r"(\d+)")

@dataclass
class ScanConfig:
    pattern: str = "*.sql"
    recursive: bool = True

def natural_key(p: Path) -> list:
    # V2__a.sql 가 V10__b.sql 보다 먼저 오도록 숫자 구간은 정수로 비교
    parts = _DIGITS_RE.split(p.as_posix())
    return [int(s) if s.isdigit() else s.lower() for s in parts]

def scan_migrations(path: Path, cfg: ScanConfig | None = None) -> List[Path]:
    """
    마이그레이션 SQL 파일 목록을 재생 순서대로 반환한다.
    - 파일이면 그 파일 하나
    - 디렉터리면 pattern 에 맞는 파일 전체 (자연 정렬)
    """
    cfg = cfg or ScanConfig(pattern=settings.sql_glob)
    path = Path(path).expanduser()
    if path.is_file():
        return [path]
    if not path.is_dir():
        raise FileNotFoundError(f"경로를 찾을 수 없습니다: {path}")

    files = path.rglob(cfg.pattern) if cfg.recursive else path.glob(cfg.pattern)
    return sorted((f for f in files if f.is_file()), key=lambda f: natural_key(f.relative_to(path)))

def read_sql(path: Path) -> str:
    return path.read_text(encoding=settings.encoding, errors="ignore")
