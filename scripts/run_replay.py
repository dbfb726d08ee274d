#!/usr/bin/env python3
"""
ddl-catalog 와 동일한 재생/출력. 설치 없이 실행 가능.

  python scripts/run_replay.py ./migrations
  python scripts/run_replay.py ./schema.sql --export --out-dir ./out
  python scripts/run_replay.py ./migrations --dialect postgres
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# 프로젝트 루트에서 실행 시 src 로드 (pip install 없이 실행 가능)
_ROOT = Path(__file__).resolve().parent.parent
_SRC = _ROOT / "src"
if _SRC.exists() and str(_SRC) not in sys.path:
    sys.path.insert(0, str(_SRC))


def main() -> int:
    parser = argparse.ArgumentParser(
        description="DDL 마이그레이션 재생 → 최종 테이블 구조 출력 / DBML, MD, JSON 생성",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
예시:
  python scripts/run_replay.py ./migrations
  python scripts/run_replay.py ./schema.sql --export --out-dir ./out
        """.strip(),
    )
    parser.add_argument("path", help="SQL 파일 또는 마이그레이션 디렉터리")
    parser.add_argument("--dialect", default=None, help="SQL 방언 (기본: DDL_CATALOG_DIALECT 또는 mysql)")
    parser.add_argument("--export", "-x", action="store_true", help="DBML / MD / JSON 파일 생성")
    parser.add_argument("--out-dir", default=None, help="출력 디렉터리")

    args = parser.parse_args()

    from ddl_catalog.commands.replay import load_catalog, run_replay
    from ddl_catalog.errors import CatalogError

    try:
        if args.export:
            out_dir = Path(args.out_dir) if args.out_dir else None
            run_replay(Path(args.path), out_dir=out_dir, dialect=args.dialect)
        else:
            catalog = load_catalog(Path(args.path), dialect=args.dialect)
            for name, table in sorted(catalog.tables().items()):
                print(f"{name}: {', '.join(c.name + ' ' + c.column_type for c in table.columns)}")
    except (CatalogError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
