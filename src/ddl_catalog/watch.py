from __future__ import annotations
from pathlib import Path
import logging
import time
from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from ddl_catalog.config import settings
from ddl_catalog.commands.replay import run_replay
from ddl_catalog.errors import CatalogError

logger = logging.getLogger(__name__)

class Handler(FileSystemEventHandler):
    def __init__(self, path: Path, out_dir: Path | None = None, dialect: str | None = None):
        self.path = path
        self.out_dir = out_dir
        self.dialect = dialect
        self._last = 0.0

    def on_any_event(self, event):
        if event.is_directory:
            return
        p = Path(str(event.src_path))
        if p.suffix.lower() != ".sql":
            return

        # 너무 잦은 재실행 방지(간단 debounce)
        now = time.time()
        if now - self._last < settings.watch_debounce:
            return
        self._last = now

        try:
            run_replay(self.path, out_dir=self.out_dir, dialect=self.dialect)
        except CatalogError as e:
            # 잘못된 마이그레이션이 있어도 감시는 계속한다
            logger.error("replay failed: %s", e)

def watch(path: Path, out_dir: Path | None = None, dialect: str | None = None) -> None:
    path = Path(path).expanduser()
    if not path.exists():
        raise FileNotFoundError(f"경로를 찾을 수 없습니다: {path}")

    handler = Handler(path, out_dir, dialect)
    obs = Observer()
    target = path if path.is_dir() else path.parent
    obs.schedule(handler, str(target), recursive=path.is_dir())
    obs.start()
    try:
        while True:
            time.sleep(1)
    finally:
        obs.stop()
        obs.join()
