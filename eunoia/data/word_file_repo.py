from __future__ import annotations

import json
import threading
from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, Optional

from eunoia.data.errors import StoreError
from eunoia.models.word import CategoryRecord

def _read_record(path: Path) -> CategoryRecord:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise StoreError(f"Cannot read {path.name}: {e}") from e
    if not isinstance(raw, dict):
        raise StoreError(f"{path.name} is not a JSON object.")
    return CategoryRecord.from_dict(raw)


class CategoryRecordRepo:
    """Locally stored word files, one `<key>.json` per category.

    A file here shadows the bundled asset of the same key, so the first write
    to a built-in category must carry the bundled words along with it.
    """

    def __init__(self, data_dir: Path):
        self.data_dir = data_dir
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    def _path(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    @contextmanager
    def locked(self, key: str) -> Iterator[None]:
        with self._locks_guard:
            lock = self._locks.setdefault(key, threading.RLock())
        with lock:
            yield

    def exists(self, key: str) -> bool:
        return self._path(key).exists()

    def read(self, key: str) -> Optional[CategoryRecord]:
        path = self._path(key)
        if not path.exists():
            return None
        return _read_record(path)

    def write(self, key: str, record: CategoryRecord) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(record.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(path)
        except OSError as e:
            tmp.unlink(missing_ok=True)
            raise StoreError(f"Cannot write {path.name}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            if not path.exists():
                return False
            path.unlink()
            return True
        except OSError as e:
            raise StoreError(f"Cannot delete {path.name}: {e}") from e


class BundledWordRepo:
    """Read-only default word sets packaged under eunoia/assets."""

    def __init__(self, asset_dir: Path):
        self.asset_dir = asset_dir

    def read_default(self, key: str) -> Optional[CategoryRecord]:
        return _load_asset(self.asset_dir / f"{key}.json")


@lru_cache(maxsize=32)
def _load_asset(path: Path) -> Optional[CategoryRecord]:
    if not path.exists():
        return None
    return _read_record(path)
