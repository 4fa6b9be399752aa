from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List

from eunoia.data.errors import StoreError
from eunoia.data.prefs_repo import PrefsRepo
from eunoia.models.word import WordEntry

class HistoryRepo:
    NAMESPACE = "word_history"
    KEY = "history"

    def __init__(self, prefs: PrefsRepo):
        self.prefs = prefs
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def read(self) -> List[WordEntry]:
        raw = self.prefs.get_json(self.NAMESPACE, self.KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StoreError("History is not a JSON array.")
        return [WordEntry.from_dict(r) for r in raw if isinstance(r, dict)]

    def write(self, entries: List[WordEntry]) -> None:
        self.prefs.put_json(self.NAMESPACE, self.KEY, [e.to_dict() for e in entries])
