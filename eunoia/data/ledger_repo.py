from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator

from eunoia.data.errors import StoreError
from eunoia.data.prefs_repo import PrefsRepo

class ExposureLedgerRepo:
    """How many times the quiz has picked each word (key: text|meaning|category)."""
    NAMESPACE = "quiz_stats"
    KEY = "exposure_counts"

    def __init__(self, prefs: PrefsRepo):
        self.prefs = prefs
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def read(self) -> Dict[str, int]:
        raw = self.prefs.get_json(self.NAMESPACE, self.KEY)
        if raw is None:
            return {}
        if not isinstance(raw, dict):
            raise StoreError("Exposure ledger is not a JSON object.")
        try:
            return {str(k): int(v) for k, v in raw.items()}
        except (TypeError, ValueError) as e:
            raise StoreError(f"Exposure ledger has a non-integer count: {e}") from e

    def write(self, counts: Dict[str, int]) -> None:
        self.prefs.put_json(self.NAMESPACE, self.KEY, counts)
