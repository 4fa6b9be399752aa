from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, List

from eunoia.data.errors import StoreError
from eunoia.data.prefs_repo import PrefsRepo
from eunoia.models.category import CategoryDefinition

class CustomCategoryRepo:
    """User-created category definitions, in creation order."""
    NAMESPACE = "category_manager"
    KEY = "custom_categories"

    def __init__(self, prefs: PrefsRepo):
        self.prefs = prefs
        self._lock = threading.RLock()

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def list(self) -> List[CategoryDefinition]:
        raw = self.prefs.get_json(self.NAMESPACE, self.KEY)
        if raw is None:
            return []
        if not isinstance(raw, list):
            raise StoreError("Custom categories are not a JSON array.")
        try:
            return [CategoryDefinition.from_dict(r) for r in raw]
        except (KeyError, TypeError) as e:
            raise StoreError(f"Malformed custom category: {e}") from e

    def save(self, categories: List[CategoryDefinition]) -> None:
        self.prefs.put_json(self.NAMESPACE, self.KEY, [c.to_dict() for c in categories])
