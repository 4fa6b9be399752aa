from __future__ import annotations

import logging
from typing import Iterable, List

from eunoia.data.errors import StoreError
from eunoia.data.history_repo import HistoryRepo
from eunoia.models.word import WordEntry
from eunoia.service.category_service import CategoryService

logger = logging.getLogger(__name__)


class HistoryService:
    """Log of the words the user has been shown, newest first."""

    def __init__(self, repo: HistoryRepo, category_service: CategoryService, limit: int = 1000):
        self.repo = repo
        self.category_service = category_service
        self.limit = limit

    def list(self) -> List[WordEntry]:
        try:
            return self.repo.read()
        except StoreError:
            logger.exception("Could not read history")
            return []

    def record_many(self, entries: Iterable[WordEntry]) -> bool:
        entries = list(entries)
        if not entries:
            return True
        with self.repo.locked():
            try:
                history = self.repo.read()
            except StoreError:
                logger.exception("Could not read history; %d entries not recorded", len(entries))
                return False
            for entry in entries:
                # Same word on the same day is one presentation.
                history = [
                    h for h in history
                    if not (h.text == entry.text and h.presented_date == entry.presented_date)
                ]
                history.insert(0, entry)
            del history[self.limit:]
            try:
                self.repo.write(history)
            except StoreError:
                logger.exception("Could not write history")
                return False
        return True

    def remove(self, entry: WordEntry) -> bool:
        """Drop one word from history; every date when `entry` has none."""
        with self.repo.locked():
            try:
                history = self.repo.read()
                kept = [h for h in history if not _matches(h, entry)]
                if len(kept) != len(history):
                    self.repo.write(kept)
            except StoreError:
                logger.exception("Could not remove %r from history", entry.text)
                return False
        return True

    def browse(self) -> List[WordEntry]:
        """History followed by every bundled word not already in it."""
        history = self.list()
        seen = {h.identity for h in history}
        combined = list(history)
        for definition in self.category_service.list_categories():
            for word in self.category_service.load_words(definition.key):
                if word.is_bundled and word.identity not in seen:
                    combined.append(word)
        return combined


def _matches(candidate: WordEntry, target: WordEntry) -> bool:
    return (
        candidate.text == target.text
        and candidate.meaning == target.meaning
        and candidate.category == target.category
        and (target.presented_date is None or candidate.presented_date == target.presented_date)
    )
