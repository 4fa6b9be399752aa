from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from eunoia.data.errors import StoreError
from eunoia.data.history_repo import HistoryRepo
from eunoia.data.word_file_repo import CategoryRecordRepo
from eunoia.models.word import CategoryRecord, GeneratedWord, WordEntry, WordSource
from eunoia.service.category_service import CategoryService

logger = logging.getLogger(__name__)


class WordService:
    """Adding and deleting words inside a category.

    Validation lives here; file access stays in the repos. Writes always go
    to the local word file, which from then on shadows the bundled set, so a
    write carries the bundled words along with it.
    """

    def __init__(self, category_service: CategoryService, record_repo: CategoryRecordRepo, history_repo: HistoryRepo):
        self.category_service = category_service
        self.record_repo = record_repo
        self.history_repo = history_repo

    def add_user_word(self, category: str, word: str, meaning: str, today: date | None = None) -> Optional[WordEntry]:
        word, meaning = word.strip(), meaning.strip()
        if not word:
            raise ValueError("Word cannot be empty.")
        if not meaning:
            raise ValueError("Meaning cannot be empty.")
        definition = self.category_service.find(category)
        if definition is None:
            raise ValueError(f"Unknown category: {category}")

        day = (today or date.today()).isoformat()
        with self.record_repo.locked(definition.key):
            try:
                words = self.category_service.read_words(definition.key)
            except StoreError:
                logger.exception("Cannot add %r: category %r unreadable", word, definition.key)
                return None
            if any(w.text == word for w in words):
                return None
            entry = WordEntry(
                text=word,
                meaning=meaning,
                category=definition.display_name,
                presented_date=day,
                source=WordSource.USER_ADDED,
            )
            try:
                self.record_repo.write(definition.key, CategoryRecord(definition.display_name, words + [entry]))
            except StoreError:
                logger.exception("Cannot save %r to category %r", word, definition.key)
                return None

        logger.info("Added user word %r to %r", word, definition.key)
        return entry

    def add_generated_words(self, key: str, generated: List[GeneratedWord], today: date | None = None) -> List[WordEntry]:
        definition = self.category_service.find(key)
        if definition is None or not generated:
            return []

        day = (today or date.today()).isoformat()
        with self.record_repo.locked(definition.key):
            words = self.category_service.read_words(definition.key)
            known = {w.text for w in words}
            added: List[WordEntry] = []
            for g in generated:
                text, meaning = g.word.strip(), g.meaning.strip()
                if not text or not meaning or text in known:
                    continue
                known.add(text)
                added.append(WordEntry(
                    text=text,
                    meaning=meaning,
                    category=definition.display_name,
                    presented_date=day,
                    source=WordSource.GENERATED,
                ))
            if added:
                self.record_repo.write(definition.key, CategoryRecord(definition.display_name, words + added))
        return added

    def delete_word(self, entry: WordEntry) -> bool:
        """Remove a non-bundled word from its category and from history."""
        if entry.is_bundled:
            return False
        key = self.category_service.resolve_key(entry.category)
        if key is None:
            return False

        with self.record_repo.locked(key), self.history_repo.locked():
            try:
                words = self.category_service.read_words(key)
                old_record = self.record_repo.read(key)
            except StoreError:
                logger.exception("Cannot delete %r: category %r unreadable", entry.text, key)
                return False
            kept = [w for w in words if w.identity != entry.identity]
            if len(kept) == len(words):
                return False

            display_name = self.category_service.resolve_display_name(key)
            try:
                self.record_repo.write(key, CategoryRecord(display_name, kept))
            except StoreError:
                logger.exception("Cannot delete %r from %r", entry.text, key)
                return False

            try:
                history = self.history_repo.read()
                remaining = [
                    h for h in history
                    if not (h.identity == entry.identity and h.category == display_name)
                ]
                if len(remaining) != len(history):
                    self.history_repo.write(remaining)
            except StoreError:
                logger.exception("Could not drop %r from history; restoring the word", entry.text)
                self._restore(key, old_record)
                return False

        logger.info("Deleted word %r from %r", entry.text, key)
        return True

    def _restore(self, key: str, record: Optional[CategoryRecord]) -> None:
        try:
            if record is None:
                self.record_repo.delete(key)
            else:
                self.record_repo.write(key, record)
        except StoreError:
            logger.exception("Could not restore word file %r", key)
