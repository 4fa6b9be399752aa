"""Category bookkeeping: which categories exist and which words each one holds.

Built-in categories are fixed; user categories live in the preference store
and each owns a `<key>.json` word file. Creating or deleting a user category
touches several stores, so both operations undo what they already wrote when
a later step fails.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from eunoia.data.category_repo import CustomCategoryRepo
from eunoia.data.errors import StoreError
from eunoia.data.history_repo import HistoryRepo
from eunoia.data.word_file_repo import BundledWordRepo, CategoryRecordRepo
from eunoia.models.category import BUILTIN_CATEGORIES, CategoryDefinition
from eunoia.models.word import CategoryRecord, WordEntry

logger = logging.getLogger(__name__)


def generate_category_key(display_name: str, existing_keys: set[str]) -> str:
    base = display_name.strip().lower()
    base = re.sub(r"[^a-z0-9가-힣]", "_", base)
    base = re.sub(r"_+", "_", base).strip("_") or "category"

    candidate, index = base, 1
    while candidate in existing_keys:
        candidate = f"{base}_{index}"
        index += 1
    return candidate


class CategoryService:
    def __init__(
        self,
        custom_repo: CustomCategoryRepo,
        record_repo: CategoryRecordRepo,
        bundled_repo: BundledWordRepo,
        history_repo: HistoryRepo,
    ):
        self.custom_repo = custom_repo
        self.record_repo = record_repo
        self.bundled_repo = bundled_repo
        self.history_repo = history_repo

    # -------------------------
    # Lookup
    # -------------------------
    def list_categories(self) -> List[CategoryDefinition]:
        try:
            custom = self.custom_repo.list()
        except StoreError:
            logger.exception("Could not read custom categories; showing built-ins only")
            custom = []
        return list(BUILTIN_CATEGORIES) + custom

    def find(self, name_or_key: str) -> Optional[CategoryDefinition]:
        wanted = name_or_key.strip()
        categories = self.list_categories()
        for c in categories:
            if c.key == wanted:
                return c
        for c in categories:
            if c.display_name == wanted:
                return c
        return None

    def resolve_key(self, name_or_key: str) -> Optional[str]:
        found = self.find(name_or_key)
        return found.key if found else None

    def resolve_display_name(self, name_or_key: str) -> str:
        found = self.find(name_or_key)
        return found.display_name if found else name_or_key.strip()

    # -------------------------
    # Create / delete
    # -------------------------
    def create_category(self, display_name: str) -> Optional[CategoryDefinition]:
        name = display_name.strip()
        if not name:
            return None

        with self.custom_repo.locked():
            try:
                custom = self.custom_repo.list()
            except StoreError:
                logger.exception("Cannot create category %r: custom categories unreadable", name)
                return None
            existing = list(BUILTIN_CATEGORIES) + custom
            if any(c.display_name == name for c in existing):
                return None

            key = generate_category_key(name, {c.key for c in existing})
            definition = CategoryDefinition(key=key, display_name=name, is_builtin=False)

            with self.record_repo.locked(key):
                try:
                    self.record_repo.write(key, CategoryRecord(display_name=name, words=[]))
                except StoreError:
                    logger.exception("Cannot create word file for category %r", key)
                    return None
                try:
                    self.custom_repo.save(custom + [definition])
                except StoreError:
                    logger.exception("Cannot save category %r; removing its word file", key)
                    self._quiet_delete_record(key)
                    return None

        logger.info("Created category %r (%s)", key, name)
        return definition

    def delete_category(self, key: str) -> bool:
        with self.custom_repo.locked():
            try:
                custom = self.custom_repo.list()
            except StoreError:
                logger.exception("Cannot delete category %r: custom categories unreadable", key)
                return False
            definition = next((c for c in list(BUILTIN_CATEGORIES) + custom if c.key == key), None)
            if definition is None or definition.is_builtin:
                return False

            with self.record_repo.locked(key), self.history_repo.locked():
                try:
                    old_record = self.record_repo.read(key)
                    history = self.history_repo.read()
                except StoreError:
                    logger.exception("Cannot delete category %r: stores unreadable", key)
                    return False

                remaining = [c for c in custom if c.key != key]
                try:
                    self.custom_repo.save(remaining)
                except StoreError:
                    logger.exception("Cannot delete category %r", key)
                    return False

                try:
                    self.record_repo.delete(key)
                    kept = [h for h in history if h.category != definition.display_name]
                    if len(kept) != len(history):
                        self.history_repo.write(kept)
                except StoreError:
                    logger.exception("Deleting category %r failed half-way; restoring it", key)
                    self._restore(custom, key, old_record)
                    return False

        logger.info("Deleted category %r (%s)", key, definition.display_name)
        return True

    def _restore(self, custom: List[CategoryDefinition], key: str, record: Optional[CategoryRecord]) -> None:
        try:
            if record is not None:
                self.record_repo.write(key, record)
            self.custom_repo.save(custom)
        except StoreError:
            logger.exception("Could not restore category %r", key)

    def _quiet_delete_record(self, key: str) -> None:
        try:
            self.record_repo.delete(key)
        except StoreError:
            logger.exception("Could not remove word file %r", key)

    # -------------------------
    # Words
    # -------------------------
    def read_words(self, key: str) -> List[WordEntry]:
        """Like `load_words`, but lets `StoreError` through.

        Callers that write the list back must use this one so a read failure
        never turns into an overwrite with an empty list.
        """
        definition = self.find(key)
        actual_key = definition.key if definition else key.strip()
        display_name = definition.display_name if definition else key.strip()

        record = self.record_repo.read(actual_key)
        if record is None and definition is not None and definition.is_builtin:
            record = self.bundled_repo.read_default(actual_key)
        if record is None:
            return []
        return [w.with_category(display_name) for w in record.words]

    def load_words(self, key: str) -> List[WordEntry]:
        try:
            return self.read_words(key)
        except StoreError:
            logger.exception("Could not load words for category %r", key)
            return []
