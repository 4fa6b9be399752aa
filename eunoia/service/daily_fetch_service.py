from __future__ import annotations

import logging
import time
from datetime import date
from typing import Dict

from eunoia.data.app_settings_repo import AppSettingsRepo
from eunoia.data.errors import StoreError
from eunoia.models.category import BUILTIN_CATEGORIES
from eunoia.service.category_service import CategoryService
from eunoia.service.generation_service import GeminiWordGenerator
from eunoia.service.word_service import WordService

logger = logging.getLogger(__name__)


class DailyWordFetcher:
    """Body of the once-a-day job: ask the generator for new words per built-in category."""

    def __init__(
        self,
        app_settings: AppSettingsRepo,
        category_service: CategoryService,
        word_service: WordService,
        generator: GeminiWordGenerator,
        pause_seconds: float = 2.0,
    ):
        self.app_settings = app_settings
        self.category_service = category_service
        self.word_service = word_service
        self.generator = generator
        self.pause_seconds = pause_seconds

    def run(self, force: bool = False, today: date | None = None) -> Dict[str, int]:
        """Returns how many words were added per category key."""
        day = today or date.today()
        try:
            if not self.app_settings.get_api_key():
                logger.info("No API key set; daily fetch skipped")
                return {}
            if not force and self.app_settings.get_last_fetch_date() == day.isoformat():
                logger.info("Words already fetched for %s", day.isoformat())
                return {}
        except StoreError:
            logger.exception("App settings unreadable; daily fetch skipped")
            return {}

        summary: Dict[str, int] = {}
        categories = BUILTIN_CATEGORIES
        for index, definition in enumerate(categories):
            try:
                existing = self.category_service.read_words(definition.key)
                generated = self.generator.generate(definition.display_name, [w.text for w in existing])
                added = self.word_service.add_generated_words(definition.key, generated, today=day)
                summary[definition.key] = len(added)
                logger.info("Fetched %d new words for %r", len(added), definition.key)
            except StoreError:
                logger.exception("Daily fetch failed for category %r", definition.key)
                continue
            # Free-tier rate limit.
            if self.pause_seconds and index < len(categories) - 1:
                time.sleep(self.pause_seconds)

        try:
            self.app_settings.set_last_fetch_date(day.isoformat())
        except StoreError:
            logger.exception("Could not record last fetch date")
        return summary
