from __future__ import annotations

import logging
from datetime import date
from typing import List

from eunoia.models.word import WordEntry, WordSource
from eunoia.service.category_service import CategoryService

logger = logging.getLogger(__name__)


class TodayWordService:
    """Builds the "today's words" list, a fixed number per category.

    Words generated or added today come first; the rest is filled from the
    bundled set through a window that moves with the day of the year. Two
    calls on the same day over the same data return the same list.
    """

    def __init__(self, category_service: CategoryService, per_category: int = 5):
        self.category_service = category_service
        self.per_category = per_category

    def today_words(self, today: date | None = None) -> List[WordEntry]:
        day = today or date.today()
        result: List[WordEntry] = []
        for definition in self.category_service.list_categories():
            try:
                words = self.category_service.read_words(definition.key)
                result.extend(self.select_for_category(words, definition.display_name, day))
            except Exception:
                logger.exception("Skipping category %r for today's words", definition.key)
        return result

    def select_for_category(self, words: List[WordEntry], display_name: str, day: date) -> List[WordEntry]:
        stamp = day.isoformat()
        generated_today = [w for w in words if w.source is WordSource.GENERATED and w.presented_date == stamp]
        user_today = [w for w in words if w.source is WordSource.USER_ADDED and w.presented_date == stamp]
        bundled = [w for w in words if w.source is WordSource.BUNDLED]

        picked = (generated_today + user_today)[: self.per_category]

        missing = self.per_category - len(picked)
        if missing > 0 and bundled:
            start = (day.timetuple().tm_yday * self.per_category) % len(bundled)
            # No wrap-around: near the end of the list the window is shorter.
            picked += bundled[start:start + missing]

        return [w.presented_on(stamp, category=display_name) for w in picked]
