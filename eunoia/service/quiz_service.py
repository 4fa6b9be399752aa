"""Quiz batch selection.

Two levels of weighting:
  1. pick a presentation date, recent dates weighted higher
     (ranks 0-3 get 0.30, 0.30, 0.20, 0.10; every older date gets 0.10 on its own);
  2. inside that date, pick uniformly among the words the quiz has shown the
     fewest times so far (exposure counts in the ledger).

Each pick bumps the word's exposure count, so later picks in the same batch
already see it.
"""

from __future__ import annotations

import logging
import random
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

from eunoia.data.errors import StoreError
from eunoia.data.history_repo import HistoryRepo
from eunoia.data.ledger_repo import ExposureLedgerRepo
from eunoia.models.word import WordEntry

logger = logging.getLogger(__name__)

RANK_WEIGHTS = (0.30, 0.30, 0.20, 0.10)
TAIL_WEIGHT = 0.10


def date_weights(dates: List[str]) -> List[Tuple[str, float]]:
    """(date, weight) pairs, most recent first."""
    ordered = sorted(dates, reverse=True)
    return [
        (d, RANK_WEIGHTS[rank] if rank < len(RANK_WEIGHTS) else TAIL_WEIGHT)
        for rank, d in enumerate(ordered)
    ]


def group_by_date(history: List[WordEntry]) -> Dict[str, List[WordEntry]]:
    groups: Dict[str, List[WordEntry]] = OrderedDict()
    for entry in history:
        if entry.presented_date:
            groups.setdefault(entry.presented_date, []).append(entry)
    return groups


class QuizService:
    def __init__(
        self,
        history_repo: HistoryRepo,
        ledger_repo: ExposureLedgerRepo,
        batch_size: int = 30,
        rng: Optional[random.Random] = None,
    ):
        self.history_repo = history_repo
        self.ledger_repo = ledger_repo
        self.batch_size = batch_size
        self.rng = rng or random.Random()

    def select_batch(self) -> List[WordEntry]:
        # The ledger lock covers the whole read-modify-write cycle.
        with self.ledger_repo.locked():
            try:
                history = self.history_repo.read()
                counts = self.ledger_repo.read()
            except StoreError:
                logger.exception("Quiz unavailable: history or exposure ledger unreadable")
                return []

            groups = group_by_date(history)
            if not groups:
                return []

            batch = self._draw(groups, counts)

            try:
                self.ledger_repo.write(counts)
            except StoreError:
                logger.exception("Could not save exposure counts after quiz selection")
        return batch

    def _draw(self, groups: Dict[str, List[WordEntry]], counts: Dict[str, int]) -> List[WordEntry]:
        weighted = date_weights(list(groups))
        total = sum(w for _, w in weighted)
        batch: List[WordEntry] = []

        for _ in range(self.batch_size):
            day = self._pick_date(weighted, total)
            group = groups.get(day) or []
            # Empty draws are not retried, so a batch can come out short.
            if not group:
                continue

            exposure = [counts.get(w.exposure_key, 0) for w in group]
            least = min(exposure)
            candidates = [w for w, c in zip(group, exposure) if c == least] or group

            picked = self.rng.choice(candidates)
            batch.append(picked)
            counts[picked.exposure_key] = counts.get(picked.exposure_key, 0) + 1
        return batch

    def _pick_date(self, weighted: List[Tuple[str, float]], total: float) -> str:
        r = self.rng.random() * total
        cumulative = 0.0
        for day, weight in weighted:
            cumulative += weight
            if cumulative >= r:
                return day
        return weighted[0][0]
