from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, List, Optional


class WordSource(str, Enum):
    """Where a word came from. Values are the strings stored in the JSON files."""
    BUNDLED = "asset"
    GENERATED = "ai"
    USER_ADDED = "user"

    @classmethod
    def parse(cls, raw: Any) -> "WordSource":
        # Missing/empty source means a bundled word written by an older version.
        if not raw:
            return cls.BUNDLED
        try:
            return cls(str(raw))
        except ValueError:
            return cls.BUNDLED


def _new_id() -> str:
    return uuid.uuid4().hex


def _stable_id(category: str, text: str, meaning: str) -> str:
    # Packaged assets carry no ids; derive one so repeated loads agree.
    return uuid.uuid5(uuid.NAMESPACE_URL, f"eunoia:{category}|{text}|{meaning}").hex


@dataclass(frozen=True)
class WordEntry:
    """One vocabulary entry.

    Identity for de-duplication is (text, meaning); `id` only exists so list
    views can tell two rows apart. Entries are never mutated in place: use
    `with_category` / `presented_on` to get an annotated copy.
    """
    text: str
    meaning: str
    category: str
    presented_date: Optional[str] = None
    source: WordSource = WordSource.BUNDLED
    id: str = field(default_factory=_new_id)

    @property
    def identity(self) -> tuple[str, str]:
        return (self.text, self.meaning)

    @property
    def exposure_key(self) -> str:
        return f"{self.text}|{self.meaning}|{self.category}"

    @property
    def is_bundled(self) -> bool:
        return self.source is WordSource.BUNDLED

    def with_category(self, category: str) -> "WordEntry":
        return replace(self, category=category)

    def presented_on(self, day: str, category: str | None = None) -> "WordEntry":
        return replace(self, presented_date=day, category=category if category is not None else self.category)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "word": self.text,
            "meaning": self.meaning,
            "category": self.category,
            "date": self.presented_date,
            "source": self.source.value,
        }

    @classmethod
    def from_dict(cls, raw: dict, category: str | None = None) -> "WordEntry":
        text = str(raw.get("word", ""))
        meaning = str(raw.get("meaning", ""))
        stored_category = str(raw.get("category", ""))
        return cls(
            id=str(raw.get("id") or _stable_id(stored_category, text, meaning)),
            text=text,
            meaning=meaning,
            category=category if category is not None else stored_category,
            presented_date=raw.get("date") or None,
            source=WordSource.parse(raw.get("source")),
        )


@dataclass(frozen=True)
class CategoryRecord:
    """Backing record of one category file: {"category": ..., "words": [...]}."""
    display_name: str
    words: List[WordEntry]

    def to_dict(self) -> dict:
        return {"category": self.display_name, "words": [w.to_dict() for w in self.words]}

    @classmethod
    def from_dict(cls, raw: dict) -> "CategoryRecord":
        display_name = str(raw.get("category", ""))
        words = [WordEntry.from_dict(w) for w in raw.get("words") or [] if isinstance(w, dict)]
        return cls(display_name=display_name, words=words)


@dataclass(frozen=True)
class GeneratedWord:
    """A (word, meaning) pair as returned by the AI generator."""
    word: str
    meaning: str
