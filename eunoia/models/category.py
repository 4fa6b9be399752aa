from __future__ import annotations
from dataclasses import dataclass

@dataclass(frozen=True)
class CategoryDefinition:
    key: str
    display_name: str
    is_builtin: bool = False

    def to_dict(self) -> dict:
        return {"key": self.key, "displayName": self.display_name, "isDefault": self.is_builtin}

    @classmethod
    def from_dict(cls, raw: dict) -> "CategoryDefinition":
        return cls(key=str(raw["key"]), display_name=str(raw["displayName"]), is_builtin=bool(raw.get("isDefault", False)))


BUILTIN_CATEGORIES: tuple[CategoryDefinition, ...] = (
    CategoryDefinition(key="idiom", display_name="사자성어", is_builtin=True),
    CategoryDefinition(key="proverb", display_name="속담", is_builtin=True),
    CategoryDefinition(key="word", display_name="단어", is_builtin=True),
    CategoryDefinition(key="english", display_name="영어", is_builtin=True),
)
