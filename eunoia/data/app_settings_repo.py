from __future__ import annotations

from typing import Optional

from eunoia.data.prefs_repo import PrefsRepo

class AppSettingsRepo:
    NAMESPACE = "app_settings"

    def __init__(self, prefs: PrefsRepo):
        self.prefs = prefs

    def get_api_key(self) -> Optional[str]:
        value = self.prefs.get_json(self.NAMESPACE, "gemini_api_key")
        return str(value) if value else None

    def set_api_key(self, api_key: str) -> None:
        self.prefs.put_json(self.NAMESPACE, "gemini_api_key", api_key)

    def get_last_fetch_date(self) -> Optional[str]:
        value = self.prefs.get_json(self.NAMESPACE, "last_word_fetch_date")
        return str(value) if value else None

    def set_last_fetch_date(self, day: str) -> None:
        self.prefs.put_json(self.NAMESPACE, "last_word_fetch_date", day)
