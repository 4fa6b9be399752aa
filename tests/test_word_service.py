"""
Tests for WordService: adding user words, merging generated words, deleting.
Run: python -m pytest tests/test_word_service.py -v
"""

from datetime import date

import pytest

from eunoia.data.errors import StoreError
from eunoia.models.word import GeneratedWord, WordEntry, WordSource

TODAY = date(2025, 3, 1)


class TestAddUserWord:

    def test_adds_to_builtin_keeping_bundled_words(self, services, record_repo):
        added = services.words.add_user_word("english", " lucid ", " 명료한 ", today=TODAY)

        assert added.text == "lucid"
        assert added.source is WordSource.USER_ADDED
        assert added.presented_date == "2025-03-01"
        assert added.category == "영어"
        texts = [w.text for w in services.categories.load_words("english")]
        assert texts == ["candid", "diligent", "lucid"]
        assert record_repo.exists("english")

    def test_display_name_is_accepted(self, services):
        assert services.words.add_user_word("영어", "lucid", "명료한", today=TODAY) is not None

    def test_duplicate_text_rejected(self, services):
        assert services.words.add_user_word("english", "candid", "다른 뜻", today=TODAY) is None

    @pytest.mark.parametrize("word,meaning", [("", "뜻"), ("단어", "  ")])
    def test_blank_input_raises(self, services, word, meaning):
        with pytest.raises(ValueError):
            services.words.add_user_word("english", word, meaning)

    def test_unknown_category_raises(self, services):
        with pytest.raises(ValueError):
            services.words.add_user_word("nope", "단어", "뜻")

    def test_unreadable_record_is_not_overwritten(self, services, settings):
        path = settings.DATA_DIR / "english.json"
        path.write_text("{broken", encoding="utf-8")
        assert services.words.add_user_word("english", "lucid", "명료한") is None
        assert path.read_text(encoding="utf-8") == "{broken"


class TestAddGeneratedWords:

    def test_skips_existing_and_stamps_today(self, services):
        generated = [
            GeneratedWord("candid", "솔직한"),
            GeneratedWord("lucid", "명료한"),
            GeneratedWord("lucid", "중복"),
            GeneratedWord("", "빈 단어"),
        ]
        added = services.words.add_generated_words("english", generated, today=TODAY)

        assert [w.text for w in added] == ["lucid"]
        assert added[0].source is WordSource.GENERATED
        assert added[0].presented_date == "2025-03-01"
        assert [w.text for w in services.categories.load_words("english")][-1] == "lucid"

    def test_unknown_category_adds_nothing(self, services):
        assert services.words.add_generated_words("nope", [GeneratedWord("a", "b")]) == []


class TestDeleteWord:

    def test_bundled_word_cannot_be_deleted(self, services):
        (bundled, *_rest) = services.categories.load_words("english")
        assert services.words.delete_word(bundled) is False
        assert len(services.categories.load_words("english")) == 2

    def test_delete_cascades_to_history(self, services, history_repo):
        added = services.words.add_user_word("english", "lucid", "명료한", today=TODAY)
        other = WordEntry(text="candid", meaning="솔직한", category="영어", presented_date="2025-03-01")
        history_repo.write([
            added,
            added.presented_on("2025-03-02"),
            other,
        ])

        assert services.words.delete_word(added) is True
        assert "lucid" not in [w.text for w in services.categories.load_words("english")]
        assert history_repo.read() == [other]

    def test_missing_word_reports_failure(self, services):
        ghost = WordEntry(text="ghost", meaning="유령", category="영어", source=WordSource.USER_ADDED)
        assert services.words.delete_word(ghost) is False

    def test_history_failure_restores_word(self, services, history_repo, monkeypatch):
        added = services.words.add_user_word("english", "lucid", "명료한", today=TODAY)
        history_repo.write([added])

        def broken_write(_entries):
            raise StoreError("locked")

        monkeypatch.setattr(history_repo, "write", broken_write)
        assert services.words.delete_word(added) is False
        assert "lucid" in [w.text for w in services.categories.load_words("english")]
