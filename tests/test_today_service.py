"""
Tests for TodayWordService (today's words per category).
Run: python -m pytest tests/test_today_service.py -v
"""

from datetime import date

from eunoia.data.errors import StoreError
from eunoia.models.word import CategoryRecord, WordEntry, WordSource

JAN_10 = date(2025, 1, 10)  # day-of-year 10


def _word(text, source, day=None, category="사자성어"):
    return WordEntry(text=text, meaning=f"{text} 뜻", category=category, presented_date=day, source=source)


class TestBundledWindow:

    def test_rotating_window_over_bundled_words(self, services, bundled_idioms):
        words = [w for w in services.today.today_words(JAN_10) if w.category == "사자성어"]

        # start = (10 * 5) % 7 = 1
        assert [w.text for w in words] == [text for text, _ in bundled_idioms[1:6]]
        assert all(w.presented_date == "2025-01-10" for w in words)
        assert all(w.source is WordSource.BUNDLED for w in words)

    def test_window_does_not_wrap(self, services):
        words = services.today.select_for_category(
            [_word(str(i), WordSource.BUNDLED) for i in range(7)], "사자성어", date(2025, 1, 1)
        )
        # start = (1 * 5) % 7 = 5, only two entries left before the end.
        assert [w.text for w in words] == ["5", "6"]

    def test_same_day_is_reproducible(self, services):
        first = services.today.today_words(JAN_10)
        second = services.today.today_words(JAN_10)
        assert first == second

    def test_empty_category_contributes_nothing(self, services):
        words = services.today.today_words(JAN_10)
        assert not [w for w in words if w.category in ("속담", "단어")]


class TestPriority:

    def test_five_generated_today_means_no_bundled_fill(self, services):
        generated = [_word(f"ai{i}", WordSource.GENERATED, "2025-01-10") for i in range(5)]
        bundled = [_word(f"b{i}", WordSource.BUNDLED) for i in range(10)]

        picked = services.today.select_for_category(generated + bundled, "사자성어", JAN_10)
        assert [w.text for w in picked] == [f"ai{i}" for i in range(5)]

    def test_generated_before_user_and_capped(self, services):
        user = [_word(f"u{i}", WordSource.USER_ADDED, "2025-01-10") for i in range(3)]
        generated = [_word(f"ai{i}", WordSource.GENERATED, "2025-01-10") for i in range(4)]

        picked = services.today.select_for_category(user + generated, "사자성어", JAN_10)
        assert [w.text for w in picked] == ["ai0", "ai1", "ai2", "ai3", "u0"]

    def test_older_generated_words_are_not_priority(self, services):
        old = _word("old", WordSource.GENERATED, "2025-01-09")
        bundled = [_word(f"b{i}", WordSource.BUNDLED) for i in range(3)]

        picked = services.today.select_for_category([old] + bundled, "사자성어", JAN_10)
        # start = 50 % 3 = 2
        assert [w.text for w in picked] == ["b2"]

    def test_partial_fill_after_today_words(self, services):
        user = [_word("mine", WordSource.USER_ADDED, "2025-01-10")]
        bundled = [_word(f"b{i}", WordSource.BUNDLED) for i in range(20)]

        picked = services.today.select_for_category(user + bundled, "사자성어", JAN_10)
        # start = 50 % 20 = 10, four slots left
        assert [w.text for w in picked] == ["mine", "b10", "b11", "b12", "b13"]

    def test_words_from_local_record_are_used(self, services, record_repo):
        record_repo.write("proverb", CategoryRecord("속담", [
            WordEntry(text="티끌 모아 태산", meaning="작은 것도 모이면 큼", category="속담",
                      presented_date="2025-01-10", source=WordSource.USER_ADDED),
        ]))
        words = [w for w in services.today.today_words(JAN_10) if w.category == "속담"]
        assert [w.text for w in words] == ["티끌 모아 태산"]


class TestFailures:

    def test_one_broken_category_does_not_stop_the_rest(self, services, monkeypatch):
        original = services.categories.read_words

        def flaky(key):
            if key == "idiom":
                raise StoreError("corrupt")
            return original(key)

        monkeypatch.setattr(services.categories, "read_words", flaky)
        words = services.today.today_words(JAN_10)
        assert {w.category for w in words} == {"영어"}
