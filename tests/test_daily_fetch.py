"""
Tests for the daily fetch job and its scheduler wrapper.
Run: python -m pytest tests/test_daily_fetch.py -v
"""

from datetime import date
from unittest.mock import MagicMock

from apscheduler.schedulers.background import BackgroundScheduler

from eunoia.models.word import GeneratedWord, WordSource
from eunoia.service.daily_fetch_service import DailyWordFetcher
from eunoia.service.scheduler import JOB_ID, DailyFetchScheduler

TODAY = date(2025, 3, 1)


class FakeGenerator:
    def __init__(self, words=None):
        self.words = words or {}
        self.calls = []

    def generate(self, category, excluding):
        self.calls.append((category, list(excluding)))
        return self.words.get(category, [])


def _fetcher(services, generator):
    return DailyWordFetcher(services.app_settings, services.categories, services.words, generator, pause_seconds=0)


class TestDailyWordFetcher:

    def test_skipped_without_api_key(self, services):
        generator = FakeGenerator()
        assert _fetcher(services, generator).run(today=TODAY) == {}
        assert generator.calls == []

    def test_adds_generated_words_and_records_date(self, services):
        services.app_settings.set_api_key("key")
        generator = FakeGenerator({"영어": [GeneratedWord("lucid", "명료한"), GeneratedWord("candid", "솔직한")]})

        summary = _fetcher(services, generator).run(today=TODAY)

        assert summary == {"idiom": 0, "proverb": 0, "word": 0, "english": 1}
        assert services.app_settings.get_last_fetch_date() == "2025-03-01"
        lucid = services.categories.load_words("english")[-1]
        assert (lucid.text, lucid.source, lucid.presented_date) == ("lucid", WordSource.GENERATED, "2025-03-01")
        assert ("영어", ["candid", "diligent"]) in generator.calls

    def test_generated_words_lead_today_list(self, services):
        services.app_settings.set_api_key("key")
        _fetcher(services, FakeGenerator({"영어": [GeneratedWord("lucid", "명료한")]})).run(today=TODAY)

        english = [w for w in services.today.today_words(TODAY) if w.category == "영어"]
        assert english[0].text == "lucid"

    def test_runs_once_per_day_unless_forced(self, services):
        services.app_settings.set_api_key("key")
        generator = FakeGenerator()
        fetcher = _fetcher(services, generator)

        fetcher.run(today=TODAY)
        first = len(generator.calls)
        fetcher.run(today=TODAY)
        assert len(generator.calls) == first
        fetcher.run(force=True, today=TODAY)
        assert len(generator.calls) == 2 * first

    def test_user_categories_are_not_fetched(self, services):
        services.app_settings.set_api_key("key")
        services.categories.create_category("IT 용어")
        generator = FakeGenerator({"IT 용어": [GeneratedWord("API", "응용 프로그램 인터페이스")]})

        summary = _fetcher(services, generator).run(today=TODAY)

        assert [category for category, _ in generator.calls] == ["사자성어", "속담", "단어", "영어"]
        assert "it_용어" not in summary
        assert services.categories.load_words("it_용어") == []


class TestScheduler:

    def test_offline_run_is_skipped(self):
        fetcher = MagicMock()
        DailyFetchScheduler(fetcher, network_check=lambda: False).run_job(force=True)
        fetcher.run.assert_not_called()

    def test_online_run_forwards_force(self):
        fetcher = MagicMock()
        DailyFetchScheduler(fetcher, network_check=lambda: True).run_job(force=True)
        fetcher.run.assert_called_once_with(force=True)

    def test_job_failure_is_contained(self):
        fetcher = MagicMock()
        fetcher.run.side_effect = RuntimeError("boom")
        DailyFetchScheduler(fetcher, network_check=lambda: True).run_job()

    def test_start_registers_daily_cron_job(self):
        scheduler = DailyFetchScheduler(MagicMock(), hour=9, minute=0, scheduler=BackgroundScheduler())
        scheduler.start()
        try:
            job = scheduler.scheduler.get_job(JOB_ID)
            assert job is not None
            assert "hour='9'" in str(job.trigger)
        finally:
            scheduler.shutdown()
        assert not scheduler.running
