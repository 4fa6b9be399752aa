from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from fastapi import Request

from eunoia.config import Settings
from eunoia.data.app_settings_repo import AppSettingsRepo
from eunoia.data.category_repo import CustomCategoryRepo
from eunoia.data.history_repo import HistoryRepo
from eunoia.data.ledger_repo import ExposureLedgerRepo
from eunoia.data.prefs_repo import PrefsRepo
from eunoia.data.word_file_repo import BundledWordRepo, CategoryRecordRepo
from eunoia.models.word import WordEntry, WordSource
from eunoia.service.category_service import CategoryService
from eunoia.service.daily_fetch_service import DailyWordFetcher
from eunoia.service.generation_service import GeminiWordGenerator
from eunoia.service.history_service import HistoryService
from eunoia.service.quiz_service import QuizService
from eunoia.service.scheduler import DailyFetchScheduler
from eunoia.service.today_service import TodayWordService
from eunoia.service.word_service import WordService

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

@dataclass
class Services:
    settings: Settings
    app_settings: AppSettingsRepo
    categories: CategoryService
    words: WordService
    today: TodayWordService
    history: HistoryService
    quiz: QuizService
    fetcher: DailyWordFetcher
    scheduler: DailyFetchScheduler

def build_services(settings: Settings) -> Services:
    prefs = PrefsRepo(settings.DB_PATH)
    app_settings = AppSettingsRepo(prefs)
    history_repo = HistoryRepo(prefs)
    record_repo = CategoryRecordRepo(settings.DATA_DIR)

    categories = CategoryService(CustomCategoryRepo(prefs), record_repo, BundledWordRepo(settings.ASSET_DIR), history_repo)
    words = WordService(categories, record_repo, history_repo)
    generator = GeminiWordGenerator(app_settings.get_api_key, settings.GEMINI_MODELS)
    fetcher = DailyWordFetcher(app_settings, categories, words, generator)

    return Services(
        settings=settings,
        app_settings=app_settings,
        categories=categories,
        words=words,
        today=TodayWordService(categories, per_category=settings.TODAY_WORDS_PER_CATEGORY),
        history=HistoryService(history_repo, categories, limit=settings.HISTORY_LIMIT),
        quiz=QuizService(history_repo, ExposureLedgerRepo(prefs), batch_size=settings.QUIZ_BATCH_SIZE),
        fetcher=fetcher,
        scheduler=DailyFetchScheduler(fetcher, hour=settings.DAILY_FETCH_HOUR, minute=settings.DAILY_FETCH_MINUTE),
    )

def get_services(request: Request) -> Services:
    return request.app.state.services

def entry_from_form(word: str, meaning: str, category: str, source: str, date: Optional[str]) -> WordEntry:
    return WordEntry(text=word, meaning=meaning, category=category, presented_date=date or None, source=WordSource.parse(source))

def category_url(base: str, category: str | None) -> str:
    return f"{base}?category={quote(category)}" if category else base
