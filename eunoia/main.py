from __future__ import annotations
import logging

from fastapi import FastAPI

from eunoia.config import Settings, settings as default_settings
from eunoia.db.database import init_db
from eunoia.web.dependencies import build_services
from eunoia.web.routers import home, today, history, quiz, settings as settings_router

logger = logging.getLogger(__name__)

def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

def create_app(settings: Settings = default_settings) -> FastAPI:
    app = FastAPI(title="Eunoia Daily Words")
    app.state.services = build_services(settings)

    @app.on_event("startup")
    def on_startup() -> None:
        configure_logging(settings.LOG_LEVEL)
        init_db(settings)
        if settings.ENABLE_SCHEDULER:
            app.state.services.scheduler.start()
        logger.info("Eunoia started (data dir: %s)", settings.DATA_DIR)

    @app.on_event("shutdown")
    def on_shutdown() -> None:
        app.state.services.scheduler.shutdown()

    app.include_router(home.router)
    app.include_router(today.router)
    app.include_router(history.router)
    app.include_router(quiz.router)
    app.include_router(settings_router.router)
    return app

app = create_app()
