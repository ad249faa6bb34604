import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from profiles_api.core.config import Settings, settings as default_settings
from profiles_api.core.database import build_engine, init_db
from profiles_api.core.errors import register_error_handlers
from profiles_api.core.logs import RequestLogMiddleware, configure_logging
from profiles_api.api import api_router

logger = logging.getLogger("profiles_api")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        engine = build_engine(settings)
        init_db(engine)
        app.state.engine = engine
        logger.info("Database ready (%s)", engine.url.render_as_string(hide_password=True))
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database engine disposed")

    app = FastAPI(title="Profiles API (FastAPI + SQLModel + sessions)", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    @app.get("/")
    def health():
        return {"message": "OK"}

    app.include_router(api_router)
    return app


app = create_app()
