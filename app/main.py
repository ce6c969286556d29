from contextlib import asynccontextmanager

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app import config
from app.api import articles
from app.api import comments as comments_api
from app.api import endpoints as endpoints_api
from app.api import topics as topics_api
from app.api import users as users_api
from app.core.errors import register_error_handlers
from app.db import pool as db_pool
from app.db import sa as db_sa


logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.DB_CREATE_SCHEMA:
        # Idempotent; externally managed schemas just log a warning
        await db_sa.create_schema(config.DB_DSN)
    app.state.db_pool = await db_pool.connect_db(config.DB_DSN)
    try:
        yield
    finally:
        await db_pool.close_db(app.state.db_pool)
        app.state.db_pool = None


def create_app() -> FastAPI:
    application = FastAPI(
        title="NC News API",
        lifespan=lifespan,
        root_path=config.ROOT_PATH,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(application)

    application.include_router(endpoints_api.router)
    application.include_router(topics_api.router)
    application.include_router(articles.router)
    application.include_router(comments_api.router)
    application.include_router(users_api.router)
    return application


app = create_app()

# Basic logging configuration (can be overridden by server config)
logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
