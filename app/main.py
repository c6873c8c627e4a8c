# app/main.py
from contextlib import asynccontextmanager

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger

from . import auth, kv, products, users
from .config import Settings, get_settings
from .database import engine
from .middleware import configure_logging, log_and_recover, track


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    logger.info("Starting server on {}:{}", settings.api_host, settings.api_port)
    logger.info("DB routes: {}, Redis routes: {}", settings.enable_db, settings.enable_redis)

    yield

    await engine.dispose()
    logger.info("Server stopped")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Tour Server",
        description="Routing, forms, uploads, product CRUD and a Redis client",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    # handlers resolve settings through get_settings, so route them to this instance
    app.dependency_overrides[get_settings] = lambda: settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(log_and_recover)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Hello, World!"

    @app.get("/middle", response_class=PlainTextResponse, dependencies=[Depends(track)])
    async def middle():
        return "/middle"

    app.include_router(users.router)
    app.include_router(auth.router)
    if settings.enable_db:
        app.include_router(products.router)
    if settings.enable_redis:
        app.include_router(kv.router)

    app.mount("/static", StaticFiles(directory=settings.static_dir), name="static")
    return app


app = create_app()


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run("app.main:app", host=settings.api_host, port=settings.api_port, reload=settings.api_reload)
