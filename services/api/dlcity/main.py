from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from dlcity.api.deps import close_upstream_client, get_registry
from dlcity.api.router import api_router
from dlcity.core.config import settings
from dlcity.core.logging_config import configure_logging
from dlcity.core.otel import init_otel
from dlcity.middleware.allow_origin import AllowAnyOriginMiddleware
from dlcity.middleware.request_id import RequestIdMiddleware
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    registry = get_registry()
    logger.info(
        "%s starting (%d centers, upstream=%s)",
        settings.api_name,
        len(registry),
        settings.upstream_base_url,
    )
    yield
    close_upstream_client()


def mount_static(app: FastAPI, static_dir: str | None) -> bool:
    """Serve the bundled front-end at /static and its index page at /."""
    if not static_dir:
        return False
    root = Path(static_dir)
    if not root.is_dir():
        logger.warning("static dir %s not found; front-end disabled", root)
        return False

    app.mount("/static", StaticFiles(directory=root), name="static")

    index = root / "index.html"
    if index.is_file():

        @app.get("/", include_in_schema=False)
        def index_page() -> FileResponse:
            return FileResponse(index)

    return True


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.api_name, lifespan=lifespan)

    app.add_middleware(RequestIdMiddleware)
    if "*" in settings.cors_origins:
        app.add_middleware(AllowAnyOriginMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-Id"],
    )

    app.include_router(api_router)
    mount_static(app, settings.static_dir)

    init_otel(app)
    return app


app = create_app()


def run() -> None:
    uvicorn.run(
        "dlcity.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
