from __future__ import annotations

import argparse
import logging
import os
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse

from .api.leaderboard_routes import leaderboard_router
from .api.picker_routes import picker_router
from .api.terrain_routes import terrain_router
from .config import FrameConfig, load_config
from .logging_config import setup_logging


logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"


def create_app(config: Optional[FrameConfig] = None) -> FastAPI:
    app = FastAPI(title="Star Frames", version=APP_VERSION)
    app.state.frame_config = config if config is not None else load_config()
    app.include_router(leaderboard_router)
    app.include_router(picker_router)
    app.include_router(terrain_router)

    @app.middleware("http")
    async def frame_no_cache_headers(request: Request, call_next):
        response = await call_next(request)
        if response.headers.get("content-type", "").startswith("text/html"):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, max-age=0"
        return response

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception) -> PlainTextResponse:
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return PlainTextResponse("Internal error", status_code=500)

    @app.get("/health")
    def health() -> dict:
        return {"ok": True, "service": "starframe"}

    return app


def run() -> None:
    import uvicorn

    parser = argparse.ArgumentParser(description="Serve the Star Frames handlers")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "3000")))
    args = parser.parse_args()
    logger.info("star frames listening on %s:%s", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port, log_config=None)


setup_logging()
app = create_app()
