from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Request

from .config import FrameConfig
from .market import fetch_config_market_caps


MarketFetcher = Callable[[FrameConfig], Awaitable[dict[str, float]]]


def get_frame_config(request: Request) -> FrameConfig:
    # create_app() stores the config; there is no per-request fallback.
    return request.app.state.frame_config


def get_market_fetcher() -> MarketFetcher:
    return fetch_config_market_caps
