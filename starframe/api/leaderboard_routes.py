from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import FrameConfig
from ..deps import MarketFetcher, get_frame_config, get_market_fetcher
from ..market import build_leaderboard_document
from ..render import render_document


logger = logging.getLogger(__name__)

leaderboard_router = APIRouter(tags=["leaderboard"])


async def _leaderboard_html(config: FrameConfig, fetch: MarketFetcher) -> HTMLResponse:
    caps = await fetch(config)
    document = build_leaderboard_document(caps, config)
    logger.info("star race leader: %s", document.title)
    return HTMLResponse(content=render_document(document))


@leaderboard_router.api_route("/", methods=["GET", "POST"], response_class=HTMLResponse)
async def star_race(
    config: FrameConfig = Depends(get_frame_config),
    fetch: MarketFetcher = Depends(get_market_fetcher),
) -> HTMLResponse:
    return await _leaderboard_html(config, fetch)


@leaderboard_router.post("/refresh", response_class=HTMLResponse)
async def star_race_refresh(
    config: FrameConfig = Depends(get_frame_config),
    fetch: MarketFetcher = Depends(get_market_fetcher),
) -> HTMLResponse:
    return await _leaderboard_html(config, fetch)


@leaderboard_router.api_route("/api/frame", methods=["GET", "POST"], response_class=HTMLResponse)
async def star_race_frame(
    config: FrameConfig = Depends(get_frame_config),
    fetch: MarketFetcher = Depends(get_market_fetcher),
) -> HTMLResponse:
    return await _leaderboard_html(config, fetch)
