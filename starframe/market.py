"""DEX Screener market caps and the Star Race leaderboard built from them."""

from __future__ import annotations

import asyncio
import logging
import math
import urllib.parse
from html import escape as html_escape
from typing import Any, Mapping, Optional

import aiohttp

from .config import DEFAULT_FETCH_TIMEOUT_SECONDS, DEFAULT_PAIR_URL_TEMPLATE, FrameConfig
from .models import FrameButton, FrameDocument, capitalize
from .signs import AGGREGATE_SIGN, collect_url_for


logger = logging.getLogger(__name__)

USER_AGENT = "StarFrame/1.0 (+https://star-race-frame.vercel.app)"
NO_LEADER = ("N/A", 0)


def _coerce_market_cap(payload: Any) -> float:
    if not isinstance(payload, dict):
        return 0
    pair = payload.get("pair")
    if not isinstance(pair, dict):
        return 0
    value = pair.get("marketCap")
    # bool is an int subclass but never a market cap.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if not math.isfinite(value):
        return 0
    return value


async def fetch_market_cap(
    session: aiohttp.ClientSession,
    pair_address: Optional[str],
    url_template: str = DEFAULT_PAIR_URL_TEMPLATE,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
) -> float:
    """Market cap in USD for one pair, or 0 when it cannot be determined."""
    if not pair_address:
        return 0
    try:
        url = url_template.format(pair=urllib.parse.quote(str(pair_address), safe=""))
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=timeout_seconds)) as resp:
            if resp.status < 200 or resp.status >= 300:
                logger.debug("dexscreener %s returned HTTP %s", pair_address, resp.status)
                return 0
            payload = await resp.json(content_type=None)
    except Exception as e:
        logger.debug("dexscreener %s unreachable: %s", pair_address, type(e).__name__)
        return 0
    return _coerce_market_cap(payload)


async def fetch_all_market_caps(
    pairs: Mapping[str, str],
    *,
    url_template: str = DEFAULT_PAIR_URL_TEMPLATE,
    timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
    session: Optional[aiohttp.ClientSession] = None,
) -> dict[str, float]:
    """Look up every pair concurrently; waits for all of them to settle."""
    entries = list(pairs.items())
    owns_session = session is None
    if owns_session:
        session = aiohttp.ClientSession(headers={"User-Agent": USER_AGENT})
    try:
        caps = await asyncio.gather(
            *(fetch_market_cap(session, pair, url_template, timeout_seconds) for _, pair in entries)
        )
    finally:
        if owns_session:
            await session.close()
    return {sign: cap for (sign, _), cap in zip(entries, caps)}


async def fetch_config_market_caps(
    config: FrameConfig,
    session: Optional[aiohttp.ClientSession] = None,
) -> dict[str, float]:
    return await fetch_all_market_caps(
        config.sign_pairs,
        url_template=config.pair_url_template,
        timeout_seconds=config.fetch_timeout_seconds,
        session=session,
    )


def rank_market_caps(caps: Mapping[str, float], exclude: str = AGGREGATE_SIGN) -> list[tuple[str, float]]:
    # sorted() is stable, so equal caps keep snapshot order.
    rows = [(sign, cap) for sign, cap in caps.items() if sign != exclude]
    return sorted(rows, key=lambda row: row[1], reverse=True)


def leader(ranked: list[tuple[str, float]]) -> tuple[str, float]:
    return ranked[0] if ranked else NO_LEADER


def format_market_cap(value: float) -> str:
    """en-US grouping with at most three decimals: 1234567.5 -> '1,234,567.5'."""
    value = float(value or 0)
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def ranking_lines(ranked: list[tuple[str, float]]) -> list[str]:
    return [f"{idx}. {capitalize(sign)} – ${format_market_cap(cap)}" for idx, (sign, cap) in enumerate(ranked, start=1)]


def build_leaderboard_document(caps: Mapping[str, float], config: FrameConfig) -> FrameDocument:
    ranked = rank_market_caps(caps)
    leader_sign, leader_cap = leader(ranked)
    name = capitalize(leader_sign)
    rankings = html_escape("\n".join(ranking_lines(ranked)))
    return FrameDocument(
        title=f"{name} is leading the Star Race!",
        description=f"Market Cap: ${format_market_cap(leader_cap)}\nClick refresh for latest stats.",
        image=config.frame_image_url,
        buttons=(
            FrameButton(label="Refresh Rankings", action="post"),
            FrameButton(
                label=f"Collect {name}",
                action="link",
                target=collect_url_for(leader_sign, config.collect_url_prefix),
            ),
        ),
        body_html=f'<pre style="white-space: pre-wrap; margin: 0;">{rankings}</pre>',
    )
