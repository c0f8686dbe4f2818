from __future__ import annotations

import json
import logging
import os
import string
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .signs import DEFAULT_SIGN_PAIRS


logger = logging.getLogger(__name__)

DEFAULT_FRAME_IMAGE_URL = "https://cdn.jsdelivr.net/gh/farcaster/todo/image-placeholder.png"
DEFAULT_BASE_URL = "https://star-race-frame.vercel.app"
DEFAULT_PAIR_URL_TEMPLATE = "https://api.dexscreener.com/latest/dex/pairs/base/{pair}"
DEFAULT_FETCH_TIMEOUT_SECONDS = 5.0


class FrameConfig(BaseModel):
    """Process-wide settings, read once when the app is built."""

    model_config = ConfigDict(frozen=True)

    sign_pairs: Mapping[str, str] = Field(default_factory=lambda: dict(DEFAULT_SIGN_PAIRS), validate_default=True)
    frame_image_url: str = DEFAULT_FRAME_IMAGE_URL
    collect_url_prefix: str = ""
    base_url: str = DEFAULT_BASE_URL
    pair_url_template: str = DEFAULT_PAIR_URL_TEMPLATE
    fetch_timeout_seconds: float = Field(default=DEFAULT_FETCH_TIMEOUT_SECONDS, gt=0)

    @field_validator("sign_pairs", mode="after")
    @classmethod
    def _read_only_pairs(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        # frozen=True only blocks reassignment; the table itself must not change either.
        return MappingProxyType(dict(value))


def _env(environ: Mapping[str, str], name: str) -> str:
    return str(environ.get(name, "") or "").strip()


def _env_float(
    environ: Mapping[str, str],
    name: str,
    default: float,
    min_value: float,
    max_value: float,
) -> float:
    raw = _env(environ, name)
    if not raw:
        value = float(default)
    else:
        try:
            value = float(raw)
        except (TypeError, ValueError):
            logger.warning("ignoring non-numeric %s=%r", name, raw)
            value = float(default)
    return max(min_value, min(max_value, value))


def parse_sign_pairs(raw: str, defaults: Optional[Mapping[str, str]] = None) -> dict[str, str]:
    """Merge a JSON object of sign -> pair address over the defaults.

    Anything that is not a JSON object is logged and ignored.
    """
    pairs = dict(DEFAULT_SIGN_PAIRS if defaults is None else defaults)
    text = str(raw or "").strip()
    if not text:
        return pairs
    try:
        override = json.loads(text)
    except ValueError as exc:
        logger.warning("failed to parse SIGN_PAIRS, using defaults: %s", exc)
        return pairs
    if not isinstance(override, dict):
        logger.warning("SIGN_PAIRS must be a JSON object, got %s; using defaults", type(override).__name__)
        return pairs
    for sign, pair in override.items():
        if pair is None:
            pair = ""
        if not isinstance(pair, str):
            logger.warning("ignoring SIGN_PAIRS entry %r: pair address must be a string", sign)
            continue
        pairs[str(sign).strip().lower()] = pair.strip()
    return pairs


def is_pair_url_template(template: str) -> bool:
    try:
        fields = [field for _, field, _, _ in string.Formatter().parse(template) if field is not None]
        template.format(pair="0x0")
    except (ValueError, KeyError, IndexError):
        return False
    return fields == ["pair"]


def load_config(environ: Optional[Mapping[str, str]] = None) -> FrameConfig:
    env = os.environ if environ is None else environ
    base_url = _env(env, "BASE_URL").rstrip("/") or DEFAULT_BASE_URL
    template = _env(env, "DEXSCREENER_PAIR_URL") or DEFAULT_PAIR_URL_TEMPLATE
    if not is_pair_url_template(template):
        logger.warning("DEXSCREENER_PAIR_URL must contain exactly the {pair} placeholder; using default")
        template = DEFAULT_PAIR_URL_TEMPLATE
    return FrameConfig(
        sign_pairs=parse_sign_pairs(_env(env, "SIGN_PAIRS")),
        frame_image_url=_env(env, "FRAME_IMAGE_URL") or DEFAULT_FRAME_IMAGE_URL,
        collect_url_prefix=_env(env, "COLLECT_URL_PREFIX"),
        base_url=base_url,
        pair_url_template=template,
        fetch_timeout_seconds=_env_float(
            env,
            "STARFRAME_FETCH_TIMEOUT_SECONDS",
            default=DEFAULT_FETCH_TIMEOUT_SECONDS,
            min_value=0.5,
            max_value=30.0,
        ),
    )
