"""Static zodiac tables shared by every frame.

The tables are data: a new wording or ordering is a new table, not a new
handler.
"""

from __future__ import annotations

from typing import Mapping

from .models import Category


AGGREGATE_SIGN = "starfolio"
DEFAULT_COLLECT_URL = "https://zora.co/@starfolio"
PAGE_SIZE = 3

ZODIAC_SIGNS: tuple[str, ...] = (
    "aries",
    "taurus",
    "gemini",
    "cancer",
    "leo",
    "virgo",
    "libra",
    "scorpio",
    "sagittarius",
    "capricorn",
    "aquarius",
    "pisces",
)

# Crypto-Twitter flavoured captions shown in the picker detail view.
SIGN_MESSAGES: dict[str, str] = {
    "aries": "Aries apes into every new mint like they're slaying a boss, then asks 'When Lambo?' 30 minutes later.",
    "taurus": "Taurus hodlers treat bear markets like a buffet—accumulation season never ends for these stubborn bulls.",
    "gemini": "Gemini holders represent duality of holding forever and buying more.",
    "cancer": "Cancer stashes their bags like a crab; sideways markets are their natural habitat and they love it.",
    "leo": "Leo calls their bag the king of NFTs and expects everyone else to bow to their floor price.",
    "virgo": "Virgo holders annotate their wallet activity with spreadsheets; analysis paralysis but make it crypto.",
    "libra": "Libra can’t decide between staking and farming, so they do both and call it a balanced portfolio.",
    "scorpio": "Scorpio investors buy your bags in silence and sell in revenge; trust them at your own risk.",
    "sagittarius": "Sagittarius sets off on every airdrop quest like a cosmic crusade—no risk too far, no wallet too degen.",
    "capricorn": "Capricorns treat yield farming like a 9‑to‑9 job—always grinding, even when the market’s asleep.",
    "aquarius": "Aquarius invents new chains in their mind and shills them before the whitepaper even exists.",
    "pisces": "Pisces believe in cosmic charts and RSI alignment; if Mercury’s in retrograde, they blame the red candles.",
}

# DEX Screener pair addresses on Base. Only the aggregate token is listed today;
# the rest are filled in through SIGN_PAIRS.
DEFAULT_SIGN_PAIRS: dict[str, str] = {
    **{sign: "" for sign in ZODIAC_SIGNS},
    AGGREGATE_SIGN: "0x4b1b272ff22ea03dbb6d5f0f8c3820b4e70eab76f2937c91c3ac0d6aebed9056",
}


def paginate(keys: tuple[str, ...], size: int = PAGE_SIZE) -> tuple[tuple[str, ...], ...]:
    if size < 1:
        raise ValueError("page size must be positive")
    return tuple(tuple(keys[i : i + size]) for i in range(0, len(keys), size))


SIGN_PAGES = paginate(ZODIAC_SIGNS)
PAGE_COUNT = len(SIGN_PAGES)


def is_zodiac_sign(value: object) -> bool:
    return isinstance(value, str) and value in SIGN_MESSAGES


def page_signs(page: int) -> tuple[str, ...]:
    """Signs on a 1-based page. Callers clamp first."""
    return SIGN_PAGES[page - 1]


def collect_url_for(sign: str, prefix: str = "") -> str:
    prefix = str(prefix or "").strip()
    if not prefix:
        return DEFAULT_COLLECT_URL
    if not sign or sign == "N/A":
        return prefix
    return f"{prefix}{sign}"


def get_category(sign: str, pairs: Mapping[str, str] | None = None, collect_prefix: str = "") -> Category:
    lookup = DEFAULT_SIGN_PAIRS if pairs is None else pairs
    return Category(
        key=sign,
        message=SIGN_MESSAGES.get(sign, ""),
        collect_url=collect_url_for(sign, collect_prefix),
        pair_address=str(lookup.get(sign, "") or ""),
    )
