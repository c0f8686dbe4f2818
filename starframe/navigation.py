"""Picker navigation state, carried entirely in the query string.

A request decodes to either a detail view for one sign or a list view for
one page of signs. Nothing is stored between requests, so every target URL
this module produces is a complete description of the next screen.
"""

from __future__ import annotations

import re
import urllib.parse
from dataclasses import dataclass
from typing import Optional, Union

from .models import Category, FrameButton, FrameDocument
from .signs import PAGE_COUNT, get_category, is_zodiac_sign, page_signs


PICKER_PATH = "/api/zodiac"
LIST_TITLE = "Pick your zodiac sign"
LIST_DESCRIPTION = "Select a sign to see its CT‑style fortune."

_LEADING_INT = re.compile(r"\s*([+-]?)([0-9]+)", re.ASCII)
# Anything longer is far past the last page; int() also refuses huge strings.
_MAX_PAGE_DIGITS = 6


@dataclass(frozen=True)
class DetailState:
    sign: str


@dataclass(frozen=True)
class ListState:
    page: int

    @property
    def is_last(self) -> bool:
        return self.page >= PAGE_COUNT


NavigationState = Union[DetailState, ListState]


def parse_page(raw: Optional[str]) -> Optional[int]:
    """Leading integer of ``raw`` (``"3abc"`` -> 3), or None when there is none."""
    if raw is None:
        return None
    match = _LEADING_INT.match(str(raw))
    if not match:
        return None
    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_PAGE_DIGITS:
        digits = "9" * _MAX_PAGE_DIGITS
    value = int(digits)
    return -value if sign == "-" else value


def clamp_page(raw: Optional[str], page_count: int = PAGE_COUNT) -> int:
    page = parse_page(raw)
    if page is None:
        return 1
    return max(1, min(page_count, page))


def decode_navigation(sign: Optional[str], page: Optional[str]) -> NavigationState:
    if sign and is_zodiac_sign(sign):
        return DetailState(sign=sign)
    return ListState(page=clamp_page(page))


def encode_sign_target(sign: str, path: str = PICKER_PATH) -> str:
    return f"{path}?{urllib.parse.urlencode({'sign': sign})}"


def encode_page_target(page: int, path: str = PICKER_PATH) -> str:
    return f"{path}?{urllib.parse.urlencode({'page': int(page)})}"


def detail_buttons(category: Category, path: str = PICKER_PATH) -> list[FrameButton]:
    return [
        FrameButton(label="Pick Another", action="post", target=encode_page_target(1, path)),
        FrameButton(label=f"Collect {category.display_name}", action="link", target=category.collect_url),
    ]


def list_buttons(state: ListState, path: str = PICKER_PATH) -> list[FrameButton]:
    buttons = [
        FrameButton(label=get_category(sign).display_name, action="post", target=encode_sign_target(sign, path))
        for sign in page_signs(state.page)
    ]
    if state.is_last:
        buttons.append(FrameButton(label="Start Over", action="post", target=encode_page_target(1, path)))
    else:
        buttons.append(FrameButton(label="Next", action="post", target=encode_page_target(state.page + 1, path)))
    return buttons


def build_picker_document(
    state: NavigationState,
    image: str = "",
    collect_prefix: str = "",
    path: str = PICKER_PATH,
) -> FrameDocument:
    if isinstance(state, DetailState):
        category = get_category(state.sign, collect_prefix=collect_prefix)
        return FrameDocument(
            title=f"{category.display_name}'s Cosmic Vibe",
            description=category.message,
            image=image,
            buttons=tuple(detail_buttons(category, path)),
        )
    return FrameDocument(
        title=LIST_TITLE,
        description=LIST_DESCRIPTION,
        image=image,
        buttons=tuple(list_buttons(state, path)),
    )
