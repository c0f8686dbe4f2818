"""FrameForms: seeded terrain art rendered as an inline SVG.

The generator is bit-compatible with the JavaScript mulberry32 / FNV-1a pair
so a seed shared between clients always draws the same terrain.
"""

from __future__ import annotations

import base64
import secrets
import string
import urllib.parse
from dataclasses import dataclass
from typing import Callable, Iterator

from .models import FrameButton, FrameDocument


GRID_SIZE = 10
CELL_SIZE = 20
SEED_LENGTH = 8
TERRAIN_PATH = "/api/frameforms"

_MASK32 = 0xFFFFFFFF
_SEED_ALPHABET = string.digits + string.ascii_lowercase


@dataclass(frozen=True)
class TerrainSymbol:
    max: float
    char: str
    color: str


SYMBOLS: tuple[TerrainSymbol, ...] = (
    TerrainSymbol(0.2, ".", "#95a5a6"),  # lowlands
    TerrainSymbol(0.4, "~", "#5dade2"),  # water
    TerrainSymbol(0.6, "^", "#58d68d"),  # hills
    TerrainSymbol(0.8, "#", "#f4d03f"),  # mountains
    TerrainSymbol(1.0, "@", "#e74c3c"),  # peaks
)


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


def string_to_seed(text: str) -> int:
    """32-bit FNV-1a over UTF-16 code units."""
    h = 2166136261
    data = str(text).encode("utf-16-le")
    for i in range(0, len(data), 2):
        h ^= data[i] | (data[i + 1] << 8)
        h = _imul(h, 16777619)
    return h


def mulberry32(seed: int) -> Callable[[], float]:
    state = seed & _MASK32

    def rand() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        return ((t ^ (t >> 14)) & _MASK32) / 4294967296

    return rand


def generate_grid(seed: str, size: int = GRID_SIZE) -> list[list[float]]:
    rand = mulberry32(string_to_seed(seed))
    return [[rand() for _ in range(size)] for _ in range(size)]


def height_to_symbol(height: float) -> TerrainSymbol:
    for symbol in SYMBOLS:
        if height <= symbol.max:
            return symbol
    return SYMBOLS[-1]


def _num(value: float) -> str:
    # Match JavaScript number printing: 10.0 -> "10".
    return str(int(value)) if float(value).is_integer() else repr(float(value))


def _cells(grid: list[list[float]]) -> Iterator[tuple[int, int, TerrainSymbol]]:
    for y, row in enumerate(grid):
        for x, height in enumerate(row):
            yield x, y, height_to_symbol(height)


def render_svg(grid: list[list[float]], cell_size: int = CELL_SIZE) -> str:
    rows = len(grid)
    cols = max((len(row) for row in grid), default=0)
    width = cols * cell_size
    height = rows * cell_size
    rects = ""
    texts = ""
    for x, y, sym in _cells(grid):
        cx = x * cell_size
        cy = y * cell_size
        rects += f'<rect x="{cx}" y="{cy}" width="{cell_size}" height="{cell_size}" fill="{sym.color}" />'
        texts += (
            f'<text x="{_num(cx + cell_size / 2)}" y="{_num(cy + cell_size * 0.7)}" font-family="monospace" '
            f'font-size="14" fill="#1c2833" text-anchor="middle">{sym.char}</text>'
        )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">{rects}{texts}</svg>'
    )


def svg_data_uri(svg: str) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(svg.encode("utf-8")).decode("ascii")


def random_seed(length: int = SEED_LENGTH) -> str:
    return "".join(secrets.choice(_SEED_ALPHABET) for _ in range(length))


def build_terrain_document(
    seed: str,
    next_seed: str,
    base_url: str,
    path: str = TERRAIN_PATH,
) -> FrameDocument:
    grid = generate_grid(seed)
    image = svg_data_uri(render_svg(grid))
    reset_target = f"{base_url}{path}"
    return FrameDocument(
        title="FrameForms Terrain",
        description=f"Seed: {seed}",
        image=image,
        buttons=(
            FrameButton(
                label="Next Terrain",
                action="post",
                target=f"{reset_target}?{urllib.parse.urlencode({'seed': next_seed})}",
            ),
            FrameButton(label="Reset", action="post", target=reset_target),
        ),
    )
