from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import FrameConfig
from ..deps import get_frame_config
from ..render import render_document
from ..terrain import TERRAIN_PATH, build_terrain_document, random_seed


terrain_router = APIRouter(tags=["frameforms"])


@terrain_router.api_route(TERRAIN_PATH, methods=["GET", "POST"], response_class=HTMLResponse)
def frameforms(
    seed: Optional[str] = None,
    config: FrameConfig = Depends(get_frame_config),
) -> HTMLResponse:
    if not seed:
        seed = random_seed()
    document = build_terrain_document(seed, next_seed=random_seed(), base_url=config.base_url)
    return HTMLResponse(content=render_document(document))
