from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from ..config import FrameConfig
from ..deps import get_frame_config
from ..navigation import PICKER_PATH, build_picker_document, decode_navigation
from ..render import render_document


picker_router = APIRouter(tags=["zodiac"])


# page stays a string: "abc" or "2.5" must clamp, not 422.
@picker_router.api_route(PICKER_PATH, methods=["GET", "POST"], response_class=HTMLResponse)
def zodiac_picker(
    sign: Optional[str] = None,
    page: Optional[str] = None,
    config: FrameConfig = Depends(get_frame_config),
) -> HTMLResponse:
    state = decode_navigation(sign, page)
    document = build_picker_document(
        state,
        image=config.frame_image_url,
        collect_prefix=config.collect_url_prefix,
    )
    return HTMLResponse(content=render_document(document))
