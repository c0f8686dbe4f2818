from __future__ import annotations

from html import escape as html_escape
from typing import Iterable

from .models import MAX_FRAME_BUTTONS, FrameButton, FrameDocument


FRAME_VERSION = "vNext"


def _meta_property(prop: str, content: str) -> str:
    return f'<meta property="{prop}" content="{html_escape(str(content))}" />\n'


def _meta_name(name: str, content: str) -> str:
    return f'<meta name="{name}" content="{html_escape(str(content))}" />\n'


def render_frame(
    title: str,
    description: str,
    image: str,
    buttons: Iterable[FrameButton] = (),
    body_html: str = "",
) -> str:
    """Serialize a frame into an HTML document.

    Emits one og:title, og:description, fc:frame and fc:frame:image tag,
    then a label/action(/target) group per button numbered from 1 in the
    given order. Text is escaped; ``body_html`` is trusted markup.
    """
    buttons = list(buttons)
    if len(buttons) > MAX_FRAME_BUTTONS:
        raise ValueError(f"frames allow at most {MAX_FRAME_BUTTONS} buttons, got {len(buttons)}")

    meta = ""
    meta += _meta_property("og:title", title)
    meta += _meta_property("og:description", description)
    meta += _meta_name("fc:frame", FRAME_VERSION)
    meta += _meta_name("fc:frame:image", image)
    for idx, button in enumerate(buttons, start=1):
        action = getattr(button.action, "value", button.action)
        meta += _meta_name(f"fc:frame:button:{idx}", button.label)
        meta += _meta_name(f"fc:frame:button:{idx}:action", action)
        if button.target:
            meta += _meta_name(f"fc:frame:button:{idx}:target", button.target)
    return f'<!DOCTYPE html><html><head><meta charset="utf-8" />\n{meta}</head><body>{body_html}</body></html>'


def render_document(document: FrameDocument) -> str:
    return render_frame(
        document.title,
        document.description,
        document.image,
        document.buttons,
        body_html=document.body_html,
    )
