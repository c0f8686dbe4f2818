from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


MAX_FRAME_BUTTONS = 4


class ButtonAction(str, Enum):
    POST = "post"
    LINK = "link"


class FrameButton(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str = Field(..., min_length=1, max_length=256)
    action: ButtonAction = ButtonAction.POST
    # Without a target, a post button re-posts to the frame's own URL.
    target: Optional[str] = None


class FrameDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str = ""
    image: str = ""
    buttons: tuple[FrameButton, ...] = Field(default=(), max_length=MAX_FRAME_BUTTONS)
    body_html: str = ""


class Category(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, max_length=32)
    message: str = ""
    collect_url: str = ""
    pair_address: str = ""

    @property
    def display_name(self) -> str:
        return capitalize(self.key)


def capitalize(text: str) -> str:
    """Upper-case the first character only, leaving the rest untouched."""
    text = str(text or "")
    return text[:1].upper() + text[1:]
