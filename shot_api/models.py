from typing import Optional

from pydantic import BaseModel, Field

FALLBACK_WIDTH = 800
FALLBACK_HEIGHT = 600


class Viewport(BaseModel):
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    is_mobile: bool = False
    has_touch: bool = False
    device_scale_factor: int = 1

    def to_options(self) -> dict:
        """Viewport in the shape ``page.setViewport`` expects."""
        return {
            "width": self.width,
            "height": self.height,
            "isMobile": self.is_mobile,
            "hasTouch": self.has_touch,
            "deviceScaleFactor": self.device_scale_factor,
        }


DESKTOP_VIEWPORT = Viewport(width=1920, height=1080)


class ScreenshotRequest(BaseModel):
    url: str
    delay_ms: int = Field(0, ge=0)
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    full_page: bool = True

    @property
    def viewport(self) -> Viewport:
        """Explicit size when either dimension is given, desktop otherwise.

        A missing dimension falls back to 800x600 rather than to the desktop
        size.
        """
        if self.width is None and self.height is None:
            return DESKTOP_VIEWPORT
        return Viewport(
            width=self.width or FALLBACK_WIDTH,
            height=self.height or FALLBACK_HEIGHT,
        )


class BatchRequest(BaseModel):
    urls: list[str] = Field(min_length=1)


class CaptureResult(BaseModel):
    source_url: str
    original_index: int = Field(ge=0)
    image_bytes: bytes


class ArchiveEntry(BaseModel):
    entry_name: str
    content: bytes
