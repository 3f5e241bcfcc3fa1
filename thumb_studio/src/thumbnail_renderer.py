"""1280x720 thumbnail preview: background and title composition."""
from __future__ import annotations

from functools import lru_cache
import logging
from typing import Any, Awaitable, Callable, Coroutine, Optional, Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFilter, ImageFont

from .image_source import ImagePayload, decode_image
from .logger_setup import get_logger

SURFACE_SIZE: Tuple[int, int] = (1280, 720)

# Corner-to-corner stops: dark teal into navy.
GRADIENT_STOPS: Tuple[Tuple[float, Tuple[int, int, int]], ...] = (
    (0.0, (19, 78, 94)),
    (0.55, (31, 41, 55)),
    (1.0, (17, 24, 39)),
)
ACCENT_FILL = (255, 255, 255, 15)
OVERLAY_TOP_ALPHA = 0.15
OVERLAY_BOTTOM_ALPHA = 0.5

MAX_TITLE_CHARS = 25
ELLIPSIS = "..."
CAPTION = "¡No te lo pierdas!"

TEXT_LEFT = 80
TITLE_BASELINE_OFFSET = 160
CAPTION_BASELINE_OFFSET = 100
TITLE_FONT_SIZE = 72
CAPTION_FONT_SIZE = 36
TITLE_FILL = (255, 255, 255, 255)
CAPTION_FILL = (255, 255, 255, 230)
SHADOW_FILL = (0, 0, 0, 204)
SHADOW_BLUR = 12

TITLE_FONTS = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "Arial-BoldMT.ttf",
    "Arial.ttf",
)
CAPTION_FONTS = (
    "DejaVuSans-Bold.ttf",
    "LiberationSans-Bold.ttf",
    "Arial Bold.ttf",
    "Arial.ttf",
)

Decoder = Callable[[ImagePayload], Awaitable[Image.Image]]


@lru_cache(maxsize=8)
def _pick_font(size: int, candidates: Sequence[str]) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for font_name in candidates:
        try:
            return ImageFont.truetype(font_name, size)
        except OSError:
            continue
    return ImageFont.load_default(size=size)


def new_surface() -> Image.Image:
    return Image.new("RGBA", SURFACE_SIZE, (0, 0, 0, 0))


def _new_frame() -> Image.Image:
    return Image.new("RGBA", SURFACE_SIZE, (0, 0, 0, 255))


def _check_surface(surface: Image.Image) -> None:
    if surface.size != SURFACE_SIZE:
        raise ValueError(f"Render surface must be {SURFACE_SIZE[0]}x{SURFACE_SIZE[1]}, got {surface.size}")


def _diagonal_gradient(size: Tuple[int, int]) -> Image.Image:
    width, height = size
    x = np.arange(width, dtype=np.float32)[None, :]
    y = np.arange(height, dtype=np.float32)[:, None]
    # Projection of every pixel onto the (0, 0) -> (width, height) axis.
    t = (x * width + y * height) / float(width * width + height * height)
    positions = [pos for pos, _ in GRADIENT_STOPS]
    channels = [np.interp(t, positions, [color[i] for _, color in GRADIENT_STOPS]) for i in range(3)]
    rgb = np.clip(np.dstack(channels), 0, 255).astype(np.uint8)
    return Image.fromarray(rgb).convert("RGBA")


def _accent_layer(size: Tuple[int, int]) -> Image.Image:
    width, height = size
    layer = Image.new("RGBA", size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    cx, cy, radius = width * 0.3, height * 0.4, height * 0.3
    draw.ellipse([(cx - radius, cy - radius), (cx + radius, cy + radius)], fill=ACCENT_FILL)
    draw.rectangle([(width - 540, 60), (width - 60, height - 60)], fill=ACCENT_FILL)
    return layer


def _vertical_shade(size: Tuple[int, int]) -> Image.Image:
    width, height = size
    alpha = np.linspace(OVERLAY_TOP_ALPHA, OVERLAY_BOTTOM_ALPHA, height, dtype=np.float32) * 255
    rgba = np.zeros((height, width, 4), dtype=np.uint8)
    rgba[..., 3] = np.round(alpha).astype(np.uint8)[:, None]
    return Image.fromarray(rgba)


def compose_background(frame: Image.Image, image: Optional[Image.Image] = None) -> None:
    """Draw the procedural or photo background into an RGBA frame.

    Without an image the frame gets the diagonal gradient plus two faint
    accent shapes. With an image, the image is stretched over the whole frame
    and darkened towards the bottom so the title stays legible. Either way
    the frame ends fully opaque.
    """
    size = frame.size
    if image is None:
        frame.paste(_diagonal_gradient(size))
        frame.alpha_composite(_accent_layer(size))
        return

    base = Image.new("RGBA", size, (0, 0, 0, 255))
    base.alpha_composite(image.convert("RGBA").resize(size, Image.Resampling.LANCZOS))
    frame.paste(base)
    frame.alpha_composite(_vertical_shade(size))


def visible_title(text: str) -> str:
    short = text[:MAX_TITLE_CHARS] + ELLIPSIS if len(text) > MAX_TITLE_CHARS else text
    return short.upper()


def compose_text(frame: Image.Image, title_text: str) -> None:
    """Draw the shadowed title and the fixed caption near the bottom-left."""
    _, height = frame.size
    title = visible_title(title_text)
    title_font = _pick_font(TITLE_FONT_SIZE, TITLE_FONTS)
    caption_font = _pick_font(CAPTION_FONT_SIZE, CAPTION_FONTS)
    title_xy = (TEXT_LEFT, height - TITLE_BASELINE_OFFSET)

    shadow = Image.new("RGBA", frame.size, (0, 0, 0, 0))
    ImageDraw.Draw(shadow).text(title_xy, title, font=title_font, fill=SHADOW_FILL, anchor="ls")
    # A canvas shadow blur of N spreads roughly like a gaussian with sigma N/2.
    frame.alpha_composite(shadow.filter(ImageFilter.GaussianBlur(radius=SHADOW_BLUR / 2)))

    layer = Image.new("RGBA", frame.size, (0, 0, 0, 0))
    draw = ImageDraw.Draw(layer)
    draw.text(title_xy, title, font=title_font, fill=TITLE_FILL, anchor="ls")
    draw.text(
        (TEXT_LEFT, height - CAPTION_BASELINE_OFFSET),
        CAPTION,
        font=caption_font,
        fill=CAPTION_FILL,
        anchor="ls",
    )
    frame.alpha_composite(layer)


class ThumbnailRenderer:
    """Draws thumbnail previews into a caller-owned surface.

    Every request takes a new token when it is issued. A background decode
    that finishes after a newer request was issued is dropped, so the surface
    always ends up showing the most recently requested inputs.
    """

    def __init__(self, decoder: Decoder = decode_image, logger: Optional[logging.Logger] = None) -> None:
        self._decoder = decoder
        self._token = 0
        self.logger = logger or get_logger(__name__)

    @property
    def current_token(self) -> int:
        return self._token

    def _next_token(self) -> int:
        self._token += 1
        return self._token

    def render(self, surface: Image.Image, title_text: str) -> int:
        """Procedural background plus text; done when this returns."""
        _check_surface(surface)
        token = self._next_token()
        frame = _new_frame()
        compose_background(frame)
        compose_text(frame, title_text)
        surface.paste(frame)
        return token

    def render_with_image(
        self,
        surface: Image.Image,
        title_text: str,
        payload: ImagePayload,
    ) -> Coroutine[Any, Any, bool]:
        """Issue a photo-background request; await the result to finish it.

        Resolves to ``True`` when the surface was updated and ``False`` when
        the payload could not be decoded or the request was superseded.
        """
        _check_surface(surface)
        token = self._next_token()
        return self._render_decoded(token, surface, title_text, payload)

    async def _render_decoded(
        self,
        token: int,
        surface: Image.Image,
        title_text: str,
        payload: ImagePayload,
    ) -> bool:
        try:
            image = await self._decoder(payload)
        except (OSError, ValueError) as exc:
            self.logger.warning("Background image could not be decoded (request %d): %s", token, exc)
            return False

        if token != self._token:
            self.logger.info("Dropping stale background for request %d (current %d)", token, self._token)
            return False

        frame = _new_frame()
        compose_background(frame, image)
        compose_text(frame, title_text)
        surface.paste(frame)
        return True
