"""Interactive session state: topic, titles, suggestions and the preview."""
from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional

from PIL import Image

from .image_source import ImagePayload
from .logger_setup import get_logger
from .thumbnail_renderer import ThumbnailRenderer, new_surface
from .title_generator import (
    apply_suggestion,
    build_thumbnail_prompt,
    generate_titles,
    titles_to_clipboard_text,
)

EMPTY_TOPIC_MESSAGE = "Escribe primero una idea o tema."
GENERIC_ERROR_MESSAGE = "Error generando. Revisa la consola y el backend."
REGENERATE_FALLBACK_TOPIC = "Tema"
PREVIEW_FALLBACK_TEXT = "TEMA"

SuggestionFetcher = Callable[[str], List[str]]


class TopicError(ValueError):
    pass


def validate_topic(topic: str) -> str:
    cleaned = (topic or "").strip()
    if not cleaned:
        raise TopicError(EMPTY_TOPIC_MESSAGE)
    return cleaned


def _no_suggestions(_topic: str) -> List[str]:
    return []


class StudioSession:
    """State a UI would keep for one user, plus the actions that change it.

    Failures inside an action never escape: the message is stored in
    ``error`` and the previous titles and preview stay as they were.
    """

    def __init__(
        self,
        fetch_suggestions: Optional[SuggestionFetcher] = None,
        renderer: Optional[ThumbnailRenderer] = None,
        surface: Optional[Image.Image] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.fetch_suggestions = fetch_suggestions or _no_suggestions
        self.renderer = renderer or ThumbnailRenderer()
        self.surface = surface if surface is not None else new_surface()
        self.logger = logger or get_logger(__name__)

        self.topic = ""
        self.titles: List[str] = []
        self.suggestions: List[str] = []
        self.error: Optional[str] = None
        self.thumb_text = ""
        self.thumb_prompt = ""
        self.background: Optional[ImagePayload] = None

    def generate(self, topic: Optional[str] = None) -> bool:
        if topic is not None:
            self.topic = topic
        self.error = None
        try:
            cleaned = validate_topic(self.topic)
        except TopicError as exc:
            self.error = str(exc)
            return False

        try:
            titles = generate_titles(cleaned)
            suggestions = list(self.fetch_suggestions(cleaned))
            prompt = build_thumbnail_prompt(cleaned)
            self.renderer.render(self.surface, cleaned)
        except Exception:  # noqa: BLE001
            self.logger.exception("Generation failed for topic '%s'", cleaned)
            self.error = GENERIC_ERROR_MESSAGE
            return False

        self.titles = titles
        self.suggestions = suggestions
        self.thumb_prompt = prompt
        self.thumb_text = cleaned
        self.logger.info("Generated %d titles and %d suggestions for '%s'", len(titles), len(suggestions), cleaned)
        return True

    def regenerate(self) -> List[str]:
        # Same topic, same titles: the generator is deterministic.
        self.titles = generate_titles(self.topic or REGENERATE_FALLBACK_TOPIC)
        return self.titles

    def use_suggestion(self, suggestion: str) -> List[str]:
        self.titles = apply_suggestion(self.titles, suggestion)
        return self.titles

    def clear(self) -> None:
        self.topic = ""
        self.titles = []
        self.suggestions = []
        self.thumb_prompt = ""

    def titles_text(self) -> str:
        return titles_to_clipboard_text(self.titles)

    def set_thumb_text(self, text: str) -> Optional[Awaitable[bool]]:
        """Redraw on every edit.

        Returns ``None`` once the procedural preview is drawn, or an awaitable
        that completes the redraw when a background image is set.
        """
        self.thumb_text = text
        if self.background is not None:
            pending = self._issue_image_request(text, self.background)
            return self._guarded(pending) if pending is not None else _resolved(False)
        try:
            self.renderer.render(self.surface, text)
        except Exception:  # noqa: BLE001
            self.logger.exception("Preview redraw failed")
            self.error = GENERIC_ERROR_MESSAGE
        return None

    def set_background(self, payload: ImagePayload) -> Awaitable[bool]:
        text = self.topic.strip() or PREVIEW_FALLBACK_TEXT
        pending = self._issue_image_request(text, payload)
        if pending is None:
            return _resolved(False)
        self.background = payload
        return self._guarded(pending)

    def _issue_image_request(self, text: str, payload: ImagePayload) -> Optional[Awaitable[bool]]:
        try:
            return self.renderer.render_with_image(self.surface, text, payload)
        except Exception:  # noqa: BLE001
            self.logger.exception("Preview request rejected")
            self.error = GENERIC_ERROR_MESSAGE
            return None

    async def _guarded(self, pending: Awaitable[bool]) -> bool:
        try:
            return await pending
        except Exception:  # noqa: BLE001
            self.logger.exception("Preview redraw failed")
            self.error = GENERIC_ERROR_MESSAGE
            return False


async def _resolved(value: bool) -> bool:
    return value
