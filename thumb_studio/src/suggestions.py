"""Search-suggestion collaborators. Every failure degrades to an empty list."""
from __future__ import annotations

import json
import re
from typing import Any, List, Optional

import requests

from .logger_setup import get_logger

YOUTUBE_AUTOCOMPLETE_URL = "https://suggestqueries.google.com/complete/search"

# Autocomplete sometimes answers with JSONP: window.google.ac.h([...])
_JSONP_RE = re.compile(r"^\s*(?:window\.google\.ac\.h\()?(.+?)(?:\);?)?\s*$", re.DOTALL)

logger = get_logger(__name__)


def _session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": "thumb-studio/1.0"})
    return s


def _string_items(values: Any) -> List[str]:
    if not isinstance(values, list):
        return []
    return [str(v) for v in values if isinstance(v, str) and v.strip()]


def fetch_suggestions(
    topic: str,
    endpoint: str,
    session: Optional[requests.Session] = None,
    timeout: float = 10,
) -> List[str]:
    """Ask the suggestions endpoint for ``{"suggestions": [...]}``."""
    query = topic.strip()
    if not query or not endpoint:
        return []
    session = session or _session()
    try:
        resp = session.get(endpoint, params={"q": query}, timeout=timeout)
        if resp.status_code != 200:
            logger.warning("Suggestions endpoint returned HTTP %s", resp.status_code)
            return []
        payload = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Suggestions unavailable: %s", exc)
        return []
    if not isinstance(payload, dict):
        return []
    return _string_items(payload.get("suggestions"))


def parse_autocomplete_body(text: str) -> List[str]:
    """Extract suggestion strings from a YouTube autocomplete response body."""
    try:
        parsed = json.loads(text)
    except ValueError:
        match = _JSONP_RE.match(text)
        if not match:
            return []
        try:
            parsed = json.loads(match.group(1))
        except ValueError:
            return []
    if not isinstance(parsed, list) or len(parsed) < 2 or not isinstance(parsed[1], list):
        return []
    items = [entry[0] if isinstance(entry, list) and entry else entry for entry in parsed[1]]
    return _string_items(items)


def fetch_youtube_autocomplete(
    topic: str,
    language: str = "es",
    session: Optional[requests.Session] = None,
    timeout: float = 10,
) -> List[str]:
    query = topic.strip()
    if not query:
        return []
    session = session or _session()
    params = {"client": "youtube", "ds": "yt", "hl": language, "q": query}
    try:
        resp = session.get(YOUTUBE_AUTOCOMPLETE_URL, params=params, timeout=timeout)
        if resp.status_code != 200:
            logger.warning("YouTube autocomplete returned HTTP %s", resp.status_code)
            return []
        return parse_autocomplete_body(resp.text)
    except requests.RequestException as exc:
        logger.warning("YouTube autocomplete unavailable: %s", exc)
        return []
