"""CLI entry point for generating SEO titles and a thumbnail preview."""
from __future__ import annotations

import argparse
import asyncio
from functools import partial
import sys
from pathlib import Path
from typing import List

from .config import AppPaths, timestamp_slug
from .env_settings import get_float_setting, get_setting, load_env_and_bind
from .image_source import load_image_payload
from .logger_setup import build_logger
from .studio import StudioSession, TopicError, validate_topic
from .suggestions import fetch_suggestions, fetch_youtube_autocomplete


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="SEO title and thumbnail generator")
    parser.add_argument(
        "--topic",
        required=True,
        help="Video idea or topic (example: insectos venenosos del Amazonas)",
    )
    parser.add_argument(
        "--image",
        type=str,
        default=None,
        help="Optional background photo for the thumbnail preview",
    )
    parser.add_argument(
        "--thumb-text",
        type=str,
        default=None,
        help="Text drawn on the thumbnail (defaults to the topic)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="PNG path for the preview (default: output/thumbnail_<timestamp>.png)",
    )
    parser.add_argument(
        "--suggest-url",
        type=str,
        default=None,
        help="Suggestions endpoint returning {\"suggestions\": [...]} for ?q=<topic>",
    )
    parser.add_argument(
        "--autocomplete",
        action="store_true",
        help="Query YouTube autocomplete directly instead of a suggestions endpoint",
    )
    parser.add_argument(
        "--language",
        type=str,
        default=None,
        help="Autocomplete language code (default: es)",
    )
    parser.add_argument(
        "--no-suggestions",
        action="store_true",
        help="Skip the suggestions lookup entirely",
    )
    return parser.parse_args(argv)


def _suggestion_fetcher(args: argparse.Namespace, logger):
    if args.no_suggestions:
        return None
    timeout = get_float_setting("THUMB_STUDIO_SUGGEST_TIMEOUT", 10.0)
    if args.autocomplete:
        language = args.language or get_setting("THUMB_STUDIO_LANGUAGE", "es")
        return partial(fetch_youtube_autocomplete, language=language, timeout=timeout)
    endpoint = args.suggest_url or get_setting("THUMB_STUDIO_SUGGEST_URL")
    if not endpoint:
        logger.info("No suggestions endpoint configured; showing titles only.")
        return None
    return partial(fetch_suggestions, endpoint=endpoint, timeout=timeout)


def _print_results(session: StudioSession, output_path: Path) -> None:
    print("\n--- Títulos sugeridos (SEO) ---")
    for index, title in enumerate(session.titles, start=1):
        print(f"{index}. {title}")
    print("\n--- Sugerencias de búsqueda ---")
    if session.suggestions:
        for suggestion in session.suggestions:
            print(f"- {suggestion}")
    else:
        print("No hay sugerencias.")
    print("\n--- Prompt para generación de imagen ---")
    print(session.thumb_prompt)
    print(f"\nMiniatura guardada en: {output_path}")


def run(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    paths = AppPaths.discover()
    paths.ensure_directories()
    logger = build_logger(paths.logs / "thumb_studio.log")
    load_env_and_bind(paths.root.parent)
    logger.info("Starting run for topic='%s'", args.topic)

    try:
        topic = validate_topic(args.topic)
        session = StudioSession(fetch_suggestions=_suggestion_fetcher(args, logger), logger=logger)
        if not session.generate(topic):
            raise RuntimeError(session.error or "generation failed")

        if args.image:
            image_path = Path(args.image).expanduser().resolve()
            session.background = load_image_payload(image_path)
            logger.info("Using background image: %s", image_path)

        pending = session.set_thumb_text(args.thumb_text or topic)
        if pending is not None and not asyncio.run(pending):
            logger.warning("Background image could not be used; keeping the gradient preview.")
        if session.error:
            raise RuntimeError(session.error)

        output_path = Path(args.output) if args.output else paths.output / f"thumbnail_{timestamp_slug()}.png"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        session.surface.save(output_path, format="PNG", optimize=True)
        logger.info("Thumbnail exported: %s", output_path)

        _print_results(session, output_path)
        return 0
    except (TopicError, FileNotFoundError) as exc:
        logger.error("Known error: %s", exc)
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected error")
        print(f"Unexpected failure: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(run())
