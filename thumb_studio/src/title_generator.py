"""Local SEO title variants and the thumbnail image prompt."""
from __future__ import annotations

from typing import List, Sequence

POWER_WORDS: tuple[str, ...] = (
    "Increíble",
    "Impresionante",
    "Secreto",
    "Asombroso",
    "Impactante",
)

HOOK_TEMPLATES: tuple[str, ...] = (
    "Los {topic} que no conocías",
    "Cómo {topic} en 5 pasos",
    "Top 5 {topic} que sorprenden",
    "{topic}: Guía completa y consejos",
    "¿Por qué {topic} está cambiando TODO?",
)

SUGGESTION_TEMPLATE = "¡{suggestion}!: Guía completa"

THUMBNAIL_PROMPT_TEMPLATE = (
    'Miniatura para video sobre "{topic}"; estilo: vibrante, contraste alto, '
    "texto grande y legible, incluye un primer plano del tema o un insecto/animal "
    "(si aplica), usar colores saturados y un gancho emocional "
    '(ej: "No creerás esto"). Añadir caja de texto para el título corto.'
)


def generate_titles(topic: str) -> List[str]:
    """Pair every hook template with a power word.

    The topic is used as given; callers are expected to reject blank topics
    first. Output is deterministic, so regenerating yields the same list.
    """
    titles: List[str] = []
    for index, hook in enumerate(HOOK_TEMPLATES):
        power = POWER_WORDS[index % len(POWER_WORDS)]
        titles.append(f"{power} — {hook.format(topic=topic)}")
    return titles


def build_thumbnail_prompt(topic: str) -> str:
    return THUMBNAIL_PROMPT_TEMPLATE.format(topic=topic)


def apply_suggestion(titles: Sequence[str], suggestion: str) -> List[str]:
    """Promote a search suggestion to the first title, keeping at most 5."""
    return [SUGGESTION_TEMPLATE.format(suggestion=suggestion), *list(titles)[:4]]


def titles_to_clipboard_text(titles: Sequence[str]) -> str:
    return "\n".join(titles)
