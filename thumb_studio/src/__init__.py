"""Thumb Studio package."""

__all__ = [
    "config",
    "env_settings",
    "logger_setup",
    "title_generator",
    "suggestions",
    "image_source",
    "thumbnail_renderer",
    "studio",
    "main",
]
