"""Configuration and path utilities for Thumb Studio."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class AppPaths:
    """Absolute paths used by the command line tool."""

    root: Path
    output: Path
    logs: Path

    @classmethod
    def discover(cls) -> "AppPaths":
        # src/config.py -> src -> thumb_studio root
        root = Path(__file__).resolve().parents[1]
        return cls(
            root=root,
            output=root / "output",
            logs=root / "logs",
        )

    def ensure_directories(self) -> None:
        for folder in [self.output, self.logs]:
            folder.mkdir(parents=True, exist_ok=True)


def timestamp_slug() -> str:
    return datetime.now().strftime("%Y%m%d_%H%M%S")
