"""Runtime .env loading and canonical setting resolution."""
from __future__ import annotations

from pathlib import Path
import os
from typing import Dict, Tuple


SETTING_ALIASES: Dict[str, Tuple[str, ...]] = {
    "THUMB_STUDIO_SUGGEST_URL": ("YOUTUBE_SUGGEST_URL",),
}


def _parse_env_file(env_path: Path) -> Dict[str, str]:
    if not env_path.exists():
        return {}
    parsed: Dict[str, str] = {}
    for line in env_path.read_text(encoding="utf-8").splitlines():
        raw = line.strip()
        if not raw or raw.startswith("#") or "=" not in raw:
            continue
        key, value = raw.split("=", 1)
        key = key.strip()
        value = value.strip().strip("'").strip('"')
        if key:
            parsed[key] = value
    return parsed


def get_setting(name: str, default: str = "") -> str:
    direct = os.getenv(name, "").strip()
    if direct:
        return direct
    for alias in SETTING_ALIASES.get(name, ()):
        candidate = os.getenv(alias, "").strip()
        if candidate:
            return candidate
    return default


def get_float_setting(name: str, default: float) -> float:
    raw = get_setting(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def load_env_and_bind(root: Path, override_existing: bool = False) -> Path:
    """Load .env into process and map aliases to canonical env names."""
    env_path = root / ".env"
    values = _parse_env_file(env_path)
    for key, value in values.items():
        current = os.getenv(key, "")
        if override_existing or not current:
            os.environ[key] = value

    for canonical, aliases in SETTING_ALIASES.items():
        if os.getenv(canonical, "").strip():
            continue
        for alias in aliases:
            alias_value = os.getenv(alias, "").strip()
            if alias_value:
                os.environ[canonical] = alias_value
                break
    return env_path
