from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Mermaid accepts TB as a synonym for TD.
_ORIENTATIONS = {"TD": "TD", "TB": "TD", "LR": "LR"}
DEFAULT_ORIENTATION = "TD"

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://localhost:3000",
)


def _env(name: str) -> Optional[str]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None or not raw.lstrip("-").isdigit():
        return default
    return int(raw)


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    raw = _env(name)
    if raw is None:
        return default
    items = tuple(item.strip() for item in raw.split(",") if item.strip())
    return items or default


def normalize_orientation(value: Optional[str]) -> str:
    """Map a configured flow direction onto TD/LR, falling back to TD."""
    key = (value or "").strip().upper()
    if not key:
        return DEFAULT_ORIENTATION
    if key not in _ORIENTATIONS:
        logger.warning(
            "Unknown diagram orientation %r, using %s", value, DEFAULT_ORIENTATION
        )
        return DEFAULT_ORIENTATION
    return _ORIENTATIONS[key]


@dataclass(frozen=True)
class DiagramSettings:
    orientation: str = normalize_orientation(_env("DIAGRAM_ORIENTATION"))
    include_comment: bool = _env_bool("DIAGRAM_INCLUDE_COMMENT", True)


@dataclass(frozen=True)
class WizardSettings:
    fallback_lane: str = _env("WIZARD_FALLBACK_LANE") or "General"
    max_sessions: int = _env_int("WIZARD_MAX_SESSIONS", 256)


@dataclass(frozen=True)
class CorsSettings:
    allow_origins: Tuple[str, ...] = _env_list("CORS_ALLOW_ORIGINS", DEFAULT_CORS_ORIGINS)


@dataclass(frozen=True)
class AppSettings:
    diagram: DiagramSettings = DiagramSettings()
    wizard: WizardSettings = WizardSettings()
    cors: CorsSettings = CorsSettings()


_SETTINGS = AppSettings()


def get_settings() -> AppSettings:
    return _SETTINGS
