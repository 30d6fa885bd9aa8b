"""Configuration helpers."""

from .config_loader import (
    AnalysisSettings,
    ConfigLoader,
    DEFAULT_BBOX,
    DEFAULT_PROFILE,
    OverlaySettings,
    get_settings,
)

__all__ = [
    "AnalysisSettings",
    "ConfigLoader",
    "DEFAULT_BBOX",
    "DEFAULT_PROFILE",
    "OverlaySettings",
    "get_settings",
]
