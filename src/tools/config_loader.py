"""
Analysis profiles: YAML files under ``configs/`` resolved into typed settings.

A profile is chosen explicitly, or through the ``ANALYSIS_PROFILE``
environment variable, falling back to ``default``. Keys missing from a
profile take the engine defaults (500 m buffers, 2 km clusters, empty
overlay provider over Lombok).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..overlays.models import BoundingBox
from ..spatial.buffers import DEFAULT_BUFFER_RADIUS_M
from ..spatial.clustering import DEFAULT_CLUSTER_THRESHOLD_M


DEFAULT_PROFILE = "default"
PROFILE_ENV_VAR = "ANALYSIS_PROFILE"
OVERPASS_URL_ENV_VAR = "OVERPASS_URL"

# Study area used when a profile does not define one (Lombok)
DEFAULT_BBOX = BoundingBox(south=-9.1, west=115.8, north=-8.2, east=116.8)

OVERLAY_PROVIDERS = ("empty", "overpass")


@dataclass(frozen=True)
class OverlaySettings:
    """Where overlay layers come from and which area they cover."""

    provider: str = "empty"
    """Provider name: 'empty' or 'overpass'."""

    overpass_url: Optional[str] = None
    """Overpass endpoint; None means the provider's default."""

    timeout_sec: float = 30.0
    bbox: BoundingBox = DEFAULT_BBOX


@dataclass(frozen=True)
class AnalysisSettings:
    """Resolved settings for one analysis profile."""

    profile: str
    buffer_radius_m: float = DEFAULT_BUFFER_RADIUS_M
    cluster_threshold_m: float = DEFAULT_CLUSTER_THRESHOLD_M
    overlays: OverlaySettings = field(default_factory=OverlaySettings)


class ConfigLoader:
    """Locate, read and resolve analysis profiles."""

    CONFIG_DIR = Path(__file__).parent.parent.parent / "configs"

    @classmethod
    def available_profiles(cls) -> List[str]:
        return sorted(f.stem for f in cls.CONFIG_DIR.glob("*.yaml"))

    @classmethod
    def load_profile(cls, profile_name: str = DEFAULT_PROFILE) -> Dict[str, Any]:
        """
        Read the raw YAML mapping of a profile.

        Raises:
            FileNotFoundError: If no ``configs/<profile_name>.yaml`` exists
        """
        profile_path = cls.CONFIG_DIR / f"{profile_name}.yaml"
        if not profile_path.exists():
            raise FileNotFoundError(
                f"Profile '{profile_name}' not found. "
                f"Available profiles: {', '.join(cls.available_profiles())}"
            )

        with open(profile_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def active_profile_name(cls, profile_name: Optional[str] = None) -> str:
        """Explicit name, else ``ANALYSIS_PROFILE``, else ``default``."""
        return profile_name or os.getenv(PROFILE_ENV_VAR) or DEFAULT_PROFILE

    @staticmethod
    def _overlay_settings(section: Dict[str, Any]) -> OverlaySettings:
        provider = section.get("provider", "empty")
        if provider not in OVERLAY_PROVIDERS:
            raise ValueError(
                f"Unknown overlay provider '{provider}'. Expected one of: {', '.join(OVERLAY_PROVIDERS)}"
            )

        bbox_cfg = section.get("bbox")
        bbox = DEFAULT_BBOX
        if bbox_cfg:
            bbox = BoundingBox(
                south=float(bbox_cfg["south"]),
                west=float(bbox_cfg["west"]),
                north=float(bbox_cfg["north"]),
                east=float(bbox_cfg["east"]),
            )

        return OverlaySettings(
            provider=provider,
            # OVERPASS_URL overrides the profile
            overpass_url=os.getenv(OVERPASS_URL_ENV_VAR) or section.get("overpass_url"),
            timeout_sec=float(section.get("timeout_sec", 30)),
            bbox=bbox,
        )

    @classmethod
    def resolve(cls, profile: Dict[str, Any], profile_name: str = DEFAULT_PROFILE) -> AnalysisSettings:
        """Turn a raw profile mapping into :class:`AnalysisSettings`."""
        buffer_cfg = profile.get("buffer") or {}
        clustering_cfg = profile.get("clustering") or {}

        return AnalysisSettings(
            profile=profile_name,
            buffer_radius_m=float(buffer_cfg.get("radius_m", DEFAULT_BUFFER_RADIUS_M)),
            cluster_threshold_m=float(
                clustering_cfg.get("threshold_m", DEFAULT_CLUSTER_THRESHOLD_M)
            ),
            overlays=cls._overlay_settings(profile.get("overlays") or {}),
        )

    @classmethod
    def load_settings(cls, profile_name: Optional[str] = None) -> AnalysisSettings:
        """Load and resolve the active profile (see :meth:`active_profile_name`)."""
        name = cls.active_profile_name(profile_name)
        return cls.resolve(cls.load_profile(name), name)


def get_settings(profile_name: Optional[str] = None) -> AnalysisSettings:
    """Convenience function to get the current analysis settings."""
    return ConfigLoader.load_settings(profile_name)
