"""Configuration for cluster registry loading, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    """Runtime settings with environment-variable overrides."""

    cluster_dir: str = ""
    strict_annotations: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            cluster_dir=os.environ.get("CLUSTERREG_DIR", ""),
            strict_annotations=os.environ.get("CLUSTERREG_STRICT_ANNOTATIONS", "").strip().lower()
            in TRUTHY,
            log_level=os.environ.get("CLUSTERREG_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        )
