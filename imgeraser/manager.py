"""A thread-safe holder of the active configuration, and its defaults."""

from __future__ import annotations

import copy
import threading
from dataclasses import fields

from .duration import parse_duration
from .eraserconfig import (
    Components,
    ContainerConfig,
    EraserConfig,
    ImageJobCleanupConfig,
    ImageJobConfig,
    ManagerConfig,
    NodeFilterConfig,
    OptionalContainerConfig,
    ProfileConfig,
    RepoTag,
    ResourceRequirements,
    Runtime,
    ScheduleConfig,
)
from .quantity import Quantity, parse_quantity

__all__ = ["ConfigManager", "ConfigError", "default_config", "DEFAULT_SCANNER_CONFIG"]

DEFAULT_SCANNER_CONFIG = """
cacheDir: /var/lib/trivy
dbRepo: ghcr.io/aquasecurity/trivy-db
deleteFailedImages: true
vulnerabilities:
  ignoreUnfixed: true
  types:
    - os
    - library
securityChecks: # need to be documented; determined by trivy, not us
  - vuln
severities:
  - CRITICAL
"""

_NO_DELAY = 0
_ONE_DAY = parse_duration("24h")


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be read or replaced."""


class ConfigManager:
    """Guards an EraserConfig so it can be read and replaced across threads."""

    def __init__(self, config: EraserConfig | None) -> None:
        self._lock = threading.Lock()
        self._config = config

    def read(self) -> EraserConfig:
        """Return a copy of the current configuration."""
        with self._lock:
            if self._config is None:
                raise ConfigError("ConfigManager configuration is nil, aborting")
            return copy.deepcopy(self._config)

    def update(self, new_config: EraserConfig | None) -> None:
        """Replace the contents of the held configuration with ``new_config``."""
        with self._lock:
            if self._config is None:
                raise ConfigError("ConfigManager configuration is nil, aborting")
            if new_config is None:
                raise ConfigError("new configuration is nil, aborting")
            for item in fields(EraserConfig):
                setattr(self._config, item.name, getattr(new_config, item.name))


def _repo(basename: str, default_repo: str) -> str:
    if not default_repo:
        return basename
    return f"{default_repo}/{basename}"


def _resources(mem: str, cpu: str | None) -> ResourceRequirements:
    return ResourceRequirements(
        mem=parse_quantity(mem),
        cpu=parse_quantity(cpu) if cpu is not None else Quantity(),
    )


def default_config(build_version: str, default_repo: str = "") -> EraserConfig:
    """Return the built-in configuration for images tagged ``build_version``."""
    return EraserConfig(
        manager=ManagerConfig(
            runtime=Runtime.CONTAINERD,
            otlp_endpoint="",
            log_level="info",
            scheduling=ScheduleConfig(repeat_interval=_ONE_DAY, begin_immediately=True),
            profile=ProfileConfig(enabled=False, port=6060),
            image_job=ImageJobConfig(
                success_ratio=1.0,
                cleanup=ImageJobCleanupConfig(
                    delay_on_success=_NO_DELAY,
                    delay_on_failure=_ONE_DAY,
                ),
            ),
            pull_secrets=[],
            node_filter=NodeFilterConfig(
                type="exclude",
                selectors=["eraser.sh/cleanup.filter"],
            ),
        ),
        components=Components(
            collector=OptionalContainerConfig(
                enabled=False,
                image=RepoTag(repo=_repo("collector", default_repo), tag=build_version),
                request=_resources("25Mi", "7m"),
                limit=_resources("500Mi", None),
                config=None,
            ),
            scanner=OptionalContainerConfig(
                enabled=False,
                image=RepoTag(
                    repo=_repo("eraser-trivy-scanner", default_repo), tag=build_version
                ),
                request=_resources("500Mi", "1000m"),
                limit=_resources("2Gi", "1500m"),
                config=DEFAULT_SCANNER_CONFIG,
            ),
            eraser=ContainerConfig(
                image=RepoTag(repo=_repo("eraser", default_repo), tag=build_version),
                request=_resources("25Mi", "7m"),
                limit=_resources("30Mi", None),
                config=None,
            ),
        ),
    )