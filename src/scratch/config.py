"""Configuration utilities for running the :mod:`scratch` walkthrough."""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from .errors import ConfigError
from .loops import DEFAULT_STRATEGY, resolve_loop

logger = logging.getLogger(__name__)


@dataclass
class LoopConfig:
    """Which loop primitive drives the operations, and the stack it may use."""

    strategy: str = DEFAULT_STRATEGY
    recursion_limit: Optional[int] = None


@dataclass
class LoggingConfig:
    """Logging verbosity and formatting options."""

    level: str = "INFO"
    rich_tracebacks: bool = True


@dataclass
class DemoConfig:
    """Size of the generated input sequence for the walkthrough."""

    size: int = 10


@dataclass
class AppConfig:
    """Top-level configuration object composed of sub-configurations."""

    loop: LoopConfig = field(default_factory=LoopConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    demo: DemoConfig = field(default_factory=DemoConfig)


def load_yaml(path: Path) -> Mapping[str, Any]:
    """Load a YAML document and return a mapping."""

    with path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle)
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ConfigError(f"Expected a mapping at the top of {path}, got {type(raw).__name__}.")
    return raw


def _section(raw: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = raw.get(name) or {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"Config section '{name}' must be a mapping, got {type(section).__name__}.")
    return section


def build_app_config(raw: Mapping[str, Any]) -> AppConfig:
    """Build :class:`AppConfig` from an already parsed mapping."""

    loop = _section(raw, "loop")
    logging_cfg = _section(raw, "logging")
    demo = _section(raw, "demo")

    limit = loop.get("recursion_limit")
    app_config = AppConfig(
        loop=LoopConfig(
            strategy=str(loop.get("strategy", DEFAULT_STRATEGY)),
            recursion_limit=None if limit is None else int(limit),
        ),
        logging=LoggingConfig(
            level=str(logging_cfg.get("level", "INFO")),
            rich_tracebacks=bool(logging_cfg.get("rich_tracebacks", True)),
        ),
        demo=DemoConfig(size=int(demo.get("size", 10))),
    )
    resolve_loop(app_config.loop.strategy)
    if app_config.demo.size < 0:
        raise ConfigError(f"demo.size must be non-negative, got {app_config.demo.size}.")
    return app_config


def load_app_config(path: Path) -> AppConfig:
    """Load :class:`AppConfig` from ``path``."""

    return build_app_config(load_yaml(path))


def apply_loop_config(config: LoopConfig) -> int:
    """Raise the interpreter recursion limit if ``config`` asks for more.

    Returns the limit in effect afterwards. The limit is never lowered.
    """

    current = sys.getrecursionlimit()
    if config.recursion_limit is not None and config.recursion_limit > current:
        sys.setrecursionlimit(config.recursion_limit)
        logger.debug("Raised recursion limit from %d to %d", current, config.recursion_limit)
        return config.recursion_limit
    return current


__all__ = [
    "LoopConfig",
    "LoggingConfig",
    "DemoConfig",
    "AppConfig",
    "load_yaml",
    "build_app_config",
    "load_app_config",
    "apply_loop_config",
]
