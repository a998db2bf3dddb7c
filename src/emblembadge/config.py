"""Configuration loading for the badge pipeline."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from emblembadge.selector import FALLBACK_EMBLEM
from emblembadge.theme import Layout, Theme

DEFAULT_CONFIG_PATH = Path("config.yaml")


class ConfigError(ValueError):
    """config.yaml is present but invalid."""


@dataclass(frozen=True)
class Paths:
    stats: Path = Path("data/stats.json")
    emblem: Path = Path("data/emblem.jpg")
    manifest: Path = Path("data/manifest.json")
    badge: Path = Path("badge.png")
    readme: Path = Path("README.md")


@dataclass(frozen=True)
class Config:
    username: str
    display_name: str = ""
    rotation: tuple[str, ...] = (FALLBACK_EMBLEM,)
    fallback: str = FALLBACK_EMBLEM
    theme: Theme = field(default_factory=Theme)
    layout: Layout = field(default_factory=Layout)
    paths: Paths = field(default_factory=Paths)

    @property
    def badge_name(self) -> str:
        """Name shown on the badge; defaults to the GitHub username."""
        return self.display_name or self.username


def load_config(config_path: str | Path = DEFAULT_CONFIG_PATH) -> Config:
    """Load configuration from YAML file."""
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "r") as f:
        try:
            raw = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path} must contain a mapping")

    return parse_config(raw)


def parse_config(raw: dict[str, Any]) -> Config:
    """Validate a parsed config mapping."""
    username = raw.get("username") or ""
    if not username:
        raise ConfigError("username is required in config")

    emblems = raw.get("emblems") or {}
    rotation = emblems.get("rotation") or []
    if not rotation:
        raise ConfigError("emblems.rotation must contain at least one emblem ID")
    for i, emblem in enumerate(rotation):
        if not str(emblem or "").strip():
            raise ConfigError(f"emblems.rotation[{i}] is empty")

    fallback = emblems.get("fallback")
    if not fallback:
        raise ConfigError("emblems.fallback is required")

    try:
        theme = Theme.from_dict(raw.get("theme"))
        layout = Layout().with_overrides(raw.get("layout"))
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e)) from e

    paths = raw.get("paths") or {}
    unknown = set(paths) - set(Paths.__dataclass_fields__)
    if unknown:
        raise ConfigError(f"unknown paths entry: {', '.join(sorted(unknown))}")

    return Config(
        username=str(username),
        display_name=str(raw.get("display_name") or ""),
        rotation=tuple(str(emblem) for emblem in rotation),
        fallback=str(fallback),
        theme=theme,
        layout=layout,
        paths=Paths(**{key: Path(value) for key, value in paths.items()}),
    )
