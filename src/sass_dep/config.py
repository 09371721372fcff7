"""Project configuration file (``sass-dep.yaml``).

Example:
    load_paths: [node_modules, vendor/styles]
    extensions: [scss, sass]
    entry_points: [src/main.scss]
    include_orphans: true
    thresholds:
      high_fan_in: 8
      high_fan_out: 12

Relative load paths are taken relative to the directory holding the file.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sass_dep.analyzer import AnalyzerConfig, FlagThresholds
from sass_dep.errors import ConfigError
from sass_dep.resolver import DEFAULT_EXTENSIONS, ResolverConfig

log = logging.getLogger(__name__)

CONFIG_FILENAMES = ("sass-dep.yaml", "sass-dep.yml")


class ThresholdsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    high_fan_in: int = Field(default=5, ge=1)
    high_fan_out: int = Field(default=10, ge=1)


class ProjectConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    load_paths: list[str] = Field(default_factory=list)
    extensions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    entry_points: list[str] = Field(default_factory=list)
    include_orphans: bool = False
    thresholds: ThresholdsConfig = Field(default_factory=ThresholdsConfig)

    @field_validator("extensions")
    @classmethod
    def _normalize_extensions(cls, value: list[str]) -> list[str]:
        exts = [e.strip().lstrip(".") for e in value]
        if not exts or any(not e for e in exts):
            raise ValueError("extensions must be a non-empty list of names like 'scss'")
        return exts

    def resolver_config(self, base_dir: Path, extra_load_paths: list[Path] | None = None) -> ResolverConfig:
        """Resolver settings with load paths made absolute against ``base_dir``.

        ``extra_load_paths`` (e.g. from the command line) are searched first.
        """
        load_paths = list(extra_load_paths or [])
        for p in self.load_paths:
            path = Path(p)
            load_paths.append(path if path.is_absolute() else (base_dir / path).resolve())
        return ResolverConfig(load_paths=load_paths, extensions=list(self.extensions))

    def analyzer_config(self) -> AnalyzerConfig:
        return AnalyzerConfig(
            thresholds=FlagThresholds(
                high_fan_in=self.thresholds.high_fan_in,
                high_fan_out=self.thresholds.high_fan_out,
            ),
        )


def find_config(root: Path) -> Path | None:
    """Return the first config file present in ``root``, if any."""
    for name in CONFIG_FILENAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path) -> ProjectConfig:
    """Parse and validate a YAML config file.

    Raises:
        ConfigError: the file cannot be read, is not valid YAML, or does not
            match the schema.
    """
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}:\n{exc}") from exc

    log.debug("Loaded config from %s", path)
    return config
