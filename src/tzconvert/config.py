"""tzconvert configuration classes.

Configuration is loaded from the ``tzconvert:`` section of a YAML file. The
file location comes from the ``path`` argument of :func:`load_config` or the
``TZCONVERT_CONFIG`` environment variable; without either, defaults are used.

Example config.yml::

    tzconvert:
      catalog:
        path: ~/my-zones.yaml
      parsing:
        culture: en-GB
      engine:
        comma_layout: reorder
      session:
        local_zone: Europe/Berlin
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from tzconvert.exceptions import ConfigurationError

CONFIG_ENV_VAR = "TZCONVERT_CONFIG"

COMMA_LAYOUTS = ("minimal", "reorder")


@dataclass
class CatalogConfig:
    """Configuration for the zone catalog and geo lookup.

    Attributes:
        path: YAML catalog file (None = bundled catalog)
        zoneinfo_dir: Directory holding iso3166.tab / zone1970.tab (None = search defaults)
    """

    path: str | None = None
    zoneinfo_dir: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CatalogConfig:
        """Create CatalogConfig from dictionary."""
        return cls(path=data.get("path"), zoneinfo_dir=data.get("zoneinfo_dir"))


@dataclass
class ParsingConfig:
    """Configuration for date/time parsing.

    Attributes:
        culture: Culture override for the primary grammar (None = host culture)
        fallback_culture: Invariant culture used when the primary grammar fails
    """

    culture: str | None = None
    fallback_culture: str = "en-US"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ParsingConfig:
        """Create ParsingConfig from dictionary."""
        return cls(
            culture=data.get("culture"),
            fallback_culture=data.get("fallback_culture", "en-US"),
        )


@dataclass
class EngineConfig:
    """Configuration for the conversion engine.

    Attributes:
        comma_layout: Result layout for "<time>, <zone>" queries:
            "minimal" (source and local rows) or "reorder" (all zones, source first)
    """

    comma_layout: str = "minimal"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create EngineConfig from dictionary."""
        return cls(comma_layout=data.get("comma_layout", "minimal"))


@dataclass
class SessionConfig:
    """Session overrides.

    Attributes:
        local_zone: Zone id to treat as local (None = ask the host)
    """

    local_zone: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SessionConfig:
        """Create SessionConfig from dictionary."""
        return cls(local_zone=data.get("local_zone"))


@dataclass
class TimezoneConverterConfig:
    """Root configuration.

    Attributes:
        catalog: Catalog and geo lookup configuration
        parsing: Date/time parsing configuration
        engine: Conversion engine configuration
        session: Session overrides
        log_level: Console log level name
    """

    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    engine: EngineConfig = field(default_factory=EngineConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> TimezoneConverterConfig:
        """Create config from the ``tzconvert`` section of config.yml.

        Args:
            config_dict: The 'tzconvert' section

        Returns:
            TimezoneConverterConfig instance
        """
        return cls(
            catalog=CatalogConfig.from_dict(config_dict.get("catalog") or {}),
            parsing=ParsingConfig.from_dict(config_dict.get("parsing") or {}),
            engine=EngineConfig.from_dict(config_dict.get("engine") or {}),
            session=SessionConfig.from_dict(config_dict.get("session") or {}),
            log_level=str(config_dict.get("log_level", "WARNING")).upper(),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors: list[str] = []

        if self.engine.comma_layout not in COMMA_LAYOUTS:
            errors.append(
                f"engine.comma_layout must be one of {', '.join(COMMA_LAYOUTS)}, "
                f"got '{self.engine.comma_layout}'"
            )

        if self.catalog.path and not Path(self.catalog.path).expanduser().is_file():
            errors.append(f"catalog.path does not exist: {self.catalog.path}")

        if self.catalog.zoneinfo_dir and not Path(self.catalog.zoneinfo_dir).expanduser().is_dir():
            errors.append(f"catalog.zoneinfo_dir is not a directory: {self.catalog.zoneinfo_dir}")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"log_level is not a valid level name: {self.log_level}")

        return errors


def load_config(path: str | os.PathLike | None = None) -> TimezoneConverterConfig:
    """Load and validate configuration.

    Args:
        path: Config file path; falls back to $TZCONVERT_CONFIG, then defaults

    Returns:
        Validated configuration

    Raises:
        ConfigurationError: If the file cannot be read or fails validation
    """
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return TimezoneConverterConfig()

    config_path = Path(path).expanduser()
    try:
        with config_path.open(encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except OSError as e:
        raise ConfigurationError(f"Cannot read config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")

    config = TimezoneConverterConfig.from_dict(raw.get("tzconvert") or {})
    errors = config.validate()
    if errors:
        raise ConfigurationError(
            "Invalid configuration: " + "; ".join(errors),
            technical_details={"errors": errors, "path": str(config_path)},
        )
    return config


__all__ = [
    "CatalogConfig",
    "EngineConfig",
    "ParsingConfig",
    "SessionConfig",
    "TimezoneConverterConfig",
    "load_config",
]
