"""Configuration model and I/O for partsweep.

Configuration is stored in ~/.config/partsweep/config.toml and names the
parts directory, the message store database, and the table columns that
reference attachment files. Every field has a default matching the
on-device layout of the telephony provider, so the file is optional.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from partsweep.core.paths import DEFAULT_DATABASE_PATH, DEFAULT_PARTS_DIR, get_config_path
from partsweep.parts.models import PART_DATA_REFERENCE, ReferenceSpec

logger = logging.getLogger(__name__)

# How recorded reference paths are compared with scanned part files
MatchMode = Literal["canonical", "exact"]


class ReferenceEntry(BaseModel):
    """A single [[references]] entry in the config file.

    Attributes:
        table: Table holding attachment rows.
        column: Column holding the recorded file path.
    """

    model_config = ConfigDict(extra="forbid")

    table: Annotated[str, Field(description="Table holding attachment rows")]
    column: Annotated[str, Field(description="Column holding the file path")]

    def to_spec(self) -> ReferenceSpec:
        """Convert to the immutable descriptor used by the reference extractor."""
        return ReferenceSpec(table=self.table, column=self.column)


class PartsweepConfig(BaseModel):
    """Configuration for a reconciliation pass.

    Attributes:
        parts_dir: Directory holding attachment blobs.
        database: SQLite message store holding the reference tables.
        match: "canonical" resolves recorded paths before comparison;
            "exact" compares the recorded strings as-is.
        ignore_suffixes: File name suffixes of in-flight writes to skip.
        references: Table columns whose values reference part files.
    """

    model_config = ConfigDict(extra="forbid")

    parts_dir: Annotated[Path, Field(description="Attachment directory")] = DEFAULT_PARTS_DIR
    database: Annotated[Path, Field(description="SQLite message store")] = DEFAULT_DATABASE_PATH
    match: Annotated[MatchMode, Field(description="Reference path comparison")] = "canonical"
    ignore_suffixes: Annotated[
        list[str],
        Field(default_factory=lambda: [".tmp"], description="Suffixes to skip"),
    ]
    references: Annotated[
        list[ReferenceEntry],
        Field(
            default_factory=lambda: [
                ReferenceEntry(
                    table=PART_DATA_REFERENCE.table,
                    column=PART_DATA_REFERENCE.column,
                )
            ],
            min_length=1,
            description="Columns referencing part files",
        ),
    ]

    @field_validator("references")
    @classmethod
    def validate_identifiers(cls, v: list[ReferenceEntry]) -> list[ReferenceEntry]:
        """Reject table or column names that are not plain SQL identifiers."""
        for entry in v:
            entry.to_spec()
        return v

    @property
    def canonicalize(self) -> bool:
        """Whether recorded reference paths are canonicalized before matching."""
        return self.match == "canonical"

    def reference_specs(self) -> tuple[ReferenceSpec, ...]:
        """Get the configured reference columns as extractor descriptors."""
        return tuple(entry.to_spec() for entry in self.references)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> PartsweepConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated PartsweepConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return PartsweepConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> PartsweepConfig:
    """Load configuration, falling back to defaults when no file exists.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return get_default_config()


def save_config(config: PartsweepConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The PartsweepConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(config_to_dict(config), f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: PartsweepConfig) -> dict[str, object]:
    """Convert PartsweepConfig to a dictionary for TOML serialization.

    Args:
        config: The PartsweepConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    return {
        "parts_dir": str(config.parts_dir),
        "database": str(config.database),
        "match": config.match,
        "ignore_suffixes": list(config.ignore_suffixes),
        "references": [
            {"table": entry.table, "column": entry.column} for entry in config.references
        ],
    }


def get_default_config() -> PartsweepConfig:
    """Create a default PartsweepConfig."""
    return PartsweepConfig()
