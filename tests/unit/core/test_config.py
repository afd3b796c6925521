"""Unit tests for configuration loading and saving.

Tests for PartsweepConfig validation and TOML I/O.
"""

import tomllib
from pathlib import Path

import pytest
from partsweep.core.config import (
    ConfigError,
    ConfigNotFoundError,
    ConfigParseError,
    PartsweepConfig,
    ReferenceEntry,
    config_to_dict,
    get_default_config,
    load_config,
    load_config_or_default,
    save_config,
)
from partsweep.core.paths import DEFAULT_DATABASE_PATH, DEFAULT_PARTS_DIR, get_config_path
from partsweep.parts.models import PART_DATA_REFERENCE, ReferenceSpec
from pydantic import ValidationError


class TestPartsweepConfig:
    """Tests for the PartsweepConfig model."""

    def test_defaults(self) -> None:
        """Defaults match the on-device layout."""
        config = PartsweepConfig()

        assert config.parts_dir == DEFAULT_PARTS_DIR
        assert config.database == DEFAULT_DATABASE_PATH
        assert config.match == "canonical"
        assert config.canonicalize is True
        assert config.ignore_suffixes == [".tmp"]
        assert config.reference_specs() == (PART_DATA_REFERENCE,)

    def test_exact_match(self) -> None:
        """match = "exact" disables canonicalization."""
        config = PartsweepConfig(match="exact")

        assert config.canonicalize is False

    def test_invalid_match(self) -> None:
        """Unknown match modes are rejected."""
        with pytest.raises(ValidationError):
            PartsweepConfig(match="fuzzy")  # type: ignore[arg-type]

    def test_invalid_identifier(self) -> None:
        """Reference columns must be plain SQL identifiers."""
        with pytest.raises(ValidationError, match="Invalid table name"):
            PartsweepConfig(references=[ReferenceEntry(table="part;--", column="_data")])

    def test_references_required(self) -> None:
        """At least one reference column must be configured."""
        with pytest.raises(ValidationError):
            PartsweepConfig(references=[])

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            PartsweepConfig.model_validate({"parts_directory": "/tmp"})

    def test_reference_specs(self) -> None:
        """Configured references convert to descriptors in order."""
        config = PartsweepConfig(
            references=[
                ReferenceEntry(table="part", column="_data"),
                ReferenceEntry(table="drm", column="_data"),
            ]
        )

        assert config.reference_specs() == (
            ReferenceSpec("part", "_data"),
            ReferenceSpec("drm", "_data"),
        )


class TestLoadConfig:
    """Tests for load_config and load_config_or_default."""

    def test_load_valid(self, tmp_path: Path) -> None:
        """A valid file is parsed into a config."""
        path = tmp_path / "config.toml"
        path.write_text(
            'parts_dir = "/srv/parts"\n'
            'database = "/srv/mmssms.db"\n'
            'match = "exact"\n'
            "ignore_suffixes = []\n"
            "\n"
            "[[references]]\n"
            'table = "part"\n'
            'column = "_data"\n'
            "\n"
            "[[references]]\n"
            'table = "drm"\n'
            'column = "_data"\n'
        )

        config = load_config(path)

        assert config.parts_dir == Path("/srv/parts")
        assert config.database == Path("/srv/mmssms.db")
        assert config.canonicalize is False
        assert config.ignore_suffixes == []
        assert len(config.references) == 2

    def test_partial_file_uses_defaults(self, tmp_path: Path) -> None:
        """Missing keys fall back to defaults."""
        path = tmp_path / "config.toml"
        path.write_text('parts_dir = "/srv/parts"\n')

        config = load_config(path)

        assert config.parts_dir == Path("/srv/parts")
        assert config.database == DEFAULT_DATABASE_PATH

    def test_not_found(self, tmp_path: Path) -> None:
        """A missing file raises ConfigNotFoundError."""
        with pytest.raises(ConfigNotFoundError, match="Config not found"):
            load_config(tmp_path / "missing.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("parts_dir = \n")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigError."""
        path = tmp_path / "config.toml"
        path.write_text('match = "fuzzy"\n')

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path(self) -> None:
        """Without a path the XDG config file is read."""
        path = get_config_path()
        path.parent.mkdir(parents=True)
        path.write_text('match = "exact"\n')

        assert load_config().match == "exact"

    def test_or_default_without_file(self, tmp_path: Path) -> None:
        """load_config_or_default returns defaults when no file exists."""
        config = load_config_or_default(tmp_path / "missing.toml")

        assert config == get_default_config()

    def test_or_default_still_reports_errors(self, tmp_path: Path) -> None:
        """load_config_or_default does not hide broken files."""
        path = tmp_path / "config.toml"
        path.write_text("[[[")

        with pytest.raises(ConfigParseError):
            load_config_or_default(path)


class TestSaveConfig:
    """Tests for save_config."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """A saved config loads back unchanged."""
        config = PartsweepConfig(parts_dir=Path("/srv/parts"), match="exact")
        path = tmp_path / "nested" / "config.toml"

        saved = save_config(config, path)

        assert saved == path
        assert load_config(path) == config

    def test_leaves_no_temp_files(self, tmp_path: Path) -> None:
        """Only the target file remains after saving."""
        path = tmp_path / "config.toml"

        save_config(get_default_config(), path)

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_default_path(self) -> None:
        """Without a path the XDG config file is written."""
        saved = save_config(get_default_config())

        assert saved == get_config_path()
        assert saved.exists()

    def test_config_to_dict(self) -> None:
        """The serialized form is plain TOML-compatible data."""
        data = config_to_dict(get_default_config())

        assert data["parts_dir"] == str(DEFAULT_PARTS_DIR)
        assert data["match"] == "canonical"
        assert data["references"] == [{"table": "part", "column": "_data"}]

    def test_written_file_is_toml(self, tmp_path: Path) -> None:
        """The written file is valid TOML."""
        path = save_config(get_default_config(), tmp_path / "config.toml")

        with open(path, "rb") as f:
            data = tomllib.load(f)

        assert data["ignore_suffixes"] == [".tmp"]
