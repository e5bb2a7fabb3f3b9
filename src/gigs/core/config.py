# src/gigs/core/config.py
"""
Configuration schema and loading for conformance runs.

Uses Pydantic for validation and Dynaconf for multi-source loading.
Settings are frozen (immutable) after construction.
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from gigs.contracts.enums import ConfigurationKey


def _validate_option_names(options: dict[str, bool]) -> dict[str, bool]:
    for name in options:
        if ConfigurationKey.parse(name) is None:
            known = ", ".join(k.value for k in ConfigurationKey)
            raise ValueError(f"Unknown configuration key '{name}'. Known keys: {known}")
    return options


class GigsSettings(BaseModel):
    """Top-level configuration for a conformance run.

    Example YAML:
        data_root: /data/GIGS
        authority: EPSG
        options:
          isStandardAliasSupported: false
        test_options:
          Test2202.testWGS84:
            isStandardNameSupported: false
    """

    model_config = {"frozen": True}

    data_root: Path | None = Field(
        default=None,
        description="Root directory of the GIGS dataset (falls back to $GIGS_DATA)",
    )
    authority: str = Field(
        default="EPSG",
        min_length=1,
        description="Authority that authority factories must declare",
    )
    entry_point_group: str = Field(
        default="gigs.factories",
        min_length=1,
        description="Entry-point group scanned for factory providers",
    )
    options: dict[str, bool] = Field(
        default_factory=dict,
        description="Global optional-feature flags (key name -> enabled)",
    )
    test_options: dict[str, dict[str, bool]] = Field(
        default_factory=dict,
        description="Per-test overrides, keyed by '<series>.<method>'",
    )
    options_file: Path | None = Field(
        default=None,
        description="Optional properties file with additional option overrides",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["console", "json"] = "console"

    @field_validator("options")
    @classmethod
    def validate_options(cls, v: dict[str, bool]) -> dict[str, bool]:
        """Option names must be known configuration keys."""
        return _validate_option_names(v)

    @field_validator("test_options")
    @classmethod
    def validate_test_options(
        cls, v: dict[str, dict[str, bool]]
    ) -> dict[str, dict[str, bool]]:
        """Test ids are '<series>.<method>' and option names are known keys."""
        for test_id, options in v.items():
            series, _, method = test_id.rpartition(".")
            if not series or not method:
                raise ValueError(
                    f"test_options key '{test_id}' must have the form '<series>.<method>'"
                )
            _validate_option_names(options)
        return v


def load_settings(config_path: Path | None = None) -> GigsSettings:
    """Load settings from an optional YAML file with environment variable overrides.

    Uses Dynaconf for multi-source loading with precedence:
    1. Environment variables (GIGS_*) - highest priority
    2. Config file (if given)
    3. Defaults from Pydantic schema - lowest priority

    Environment variable format: GIGS_OPTIONS__ISSTANDARDNAMESUPPORTED for nested keys.

    Args:
        config_path: Path to YAML configuration file, or None for environment only

    Returns:
        Validated GigsSettings instance

    Raises:
        ValidationError: If configuration fails Pydantic validation
        FileNotFoundError: If config file doesn't exist
    """
    from dynaconf import Dynaconf

    settings_files: list[str] = []
    if config_path is not None:
        # Explicit check for file existence (Dynaconf silently accepts missing files)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        settings_files.append(str(config_path))

    dynaconf_settings = Dynaconf(
        envvar_prefix="GIGS",
        settings_files=settings_files,
        environments=False,
        load_dotenv=False,
        merge_enabled=True,
    )

    # Dynaconf returns uppercase keys; convert to lowercase for Pydantic
    # and drop Dynaconf internals and unrelated GIGS_* variables.
    known = set(GigsSettings.model_fields)
    raw_config: dict[str, Any] = {}
    for key, value in dynaconf_settings.as_dict().items():
        name = key.lower()
        if name in known:
            raw_config[name] = value
    if "options" in raw_config:
        raw_config["options"] = _restore_key_case(raw_config["options"])
    if "test_options" in raw_config:
        raw_config["test_options"] = {
            test_id: _restore_key_case(options)
            for test_id, options in raw_config["test_options"].items()
        }
    return GigsSettings(**raw_config)


def _restore_key_case(options: dict[str, Any]) -> dict[str, Any]:
    """Map option names back to their camelCase spelling.

    Environment variables are upper case (GIGS_OPTIONS__ISSTANDARDNAMESUPPORTED);
    names that do not match a key case-insensitively are left as they are.
    """
    by_lower = {k.value.lower(): k.value for k in ConfigurationKey}
    return {by_lower.get(str(name).lower(), name): value for name, value in options.items()}
