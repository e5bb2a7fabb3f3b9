# src/gigs/engine/configuration.py
"""Optional-feature flags, global and per test.

Every ConfigurationKey is enabled unless configured otherwise. A flag
set for one test method takes precedence over the global value.

Overrides can also be read from a properties file:

    # disable alias checks everywhere
    *.isStandardAliasSupported = false
    # disable name checks for one test only
    Test2202.testWGS84.isStandardNameSupported = false
"""

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from gigs.contracts.enums import ConfigurationKey

if TYPE_CHECKING:
    from gigs.core.config import GigsSettings

logger = structlog.get_logger()

GLOBAL_SCOPE = "*"


class ConfigurationMap:
    """Global flags plus method-scoped overrides."""

    def __init__(
        self,
        global_options: Mapping[ConfigurationKey, bool] | None = None,
        test_options: Mapping[str, Mapping[ConfigurationKey, bool]] | None = None,
    ) -> None:
        self._global: dict[ConfigurationKey, bool] = dict(global_options or {})
        self._by_test: dict[str, dict[ConfigurationKey, bool]] = {
            test_id: dict(options) for test_id, options in (test_options or {}).items()
        }

    @classmethod
    def from_settings(cls, settings: "GigsSettings") -> "ConfigurationMap":
        """Build the map from validated settings (and their options file, if any)."""
        config = cls(
            global_options={ConfigurationKey(k): v for k, v in settings.options.items()},
            test_options={
                test_id: {ConfigurationKey(k): v for k, v in options.items()}
                for test_id, options in settings.test_options.items()
            },
        )
        if settings.options_file is not None:
            config.load_properties(settings.options_file)
        return config

    def set_option(
        self,
        key: ConfigurationKey,
        enabled: bool | None,
        test_id: str | None = None,
    ) -> None:
        """Set a flag globally (test_id None) or for one test; None removes the setting."""
        if test_id is None:
            if enabled is None:
                self._global.pop(key, None)
            else:
                self._global[key] = enabled
            return
        if enabled is None:
            options = self._by_test.get(test_id)
            if options is not None:
                options.pop(key, None)
        else:
            self._by_test.setdefault(test_id, {})[key] = enabled

    def is_enabled(self, key: ConfigurationKey, test_id: str | None = None) -> bool:
        """Return the flag for a test: method override, else global value, else True."""
        if test_id is not None:
            options = self._by_test.get(test_id)
            if options is not None and key in options:
                return options[key]
        return self._global.get(key, True)

    def options_for(
        self, test_id: str, keys: Iterable[ConfigurationKey] = tuple(ConfigurationKey)
    ) -> dict[ConfigurationKey, bool]:
        """Resolve several flags at once for one test."""
        return {key: self.is_enabled(key, test_id) for key in keys}

    def load_properties(self, path: Path) -> int:
        """Read overrides from a properties file.

        An unreadable file is logged and ignored; so are malformed entries.

        Returns:
            Number of overrides applied
        """
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Cannot load options file", path=str(path), error=str(e))
            return 0
        return self.parse_properties(text.splitlines())

    def parse_properties(self, lines: Iterable[str]) -> int:
        """Apply ``<series>.<method>.<key> = <bool>`` and ``*.<key> = <bool>`` lines."""
        applied = 0
        for raw in lines:
            line = raw.strip()
            if not line or line[0] in "#!":
                continue
            prop, sep, value = line.partition("=")
            if not sep:
                prop, sep, value = line.partition(":")
            prop, value = prop.strip(), value.strip()

            scope, _, option = prop.rpartition(".")
            if not sep or not scope or not option:
                logger.warning("Invalid syntax for configuration property", property=prop)
                continue
            key = ConfigurationKey.parse(option)
            if key is None:
                logger.warning("Unknown configuration key", key=option)
                continue
            if value.lower() not in ("true", "false"):
                logger.warning("Option is not a boolean", key=option, value=value)
                continue

            if scope == GLOBAL_SCOPE:
                test_id = None
            else:
                series, _, method = scope.rpartition(".")
                if not series or not method or GLOBAL_SCOPE in scope:
                    logger.warning("Invalid syntax for configuration property", property=prop)
                    continue
                test_id = scope
            self.set_option(key, value.lower() == "true", test_id)
            applied += 1
        return applied
