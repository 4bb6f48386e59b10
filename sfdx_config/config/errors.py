"""
Config errors.

Every failure raised by the config layer derives from ConfigError and
carries a ``name`` matching the error identifiers the sfdx toolchain
reports (e.g. ``UnknownConfigKey``), so callers can branch on either the
class or the name.
"""

from typing import Optional


class ConfigError(Exception):
    """Base class for config resolution and storage errors."""

    name = "ConfigError"

    def __init__(self, message: str, name: Optional[str] = None):
        super().__init__(message)
        if name:
            self.name = name


class UnknownConfigKey(ConfigError):
    """A key outside the allowed property set was queried or set."""

    name = "UnknownConfigKey"

    def __init__(self, key: str):
        super().__init__(f"Unknown config key: {key}")
        self.key = key


class InvalidProjectWorkspace(ConfigError):
    """No sfdx project could be located above the working directory."""

    name = "InvalidProjectWorkspace"


class InvalidConfigValue(ConfigError):
    """A value failed the property's input validator."""

    name = "InvalidConfigValue"

    def __init__(self, key: str, message: str):
        super().__init__(f"Invalid config value for {key}: {message}")
        self.key = key


class ConfigFileError(ConfigError):
    """A settings file exists but could not be parsed."""

    name = "ConfigFileError"


class AggregatorNotLoaded(ConfigError):
    """The aggregator was queried before a load completed."""

    name = "AggregatorNotLoaded"
