"""
Configuration module - layered sfdx config resolution with provenance.
"""

from .aggregator import ConfigAggregator
from .environment import (
    property_to_env_name,
    read_env_vars,
    to_snake_case,
)
from .errors import (
    AggregatorNotLoaded,
    ConfigError,
    ConfigFileError,
    InvalidConfigValue,
    InvalidProjectWorkspace,
    UnknownConfigKey,
)
from .models import (
    ConfigInfo,
    ConfigLayer,
    Location,
)
from .schema import (
    ALLOWED_PROPERTIES,
    ConfigPropertyMeta,
    get_allowed_properties,
    get_property_meta,
    is_allowed,
)
from .settings import Settings, get_settings
from .store import (
    ConfigStore,
    ConfigStoreOptions,
    find_project_root,
)

__all__ = [
    # Aggregation
    "ConfigAggregator",
    "ConfigInfo",
    "ConfigLayer",
    "Location",
    # Environment
    "property_to_env_name",
    "read_env_vars",
    "to_snake_case",
    # Errors
    "AggregatorNotLoaded",
    "ConfigError",
    "ConfigFileError",
    "InvalidConfigValue",
    "InvalidProjectWorkspace",
    "UnknownConfigKey",
    # Schema
    "ALLOWED_PROPERTIES",
    "ConfigPropertyMeta",
    "get_allowed_properties",
    "get_property_meta",
    "is_allowed",
    # Settings
    "Settings",
    "get_settings",
    # Store
    "ConfigStore",
    "ConfigStoreOptions",
    "find_project_root",
]
