"""
Config resolution models.

Location names the layer a value was resolved from; ConfigInfo is the
provenance-annotated view of one key; ConfigLayer tags a layer's raw
contents with its location and backing store.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

from sfdx_config.config.environment import property_to_env_name

if TYPE_CHECKING:
    from sfdx_config.config.store import ConfigStore

ConfigValue = Union[str, bool]


class Location(str, Enum):
    """Where a resolved value came from (lowest to highest priority)."""
    GLOBAL = "Global"            # 1. ~/.sfdx/sfdx-config.json
    LOCAL = "Local"              # 2. <project>/.sfdx/sfdx-config.json
    ENVIRONMENT = "Environment"  # 3. SFDX_* environment variable


@dataclass(frozen=True)
class ConfigInfo:
    """Resolved value of a config key and where it came from."""
    key: str
    value: Optional[ConfigValue]
    location: Optional[Location]
    path: Optional[str] = None  # "$SFDX_..." or the settings file path

    @property
    def is_local(self) -> bool:
        return self.location == Location.LOCAL

    @property
    def is_global(self) -> bool:
        return self.location == Location.GLOBAL

    @property
    def is_env_var(self) -> bool:
        return self.location == Location.ENVIRONMENT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dict for display and JSON output."""
        return {
            "key": self.key,
            "value": self.value,
            "location": self.location.value if self.location else None,
            "path": self.path,
        }


@dataclass(frozen=True)
class ConfigLayer:
    """Raw contents of one layer, tagged with its location."""
    location: Location
    contents: Dict[str, Any] = field(default_factory=dict)
    store: Optional["ConfigStore"] = None  # None for the environment layer

    def get(self, key: str) -> Any:
        return self.contents.get(key)

    def has(self, key: str) -> bool:
        return self.contents.get(key) is not None

    def origin_for(self, key: str) -> Optional[str]:
        """Shell reference for environment values, file path for stored ones."""
        if self.location == Location.ENVIRONMENT:
            return f"${property_to_env_name(key)}"
        return self.store.get_path() if self.store else None
