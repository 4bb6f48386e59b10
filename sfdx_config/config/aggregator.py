"""
Config Aggregator - resolved sfdx config with provenance

Resolution order (highest priority wins):
3. Environment variables    (SFDX_LOG_LEVEL)
2. Project settings         (<project root>/.sfdx/sfdx-config.json)
1. Global settings          ($HOME/.sfdx/sfdx-config.json)

Usage:
    aggregator = await ConfigAggregator.create()
    aggregator.get_value("defaultusername")
    aggregator.get_info("logLevel").path  # "$SFDX_LOG_LEVEL"
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from sfdx_config.config.environment import read_env_vars
from sfdx_config.config.errors import AggregatorNotLoaded, InvalidProjectWorkspace, UnknownConfigKey
from sfdx_config.config.models import ConfigInfo, ConfigLayer, ConfigValue, Location
from sfdx_config.config.schema import ConfigPropertyMeta, get_allowed_properties
from sfdx_config.config.settings import Settings, get_settings
from sfdx_config.config.store import ConfigStore
from sfdx_config.utils.logging import get_logger

logger = get_logger(__name__, prefix="Aggregator")


@dataclass(frozen=True)
class _Snapshot:
    """Everything one load produced. Replaced wholesale on reload."""
    allowed_properties: List[ConfigPropertyMeta]
    local: Optional[ConfigLayer]
    global_: ConfigLayer
    env: ConfigLayer
    config: Dict[str, Any]


class ConfigAggregator:
    """
    Merges the global config, the project config and SFDX_* environment
    variables into one view, and answers where each value came from.

    Build instances with ConfigAggregator.create(); a bare instance has no
    snapshot and raises AggregatorNotLoaded from every query.

    reload() swaps the snapshot; callers sharing an instance must not run
    queries while a reload is in flight.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        self._settings = settings
        self._environ = environ
        self._snapshot: Optional[_Snapshot] = None

    @classmethod
    async def create(
        cls,
        settings: Optional[Settings] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ConfigAggregator":
        """
        Build an aggregator and load all layers.

        Args:
            settings: Where to find the home and project folders
            environ: Environment to read overrides from (defaults to os.environ,
                     read at each load)
        """
        aggregator = cls(settings=settings, environ=environ)
        await aggregator._load_properties()
        return aggregator

    async def reload(self) -> "ConfigAggregator":
        """Re-read every layer from scratch and return self."""
        await self._load_properties()
        return self

    # -------------------------------------------------------------------------
    # Loading
    # -------------------------------------------------------------------------

    async def _load_properties(self) -> None:
        settings = self._settings or get_settings()

        # Outside a project the aggregator resolves to global + environment only
        local_store: Optional[ConfigStore] = None
        try:
            local_store = await ConfigStore.create(
                ConfigStore.get_default_options(is_global=False), settings
            )
        except InvalidProjectWorkspace as e:
            logger.debug(f"No local config: {e}")

        global_store = await ConfigStore.create(
            ConfigStore.get_default_options(is_global=True), settings
        )

        allowed_properties = get_allowed_properties()
        env_layer = ConfigLayer(
            location=Location.ENVIRONMENT,
            contents=read_env_vars(allowed_properties, self._environ),
        )

        # Global must be read and folded first so local overwrites it
        global_layer = ConfigLayer(
            location=Location.GLOBAL,
            contents=await global_store.read(),
            store=global_store,
        )
        local_layer = None
        if local_store is not None:
            local_layer = ConfigLayer(
                location=Location.LOCAL,
                contents=await local_store.read(),
                store=local_store,
            )

        config: Dict[str, Any] = {}
        for layer in (global_layer, local_layer, env_layer):
            if layer is not None:
                config.update(layer.contents)

        self._snapshot = _Snapshot(
            allowed_properties=allowed_properties,
            local=local_layer,
            global_=global_layer,
            env=env_layer,
            config=config,
        )
        logger.debug(
            f"Resolved {len(config)} keys "
            f"(env={len(env_layer.contents)}, "
            f"local={len(local_layer.contents) if local_layer else 'n/a'}, "
            f"global={len(global_layer.contents)})"
        )

    def _require_snapshot(self) -> _Snapshot:
        if self._snapshot is None:
            raise AggregatorNotLoaded(
                "Config aggregator is not loaded; use ConfigAggregator.create()"
            )
        return self._snapshot

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_value(self, key: str) -> Optional[ConfigValue]:
        """
        Get the resolved value of an allowed property.

        Returns None for an allowed key that is set nowhere.

        Raises:
            UnknownConfigKey: If *key* is not an allowed property
        """
        snapshot = self._require_snapshot()
        if not any(prop.key == key for prop in snapshot.allowed_properties):
            raise UnknownConfigKey(key)
        return snapshot.config.get(key)

    def get_location(self, key: str) -> Optional[Location]:
        """
        Get the layer *key* resolves to, or None.

        File layers only count when their value is truthy, so a stored
        false or "" falls through to the next layer here even though
        get_value() may still return it.
        """
        snapshot = self._require_snapshot()
        if snapshot.env.has(key):
            return Location.ENVIRONMENT
        if snapshot.local is not None and snapshot.local.get(key):
            return Location.LOCAL
        if snapshot.global_.get(key):
            return Location.GLOBAL
        return None

    def get_path(self, key: str) -> Optional[str]:
        """
        Get the env var reference ("$SFDX_LOG_LEVEL") or settings file path
        *key* resolves to, or None.

        Unlike get_location(), file layers count whenever they hold a
        non-null value, falsy or not.
        """
        snapshot = self._require_snapshot()
        for layer in (snapshot.env, snapshot.local, snapshot.global_):
            if layer is not None and layer.has(key):
                return layer.origin_for(key)
        return None

    def get_info(self, key: str) -> ConfigInfo:
        """
        Get the value, location and path of an allowed property.

        Raises:
            UnknownConfigKey: If *key* is not an allowed property
        """
        location = self.get_location(key)
        return ConfigInfo(
            key=key,
            value=self.get_value(key),
            location=location,
            path=self.get_path(key),
        )

    def list_config_info(self) -> List[ConfigInfo]:
        """
        Get info for every key in the resolved config, sorted by key.

        Keys that only appear in a settings file are listed as well, even
        when they are not allowed properties.
        """
        snapshot = self._require_snapshot()
        return [
            ConfigInfo(
                key=key,
                value=snapshot.config[key],
                location=self.get_location(key),
                path=self.get_path(key),
            )
            for key in sorted(snapshot.config)
        ]

    # -------------------------------------------------------------------------
    # Layer access
    # -------------------------------------------------------------------------

    def get_local_config(self) -> Optional[ConfigStore]:
        """Project store, or None outside a project."""
        local = self._require_snapshot().local
        return local.store if local else None

    def get_global_config(self) -> ConfigStore:
        return self._require_snapshot().global_.store

    def get_config(self) -> Dict[str, Any]:
        """Copy of the resolved config."""
        return dict(self._require_snapshot().config)

    def get_env_vars(self) -> Dict[str, str]:
        """Copy of the environment overrides, keyed by property."""
        return dict(self._require_snapshot().env.contents)
