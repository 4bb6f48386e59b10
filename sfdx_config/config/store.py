"""
Config Store - Low-level JSON storage for one config layer

Handles:
- Locating the layer's file (global: ~/.sfdx, local: <project root>/.sfdx)
- Loading sfdx-config.json into an OmegaConf container
- Validated set/unset of allowed properties
- File persistence
"""

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from omegaconf import OmegaConf, DictConfig
from omegaconf.errors import OmegaConfBaseException

from sfdx_config.config.errors import ConfigFileError, InvalidConfigValue, InvalidProjectWorkspace, UnknownConfigKey
from sfdx_config.config.schema import get_property_meta
from sfdx_config.config.settings import Settings, get_settings
from sfdx_config.utils.logging import get_logger

logger = get_logger(__name__, prefix="Store")

CONFIG_FILE_NAME = "sfdx-config.json"
STATE_FOLDER = ".sfdx"
PROJECT_FILE_NAME = "sfdx-project.json"

# "${" preceded by any run of backslashes, raw and in OmegaConf-escaped form
_INTERPOLATION_START = re.compile(r"(\\*)\$\{")
_ESCAPED_INTERPOLATION_START = re.compile(r"(\\*)\\\$\{")


def _escape(value: Any) -> Any:
    """Escape every "${" so OmegaConf stores the string verbatim."""
    if isinstance(value, str):
        return _INTERPOLATION_START.sub(lambda m: m.group(1) * 2 + "\\${", value)
    if isinstance(value, dict):
        return {k: _escape(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_escape(v) for v in value]
    return value


def _unescape(value: Any) -> Any:
    if isinstance(value, str):
        return _ESCAPED_INTERPOLATION_START.sub(
            lambda m: m.group(1)[: len(m.group(1)) // 2] + "${", value
        )
    if isinstance(value, dict):
        return {k: _unescape(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_unescape(v) for v in value]
    return value


def find_project_root(start: Path) -> Path:
    """
    Walk up from *start* to the nearest folder holding sfdx-project.json.

    Raises:
        InvalidProjectWorkspace: If no ancestor is an sfdx project
    """
    start = Path(start).resolve()
    for folder in (start, *start.parents):
        if (folder / PROJECT_FILE_NAME).is_file():
            return folder
    raise InvalidProjectWorkspace(
        f"This directory does not contain a valid Salesforce DX project: {start}"
    )


@dataclass
class ConfigStoreOptions:
    """How to locate a config store."""
    is_global: bool
    filename: str = CONFIG_FILE_NAME
    root_dir: Optional[Path] = None  # parent of .sfdx; skips home/project lookup


class ConfigStore:
    """
    One sfdx-config.json file, either user-global or project-local.

    Use ConfigStore.create() so the root folder is resolved (and a missing
    project reported) before anything is read.
    """

    def __init__(self, options: ConfigStoreOptions, root_dir: Path):
        self.options = options
        self.is_global = options.is_global
        self.config_dir = Path(root_dir) / STATE_FOLDER
        self.path = self.config_dir / options.filename
        self._contents: DictConfig = OmegaConf.create({})

    @staticmethod
    def get_default_options(is_global: bool) -> ConfigStoreOptions:
        return ConfigStoreOptions(is_global=is_global)

    @classmethod
    async def create(
        cls,
        options: Optional[ConfigStoreOptions] = None,
        settings: Optional[Settings] = None,
    ) -> "ConfigStore":
        """
        Resolve the store location and build an unread store.

        Raises:
            InvalidProjectWorkspace: For a local store outside any sfdx project
        """
        options = options or cls.get_default_options(is_global=False)
        settings = settings or get_settings()

        if options.root_dir is not None:
            root_dir = Path(options.root_dir)
        elif options.is_global:
            root_dir = settings.resolved_home_dir()
        else:
            root_dir = find_project_root(settings.resolved_project_dir())

        store = cls(options, root_dir)
        logger.debug(f"Created {'global' if store.is_global else 'local'} store at {store.path}")
        return store

    # -------------------------------------------------------------------------
    # Reading
    # -------------------------------------------------------------------------

    async def read(self) -> Dict[str, Any]:
        """
        Load the file contents, replacing whatever was held before.

        A missing or blank file reads as empty.

        Raises:
            ConfigFileError: If the file is not a JSON object
        """
        if not self.path.exists():
            logger.debug(f"No config file at {self.path}")
            self._contents = OmegaConf.create({})
            return {}

        text = self.path.read_text(encoding="utf-8")
        try:
            data = json.loads(text) if text.strip() else {}
        except json.JSONDecodeError as e:
            raise ConfigFileError(f"Failed to parse {self.path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigFileError(
                f"Config root in {self.path} must be an object, got {type(data).__name__}"
            )

        try:
            self._contents = OmegaConf.create(_escape(data))
        except OmegaConfBaseException as e:
            raise ConfigFileError(f"Unsupported contents in {self.path}: {e}") from e
        logger.debug(f"Loaded {len(data)} keys from {self.path}")
        return self.to_object()

    def get(self, key: str) -> Any:
        return self.to_object().get(key)

    def has(self, key: str) -> bool:
        """True if the raw contents hold a non-null value for *key*."""
        return self.get(key) is not None

    def to_object(self) -> Dict[str, Any]:
        """Plain dict copy of the contents; interpolation syntax is left as-is."""
        return _unescape(OmegaConf.to_container(self._contents, resolve=False))

    def get_path(self) -> str:
        return str(self.path)

    def exists(self) -> bool:
        return self.path.exists()

    # -------------------------------------------------------------------------
    # Writing
    # -------------------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        """
        Set an allowed property in memory; call write() to persist.

        Raises:
            UnknownConfigKey: If *key* is not an allowed property
            InvalidConfigValue: If the property's validator rejects *value*
        """
        meta = get_property_meta(key)
        if meta is None:
            raise UnknownConfigKey(key)
        if not meta.validate_value(value):
            raise InvalidConfigValue(key, meta.input.failed_message)
        try:
            self._contents[key] = _escape(value)
        except OmegaConfBaseException as e:
            raise InvalidConfigValue(key, str(e)) from e

    def unset(self, key: str) -> bool:
        """Remove *key* from memory. Returns True if it was present."""
        if key not in self._contents:
            return False
        del self._contents[key]
        return True

    async def write(self) -> Dict[str, Any]:
        """Persist the contents as JSON, creating the .sfdx folder if needed."""
        contents = self.to_object()
        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(contents, indent=2) + "\n", encoding="utf-8")
        logger.info(f"Saved to {self.path}: {list(contents.keys())}")
        return contents
