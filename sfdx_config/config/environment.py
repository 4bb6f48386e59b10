"""
Environment variable overrides for config properties.

Every allowed property can be overridden by an SFDX_ prefixed variable
whose name is the snake-cased, upper-cased property key:

    defaultusername -> SFDX_DEFAULTUSERNAME
    apiVersion      -> SFDX_API_VERSION
"""

import os
import re
from typing import Dict, Iterable, Mapping, Optional

from sfdx_config.config.schema import ConfigPropertyMeta

ENV_PREFIX = "SFDX_"

# Acronym before a capitalized word, capitalized or lower words, bare acronyms, digit runs
_WORD_PATTERN = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def to_snake_case(name: str) -> str:
    """Split *name* into words and join them lower-cased with underscores."""
    return "_".join(word.lower() for word in _WORD_PATTERN.findall(name))


def property_to_env_name(key: str) -> str:
    return f"{ENV_PREFIX}{to_snake_case(key).upper()}"


def read_env_vars(
    properties: Iterable[ConfigPropertyMeta],
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """
    Snapshot the environment overrides for the given properties.

    Args:
        properties: Allowed property descriptors
        environ: Environment mapping to read (defaults to os.environ)

    Returns:
        Dict mapping property keys to the raw variable value, for the
        variables that are set. An empty string counts as set.
    """
    environ = os.environ if environ is None else environ
    env_vars: Dict[str, str] = {}
    for prop in properties:
        value = environ.get(property_to_env_name(prop.key))
        if value is not None:
            env_vars[prop.key] = value
    return env_vars
