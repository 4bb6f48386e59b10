"""
Allowed config properties.

The property set is fixed: the aggregator only resolves keys listed here,
and the stores refuse to set anything else.
"""

import re
from typing import Any, Callable, List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field


SALESFORCE_DOMAINS = (
    ".salesforce.com",
    ".force.com",
    ".cloudforce.com",
    ".database.com",
    ".salesforce.mil",
)

LOG_LEVELS = ("trace", "debug", "info", "warn", "error", "fatal")

_API_VERSION_PATTERN = re.compile(r"^[1-9]\d\.0$")


def is_salesforce_domain(value: str) -> bool:
    """True for an https URL whose host is a Salesforce-owned domain (or localhost)."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    host = (parsed.hostname or "").lower()
    if parsed.scheme != "https" or not host:
        return False
    return host == "localhost" or host.endswith(SALESFORCE_DOMAINS)


def _is_api_version(value: Any) -> bool:
    return isinstance(value, str) and bool(_API_VERSION_PATTERN.match(value))


def _is_boolean(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    return isinstance(value, str) and value.lower() in ("true", "false")


def _is_log_level(value: Any) -> bool:
    return isinstance(value, str) and value.lower() in LOG_LEVELS


class ConfigPropertyInput(BaseModel):
    """Validation rule for values written to a property."""
    validator: Callable[[Any], bool]
    failed_message: str


class ConfigPropertyMeta(BaseModel):
    """Descriptor of one allowed config property."""
    key: str = Field(..., description="Property key (e.g., 'defaultusername')")
    description: str = ""
    input: Optional[ConfigPropertyInput] = None

    def validate_value(self, value: Any) -> bool:
        # None means "unset" and is always accepted
        if value is None or self.input is None:
            return True
        return bool(self.input.validator(value))


DEFAULT_DEV_HUB_USERNAME = "defaultdevhubusername"
DEFAULT_USERNAME = "defaultusername"

ALLOWED_PROPERTIES: List[ConfigPropertyMeta] = [
    ConfigPropertyMeta(
        key="apiVersion",
        description="API version used for every request to the org",
        input=ConfigPropertyInput(
            validator=_is_api_version,
            failed_message="Specify a valid Salesforce API version, e.g. 42.0",
        ),
    ),
    ConfigPropertyMeta(
        key=DEFAULT_DEV_HUB_USERNAME,
        description="Username or alias of the default Dev Hub org",
    ),
    ConfigPropertyMeta(
        key=DEFAULT_USERNAME,
        description="Username or alias of the default org",
    ),
    ConfigPropertyMeta(
        key="disableTelemetry",
        description="Opt out of usage data collection",
        input=ConfigPropertyInput(
            validator=_is_boolean,
            failed_message="The value must be true or false",
        ),
    ),
    ConfigPropertyMeta(
        key="instanceUrl",
        description="Login URL of the Salesforce instance",
        input=ConfigPropertyInput(
            validator=is_salesforce_domain,
            failed_message="Specify a valid Salesforce instance URL",
        ),
    ),
    ConfigPropertyMeta(
        key="isvDebuggerSid",
        description="Session id used by the ISV debugger",
    ),
    ConfigPropertyMeta(
        key="isvDebuggerUrl",
        description="Instance URL used by the ISV debugger",
    ),
    ConfigPropertyMeta(
        key="logLevel",
        description="Logging level of the sfdx toolchain",
        input=ConfigPropertyInput(
            validator=_is_log_level,
            failed_message=f"The value must be one of: {', '.join(LOG_LEVELS)}",
        ),
    ),
]


def get_allowed_properties() -> List[ConfigPropertyMeta]:
    """Return a copy of the allowed property descriptors."""
    return list(ALLOWED_PROPERTIES)


def get_property_meta(key: str) -> Optional[ConfigPropertyMeta]:
    for prop in ALLOWED_PROPERTIES:
        if prop.key == key:
            return prop
    return None


def is_allowed(key: str) -> bool:
    return get_property_meta(key) is not None
