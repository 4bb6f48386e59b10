"""
Unit tests for environment variable overrides.
"""

import pytest

from sfdx_config.config.environment import property_to_env_name, read_env_vars, to_snake_case
from sfdx_config.config.schema import ConfigPropertyMeta, get_allowed_properties


@pytest.mark.unit
class TestEnvNames:
    """Property key to env var name mapping."""

    @pytest.mark.parametrize("key, expected", [
        ("defaultusername", "SFDX_DEFAULTUSERNAME"),
        ("apiVersion", "SFDX_API_VERSION"),
        ("logLevel", "SFDX_LOG_LEVEL"),
        ("isvDebuggerSid", "SFDX_ISV_DEBUGGER_SID"),
        ("instanceUrl", "SFDX_INSTANCE_URL"),
    ])
    def test_property_to_env_name(self, key, expected):
        assert property_to_env_name(key) == expected

    @pytest.mark.parametrize("name, expected", [
        ("fooBar", "foo_bar"),
        ("XMLHttpRequest", "xml_http_request"),
        ("foo-bar", "foo_bar"),
        ("__FOO_BAR__", "foo_bar"),
        ("apiVersion2", "api_version_2"),
        ("Foo Bar", "foo_bar"),
    ])
    def test_to_snake_case(self, name, expected):
        assert to_snake_case(name) == expected


@pytest.mark.unit
class TestReadEnvVars:
    """Snapshotting env overrides."""

    def test_reads_only_set_variables(self):
        environ = {"SFDX_LOG_LEVEL": "DEBUG", "SFDX_API_VERSION": "42.0"}

        env_vars = read_env_vars(get_allowed_properties(), environ)

        assert env_vars == {"logLevel": "DEBUG", "apiVersion": "42.0"}

    def test_empty_string_counts_as_set(self):
        env_vars = read_env_vars(get_allowed_properties(), {"SFDX_DEFAULTUSERNAME": ""})
        assert env_vars == {"defaultusername": ""}

    def test_ignores_variables_outside_properties(self):
        environ = {"SFDX_SOMETHING_ELSE": "x", "LOG_LEVEL": "debug"}
        assert read_env_vars(get_allowed_properties(), environ) == {}

    def test_uses_given_properties(self):
        props = [ConfigPropertyMeta(key="customKey")]
        assert read_env_vars(props, {"SFDX_CUSTOM_KEY": "1"}) == {"customKey": "1"}

    def test_defaults_to_process_environment(self, monkeypatch):
        monkeypatch.setenv("SFDX_DEFAULTDEVHUBUSERNAME", "hub@example.com")

        env_vars = read_env_vars(get_allowed_properties())

        assert env_vars["defaultdevhubusername"] == "hub@example.com"
