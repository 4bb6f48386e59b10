"""
Integration tests for end-to-end config resolution.

These tests run the aggregator against real files and the real process
environment:
1. Global config in a fake home folder
2. Optional project config in a fake sfdx project
3. SFDX_* variables set on the process
"""

import pytest

from sfdx_config.config.aggregator import ConfigAggregator
from sfdx_config.config.models import Location
from sfdx_config.config.settings import get_settings
from sfdx_config.config.store import ConfigStore


@pytest.mark.integration
class TestResolutionScenarios:

    @pytest.mark.asyncio
    async def test_env_log_level_without_project(
        self, monkeypatch, no_project_settings, home_dir, write_config
    ):
        monkeypatch.setenv("SFDX_LOG_LEVEL", "DEBUG")
        write_config(home_dir, {"logLevel": "INFO"})

        aggregator = await ConfigAggregator.create(settings=no_project_settings)

        assert aggregator.get_value("logLevel") == "DEBUG"
        assert aggregator.get_location("logLevel") == Location.ENVIRONMENT
        assert aggregator.get_path("logLevel") == "$SFDX_LOG_LEVEL"
        assert aggregator.get_local_config() is None

    @pytest.mark.asyncio
    async def test_local_username_over_global(
        self, monkeypatch, project_settings, home_dir, project_dir, write_config
    ):
        monkeypatch.delenv("SFDX_DEFAULTUSERNAME", raising=False)
        write_config(home_dir, {"defaultusername": "bob"})
        local_path = write_config(project_dir.resolve(), {"defaultusername": "alice"})

        aggregator = await ConfigAggregator.create(settings=project_settings)
        info = aggregator.get_info("defaultusername")

        assert info.value == "alice"
        assert info.location == Location.LOCAL
        assert info.path == str(local_path)
        assert aggregator.get_local_config().get_path() == str(local_path)

    @pytest.mark.asyncio
    async def test_settings_from_environment(self, monkeypatch, home_dir, project_dir, write_config):
        monkeypatch.setenv("SFDX_CONFIG_HOME_DIR", str(home_dir))
        monkeypatch.setenv("SFDX_CONFIG_PROJECT_DIR", str(project_dir))
        monkeypatch.delenv("SFDX_API_VERSION", raising=False)
        write_config(home_dir, {"apiVersion": "42.0"})

        aggregator = await ConfigAggregator.create()

        assert get_settings().home_dir == home_dir
        assert aggregator.get_value("apiVersion") == "42.0"
        assert aggregator.get_location("apiVersion") == Location.GLOBAL

    @pytest.mark.asyncio
    async def test_store_writes_are_visible_after_reload(self, project_settings):
        aggregator = await ConfigAggregator.create(settings=project_settings, environ={})
        assert aggregator.get_value("defaultusername") is None

        store = await ConfigStore.create(ConfigStore.get_default_options(False), project_settings)
        await store.read()
        store.set("defaultusername", "alice")
        await store.write()

        assert aggregator.get_value("defaultusername") is None
        await aggregator.reload()
        assert aggregator.get_value("defaultusername") == "alice"
        assert aggregator.get_info("defaultusername").is_local
