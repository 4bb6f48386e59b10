"""
Pytest configuration and shared fixtures.

This file provides common test fixtures used across unit and integration tests:
- Temporary home and project folders
- Settings pointing at those folders
- A helper to write sfdx-config.json files
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from sfdx_config.config.settings import Settings, get_settings


# =============================================================================
# Filesystem Fixtures
# =============================================================================

@pytest.fixture
def home_dir(tmp_path) -> Path:
    """Fake user home holding the global .sfdx folder."""
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Fake sfdx project root."""
    path = tmp_path / "project"
    path.mkdir()
    (path / "sfdx-project.json").write_text('{"packageDirectories": []}')
    return path


@pytest.fixture
def outside_dir(tmp_path) -> Path:
    """Folder that is not inside any sfdx project."""
    path = tmp_path / "elsewhere"
    path.mkdir()
    return path


@pytest.fixture
def write_config():
    """Write an sfdx-config.json under <root>/.sfdx and return its path."""
    def _write(root: Path, data: Dict[str, Any]) -> Path:
        config_file = root / ".sfdx" / "sfdx-config.json"
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(json.dumps(data))
        return config_file
    return _write


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Keep the cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def project_settings(home_dir, project_dir) -> Settings:
    """Settings for a run inside the project."""
    return Settings(home_dir=home_dir, project_dir=project_dir)


@pytest.fixture
def no_project_settings(home_dir, outside_dir) -> Settings:
    """Settings for a run outside any project."""
    return Settings(home_dir=home_dir, project_dir=outside_dir)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Pytest configuration hook."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
