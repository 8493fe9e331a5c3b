"""Shared pytest fixtures for abbrlight tests.

Provides in-memory abbreviation tables, registries and a style resolver
that returns the role tag itself, so span styles read as tags.
For span assertions, see tests/utils.py which can be imported directly.
"""

import pytest

from abbrlight import config
from abbrlight.registry import AbbreviationTable, CommandRegistry, FunctionRegistry


@pytest.fixture(autouse=True)
def isolated_config_file(mocker, tmp_path):
    """Point the config file at an empty temp location for every test."""
    config._reset_config_cache()
    mocker.patch(
        "abbrlight.config.get_config_file_path",
        return_value=str(tmp_path / "no-such-config"),
    )
    yield
    config._reset_config_cache()


@pytest.fixture
def resolve():
    """Style resolver that returns the tag unchanged."""
    return lambda tag: tag


@pytest.fixture
def table():
    return AbbreviationTable()


@pytest.fixture
def functions():
    return FunctionRegistry(["k"])


@pytest.fixture
def commands():
    """Commands known without consulting PATH."""
    return CommandRegistry(["git", "docker", "ls"], search_path=False)
