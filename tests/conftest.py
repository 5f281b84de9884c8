"""
Pytest configuration and shared fixtures for superenv tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.hosts import (
    clt_host,
    sdk_host,
    lion_host,
    developer_dir,
    sdk_path,
)
from tests.fixtures.layouts import (
    layout,
    superbin,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


@pytest.fixture
def settings(layout):
    """Settings pointing at the test layout, with nothing else configured."""
    from superenv.config.settings import Settings

    return Settings(prefix=layout.prefix)


@pytest.fixture
def base_environ():
    """A small inherited environment with some variables that must not leak."""
    return {
        "HOME": "/Users/test",
        "PATH": "/opt/other/bin:/usr/bin:/bin",
        "CC": "gcc-4.2",
        "CFLAGS": "-O3 -march=native",
        "CDPATH": ".:~",
        "GREP_OPTIONS": "--color=always",
        "CLICOLOR_FORCE": "1",
        "CMAKE_PREFIX_PATH": "/opt/stale",
    }


@pytest.fixture(autouse=True)
def reset_caches():
    """Reset module-level caches between tests."""
    from superenv.core.host import clear_host_cache
    from superenv.toolchain.sdk import clear_sdk_cache

    clear_host_cache()
    clear_sdk_cache()

    yield

    clear_host_cache()
    clear_sdk_cache()
