"""
Core functionality for superenv.

This package contains the foundational modules that other components depend on.
"""

from .host import (
    HostFacts,
    MACOS_RELEASES,
    probe_host,
    clear_host_cache,
    parse_version,
    release_version,
)

from .layout import (
    Layout,
    DEFAULT_PREFIX,
)

from .exceptions import (
    SuperenvError,
    ConfigError,
    SDKError,
    DeveloperDirNotFoundError,
    SDKNotFoundError,
    UnknownOptionError,
)

__all__ = [
    "HostFacts",
    "MACOS_RELEASES",
    "probe_host",
    "clear_host_cache",
    "parse_version",
    "release_version",
    "Layout",
    "DEFAULT_PREFIX",
    "SuperenvError",
    "ConfigError",
    "SDKError",
    "DeveloperDirNotFoundError",
    "SDKNotFoundError",
    "UnknownOptionError",
]
