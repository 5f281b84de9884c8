"""
Configuration for superenv: invocation flags, settings and deprecations.
"""

from superenv.config.settings import (
    BuildFlags,
    Settings,
    load_config_file,
    load_settings,
    DEFAULT_CONFIG_FILE,
)
from superenv.config.deprecations import (
    DeprecationAction,
    DeprecatedOption,
    DeprecatedVariable,
    DEPRECATED_OPTIONS,
    DEPRECATED_COMPILER_VARIABLES,
    lookup_option,
)

__all__ = [
    "BuildFlags",
    "Settings",
    "load_config_file",
    "load_settings",
    "DEFAULT_CONFIG_FILE",
    "DeprecationAction",
    "DeprecatedOption",
    "DeprecatedVariable",
    "DEPRECATED_OPTIONS",
    "DEPRECATED_COMPILER_VARIABLES",
    "lookup_option",
]
