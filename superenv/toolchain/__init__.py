"""
Toolchain facts for environment resolution.

This package provides:
- Enhanced/legacy mode detection
- SDK and developer directory discovery
- Compiler front-end selection
"""

from superenv.toolchain.detector import (
    DetectionCheck,
    ToolchainDetector,
    ToolchainMode,
    resolve_mode,
    select_superbin,
)
from superenv.toolchain.sdk import (
    SDKInfo,
    SDKLocator,
    clear_sdk_cache,
    get_sdk_locator,
    validate_developer_dir,
)
from superenv.toolchain.compiler import (
    COMPILER_NAMES,
    DEFAULT_COMPILER,
    CompilerKind,
    CompilerSelector,
    parse_compiler_name,
    resolve_compiler,
)

__all__ = [
    "DetectionCheck",
    "ToolchainDetector",
    "ToolchainMode",
    "resolve_mode",
    "select_superbin",
    "SDKInfo",
    "SDKLocator",
    "clear_sdk_cache",
    "get_sdk_locator",
    "validate_developer_dir",
    "COMPILER_NAMES",
    "DEFAULT_COMPILER",
    "CompilerKind",
    "CompilerSelector",
    "parse_compiler_name",
    "resolve_compiler",
]
