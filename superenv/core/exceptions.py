"""
Centralized exception hierarchy for superenv.

Only SDK discovery failures are fatal to a build; everything else is handled
where it happens (default substitution or omission).
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class SuperenvError(Exception):
    """Base exception for all superenv errors."""

    pass


# ============================================================================
# Configuration Exceptions
# ============================================================================


class ConfigError(SuperenvError):
    """Configuration parsing or validation error."""

    pass


# ============================================================================
# SDK Exceptions
# ============================================================================


class SDKError(SuperenvError):
    """Base exception for SDK and developer directory discovery errors."""

    pass


class DeveloperDirNotFoundError(SDKError):
    """Raised when no candidate developer directory validates."""

    def __init__(self, candidates=None):
        self.candidates = list(candidates or [])
        msg = "Could not locate a usable Xcode developer directory"
        if self.candidates:
            msg += f" (tried: {', '.join(self.candidates)})"
        super().__init__(msg)


class SDKNotFoundError(SDKError):
    """Raised when the host requires an SDK and none can be found."""

    def __init__(self, version: str = ""):
        self.version = version
        msg = "Xcode is installed without the Command Line Tools and no macOS SDK was found"
        if version:
            msg += f" for {version}"
        super().__init__(msg)


# ============================================================================
# Environment Exceptions
# ============================================================================


class UnknownOptionError(SuperenvError):
    """Raised when an environment option name is not recognized."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown environment option: {name}")
