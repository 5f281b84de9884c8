"""
Deprecated options and configuration variables.

Formulae written against older build environments call options that no
longer do anything, or that were renamed. Each known name is listed here with
what should happen to it, so the behaviour stays data-driven instead of being
spread through the resolver.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class DeprecationAction(Enum):
    """What to do when a deprecated option is used."""

    NOOP = "noop"  # accepted and ignored silently
    REDIRECT = "redirect"  # warn, then run the replacement


@dataclass(frozen=True)
class DeprecatedOption:
    """A build environment option kept only for compatibility."""

    name: str
    action: DeprecationAction
    replacement: Optional[str] = None

    @property
    def message(self) -> str:
        if self.action is DeprecationAction.REDIRECT:
            return f"ENV.{self.name} is deprecated, use ENV.{self.replacement} instead"
        return f"ENV.{self.name} is no longer necessary"


@dataclass(frozen=True)
class DeprecatedVariable:
    """A configuration variable superseded by a typed replacement."""

    name: str
    replacement: str
    value: str

    @property
    def message(self) -> str:
        return f'{self.name} is deprecated, use {self.replacement}="{self.value}" instead'


# Compiler and optimization tweaks the wrapper layer now handles itself
NOOP_OPTIONS = (
    "m64",
    "m32",
    "gcc_4_0_1",
    "fast",
    "O4",
    "O3",
    "O2",
    "Os",
    "Og",
    "O1",
    "libxml2",
    "minimal_optimization",
    "no_optimization",
    "enable_warnings",
    "x11",
    "set_cpu_flags",
    "macosxsdk",
    "remove_macosxsdk",
)

REDIRECTED_OPTIONS = {
    "j1": "deparallelize",
}


def _build_option_table() -> Dict[str, DeprecatedOption]:
    table = {
        name: DeprecatedOption(name, DeprecationAction.NOOP) for name in NOOP_OPTIONS
    }
    for name, replacement in REDIRECTED_OPTIONS.items():
        table[name] = DeprecatedOption(name, DeprecationAction.REDIRECT, replacement)
    return table


DEPRECATED_OPTIONS: Dict[str, DeprecatedOption] = _build_option_table()

# Checked in this order; the first one set wins
DEPRECATED_COMPILER_VARIABLES: Tuple[DeprecatedVariable, ...] = (
    DeprecatedVariable("HOMEBREW_USE_CLANG", "HOMEBREW_CC", "clang"),
    DeprecatedVariable("HOMEBREW_USE_LLVM", "HOMEBREW_CC", "llvm"),
    DeprecatedVariable("HOMEBREW_USE_GCC", "HOMEBREW_CC", "gcc"),
)


def lookup_option(name: str) -> Optional[DeprecatedOption]:
    """
    Look up a deprecated option by name.

    Returns:
        The table entry, or None if the option is not deprecated
    """
    return DEPRECATED_OPTIONS.get(name)


def warn_deprecated(entry) -> None:
    """Emit the one-line deprecation warning for a table entry."""
    logger.warning(entry.message)


__all__ = [
    "DeprecationAction",
    "DeprecatedOption",
    "DeprecatedVariable",
    "NOOP_OPTIONS",
    "REDIRECTED_OPTIONS",
    "DEPRECATED_OPTIONS",
    "DEPRECATED_COMPILER_VARIABLES",
    "lookup_option",
    "warn_deprecated",
]
