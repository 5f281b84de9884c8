"""
Compiler front-end selection.

The build always invokes the generic ``cc``/``c++`` driver names; the
compiler chosen here is exported separately so the compiler-wrapper layer
knows which real front end to call and which flags it understands.
"""

import logging
from enum import Enum
from typing import Optional, Tuple

from ..config.deprecations import DEPRECATED_COMPILER_VARIABLES, warn_deprecated
from ..config.settings import BuildFlags, Settings

logger = logging.getLogger(__name__)


class CompilerKind(Enum):
    """Compiler front ends the wrapper layer can dispatch to."""

    CLANG = "clang"
    GCC = "gcc"
    LLVM_GCC = "llvm-gcc"

    @property
    def symbol(self) -> str:
        """Short name used by formulae ('clang', 'gcc', 'llvm')."""
        return "llvm" if self is CompilerKind.LLVM_GCC else self.value

    @property
    def drivers(self) -> Tuple[str, str]:
        """C and C++ executable names for this front end."""
        if self is CompilerKind.CLANG:
            return ("clang", "clang++")
        return (self.value, "g++")


DEFAULT_COMPILER = CompilerKind.CLANG

# Accepted values of the compiler setting; matching is case-sensitive
COMPILER_NAMES = {
    "clang": CompilerKind.CLANG,
    "gcc": CompilerKind.GCC,
    "llvm": CompilerKind.LLVM_GCC,
    "llvm-gcc": CompilerKind.LLVM_GCC,
}


def parse_compiler_name(value: Optional[str]) -> Optional[CompilerKind]:
    """Map a compiler setting value to a CompilerKind, or None if unknown."""
    if value is None:
        return None
    return COMPILER_NAMES.get(value)


class CompilerSelector:
    """
    Resolve the compiler for one invocation.

    Precedence, first match wins:
    1. --use-gcc, --use-llvm, --use-clang
    2. HOMEBREW_CC
    3. Deprecated HOMEBREW_USE_CLANG / HOMEBREW_USE_LLVM / HOMEBREW_USE_GCC
    4. clang

    Selection never fails: invalid values warn and fall through to the default.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    def resolve(self, flags: BuildFlags) -> CompilerKind:
        kind = self._from_flags(flags)
        if kind is not None:
            return kind

        try:
            kind = self._from_setting() or self._from_deprecated_variables()
        except Exception as e:
            logger.debug(f"Compiler selection failed, using {DEFAULT_COMPILER.value}: {e}")
            kind = None

        return kind or DEFAULT_COMPILER

    def _from_flags(self, flags: BuildFlags) -> Optional[CompilerKind]:
        if flags.use_gcc:
            return CompilerKind.GCC
        if flags.use_llvm:
            return CompilerKind.LLVM_GCC
        if flags.use_clang:
            return CompilerKind.CLANG
        return None

    def _from_setting(self) -> Optional[CompilerKind]:
        value = self.settings.cc
        if value is None:
            return None

        kind = parse_compiler_name(value)
        if kind is None:
            logger.warning(f"Invalid value for HOMEBREW_CC: {value}")
        return kind

    def _from_deprecated_variables(self) -> Optional[CompilerKind]:
        for variable in DEPRECATED_COMPILER_VARIABLES:
            if self.settings.deprecated_flag(variable.name):
                warn_deprecated(variable)
                return parse_compiler_name(variable.value)
        return None


def resolve_compiler(flags: BuildFlags, settings: Settings) -> CompilerKind:
    """Shorthand for ``CompilerSelector(settings).resolve(flags)``."""
    return CompilerSelector(settings).resolve(flags)
