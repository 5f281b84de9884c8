"""
Operations formulae can apply to a resolved environment.

Each operation takes an EnvironmentSpec and returns a new one (or a value
read from it); nothing is changed in place.
"""

import re
from functools import partial
from typing import Callable, Dict

from ..core.exceptions import SuperenvError
from ..toolchain.compiler import CompilerKind
from .assembler import COMPILER_KEY, universal_binary
from .spec import EnvironmentSpec

MAKE_JOBS_PATTERN = re.compile(r"-\w*j(\d+)")


def deparallelize(spec: EnvironmentSpec) -> EnvironmentSpec:
    """Build with a single make job."""
    return spec.without(["MAKEFLAGS"])


def make_jobs(spec: EnvironmentSpec) -> int:
    """Job count requested by MAKEFLAGS (at least 1)."""
    match = MAKE_JOBS_PATTERN.search(spec.get("MAKEFLAGS", ""))
    return max(int(match.group(1)) if match else 0, 1)


def compiler(spec: EnvironmentSpec) -> CompilerKind:
    """
    The compiler selected in a resolved environment.

    Raises:
        SuperenvError: If HOMEBREW_CC is missing or not a known compiler
    """
    value = spec.get(COMPILER_KEY)
    try:
        return CompilerKind(value)
    except ValueError:
        raise SuperenvError(f"Unknown compiler in {COMPILER_KEY}: {value}")


def use_compiler(spec: EnvironmentSpec, kind: CompilerKind) -> EnvironmentSpec:
    """Switch the invocation names and selected compiler to the given front end."""
    cc, cxx = kind.drivers
    return spec.updated({"CC": cc, COMPILER_KEY: cc, "CXX": cxx})


Operation = Callable[[EnvironmentSpec], EnvironmentSpec]

OPERATIONS: Dict[str, Operation] = {
    "deparallelize": deparallelize,
    "universal_binary": universal_binary,
    "gcc": partial(use_compiler, kind=CompilerKind.GCC),
    "llvm": partial(use_compiler, kind=CompilerKind.LLVM_GCC),
    "clang": partial(use_compiler, kind=CompilerKind.CLANG),
}
