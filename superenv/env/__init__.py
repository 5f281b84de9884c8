"""
Build environment construction.

This package provides:
- EnvironmentSpec, the immutable resolved environment
- Search-path construction per category
- Enhanced environment assembly and the legacy compatibility shim
- The per-invocation resolver
"""

from superenv.env.spec import EnvironmentSpec
from superenv.env.paths import (
    DirectoryList,
    PathFacts,
    PathListBuilder,
    SearchPathCategory,
)
from superenv.env.assembler import (
    EnvironmentAssembler,
    determine_make_jobs,
    universal_binary,
)
from superenv.env.compat import CompatibilityShim, original_paths
from superenv.env.operations import (
    OPERATIONS,
    compiler,
    deparallelize,
    make_jobs,
    use_compiler,
)
from superenv.env.resolver import (
    BuildEnvironmentResolver,
    EnhancedStrategy,
    EnvironmentStrategy,
    LegacyStrategy,
)

__all__ = [
    "EnvironmentSpec",
    "DirectoryList",
    "PathFacts",
    "PathListBuilder",
    "SearchPathCategory",
    "EnvironmentAssembler",
    "determine_make_jobs",
    "universal_binary",
    "CompatibilityShim",
    "original_paths",
    "OPERATIONS",
    "compiler",
    "deparallelize",
    "make_jobs",
    "use_compiler",
    "BuildEnvironmentResolver",
    "EnhancedStrategy",
    "EnvironmentStrategy",
    "LegacyStrategy",
]
