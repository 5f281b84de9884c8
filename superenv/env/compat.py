"""
Legacy (standard) build environment.

Used when enhanced resolution is unavailable or was opted out of with
--env=std. The inherited environment is kept as-is apart from the legacy
helper extension and making sure the package manager's bin directory is on
PATH, so tools like pkg-config are found by configure scripts.
"""

import logging
import os
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Tuple

from ..core.layout import Layout
from .spec import EnvironmentSpec

logger = logging.getLogger(__name__)

LegacyExtension = Callable[[EnvironmentSpec], EnvironmentSpec]


def original_paths(environ: Mapping[str, str]) -> Tuple[Path, ...]:
    """Expanded PATH entries of an inherited environment."""
    return tuple(
        Path(os.path.abspath(os.path.expanduser(entry)))
        for entry in environ.get("PATH", "").split(os.pathsep)
        if entry
    )


class CompatibilityShim:
    """
    Apply the legacy environment.

    Args:
        layout: Package manager layout
        legacy_extension: Callable that applies the legacy helper set
    """

    def __init__(self, layout: Layout, legacy_extension: Optional[LegacyExtension] = None):
        self.layout = layout
        self.legacy_extension = legacy_extension

    def apply_legacy(
        self,
        base: Mapping[str, str],
        inherited_paths: Optional[Iterable[Path]] = None,
    ) -> EnvironmentSpec:
        """
        Extend the inherited environment for a legacy build.

        Args:
            base: Inherited environment
            inherited_paths: PATH entries the process started with
                (defaults to the entries of base)

        Returns:
            EnvironmentSpec with at most one PATH change
        """
        spec = EnvironmentSpec(base)
        if inherited_paths is None:
            inherited_paths = original_paths(base)

        if self.legacy_extension is not None:
            spec = self.legacy_extension(spec)

        bin_dir = self.layout.bin_dir
        if bin_dir in {Path(p) for p in inherited_paths}:
            return spec

        current = spec.get("PATH")
        path = f"{bin_dir}:{current}" if current else str(bin_dir)
        logger.debug(f"Prepending {bin_dir} to PATH")
        return spec.updated({"PATH": path})
