"""
Toolchain mode detection.

Decides whether the enhanced ("superenv") environment can be used for a build
or whether the legacy standard environment must be used instead.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Optional

from ..config.settings import BuildFlags
from ..core.host import HostFacts, parse_version
from ..core.layout import Layout

logger = logging.getLogger(__name__)


class ToolchainMode(Enum):
    """Environment resolution mode for one build invocation."""

    ENHANCED = "super"
    LEGACY = "std"


@dataclass(frozen=True)
class DetectionCheck:
    """Result of one enhanced-mode precondition."""

    name: str
    passed: bool
    message: str


def select_superbin(env_dir: Path, xcode_version: Optional[str]) -> Optional[Path]:
    """
    Pick the curated environment directory for the installed Xcode.

    The environment-policy directory holds one subdirectory per Xcode
    version it was written for (e.g. ``4.3``). The newest one that is not
    newer than the installed Xcode is used.

    Args:
        env_dir: Curated environment-policy directory
        xcode_version: Installed Xcode version

    Returns:
        Path to the selected directory, or None if nothing applies
    """
    xcode = parse_version(xcode_version)
    if xcode is None or not env_dir.is_dir():
        return None

    candidates = []
    for child in env_dir.iterdir():
        if not child.is_dir():
            continue
        version = parse_version(child.name)
        if version is None or version > xcode:
            continue
        candidates.append((version, child))

    if not candidates:
        return None
    return max(candidates)[1]


class ToolchainDetector:
    """
    Evaluate the preconditions of enhanced environment resolution.

    Example:
        ```python
        detector = ToolchainDetector(probe_host(), settings.layout)
        if detector.resolve_mode(flags) is ToolchainMode.ENHANCED:
            print(f"Using {detector.superbin}")
        ```
    """

    def __init__(self, host: HostFacts, layout: Layout):
        self.host = host
        self.layout = layout
        self._superbin: Optional[Path] = None
        self._superbin_resolved = False

    @property
    def superbin(self) -> Optional[Path]:
        """Curated environment directory for this host, or None."""
        if not self._superbin_resolved:
            self._superbin = select_superbin(self.layout.env_dir, self.host.xcode_version)
            self._superbin_resolved = True
        return self._superbin

    def checks(self, flags: BuildFlags) -> List[DetectionCheck]:
        """
        Evaluate every precondition.

        Returns:
            One DetectionCheck per precondition, in evaluation order
        """
        superbin = self.superbin
        return [
            DetectionCheck(
                name="xcode-select",
                passed=not self.host.bad_xcode_select_path,
                message=(
                    "xcode-select points at /, xcrun will not work"
                    if self.host.bad_xcode_select_path
                    else "xcode-select path is valid"
                ),
            ),
            DetectionCheck(
                name="Xcode",
                passed=self.host.xcode_folder is not None,
                message=(
                    f"Xcode {self.host.xcode_version or '(unknown version)'} at {self.host.xcode_folder}"
                    if self.host.xcode_folder is not None
                    else "Xcode is not installed"
                ),
            ),
            DetectionCheck(
                name="environment policy",
                passed=superbin is not None,
                message=(
                    f"Using {superbin}"
                    if superbin is not None
                    else f"No usable directory under {self.layout.env_dir}"
                ),
            ),
            DetectionCheck(
                name="--env",
                passed=not flags.env_std,
                message=(
                    "--env=std requested" if flags.env_std else "No --env=std override"
                ),
            ),
        ]

    def resolve_mode(self, flags: BuildFlags) -> ToolchainMode:
        """
        Decide the mode for one invocation.

        Returns:
            ENHANCED if every precondition holds, LEGACY otherwise
        """
        for check in self.checks(flags):
            if not check.passed:
                logger.debug(f"Using standard environment: {check.message}")
                return ToolchainMode.LEGACY
        return ToolchainMode.ENHANCED


def resolve_mode(host: HostFacts, flags: BuildFlags, layout: Layout) -> ToolchainMode:
    """Shorthand for ``ToolchainDetector(host, layout).resolve_mode(flags)``."""
    return ToolchainDetector(host, layout).resolve_mode(flags)
