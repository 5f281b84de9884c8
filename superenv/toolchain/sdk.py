"""
SDK and developer directory discovery.

When Xcode 4.3+ is installed without the Command Line Tools, nothing lives
under /usr and the build has to be pointed at the SDK inside the Xcode
bundle. This module finds that bundle's developer directory, its macOS SDK,
and the X11 installation prefix.

Results are memoized: host facts do not change during a build, so each
lookup runs at most once per process.

Usage:
    from superenv.toolchain.sdk import get_sdk_locator

    locator = get_sdk_locator(host, settings.developer_dir)
    developer_dir = locator.locate_developer_dir()
    sdk = locator.locate_sdk_path()
"""

import functools
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, List, Optional

from ..core.exceptions import DeveloperDirNotFoundError
from ..core.host import DEFAULT_XCODE_DEVELOPER_DIR, HostFacts, run_command

logger = logging.getLogger(__name__)

XCODE_BUNDLE_ID = "com.apple.dt.Xcode"

# xcrun shim installed by the OS; it is what we are trying to get away from
SYSTEM_XCRUN = "/usr/bin/xcrun"

X11_CANDIDATES = (Path("/usr/X11"), Path("/opt/X11"))


@dataclass(frozen=True)
class SDKInfo:
    """Resolved SDK facts for an SDK-without-CLT host."""

    developer_dir: Path
    sdk_path: Optional[Path]


def validate_developer_dir(prefix) -> Optional[Path]:
    """
    Check that a candidate developer directory can dispatch tools.

    A candidate is accepted when it contains an executable ``usr/bin/xcrun``
    that is not the system's own shim.

    Args:
        prefix: Candidate path (str or Path, surrounding whitespace ignored)

    Returns:
        The candidate as a Path, or None if it does not validate
    """
    if prefix is None:
        return None
    prefix = str(prefix).strip()
    if not prefix:
        return None

    xcrun = os.path.join(prefix, "usr", "bin", "xcrun")
    if os.path.normpath(xcrun) == SYSTEM_XCRUN:
        return None
    if not (os.path.isfile(xcrun) and os.access(xcrun, os.X_OK)):
        return None
    return Path(prefix)


class SDKLocator:
    """
    Locate the developer directory, SDK and X11 prefix for a host.

    Args:
        host: Probed host facts
        developer_dir_override: Explicit developer directory (DEVELOPER_DIR)
        runner: Command runner returning stdout or None (injectable for tests)
    """

    def __init__(
        self,
        host: HostFacts,
        developer_dir_override: Optional[str] = None,
        runner: Callable[[List[str]], Optional[str]] = run_command,
    ):
        self.host = host
        self.developer_dir_override = developer_dir_override
        self.runner = runner
        self._developer_dir: Optional[Path] = None
        self._sdk_path: Optional[Path] = None
        self._sdk_resolved = False
        self._x11_prefix: Optional[Path] = None
        self._x11_resolved = False

    def _developer_dir_candidates(self) -> Iterator[str]:
        """Yield candidates lazily so later commands only run when needed."""
        if self.developer_dir_override:
            yield self.developer_dir_override

        selected = self.runner(["xcode-select", "-print-path"])
        if selected:
            yield selected

        yield str(DEFAULT_XCODE_DEVELOPER_DIR)

        found = self.runner(["mdfind", f"kMDItemCFBundleIdentifier == '{XCODE_BUNDLE_ID}'"])
        for bundle in (found or "").splitlines():
            if bundle.strip():
                yield str(Path(bundle.strip()) / "Contents" / "Developer")

    def locate_developer_dir(self) -> Path:
        """
        Find the Xcode developer directory.

        Tries, in order: the explicit override, the active xcode-select
        path, the default install location, then a Spotlight lookup of the
        Xcode bundle.

        Raises:
            DeveloperDirNotFoundError: If no candidate validates
        """
        if self._developer_dir is not None:
            return self._developer_dir

        tried = []
        for candidate in self._developer_dir_candidates():
            developer_dir = validate_developer_dir(candidate)
            if developer_dir is not None:
                logger.debug(f"Using developer directory {developer_dir}")
                self._developer_dir = developer_dir
                return developer_dir
            logger.debug(f"Rejected developer directory candidate: {candidate}")
            tried.append(str(candidate).strip())

        raise DeveloperDirNotFoundError(tried)

    def _sdk_candidates(self, developer_dir: Path) -> List[Path]:
        release = self.host.os_release
        if release is None:
            return []
        name = f"MacOSX{release}.sdk"
        return [
            developer_dir / "Platforms" / "MacOSX.platform" / "Developer" / "SDKs" / name,
            Path("/Developer/SDKs") / name,
        ]

    def locate_sdk_path(self) -> Optional[Path]:
        """
        Find the macOS SDK matching the running OS release.

        Returns:
            SDK root, or None if no SDK for this release is installed

        Raises:
            DeveloperDirNotFoundError: If the developer directory cannot be found
        """
        if not self._sdk_resolved:
            developer_dir = self.locate_developer_dir()
            self._sdk_path = next(
                (path for path in self._sdk_candidates(developer_dir) if path.is_dir()),
                None,
            )
            self._sdk_resolved = True
            if self._sdk_path is None:
                logger.debug(f"No SDK for macOS {self.host.os_release} under {developer_dir}")
        return self._sdk_path

    def x11_prefix(self) -> Optional[Path]:
        """
        Find the X11 installation prefix.

        The SDK's own X11 tree is the last candidate on every host. It is
        only looked up when no system prefix matches, and skipped when no
        developer directory can be found.

        Returns:
            First prefix with an include directory, or None
        """
        if not self._x11_resolved:
            self._x11_prefix = next(
                (path for path in X11_CANDIDATES if (path / "include").is_dir()), None
            )
            if self._x11_prefix is None:
                self._x11_prefix = self._sdk_x11_prefix()
            self._x11_resolved = True
        return self._x11_prefix

    def _sdk_x11_prefix(self) -> Optional[Path]:
        try:
            sdk = self.locate_sdk_path()
        except DeveloperDirNotFoundError as e:
            logger.debug(f"Skipping SDK X11 lookup: {e}")
            return None
        if sdk is None:
            return None
        prefix = sdk / "usr" / "X11"
        return prefix if (prefix / "include").is_dir() else None

    def info(self) -> SDKInfo:
        """Resolve developer directory and SDK path together."""
        return SDKInfo(
            developer_dir=self.locate_developer_dir(),
            sdk_path=self.locate_sdk_path(),
        )


@functools.lru_cache(maxsize=None)
def get_sdk_locator(
    host: HostFacts, developer_dir_override: Optional[str] = None
) -> SDKLocator:
    """
    Get the process-wide SDKLocator for a host.

    This function is cached - one locator, and therefore one set of
    discovery results, per host and override.
    """
    return SDKLocator(host, developer_dir_override)


def clear_sdk_cache():
    """Forget memoized SDK, developer directory and X11 lookups."""
    get_sdk_locator.cache_clear()


__all__ = [
    "SDKInfo",
    "SDKLocator",
    "validate_developer_dir",
    "get_sdk_locator",
    "clear_sdk_cache",
]
