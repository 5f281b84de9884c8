"""
Host probing for superenv.

This module gathers the facts about the build host that environment
resolution depends on: the macOS release, the installed Xcode and its
developer-tools selection, Command Line Tools presence and processor count.

Features:
- macOS version detection (platform.mac_ver)
- Xcode folder, version and xcode-select validity
- Command Line Tools detection
- Named-release comparisons (e.g. 'mountain_lion')
- Probing is cached for the lifetime of the process

Usage:
    from superenv.core.host import probe_host

    host = probe_host()
    if host.sdk_without_clt:
        print("Builds need an explicit SDK reference")
    if host.os_at_least("mountain_lion"):
        print("Running 10.8 or newer")
"""

import functools
import logging
import os
import platform
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from packaging.version import InvalidVersion, Version

logger = logging.getLogger(__name__)

# Named macOS releases used by version gates
MACOS_RELEASES = {
    "leopard": "10.5",
    "snow_leopard": "10.6",
    "lion": "10.7",
    "mountain_lion": "10.8",
    "mavericks": "10.9",
    "yosemite": "10.10",
}

DEFAULT_XCODE_DEVELOPER_DIR = Path("/Applications/Xcode.app/Contents/Developer")

# First Xcode release that ships as a self-contained app bundle with its SDKs inside
SDK_BUNDLED_XCODE_VERSION = "4.3"

CLT_EXECUTABLES = ("/usr/bin/clang", "/usr/bin/lldb")


def parse_version(value: Optional[str]) -> Optional[Version]:
    """
    Parse a version string, returning None for missing or malformed input.

    Example:
        >>> parse_version("4.6.3")
        <Version('4.6.3')>
        >>> parse_version("unknown") is None
        True
    """
    if not value:
        return None
    try:
        return Version(str(value).strip())
    except InvalidVersion:
        return None


def release_version(release: str) -> Version:
    """
    Resolve a named release ('mountain_lion') or a plain version ('10.8').

    Raises:
        ValueError: If the name is neither a known release nor a version
    """
    version = parse_version(MACOS_RELEASES.get(release, release))
    if version is None:
        raise ValueError(f"Unknown macOS release: {release}")
    return version


@dataclass(frozen=True)
class HostFacts:
    """
    Facts about the build host.

    Attributes:
        os_version: macOS version string (e.g. '10.8.5'), empty when not macOS
        xcode_version: Installed Xcode version (e.g. '4.6'), or None
        xcode_folder: Developer directory of the installed Xcode, or None
        bad_xcode_select_path: True when xcode-select points at '/'
        clt_installed: True when the Command Line Tools are installed
        processor_count: Number of logical processors
    """

    os_version: str = ""
    xcode_version: Optional[str] = None
    xcode_folder: Optional[Path] = None
    bad_xcode_select_path: bool = False
    clt_installed: bool = False
    processor_count: int = 1

    @property
    def os_release(self) -> Optional[Version]:
        """The macOS version truncated to major.minor."""
        version = parse_version(self.os_version)
        if version is None:
            return None
        major, minor = (list(version.release) + [0])[:2]
        return Version(f"{major}.{minor}")

    def os_at_least(self, release: str) -> bool:
        """Check whether the host OS is the named release or newer."""
        current = self.os_release
        return current is not None and current >= release_version(release)

    def os_is(self, release: str) -> bool:
        """Check whether the host OS is exactly the named release."""
        current = self.os_release
        return current is not None and current == release_version(release)

    @property
    def sdk_without_clt(self) -> bool:
        """
        True when Xcode >= 4.3 is installed without the Command Line Tools.

        In that configuration nothing is installed under /usr, so headers,
        libraries and tools have to be taken from inside the Xcode bundle.
        """
        version = parse_version(self.xcode_version)
        if version is None:
            return False
        return version >= Version(SDK_BUNDLED_XCODE_VERSION) and not self.clt_installed

    def __str__(self) -> str:
        parts = [f"macOS {self.os_version or 'unknown'}"]
        if self.xcode_version:
            parts.append(f"Xcode {self.xcode_version}")
        parts.append("CLT" if self.clt_installed else "no CLT")
        parts.append(f"{self.processor_count} CPUs")
        return ", ".join(parts)


def run_command(args: List[str], timeout: int = 10) -> Optional[str]:
    """
    Run a probe command and return its stripped stdout.

    Returns:
        Output text, or None if the command is missing, fails or times out
    """
    try:
        result = subprocess.run(
            args,
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug(f"Command {args[0]} failed: {e}")
        return None

    if result.returncode != 0:
        logger.debug(f"Command {args[0]} returned {result.returncode}")
        return None

    return result.stdout.strip()


@functools.lru_cache(maxsize=1)
def probe_host() -> HostFacts:
    """
    Probe the current host.

    This function is cached - it only runs detection once per process.

    Returns:
        HostFacts for the running machine
    """
    select_path = _detect_xcode_select_path()
    xcode_folder = _detect_xcode_folder(select_path)

    facts = HostFacts(
        os_version=_detect_os_version(),
        xcode_version=_detect_xcode_version(xcode_folder),
        xcode_folder=xcode_folder,
        bad_xcode_select_path=select_path == "/",
        clt_installed=_detect_clt(),
        processor_count=os.cpu_count() or 1,
    )
    logger.debug(f"Probed host: {facts}")
    return facts


def _detect_os_version() -> str:
    if platform.system().lower() != "darwin":
        return ""
    return platform.mac_ver()[0]


def _detect_xcode_select_path() -> Optional[str]:
    return run_command(["xcode-select", "-print-path"])


def _detect_xcode_folder(select_path: Optional[str]) -> Optional[Path]:
    """
    Locate the developer directory of an installed Xcode.

    The xcode-select path is only trusted when it points inside an app
    bundle; a Command Line Tools selection does not count as Xcode.
    """
    if select_path and ".app/" in select_path:
        folder = Path(select_path)
        if folder.is_dir():
            return folder

    if DEFAULT_XCODE_DEVELOPER_DIR.is_dir():
        return DEFAULT_XCODE_DEVELOPER_DIR

    return None


def _detect_xcode_version(xcode_folder: Optional[Path]) -> Optional[str]:
    if xcode_folder is None:
        return None

    output = run_command([str(xcode_folder / "usr" / "bin" / "xcodebuild"), "-version"])
    if not output:
        return None

    match = re.search(r"Xcode (\d+(?:\.\d+)+)", output)
    return match.group(1) if match else None


def _detect_clt() -> bool:
    return all(os.access(path, os.X_OK) for path in CLT_EXECUTABLES)


def clear_host_cache():
    """
    Clear the host probe cache.

    This forces the next call to probe_host() to re-detect.
    """
    probe_host.cache_clear()


__all__ = [
    "MACOS_RELEASES",
    "HostFacts",
    "parse_version",
    "release_version",
    "run_command",
    "probe_host",
    "clear_host_cache",
]
