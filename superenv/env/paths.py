"""
Search-path construction for the build environment.

Each search-path category (binaries, pkg-config files, CMake prefixes,
includes and libraries, aclocal macros) gets an ordered list of directories:
dependency-specific entries first, then the package manager's global prefix,
then optional X11 entries, then system and SDK-relative entries.

Candidates are deduplicated (first occurrence wins) and filtered to
directories that exist, so a missing optional location is simply omitted.

Example:
    ```python
    builder = PathListBuilder(layout, PathFacts(superbin=superbin))
    paths = builder.build(SearchPathCategory.BINARY, ["openssl", "zlib"])
    env["PATH"] = paths.to_path_string()
    ```
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.layout import Layout

logger = logging.getLogger(__name__)

SYSTEM_BIN_DIRS = ("/usr/bin", "/bin", "/usr/sbin", "/sbin")

# Shipped by XQuartz regardless of the X11 prefix in use
X11_ACLOCAL_DIR = "/opt/X11/share/aclocal"

PYTHON_HEADERS_VERSION = "2.7"

OPENGL_FRAMEWORK = Path("System/Library/Frameworks/OpenGL.framework/Versions/Current")
PYTHON_FRAMEWORK = Path("System/Library/Frameworks/Python.framework/Versions/Current")


class SearchPathCategory(Enum):
    """Search-path categories and the variable each one is exported as."""

    BINARY = "PATH"
    PKG_CONFIG = "PKG_CONFIG_PATH"
    CMAKE_PREFIX = "CMAKE_PREFIX_PATH"
    CMAKE_INCLUDE = "CMAKE_INCLUDE_PATH"
    CMAKE_LIBRARY = "CMAKE_LIBRARY_PATH"
    ACLOCAL = "ACLOCAL_PATH"

    @property
    def variable(self) -> str:
        return self.value


@dataclass(frozen=True)
class DirectoryList:
    """
    Ordered, duplicate-free list of existing directories.

    Build instances with from_candidates(); entries are absolute path strings.
    """

    entries: Tuple[str, ...] = ()

    @classmethod
    def from_candidates(cls, candidates: Iterable) -> "DirectoryList":
        """
        Make candidates absolute, deduplicate them keeping first occurrences,
        then keep only existing directories.

        "~" is expanded and relative candidates are taken from the current
        directory, so "/x", "/x/" and "/a/../x" count as one entry.
        """
        seen = set()
        unique = []
        for candidate in candidates:
            path = os.path.abspath(os.path.expanduser(str(candidate)))
            if path in seen:
                continue
            seen.add(path)
            unique.append(path)
        return cls(tuple(path for path in unique if os.path.isdir(path)))

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, item) -> bool:
        return os.path.abspath(os.path.expanduser(str(item))) in self.entries

    def to_path_string(self) -> Optional[str]:
        """Colon-joined entries, or None when the list is empty."""
        return ":".join(self.entries) or None


@dataclass(frozen=True)
class PathFacts:
    """
    Host facts that path construction depends on.

    These are resolved once per invocation and passed in, so the builder
    itself never probes the host.

    Attributes:
        superbin: Curated environment directory (enhanced mode only)
        sdk_without_clt: Xcode >= 4.3 is installed without Command Line Tools
        developer_dir: Xcode developer directory (SDK-without-CLT only)
        sdk_path: macOS SDK root (SDK-without-CLT only)
        x11_prefix: X11 installation prefix, if any
        pkgconfig_override: The OS no longer ships some .pc files
    """

    superbin: Optional[Path] = None
    sdk_without_clt: bool = False
    developer_dir: Optional[Path] = None
    sdk_path: Optional[Path] = None
    x11_prefix: Optional[Path] = None
    pkgconfig_override: bool = False

    @property
    def sdk_root(self) -> Path:
        """Root that SDK-relative system paths hang off ('/' outside SDK mode)."""
        if self.sdk_without_clt and self.sdk_path is not None:
            return self.sdk_path
        return Path("/")


class PathListBuilder:
    """
    Build the directory list for each search-path category.

    Args:
        layout: Package manager layout
        facts: Resolved host facts
    """

    def __init__(self, layout: Layout, facts: PathFacts):
        self.layout = layout
        self.facts = facts

    def build(
        self,
        category: SearchPathCategory,
        dependencies: Sequence[str] = (),
        x11: bool = False,
    ) -> DirectoryList:
        """
        Build the directory list for one category.

        Args:
            category: Search-path category
            dependencies: Build dependency names, in declaration order
            x11: Whether the package asked for X11

        Returns:
            DirectoryList in priority order
        """
        candidates = {
            SearchPathCategory.BINARY: self._binary,
            SearchPathCategory.PKG_CONFIG: self._pkg_config,
            SearchPathCategory.CMAKE_PREFIX: self._cmake_prefix,
            SearchPathCategory.CMAKE_INCLUDE: self._cmake_include,
            SearchPathCategory.CMAKE_LIBRARY: self._cmake_library,
            SearchPathCategory.ACLOCAL: self._aclocal,
        }[category](list(dependencies), x11)

        paths = DirectoryList.from_candidates(candidates)
        logger.debug(f"{category.variable}: {len(paths)} of {len(candidates)} candidates exist")
        return paths

    def _x11(self, x11: bool) -> Optional[Path]:
        return self.facts.x11_prefix if x11 else None

    def _binary(self, dependencies: List[str], x11: bool) -> List:
        paths = []
        if self.facts.superbin is not None:
            paths.append(self.facts.superbin)
        if self.facts.sdk_without_clt and self.facts.developer_dir is not None:
            developer_dir = self.facts.developer_dir
            paths.append(developer_dir / "usr" / "bin")
            paths.append(
                developer_dir / "Toolchains" / "XcodeDefault.xctoolchain" / "usr" / "bin"
            )
        paths += [self.layout.opt_dir(dep) / "bin" for dep in dependencies]
        paths.append(self.layout.bin_dir)
        x11_prefix = self._x11(x11)
        if x11_prefix is not None:
            paths.append(x11_prefix / "bin")
        paths += SYSTEM_BIN_DIRS
        return paths

    def _pkg_config(self, dependencies: List[str], x11: bool) -> List:
        prefix = self.layout.prefix
        paths = [self.layout.opt_dir(dep) / "lib" / "pkgconfig" for dep in dependencies]
        paths += [self.layout.opt_dir(dep) / "share" / "pkgconfig" for dep in dependencies]
        paths.append(prefix / "lib" / "pkgconfig")
        paths.append(prefix / "share" / "pkgconfig")
        # ours go ahead of X11's, which duplicates some of the same libraries
        x11_prefix = self._x11(x11)
        if x11_prefix is not None:
            paths.append(x11_prefix / "lib" / "pkgconfig")
            paths.append(x11_prefix / "share" / "pkgconfig")
        if self.facts.pkgconfig_override:
            paths.append(self.layout.pkgconfig_override_dir)
        return paths

    def _cmake_prefix(self, dependencies: List[str], x11: bool) -> List:
        paths = [self.layout.opt_dir(dep) for dep in dependencies]
        paths.append(self.layout.prefix)
        if self.facts.sdk_without_clt and self.facts.sdk_path is not None:
            paths.append(self.facts.sdk_path / "usr")
        return paths

    def _cmake_include(self, dependencies: List[str], x11: bool) -> List:
        sdk = self.facts.sdk_root
        x11_prefix = self._x11(x11)
        paths = []
        if x11_prefix is not None:
            paths.append(x11_prefix / "include" / "freetype2")
        # TODO: ask the dependency whether it provides libxml2 headers instead of matching the name
        if "libxml2" not in dependencies:
            paths.append(sdk / "usr" / "include" / "libxml2")
        if self.facts.sdk_without_clt:
            paths.append(sdk / "usr" / "include" / "apache2")
            paths.append(
                sdk / PYTHON_FRAMEWORK / "include" / f"python{PYTHON_HEADERS_VERSION}"
            )
        if not x11:
            paths.append(sdk / OPENGL_FRAMEWORK / "Headers")
        if x11_prefix is not None:
            paths.append(x11_prefix / "include")
        return paths

    def _cmake_library(self, dependencies: List[str], x11: bool) -> List:
        paths = []
        # GL used to come with X11, so builds expect to find it without asking
        if not x11:
            paths.append(self.facts.sdk_root / OPENGL_FRAMEWORK / "Libraries")
        x11_prefix = self._x11(x11)
        if x11_prefix is not None:
            paths.append(x11_prefix / "lib")
        return paths

    def _aclocal(self, dependencies: List[str], x11: bool) -> List:
        paths = [self.layout.opt_dir(dep) / "share" / "aclocal" for dep in dependencies]
        paths.append(self.layout.prefix / "share" / "aclocal")
        if x11:
            paths.append(X11_ACLOCAL_DIR)
        return paths
