"""
Filesystem layout of the package manager.

The prefix is where packages are installed and linked; the repository holds
the package manager's own files, including the curated environment-policy
directory and the pkg-config override directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_PREFIX = Path("/usr/local")


def absolute_path(path) -> Path:
    """Expand "~" and make a configured location absolute."""
    return Path(os.path.abspath(os.path.expanduser(str(path))))


@dataclass(frozen=True)
class Layout:
    """
    Package manager prefix and repository.

    Attributes:
        prefix: Install prefix (e.g. /usr/local)
        repository: Package manager checkout (usually the same as prefix)
    """

    prefix: Path = DEFAULT_PREFIX
    repository: Optional[Path] = None

    def __post_init__(self):
        object.__setattr__(self, "prefix", absolute_path(self.prefix))
        repository = self.repository if self.repository is not None else self.prefix
        object.__setattr__(self, "repository", absolute_path(repository))

    @property
    def bin_dir(self) -> Path:
        return self.prefix / "bin"

    def opt_dir(self, dependency: str) -> Path:
        """Stable install location of a dependency (e.g. /usr/local/opt/zlib)."""
        return self.prefix / "opt" / dependency

    @property
    def env_dir(self) -> Path:
        """Curated environment-policy directory, one subdirectory per Xcode version."""
        return self.repository / "Library" / "ENV"

    @property
    def pkgconfig_override_dir(self) -> Path:
        """.pc files for libraries whose .pc files the OS no longer ships."""
        return self.repository / "Library" / "Homebrew" / "pkgconfig"
