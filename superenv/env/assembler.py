"""
Enhanced build environment assembly.

Starting from the inherited environment, drop every variable that could
leak compiler or search-path state into the build, then set exactly what the
build needs: the generic compiler driver names, job parallelism, one
variable per search-path category, and the settings consumed by the
compiler-wrapper layer (selected compiler, configuration flags, SDK root).

Usage:
    assembler = EnvironmentAssembler(settings, host, superbin=detector.superbin)
    spec = assembler.assemble(["openssl", "zlib"], x11=False, flags=flags)
"""

import logging
import os
from typing import Mapping, Optional, Sequence

from ..config.settings import BuildFlags, Settings
from ..core.exceptions import SDKNotFoundError
from ..core.host import HostFacts
from ..toolchain.compiler import CompilerSelector
from ..toolchain.sdk import SDKInfo, SDKLocator, get_sdk_locator
from .paths import PathFacts, PathListBuilder, SearchPathCategory
from .spec import EnvironmentSpec

logger = logging.getLogger(__name__)

# Build-relevant variables removed before every resolution
RESET_KEYS = (
    "CC",
    "CXX",
    "CPP",
    "OBJC",
    "MAKE",
    "CFLAGS",
    "CXXFLAGS",
    "OBJCFLAGS",
    "OBJCXXFLAGS",
    "LDFLAGS",
    "CPPFLAGS",
    "MACOS_DEPLOYMENT_TARGET",
    "SDKROOT",
    "CMAKE_PREFIX_PATH",
    "CMAKE_INCLUDE_PATH",
    "CMAKE_FRAMEWORK_PATH",
)

PROBLEMATIC_KEYS = (
    "CDPATH",  # make recipes that change directory print the new one
    "GREP_OPTIONS",  # can break CMake
    "CLICOLOR_FORCE",  # colored output confuses autotools
)

COMPILER_KEY = "HOMEBREW_CC"
CCCFG_KEY = "HOMEBREW_CCCFG"
SDKROOT_KEY = "HOMEBREW_SDKROOT"

# Compiler configuration flags read by the wrapper layer
CCCFG_BOTTLE = "b"
CCCFG_UNICODE_SED = "s"
CCCFG_AUTOCONF_PATHS = "a"
CCCFG_UNIVERSAL = "u"


def determine_make_jobs(make_jobs: Optional[str], processor_count: int) -> int:
    """
    Number of parallel make jobs.

    An explicit job count is used when it parses to a positive integer;
    otherwise the processor count is used.
    """
    try:
        jobs = int(str(make_jobs).strip()) if make_jobs is not None else 0
    except ValueError:
        logger.debug(f"Ignoring non-numeric HOMEBREW_MAKE_JOBS: {make_jobs}")
        jobs = 0
    return jobs if jobs >= 1 else max(processor_count, 1)


def universal_binary(spec: EnvironmentSpec) -> EnvironmentSpec:
    """Return a copy of the environment that asks the wrapper for universal binaries."""
    cccfg = spec.get(CCCFG_KEY, "")
    if CCCFG_UNIVERSAL in cccfg:
        return spec
    return spec.updated({CCCFG_KEY: cccfg + CCCFG_UNIVERSAL})


class EnvironmentAssembler:
    """
    Assemble the enhanced build environment.

    Args:
        settings: Configuration settings
        host: Probed host facts
        superbin: Curated environment directory selected by the detector
        sdk_locator: SDK locator (defaults to the process-wide one)
    """

    def __init__(
        self,
        settings: Settings,
        host: HostFacts,
        superbin=None,
        sdk_locator: Optional[SDKLocator] = None,
    ):
        self.settings = settings
        self.host = host
        self.layout = settings.layout
        self.superbin = superbin
        self.sdk_locator = sdk_locator or get_sdk_locator(host, settings.developer_dir)
        self.compiler_selector = CompilerSelector(settings)

    def reset(self, base: Mapping[str, str]) -> EnvironmentSpec:
        """Copy the inherited environment without build-relevant variables."""
        return EnvironmentSpec(base).without(RESET_KEYS + PROBLEMATIC_KEYS)

    def check(self) -> Optional[SDKInfo]:
        """
        Validate preconditions.

        Returns:
            SDK facts on SDK-without-CLT hosts, None otherwise

        Raises:
            DeveloperDirNotFoundError: If no developer directory validates
            SDKNotFoundError: If the host needs an SDK and none is installed
        """
        if not self.host.sdk_without_clt:
            return None

        info = self.sdk_locator.info()
        if info.sdk_path is None:
            raise SDKNotFoundError(str(self.host.os_release or ""))
        return info

    def path_facts(self, sdk_info: Optional[SDKInfo], x11: bool) -> PathFacts:
        return PathFacts(
            superbin=self.superbin,
            sdk_without_clt=sdk_info is not None,
            developer_dir=sdk_info.developer_dir if sdk_info else None,
            sdk_path=sdk_info.sdk_path if sdk_info else None,
            x11_prefix=self.sdk_locator.x11_prefix() if x11 else None,
            pkgconfig_override=self.host.os_at_least("mountain_lion"),
        )

    def determine_cccfg(self, flags: BuildFlags) -> str:
        cccfg = ""
        if flags.build_bottle:
            cccfg += CCCFG_BOTTLE
        # sed chokes on unicode characters from 10.8 on
        if self.host.os_at_least("mountain_lion"):
            cccfg += CCCFG_UNICODE_SED
        # 10.8's apr-1-config reports broken paths
        if self.host.os_is("mountain_lion"):
            cccfg += CCCFG_AUTOCONF_PATHS
        return cccfg

    def assemble(
        self,
        dependencies: Sequence[str] = (),
        x11: bool = False,
        flags: Optional[BuildFlags] = None,
        base: Optional[Mapping[str, str]] = None,
    ) -> EnvironmentSpec:
        """
        Assemble the environment for one build.

        Args:
            dependencies: Build dependency names, in declaration order
            x11: Whether the package asked for X11
            flags: Invocation flags
            base: Inherited environment (defaults to os.environ)

        Returns:
            The resolved EnvironmentSpec

        Raises:
            SDKError: If the host needs an SDK that cannot be found
        """
        flags = flags or BuildFlags()
        base = os.environ if base is None else base

        spec = self.reset(base)
        sdk_info = self.check()
        builder = PathListBuilder(self.layout, self.path_facts(sdk_info, x11))

        def path_string(category: SearchPathCategory) -> Optional[str]:
            return builder.build(category, dependencies, x11).to_path_string()

        changes = {
            "CC": "cc",
            "LD": "cc",
            "CXX": "c++",
        }
        if "MAKEFLAGS" not in spec:
            jobs = determine_make_jobs(self.settings.make_jobs, self.host.processor_count)
            changes["MAKEFLAGS"] = f"-j{jobs}"
        changes["PATH"] = path_string(SearchPathCategory.BINARY)
        changes["PKG_CONFIG_PATH"] = path_string(SearchPathCategory.PKG_CONFIG)
        changes[COMPILER_KEY] = self.compiler_selector.resolve(flags).value
        changes[CCCFG_KEY] = self.determine_cccfg(flags)
        if sdk_info is not None:
            changes[SDKROOT_KEY] = str(sdk_info.sdk_path)
        changes["CMAKE_PREFIX_PATH"] = path_string(SearchPathCategory.CMAKE_PREFIX)
        if sdk_info is not None:
            changes["CMAKE_FRAMEWORK_PATH"] = str(
                sdk_info.sdk_path / "System" / "Library" / "Frameworks"
            )
        changes["CMAKE_INCLUDE_PATH"] = path_string(SearchPathCategory.CMAKE_INCLUDE)
        changes["CMAKE_LIBRARY_PATH"] = path_string(SearchPathCategory.CMAKE_LIBRARY)
        changes["ACLOCAL_PATH"] = path_string(SearchPathCategory.ACLOCAL)
        if flags.verbose:
            changes["VERBOSE"] = "1"

        spec = spec.updated(changes)
        logger.debug(
            f"Assembled environment for {len(dependencies)} dependencies "
            f"({changes[COMPILER_KEY]}, cccfg={changes[CCCFG_KEY]!r})"
        )
        return spec
