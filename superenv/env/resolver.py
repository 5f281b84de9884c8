"""
Build environment resolution for one invocation.

The resolver decides once, through the ToolchainDetector, whether the
enhanced or the legacy environment applies, and delegates to the matching
strategy. The mode never changes for the lifetime of the resolver.

Usage:
    ```python
    resolver = BuildEnvironmentResolver(BuildFlags.from_argv(sys.argv[1:]), settings)
    spec = resolver.resolve(["openssl", "zlib"], x11=False)
    subprocess.run(["make", "install"], env=spec.to_dict(), check=True)
    ```
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import Mapping, Optional, Sequence

from ..config.deprecations import DeprecationAction, lookup_option, warn_deprecated
from ..config.settings import BuildFlags, Settings
from ..core.exceptions import UnknownOptionError
from ..core.host import HostFacts, probe_host
from ..toolchain.detector import ToolchainDetector, ToolchainMode
from ..toolchain.sdk import SDKLocator
from .assembler import EnvironmentAssembler, universal_binary
from .compat import CompatibilityShim, LegacyExtension
from .operations import OPERATIONS
from .spec import EnvironmentSpec

logger = logging.getLogger(__name__)


class EnvironmentStrategy(ABC):
    """How the environment is produced in a given mode."""

    mode: ToolchainMode

    @abstractmethod
    def setup(
        self,
        dependencies: Sequence[str],
        x11: bool,
        base: Mapping[str, str],
    ) -> EnvironmentSpec:
        """Produce the environment for one build."""
        pass


class EnhancedStrategy(EnvironmentStrategy):
    """Fully resolved environment (superenv)."""

    mode = ToolchainMode.ENHANCED

    def __init__(self, assembler: EnvironmentAssembler, flags: BuildFlags):
        self.assembler = assembler
        self.flags = flags

    def setup(self, dependencies, x11, base) -> EnvironmentSpec:
        spec = self.assembler.assemble(dependencies, x11=x11, flags=self.flags, base=base)
        if self.flags.universal:
            spec = universal_binary(spec)
        return spec


class LegacyStrategy(EnvironmentStrategy):
    """Inherited environment plus the legacy helpers."""

    mode = ToolchainMode.LEGACY

    def __init__(self, shim: CompatibilityShim):
        self.shim = shim

    def setup(self, dependencies, x11, base) -> EnvironmentSpec:
        return self.shim.apply_legacy(base)


class BuildEnvironmentResolver:
    """
    Resolve the build environment for one invocation.

    Args:
        flags: Invocation flags
        settings: Configuration settings (defaults to the process environment)
        host: Host facts (probed if not given)
        sdk_locator: SDK locator (defaults to the process-wide one)
        legacy_extension: Legacy helper set applied in legacy mode
    """

    def __init__(
        self,
        flags: Optional[BuildFlags] = None,
        settings: Optional[Settings] = None,
        host: Optional[HostFacts] = None,
        sdk_locator: Optional[SDKLocator] = None,
        legacy_extension: Optional[LegacyExtension] = None,
    ):
        self.flags = flags or BuildFlags()
        self.settings = settings or Settings.from_environ(os.environ)
        self.host = host or probe_host()
        self.detector = ToolchainDetector(self.host, self.settings.layout)
        self.mode = self.detector.resolve_mode(self.flags)

        if self.mode is ToolchainMode.ENHANCED:
            assembler = EnvironmentAssembler(
                self.settings,
                self.host,
                superbin=self.detector.superbin,
                sdk_locator=sdk_locator,
            )
            self.strategy: EnvironmentStrategy = EnhancedStrategy(assembler, self.flags)
        else:
            self.strategy = LegacyStrategy(
                CompatibilityShim(self.settings.layout, legacy_extension)
            )

        logger.debug(f"Environment mode: {self.mode.value}")

    def resolve(
        self,
        dependencies: Sequence[str] = (),
        x11: bool = False,
        base: Optional[Mapping[str, str]] = None,
    ) -> EnvironmentSpec:
        """
        Resolve the environment for one build.

        Args:
            dependencies: Build dependency names, in declaration order
            x11: Whether the package asked for X11
            base: Inherited environment (defaults to os.environ)

        Returns:
            EnvironmentSpec for the build tool

        Raises:
            SDKError: If the host needs an SDK that cannot be found
        """
        base = dict(os.environ) if base is None else base
        return self.strategy.setup(list(dependencies), x11, base)

    def apply_option(self, name: str, spec: EnvironmentSpec) -> EnvironmentSpec:
        """
        Apply a named environment option to a resolved spec.

        Options that are no longer needed are accepted and ignored; renamed
        ones warn and run their replacement.

        Raises:
            UnknownOptionError: If the name is neither an operation nor deprecated
        """
        if name in OPERATIONS:
            return OPERATIONS[name](spec)

        entry = lookup_option(name)
        if entry is None:
            raise UnknownOptionError(name)

        if entry.action is DeprecationAction.NOOP:
            logger.debug(entry.message)
            return spec

        warn_deprecated(entry)
        return self.apply_option(entry.replacement, spec)
