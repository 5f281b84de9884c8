"""Invocation flags and configuration settings for superenv.

Settings come from the process environment and, optionally, a YAML file
(superenv.yaml). Environment variables take precedence over the file.
Every setting is an explicit optional field; an unset value is ``None`` or
``False``, never an empty placeholder string.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional

import yaml

from ..core.exceptions import ConfigError
from ..core.layout import DEFAULT_PREFIX, Layout

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "superenv.yaml"

ENV_PREFIX = "HOMEBREW_PREFIX"
ENV_REPOSITORY = "HOMEBREW_REPOSITORY"
ENV_CC = "HOMEBREW_CC"
ENV_MAKE_JOBS = "HOMEBREW_MAKE_JOBS"
ENV_DEVELOPER_DIR = "DEVELOPER_DIR"

# Deprecated boolean variables and the Settings field each one sets
DEPRECATED_FLAG_FIELDS = {
    "HOMEBREW_USE_CLANG": "use_clang",
    "HOMEBREW_USE_LLVM": "use_llvm",
    "HOMEBREW_USE_GCC": "use_gcc",
}

# YAML key -> environment variable that overrides it
FILE_KEYS = {
    "prefix": ENV_PREFIX,
    "repository": ENV_REPOSITORY,
    "cc": ENV_CC,
    "make_jobs": ENV_MAKE_JOBS,
    "developer_dir": ENV_DEVELOPER_DIR,
}


@dataclass(frozen=True)
class BuildFlags:
    """
    Command-line flags of one build invocation.

    Attributes:
        use_gcc: --use-gcc was given
        use_llvm: --use-llvm was given
        use_clang: --use-clang was given
        env_std: --env=std was given (opt out of enhanced resolution)
        build_bottle: --build-bottle was given
        verbose: --verbose was given
        universal: --universal was given
    """

    use_gcc: bool = False
    use_llvm: bool = False
    use_clang: bool = False
    env_std: bool = False
    build_bottle: bool = False
    verbose: bool = False
    universal: bool = False

    @classmethod
    def from_argv(cls, argv: Iterable[str]) -> "BuildFlags":
        """
        Build flags from a raw argument list.

        Example:
            >>> BuildFlags.from_argv(["--use-gcc", "--env=std"]).env_std
            True
        """
        argv = list(argv)
        return cls(
            use_gcc="--use-gcc" in argv,
            use_llvm="--use-llvm" in argv,
            use_clang="--use-clang" in argv,
            env_std="--env=std" in argv,
            build_bottle="--build-bottle" in argv,
            verbose="--verbose" in argv or "-v" in argv,
            universal="--universal" in argv,
        )

    @classmethod
    def from_args(cls, args: Any) -> "BuildFlags":
        """Build flags from a parsed argparse namespace."""
        return cls(
            use_gcc=bool(getattr(args, "use_gcc", False)),
            use_llvm=bool(getattr(args, "use_llvm", False)),
            use_clang=bool(getattr(args, "use_clang", False)),
            env_std=getattr(args, "env", None) == "std",
            build_bottle=bool(getattr(args, "build_bottle", False)),
            verbose=bool(getattr(args, "verbose", False)),
            universal=bool(getattr(args, "universal", False)),
        )


@dataclass(frozen=True)
class Settings:
    """
    Configuration variables consulted during resolution.

    Attributes:
        prefix: Package manager install prefix
        repository: Package manager repository (defaults to prefix)
        cc: Requested compiler name (HOMEBREW_CC)
        use_clang: Deprecated HOMEBREW_USE_CLANG is set
        use_llvm: Deprecated HOMEBREW_USE_LLVM is set
        use_gcc: Deprecated HOMEBREW_USE_GCC is set
        make_jobs: Requested job count, unparsed (HOMEBREW_MAKE_JOBS)
        developer_dir: Developer directory override (DEVELOPER_DIR)
    """

    prefix: Path = DEFAULT_PREFIX
    repository: Optional[Path] = None
    cc: Optional[str] = None
    use_clang: bool = False
    use_llvm: bool = False
    use_gcc: bool = False
    make_jobs: Optional[str] = None
    developer_dir: Optional[str] = None

    @property
    def layout(self) -> Layout:
        return Layout(prefix=self.prefix, repository=self.repository)

    def deprecated_flag(self, variable: str) -> bool:
        """Whether the deprecated boolean variable is set."""
        return bool(getattr(self, DEPRECATED_FLAG_FIELDS[variable]))

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        file_config: Optional[Dict[str, Any]] = None,
    ) -> "Settings":
        """
        Build settings from an environment mapping and optional file values.

        Args:
            environ: Process environment (or a test double)
            file_config: Values loaded from superenv.yaml

        Returns:
            Settings instance
        """
        file_config = file_config or {}
        unknown = set(file_config) - set(FILE_KEYS)
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {', '.join(sorted(unknown))}")

        def value(key: str) -> Optional[str]:
            env_value = environ.get(FILE_KEYS[key])
            if env_value:
                return env_value
            file_value = file_config.get(key)
            return None if file_value is None else str(file_value)

        prefix = value("prefix")
        repository = value("repository")

        return cls(
            prefix=Path(prefix) if prefix else DEFAULT_PREFIX,
            repository=Path(repository) if repository else None,
            cc=value("cc"),
            make_jobs=value("make_jobs"),
            developer_dir=value("developer_dir"),
            **{
                field_name: variable in environ
                for variable, field_name in DEPRECATED_FLAG_FIELDS.items()
            },
        )


def load_config_file(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load superenv.yaml.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty if the file is missing and optional)

    Raises:
        ConfigError: If the file is required but missing, or is not valid YAML
    """
    config_file = Path(config_file)
    if not config_file.exists():
        if required:
            raise ConfigError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_file}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {config_file} must be a mapping")

    return data


def load_settings(
    environ: Mapping[str, str], config_file: Optional[Path] = None
) -> Settings:
    """
    Load settings from the environment and a configuration file.

    When config_file is None, ./superenv.yaml is used if present.
    """
    if config_file is None:
        file_config = load_config_file(Path.cwd() / DEFAULT_CONFIG_FILE)
    else:
        file_config = load_config_file(config_file, required=True)
    return Settings.from_environ(environ, file_config)
