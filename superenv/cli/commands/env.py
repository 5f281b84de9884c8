"""
Env command implementation.

Resolves the build environment for a list of dependencies and prints it.
"""

import logging

from superenv.cli.utils import settings_from_args
from superenv.config.settings import BuildFlags
from superenv.core.exceptions import SDKError
from superenv.env.resolver import BuildEnvironmentResolver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the env command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)
    flags = BuildFlags.from_args(args)
    resolver = BuildEnvironmentResolver(flags, settings)
    logger.info(f"Resolving {resolver.mode.value} environment")

    try:
        spec = resolver.resolve(args.dependencies, x11=args.x11)
    except SDKError as e:
        logger.error(f"Cannot set up build environment: {e}")
        return 1

    for option in args.option or []:
        spec = resolver.apply_option(option, spec)

    if args.format == "yaml":
        print(spec.to_yaml(), end="")
    else:
        print(spec.to_shell())

    return 0
