"""
superenv CLI argument parser.

This module implements the command-line interface for superenv using argparse.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Get version from package
try:
    from importlib.metadata import version

    __version__ = version("superenv")
except Exception:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """superenv command-line interface."""

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="superenv",
            description="superenv - Minimal, deterministic build environments",
            epilog='Use "superenv COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"superenv {__version__}"
        )
        parser.add_argument(
            "--verbose",
            "-v",
            action="store_true",
            help="Enable verbose output (also sets VERBOSE=1 for the build)",
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./superenv.yaml)",
        )

        # Subcommands
        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_env_command(subparsers)
        self._add_doctor_command(subparsers)

        return parser

    def _add_env_flags(self, parser: argparse.ArgumentParser):
        """Flags that influence environment resolution."""
        parser.add_argument(
            "--env",
            choices=["std", "super"],
            metavar="MODE",
            help="Use the standard (std) environment instead of superenv",
        )
        compilers = parser.add_argument_group("compiler selection")
        compilers.add_argument(
            "--use-gcc", action="store_true", help="Build with gcc"
        )
        compilers.add_argument(
            "--use-llvm", action="store_true", help="Build with llvm-gcc"
        )
        compilers.add_argument(
            "--use-clang", action="store_true", help="Build with clang"
        )

    def _add_env_command(self, subparsers):
        """Add 'env' subcommand."""
        parser = subparsers.add_parser(
            "env",
            help="Print the build environment for a package",
            description="Resolve and print the build environment for a package's dependencies",
        )
        parser.add_argument(
            "dependencies",
            nargs="*",
            metavar="DEPENDENCY",
            help="Build dependencies, in declaration order",
        )
        parser.add_argument(
            "--x11", action="store_true", help="The package needs X11"
        )
        self._add_env_flags(parser)
        parser.add_argument(
            "--build-bottle",
            action="store_true",
            help="Configure the compiler for a relocatable bottle build",
        )
        parser.add_argument(
            "--universal",
            action="store_true",
            help="Build universal binaries",
        )
        parser.add_argument(
            "--option",
            action="append",
            metavar="NAME",
            help="Apply a named environment option, e.g. deparallelize (can be used multiple times)",
        )
        parser.add_argument(
            "--format",
            choices=["shell", "yaml"],
            default="shell",
            metavar="FORMAT",
            help="Output format (shell|yaml) [default: shell]",
        )

    def _add_doctor_command(self, subparsers):
        """Add 'doctor' subcommand."""
        parser = subparsers.add_parser(
            "doctor",
            help="Diagnose environment resolution",
            description="Check which environment builds will use and why",
        )
        self._add_env_flags(parser)

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        # Configure logging
        self._configure_logging(parsed_args)

        # Check if command specified
        if not parsed_args.command:
            self.parser.print_help()
            return 1

        # Dispatch to command handler
        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            logger.error(f"Error: {e}")
            if parsed_args.verbose:
                import traceback

                traceback.print_exc()
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        command_map = {
            "env": "superenv.cli.commands.env",
            "doctor": "superenv.cli.commands.doctor",
        }

        module_name = command_map.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        import importlib

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
