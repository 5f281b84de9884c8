"""
Shared utilities for CLI commands.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from superenv.config.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def settings_from_args(args) -> Settings:
    """
    Load settings for a command.

    Uses --config when given, otherwise ./superenv.yaml if present, with
    environment variables taking precedence over file values.
    """
    config_file: Optional[Path] = getattr(args, "config", None)
    return load_settings(os.environ, config_file)


def safe_print(message: str, file=None):
    """
    Print message with safe encoding handling for limited consoles.

    Falls back to ASCII-safe characters if the symbols can't be encoded.

    Args:
        message: Message to print
        file: Output file (default: stdout)
    """
    try:
        print(message, file=file)
    except UnicodeEncodeError:
        safe_message = (
            message.replace("✅", "[OK]")
            .replace("❌", "[FAIL]")
            .replace("⚠️", "WARNING:")
            .replace("→", "->")
        )
        print(safe_message, file=file)
