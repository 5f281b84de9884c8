"""
Doctor command for diagnosing environment resolution.

Reports the host facts, each enhanced-mode precondition, and, on hosts that
need one, whether the SDK can be found.
"""

import logging
from typing import List

from superenv.cli.utils import safe_print, settings_from_args
from superenv.config.settings import BuildFlags
from superenv.core.exceptions import SDKError
from superenv.core.host import probe_host
from superenv.toolchain.detector import DetectionCheck, ToolchainDetector, ToolchainMode
from superenv.toolchain.sdk import get_sdk_locator

logger = logging.getLogger(__name__)


def sdk_check(host, settings) -> DetectionCheck:
    """Check SDK discovery on SDK-without-CLT hosts."""
    try:
        info = get_sdk_locator(host, settings.developer_dir).info()
    except SDKError as e:
        return DetectionCheck(name="SDK", passed=False, message=str(e))

    if info.sdk_path is None:
        return DetectionCheck(
            name="SDK",
            passed=False,
            message=f"No macOS SDK under {info.developer_dir}",
        )
    return DetectionCheck(name="SDK", passed=True, message=str(info.sdk_path))


def run(args) -> int:
    """
    Run doctor command.

    Args:
        args: Parsed arguments from argparse

    Returns:
        Exit code (0 unless builds cannot proceed)
    """
    quiet = args.quiet
    settings = settings_from_args(args)
    flags = BuildFlags.from_args(args)
    host = probe_host()

    if not quiet:
        print(f"Host: {host}\n")

    detector = ToolchainDetector(host, settings.layout)
    checks: List[DetectionCheck] = detector.checks(flags)
    mode = detector.resolve_mode(flags)

    if mode is ToolchainMode.ENHANCED and host.sdk_without_clt:
        checks.append(sdk_check(host, settings))

    failed = 0
    for result in checks:
        if result.passed:
            if not quiet:
                safe_print(f"✅ {result.name}: {result.message}")
        elif result.name == "SDK":
            failed += 1
            safe_print(f"❌ {result.name}: {result.message}")
            logger.error(f"{result.name}: {result.message}")
        elif not quiet:
            safe_print(f"⚠️  {result.name}: {result.message}")

    if not quiet:
        safe_print(f"\n→ Builds will use the {mode.value} environment")

    if failed:
        print("\nBuilds cannot proceed until an SDK is available")
        return 1
    return 0
