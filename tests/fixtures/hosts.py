"""Host fact fixtures for testing.

Host facts are plain data, so tests describe the machine they need instead
of probing the one they run on.
"""

import pytest
from pathlib import Path

from superenv.core.host import HostFacts

XCODE_FOLDER = Path("/Applications/Xcode.app/Contents/Developer")


def make_executable(path: Path) -> Path:
    """Create an executable shell script at path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/sh\n")
    path.chmod(0o755)
    return path


@pytest.fixture
def clt_host() -> HostFacts:
    """Mountain Lion with Xcode 4.6 and the Command Line Tools."""
    return HostFacts(
        os_version="10.8.2",
        xcode_version="4.6",
        xcode_folder=XCODE_FOLDER,
        bad_xcode_select_path=False,
        clt_installed=True,
        processor_count=4,
    )


@pytest.fixture
def sdk_host() -> HostFacts:
    """Mountain Lion with Xcode 4.6 but no Command Line Tools."""
    return HostFacts(
        os_version="10.8.2",
        xcode_version="4.6",
        xcode_folder=XCODE_FOLDER,
        bad_xcode_select_path=False,
        clt_installed=False,
        processor_count=4,
    )


@pytest.fixture
def lion_host() -> HostFacts:
    """Lion with Xcode 4.3 and the Command Line Tools."""
    return HostFacts(
        os_version="10.7.5",
        xcode_version="4.3",
        xcode_folder=XCODE_FOLDER,
        clt_installed=True,
        processor_count=2,
    )


@pytest.fixture
def developer_dir(tmp_path) -> Path:
    """
    Create a fake Xcode developer directory with a 10.8 SDK.

    Contains:
    - usr/bin/xcrun (executable)
    - Platforms/MacOSX.platform/Developer/SDKs/MacOSX10.8.sdk with usr/include,
      System/Library/Frameworks and the OpenGL framework directories
    """
    developer = tmp_path / "Xcode.app" / "Contents" / "Developer"
    make_executable(developer / "usr" / "bin" / "xcrun")
    (developer / "Toolchains" / "XcodeDefault.xctoolchain" / "usr" / "bin").mkdir(
        parents=True
    )

    sdk = developer / "Platforms" / "MacOSX.platform" / "Developer" / "SDKs" / "MacOSX10.8.sdk"
    (sdk / "usr" / "include" / "libxml2").mkdir(parents=True)
    (sdk / "usr" / "include" / "apache2").mkdir(parents=True)
    opengl = sdk / "System" / "Library" / "Frameworks" / "OpenGL.framework" / "Versions" / "Current"
    (opengl / "Headers").mkdir(parents=True)
    (opengl / "Libraries").mkdir(parents=True)
    python = sdk / "System" / "Library" / "Frameworks" / "Python.framework" / "Versions" / "Current"
    (python / "include" / "python2.7").mkdir(parents=True)

    return developer


@pytest.fixture
def sdk_path(developer_dir) -> Path:
    """SDK root inside the fake developer directory."""
    return (
        developer_dir / "Platforms" / "MacOSX.platform" / "Developer" / "SDKs" / "MacOSX10.8.sdk"
    )
