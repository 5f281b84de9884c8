"""
Tests for package manager layout and exceptions.
"""

from pathlib import Path

from superenv.core.exceptions import (
    DeveloperDirNotFoundError,
    SDKError,
    SDKNotFoundError,
    SuperenvError,
)
from superenv.core.layout import DEFAULT_PREFIX, Layout


class TestLayout:
    """Tests for Layout."""

    def test_defaults(self):
        layout = Layout()
        assert layout.prefix == DEFAULT_PREFIX
        assert layout.repository == DEFAULT_PREFIX

    def test_repository_defaults_to_prefix(self):
        layout = Layout(prefix="/opt/brew")
        assert layout.repository == Path("/opt/brew")

    def test_separate_repository(self):
        layout = Layout(prefix=Path("/usr/local"), repository=Path("/usr/local/Homebrew"))
        assert layout.env_dir == Path("/usr/local/Homebrew/Library/ENV")
        assert layout.pkgconfig_override_dir == Path(
            "/usr/local/Homebrew/Library/Homebrew/pkgconfig"
        )

    def test_dependency_dirs(self):
        layout = Layout(prefix=Path("/usr/local"))
        assert layout.bin_dir == Path("/usr/local/bin")
        assert layout.opt_dir("openssl") == Path("/usr/local/opt/openssl")

    def test_relative_prefix_is_made_absolute(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        layout = Layout(prefix="brew")

        assert layout.prefix == tmp_path / "brew"
        assert layout.repository == tmp_path / "brew"
        assert layout.bin_dir.is_absolute()

    def test_home_prefix_is_expanded(self, tmp_path, monkeypatch):
        monkeypatch.setenv("HOME", str(tmp_path))
        layout = Layout(prefix="~/brew", repository="~/brew/Homebrew")

        assert layout.prefix == tmp_path / "brew"
        assert layout.env_dir == tmp_path / "brew" / "Homebrew" / "Library" / "ENV"

    def test_prefix_is_normalized(self):
        assert Layout(prefix="/opt/./brew/").prefix == Path("/opt/brew")


class TestExceptions:
    """Tests for the exception hierarchy."""

    def test_sdk_errors_share_base(self):
        assert issubclass(SDKNotFoundError, SDKError)
        assert issubclass(DeveloperDirNotFoundError, SDKError)
        assert issubclass(SDKError, SuperenvError)

    def test_developer_dir_message_lists_candidates(self):
        error = DeveloperDirNotFoundError(["/a", "/b"])
        assert "/a, /b" in str(error)
        assert error.candidates == ["/a", "/b"]

    def test_sdk_message_mentions_version(self):
        assert "10.8" in str(SDKNotFoundError("10.8"))
