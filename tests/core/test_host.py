"""
Unit tests for the host probe module.

Tests cover:
- Version parsing and named releases
- HostFacts release comparisons and SDK-without-CLT detection
- Probing with mocked commands
- Cache behavior
"""

import subprocess
from pathlib import Path
from unittest.mock import Mock, patch

import pytest
from packaging.version import Version

from superenv.core.host import (
    HostFacts,
    parse_version,
    release_version,
    run_command,
    probe_host,
    clear_host_cache,
    _detect_xcode_folder,
    _detect_xcode_version,
)


class TestVersions:
    """Tests for version helpers."""

    def test_parse_valid_version(self):
        assert parse_version("4.6.3") == Version("4.6.3")

    def test_parse_missing_version(self):
        assert parse_version(None) is None
        assert parse_version("") is None

    def test_parse_malformed_version(self):
        assert parse_version("not-a-version") is None

    def test_release_by_name(self):
        assert release_version("mountain_lion") == Version("10.8")

    def test_release_by_number(self):
        assert release_version("10.6") == Version("10.6")

    def test_unknown_release_name(self):
        with pytest.raises(ValueError):
            release_version("cheetah")


class TestHostFacts:
    """Tests for HostFacts comparisons."""

    def test_os_release_truncates_patch(self):
        host = HostFacts(os_version="10.8.2")
        assert host.os_release == Version("10.8")

    def test_os_release_unknown(self):
        assert HostFacts(os_version="").os_release is None

    def test_os_at_least(self):
        host = HostFacts(os_version="10.9.1")
        assert host.os_at_least("mountain_lion")
        assert not host.os_at_least("yosemite")

    def test_os_is(self):
        assert HostFacts(os_version="10.8.5").os_is("mountain_lion")
        assert not HostFacts(os_version="10.9").os_is("mountain_lion")

    def test_os_comparisons_without_version(self):
        host = HostFacts()
        assert not host.os_at_least("leopard")
        assert not host.os_is("mountain_lion")

    def test_sdk_without_clt(self, sdk_host):
        assert sdk_host.sdk_without_clt

    def test_clt_installed_needs_no_sdk(self, clt_host):
        assert not clt_host.sdk_without_clt

    def test_old_xcode_needs_no_sdk(self):
        host = HostFacts(os_version="10.7", xcode_version="4.2", clt_installed=False)
        assert not host.sdk_without_clt

    def test_missing_xcode_needs_no_sdk(self):
        assert not HostFacts(os_version="10.8", clt_installed=False).sdk_without_clt

    def test_str(self, clt_host):
        result = str(clt_host)
        assert "10.8.2" in result
        assert "Xcode 4.6" in result
        assert "4 CPUs" in result


class TestRunCommand:
    """Tests for run_command."""

    @patch("subprocess.run")
    def test_returns_stripped_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="/path\n", stderr="")
        assert run_command(["xcode-select", "-print-path"]) == "/path"

    @patch("subprocess.run")
    def test_nonzero_exit(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="error")
        assert run_command(["xcode-select", "-print-path"]) is None

    @patch("subprocess.run", side_effect=FileNotFoundError("xcode-select"))
    def test_missing_command(self, mock_run):
        assert run_command(["xcode-select", "-print-path"]) is None

    @patch("subprocess.run", side_effect=subprocess.TimeoutExpired("mdfind", 10))
    def test_timeout(self, mock_run):
        assert run_command(["mdfind", "query"]) is None


class TestXcodeDetection:
    """Tests for Xcode folder and version detection."""

    def test_folder_from_select_path(self, tmp_path):
        developer = tmp_path / "Xcode.app" / "Contents" / "Developer"
        developer.mkdir(parents=True)

        assert _detect_xcode_folder(str(developer)) == developer

    def test_clt_select_path_is_not_xcode(self, tmp_path):
        with patch("superenv.core.host.DEFAULT_XCODE_DEVELOPER_DIR", tmp_path / "missing"):
            assert _detect_xcode_folder("/Library/Developer/CommandLineTools") is None

    def test_falls_back_to_default_location(self, tmp_path):
        default = tmp_path / "Developer"
        default.mkdir()
        with patch("superenv.core.host.DEFAULT_XCODE_DEVELOPER_DIR", default):
            assert _detect_xcode_folder(None) == default

    @patch("superenv.core.host.run_command")
    def test_version_parsed(self, mock_run):
        mock_run.return_value = "Xcode 4.6.3\nBuild version 4H1503"
        assert _detect_xcode_version(Path("/Applications/Xcode.app/Contents/Developer")) == "4.6.3"

    @patch("superenv.core.host.run_command")
    def test_version_without_folder(self, mock_run):
        assert _detect_xcode_version(None) is None
        mock_run.assert_not_called()

    @patch("superenv.core.host.run_command", return_value=None)
    def test_version_command_failure(self, mock_run):
        assert _detect_xcode_version(Path("/Applications/Xcode.app/Contents/Developer")) is None


class TestProbeHost:
    """Tests for probe_host."""

    @patch("superenv.core.host._detect_clt", return_value=True)
    @patch("superenv.core.host._detect_xcode_version", return_value="4.6")
    @patch("superenv.core.host._detect_xcode_folder")
    @patch("superenv.core.host._detect_xcode_select_path", return_value="/")
    @patch("superenv.core.host._detect_os_version", return_value="10.8.2")
    def test_probe(self, mock_os, mock_select, mock_folder, mock_version, mock_clt):
        mock_folder.return_value = Path("/Applications/Xcode.app/Contents/Developer")

        host = probe_host()

        assert host.os_version == "10.8.2"
        assert host.xcode_version == "4.6"
        assert host.bad_xcode_select_path is True
        assert host.clt_installed is True
        assert host.processor_count >= 1

    @patch("superenv.core.host._detect_os_version", return_value="10.8.2")
    @patch("superenv.core.host._detect_xcode_select_path", return_value=None)
    def test_probe_is_cached(self, mock_select, mock_os):
        first = probe_host()
        second = probe_host()

        assert first is second
        assert mock_select.call_count == 1

    @patch("superenv.core.host._detect_os_version", return_value="10.8.2")
    @patch("superenv.core.host._detect_xcode_select_path", return_value=None)
    def test_clear_cache(self, mock_select, mock_os):
        probe_host()
        clear_host_cache()
        probe_host()

        assert mock_select.call_count == 2
