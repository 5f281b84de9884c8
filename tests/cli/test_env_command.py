"""
Tests for the env command.
"""

from dataclasses import replace
from unittest.mock import patch

import pytest
import yaml

from superenv.cli.commands.env import run
from superenv.cli.parser import CLI

MANAGED_VARIABLES = (
    "HOMEBREW_PREFIX",
    "HOMEBREW_REPOSITORY",
    "HOMEBREW_CC",
    "HOMEBREW_MAKE_JOBS",
    "HOMEBREW_USE_CLANG",
    "HOMEBREW_USE_LLVM",
    "HOMEBREW_USE_GCC",
    "DEVELOPER_DIR",
    "MAKEFLAGS",
)


@pytest.fixture
def environment(monkeypatch, tmp_path, layout):
    """Point the process environment at the test layout."""
    monkeypatch.chdir(tmp_path)
    for name in MANAGED_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOMEBREW_PREFIX", str(layout.prefix))
    monkeypatch.setenv("CFLAGS", "-O3")
    return monkeypatch


def run_env(argv, host):
    args = CLI().parse_args(["env"] + argv)
    with patch("superenv.env.resolver.probe_host", return_value=host):
        return run(args)


class TestEnvCommand:
    """Test env command output."""

    def test_shell_output(self, environment, clt_host, superbin, capsys):
        assert run_env(["openssl"], clt_host) == 0

        out = capsys.readouterr().out
        assert "export CC=cc" in out
        assert "export HOMEBREW_CC=clang" in out
        assert "export MAKEFLAGS=-j4" in out
        assert "export CFLAGS=" not in out

    def test_yaml_output(self, environment, clt_host, superbin, capsys):
        assert run_env(["--format", "yaml", "--use-gcc"], clt_host) == 0

        env = yaml.safe_load(capsys.readouterr().out)
        assert env["HOMEBREW_CC"] == "gcc"
        assert env["PATH"].split(":")[0] == str(superbin)

    def test_options_applied_in_order(self, environment, clt_host, superbin, capsys):
        argv = ["--format", "yaml", "--option", "j1", "--option", "llvm"]
        assert run_env(argv, clt_host) == 0

        env = yaml.safe_load(capsys.readouterr().out)
        assert "MAKEFLAGS" not in env
        assert env["CC"] == "llvm-gcc"

    def test_legacy_environment(self, environment, clt_host, layout, capsys):
        assert run_env(["--env", "std", "--format", "yaml"], clt_host) == 0

        env = yaml.safe_load(capsys.readouterr().out)
        assert env["CFLAGS"] == "-O3"
        assert str(layout.bin_dir) in env["PATH"].split(":")

    def test_config_file_values(self, environment, clt_host, superbin, tmp_path, capsys):
        (tmp_path / "superenv.yaml").write_text("make_jobs: 2\ncc: llvm\n")

        assert run_env(["--format", "yaml"], clt_host) == 0

        env = yaml.safe_load(capsys.readouterr().out)
        assert env["MAKEFLAGS"] == "-j2"
        assert env["HOMEBREW_CC"] == "llvm-gcc"

    def test_missing_sdk_fails(self, environment, sdk_host, superbin, developer_dir, capsys):
        environment.setenv("DEVELOPER_DIR", str(developer_dir))
        host = replace(sdk_host, os_version="10.9")

        assert run_env([], host) == 1
        assert capsys.readouterr().out == ""
