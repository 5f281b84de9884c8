"""
Tests for the deprecation table.
"""

import logging

from superenv.config.deprecations import (
    DEPRECATED_COMPILER_VARIABLES,
    DEPRECATED_OPTIONS,
    NOOP_OPTIONS,
    DeprecationAction,
    lookup_option,
    warn_deprecated,
)


class TestDeprecatedOptions:
    """Tests for deprecated build environment options."""

    def test_noop_options(self):
        for name in ("m64", "O3", "x11", "macosxsdk", "libxml2"):
            entry = lookup_option(name)
            assert entry is not None
            assert entry.action is DeprecationAction.NOOP
            assert entry.replacement is None

    def test_j1_redirects_to_deparallelize(self):
        entry = lookup_option("j1")

        assert entry.action is DeprecationAction.REDIRECT
        assert entry.replacement == "deparallelize"
        assert "deparallelize" in entry.message

    def test_unknown_option(self):
        assert lookup_option("deparallelize") is None
        assert lookup_option("O5") is None

    def test_table_covers_every_noop(self):
        assert set(NOOP_OPTIONS) <= set(DEPRECATED_OPTIONS)
        assert len(DEPRECATED_OPTIONS) == len(NOOP_OPTIONS) + 1


class TestDeprecatedVariables:
    """Tests for deprecated compiler variables."""

    def test_order(self):
        names = [variable.name for variable in DEPRECATED_COMPILER_VARIABLES]
        assert names == ["HOMEBREW_USE_CLANG", "HOMEBREW_USE_LLVM", "HOMEBREW_USE_GCC"]

    def test_messages_name_replacement(self):
        for variable in DEPRECATED_COMPILER_VARIABLES:
            assert variable.name in variable.message
            assert f'HOMEBREW_CC="{variable.value}"' in variable.message

    def test_warn_deprecated(self, caplog):
        with caplog.at_level(logging.WARNING):
            warn_deprecated(DEPRECATED_COMPILER_VARIABLES[0])

        assert "HOMEBREW_USE_CLANG is deprecated" in caplog.text
