"""Test fixtures package for superenv tests."""
