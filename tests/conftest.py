"""Shared test configuration."""

pytest_plugins = ["prsight.testing.conftest"]
