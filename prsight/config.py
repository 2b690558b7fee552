"""
prsight configuration.

Configuration is an explicit value built once at startup (usually with
``Config.from_env()``) and handed to the collaborators that need it.
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field

from prsight.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.github.com"
DEFAULT_SERVER_NAME = "github-mcp-server"
DEFAULT_SERVER_VERSION = "1.0.0"

LOG_LEVELS: dict[str, int] = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


@dataclass(frozen=True)
class GitHubSettings:
    """Connection settings for the GitHub REST API."""

    token: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30.0  # seconds
    retry_attempts: int = 3


@dataclass(frozen=True)
class ServerSettings:
    """MCP server identity and log level."""

    name: str = DEFAULT_SERVER_NAME
    version: str = DEFAULT_SERVER_VERSION
    log_level: str = "info"

    @property
    def logging_level(self) -> int:
        return LOG_LEVELS[self.log_level]


@dataclass(frozen=True)
class Limits:
    """Upper bounds applied to list and search requests."""

    max_results_per_search: int = 50
    max_files_per_pr: int = 100
    max_commits_per_pr: int = 50


@dataclass(frozen=True)
class Config:
    """Complete prsight configuration."""

    github: GitHubSettings
    server: ServerSettings = field(default_factory=ServerSettings)
    limits: Limits = field(default_factory=Limits)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Config":
        """
        Build a configuration from environment variables.

        Environment variables:
            GITHUB_TOKEN: GitHub token presented as a bearer credential (required)
            GITHUB_BASE_URL: API base URL (optional, default: https://api.github.com)
            GITHUB_TIMEOUT: Request timeout in milliseconds (optional, default: 30000)
            GITHUB_RETRY_ATTEMPTS: Retries for transient failures, 0-5 (optional, default: 3)
            SERVER_NAME: MCP server name (optional)
            SERVER_VERSION: MCP server version (optional)
            LOG_LEVEL: error, warn, info or debug (optional, default: info)
            MAX_SEARCH_RESULTS: Search result cap (optional, default: 50)
            MAX_FILES_PER_PR: Files fetched per pull request (optional, default: 100)
            MAX_COMMITS_PER_PR: Commits fetched per pull request (optional, default: 50)

        Args:
            environ: Mapping to read from (default: ``os.environ``)

        Returns:
            Validated Config instance

        Raises:
            ConfigurationError: If any variable is missing or invalid; the
                message names every offending field
        """
        env = os.environ if environ is None else environ
        issues: list[str] = []

        def read_int(name: str, default: int, minimum: int, maximum: int | None = None) -> int:
            raw = env.get(name)
            if raw is None or raw == "":
                return default
            try:
                value = int(raw, 10)
            except ValueError:
                issues.append(f"{name}: expected an integer, got {raw!r}")
                return default
            if value < minimum or (maximum is not None and value > maximum):
                bound = f"between {minimum} and {maximum}" if maximum is not None else f">= {minimum}"
                issues.append(f"{name}: must be {bound}, got {value}")
            return value

        token = env.get("GITHUB_TOKEN", "")
        if not token:
            issues.append("GITHUB_TOKEN: GitHub token is required")

        base_url = env.get("GITHUB_BASE_URL") or DEFAULT_BASE_URL
        if not base_url.startswith(("http://", "https://")):
            issues.append(f"GITHUB_BASE_URL: invalid URL {base_url!r}")

        timeout_ms = read_int("GITHUB_TIMEOUT", 30000, minimum=1)
        retry_attempts = read_int("GITHUB_RETRY_ATTEMPTS", 3, minimum=0, maximum=5)

        log_level = (env.get("LOG_LEVEL") or "info").lower()
        if log_level not in LOG_LEVELS:
            issues.append(
                f"LOG_LEVEL: must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}"
            )

        limits = Limits(
            max_results_per_search=read_int("MAX_SEARCH_RESULTS", 50, minimum=1),
            max_files_per_pr=read_int("MAX_FILES_PER_PR", 100, minimum=1),
            max_commits_per_pr=read_int("MAX_COMMITS_PER_PR", 50, minimum=1),
        )

        if issues:
            raise ConfigurationError(f"Invalid configuration: {', '.join(issues)}")

        return cls(
            github=GitHubSettings(
                token=token,
                base_url=base_url,
                timeout=timeout_ms / 1000.0,
                retry_attempts=retry_attempts,
            ),
            server=ServerSettings(
                name=env.get("SERVER_NAME") or DEFAULT_SERVER_NAME,
                version=env.get("SERVER_VERSION") or DEFAULT_SERVER_VERSION,
                log_level=log_level,
            ),
            limits=limits,
        )
