"""
prsight logging utilities.

All prsight loggers live under ``prsight`` (``prsight.http``,
``prsight.server``, ``prsight.analysis``, ``prsight.feedback``) and write to
stderr, because stdout carries the MCP protocol stream. Records pass through
a formatter that redacts GitHub credentials, so a token never reaches the
log even when an exception message contains one.
"""

import logging
import re
import sys
from collections.abc import Iterable
from typing import Any

ROOT_LOGGER_NAME = "prsight"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
REDACTED = "[REDACTED]"

_root_logger = logging.getLogger(ROOT_LOGGER_NAME)
_http_logger = logging.getLogger(f"{ROOT_LOGGER_NAME}.http")

_REDACTIONS: tuple[tuple[re.Pattern[str], str], ...] = (
    # Authorization header values
    (re.compile(r"\b(Bearer|token)\s+[\w.\-]{8,}", re.IGNORECASE), rf"\1 {REDACTED}"),
    # Personal access, OAuth, user-to-server, server-to-server and refresh tokens
    (re.compile(r"\bgh[pousr]_[A-Za-z0-9]{20,}\b"), "[GITHUB_TOKEN_REDACTED]"),
    # Fine-grained personal access tokens
    (re.compile(r"\bgithub_pat_\w{20,}\b"), "[GITHUB_TOKEN_REDACTED]"),
    # key="value" / key: 'value' assignments
    (
        re.compile(r"""(secret|token|password|api_key)["']?\s*[:=]\s*["'][^"']+["']""", re.IGNORECASE),
        rf"\1: {REDACTED}",
    ),
)

SENSITIVE_KEYS = frozenset({"authorization", "token", "secret", "password", "api_key"})


class RedactingFormatter(logging.Formatter):
    """Formatter that masks credentials in the fully formatted record."""

    def format(self, record: logging.LogRecord) -> str:
        return mask_sensitive_data(super().format(record))


def configure_logging(
    level: int = logging.INFO,
    http_level: int | None = None,
    handler: logging.Handler | None = None,
    format_string: str | None = None,
) -> None:
    """
    Configure prsight logging.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Level for every prsight logger (default: INFO)
        http_level: Level for GitHub request tracing (default: same as level)
        handler: Handler to write to (default: a stderr StreamHandler)
        format_string: Record format (default: time, logger, level, message)

    Example:
        ```python
        import logging
        from prsight.logging import configure_logging

        # Trace every GitHub call
        configure_logging(level=logging.INFO, http_level=logging.DEBUG)
        ```
    """
    target = handler or logging.StreamHandler(sys.stderr)
    target.setFormatter(RedactingFormatter(format_string or DEFAULT_FORMAT))

    for previous in list(_root_logger.handlers):
        _root_logger.removeHandler(previous)
    _root_logger.addHandler(target)
    _root_logger.setLevel(level)
    _root_logger.propagate = False

    _http_logger.setLevel(level if http_level is None else http_level)


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a prsight logger.

    Args:
        name: Suffix under ``prsight`` (e.g., "http", "feedback"); ``None``
            returns the ``prsight`` logger itself

    Returns:
        Logger instance
    """
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}" if name else ROOT_LOGGER_NAME)


def mask_sensitive_data(text: str) -> str:
    """Replace every GitHub token or credential assignment in *text*."""
    for pattern, replacement in _REDACTIONS:
        text = pattern.sub(replacement, text)
    return text


def _is_sensitive(key: str, sensitive_keys: Iterable[str]) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in sensitive_keys)


def _redact(value: Any, sensitive_keys: Iterable[str]) -> Any:
    if isinstance(value, dict):
        return safe_log_dict(value, sensitive_keys)
    if isinstance(value, list):
        return [_redact(item, sensitive_keys) for item in value]
    return value


def safe_log_dict(
    data: dict[str, Any], sensitive_keys: Iterable[str] = SENSITIVE_KEYS
) -> dict[str, Any]:
    """
    Copy *data* with the values of sensitive keys replaced by ``[REDACTED]``.

    A key is sensitive when it contains one of *sensitive_keys*
    (case-insensitive), so ``client_secret`` and ``access_token`` are
    caught too. Nested dicts and lists are walked.

    Args:
        data: Mapping to be logged (tool arguments, query parameters, ...)
        sensitive_keys: Key fragments to redact

    Returns:
        Redacted copy
    """
    return {
        key: REDACTED if _is_sensitive(key, sensitive_keys) else _redact(value, sensitive_keys)
        for key, value in data.items()
    }


def log_github_request(method: str, path: str, params: dict[str, Any] | None = None) -> None:
    """Trace an outgoing GitHub call at DEBUG level."""
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return
    line = f"{method} {path}"
    if params:
        line += f" params={safe_log_dict(params)}"
    _http_logger.debug(mask_sensitive_data(line))


def log_github_response(
    status_code: int,
    path: str,
    rate_limit_remaining: str | None = None,
    elapsed_ms: float | None = None,
) -> None:
    """
    Trace a GitHub response at DEBUG level.

    Args:
        status_code: HTTP status code
        path: API path the response belongs to
        rate_limit_remaining: ``x-ratelimit-remaining`` header, if sent
        elapsed_ms: Round-trip time in milliseconds
    """
    if not _http_logger.isEnabledFor(logging.DEBUG):
        return
    details = [f"{status_code} {path}"]
    if elapsed_ms is not None:
        details.append(f"{elapsed_ms:.0f}ms")
    if rate_limit_remaining is not None:
        details.append(f"rate limit remaining {rate_limit_remaining}")
    _http_logger.debug("GitHub responded %s", ", ".join(details))


__all__ = [
    "RedactingFormatter",
    "configure_logging",
    "get_logger",
    "mask_sensitive_data",
    "safe_log_dict",
    "log_github_request",
    "log_github_response",
]
