"""prsight exception classes."""


class PRSightError(Exception):
    """Base exception for all prsight errors."""

    status_code: int = 500

    def __init__(
        self,
        code: str,
        message: str,
        request_id: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.request_id = request_id
        if status_code is not None:
            self.status_code = status_code
        super().__init__(f"[{code}] {message}")


class ConfigurationError(PRSightError):
    """Raised at startup when configuration is invalid or missing."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", f"Configuration error: {message}")


class ValidationError(PRSightError):
    """Raised on malformed caller input."""

    status_code = 400

    def __init__(
        self,
        message: str,
        field: str | None = None,
        code: str = "VALIDATION_ERROR",
        request_id: str | None = None,
    ) -> None:
        if field:
            message = f"Validation failed for {field}: {message}"
        super().__init__(code, message, request_id)


class AuthenticationError(PRSightError):
    """Raised when the GitHub token is invalid or expired."""

    status_code = 401

    def __init__(
        self,
        message: str = "Authentication failed",
        code: str = "AUTHENTICATION_ERROR",
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)


class NotFoundError(PRSightError):
    """Raised when a repository, pull request or file does not exist."""

    status_code = 404

    def __init__(
        self,
        message: str,
        code: str = "NOT_FOUND",
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id)


class UpstreamError(PRSightError):
    """Raised on remote failures (permissions, 5xx, connection errors)."""

    status_code = 502

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int | None = None,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, request_id, status_code)


class RateLimitedError(UpstreamError):
    """Raised when GitHub rate limits the token."""

    def __init__(
        self,
        code: str,
        message: str,
        retry_after: int,
        status_code: int = 429,
        request_id: str | None = None,
    ) -> None:
        super().__init__(code, message, status_code, request_id)
        self.retry_after = retry_after


def handle_error(error: BaseException) -> tuple[str, int]:
    """
    Map any exception to a caller-visible message and status code.

    Args:
        error: The exception raised while serving a tool call

    Returns:
        Tuple of (message, status_code)
    """
    if isinstance(error, PRSightError):
        return error.message, error.status_code

    message = str(error) or "An unknown error occurred"
    return message, 500
