"""prsight - GitHub pull request intelligence over the Model Context Protocol."""

from prsight.analysis import PRAnalysisService, normalize
from prsight.client import GitHubClient
from prsight.config import Config, GitHubSettings, Limits, ServerSettings
from prsight.exceptions import (
    AuthenticationError,
    ConfigurationError,
    NotFoundError,
    PRSightError,
    RateLimitedError,
    UpstreamError,
    ValidationError,
)
from prsight.feedback import FeedbackService, generate_feedback
from prsight.logging import configure_logging, get_logger
from prsight.transport import HTTPTransport, RetryConfig

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Gateway
    "GitHubClient",
    "HTTPTransport",
    "RetryConfig",
    # Analysis
    "PRAnalysisService",
    "normalize",
    "FeedbackService",
    "generate_feedback",
    # Configuration
    "Config",
    "GitHubSettings",
    "ServerSettings",
    "Limits",
    # Exceptions
    "PRSightError",
    "ConfigurationError",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "UpstreamError",
    "RateLimitedError",
    # Logging
    "configure_logging",
    "get_logger",
]
