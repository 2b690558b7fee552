"""prsight testing utilities.

Provides a mock GitHub client and record factories for testing code that
uses prsight without touching the network.
"""

from prsight.testing.fixtures import (
    SAMPLE_REPO_URL,
    create_mock_commit,
    create_mock_file,
    create_mock_pull_request,
    make_analysis,
)
from prsight.testing.mock import MockCall, MockGitHubClient, MockResponse

__all__ = [
    # Mock client
    "MockGitHubClient",
    "MockCall",
    "MockResponse",
    # Factories
    "SAMPLE_REPO_URL",
    "create_mock_pull_request",
    "create_mock_file",
    "create_mock_commit",
    "make_analysis",
]
