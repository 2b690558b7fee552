"""
Pytest plugin for prsight testing fixtures.

To use these fixtures in your tests, add this to your conftest.py:

    pytest_plugins = ["prsight.testing.conftest"]
"""

from prsight.testing.fixtures import (
    mock_client,
    mock_client_with_pr,
    repo_url,
    sample_analysis,
    sample_commits,
    sample_files,
    sample_pull_request,
)

__all__ = [
    "mock_client",
    "mock_client_with_pr",
    "repo_url",
    "sample_analysis",
    "sample_commits",
    "sample_files",
    "sample_pull_request",
]
