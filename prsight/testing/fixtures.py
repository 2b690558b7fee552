"""
Pytest fixtures and record factories for prsight testing.

Factories build raw GitHub records with sensible defaults; ``make_analysis``
runs them through the real normalizer so derived fields (languages, size
categories, complexity, linked issues) are always consistent.
"""

from collections.abc import Generator, Sequence
from typing import Any

import pytest

from prsight.analysis.normalizer import normalize
from prsight.testing.mock import MockGitHubClient
from prsight.types.analysis import PRAnalysis
from prsight.types.github import (
    GitHubBranchRef,
    GitHubCommit,
    GitHubCommitAuthor,
    GitHubCommitVerification,
    GitHubFile,
    GitHubPullRequest,
    GitHubUser,
)

SAMPLE_REPO_URL = "https://github.com/octocat/Hello-World"


def create_mock_pull_request(number: int = 1, **kwargs: Any) -> GitHubPullRequest:
    """
    Create a GitHubPullRequest with customizable fields.

    Args:
        number: Pull request number
        **kwargs: Fields to override

    Returns:
        GitHubPullRequest object
    """
    defaults: dict[str, Any] = {
        "title": "Add rate limit handling",
        "body": "Retries requests that GitHub rate limits.",
        "state": "open",
        "draft": False,
        "user": GitHubUser(login="octocat", id=1),
        "created_at": "2024-01-15T10:30:00Z",
        "updated_at": "2024-01-15T12:00:00Z",
        "html_url": f"{SAMPLE_REPO_URL}/pull/{number}",
        "base": GitHubBranchRef(ref="main", sha="a" * 40),
        "head": GitHubBranchRef(ref="feature", sha="b" * 40),
    }
    defaults.update(kwargs)
    return GitHubPullRequest(number=number, **defaults)


def create_mock_file(
    filename: str = "src/app.py",
    additions: int = 10,
    deletions: int = 2,
    **kwargs: Any,
) -> GitHubFile:
    """Create a GitHubFile; ``changes`` defaults to additions + deletions."""
    defaults: dict[str, Any] = {
        "status": "modified",
        "changes": additions + deletions,
        "patch": None,
    }
    defaults.update(kwargs)
    return GitHubFile(filename=filename, additions=additions, deletions=deletions, **defaults)


def create_mock_commit(
    message: str = "fix: handle empty payloads",
    sha: str = "c" * 40,
    **kwargs: Any,
) -> GitHubCommit:
    """Create a GitHubCommit with customizable fields."""
    defaults: dict[str, Any] = {
        "author": GitHubCommitAuthor(
            name="The Octocat", email="octocat@github.com", date="2024-01-15T11:00:00Z"
        ),
        "url": f"{SAMPLE_REPO_URL}/commit/{sha}",
        "verification": GitHubCommitVerification(verified=False, reason="unsigned"),
    }
    defaults.update(kwargs)
    return GitHubCommit(sha=sha, message=message, **defaults)


def make_analysis(
    files: Sequence[tuple[str, int, int]] = (),
    commits: Sequence[str] = (),
    title: str = "Add rate limit handling",
    body: str = "",
    draft: bool = False,
    **pr_fields: Any,
) -> PRAnalysis:
    """
    Build a normalized PRAnalysis from compact descriptions.

    Args:
        files: ``(filename, additions, deletions)`` per changed file
        commits: Commit messages, in order
        title: Pull request title
        body: Pull request description
        draft: Draft flag
        **pr_fields: Other GitHubPullRequest fields to override

    Returns:
        PRAnalysis
    """
    raw_pr = create_mock_pull_request(title=title, body=body, draft=draft, **pr_fields)
    raw_files = [create_mock_file(name, add, delete) for name, add, delete in files]
    raw_commits = [
        create_mock_commit(message, sha=f"{index:040x}")
        for index, message in enumerate(commits, start=1)
    ]
    return normalize(raw_pr, raw_files, raw_commits)


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def mock_client() -> Generator[MockGitHubClient, None, None]:
    """
    Provide a MockGitHubClient for testing.

    Example:
        ```python
        async def test_feedback(mock_client, sample_pull_request):
            mock_client.pulls.configure("get", response=sample_pull_request)
            handler = ToolHandler(mock_client)
            ...
        ```
    """
    client = MockGitHubClient()
    yield client
    client.reset()


@pytest.fixture
def repo_url() -> str:
    """Provide a valid repository URL."""
    return SAMPLE_REPO_URL


@pytest.fixture
def sample_pull_request() -> GitHubPullRequest:
    """Provide a sample open pull request linking issue #42."""
    return create_mock_pull_request(
        number=7,
        title="Add retry support to the HTTP transport",
        body="Adds exponential backoff to transient failures.\n\nFixes #42",
    )


@pytest.fixture
def sample_files() -> list[GitHubFile]:
    """Provide the changed files of the sample pull request."""
    return [
        create_mock_file("src/transport.py", 40, 10),
        create_mock_file("tests/test_transport.py", 30, 0, status="added"),
        create_mock_file("README.md", 5, 1),
    ]


@pytest.fixture
def sample_commits() -> list[GitHubCommit]:
    """Provide the commits of the sample pull request."""
    return [
        create_mock_commit("feat: add retry support", sha="1" * 40),
        create_mock_commit("test: cover backoff", sha="2" * 40),
    ]


@pytest.fixture
def sample_analysis(
    sample_pull_request: GitHubPullRequest,
    sample_files: list[GitHubFile],
    sample_commits: list[GitHubCommit],
) -> PRAnalysis:
    """Provide the normalized analysis of the sample pull request."""
    return normalize(sample_pull_request, sample_files, sample_commits)


@pytest.fixture
def mock_client_with_pr(
    mock_client: MockGitHubClient,
    sample_pull_request: GitHubPullRequest,
    sample_files: list[GitHubFile],
    sample_commits: list[GitHubCommit],
) -> MockGitHubClient:
    """Provide a MockGitHubClient that serves the sample pull request."""
    mock_client.pulls.configure("get", response=sample_pull_request)
    mock_client.pulls.configure("list_files", response=sample_files)
    mock_client.pulls.configure("list_commits", response=sample_commits)
    return mock_client
