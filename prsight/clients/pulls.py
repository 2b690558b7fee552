"""Pull requests resource client."""

import asyncio
from typing import TYPE_CHECKING

from prsight.clients.parsers import (
    parse_check_run,
    parse_commit,
    parse_file,
    parse_payload,
    parse_pull_request,
    parse_review,
)
from prsight.exceptions import NotFoundError
from prsight.transport import GITHUB_DIFF
from prsight.types.github import (
    GitHubCommit,
    GitHubFile,
    GitHubPullRequest,
    PullRequestStatus,
)
from prsight.utils import parse_repository_url

if TYPE_CHECKING:
    from prsight.transport import HTTPTransport

_PER_PAGE_MAX = 100


class PullsClient:
    """Client for pull request operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the pulls client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, repo_url: str, number: int) -> GitHubPullRequest:
        """
        Get a pull request.

        Args:
            repo_url: Repository URL (e.g., "https://github.com/owner/repo")
            number: Pull request number

        Returns:
            GitHubPullRequest with metadata, labels, assignees and reviewers

        Raises:
            NotFoundError: If the pull request does not exist
        """
        repo = parse_repository_url(repo_url)
        try:
            data = await self.transport.get_json(f"{repo.api_path}/pulls/{number}")
        except NotFoundError as e:
            raise NotFoundError(
                f"Pull request #{number} not found in {repo_url}",
                request_id=e.request_id,
            ) from e
        return parse_payload(parse_pull_request, data, "pull request")

    async def list_files(
        self, repo_url: str, number: int, max_count: int = 100
    ) -> list[GitHubFile]:
        """
        List the files changed by a pull request, in API order.

        Args:
            repo_url: Repository URL
            number: Pull request number
            max_count: Maximum number of files returned (capped at 100 per page)

        Returns:
            List of GitHubFile objects
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(
            f"{repo.api_path}/pulls/{number}/files",
            params={"per_page": min(max_count, _PER_PAGE_MAX)},
        )
        return [parse_payload(parse_file, item, "file") for item in data][:max_count]

    async def list_commits(
        self, repo_url: str, number: int, max_count: int = 50
    ) -> list[GitHubCommit]:
        """
        List the commits of a pull request, oldest first.

        Args:
            repo_url: Repository URL
            number: Pull request number
            max_count: Maximum number of commits returned (capped at 100 per page)

        Returns:
            List of GitHubCommit objects
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(
            f"{repo.api_path}/pulls/{number}/commits",
            params={"per_page": min(max_count, _PER_PAGE_MAX)},
        )
        return [parse_payload(parse_commit, item, "commit") for item in data][:max_count]

    async def get_diff(self, repo_url: str, number: int) -> str:
        """
        Get the unified diff of a pull request.

        Args:
            repo_url: Repository URL
            number: Pull request number

        Returns:
            Raw unified diff covering every file
        """
        repo = parse_repository_url(repo_url)
        try:
            return await self.transport.get_text(
                f"{repo.api_path}/pulls/{number}", accept=GITHUB_DIFF
            )
        except NotFoundError as e:
            raise NotFoundError(
                f"Pull request #{number} not found in {repo_url}",
                request_id=e.request_id,
            ) from e

    async def get_status(self, repo_url: str, number: int) -> PullRequestStatus:
        """
        Get merge, CI and review status of a pull request.

        The combined commit status, the check runs of the head commit and the
        submitted reviews are fetched concurrently once the pull request is
        known.

        Args:
            repo_url: Repository URL
            number: Pull request number

        Returns:
            PullRequestStatus
        """
        repo = parse_repository_url(repo_url)
        pr = await self.get(repo_url, number)
        head_sha = pr.head.sha if pr.head else ""

        combined, checks, reviews = await asyncio.gather(
            self.transport.get_json(f"{repo.api_path}/commits/{head_sha}/status"),
            self.transport.get_json(f"{repo.api_path}/commits/{head_sha}/check-runs"),
            self.transport.get_json(f"{repo.api_path}/pulls/{number}/reviews"),
        )

        parsed_reviews = [parse_payload(parse_review, item, "review") for item in reviews]
        return PullRequestStatus(
            number=pr.number,
            state="merged" if pr.merged_at else pr.state,
            draft=pr.draft,
            merged=pr.merged or pr.merged_at is not None,
            mergeable=pr.mergeable,
            mergeable_state=pr.mergeable_state,
            head_sha=head_sha,
            combined_status=combined.get("state", "pending"),
            checks=[
                parse_payload(parse_check_run, item, "check run")
                for item in checks.get("check_runs", [])
            ],
            reviews=parsed_reviews,
            approvals=sum(1 for r in parsed_reviews if r.state == "APPROVED"),
            changes_requested=sum(
                1 for r in parsed_reviews if r.state == "CHANGES_REQUESTED"
            ),
        )

    async def list(
        self,
        repo_url: str,
        state: str = "open",
        limit: int = 30,
        page: int = 1,
    ) -> list[GitHubPullRequest]:
        """
        List pull requests.

        Args:
            repo_url: Repository URL
            state: "open", "closed" or "all" (default: "open")
            limit: Page size, at most 100
            page: Page number (1-indexed)

        Returns:
            List of GitHubPullRequest objects
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(
            f"{repo.api_path}/pulls",
            params={"state": state, "per_page": min(limit, _PER_PAGE_MAX), "page": page},
        )
        return [parse_payload(parse_pull_request, item, "pull request") for item in data]
