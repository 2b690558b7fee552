"""Commits resource client."""

from typing import TYPE_CHECKING

from prsight.clients.parsers import parse_commit, parse_commit_detail, parse_payload
from prsight.types.github import GitHubCommit, GitHubCommitDetail
from prsight.utils import parse_repository_url

if TYPE_CHECKING:
    from prsight.transport import HTTPTransport


class CommitsClient:
    """Client for repository commit operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        self.transport = transport

    async def get(self, repo_url: str, sha: str) -> GitHubCommitDetail:
        """
        Get a single commit with its stats and changed files.

        Args:
            repo_url: Repository URL
            sha: Commit SHA (full or abbreviated) or ref name

        Returns:
            GitHubCommitDetail

        Raises:
            NotFoundError: If the commit does not exist
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(f"{repo.api_path}/commits/{sha}")
        return parse_payload(parse_commit_detail, data, "commit")

    async def list(
        self,
        repo_url: str,
        branch: str | None = None,
        author: str | None = None,
        since: str | None = None,
        until: str | None = None,
        limit: int = 30,
        page: int = 1,
    ) -> list[GitHubCommit]:
        """
        List commits of a repository, newest first.

        Args:
            repo_url: Repository URL
            branch: Branch name or SHA to start from (default: default branch)
            author: GitHub login or email address to filter by
            since: ISO 8601 timestamp, only commits after it
            until: ISO 8601 timestamp, only commits before it
            limit: Page size, at most 100
            page: Page number (1-indexed)

        Returns:
            List of GitHubCommit objects
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(
            f"{repo.api_path}/commits",
            params={
                "sha": branch,
                "author": author,
                "since": since,
                "until": until,
                "per_page": min(limit, 100),
                "page": page,
            },
        )
        return [parse_payload(parse_commit, item, "commit") for item in data]
