"""Repositories resource client."""

import base64
import binascii
from typing import TYPE_CHECKING

from prsight.clients.parsers import parse_payload, parse_repository
from prsight.exceptions import NotFoundError, UpstreamError
from prsight.types.github import GitHubRepository
from prsight.utils import parse_repository_url

if TYPE_CHECKING:
    from prsight.transport import HTTPTransport


class ReposClient:
    """Client for repository operations."""

    def __init__(self, transport: "HTTPTransport") -> None:
        """
        Initialize the repos client.

        Args:
            transport: HTTP transport for making requests
        """
        self.transport = transport

    async def get(self, repo_url: str) -> GitHubRepository:
        """
        Get repository information.

        Args:
            repo_url: Repository URL

        Returns:
            GitHubRepository

        Raises:
            NotFoundError: If the repository does not exist or is not visible
        """
        repo = parse_repository_url(repo_url)
        try:
            data = await self.transport.get_json(repo.api_path)
        except NotFoundError as e:
            raise NotFoundError(
                f"Repository not found: {repo_url}", request_id=e.request_id
            ) from e
        return parse_payload(parse_repository, data, "repository")

    async def get_file_contents(
        self, repo_url: str, path: str, ref: str | None = None
    ) -> str:
        """
        Get the decoded text of a file.

        Args:
            repo_url: Repository URL
            path: File path inside the repository
            ref: Branch, tag or commit SHA (default: default branch)

        Returns:
            File contents decoded as UTF-8 (undecodable bytes replaced)

        Raises:
            NotFoundError: If the path does not exist or is not a file
        """
        repo = parse_repository_url(repo_url)
        data = await self.transport.get_json(
            f"{repo.api_path}/contents/{path.lstrip('/')}",
            params={"ref": ref},
        )

        if not isinstance(data, dict) or not data.get("content"):
            raise NotFoundError(f"File content not available: {path}")

        try:
            raw = base64.b64decode(data["content"])
        except (binascii.Error, ValueError) as e:
            raise UpstreamError(
                "MALFORMED_RESPONSE", f"Could not decode contents of {path}"
            ) from e
        return raw.decode("utf-8", errors="replace")
