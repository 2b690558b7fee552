"""
GitHub gateway client.

Provides the single entry point the analysis service and the tool router use
to read pull requests, commits, files and search results from GitHub.
"""

from typing import Any

from prsight.clients import CommitsClient, PullsClient, ReposClient, SearchClient
from prsight.config import Config, Limits
from prsight.transport import HTTPTransport, RetryConfig
from prsight.types.github import RateLimitInfo


class GitHubClient:
    """
    Async client for the GitHub REST API.

    Aggregates all resource clients over one HTTP transport.

    Example:
        ```python
        import asyncio
        from prsight import Config, GitHubClient

        async def main():
            async with GitHubClient.from_config(Config.from_env()) as client:
                pr = await client.pulls.get("https://github.com/octocat/Hello-World", 1)
                print(pr.title)

        asyncio.run(main())
        ```
    """

    DEFAULT_BASE_URL = "https://api.github.com"
    DEFAULT_TIMEOUT = 30.0

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        retry_config: RetryConfig | None = None,
        limits: Limits | None = None,
        user_agent: str = "prsight",
    ) -> None:
        """
        Initialize the GitHub client.

        Args:
            token: GitHub token presented as a bearer credential
            base_url: Base URL for API requests (default: https://api.github.com)
            timeout: Request timeout in seconds (default: 30.0)
            retry_config: Configuration for retry behavior (optional)
            limits: Result caps for list and search calls (optional)
            user_agent: User-Agent header value
        """
        self.base_url = base_url
        self.timeout = timeout
        self.limits = limits or Limits()

        self._transport = HTTPTransport(
            base_url=base_url,
            token=token,
            timeout=timeout,
            retry_config=retry_config,
            user_agent=user_agent,
        )

        self.pulls = PullsClient(self._transport)
        self.commits = CommitsClient(self._transport)
        self.repos = ReposClient(self._transport)
        self.search = SearchClient(
            self._transport, max_results=self.limits.max_results_per_search
        )

    @classmethod
    def from_config(cls, config: Config) -> "GitHubClient":
        """
        Create a client from a loaded configuration.

        Args:
            config: prsight configuration

        Returns:
            Configured GitHubClient instance
        """
        return cls(
            token=config.github.token,
            base_url=config.github.base_url,
            timeout=config.github.timeout,
            retry_config=RetryConfig(max_retries=config.github.retry_attempts),
            limits=config.limits,
            user_agent=f"{config.server.name}/{config.server.version}",
        )

    @property
    def transport(self) -> HTTPTransport:
        """Get the underlying HTTP transport (for advanced use cases)."""
        return self._transport

    async def rate_limit(self) -> RateLimitInfo:
        """Get the core rate-limit budget of the configured token."""
        response = await self._transport.request("GET", "/rate_limit")
        core = response.json().get("resources", {}).get("core", {})
        return RateLimitInfo.from_headers(
            {
                "x-ratelimit-limit": str(core.get("limit", 0)),
                "x-ratelimit-remaining": str(core.get("remaining", 0)),
                "x-ratelimit-reset": str(core.get("reset", 0)),
                "x-ratelimit-used": str(core.get("used", 0)),
            }
        )

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._transport.close()

    async def __aenter__(self) -> "GitHubClient":
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Async context manager exit - closes the client."""
        await self.close()
