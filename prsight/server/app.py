"""
MCP server entry point.

Serves the prsight tools over stdio. Everything the server logs goes to
stderr; stdout carries the protocol stream.
"""

import asyncio
import logging
import os
import signal
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.exceptions import ToolError
from pydantic import StrictInt

from prsight.client import GitHubClient
from prsight.config import Config
from prsight.exceptions import AuthenticationError, ConfigurationError, PRSightError
from prsight.logging import configure_logging, get_logger
from prsight.server.handler import ToolHandler

INSTRUCTIONS = (
    "GitHub pull request intelligence. Use fetch_pr_details for a normalized "
    "view of a pull request and generate_pr_feedback for a heuristic review "
    "covering code quality, security, best practices and review effort. The "
    "remaining tools read diffs, files, commits and search results."
)


def _arguments(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value is not None}


def create_server(handler: ToolHandler, name: str = "github-mcp-server") -> FastMCP:
    """
    Build the FastMCP server exposing every prsight tool.

    Args:
        handler: Tool router the tools delegate to
        name: Server name reported to MCP clients

    Returns:
        FastMCP server (not yet running)
    """

    @asynccontextmanager
    async def lifespan(_server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await handler.client.close()

    mcp = FastMCP(name, instructions=INSTRUCTIONS, lifespan=lifespan)

    async def call(tool: str, arguments: dict[str, Any]) -> str:
        result = await handler.call_tool(tool, arguments)
        if result.is_error:
            raise ToolError(result.text.removeprefix("Error: "))
        return result.text

    @mcp.tool()
    async def fetch_pr_details(repo_url: str, pr_number: StrictInt) -> str:
        """Fetch and analyze GitHub PR information including files changed, commits, and comprehensive diff analysis.

        Args:
            repo_url: GitHub repository URL (e.g., https://github.com/owner/repo)
            pr_number: Pull request number
        """
        return await call("fetch_pr_details", _arguments(repo_url=repo_url, pr_number=pr_number))

    @mcp.tool()
    async def generate_pr_feedback(
        repo_url: str, pr_number: StrictInt, focus_areas: list[str] | None = None
    ) -> str:
        """Analyze PR and provide comprehensive feedback on code quality, security, best practices, and focus areas.

        Args:
            repo_url: GitHub repository URL
            pr_number: Pull request number
            focus_areas: Up to 5 of performance, security, accessibility,
                maintainability, testing, documentation, architecture, code_style
        """
        return await call(
            "generate_pr_feedback",
            _arguments(repo_url=repo_url, pr_number=pr_number, focus_areas=focus_areas),
        )

    @mcp.tool()
    async def get_pull_request_diff(repo_url: str, pr_number: StrictInt) -> str:
        """Get the diff/patch content for a specific pull request.

        Args:
            repo_url: GitHub repository URL
            pr_number: Pull request number
        """
        return await call(
            "get_pull_request_diff", _arguments(repo_url=repo_url, pr_number=pr_number)
        )

    @mcp.tool()
    async def get_pull_request_files(
        repo_url: str, pr_number: StrictInt, focus_areas: list[str] | None = None
    ) -> str:
        """Get the list of files changed in a pull request.

        Args:
            repo_url: GitHub repository URL
            pr_number: Pull request number
            focus_areas: Optional focus areas; "security" flags sensitive files
        """
        return await call(
            "get_pull_request_files",
            _arguments(repo_url=repo_url, pr_number=pr_number, focus_areas=focus_areas),
        )

    @mcp.tool()
    async def get_pull_request_status(repo_url: str, pr_number: StrictInt) -> str:
        """Get the current status of a pull request including checks, review status, and merge status.

        Args:
            repo_url: GitHub repository URL
            pr_number: Pull request number
        """
        return await call(
            "get_pull_request_status", _arguments(repo_url=repo_url, pr_number=pr_number)
        )

    @mcp.tool()
    async def list_pull_requests(
        repo_url: str, state: str = "open", limit: StrictInt = 30, page: StrictInt = 1
    ) -> str:
        """List pull requests in a repository with filtering options.

        Args:
            repo_url: GitHub repository URL
            state: Filter by pull request state (open, closed, all)
            limit: Maximum number of results (1-100)
            page: Page number for pagination
        """
        return await call(
            "list_pull_requests",
            _arguments(repo_url=repo_url, state=state, limit=limit, page=page),
        )

    @mcp.tool()
    async def get_commit(repo_url: str, commit_sha: str) -> str:
        """Get detailed information about a specific commit.

        Args:
            repo_url: GitHub repository URL
            commit_sha: The commit SHA to fetch
        """
        return await call("get_commit", _arguments(repo_url=repo_url, commit_sha=commit_sha))

    @mcp.tool()
    async def get_file_contents(repo_url: str, file_path: str, ref: str | None = None) -> str:
        """Get the contents of a file from a repository.

        Args:
            repo_url: GitHub repository URL
            file_path: Path to the file in the repository
            ref: Branch, tag, or commit SHA (defaults to default branch)
        """
        return await call(
            "get_file_contents", _arguments(repo_url=repo_url, file_path=file_path, ref=ref)
        )

    @mcp.tool()
    async def list_commits(
        repo_url: str,
        branch: str | None = None,
        author: str | None = None,
        since: str | None = None,
        until: str | None = None,
        limit: StrictInt = 30,
        page: StrictInt = 1,
    ) -> str:
        """List commits in a repository with filtering options.

        Args:
            repo_url: GitHub repository URL
            branch: Branch name to list commits from
            author: Filter commits by author
            since: ISO 8601 date string - only commits after this date
            until: ISO 8601 date string - only commits before this date
            limit: Maximum number of results (1-100)
            page: Page number for pagination
        """
        return await call(
            "list_commits",
            _arguments(
                repo_url=repo_url,
                branch=branch,
                author=author,
                since=since,
                until=until,
                limit=limit,
                page=page,
            ),
        )

    @mcp.tool()
    async def search_code(
        repo_url: str,
        query: str,
        file_extensions: list[str] | None = None,
        limit: StrictInt = 30,
    ) -> str:
        """Search for code within a repository.

        Args:
            repo_url: GitHub repository URL to search within
            query: Search query string
            file_extensions: Filter by file extensions (e.g., ["js", "ts"])
            limit: Maximum number of results (1-100)
        """
        return await call(
            "search_code",
            _arguments(
                repo_url=repo_url, query=query, file_extensions=file_extensions, limit=limit
            ),
        )

    @mcp.tool()
    async def search_repositories(
        query: str,
        sort: str | None = None,
        order: str = "desc",
        limit: StrictInt = 30,
        page: StrictInt = 1,
    ) -> str:
        """Search for repositories on GitHub.

        Args:
            query: Search query string
            sort: Sort field (stars, forks, help-wanted-issues, updated)
            order: Sort order (asc, desc)
            limit: Maximum number of results (1-100)
            page: Page number for pagination
        """
        return await call(
            "search_repositories",
            _arguments(query=query, sort=sort, order=order, limit=limit, page=page),
        )

    return mcp


async def run_health_check(config: Config, logger: logging.Logger) -> None:
    """
    Verify GitHub is reachable with the configured token.

    Raises:
        AuthenticationError: If the check fails
    """
    async with GitHubClient.from_config(config) as client:
        status = await ToolHandler(client, config, logger).health_check()

    if status["status"] != "healthy":
        raise AuthenticationError("GitHub API health check failed")
    logger.info("Health check passed: %s", status["details"])


def install_signal_handlers(logger: logging.Logger) -> None:
    def shutdown(signum: int, _frame: Any) -> None:
        logger.info("Received %s, shutting down gracefully...", signal.Signals(signum).name)
        raise SystemExit(0)

    for signum in (signal.SIGINT, signal.SIGTERM):
        signal.signal(signum, shutdown)


def _print_startup_error(title: str, message: str, hint: str) -> None:
    print(f"\n{title}:\n   {message}\n\n{hint}", file=sys.stderr)


def main() -> None:
    """Console entry point: load config, check GitHub, serve over stdio."""
    try:
        config = Config.from_env()
    except ConfigurationError as e:
        _print_startup_error(
            "Configuration Error",
            e.message,
            "Please check your environment variables and configuration.",
        )
        sys.exit(1)

    configure_logging(level=config.server.logging_level)
    logger = get_logger("server")
    logger.info(
        "Starting %s %s (base_url=%s, retry_attempts=%d)",
        config.server.name,
        config.server.version,
        config.github.base_url,
        config.github.retry_attempts,
    )
    install_signal_handlers(logger)

    try:
        asyncio.run(run_health_check(config, logger))
    except PRSightError as e:
        logger.error("Server startup failed: %s", e.message)
        if isinstance(e, AuthenticationError):
            hint = "Please check your GitHub token is valid and has required permissions."
            _print_startup_error("Authentication Error", e.message, hint)
        else:
            _print_startup_error(
                "Unexpected Error", e.message, "Please check the logs for more details."
            )
        sys.exit(1)

    handler = ToolHandler(GitHubClient.from_config(config), config)
    server = create_server(handler, config.server.name)
    logger.info("GitHub MCP Server is running (transport=stdio, pid=%d)", os.getpid())
    try:
        server.run(transport="stdio")
    finally:
        logger.info("Server shutdown complete")


if __name__ == "__main__":
    main()
