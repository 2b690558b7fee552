"""
Tool router.

Validates tool arguments, dispatches to the GitHub gateway and the analysis
pipeline, and renders every result (or error) as text for the MCP client.
"""

import dataclasses
import json
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any, TypeVar

import pydantic

from prsight.analysis import PRAnalysisService
from prsight.client import GitHubClient
from prsight.config import Config
from prsight.exceptions import ValidationError, handle_error
from prsight.feedback import FeedbackService
from prsight.logging import get_logger, safe_log_dict
from prsight.server.schemas import (
    FetchPRDetailsArgs,
    GeneratePRFeedbackArgs,
    GetCommitArgs,
    GetFileContentsArgs,
    GetPullRequestDiffArgs,
    GetPullRequestFilesArgs,
    GetPullRequestStatusArgs,
    ListCommitsArgs,
    ListPullRequestsArgs,
    SearchCodeArgs,
    SearchRepositoriesArgs,
    ToolArguments,
)

HEALTH_CHECK_REPOSITORY = "https://github.com/octocat/Hello-World"

ArgsT = TypeVar("ArgsT", bound=ToolArguments)


@dataclass(frozen=True)
class ToolResult:
    """Text returned to the MCP client for one tool call."""

    text: str
    is_error: bool = False


@dataclass(frozen=True)
class ToolDefinition:
    """Name, description and argument model of a tool."""

    name: str
    description: str
    arguments: type[ToolArguments]

    @property
    def input_schema(self) -> dict[str, Any]:
        return self.arguments.model_json_schema()


TOOL_DEFINITIONS: tuple[ToolDefinition, ...] = (
    ToolDefinition(
        "fetch_pr_details",
        "Fetch and analyze GitHub PR information including files changed, "
        "commits, and comprehensive diff analysis",
        FetchPRDetailsArgs,
    ),
    ToolDefinition(
        "generate_pr_feedback",
        "Analyze PR and provide comprehensive feedback on code quality, "
        "security, best practices, and focus areas",
        GeneratePRFeedbackArgs,
    ),
    ToolDefinition(
        "get_pull_request_diff",
        "Get the diff/patch content for a specific pull request",
        GetPullRequestDiffArgs,
    ),
    ToolDefinition(
        "get_pull_request_files",
        "Get the list of files changed in a pull request",
        GetPullRequestFilesArgs,
    ),
    ToolDefinition(
        "get_pull_request_status",
        "Get the current status of a pull request including checks, review "
        "status, and merge status",
        GetPullRequestStatusArgs,
    ),
    ToolDefinition(
        "list_pull_requests",
        "List pull requests in a repository with filtering options",
        ListPullRequestsArgs,
    ),
    ToolDefinition(
        "get_commit",
        "Get detailed information about a specific commit",
        GetCommitArgs,
    ),
    ToolDefinition(
        "get_file_contents",
        "Get the contents of a file from a repository",
        GetFileContentsArgs,
    ),
    ToolDefinition(
        "list_commits",
        "List commits in a repository with filtering options",
        ListCommitsArgs,
    ),
    ToolDefinition(
        "search_code",
        "Search for code within a repository",
        SearchCodeArgs,
    ),
    ToolDefinition(
        "search_repositories",
        "Search for repositories on GitHub",
        SearchRepositoriesArgs,
    ),
)


def _encode(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, datetime):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def to_json(result: Any) -> str:
    """Render a tool result as pretty-printed JSON."""
    return json.dumps(result, indent=2, default=_encode, ensure_ascii=False)


def _format_validation_error(error: pydantic.ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"])
        message = item["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def validate_arguments(model: type[ArgsT], arguments: dict[str, Any] | None) -> ArgsT:
    """
    Validate raw tool arguments against an argument model.

    Raises:
        ValidationError: If any argument is missing, unknown or malformed
    """
    try:
        return model.model_validate(arguments or {})
    except pydantic.ValidationError as e:
        raise ValidationError(_format_validation_error(e)) from e


class ToolHandler:
    """
    Dispatches MCP tool calls.

    Example:
        ```python
        handler = ToolHandler(GitHubClient.from_config(config), config)
        result = await handler.call_tool(
            "generate_pr_feedback",
            {"repo_url": "https://github.com/octocat/Hello-World", "pr_number": 1},
        )
        print(result.text)
        ```
    """

    def __init__(
        self,
        client: GitHubClient,
        config: Config | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the tool handler.

        Args:
            client: GitHub gateway shared by all tools
            config: Loaded configuration (default: limits from the client)
            logger: Logger to report to (default: ``prsight.server``)
        """
        self.client = client
        self.config = config
        self.logger = logger or get_logger("server")
        limits = config.limits if config else client.limits
        self.analysis = PRAnalysisService(client, limits)
        self.feedback = FeedbackService()

        self._dispatch: dict[str, Callable[[dict[str, Any] | None], Awaitable[Any]]] = {
            "fetch_pr_details": self._fetch_pr_details,
            "generate_pr_feedback": self._generate_pr_feedback,
            "get_pull_request_diff": self._get_pull_request_diff,
            "get_pull_request_files": self._get_pull_request_files,
            "get_pull_request_status": self._get_pull_request_status,
            "list_pull_requests": self._list_pull_requests,
            "get_commit": self._get_commit,
            "get_file_contents": self._get_file_contents,
            "list_commits": self._list_commits,
            "search_code": self._search_code,
            "search_repositories": self._search_repositories,
        }

    def list_tools(self) -> list[ToolDefinition]:
        return list(TOOL_DEFINITIONS)

    async def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        """
        Run a tool and render its outcome.

        Errors never escape: they are logged and returned as
        ``"Error: <message>"`` with ``is_error`` set.

        Args:
            name: Tool name
            arguments: Raw tool arguments

        Returns:
            ToolResult
        """
        self.logger.info("Tool call received: %s %s", name, safe_log_dict(arguments or {}))
        try:
            handler = self._dispatch.get(name)
            if handler is None:
                raise ValidationError(f"Unknown tool: {name}")
            result = await handler(arguments)
        except Exception as e:
            message, status_code = handle_error(e)
            self.logger.error(
                "Tool call failed: %s (status=%d): %s", name, status_code, message
            )
            return ToolResult(text=f"Error: {message}", is_error=True)

        self.logger.info("Tool call completed successfully: %s", name)
        return ToolResult(text=to_json(result))

    async def health_check(self) -> dict[str, Any]:
        """
        Check that GitHub is reachable with the configured token.

        Returns:
            Dict with ``status`` ("healthy" or "unhealthy") and ``details``
        """
        try:
            await self.client.repos.get(HEALTH_CHECK_REPOSITORY)
            rate_limit = await self.client.rate_limit()
        except Exception as e:
            message, _ = handle_error(e)
            self.logger.error("Health check failed: %s", message)
            return {"status": "unhealthy", "details": {"error": message}}

        return {
            "status": "healthy",
            "details": {
                "github_api": "connected",
                "rate_limit_remaining": rate_limit.remaining,
                "rate_limit_reset": rate_limit.reset.isoformat(),
            },
        }

    # Tools

    async def _fetch_pr_details(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(FetchPRDetailsArgs, arguments)
        return await self.analysis.analyze(args.repo_url, args.pr_number)

    async def _generate_pr_feedback(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GeneratePRFeedbackArgs, arguments)
        analysis = await self.analysis.analyze(args.repo_url, args.pr_number)
        feedback = self.feedback.generate(analysis, args.focus_areas)
        return {"pr_analysis": analysis, "feedback": feedback}

    async def _get_pull_request_diff(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GetPullRequestDiffArgs, arguments)
        diff = await self.client.pulls.get_diff(args.repo_url, args.pr_number)
        return {"repo_url": args.repo_url, "pr_number": args.pr_number, "diff": diff}

    async def _get_pull_request_files(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GetPullRequestFilesArgs, arguments)
        files = await self.analysis.get_detailed_file_changes(
            args.repo_url, args.pr_number, args.focus_areas
        )
        return {"repo_url": args.repo_url, "pr_number": args.pr_number, "files": files}

    async def _get_pull_request_status(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GetPullRequestStatusArgs, arguments)
        return await self.client.pulls.get_status(args.repo_url, args.pr_number)

    async def _list_pull_requests(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(ListPullRequestsArgs, arguments)
        pull_requests = await self.client.pulls.list(
            args.repo_url, args.state, args.limit, args.page
        )
        return {
            "repo_url": args.repo_url,
            "state": args.state,
            "page": args.page,
            "limit": args.limit,
            "pull_requests": pull_requests,
        }

    async def _get_commit(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GetCommitArgs, arguments)
        return await self.client.commits.get(args.repo_url, args.commit_sha)

    async def _get_file_contents(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(GetFileContentsArgs, arguments)
        content = await self.client.repos.get_file_contents(
            args.repo_url, args.file_path, args.ref
        )
        return {
            "repo_url": args.repo_url,
            "file_path": args.file_path,
            "ref": args.ref,
            "content": content,
        }

    async def _list_commits(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(ListCommitsArgs, arguments)
        commits = await self.client.commits.list(
            args.repo_url,
            branch=args.branch,
            author=args.author,
            since=args.since,
            until=args.until,
            limit=args.limit,
            page=args.page,
        )
        return {
            "repo_url": args.repo_url,
            "branch": args.branch,
            "author": args.author,
            "page": args.page,
            "limit": args.limit,
            "commits": commits,
        }

    async def _search_code(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(SearchCodeArgs, arguments)
        results = await self.client.search.code(
            args.repo_url, args.query, args.file_extensions, args.limit
        )
        return {
            "repo_url": args.repo_url,
            "query": args.query,
            "file_extensions": args.file_extensions,
            "results": results,
        }

    async def _search_repositories(self, arguments: dict[str, Any] | None) -> Any:
        args = validate_arguments(SearchRepositoriesArgs, arguments)
        return await self.client.search.repositories(
            args.query,
            sort=args.sort,
            order=args.order,
            limit=args.limit,
            page=args.page,
        )
