"""Argument models for the MCP tools."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prsight.exceptions import ValidationError
from prsight.types.feedback import FocusArea
from prsight.utils import parse_repository_url

REPO_URL_DESCRIPTION = "GitHub repository URL (e.g., https://github.com/owner/repo)"

FocusAreas = Annotated[list[FocusArea], Field(max_length=5)]


class ToolArguments(BaseModel):
    """Base for tool argument models; unknown arguments are rejected."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)


class RepositoryArguments(ToolArguments):
    repo_url: str = Field(..., description=REPO_URL_DESCRIPTION)

    @field_validator("repo_url")
    @classmethod
    def validate_repo_url(cls, value: str) -> str:
        try:
            parse_repository_url(value)
        except ValidationError as e:
            raise ValueError(e.message) from e
        return value


class PullRequestArguments(RepositoryArguments):
    pr_number: int = Field(..., ge=1, strict=True, description="Pull request number")


class FetchPRDetailsArgs(PullRequestArguments):
    pass


class GeneratePRFeedbackArgs(PullRequestArguments):
    focus_areas: FocusAreas | None = Field(
        default=None,
        description="Optional focus areas for targeted feedback",
    )


class GetPullRequestDiffArgs(PullRequestArguments):
    pass


class GetPullRequestFilesArgs(PullRequestArguments):
    focus_areas: FocusAreas | None = Field(
        default=None,
        description="Optional focus areas; 'security' flags sensitive files",
    )


class GetPullRequestStatusArgs(PullRequestArguments):
    pass


class ListPullRequestsArgs(RepositoryArguments):
    state: Literal["open", "closed", "all"] = Field(
        default="open", description="Filter by pull request state"
    )
    limit: int = Field(default=30, ge=1, le=100, strict=True, description="Maximum number of results")
    page: int = Field(default=1, ge=1, strict=True, description="Page number for pagination")


class GetCommitArgs(RepositoryArguments):
    commit_sha: str = Field(..., min_length=1, description="The commit SHA to fetch")


class GetFileContentsArgs(RepositoryArguments):
    file_path: str = Field(..., min_length=1, description="Path to the file in the repository")
    ref: str | None = Field(
        default=None,
        description="Branch, tag, or commit SHA (defaults to default branch)",
    )


class ListCommitsArgs(RepositoryArguments):
    branch: str | None = Field(default=None, description="Branch name to list commits from")
    author: str | None = Field(default=None, description="Filter commits by author")
    since: str | None = Field(
        default=None, description="ISO 8601 date string - only commits after this date"
    )
    until: str | None = Field(
        default=None, description="ISO 8601 date string - only commits before this date"
    )
    limit: int = Field(default=30, ge=1, le=100, strict=True, description="Maximum number of results")
    page: int = Field(default=1, ge=1, strict=True, description="Page number for pagination")


class SearchCodeArgs(RepositoryArguments):
    query: str = Field(..., min_length=1, description="Search query string")
    file_extensions: list[str] | None = Field(
        default=None, description='Filter by file extensions (e.g., ["js", "ts"])'
    )
    limit: int = Field(default=30, ge=1, le=100, strict=True, description="Maximum number of results")


class SearchRepositoriesArgs(ToolArguments):
    query: str = Field(..., min_length=1, description="Search query string")
    sort: Literal["stars", "forks", "help-wanted-issues", "updated"] | None = Field(
        default=None, description="Sort field for results"
    )
    order: Literal["asc", "desc"] = Field(default="desc", description="Sort order")
    limit: int = Field(default=30, ge=1, le=100, strict=True, description="Maximum number of results")
    page: int = Field(default=1, ge=1, strict=True, description="Page number for pagination")
