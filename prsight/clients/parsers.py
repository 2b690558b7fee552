"""Parsers turning GitHub JSON payloads into typed records.

Fields GitHub always sends are read with ``data[...]``; a missing one means
the payload is not what the endpoint promises and surfaces as an
``UpstreamError`` rather than a ``KeyError``.
"""

from collections.abc import Callable
from typing import Any, TypeVar

from prsight.exceptions import UpstreamError
from prsight.types.github import (
    CheckRun,
    CodeSearchItem,
    GitHubBranchRef,
    GitHubCommit,
    GitHubCommitAuthor,
    GitHubCommitDetail,
    GitHubCommitStats,
    GitHubCommitVerification,
    GitHubFile,
    GitHubLabel,
    GitHubMilestone,
    GitHubPullRequest,
    GitHubRepository,
    GitHubUser,
    ReviewSummary,
)

T = TypeVar("T")


def parse_payload(parser: Callable[[dict], T], data: Any, what: str) -> T:
    """Run *parser* and convert shape errors into an UpstreamError."""
    if not isinstance(data, dict):
        raise UpstreamError("MALFORMED_RESPONSE", f"Expected an object for {what}")
    try:
        return parser(data)
    except (KeyError, TypeError) as e:
        raise UpstreamError(
            "MALFORMED_RESPONSE", f"Malformed {what} payload: missing {e}"
        ) from e


def parse_user(data: dict | None) -> GitHubUser | None:
    if not data:
        return None
    return GitHubUser(
        login=data["login"],
        id=data.get("id", 0),
        type=data.get("type", "User"),
    )


def _users(items: list[dict] | None) -> list[GitHubUser]:
    return [user for user in (parse_user(item) for item in items or []) if user]


def _branch(data: dict | None) -> GitHubBranchRef | None:
    if not data:
        return None
    return GitHubBranchRef(ref=data["ref"], sha=data["sha"])


def parse_pull_request(data: dict) -> GitHubPullRequest:
    milestone = data.get("milestone")
    return GitHubPullRequest(
        number=data["number"],
        title=data["title"],
        body=data.get("body"),
        state=data["state"],
        draft=bool(data.get("draft", False)),
        user=parse_user(data.get("user")),
        created_at=data["created_at"],
        updated_at=data["updated_at"],
        html_url=data.get("html_url", ""),
        base=_branch(data.get("base")),
        head=_branch(data.get("head")),
        merged_at=data.get("merged_at"),
        closed_at=data.get("closed_at"),
        assignees=_users(data.get("assignees")),
        requested_reviewers=_users(data.get("requested_reviewers")),
        labels=[
            GitHubLabel(
                name=label["name"],
                color=label.get("color", ""),
                description=label.get("description"),
            )
            for label in data.get("labels") or []
        ],
        milestone=(
            GitHubMilestone(
                title=milestone["title"],
                state=milestone.get("state", "open"),
                description=milestone.get("description"),
            )
            if milestone
            else None
        ),
        merged=bool(data.get("merged", False)),
        mergeable=data.get("mergeable"),
        mergeable_state=data.get("mergeable_state"),
        comments=data.get("comments", 0),
        review_comments=data.get("review_comments", 0),
        commits=data.get("commits", 0),
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changed_files=data.get("changed_files", 0),
    )


def parse_file(data: dict) -> GitHubFile:
    return GitHubFile(
        filename=data["filename"],
        status=data["status"],
        additions=data.get("additions", 0),
        deletions=data.get("deletions", 0),
        changes=data.get("changes", 0),
        patch=data.get("patch"),
        blob_url=data.get("blob_url"),
        previous_filename=data.get("previous_filename"),
    )


def parse_commit(data: dict) -> GitHubCommit:
    """Parse an entry of a commit listing (``{"sha", "commit": {...}, ...}``)."""
    commit = data["commit"]
    author = commit.get("author") or {}
    verification = commit.get("verification")
    login = (data.get("author") or {}).get("login")
    return GitHubCommit(
        sha=data["sha"],
        message=commit["message"],
        author=GitHubCommitAuthor(
            name=author.get("name") or "Unknown",
            email=author.get("email") or "",
            date=author.get("date") or "",
        ),
        url=data.get("html_url") or data.get("url", ""),
        verification=(
            GitHubCommitVerification(
                verified=bool(verification.get("verified", False)),
                reason=verification.get("reason", ""),
            )
            if verification
            else None
        ),
        author_login=login,
    )


def parse_commit_detail(data: dict) -> GitHubCommitDetail:
    stats = data.get("stats")
    return GitHubCommitDetail(
        commit=parse_commit(data),
        parents=[parent["sha"] for parent in data.get("parents") or []],
        stats=(
            GitHubCommitStats(
                additions=stats.get("additions", 0),
                deletions=stats.get("deletions", 0),
                total=stats.get("total", 0),
            )
            if stats
            else None
        ),
        files=[parse_file(item) for item in data.get("files") or []],
    )


def parse_repository(data: dict) -> GitHubRepository:
    license_data = data.get("license") or {}
    return GitHubRepository(
        full_name=data["full_name"],
        name=data["name"],
        owner=data["owner"]["login"],
        html_url=data.get("html_url", ""),
        description=data.get("description"),
        private=bool(data.get("private", False)),
        default_branch=data.get("default_branch", "main"),
        language=data.get("language"),
        topics=list(data.get("topics") or []),
        stargazers_count=data.get("stargazers_count", 0),
        forks_count=data.get("forks_count", 0),
        open_issues_count=data.get("open_issues_count", 0),
        license=license_data.get("spdx_id"),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        pushed_at=data.get("pushed_at"),
    )


def parse_code_search_item(data: dict) -> CodeSearchItem:
    return CodeSearchItem(
        name=data["name"],
        path=data["path"],
        sha=data.get("sha", ""),
        html_url=data.get("html_url", ""),
        repository=data["repository"]["full_name"],
        score=float(data.get("score", 0.0)),
    )


def parse_check_run(data: dict) -> CheckRun:
    return CheckRun(
        name=data["name"],
        status=data["status"],
        conclusion=data.get("conclusion"),
        html_url=data.get("html_url"),
    )


def parse_review(data: dict) -> ReviewSummary:
    user = parse_user(data.get("user"))
    return ReviewSummary(
        user=user.login if user else "ghost",
        state=data["state"],
        submitted_at=data.get("submitted_at"),
    )
