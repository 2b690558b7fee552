"""Raw GitHub REST API records, one per endpoint shape.

Timestamps are kept as the ISO 8601 strings GitHub returns.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class GitHubUser:
    """A GitHub account reference."""

    login: str
    id: int = 0
    type: str = "User"  # "User", "Bot" or "Organization"


@dataclass
class GitHubLabel:
    """Issue / pull request label."""

    name: str
    color: str = ""
    description: str | None = None


@dataclass
class GitHubMilestone:
    """Milestone attached to a pull request."""

    title: str
    state: str = "open"  # "open" or "closed"
    description: str | None = None


@dataclass
class GitHubBranchRef:
    """Base or head reference of a pull request."""

    ref: str
    sha: str


@dataclass
class GitHubPullRequest:
    """Pull request record from ``GET /repos/{owner}/{repo}/pulls/{number}``."""

    number: int
    title: str
    body: str | None
    state: str  # "open" or "closed"; "merged" is derived from merged_at
    draft: bool
    user: GitHubUser | None
    created_at: str
    updated_at: str
    html_url: str
    base: GitHubBranchRef | None = None
    head: GitHubBranchRef | None = None
    merged_at: str | None = None
    closed_at: str | None = None
    assignees: list[GitHubUser] = field(default_factory=list)
    requested_reviewers: list[GitHubUser] = field(default_factory=list)
    labels: list[GitHubLabel] = field(default_factory=list)
    milestone: GitHubMilestone | None = None
    merged: bool = False
    mergeable: bool | None = None
    mergeable_state: str | None = None
    comments: int = 0
    review_comments: int = 0
    commits: int = 0
    additions: int = 0
    deletions: int = 0
    changed_files: int = 0


@dataclass
class GitHubFile:
    """File entry from ``GET /repos/{owner}/{repo}/pulls/{number}/files``."""

    filename: str
    status: str  # "added", "modified", "removed", "renamed", "copied", "changed" or "unchanged"
    additions: int
    deletions: int
    changes: int
    patch: str | None = None
    blob_url: str | None = None
    previous_filename: str | None = None


@dataclass
class GitHubCommitVerification:
    """Signature verification state of a commit."""

    verified: bool
    reason: str


@dataclass
class GitHubCommitAuthor:
    """Git author identity recorded in a commit."""

    name: str
    email: str
    date: str


@dataclass
class GitHubCommit:
    """Commit entry from the pull request and repository commit listings."""

    sha: str
    message: str
    author: GitHubCommitAuthor
    url: str
    verification: GitHubCommitVerification | None = None
    author_login: str | None = None


@dataclass
class GitHubCommitStats:
    """Line statistics of a single commit."""

    additions: int
    deletions: int
    total: int


@dataclass
class GitHubCommitDetail:
    """Commit record from ``GET /repos/{owner}/{repo}/commits/{sha}``."""

    commit: GitHubCommit
    parents: list[str] = field(default_factory=list)
    stats: GitHubCommitStats | None = None
    files: list[GitHubFile] = field(default_factory=list)


@dataclass
class GitHubRepository:
    """Repository record from ``GET /repos/{owner}/{repo}`` and repository search."""

    full_name: str
    name: str
    owner: str
    html_url: str
    description: str | None = None
    private: bool = False
    default_branch: str = "main"
    language: str | None = None
    topics: list[str] = field(default_factory=list)
    stargazers_count: int = 0
    forks_count: int = 0
    open_issues_count: int = 0
    license: str | None = None  # SPDX identifier
    created_at: str | None = None
    updated_at: str | None = None
    pushed_at: str | None = None


@dataclass
class CodeSearchItem:
    """Single hit from ``GET /search/code``."""

    name: str
    path: str
    sha: str
    html_url: str
    repository: str  # full name, e.g. "octocat/Hello-World"
    score: float


@dataclass
class RepositorySearchResult:
    """Page of results from ``GET /search/repositories``."""

    total_count: int
    incomplete_results: bool
    items: list[GitHubRepository]


@dataclass
class CheckRun:
    """CI check run attached to the head commit."""

    name: str
    status: str  # "queued", "in_progress", "completed"
    conclusion: str | None = None
    html_url: str | None = None


@dataclass
class ReviewSummary:
    """A submitted pull request review."""

    user: str
    state: str  # "APPROVED", "CHANGES_REQUESTED", "COMMENTED", ...
    submitted_at: str | None = None


@dataclass
class PullRequestStatus:
    """Merge, CI and review status of a pull request."""

    number: int
    state: str
    draft: bool
    merged: bool
    mergeable: bool | None
    mergeable_state: str | None
    head_sha: str
    combined_status: str  # "success", "pending", "failure" or "error"
    checks: list[CheckRun] = field(default_factory=list)
    reviews: list[ReviewSummary] = field(default_factory=list)
    approvals: int = 0
    changes_requested: int = 0


@dataclass
class RateLimitInfo:
    """Rate-limit budget of the configured token."""

    limit: int
    remaining: int
    reset: datetime
    used: int

    @classmethod
    def from_headers(cls, headers: dict[str, str]) -> "RateLimitInfo":
        """Build from the ``x-ratelimit-*`` response headers."""

        def read(name: str) -> int:
            try:
                return int(headers.get(name, "0"), 10)
            except ValueError:
                return 0

        return cls(
            limit=read("x-ratelimit-limit"),
            remaining=read("x-ratelimit-remaining"),
            reset=datetime.fromtimestamp(read("x-ratelimit-reset"), tz=timezone.utc),
            used=read("x-ratelimit-used"),
        )
