"""
Pull request normalizer.

Turns the raw GitHub records for one pull request into the canonical
``PRAnalysis`` consumed by the feedback engine. Everything here is a pure
function of its input.
"""

import posixpath
import re
from collections.abc import Iterable, Sequence

from prsight.exceptions import UpstreamError
from prsight.types.analysis import (
    ChangeComplexity,
    CommitInfo,
    DiffSummary,
    FileChange,
    FileStatus,
    FlaggedFileChange,
    PRAnalysis,
    PRMetadata,
    PRState,
    SizeCategory,
)
from prsight.types.github import GitHubCommit, GitHubFile, GitHubPullRequest
from prsight.utils import sanitize_string

TITLE_MAX_LENGTH = 1000
DESCRIPTION_MAX_LENGTH = 5000
COMMIT_MESSAGE_MAX_LENGTH = 1000

LANGUAGE_BY_EXTENSION: dict[str, str] = {
    "ts": "TypeScript",
    "tsx": "TypeScript",
    "js": "JavaScript",
    "jsx": "JavaScript",
    "py": "Python",
    "java": "Java",
    "cpp": "C++",
    "c": "C",
    "cs": "C#",
    "php": "PHP",
    "rb": "Ruby",
    "go": "Go",
    "rs": "Rust",
    "kt": "Kotlin",
    "swift": "Swift",
    "dart": "Dart",
    "scala": "Scala",
    "clj": "Clojure",
    "hs": "Haskell",
    "elm": "Elm",
    "vue": "Vue",
    "svelte": "Svelte",
    "html": "HTML",
    "css": "CSS",
    "scss": "SCSS",
    "sass": "Sass",
    "less": "Less",
    "json": "JSON",
    "yaml": "YAML",
    "yml": "YAML",
    "xml": "XML",
    "md": "Markdown",
    "sql": "SQL",
    "sh": "Shell",
    "bash": "Bash",
    "ps1": "PowerShell",
    "dockerfile": "Docker",
}

# Extensionless file names recognised by their whole name
LANGUAGE_BY_FILENAME: dict[str, str] = {
    "dockerfile": "Docker",
}

# GitHub also reports copied, changed and unchanged files
FILE_STATUS_ALIASES: dict[str, FileStatus] = {
    "added": "added",
    "copied": "added",
    "modified": "modified",
    "changed": "modified",
    "unchanged": "modified",
    "removed": "removed",
    "renamed": "renamed",
}

UNKNOWN_LANGUAGE = "unknown"

_CLOSING_REFERENCE = re.compile(
    r"(?:close[sd]?|fix(?:e[sd])?|resolve[sd]?)\s+#(\d+)", re.IGNORECASE
)
_ANY_REFERENCE = re.compile(r"#(\d+)")

_SECURITY_FLAG_PATTERNS = [
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"auth",
        r"password",
        r"token",
        r"secret",
        r"credential",
        r"security",
        r"permission",
        r"privilege",
        r"crypto",
        r"encrypt",
        r"\.env",
        r"config",
    )
]


def detect_language(filename: str) -> str:
    """Map a file name to a language by its extension, or ``"unknown"``."""
    basename = posixpath.basename(filename).lower()
    if "." not in basename:
        return LANGUAGE_BY_FILENAME.get(basename, UNKNOWN_LANGUAGE)
    return LANGUAGE_BY_EXTENSION.get(basename.rsplit(".", 1)[-1], UNKNOWN_LANGUAGE)


def categorize_file_size(changes: int) -> SizeCategory:
    if changes <= 10:
        return "small"
    if changes <= 50:
        return "medium"
    if changes <= 200:
        return "large"
    return "xl"


def assess_change_complexity(total_changes: int, files_count: int) -> ChangeComplexity:
    """
    Bucket a pull request by volume and spread of its changes.

    Bands are checked in order and the first match wins, so a boundary value
    lands in the lowest band it satisfies.
    """
    changes_per_file = total_changes / files_count if files_count else 0.0

    if total_changes <= 50 and files_count <= 5:
        return "low"
    if total_changes <= 200 and files_count <= 15 and changes_per_file <= 50:
        return "medium"
    if total_changes <= 500 and files_count <= 25:
        return "high"
    return "very_high"


def is_merge_commit(message: str) -> bool:
    lowered = message.lower()
    return (
        lowered.startswith("merge ")
        or "merge pull request" in lowered
        or "merge branch" in lowered
    )


def extract_linked_issues(body: str) -> list[int]:
    """
    Collect issue numbers referenced from a pull request description.

    Closing keywords (``fixes #12``) are collected first, then any other
    ``#N`` reference. The result is de-duplicated and sorted ascending.
    """
    issues: list[int] = []
    for pattern in (_CLOSING_REFERENCE, _ANY_REFERENCE):
        for match in pattern.finditer(body):
            number = int(match.group(1))
            if number not in issues:
                issues.append(number)
    return sorted(issues)


def normalize_file(file: GitHubFile) -> FileChange:
    total = file.additions + file.deletions
    return FileChange(
        filename=file.filename,
        status=FILE_STATUS_ALIASES.get(file.status, "modified"),
        additions=file.additions,
        deletions=file.deletions,
        changes=total,
        language=detect_language(file.filename),
        size_category=categorize_file_size(total),
        patch=file.patch,
    )


def normalize_commit(commit: GitHubCommit) -> CommitInfo:
    return CommitInfo(
        sha=commit.sha,
        message=sanitize_string(commit.message, COMMIT_MESSAGE_MAX_LENGTH),
        author=commit.author.name,
        date=commit.author.date,
        url=commit.url,
        is_merge_commit=is_merge_commit(commit.message),
        verified=bool(commit.verification and commit.verification.verified),
    )


def summarize_diff(files: Sequence[GitHubFile]) -> DiffSummary:
    total_additions = sum(file.additions for file in files)
    total_deletions = sum(file.deletions for file in files)
    total_changes = total_additions + total_deletions

    languages: list[str] = []
    for file in files:
        language = detect_language(file.filename)
        if language != UNKNOWN_LANGUAGE and language not in languages:
            languages.append(language)

    return DiffSummary(
        total_additions=total_additions,
        total_deletions=total_deletions,
        total_changes=total_changes,
        files_count=len(files),
        languages_affected=tuple(languages),
        change_complexity=assess_change_complexity(total_changes, len(files)),
    )


def extract_metadata(pr: GitHubPullRequest) -> PRMetadata:
    return PRMetadata(
        created_at=pr.created_at,
        updated_at=pr.updated_at,
        merged_at=pr.merged_at or None,
        closed_at=pr.closed_at or None,
        labels=tuple(label.name for label in pr.labels),
        assignees=tuple(user.login for user in pr.assignees),
        reviewers=tuple(user.login for user in pr.requested_reviewers),
        milestone=pr.milestone.title if pr.milestone else None,
        linked_issues=tuple(extract_linked_issues(pr.body or "")),
    )


def _state(pr: GitHubPullRequest) -> PRState:
    if pr.merged_at or pr.state == "merged":
        return "merged"
    return "closed" if pr.state == "closed" else "open"


def normalize(
    raw_pr: GitHubPullRequest,
    raw_files: Sequence[GitHubFile],
    raw_commits: Sequence[GitHubCommit],
) -> PRAnalysis:
    """
    Build the canonical analysis record for a pull request.

    Args:
        raw_pr: Pull request record
        raw_files: Changed files, in API order
        raw_commits: Commits, in API order

    Returns:
        PRAnalysis

    Raises:
        UpstreamError: If the pull request record lacks its title or author
    """
    if raw_pr.title is None:
        raise UpstreamError(
            "MISSING_FIELD", f"Pull request #{raw_pr.number} has no title"
        )
    if raw_pr.user is None:
        raise UpstreamError(
            "MISSING_FIELD", f"Pull request #{raw_pr.number} has no author"
        )

    return PRAnalysis(
        title=sanitize_string(raw_pr.title, TITLE_MAX_LENGTH),
        description=sanitize_string(raw_pr.body, DESCRIPTION_MAX_LENGTH),
        author=raw_pr.user.login,
        state=_state(raw_pr),
        draft=raw_pr.draft,
        files_changed=tuple(normalize_file(file) for file in raw_files),
        commits=tuple(normalize_commit(commit) for commit in raw_commits),
        diff_summary=summarize_diff(raw_files),
        metadata=extract_metadata(raw_pr),
    )


def is_flagged_security_sensitive(filename: str) -> bool:
    return any(pattern.search(filename) for pattern in _SECURITY_FLAG_PATTERNS)


def flag_security_sensitive(files: Iterable[FileChange]) -> list[FlaggedFileChange]:
    """Annotate file changes with whether their path looks security-sensitive."""
    return [
        FlaggedFileChange(
            filename=file.filename,
            status=file.status,
            additions=file.additions,
            deletions=file.deletions,
            changes=file.changes,
            language=file.language,
            size_category=file.size_category,
            patch=file.patch,
            is_security_sensitive=is_flagged_security_sensitive(file.filename),
        )
        for file in files
    ]
