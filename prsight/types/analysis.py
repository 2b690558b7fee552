"""Normalized pull request analysis records.

These are built once per request by the normalizer and never mutated.
"""

from dataclasses import dataclass, field
from typing import Literal

FileStatus = Literal["added", "modified", "removed", "renamed"]
PRState = Literal["open", "closed", "merged"]
SizeCategory = Literal["small", "medium", "large", "xl"]
ChangeComplexity = Literal["low", "medium", "high", "very_high"]


@dataclass(frozen=True)
class FileChange:
    """A file touched by the pull request."""

    filename: str
    status: FileStatus
    additions: int
    deletions: int
    changes: int
    language: str
    size_category: SizeCategory
    patch: str | None = None


@dataclass(frozen=True)
class FlaggedFileChange(FileChange):
    """A file change annotated with a security-sensitivity flag."""

    is_security_sensitive: bool = False


@dataclass(frozen=True)
class CommitInfo:
    """A commit included in the pull request."""

    sha: str
    message: str
    author: str
    date: str
    url: str
    is_merge_commit: bool
    verified: bool


@dataclass(frozen=True)
class DiffSummary:
    """Aggregate line and file counts over all changed files."""

    total_additions: int
    total_deletions: int
    total_changes: int
    files_count: int
    languages_affected: tuple[str, ...]
    change_complexity: ChangeComplexity


@dataclass(frozen=True)
class PRMetadata:
    """Timestamps, people and links around the pull request."""

    created_at: str
    updated_at: str
    merged_at: str | None = None
    closed_at: str | None = None
    labels: tuple[str, ...] = ()
    assignees: tuple[str, ...] = ()
    reviewers: tuple[str, ...] = ()
    milestone: str | None = None
    linked_issues: tuple[int, ...] = ()


@dataclass(frozen=True)
class PRAnalysis:
    """Canonical view of a pull request consumed by the feedback engine."""

    title: str
    description: str
    author: str
    state: PRState
    draft: bool
    diff_summary: DiffSummary
    metadata: PRMetadata
    files_changed: tuple[FileChange, ...] = field(default_factory=tuple)
    commits: tuple[CommitInfo, ...] = field(default_factory=tuple)
