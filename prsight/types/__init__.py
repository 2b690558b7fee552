"""prsight type definitions.

This module exports the raw GitHub records, the normalized analysis records
and the feedback records.
"""

from prsight.types.analysis import (
    CommitInfo,
    DiffSummary,
    FileChange,
    FlaggedFileChange,
    PRAnalysis,
    PRMetadata,
)
from prsight.types.feedback import (
    FOCUS_AREAS,
    BestPractices,
    ComplexityAnalysis,
    FocusArea,
    PRFeedback,
    QualityAssessment,
    SecurityAssessment,
    SecurityVulnerability,
)
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
    PullRequestStatus,
    RateLimitInfo,
    RepositorySearchResult,
    ReviewSummary,
)

__all__ = [
    # Raw GitHub records
    "GitHubUser",
    "GitHubLabel",
    "GitHubMilestone",
    "GitHubBranchRef",
    "GitHubPullRequest",
    "GitHubFile",
    "GitHubCommit",
    "GitHubCommitAuthor",
    "GitHubCommitVerification",
    "GitHubCommitStats",
    "GitHubCommitDetail",
    "GitHubRepository",
    "CodeSearchItem",
    "RepositorySearchResult",
    "CheckRun",
    "ReviewSummary",
    "PullRequestStatus",
    "RateLimitInfo",
    # Analysis records
    "FileChange",
    "FlaggedFileChange",
    "CommitInfo",
    "DiffSummary",
    "PRMetadata",
    "PRAnalysis",
    # Feedback records
    "FOCUS_AREAS",
    "FocusArea",
    "QualityAssessment",
    "SecurityVulnerability",
    "SecurityAssessment",
    "BestPractices",
    "ComplexityAnalysis",
    "PRFeedback",
]
