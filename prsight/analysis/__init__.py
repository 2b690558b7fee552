"""Pull request analysis: normalization of raw GitHub data."""

from prsight.analysis.normalizer import (
    assess_change_complexity,
    categorize_file_size,
    detect_language,
    extract_linked_issues,
    flag_security_sensitive,
    is_merge_commit,
    normalize,
)
from prsight.analysis.service import PRAnalysisService

__all__ = [
    "PRAnalysisService",
    "normalize",
    "detect_language",
    "categorize_file_size",
    "assess_change_complexity",
    "is_merge_commit",
    "extract_linked_issues",
    "flag_security_sensitive",
]
