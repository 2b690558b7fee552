"""
Heuristic pull request feedback engine.

Turns a ``PRAnalysis`` into a ``PRFeedback``. Every step is a pure function
of the analysis (and the optional focus areas), so the same input always
yields the same review.
"""

import logging
import math
from collections.abc import Sequence

from prsight.feedback.heuristics import (
    has_breaking_changes,
    has_new_features,
    has_suspicious_content,
    has_ui_changes,
    is_configuration_file,
    is_conventional_commit,
    is_dependency_file,
    is_descriptive_title,
    security_sensitive_files,
)
from prsight.feedback.rules import STRENGTH_MARKER, clamp_score, evaluate_rules, score_to_grade
from prsight.logging import get_logger
from prsight.types.analysis import PRAnalysis
from prsight.types.feedback import (
    BestPractices,
    ComplexityAnalysis,
    Level,
    PRFeedback,
    QualityAssessment,
    RiskLevel,
    SecurityAssessment,
    SecurityVulnerability,
)

RISK_PENALTY: dict[str, int] = {"critical": 3, "high": 2, "medium": 1, "low": 0}

BASE_REVIEW_MINUTES = 15
MINUTES_PER_FILE = 3
MINUTES_PER_CHANGED_LINE = 0.5
MAX_LINE_REVIEW_MINUTES = 60

FOCUS_AREA_SUGGESTIONS: dict[str, tuple[str, ...]] = {
    "performance": (
        "Consider adding performance benchmarks for critical code paths",
        "Review for potential memory leaks or inefficient algorithms",
    ),
    "accessibility": (
        "Verify accessibility compliance (ARIA labels, keyboard navigation)",
        "Test with screen readers and accessibility tools",
    ),
    "documentation": (
        "Update API documentation if public interfaces changed",
        "Consider adding inline code comments for complex logic",
    ),
    "testing": (
        "Add unit tests for new functionality",
        "Consider integration tests for complex workflows",
    ),
}

FOCUS_AREA_CHECKLISTS: dict[str, tuple[str, ...]] = {
    "performance": (
        "Review algorithmic complexity of changes",
        "Check for potential memory leaks",
        "Consider caching strategies if applicable",
    ),
    "security": (
        "Validate input sanitization",
        "Check for SQL injection vulnerabilities",
        "Review authentication and authorization changes",
    ),
    "accessibility": (
        "Ensure keyboard navigation works",
        "Verify ARIA labels are present",
        "Test with screen readers",
    ),
    "maintainability": (
        "Check code complexity metrics",
        "Ensure proper error handling",
        "Review code organization and structure",
    ),
    "testing": (
        "Add unit tests for new code",
        "Update integration tests if needed",
        "Consider edge case testing",
    ),
}


def round_half_up(value: float, digits: int = 0) -> float:
    """Round with ties going up, unlike the banker's rounding of ``round``."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def _dedupe(items: Sequence[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(items))


def assess_code_quality(analysis: PRAnalysis) -> QualityAssessment:
    outcome = evaluate_rules(analysis)
    comments = [f"{STRENGTH_MARKER} {s}" for s in outcome.strengths]
    comments.extend(outcome.concerns)
    return QualityAssessment(
        score=outcome.score,
        grade=score_to_grade(outcome.score),
        comments=tuple(comments),
        strengths=outcome.strengths,
        concerns=outcome.concerns,
    )


def security_risk_level(considerations: int, vulnerabilities: int) -> RiskLevel:
    if vulnerabilities > 0:
        return "high"
    if considerations >= 3:
        return "medium"
    return "low"


def assess_security(analysis: PRAnalysis) -> SecurityAssessment:
    """
    Look for changes that deserve a security-minded reviewer.

    Sensitive file names, configuration files, dependency manifests and
    commit messages that look like they mention secrets are all reported.
    """
    considerations: list[str] = []
    recommendations: list[str] = []
    vulnerabilities: list[SecurityVulnerability] = []

    sensitive = security_sensitive_files(analysis)
    if sensitive:
        considerations.append(f"Security-sensitive files modified: {', '.join(sensitive)}")
        recommendations.append("Ensure thorough security review and testing")

    if any(is_configuration_file(f.filename) for f in analysis.files_changed):
        considerations.append(
            "Configuration files modified - verify no sensitive data is exposed"
        )
        recommendations.append("Review configuration changes for security implications")

    if any(is_dependency_file(f.filename) for f in analysis.files_changed):
        considerations.append(
            "Dependencies modified - ensure packages are from trusted sources"
        )
        recommendations.append("Run security audit on new dependencies")

    if any(has_suspicious_content(c.message) for c in analysis.commits):
        vulnerabilities.append(
            SecurityVulnerability(
                type="Potential secret in commit message",
                severity="medium",
                description="Commit messages may contain sensitive information",
                file="commit-messages",
                recommendation="Review commit messages for exposed secrets",
            )
        )

    return SecurityAssessment(
        risk_level=security_risk_level(len(considerations), len(vulnerabilities)),
        considerations=tuple(considerations),
        vulnerabilities_found=tuple(vulnerabilities),
        recommendations=tuple(recommendations),
    )


def generate_suggestions(
    analysis: PRAnalysis, focus_areas: Sequence[str] | None = None
) -> tuple[str, ...]:
    suggestions: list[str] = []

    for area in focus_areas or ():
        if area == "accessibility" and not has_ui_changes(analysis):
            continue
        suggestions.extend(FOCUS_AREA_SUGGESTIONS.get(area, ()))

    if has_new_features(analysis):
        suggestions.extend(
            (
                "Consider adding feature flags for gradual rollout",
                "Ensure error handling covers edge cases for new functionality",
            )
        )

    if has_breaking_changes(analysis):
        suggestions.extend(
            (
                "Update migration guide for breaking changes",
                "Consider deprecation warnings before removing functionality",
            )
        )

    if analysis.diff_summary.change_complexity == "very_high":
        suggestions.extend(
            (
                "Consider breaking this PR into smaller, focused changes",
                "Add comprehensive testing for complex changes",
            )
        )

    return _dedupe(suggestions)


def check_best_practices(analysis: PRAnalysis) -> BestPractices:
    followed: list[str] = []
    needs_improvement: list[str] = []

    # An empty commit list counts as conventional
    if all(is_conventional_commit(c.message) for c in analysis.commits):
        followed.append("Follows conventional commit format")
    else:
        needs_improvement.append("Consider using conventional commit format")

    if len(analysis.title) > 10 and is_descriptive_title(analysis.title):
        followed.append("PR has descriptive title")
    else:
        needs_improvement.append("Consider making PR title more descriptive")

    if analysis.diff_summary.files_count <= 15:
        followed.append("Reasonable number of files changed")

    if analysis.metadata.linked_issues:
        followed.append("Links to related issues")
    else:
        needs_improvement.append("Consider linking to related issue or ticket")

    if analysis.draft and analysis.diff_summary.total_changes > 200:
        followed.append("Uses draft status for work-in-progress")

    return BestPractices(followed=tuple(followed), needs_improvement=tuple(needs_improvement))


def cognitive_complexity(analysis: PRAnalysis) -> Level:
    summary = analysis.diff_summary
    weight = summary.total_changes + summary.files_count * 10
    if weight > 500:
        return "high"
    if weight > 200:
        return "medium"
    return "low"


def change_risk(analysis: PRAnalysis) -> Level:
    factors = [
        analysis.diff_summary.total_changes > 300,
        analysis.diff_summary.files_count > 15,
        bool(security_sensitive_files(analysis)),
        has_breaking_changes(analysis),
    ]
    count = sum(factors)
    if count >= 3:
        return "high"
    if count >= 2:
        return "medium"
    return "low"


def testing_requirements(analysis: PRAnalysis) -> tuple[str, ...]:
    requirements: list[str] = []
    if has_new_features(analysis):
        requirements.append("Unit tests for new functionality")
    if has_ui_changes(analysis):
        requirements.append("UI/Component testing")
    if security_sensitive_files(analysis):
        requirements.append("Security testing")
    if analysis.diff_summary.change_complexity in ("high", "very_high"):
        requirements.append("Integration testing")
    return tuple(requirements)


def analyze_complexity(analysis: PRAnalysis) -> ComplexityAnalysis:
    return ComplexityAnalysis(
        cognitive_complexity=cognitive_complexity(analysis),
        change_risk=change_risk(analysis),
        testing_requirements=testing_requirements(analysis),
    )


def analyze_focus_areas(focus_areas: Sequence[str]) -> dict[str, tuple[str, ...]]:
    """Checklist per requested focus area; areas without one map to ``()``."""
    return {area: FOCUS_AREA_CHECKLISTS.get(area, ()) for area in focus_areas}


def overall_assessment(
    analysis: PRAnalysis,
    quality: QualityAssessment,
    security: SecurityAssessment,
) -> str:
    if quality.score >= 8:
        text = "This PR demonstrates high code quality with "
    elif quality.score >= 6:
        text = "This PR shows good code quality with "
    else:
        text = "This PR has room for improvement in code quality with "

    summary = analysis.diff_summary
    text += f"{summary.files_count} files modified ({summary.total_changes} total line changes). "

    considered = len(security.considerations)
    if considered:
        plural = "s" if considered > 1 else ""
        text += f"{considered} security consideration{plural} identified. "

    if quality.score >= 8 and security.risk_level == "low":
        text += "Ready for review and merge with minimal concerns."
    elif quality.score >= 6:
        text += "Requires minor improvements before merge."
    else:
        text += "Requires significant improvements before merge."
    return text


def summary_score(
    quality: QualityAssessment,
    security: SecurityAssessment,
    practices: BestPractices,
) -> float:
    """
    Blend quality, security risk and best practices into one score.

    The best-practice ratio moves the score by at most one point either
    way and contributes nothing when no practice was evaluated.
    """
    score = quality.score - RISK_PENALTY[security.risk_level]

    evaluated = len(practices.followed) + len(practices.needs_improvement)
    if evaluated:
        score += (len(practices.followed) / evaluated - 0.5) * 2

    return clamp_score(round_half_up(score, 1))


def estimate_review_time(analysis: PRAnalysis) -> int:
    summary = analysis.diff_summary
    minutes = (
        BASE_REVIEW_MINUTES
        + MINUTES_PER_FILE * summary.files_count
        + min(MINUTES_PER_CHANGED_LINE * summary.total_changes, MAX_LINE_REVIEW_MINUTES)
    )
    return int(round_half_up(minutes))


class FeedbackService:
    """Generates heuristic reviews for analyzed pull requests."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("feedback")

    def generate(
        self, analysis: PRAnalysis, focus_areas: Sequence[str] | None = None
    ) -> PRFeedback:
        """
        Produce feedback for a pull request.

        Args:
            analysis: Normalized pull request
            focus_areas: Optional focus areas; when given, the feedback
                carries a checklist per area

        Returns:
            PRFeedback
        """
        self.logger.info(
            "Generating PR feedback for %r (focus=%s, files=%d, commits=%d)",
            analysis.title,
            list(focus_areas) if focus_areas else None,
            len(analysis.files_changed),
            len(analysis.commits),
        )

        quality = assess_code_quality(analysis)
        security = assess_security(analysis)
        practices = check_best_practices(analysis)

        return PRFeedback(
            overall_assessment=overall_assessment(analysis, quality, security),
            summary_score=summary_score(quality, security, practices),
            code_quality=quality,
            security_assessment=security,
            best_practices=practices,
            complexity_analysis=analyze_complexity(analysis),
            estimated_review_time=estimate_review_time(analysis),
            suggestions=generate_suggestions(analysis, focus_areas),
            focus_area_analysis=(
                analyze_focus_areas(focus_areas) if focus_areas is not None else None
            ),
        )


def generate_feedback(
    analysis: PRAnalysis,
    focus_areas: Sequence[str] | None = None,
    logger: logging.Logger | None = None,
) -> PRFeedback:
    """Shortcut for ``FeedbackService(logger).generate(analysis, focus_areas)``."""
    return FeedbackService(logger).generate(analysis, focus_areas)
