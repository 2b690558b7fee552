"""Pull request feedback records produced by the scoring engine."""

from dataclasses import dataclass, field
from typing import Literal

FocusArea = Literal[
    "performance",
    "security",
    "accessibility",
    "maintainability",
    "testing",
    "documentation",
    "architecture",
    "code_style",
]
Grade = Literal["A", "B", "C", "D", "F"]
RiskLevel = Literal["low", "medium", "high", "critical"]
Level = Literal["low", "medium", "high"]

FOCUS_AREAS: tuple[str, ...] = (
    "performance",
    "security",
    "accessibility",
    "maintainability",
    "testing",
    "documentation",
    "architecture",
    "code_style",
)


@dataclass(frozen=True)
class QualityAssessment:
    """Code quality score with the observations that produced it."""

    score: float
    grade: Grade
    comments: tuple[str, ...] = ()
    strengths: tuple[str, ...] = ()
    concerns: tuple[str, ...] = ()


@dataclass(frozen=True)
class SecurityVulnerability:
    """A concrete security finding."""

    type: str
    severity: RiskLevel
    description: str
    file: str
    recommendation: str
    line_number: int | None = None


@dataclass(frozen=True)
class SecurityAssessment:
    """Security risk summary."""

    risk_level: RiskLevel
    considerations: tuple[str, ...] = ()
    vulnerabilities_found: tuple[SecurityVulnerability, ...] = ()
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True)
class BestPractices:
    """Checklist of review conventions."""

    followed: tuple[str, ...] = ()
    needs_improvement: tuple[str, ...] = ()


@dataclass(frozen=True)
class ComplexityAnalysis:
    """How hard the change is to reason about and how risky it is."""

    cognitive_complexity: Level
    change_risk: Level
    testing_requirements: tuple[str, ...] = ()


@dataclass(frozen=True)
class PRFeedback:
    """Complete heuristic review of a pull request."""

    overall_assessment: str
    summary_score: float
    code_quality: QualityAssessment
    security_assessment: SecurityAssessment
    best_practices: BestPractices
    complexity_analysis: ComplexityAnalysis
    estimated_review_time: int
    suggestions: tuple[str, ...] = ()
    focus_area_analysis: dict[str, tuple[str, ...]] | None = field(default=None)
