"""
Code quality rules.

Each rule is an independent ``(predicate, effect, label)`` triple. Rules are
evaluated in list order and every rule is evaluated; one rule firing never
prevents another from firing.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Literal

from prsight.feedback.heuristics import count_xl_files, has_documentation, has_test_files
from prsight.types.analysis import PRAnalysis
from prsight.types.feedback import Grade

STARTING_SCORE = 10.0
STRENGTH_MARKER = "✅"


@dataclass(frozen=True)
class QualityRule:
    """A single code-quality observation."""

    name: str
    applies: Callable[[PRAnalysis], bool]
    message: Callable[[PRAnalysis], str]
    kind: Literal["strength", "concern"] = "concern"
    penalty: float = 0.0


@dataclass(frozen=True)
class RuleOutcome:
    """Score and observations after all rules ran."""

    score: float
    strengths: tuple[str, ...]
    concerns: tuple[str, ...]


def _fixed(text: str) -> Callable[[PRAnalysis], str]:
    return lambda _analysis: text


QUALITY_RULES: tuple[QualityRule, ...] = (
    QualityRule(
        name="large-diff",
        applies=lambda a: a.diff_summary.total_changes > 500,
        message=_fixed("Large PR with many changes - consider breaking into smaller PRs"),
        penalty=2,
    ),
    QualityRule(
        name="focused-diff",
        applies=lambda a: a.diff_summary.total_changes < 50,
        message=_fixed("Focused PR with manageable scope"),
        kind="strength",
    ),
    QualityRule(
        name="many-files",
        applies=lambda a: a.diff_summary.files_count > 20,
        message=_fixed("Many files changed - ensure changes are related and cohesive"),
        penalty=1,
    ),
    QualityRule(
        name="few-files",
        applies=lambda a: a.diff_summary.files_count <= 5,
        message=_fixed("Limited number of files changed, easier to review"),
        kind="strength",
    ),
    QualityRule(
        name="missing-tests",
        applies=lambda a: not has_test_files(a) and a.diff_summary.total_changes > 50,
        message=_fixed("No test files detected - consider adding tests for new functionality"),
        penalty=2,
    ),
    QualityRule(
        name="includes-tests",
        applies=has_test_files,
        message=_fixed("Includes test files"),
        kind="strength",
    ),
    QualityRule(
        name="missing-docs",
        applies=lambda a: not has_documentation(a) and a.diff_summary.total_changes > 100,
        message=_fixed("Consider updating documentation for significant changes"),
        penalty=1,
    ),
    QualityRule(
        name="includes-docs",
        applies=has_documentation,
        message=_fixed("Includes documentation updates"),
        kind="strength",
    ),
    QualityRule(
        name="brief-description",
        applies=lambda a: len(a.description) < 50,
        message=_fixed("PR description is brief - consider adding more context"),
        penalty=1,
    ),
    QualityRule(
        name="detailed-description",
        applies=lambda a: len(a.description) > 200,
        message=_fixed("Comprehensive PR description provided"),
        kind="strength",
    ),
    QualityRule(
        name="many-commits",
        applies=lambda a: len(a.commits) > 20,
        message=_fixed("Many commits - consider squashing related commits"),
        penalty=1,
    ),
    QualityRule(
        name="few-commits",
        applies=lambda a: len(a.commits) <= 5,
        message=_fixed("Reasonable number of commits"),
        kind="strength",
    ),
    QualityRule(
        name="xl-files",
        applies=lambda a: count_xl_files(a) > 0,
        message=lambda a: f"{count_xl_files(a)} files with extensive changes - review carefully",
        penalty=1,
    ),
)


def clamp_score(score: float) -> float:
    return max(0.0, min(10.0, score))


def score_to_grade(score: float) -> Grade:
    if score >= 9:
        return "A"
    if score >= 7:
        return "B"
    if score >= 5:
        return "C"
    if score >= 3:
        return "D"
    return "F"


def evaluate_rules(
    analysis: PRAnalysis, rules: Sequence[QualityRule] = QUALITY_RULES
) -> RuleOutcome:
    """Run every rule against *analysis* and return the clamped score."""
    score = STARTING_SCORE
    strengths: list[str] = []
    concerns: list[str] = []

    for rule in rules:
        if not rule.applies(analysis):
            continue
        score -= rule.penalty
        if rule.kind == "strength":
            strengths.append(rule.message(analysis))
        else:
            concerns.append(rule.message(analysis))

    return RuleOutcome(
        score=clamp_score(score),
        strengths=tuple(strengths),
        concerns=tuple(concerns),
    )
