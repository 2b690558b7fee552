"""
Tests for the heuristic feedback engine.
"""

from unittest.mock import MagicMock

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from prsight.feedback import FeedbackService, generate_feedback, round_half_up
from prsight.feedback.engine import (
    FOCUS_AREA_CHECKLISTS,
    analyze_focus_areas,
    assess_security,
    change_risk,
    check_best_practices,
    cognitive_complexity,
    estimate_review_time,
    generate_suggestions,
    security_risk_level,
    summary_score,
)
from prsight.feedback.rules import score_to_grade
from prsight.testing import make_analysis
from prsight.types.feedback import (
    FOCUS_AREAS,
    BestPractices,
    QualityAssessment,
    SecurityAssessment,
)

filenames = st.sampled_from(
    [
        "src/app.py",
        "src/auth.ts",
        "web/Button.tsx",
        "tests/test_app.py",
        "docs/usage.md",
        "package.json",
        "config/settings.yml",
        "lib/util.go",
    ]
)
files_strategy = st.lists(
    st.tuples(
        filenames,
        st.integers(min_value=0, max_value=400),
        st.integers(min_value=0, max_value=400),
    ),
    max_size=30,
)
commits_strategy = st.lists(
    st.sampled_from(
        [
            "feat: add login",
            "fix: handle empty payloads",
            "BREAKING: drop legacy api",
            "update stuff",
            "chore: rotate api_key",
        ]
    ),
    max_size=25,
)


class TestEndToEnd:
    def test_large_single_sensitive_file(self) -> None:
        analysis = make_analysis(
            files=[("src/auth.ts", 300, 250)],
            commits=["fix: tighten session checks"],
            body="Short text",
        )

        feedback = generate_feedback(analysis)

        quality = feedback.code_quality
        # large diff -2, no tests -2, no docs -1, brief description -1, xl file -1
        assert quality.score == 3.0
        assert quality.grade == "D"
        assert quality.concerns == (
            "Large PR with many changes - consider breaking into smaller PRs",
            "No test files detected - consider adding tests for new functionality",
            "Consider updating documentation for significant changes",
            "PR description is brief - consider adding more context",
            "1 files with extensive changes - review carefully",
        )
        assert quality.strengths == (
            "Limited number of files changed, easier to review",
            "Reasonable number of commits",
        )
        assert analysis.diff_summary.change_complexity == "very_high"
        assert feedback.security_assessment.considerations == (
            "Security-sensitive files modified: src/auth.ts",
        )
        assert feedback.security_assessment.risk_level == "low"
        assert feedback.complexity_analysis.cognitive_complexity == "high"
        assert feedback.complexity_analysis.change_risk == "medium"
        assert feedback.complexity_analysis.testing_requirements == (
            "Security testing",
            "Integration testing",
        )
        assert feedback.suggestions == (
            "Consider breaking this PR into smaller, focused changes",
            "Add comprehensive testing for complex changes",
        )
        # 3 followed, 1 needs improvement: 3.0 + (0.75 - 0.5) * 2
        assert feedback.summary_score == 3.5
        assert feedback.estimated_review_time == 78
        assert feedback.overall_assessment == (
            "This PR has room for improvement in code quality with 1 files modified "
            "(550 total line changes). 1 security consideration identified. "
            "Requires significant improvements before merge."
        )
        assert feedback.focus_area_analysis is None

    def test_well_formed_pull_request(self, sample_analysis) -> None:
        feedback = generate_feedback(sample_analysis)

        assert feedback.code_quality.score == 10.0
        assert feedback.code_quality.grade == "A"
        assert feedback.code_quality.comments == (
            "✅ Limited number of files changed, easier to review",
            "✅ Includes test files",
            "✅ Includes documentation updates",
            "✅ Reasonable number of commits",
        )
        assert feedback.security_assessment.risk_level == "low"
        assert feedback.best_practices.needs_improvement == ()
        assert feedback.summary_score == 10.0
        assert feedback.estimated_review_time == 67
        assert feedback.complexity_analysis.testing_requirements == (
            "Unit tests for new functionality",
        )
        assert feedback.overall_assessment == (
            "This PR demonstrates high code quality with 3 files modified "
            "(86 total line changes). Ready for review and merge with minimal concerns."
        )


class TestReviewTime:
    def test_three_files_forty_changes(self) -> None:
        analysis = make_analysis(files=[("a.py", 10, 0), ("b.py", 10, 0), ("c.py", 20, 0)])

        assert estimate_review_time(analysis) == 44

    def test_half_minutes_round_up(self) -> None:
        analysis = make_analysis(files=[("a.py", 1, 0)])

        # 15 + 3 + 0.5
        assert estimate_review_time(analysis) == 19

    def test_line_minutes_are_capped(self) -> None:
        analysis = make_analysis(files=[("a.py", 1000, 1000)])

        assert estimate_review_time(analysis) == 15 + 3 + 60

    def test_empty_pull_request(self) -> None:
        assert estimate_review_time(make_analysis()) == 15


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "digits", "expected"),
        [(2.5, 0, 3.0), (3.5, 0, 4.0), (0.25, 1, 0.3), (7.04, 1, 7.0), (-0.5, 0, 0.0)],
    )
    def test_ties_go_up(self, value: float, digits: int, expected: float) -> None:
        assert round_half_up(value, digits) == expected


class TestSecurity:
    @pytest.mark.parametrize(
        ("considerations", "vulnerabilities", "level"),
        [(0, 0, "low"), (1, 0, "low"), (2, 0, "low"), (3, 0, "medium"), (0, 1, "high"), (5, 1, "high")],
    )
    def test_risk_level(self, considerations: int, vulnerabilities: int, level: str) -> None:
        assert security_risk_level(considerations, vulnerabilities) == level

    def test_three_considerations_is_medium_risk(self) -> None:
        analysis = make_analysis(
            files=[("src/auth.py", 1, 1), ("deploy/settings.yml", 1, 1), ("package.json", 1, 1)]
        )

        security = assess_security(analysis)

        assert security.considerations == (
            "Security-sensitive files modified: src/auth.py",
            "Configuration files modified - verify no sensitive data is exposed",
            "Dependencies modified - ensure packages are from trusted sources",
        )
        assert security.recommendations == (
            "Ensure thorough security review and testing",
            "Review configuration changes for security implications",
            "Run security audit on new dependencies",
        )
        assert security.risk_level == "medium"

    def test_dependency_manifest_must_match_exactly(self) -> None:
        analysis = make_analysis(
            files=[
                ("package.json.bak", 1, 0),
                ("my-requirements.txt", 1, 0),
                ("frontend/package.json", 1, 0),
                ("services/api/go.mod", 1, 0),
            ]
        )

        assert assess_security(analysis).considerations == ()

    def test_secret_in_commit_message_is_one_vulnerability(self) -> None:
        analysis = make_analysis(
            commits=["chore: rotate api_key", "fix: remove leaked password", "docs: tidy"]
        )

        security = assess_security(analysis)

        assert len(security.vulnerabilities_found) == 1
        vulnerability = security.vulnerabilities_found[0]
        assert vulnerability.type == "Potential secret in commit message"
        assert vulnerability.severity == "medium"
        assert vulnerability.file == "commit-messages"
        assert security.risk_level == "high"

    def test_no_findings(self) -> None:
        security = assess_security(make_analysis(files=[("src/app.py", 3, 1)]))

        assert security.risk_level == "low"
        assert security.considerations == ()
        assert security.vulnerabilities_found == ()


class TestBestPractices:
    def test_empty_commit_list_counts_as_conventional(self) -> None:
        practices = check_best_practices(make_analysis())

        assert "Follows conventional commit format" in practices.followed

    def test_one_unconventional_commit_fails_the_check(self) -> None:
        practices = check_best_practices(make_analysis(commits=["feat: add login", "update stuff"]))

        assert "Consider using conventional commit format" in practices.needs_improvement

    @pytest.mark.parametrize("title", ["fix", "WIP", "  Update  ", "short one"])
    def test_non_descriptive_titles(self, title: str) -> None:
        practices = check_best_practices(make_analysis(title=title))

        assert "Consider making PR title more descriptive" in practices.needs_improvement

    def test_draft_with_large_diff(self) -> None:
        analysis = make_analysis(files=[("src/app.py", 150, 60)], draft=True, body="Fixes #1")

        practices = check_best_practices(analysis)

        assert practices.followed == (
            "Follows conventional commit format",
            "PR has descriptive title",
            "Reasonable number of files changed",
            "Links to related issues",
            "Uses draft status for work-in-progress",
        )
        assert practices.needs_improvement == ()

    def test_file_count_check_only_ever_follows(self) -> None:
        analysis = make_analysis(files=[(f"src/m{i}.py", 1, 0) for i in range(16)])

        practices = check_best_practices(analysis)

        assert "Reasonable number of files changed" not in practices.followed
        assert all("files" not in item for item in practices.needs_improvement)


class TestComplexity:
    def test_cognitive_complexity_weights_files(self) -> None:
        # 150 + 6 * 10 = 210
        analysis = make_analysis(files=[(f"src/m{i}.py", 25, 0) for i in range(6)])

        assert cognitive_complexity(analysis) == "medium"

    def test_change_risk_counts_factors(self) -> None:
        analysis = make_analysis(
            files=[("src/auth.py", 400, 0)], commits=["feat!: drop legacy tokens"]
        )

        # large diff, sensitive file, breaking change
        assert change_risk(analysis) == "high"

    def test_change_risk_low(self) -> None:
        assert change_risk(make_analysis(files=[("src/auth.py", 1, 0)])) == "low"


class TestSuggestions:
    def test_accessibility_requires_ui_changes(self) -> None:
        without_ui = make_analysis(files=[("src/app.py", 1, 0)])
        with_ui = make_analysis(files=[("web/Button.tsx", 1, 0)])

        assert generate_suggestions(without_ui, ["accessibility"]) == ()
        assert generate_suggestions(with_ui, ["accessibility"]) == (
            "Verify accessibility compliance (ARIA labels, keyboard navigation)",
            "Test with screen readers and accessibility tools",
        )

    def test_focus_areas_without_advice_add_nothing(self) -> None:
        analysis = make_analysis(files=[("src/app.py", 1, 0)])

        assert generate_suggestions(analysis, ["security", "architecture", "code_style"]) == ()

    def test_duplicates_removed_keeping_first_occurrence(self) -> None:
        analysis = make_analysis(commits=["feat: add export", "feat!: new format"])

        suggestions = generate_suggestions(analysis, ["testing", "performance", "testing"])

        assert suggestions == (
            "Add unit tests for new functionality",
            "Consider integration tests for complex workflows",
            "Consider adding performance benchmarks for critical code paths",
            "Review for potential memory leaks or inefficient algorithms",
            "Consider adding feature flags for gradual rollout",
            "Ensure error handling covers edge cases for new functionality",
            "Update migration guide for breaking changes",
            "Consider deprecation warnings before removing functionality",
        )


class TestFocusAreas:
    def test_every_area_has_an_entry(self) -> None:
        analysis = analyze_focus_areas(list(FOCUS_AREAS))

        assert list(analysis) == list(FOCUS_AREAS)
        assert analysis["security"] == FOCUS_AREA_CHECKLISTS["security"]
        assert analysis["documentation"] == ()
        assert analysis["architecture"] == ()
        assert analysis["code_style"] == ()

    def test_empty_focus_list_still_produces_analysis(self, sample_analysis) -> None:
        assert generate_feedback(sample_analysis, []).focus_area_analysis == {}

    def test_focus_area_analysis_in_feedback(self, sample_analysis) -> None:
        feedback = generate_feedback(sample_analysis, ["performance"])

        assert feedback.focus_area_analysis == {
            "performance": (
                "Review algorithmic complexity of changes",
                "Check for potential memory leaks",
                "Consider caching strategies if applicable",
            )
        }


class TestSummaryScore:
    def test_empty_practice_lists_contribute_nothing(self) -> None:
        quality = QualityAssessment(score=7.0, grade="B")

        score = summary_score(quality, SecurityAssessment(risk_level="low"), BestPractices())

        assert score == 7.0

    def test_clamped_at_zero(self) -> None:
        quality = QualityAssessment(score=1.0, grade="F")
        practices = BestPractices(needs_improvement=("Consider linking to related issue or ticket",))

        score = summary_score(quality, SecurityAssessment(risk_level="critical"), practices)

        assert score == 0.0

    def test_rounded_to_one_decimal(self) -> None:
        quality = QualityAssessment(score=8.0, grade="B")
        practices = BestPractices(followed=("a", "b"), needs_improvement=("c",))

        score = summary_score(quality, SecurityAssessment(risk_level="medium"), practices)

        # 8 - 1 + (2/3 - 0.5) * 2
        assert score == 7.3


@given(files=files_strategy, commits=commits_strategy, body=st.text(max_size=300))
@settings(max_examples=100, deadline=None)
def test_property_scores_are_bounded(
    files: list[tuple[str, int, int]], commits: list[str], body: str
) -> None:
    """
    Property 8: Scores are bounded and grades follow scores

    For any pull request, both scores stay within [0, 10], the grade is the
    grade of the quality score, and suggestions contain no duplicates.
    """
    analysis = make_analysis(files=files, commits=commits, body=body)

    feedback = generate_feedback(analysis, ["testing", "accessibility"])

    assert 0.0 <= feedback.code_quality.score <= 10.0
    assert 0.0 <= feedback.summary_score <= 10.0
    assert feedback.code_quality.grade == score_to_grade(feedback.code_quality.score)
    assert len(set(feedback.suggestions)) == len(feedback.suggestions)
    assert feedback.estimated_review_time >= 15


@given(files=files_strategy, commits=commits_strategy)
@settings(max_examples=50, deadline=None)
def test_property_feedback_is_deterministic(
    files: list[tuple[str, int, int]], commits: list[str]
) -> None:
    """Identical analyses always produce identical feedback."""
    analysis = make_analysis(files=files, commits=commits)

    assert generate_feedback(analysis) == generate_feedback(analysis)


def test_service_logs_once_per_request(sample_analysis) -> None:
    logger = MagicMock()

    FeedbackService(logger).generate(sample_analysis, ["security"])

    logger.info.assert_called_once()
    assert logger.info.call_args.args[1] == sample_analysis.title
