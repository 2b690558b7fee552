"""
Tests for the code quality rules and the file / commit heuristics behind them.
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from prsight.feedback import QUALITY_RULES, QualityRule, evaluate_rules, score_to_grade
from prsight.feedback.heuristics import (
    is_breaking_commit,
    is_configuration_file,
    is_conventional_commit,
    is_dependency_file,
    is_documentation_file,
    is_feature_commit,
    is_test_file,
)
from prsight.feedback.rules import clamp_score
from prsight.testing import make_analysis

GRADE_ORDER = "FDCBA"


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("src/login.test.ts", True),
        ("src/login.spec.jsx", True),
        ("tests/test_app.py", True),
        ("pkg/__tests__/thing.js", True),
        ("src/test/java/AppTest.java", True),
        ("src/testing/helpers.py", False),
        ("src/contest.py", False),
        ("src/latest.test.txt", False),
        ("test_app.py", False),
    ],
)
def test_is_test_file(filename: str, expected: bool) -> None:
    assert is_test_file(filename) is expected


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("CHANGELOG.md", True),
        ("README.rst", True),
        ("docs/conf.py", True),
        ("site/docs/index.html", True),
        ("src/docstring.py", False),
        ("mydocs/notes.txt", False),
    ],
)
def test_is_documentation_file(filename: str, expected: bool) -> None:
    assert is_documentation_file(filename) is expected


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("src/config.ts", True),
        (".env", True),
        ("deploy/app.yaml", True),
        ("app.properties", True),
        ("src/app.py", False),
    ],
)
def test_is_configuration_file(filename: str, expected: bool) -> None:
    assert is_configuration_file(filename) is expected


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("package.json", True),
        ("services/api/go.sum", False),
        ("frontend/package.json", False),
        ("Pipfile", True),
        ("pipfile", False),
        ("requirements-dev.txt", False),
    ],
)
def test_is_dependency_file(filename: str, expected: bool) -> None:
    assert is_dependency_file(filename) is expected


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("feat: add login", True),
        ("fix(api): handle 404", True),
        ("revert: undo retries", True),
        ("feat:missing space", False),
        ("Feat: capitalised type", False),
        ("update stuff", False),
    ],
)
def test_is_conventional_commit(message: str, expected: bool) -> None:
    assert is_conventional_commit(message) is expected


def test_commit_kind_detection() -> None:
    assert is_feature_commit("Feature flag plumbing")
    assert is_feature_commit("fix: address new edge case")
    assert not is_feature_commit("fix: typo")
    assert is_breaking_commit("refactor!: rename client")
    assert is_breaking_commit("BREAKING CHANGE: drop python 3.9")
    assert not is_breaking_commit("breaking news")


@pytest.mark.parametrize(
    ("score", "grade"),
    [(10.0, "A"), (9.0, "A"), (8.9, "B"), (7.0, "B"), (5.0, "C"), (3.0, "D"), (2.9, "F"), (0.0, "F")],
)
def test_score_to_grade(score: float, grade: str) -> None:
    assert score_to_grade(score) == grade


@given(
    low=st.floats(min_value=0.0, max_value=10.0),
    high=st.floats(min_value=0.0, max_value=10.0),
)
@settings(max_examples=100)
def test_property_grade_is_monotonic(low: float, high: float) -> None:
    """
    Property 9: Grades never decrease as the score increases
    """
    low, high = sorted((low, high))

    assert GRADE_ORDER.index(score_to_grade(low)) <= GRADE_ORDER.index(score_to_grade(high))


@given(score=st.floats(min_value=-100.0, max_value=100.0))
@settings(max_examples=100)
def test_property_clamp(score: float) -> None:
    clamped = clamp_score(score)

    assert 0.0 <= clamped <= 10.0
    if 0.0 <= score <= 10.0:
        assert clamped == score


def test_rule_names_are_unique() -> None:
    names = [rule.name for rule in QUALITY_RULES]

    assert len(names) == len(set(names))


def test_every_rule_is_evaluated() -> None:
    # 25 files, 600 changes, no tests or docs, brief description, 21 commits
    analysis = make_analysis(
        files=[(f"src/m{i}.py", 24, 0) for i in range(25)],
        commits=[f"fix: step {i}" for i in range(21)],
    )

    outcome = evaluate_rules(analysis)

    assert outcome.strengths == ()
    assert len(outcome.concerns) == 6
    # 10 - 2 - 1 - 2 - 1 - 1 - 1
    assert outcome.score == 2.0


def test_score_never_drops_below_zero() -> None:
    harsh = [
        QualityRule(name=f"r{i}", applies=lambda a: True, message=lambda a: "bad", penalty=4)
        for i in range(4)
    ]

    outcome = evaluate_rules(make_analysis(), harsh)

    assert outcome.score == 0.0
    assert outcome.concerns == ("bad",) * 4


def test_custom_rules_run_in_order() -> None:
    rules = [
        QualityRule(name="b", applies=lambda a: True, message=lambda a: "second", kind="strength"),
        QualityRule(name="a", applies=lambda a: True, message=lambda a: "first", kind="strength"),
        QualityRule(name="skip", applies=lambda a: False, message=lambda a: "never", penalty=5),
    ]

    outcome = evaluate_rules(make_analysis(), rules)

    assert outcome.strengths == ("second", "first")
    assert outcome.score == 10.0
