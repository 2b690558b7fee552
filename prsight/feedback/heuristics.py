"""File-name and commit-message heuristics used by the feedback engine."""

import posixpath
import re

from prsight.types.analysis import PRAnalysis

_TEST_FILE_NAME = re.compile(r"\.(test|spec)\.(ts|js|tsx|jsx|py|java|rb|go|rs)$")
_TEST_DIRECTORIES = frozenset({"test", "tests", "__tests__"})

_SECURITY_SENSITIVE = re.compile(
    r"auth|password|token|secret|credential|security|permission|privilege|crypto|encrypt",
    re.IGNORECASE,
)
_CONFIG_SUFFIXES = (".env", ".yml", ".yaml", ".properties")
DEPENDENCY_MANIFESTS = frozenset(
    {
        "package.json",
        "yarn.lock",
        "package-lock.json",
        "requirements.txt",
        "Pipfile",
        "poetry.lock",
        "Cargo.toml",
        "Cargo.lock",
        "go.mod",
        "go.sum",
    }
)
_SECRET_HINT = re.compile(
    r"password|secret|token|api[_-]?key|private[_-]?key|credential", re.IGNORECASE
)
_UI_FILE = re.compile(r"\.(tsx|jsx|vue|svelte|html|css|scss)$")
_FEATURE_PREFIX = re.compile(r"^(feat|feature)", re.IGNORECASE)
_FEATURE_WORD = re.compile(r"add|new", re.IGNORECASE)
_CONVENTIONAL_COMMIT = re.compile(
    r"^(feat|fix|docs|style|refactor|test|chore|perf|ci|build|revert)(\(.+\))?: .+"
)
_NON_DESCRIPTIVE_TITLES = frozenset(
    {"fix", "update", "change", "modify", "wip", "temp", "test", "debug"}
)


def _directories(filename: str) -> list[str]:
    return posixpath.dirname(filename).split("/")


def is_test_file(filename: str) -> bool:
    return bool(_TEST_FILE_NAME.search(filename)) or any(
        segment in _TEST_DIRECTORIES for segment in _directories(filename)
    )


def is_documentation_file(filename: str) -> bool:
    return (
        filename.endswith(".md")
        or "README" in filename
        or "docs" in _directories(filename)
    )


def is_security_sensitive_file(filename: str) -> bool:
    return bool(_SECURITY_SENSITIVE.search(filename))


def is_configuration_file(filename: str) -> bool:
    return "config" in filename or filename.endswith(_CONFIG_SUFFIXES)


def is_dependency_file(filename: str) -> bool:
    return filename in DEPENDENCY_MANIFESTS


def has_suspicious_content(text: str) -> bool:
    return bool(_SECRET_HINT.search(text))


def is_ui_file(filename: str) -> bool:
    return bool(_UI_FILE.search(filename))


def is_feature_commit(message: str) -> bool:
    return bool(_FEATURE_PREFIX.match(message) or _FEATURE_WORD.search(message))


def is_breaking_commit(message: str) -> bool:
    return "BREAKING" in message or "!:" in message


def is_conventional_commit(message: str) -> bool:
    return bool(_CONVENTIONAL_COMMIT.match(message))


def is_descriptive_title(title: str) -> bool:
    return title.strip().lower() not in _NON_DESCRIPTIVE_TITLES


# Whole-PR predicates


def has_test_files(analysis: PRAnalysis) -> bool:
    return any(is_test_file(f.filename) for f in analysis.files_changed)


def has_documentation(analysis: PRAnalysis) -> bool:
    return any(is_documentation_file(f.filename) for f in analysis.files_changed)


def has_ui_changes(analysis: PRAnalysis) -> bool:
    return any(is_ui_file(f.filename) for f in analysis.files_changed)


def has_new_features(analysis: PRAnalysis) -> bool:
    return any(is_feature_commit(c.message) for c in analysis.commits)


def has_breaking_changes(analysis: PRAnalysis) -> bool:
    return any(is_breaking_commit(c.message) for c in analysis.commits)


def security_sensitive_files(analysis: PRAnalysis) -> list[str]:
    return [
        f.filename for f in analysis.files_changed if is_security_sensitive_file(f.filename)
    ]


def count_xl_files(analysis: PRAnalysis) -> int:
    return sum(1 for f in analysis.files_changed if f.size_category == "xl")
