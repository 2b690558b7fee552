"""Small shared helpers: repository URL parsing and text sanitisation."""

import re
from dataclasses import dataclass
from urllib.parse import urlsplit

from prsight.exceptions import ValidationError

_SEGMENT_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")

# Control characters other than tab and newline
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b-\x1f\x7f]")


@dataclass(frozen=True)
class RepositoryRef:
    """Owner and name of a repository parsed from its URL."""

    owner: str
    repo: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    @property
    def api_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"


def parse_repository_url(repo_url: str) -> RepositoryRef:
    """
    Parse ``https://<host>/<owner>/<repo>`` into a RepositoryRef.

    A trailing slash or ``.git`` suffix is accepted.

    Args:
        repo_url: Repository URL (e.g., "https://github.com/octocat/Hello-World")

    Returns:
        RepositoryRef with owner and repo

    Raises:
        ValidationError: If the URL is not a repository URL
    """
    parts = urlsplit(repo_url.strip())
    if parts.scheme != "https" or not parts.netloc:
        raise ValidationError(
            f"Invalid repository URL: {repo_url!r}. "
            "Expected https://<host>/<owner>/<repo>"
        )

    path = parts.path.strip("/")
    if path.endswith(".git"):
        path = path[: -len(".git")]
    segments = path.split("/")

    if len(segments) != 2 or not all(_SEGMENT_PATTERN.match(s) for s in segments):
        raise ValidationError(
            f"Invalid repository URL: {repo_url!r}. "
            "Expected https://<host>/<owner>/<repo>"
        )

    return RepositoryRef(owner=segments[0], repo=segments[1])


def sanitize_string(value: str | None, max_length: int = 1000) -> str:
    """
    Trim, drop control characters and bound the length of untrusted text.

    Args:
        value: Raw text from the API (``None`` is treated as empty)
        max_length: Maximum number of characters kept

    Returns:
        Sanitised text
    """
    if not value:
        return ""
    cleaned = _CONTROL_CHARS.sub("", value.replace("\r\n", "\n")).strip()
    return cleaned[:max_length]
