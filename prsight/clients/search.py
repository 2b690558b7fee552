"""Search resource client."""

from typing import TYPE_CHECKING

from prsight.clients.parsers import (
    parse_code_search_item,
    parse_payload,
    parse_repository,
)
from prsight.types.github import CodeSearchItem, RepositorySearchResult
from prsight.utils import parse_repository_url

if TYPE_CHECKING:
    from prsight.transport import HTTPTransport


def build_code_query(
    full_name: str, query: str, file_extensions: list[str] | None = None
) -> str:
    """Compose a code-search query scoped to one repository."""
    search_query = f"{query} repo:{full_name}"
    if file_extensions:
        extension_filter = " ".join(
            f"extension:{ext.lstrip('.')}" for ext in file_extensions
        )
        search_query += f" {extension_filter}"
    return search_query


class SearchClient:
    """Client for code and repository search."""

    def __init__(self, transport: "HTTPTransport", max_results: int = 50) -> None:
        """
        Initialize the search client.

        Args:
            transport: HTTP transport for making requests
            max_results: Upper bound on results per search
        """
        self.transport = transport
        self.max_results = max_results

    async def code(
        self,
        repo_url: str,
        query: str,
        file_extensions: list[str] | None = None,
        limit: int = 30,
    ) -> list[CodeSearchItem]:
        """
        Search code within a repository.

        Args:
            repo_url: Repository URL to search within
            query: Search terms
            file_extensions: Optional extensions to restrict to (e.g., ["py", "ts"])
            limit: Maximum number of results (capped by the configured maximum)

        Returns:
            List of CodeSearchItem objects
        """
        repo = parse_repository_url(repo_url)
        per_page = min(limit, self.max_results, 100)
        data = await self.transport.get_json(
            "/search/code",
            params={
                "q": build_code_query(repo.full_name, query, file_extensions),
                "per_page": per_page,
            },
        )
        return [
            parse_payload(parse_code_search_item, item, "code search result")
            for item in data.get("items", [])
        ]

    async def repositories(
        self,
        query: str,
        sort: str | None = None,
        order: str = "desc",
        limit: int = 30,
        page: int = 1,
    ) -> RepositorySearchResult:
        """
        Search repositories across GitHub.

        Args:
            query: Search terms and qualifiers
            sort: "stars", "forks", "help-wanted-issues" or "updated" (default: best match)
            order: "asc" or "desc"
            limit: Page size (capped by the configured maximum)
            page: Page number (1-indexed)

        Returns:
            RepositorySearchResult
        """
        data = await self.transport.get_json(
            "/search/repositories",
            params={
                "q": query,
                "sort": sort,
                "order": order,
                "per_page": min(limit, self.max_results, 100),
                "page": page,
            },
        )
        return RepositorySearchResult(
            total_count=data.get("total_count", 0),
            incomplete_results=bool(data.get("incomplete_results", False)),
            items=[
                parse_payload(parse_repository, item, "repository")
                for item in data.get("items", [])
            ],
        )
