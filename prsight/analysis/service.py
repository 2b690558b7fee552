"""Pull request analysis service: fetch from GitHub, then normalize."""

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from prsight.analysis.normalizer import flag_security_sensitive, normalize, normalize_file
from prsight.config import Limits
from prsight.logging import get_logger
from prsight.types.analysis import FileChange, PRAnalysis

if TYPE_CHECKING:
    from prsight.client import GitHubClient


class PRAnalysisService:
    """Builds ``PRAnalysis`` records for pull requests."""

    def __init__(
        self,
        client: "GitHubClient",
        limits: Limits | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        Initialize the analysis service.

        Args:
            client: GitHub gateway
            limits: Caps on files and commits fetched per pull request
            logger: Logger to report to (default: ``prsight.analysis``)
        """
        self.client = client
        self.limits = limits or Limits()
        self.logger = logger or get_logger("analysis")

    async def analyze(self, repo_url: str, pr_number: int) -> PRAnalysis:
        """
        Fetch and normalize a pull request.

        The pull request, its files and its commits are fetched concurrently.
        If any of the three fetches fails the error propagates unchanged, the
        fetches still in flight are cancelled and no analysis is produced.

        Args:
            repo_url: Repository URL
            pr_number: Pull request number

        Returns:
            PRAnalysis

        Raises:
            NotFoundError: If the repository or pull request does not exist
            PRSightError: On any other gateway failure
        """
        self.logger.info("Starting PR analysis for %s#%d", repo_url, pr_number)
        started = time.perf_counter()

        fetches = [
            asyncio.create_task(self.client.pulls.get(repo_url, pr_number)),
            asyncio.create_task(
                self.client.pulls.list_files(repo_url, pr_number, self.limits.max_files_per_pr)
            ),
            asyncio.create_task(
                self.client.pulls.list_commits(repo_url, pr_number, self.limits.max_commits_per_pr)
            ),
        ]
        try:
            pull_request, files, commits = await asyncio.gather(*fetches)
        except Exception as e:
            self.logger.error("PR analysis failed for %s#%d: %s", repo_url, pr_number, e)
            raise
        finally:
            # No-op for finished fetches; stops the rest once one has failed
            for fetch in fetches:
                fetch.cancel()

        analysis = normalize(pull_request, files, commits)

        self.logger.info(
            "PR analysis completed for %s#%d in %.0fms (%d files, %d commits)",
            repo_url,
            pr_number,
            (time.perf_counter() - started) * 1000,
            len(analysis.files_changed),
            len(analysis.commits),
        )
        return analysis

    async def get_detailed_file_changes(
        self,
        repo_url: str,
        pr_number: int,
        focus_areas: list[str] | None = None,
    ) -> list[FileChange]:
        """
        Fetch the normalized file changes of a pull request.

        When ``security`` is among the focus areas every file is annotated
        with ``is_security_sensitive``.

        Args:
            repo_url: Repository URL
            pr_number: Pull request number
            focus_areas: Optional focus areas requested by the caller

        Returns:
            List of FileChange (or FlaggedFileChange) records
        """
        files = await self.client.pulls.list_files(
            repo_url, pr_number, self.limits.max_files_per_pr
        )
        changes = [normalize_file(file) for file in files]

        if focus_areas and "security" in focus_areas:
            return flag_security_sensitive(changes)
        return changes
