#!/usr/bin/env python3
"""
Basic prsight usage example.

Scores a pull request built in memory, then (when GITHUB_TOKEN is set)
analyzes a real pull request through the GitHub gateway.
Run with: python examples/python/basic_usage.py [repo_url] [pr_number]
"""

import asyncio
import os
import sys

from prsight import Config, GitHubClient, PRAnalysisService, PRSightError, generate_feedback
from prsight.testing import make_analysis

print("=== prsight Basic Usage Example ===\n")

# 1. Offline scoring
print("1. Scoring an in-memory pull request...")
analysis = make_analysis(
    files=[("src/auth.ts", 300, 250)],
    commits=["fix: tighten session checks"],
    body="Short text",
)
feedback = generate_feedback(analysis, ["security"])

print(f"   Quality: {feedback.code_quality.score} ({feedback.code_quality.grade})")
print(f"   Summary score: {feedback.summary_score}")
print(f"   Review time: {feedback.estimated_review_time} minutes")
for comment in feedback.code_quality.comments:
    print(f"   - {comment}")
print(f"   {feedback.overall_assessment}")

print("\n   OK: Feedback engine working\n")


# 2. Live analysis
async def analyze(repo_url: str, pr_number: int) -> None:
    config = Config.from_env()
    async with GitHubClient.from_config(config) as client:
        service = PRAnalysisService(client, config.limits)
        live = await service.analyze(repo_url, pr_number)
        review = generate_feedback(live)

    print(f"   {live.title} by {live.author} ({live.state})")
    print(f"   {live.diff_summary.files_count} files, {live.diff_summary.total_changes} changes")
    print(f"   Grade {review.code_quality.grade}, summary score {review.summary_score}")


if not os.environ.get("GITHUB_TOKEN"):
    print("2. Skipping live analysis (set GITHUB_TOKEN to enable)")
    sys.exit(0)

print("2. Analyzing a pull request on GitHub...")
repo_url = sys.argv[1] if len(sys.argv) > 1 else "https://github.com/octocat/Hello-World"
pr_number = int(sys.argv[2]) if len(sys.argv) > 2 else 1
try:
    asyncio.run(analyze(repo_url, pr_number))
except PRSightError as e:
    print(f"   Failed: [{e.code}] {e.message}")
    sys.exit(1)

print("\n   OK: GitHub gateway working\n")
