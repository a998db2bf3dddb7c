"""GitHub API client for fetching contribution statistics."""

import logging
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any

import requests

from emblembadge.stats import StatRecord

logger = logging.getLogger(__name__)

STATS_QUERY = """
query($username: String!, $from: DateTime!, $to: DateTime!) {
    user(login: $username) {
        contributionsCollection(from: $from, to: $to) {
            totalCommitContributions
            totalPullRequestContributions
            totalIssueContributions
            totalPullRequestReviewContributions
        }
        repositories(ownerAffiliations: OWNER, first: 100) {
            nodes {
                stargazerCount
            }
        }
    }
}
"""


@dataclass(frozen=True)
class StatsSnapshot:
    """Contribution counts for one calendar year, as stored in stats.json."""

    year: int
    updated_at: str
    commits: int = 0
    pull_requests: int = 0
    issues: int = 0
    reviews: int = 0
    stars_received: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "StatsSnapshot":
        return cls(
            year=int(data.get("year", 0)),
            updated_at=str(data.get("updated_at", "")),
            commits=int(data.get("commits", 0)),
            pull_requests=int(data.get("pull_requests", 0)),
            issues=int(data.get("issues", 0)),
            reviews=int(data.get("reviews", 0)),
            stars_received=int(data.get("stars_received", 0)),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def to_record(self, display_name: str = "") -> StatRecord:
        return StatRecord(
            display_name=display_name,
            commits=self.commits,
            pull_requests=self.pull_requests,
            issues=self.issues,
            reviews=self.reviews,
            stars=self.stars_received,
        )


class GitHubStats:
    """Fetches GitHub statistics for a user."""

    GRAPHQL_URL = "https://api.github.com/graphql"

    def __init__(
        self,
        username: str | None = None,
        token: str | None = None,
        session: requests.Session | None = None,
    ):
        self.username = username or os.environ.get("GITHUB_ACTOR")
        if not self.username:
            raise ValueError(
                "GitHub username required. Set it in config.yaml or the GITHUB_ACTOR environment variable."
            )
        self.token = token or os.environ.get("GITHUB_TOKEN")
        if not self.token:
            raise ValueError("GitHub access token required. Set GITHUB_TOKEN environment variable.")
        self.session = session or requests.Session()
        self.headers = {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }

    def get_year_stats(self, now: datetime | None = None) -> StatsSnapshot:
        """Get this year's contribution counts and total stars using GraphQL.

        Year boundaries are in UTC, matching GitHub's contribution calendar.
        """
        now = now or datetime.now(timezone.utc)
        current_year = now.year

        variables = {
            "username": self.username,
            "from": f"{current_year}-01-01T00:00:00Z",
            "to": f"{current_year}-12-31T23:59:59Z",
        }

        response = self.session.post(
            self.GRAPHQL_URL,
            json={"query": STATS_QUERY, "variables": variables},
            headers=self.headers,
            timeout=30,
        )

        remaining = response.headers.get("X-RateLimit-Remaining")
        if remaining:
            logger.info("GitHub rate limit remaining: %s", remaining)

        response.raise_for_status()
        data = response.json()

        if "errors" in data:
            raise RuntimeError(f"GraphQL error: {data['errors']}")

        user = data["data"]["user"]
        contributions = user["contributionsCollection"]
        repos = user.get("repositories", {}).get("nodes", [])

        return StatsSnapshot(
            year=current_year,
            updated_at=now.strftime("%Y-%m-%dT%H:%M:%SZ"),
            commits=contributions.get("totalCommitContributions", 0),
            pull_requests=contributions.get("totalPullRequestContributions", 0),
            issues=contributions.get("totalIssueContributions", 0),
            reviews=contributions.get("totalPullRequestReviewContributions", 0),
            stars_received=sum(repo.get("stargazerCount", 0) for repo in repos),
        )
