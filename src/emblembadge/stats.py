"""Statistics shown on a badge."""

from dataclasses import dataclass

STAT_LABELS = ("COMMITS", "PRS", "ISSUES", "REVIEWS", "STARS")


@dataclass(frozen=True)
class StatRecord:
    """A display name and the five counters rendered on the stat bar."""

    display_name: str = ""
    commits: int = 0
    pull_requests: int = 0
    issues: int = 0
    reviews: int = 0
    stars: int = 0

    def __post_init__(self):
        for label, value in zip(STAT_LABELS, self.values()):
            if value < 0:
                raise ValueError(f"{label.lower()} must be non-negative, got {value}")

    def values(self) -> tuple[int, int, int, int, int]:
        """Counters in stat bar order."""
        return (self.commits, self.pull_requests, self.issues, self.reviews, self.stars)

    @property
    def aggregate_score(self) -> int:
        """The "power level": sum of all five counters."""
        return sum(self.values())
