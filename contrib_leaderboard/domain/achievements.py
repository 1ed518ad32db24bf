"""Score and achievement badges derived from contributor totals."""

from dataclasses import dataclass
from typing import List

SCORE_PER_CONTRIBUTION = 10
MAX_ACHIEVEMENTS = 3


@dataclass(frozen=True)
class AchievementRule:
    """A badge awarded when `field` reaches `threshold`."""

    label: str
    field: str  # "score" or "contributions"
    threshold: int

    def matches(self, score: int, contributions: int) -> bool:
        value = score if self.field == "score" else contributions
        return value >= self.threshold


# Priority order matters: only the first MAX_ACHIEVEMENTS matches are kept.
ACHIEVEMENT_RULES = (
    AchievementRule("Legend", "score", 7000),
    AchievementRule("Elite Contributor", "score", 5000),
    AchievementRule("Master Contributor", "score", 3000),
    AchievementRule("Advanced Contributor", "score", 1000),
    AchievementRule("Active Contributor", "score", 500),
    AchievementRule("Rising Star", "score", 100),
    AchievementRule("PR Master", "contributions", 150),
    AchievementRule("Century Club", "contributions", 100),
    AchievementRule("Half Century", "contributions", 50),
    AchievementRule("Quick Contributor", "contributions", 25),
    AchievementRule("Consistent", "contributions", 10),
)


def compute_score(total_contributions: int) -> int:
    return total_contributions * SCORE_PER_CONTRIBUTION


def generate_achievements(score: int, total_contributions: int) -> List[str]:
    """
    Award badges for a contributor.

    Every rule is checked independently; matches keep the rule table's order
    and the list is cut to the first three.

    Args:
        score: Contributor score (see `compute_score`)
        total_contributions: Contributions summed across repositories

    Returns:
        Up to three badge labels
    """
    matched = [
        rule.label
        for rule in ACHIEVEMENT_RULES
        if rule.matches(score, total_contributions)
    ]
    return matched[:MAX_ACHIEVEMENTS]
