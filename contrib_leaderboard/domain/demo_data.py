"""Static leaderboard shown when live data cannot be fetched."""

from typing import Tuple

from contrib_leaderboard.domain.achievements import compute_score, generate_achievements
from contrib_leaderboard.domain.contributor import LeaderboardEntry

DEMO_FALLBACK_MESSAGE = "GitHub API rate limit reached. Showing demo data."

_DEMO_ROWS = (
    {
        "login": "sanjay-kv",
        "avatar_url": "https://avatars.githubusercontent.com/u/30715153?v=4",
        "total_contributions": 250,
        "repository_count": 25,
        "weekly_contributions": 35,
        "monthly_contributions": 120,
        "streak": 15,
    },
    {
        "login": "vansh-codes",
        "avatar_url": "https://avatars.githubusercontent.com/u/114163734?v=4",
        "total_contributions": 180,
        "repository_count": 22,
        "weekly_contributions": 25,
        "monthly_contributions": 85,
        "streak": 8,
    },
    {
        "login": "Hemu21",
        "avatar_url": "https://avatars.githubusercontent.com/u/106808387?v=4",
        "total_contributions": 120,
        "repository_count": 18,
        "weekly_contributions": 18,
        "monthly_contributions": 60,
        "streak": 5,
    },
)


def _demo_entry(rank: int, row: dict) -> LeaderboardEntry:
    # Badges come from the same rules as live entries
    score = compute_score(row["total_contributions"])
    return LeaderboardEntry(
        rank=rank,
        login=row["login"],
        avatar_url=row["avatar_url"],
        profile_url=f"https://github.com/{row['login']}",
        total_contributions=row["total_contributions"],
        repository_count=row["repository_count"],
        score=score,
        achievements=tuple(generate_achievements(score, row["total_contributions"])),
        weekly_contributions=row["weekly_contributions"],
        monthly_contributions=row["monthly_contributions"],
        streak=row["streak"],
    )


def demo_leaderboard() -> Tuple[LeaderboardEntry, ...]:
    """Return the demo rows as regular leaderboard entries, ranked 1..N."""
    return tuple(_demo_entry(rank, row) for rank, row in enumerate(_DEMO_ROWS, start=1))
