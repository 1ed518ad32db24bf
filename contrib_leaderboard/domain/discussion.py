"""Domain entities for community discussions and the filters applied to them."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional


class DiscussionTab(str, Enum):
    DISCUSSIONS = "discussions"
    TRENDING = "trending"
    UNANSWERED = "unanswered"


class SortOption(str, Enum):
    MOST_POPULAR = "most_popular"
    LATEST = "latest"
    OLDEST = "oldest"


class Category(str, Enum):
    ALL = "all"
    ANNOUNCEMENTS = "announcements"
    IDEAS = "ideas"
    Q_A = "q-a"
    SHOW_AND_TELL = "show-and-tell"
    GENERAL = "general"


CATEGORY_DISPLAY_NAMES = {
    Category.ALL: "All",
    Category.ANNOUNCEMENTS: "Announcements",
    Category.IDEAS: "Ideas",
    Category.Q_A: "Q&A",
    Category.SHOW_AND_TELL: "Show & Tell",
    Category.GENERAL: "General",
}


def category_display_name(category: str) -> str:
    try:
        return CATEGORY_DISPLAY_NAMES[Category(category)]
    except ValueError:
        return category


def _parse_timestamp(value: Optional[str]) -> datetime:
    if not value:
        return datetime.fromtimestamp(0, tz=timezone.utc)
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        # Offset-less timestamps are taken as UTC
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class DiscussionRecord:
    """Immutable discussion as handed over by the discussion source."""

    title: str
    body: str
    category_name: str
    reaction_count: int
    comment_count: int
    created_at: datetime

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "DiscussionRecord":
        """
        Build a record from a GitHub discussion JSON object.

        Args:
            payload: Object with `title`, `body`, `category.name`,
                `reactions.total_count`, `comments` and `created_at`

        Returns:
            DiscussionRecord with missing numbers defaulted to 0
        """
        category = payload.get("category") or {}
        reactions = payload.get("reactions") or {}
        return cls(
            title=payload.get("title") or "",
            body=payload.get("body") or "",
            category_name=category.get("name") or "",
            reaction_count=reactions.get("total_count", 0) or 0,
            comment_count=payload.get("comments", 0) or 0,
            created_at=_parse_timestamp(payload.get("created_at")),
        )
