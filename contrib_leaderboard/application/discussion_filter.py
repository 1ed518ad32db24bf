"""Filter and sort pipeline for community discussions."""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Sequence, Tuple, Union

from contrib_leaderboard.domain.discussion import (
    Category,
    DiscussionRecord,
    DiscussionTab,
    SortOption,
)

logger = logging.getLogger(__name__)

TRENDING_MIN_REACTIONS = 5


@dataclass(frozen=True)
class CategoryRule:
    """Matches discussions whose category name contains one of `keywords`."""

    category: str
    keywords: Tuple[str, ...]

    def matches(self, category_name: str) -> bool:
        return any(keyword in category_name for keyword in self.keywords)


# Checked top to bottom; a category without a matching rule falls back to a
# plain substring match on its own name.
CATEGORY_RULES: Tuple[CategoryRule, ...] = (
    CategoryRule(Category.Q_A.value, ("q&a", "question")),
    CategoryRule(Category.SHOW_AND_TELL.value, ("show",)),
    CategoryRule(Category.ANNOUNCEMENTS.value, ("announcement",)),
    CategoryRule(Category.IDEAS.value, ("idea",)),
    CategoryRule(Category.GENERAL.value, ("general", "discussion")),
)


def _enum_value(value: Union[str, None], default: str) -> str:
    if value is None:
        return default
    return str(getattr(value, "value", value)).lower()


def filter_by_tab(discussions: Iterable[DiscussionRecord], tab: Union[DiscussionTab, str, None]) -> List[DiscussionRecord]:
    tab = _enum_value(tab, DiscussionTab.DISCUSSIONS.value)
    if tab == DiscussionTab.TRENDING.value:
        return [d for d in discussions if d.reaction_count > TRENDING_MIN_REACTIONS]
    if tab == DiscussionTab.UNANSWERED.value:
        return [d for d in discussions if d.comment_count == 0]
    return list(discussions)


def matches_category(
    category_name: str,
    category: Union[Category, str, None],
    rules: Sequence[CategoryRule] = CATEGORY_RULES,
) -> bool:
    """True if a discussion's category name belongs to the selected category."""
    selected = _enum_value(category, Category.ALL.value)
    if selected == Category.ALL.value:
        return True

    name = category_name.lower()
    for rule in rules:
        if rule.category == selected and rule.matches(name):
            return True
    return selected in name


def filter_by_category(
    discussions: Iterable[DiscussionRecord],
    category: Union[Category, str, None],
) -> List[DiscussionRecord]:
    return [d for d in discussions if matches_category(d.category_name, category)]


def filter_by_query(discussions: Iterable[DiscussionRecord], query: str) -> List[DiscussionRecord]:
    if not query:
        return list(discussions)
    needle = query.lower()
    return [d for d in discussions if needle in d.title.lower() or needle in d.body.lower()]


_SORT_KEYS: dict = {
    SortOption.LATEST.value: (lambda d: d.created_at, True),
    SortOption.OLDEST.value: (lambda d: d.created_at, False),
    SortOption.MOST_POPULAR.value: (lambda d: d.reaction_count, True),
}


def sort_discussions(discussions: Iterable[DiscussionRecord], sort: Union[SortOption, str, None]) -> List[DiscussionRecord]:
    """Stable sort; unknown options sort by popularity."""
    key, reverse = _SORT_KEYS.get(
        _enum_value(sort, SortOption.MOST_POPULAR.value),
        _SORT_KEYS[SortOption.MOST_POPULAR.value],
    )
    return sorted(discussions, key=key, reverse=reverse)


def filter_discussions(
    discussions: Iterable[DiscussionRecord],
    tab: Union[DiscussionTab, str, None] = DiscussionTab.DISCUSSIONS,
    category: Union[Category, str, None] = Category.ALL,
    query: str = "",
    sort: Union[SortOption, str, None] = SortOption.MOST_POPULAR,
) -> List[DiscussionRecord]:
    """
    Apply tab, category, search and sort stages in that order.

    Depends only on its arguments, so the same inputs always give the same
    list in the same order.

    Args:
        discussions: Raw discussions from the discussion source
        tab: discussions (everything), trending or unanswered
        category: Category slug, "all" keeps everything
        query: Case-insensitive text looked up in title and body
        sort: most_popular, latest or oldest

    Returns:
        New list of matching discussions
    """
    stages: Tuple[Callable[[List[DiscussionRecord]], List[DiscussionRecord]], ...] = (
        lambda items: filter_by_tab(items, tab),
        lambda items: filter_by_category(items, category),
        lambda items: filter_by_query(items, query),
        lambda items: sort_discussions(items, sort),
    )
    result = list(discussions)
    for stage in stages:
        result = stage(result)
    return result


@dataclass(frozen=True)
class DiscussionView:
    discussions: Tuple[DiscussionRecord, ...]

    @property
    def count(self) -> int:
        return len(self.discussions)

    @property
    def summary(self) -> str:
        noun = "discussion" if self.count == 1 else "discussions"
        return f"{self.count} {noun} found"


@dataclass(frozen=True)
class DiscussionQuery:
    """The current filter selection."""

    tab: Union[DiscussionTab, str] = DiscussionTab.DISCUSSIONS
    category: Union[Category, str] = Category.ALL
    query: str = ""
    sort: Union[SortOption, str] = SortOption.MOST_POPULAR

    def apply(self, discussions: Iterable[DiscussionRecord]) -> DiscussionView:
        filtered = filter_discussions(discussions, self.tab, self.category, self.query, self.sort)
        logger.debug(
            f"Filtered discussions (tab={_enum_value(self.tab, '')}, "
            f"category={_enum_value(self.category, '')}): {len(filtered)} left"
        )
        return DiscussionView(discussions=tuple(filtered))
