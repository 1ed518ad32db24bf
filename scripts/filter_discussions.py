#!/usr/bin/env python3
"""Script to filter and sort a JSON dump of GitHub discussions."""

import argparse
import json
import logging
import os
import sys

# Add repo root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from contrib_leaderboard.application.discussion_filter import DiscussionQuery
from contrib_leaderboard.domain.discussion import (
    Category,
    DiscussionRecord,
    DiscussionTab,
    SortOption,
    category_display_name,
)

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def load_discussions(path: str):
    """Read discussion objects from a JSON file holding a list."""
    with open(path, encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of discussions")

    return [DiscussionRecord.from_api(item) for item in data if isinstance(item, dict)]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("path", help="JSON file with a list of discussions")
    parser.add_argument("--tab", default=DiscussionTab.DISCUSSIONS.value,
                        choices=[t.value for t in DiscussionTab])
    parser.add_argument("--category", default=Category.ALL.value,
                        choices=[c.value for c in Category])
    parser.add_argument("--query", default="")
    parser.add_argument("--sort", default=SortOption.MOST_POPULAR.value,
                        choices=[s.value for s in SortOption])
    return parser.parse_args(argv)


def main(argv=None):
    """Print the discussions matching the selected filters."""
    args = parse_args(argv)
    try:
        discussions = load_discussions(args.path)
        view = DiscussionQuery(
            tab=args.tab,
            category=args.category,
            query=args.query,
            sort=args.sort,
        ).apply(discussions)

        logger.info(f"{category_display_name(args.category)}: {view.summary}")
        for discussion in view.discussions:
            print(
                f"[{discussion.category_name}] {discussion.title} "
                f"({discussion.reaction_count} reactions, {discussion.comment_count} comments, "
                f"{discussion.created_at.date().isoformat()})"
            )
        return 0
    except Exception as e:
        logger.error(f"Discussion filtering failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
