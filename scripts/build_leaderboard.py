#!/usr/bin/env python3
"""Script to build the contributor leaderboard and export it to CSV and JSON."""

import csv
import json
import logging
import os
import sys
from dataclasses import replace
from datetime import datetime

# Add repo root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from contrib_leaderboard.application.leaderboard_service import LeaderboardService
from contrib_leaderboard.config import LeaderboardConfig
from contrib_leaderboard.domain.rate_limit import format_countdown
from contrib_leaderboard.infrastructure.github_client import GitHubRestClient
from contrib_leaderboard.infrastructure.rate_limit_tracker import RateLimitTracker

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


def dump_to_csv(rows, output_file: str):
    """Write leaderboard rows to CSV."""
    if not rows:
        logger.warning("No data to dump")
        return

    with open(output_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.DictWriter(f, fieldnames=rows[0].keys())
        writer.writeheader()
        for row in rows:
            writer.writerow({**row, "achievements": "; ".join(row["achievements"])})

    logger.info(f"Dumped {len(rows)} contributors to {output_file}")


def dump_to_json(payload: dict, output_file: str):
    """Write the leaderboard payload to JSON."""
    with open(output_file, 'w', encoding='utf-8') as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    logger.info(f"Dumped leaderboard to {output_file}")


def main():
    """Build the leaderboard for GITHUB_ORG and export the selected period view."""
    try:
        config = LeaderboardConfig.from_env()
        # A one-shot run has nothing to refresh after a rate limit resets
        config = replace(config, auto_retry=False)
        period = os.getenv("LEADERBOARD_PERIOD", "monthly")

        tracker = RateLimitTracker(
            countdown_interval=config.countdown_interval_seconds,
            fallback_backoff=config.rate_limit_backoff_seconds,
        )
        github_client = GitHubRestClient(
            tracker,
            base_url=config.api_base_url,
            user_agent=config.user_agent,
            timeout=config.timeout_seconds,
        )
        service = LeaderboardService(github_client, tracker, config=config)

        result = service.build_leaderboard(config.org)
        if result.message:
            logger.warning(result.message)
        if result.rate_limit.is_limited:
            retry_in = format_countdown(tracker.seconds_until_reset())
            logger.warning(f"GitHub API rate limit reached. Retry in: {retry_in}")
        elif result.rate_limit.is_low(config.low_remaining_threshold):
            logger.warning(
                f"GitHub API requests remaining: "
                f"{result.rate_limit.remaining}/{result.rate_limit.limit}"
            )

        entries = service.view(period)
        summary = service.summary(period)
        for entry in entries:
            logger.info(
                f"#{entry.rank} {entry.login}: {entry.total_contributions} contributions, "
                f"{entry.repository_count} repositories, score {entry.score}, "
                f"{', '.join(entry.achievements) or 'no achievements'}"
            )
        logger.info(
            f"{summary.contributors} contributors, top {period}: {summary.top}, "
            f"average {period}: {summary.average}"
        )

        output_dir = os.getenv("OUTPUT_DIR", "artifacts")
        os.makedirs(output_dir, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        rows = [entry.to_dict() for entry in entries]

        dump_to_csv(rows, os.path.join(output_dir, f"leaderboard_{period}_{timestamp}.csv"))
        dump_to_json(
            {
                "org": config.org,
                "period": period,
                "is_demo": result.is_demo,
                "is_rate_limited": result.is_rate_limited,
                "message": result.message,
                "rate_limit": result.rate_limit.to_dict(),
                "entries": rows,
            },
            os.path.join(output_dir, f"leaderboard_{period}_{timestamp}.json"),
        )

        return 1 if result.is_demo else 0

    except Exception as e:
        logger.error(f"Leaderboard build failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
