"""Domain entities for GitHub repositories."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class RepositorySummary:
    """Immutable repository entity, only used to pick the contributor fetch set."""

    id: Optional[int]
    full_name: str
    stars: int

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "RepositorySummary":
        """Build a summary from an item of the `/orgs/{org}/repos` listing."""
        return cls(
            id=payload.get("id"),
            full_name=payload.get("full_name") or "",
            stars=payload.get("stargazers_count") or 0,
        )
