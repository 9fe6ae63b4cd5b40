"""
Discussion filters.

Time-range and free-text filtering plus the sort orders offered on a
topic page.
"""

import logging
from datetime import datetime
from typing import List, Optional

from src.models.discussion import Discussion
from src.registry.taxonomy import Taxonomy
from src.stages.topics import sort_by_activity
from src.utils.dates import time_range_cutoff

logger = logging.getLogger(__name__)


def matches_query(discussion: Discussion, query: str, taxonomy: Taxonomy) -> bool:
    """Case-insensitive match against the title or any tagged topic's display name."""
    query = query.lower()
    if query in discussion.title.lower():
        return True

    for topic_id in discussion.topic_ids:
        display_name = taxonomy.display_name(topic_id)
        if display_name and query in display_name.lower():
            return True
    return False


def filter_discussions(
    discussions: List[Discussion],
    time_range: str = "all",
    query: Optional[str] = None,
    taxonomy: Optional[Taxonomy] = None,
    now: Optional[datetime] = None
) -> List[Discussion]:
    """
    Filter a topic's discussions.

    Args:
        discussions: Discussions to filter (not modified)
        time_range: "all", "6months", "1year" or "2years"
        query: Free-text query; ignored when empty after trimming
        taxonomy: Taxonomy used for display-name matching
        now: Reference time for the cutoff (defaults to current UTC time)

    Returns:
        New list with discussions passing both filters, in input order

    Raises:
        ValueError: If time_range is not a known option
    """
    filtered = list(discussions)

    cutoff = time_range_cutoff(time_range, now)
    if cutoff is not None:
        filtered = [
            d for d in filtered
            if d.activity_datetime is not None and d.activity_datetime >= cutoff
        ]

    if query and query.strip():
        taxonomy = taxonomy or Taxonomy()
        text = query.strip()
        filtered = [d for d in filtered if matches_query(d, text, taxonomy)]

    logger.debug(
        f"Filtered {len(discussions)} discussions to {len(filtered)} "
        f"(time_range={time_range}, query={query!r})"
    )
    return filtered


def sort_discussions(discussions: List[Discussion], sort_by: str = "latest") -> List[Discussion]:
    """
    Sort discussions for display.

    Args:
        discussions: Discussions to sort (not modified)
        sort_by: "latest", "oldest", "most_active" or "alphabetical"

    Raises:
        ValueError: If sort_by is not a known option
    """
    if sort_by == "latest":
        return sort_by_activity(discussions, newest_first=True)
    if sort_by == "oldest":
        return sort_by_activity(discussions, newest_first=False)
    if sort_by == "most_active":
        return sorted(
            discussions,
            key=lambda d: (d.post_count or 0, d.reply_count or 0),
            reverse=True
        )
    if sort_by == "alphabetical":
        return sorted(discussions, key=lambda d: d.title.lower())

    raise ValueError(
        f"Invalid sort option: {sort_by}. "
        f"Must be 'latest', 'oldest', 'most_active', or 'alphabetical'"
    )
