"""
Topic Grouper.

Fans each discussion out to every topic it is tagged with.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Union

from src.models.discussion import Discussion

logger = logging.getLogger(__name__)


def group_by_topic(
    records: Union[Mapping[str, Discussion], Iterable[Discussion]]
) -> Dict[str, List[Discussion]]:
    """
    Group discussions by topic id.

    A discussion tagged with N topics lands in N buckets as the same object.
    Discussions without topic ids are left out. Bucket order is insertion
    order; final ordering happens in the topic synthesizer.

    Args:
        records: Discussions keyed by id, or any iterable of discussions

    Returns:
        topic_id -> list of discussions
    """
    discussions = records.values() if isinstance(records, Mapping) else records

    grouped: Dict[str, List[Discussion]] = {}
    untagged = 0

    for discussion in discussions:
        if not discussion.topic_ids:
            untagged += 1
            continue
        for topic_id in discussion.topic_ids:
            grouped.setdefault(topic_id, []).append(discussion)

    if untagged:
        logger.debug(f"{untagged} discussions have no topics and were not grouped")

    logger.debug(f"Grouped discussions into {len(grouped)} topics")
    return grouped
