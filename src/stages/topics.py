"""
Topic Synthesizer.

Builds a complete TopicRecord for every taxonomy topic: sorted discussions
and per-month activity counts.
"""

import logging
from collections import Counter
from typing import Dict, List

from src.exceptions import UnknownTopicError
from src.models.discussion import Discussion
from src.models.topic import MonthlyCount, TopicRecord
from src.registry.taxonomy import Taxonomy
from src.utils.dates import EPOCH_MIN, month_key

logger = logging.getLogger(__name__)


def sort_by_activity(discussions: List[Discussion], newest_first: bool = True) -> List[Discussion]:
    """
    Sort discussions by activity timestamp.

    Stable: equal timestamps keep their input order in both directions.
    Unparseable timestamps go last.
    """
    def key(discussion: Discussion):
        moment = discussion.activity_datetime
        if moment is None:
            return (not newest_first, EPOCH_MIN)
        return (newest_first, moment)

    return sorted(discussions, key=key, reverse=newest_first)


def calculate_monthly_counts(discussions: List[Discussion]) -> List[MonthlyCount]:
    """
    Count discussions per calendar month of their activity timestamp.

    Returns one entry per month with activity, oldest month first.
    """
    if not discussions:
        return []

    month_counts: Counter = Counter()
    for discussion in discussions:
        moment = discussion.activity_datetime
        if moment is None:
            logger.warning(
                f"Discussion {discussion.id} has no parseable activity date "
                f"({discussion.activity_at!r}), left out of monthly counts"
            )
            continue
        month_counts[month_key(moment)] += 1

    return [MonthlyCount(month=month, count=month_counts[month]) for month in sorted(month_counts)]


class TopicSynthesizer:
    """
    Turns topic groups into TopicRecords.

    Walks the taxonomy rather than the groups, so every topic gets a record
    even when no discussion is tagged with it.
    """

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy

    def synthesize(self, groups: Dict[str, List[Discussion]]) -> Dict[str, TopicRecord]:
        """
        Build topic records.

        Args:
            groups: topic_id -> discussions (from group_by_topic)

        Returns:
            topic_id -> TopicRecord in taxonomy order
        """
        for topic_id, discussions in groups.items():
            if topic_id not in self.taxonomy.topics:
                logger.warning(str(UnknownTopicError(topic_id, len(discussions))))

        topics: Dict[str, TopicRecord] = {}
        empty = 0

        for topic_id, definition in self.taxonomy.topics.items():
            discussions = sort_by_activity(groups.get(topic_id, []))
            if not discussions:
                empty += 1

            topics[topic_id] = TopicRecord(
                id=topic_id,
                display_name=definition.display_name,
                description=definition.description,
                category_id=definition.category_id,
                discussions=discussions,
                monthly_counts=calculate_monthly_counts(discussions)
            )

        logger.info(
            f"Synthesized {len(topics)} topics "
            f"({len(topics) - empty} with discussions, {empty} empty)"
        )
        return topics
