"""
Category Synthesizer.

Groups topic records into categories, largest topic first.
"""

import logging
from typing import Dict, List

from src.exceptions import UnknownCategoryError
from src.models.topic import CategoryRecord, TopicRecord
from src.registry.taxonomy import Taxonomy

logger = logging.getLogger(__name__)


class CategorySynthesizer:
    """
    Builds CategoryRecords from topic records.

    Categories come out in the order their first topic is encountered.
    """

    def __init__(self, taxonomy: Taxonomy):
        self.taxonomy = taxonomy

    def synthesize(self, topics: Dict[str, TopicRecord]) -> List[CategoryRecord]:
        """
        Group topics by category.

        Args:
            topics: topic_id -> TopicRecord (from TopicSynthesizer)

        Returns:
            List of CategoryRecords, topics inside sorted by count descending
        """
        members: Dict[str, List[TopicRecord]] = {}
        for topic in topics.values():
            members.setdefault(topic.category_id, []).append(topic)

        categories = []
        for category_id, category_topics in members.items():
            definition = self.taxonomy.get_category(category_id)
            if not definition:
                for topic in category_topics:
                    logger.warning(str(UnknownCategoryError(category_id, topic.id)))
                continue

            categories.append(CategoryRecord(
                id=category_id,
                display_name=definition.display_name,
                description=definition.description,
                icon=definition.icon,
                topics=sorted(category_topics, key=lambda t: t.count, reverse=True)
            ))

        logger.info(f"Grouped {len(topics)} topics into {len(categories)} categories")
        return categories
