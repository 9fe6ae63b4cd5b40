"""
Topic tips.

Loads the optional per-topic advisory documents and filters their tips
by priority and source.
"""

import json
import logging
import os
from typing import Dict, List, Optional

from src.models.tips import PRIORITIES, Tip, TopicTips
import config.settings as settings

logger = logging.getLogger(__name__)

# Source filter -> source types it covers
SOURCE_GROUPS = {
    "expert": ("expert", "expert_validated"),
    "patient": ("patient_experience", "patient_validated", "patient_wisdom"),
    "research": ("research_evidence",),
}


def load_topic_tips(topic_id: str, tips_dir: str) -> Optional[TopicTips]:
    """
    Load the advisory document for a topic.

    Args:
        topic_id: Topic identifier (file name without .json)
        tips_dir: Directory holding <topic_id>.json documents

    Returns:
        TopicTips, or None if the topic has no document or it is malformed
    """
    path = os.path.join(str(tips_dir), f"{topic_id}.json")

    if not os.path.exists(path):
        logger.info(f"No topic tips found for {topic_id}")
        return None

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        tips = TopicTips.from_dict(data)
    except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        logger.error(f"Error loading topic tips for {topic_id}: {e}")
        return None

    logger.info(
        f"Topic tips loaded for {tips.topic_name}: {len(tips.tips)} tips, "
        f"{len(tips.key_insights)} insights, {len(tips.common_questions)} questions"
    )
    return tips


def filter_tips(tips: List[Tip], priority: str = "all", source: str = "all") -> List[Tip]:
    """
    Filter tips by priority and source group.

    Args:
        tips: Tips to filter
        priority: "all" or one of the tip priorities
        source: "all", "expert", "patient" or "research"

    Raises:
        ValueError: If priority or source is not a known option
    """
    if priority != "all" and priority not in PRIORITIES:
        raise ValueError(f"Invalid priority filter: {priority}")
    if source != "all" and source not in SOURCE_GROUPS:
        raise ValueError(f"Invalid source filter: {source}")

    filtered = []
    for tip in tips:
        if priority != "all" and tip.priority != priority:
            continue
        if source != "all" and tip.source_type not in SOURCE_GROUPS[source]:
            continue
        filtered.append(tip)
    return filtered


def count_by_priority(tips: List[Tip]) -> Dict[str, int]:
    """Count tips per priority, every priority present."""
    counts = {priority: 0 for priority in PRIORITIES}
    for tip in tips:
        counts[tip.priority] += 1
    return counts


def discussion_url(slug: str, base_url: str = settings.DISCUSSION_BASE_URL) -> str:
    """Convert a discussion slug to its full forum URL."""
    return f"{base_url.rstrip('/')}/{slug}"
