"""
Shared fixtures for the insights tests.
"""

import pytest

from src.models.discussion import Discussion
from src.registry.taxonomy import Taxonomy


@pytest.fixture
def taxonomy():
    """Embedded taxonomy."""
    return Taxonomy()


@pytest.fixture
def small_taxonomy():
    """Three topics in two categories, plus a topic pointing at a missing category."""
    return Taxonomy(
        topic_mappings={
            "water_safety": {"displayName": "Water Safety", "description": "", "category": "safety"},
            "nebulizers": {"displayName": "Nebulizers", "description": "", "category": "airway"},
            "vest_therapy": {"displayName": "Airway Clearance Vests", "description": "", "category": "airway"},
        },
        categories={
            "safety": {"displayName": "Safety", "description": "Safety topics", "emoji": "🛡️"},
            "airway": {"displayName": "Airway", "description": "Airway topics", "emoji": "🫁"},
        }
    )


@pytest.fixture
def make_discussion():
    """Factory for discussions with sensible defaults."""
    def _make(discussion_id, topic_ids, tagged_at="2025-01-15T10:00:00.000Z", **kwargs):
        return Discussion(
            id=discussion_id,
            title=kwargs.pop("title", f"Thread {discussion_id}"),
            url=f"https://connect.ntminfo.org/discussion/{discussion_id}",
            topic_ids=list(topic_ids),
            tagged_at=tagged_at,
            **kwargs
        )
    return _make


@pytest.fixture
def raw_dataset():
    """Raw payload in the enhanced_tags format."""
    return {
        "metadata": {
            "total_threads": 3,
            "tagged_count": 3,
            "last_updated": "2025-03-01T12:00:00"
        },
        "enhanced_tags": {
            "shower-filters": {
                "thread_file": "shower-filters.md",
                "thread_title": "Which shower filter do you use?",
                "thread_url": "https://connect.ntminfo.org/discussion/shower-filters",
                "relevant_topics": ["water_safety"],
                "topic_count": 1,
                "tagged_date": "2025-01-10T10:00:00.000Z"
            },
            "nebulizer-in-the-shower": {
                "thread_file": "nebulizer-in-the-shower.md",
                "thread_title": "Cleaning the nebulizer with tap water?",
                "thread_url": "https://connect.ntminfo.org/discussion/nebulizer-in-the-shower",
                "relevant_topics": ["water_safety", "nebulizers"],
                "topic_count": 2,
                "tagged_date": "2025-02-03T09:00:00.000Z",
                "latest_post_date_iso": "2025-02-20T18:30:00.000Z",
                "post_count": 12
            },
            "introductions": {
                "thread_file": "introductions.md",
                "thread_title": "Hello from a new member",
                "thread_url": "https://connect.ntminfo.org/discussion/introductions",
                "relevant_topics": [],
                "topic_count": 0,
                "tagged_date": "2025-02-05T09:00:00.000Z"
            }
        }
    }
