"""
Topic data models.

Represents taxonomy entries (topic and category definitions) and the
records derived from a dataset: per-topic records, category groups,
trending entries and the complete view model.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from src.models.discussion import Discussion


@dataclass
class TopicDefinition:
    """A topic entry in the taxonomy."""
    topic_id: str
    display_name: str
    description: str
    category_id: str

    @classmethod
    def from_dict(cls, topic_id: str, data: dict) -> "TopicDefinition":
        """Create TopicDefinition from JSON dict."""
        return cls(
            topic_id=topic_id,
            display_name=data["displayName"],
            description=data.get("description", ""),
            category_id=data["category"]
        )

    def to_dict(self) -> dict:
        return {
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category_id
        }


@dataclass
class CategoryDefinition:
    """A category entry in the taxonomy."""
    category_id: str
    display_name: str
    description: str
    icon: str = ""  # Emoji/icon token rendered next to the category

    @classmethod
    def from_dict(cls, category_id: str, data: dict) -> "CategoryDefinition":
        """Create CategoryDefinition from JSON dict."""
        return cls(
            category_id=category_id,
            display_name=data["displayName"],
            description=data.get("description", ""),
            icon=data.get("emoji", "")
        )

    def to_dict(self) -> dict:
        return {
            "displayName": self.display_name,
            "description": self.description,
            "emoji": self.icon
        }


@dataclass(frozen=True)
class MonthlyCount:
    """Number of discussions active in one calendar month."""
    month: str  # YYYY-MM format
    count: int

    def to_dict(self) -> dict:
        return {"month": self.month, "count": self.count}


@dataclass
class TopicRecord:
    """
    A topic with all discussions tagged with it.

    Identity fields come from the taxonomy, never from the data.
    """
    id: str
    display_name: str
    description: str
    category_id: str
    discussions: List[Discussion] = field(default_factory=list)  # Most recent first
    monthly_counts: List[MonthlyCount] = field(default_factory=list)  # Oldest month first

    @property
    def count(self) -> int:
        return len(self.discussions)

    def to_dict(self, include_discussions: bool = True) -> dict:
        """Convert to JSON-serializable dict."""
        data = {
            "name": self.id,
            "displayName": self.display_name,
            "description": self.description,
            "category": self.category_id,
            "threadCount": self.count,
            "monthlyTrend": [m.to_dict() for m in self.monthly_counts]
        }
        if include_discussions:
            data["threads"] = [d.to_dict() for d in self.discussions]
        return data


@dataclass
class CategoryRecord:
    """A category with its member topics, largest topic first."""
    id: str
    display_name: str
    description: str
    icon: str = ""
    topics: List[TopicRecord] = field(default_factory=list)

    @property
    def total_discussions(self) -> int:
        return sum(topic.count for topic in self.topics)

    def to_dict(self) -> dict:
        return {
            "name": self.id,
            "displayName": self.display_name,
            "description": self.description,
            "emoji": self.icon,
            "topics": [t.id for t in self.topics],
            "totalThreads": self.total_discussions
        }


@dataclass
class TrendingEntry:
    """A topic compared across the recent and the preceding activity window."""
    topic: TopicRecord
    recent_activity: int
    previous_activity: int
    percentage_change: int

    @property
    def is_growing(self) -> bool:
        return self.percentage_change > 0

    def to_dict(self) -> dict:
        data = self.topic.to_dict(include_discussions=False)
        data.update({
            "recentActivity": self.recent_activity,
            "previousActivity": self.previous_activity,
            "percentageChange": self.percentage_change,
            "isGrowing": self.is_growing
        })
        return data


@dataclass
class ProcessedData:
    """
    The view model handed to the presentation layer.

    total_threads is reported from the dataset metadata; summing topic counts
    would count multi-topic discussions more than once.
    """
    topics: Dict[str, TopicRecord]
    categories: List[CategoryRecord]
    trending: List[TrendingEntry]
    total_threads: int
    last_updated: str

    def to_dict(self) -> dict:
        return {
            "topics": {topic_id: t.to_dict() for topic_id, t in self.topics.items()},
            "categories": [c.to_dict() for c in self.categories],
            "trending": [t.to_dict() for t in self.trending],
            "totalThreads": self.total_threads,
            "lastUpdated": self.last_updated
        }
