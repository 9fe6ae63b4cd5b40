"""
Discussion data model.

Represents one tagged forum thread from the curated dataset, plus the
dataset envelope (metadata + record map) it arrives in.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.utils.dates import parse_timestamp

# Raw keys mapped onto named Discussion fields; everything else lands in extra
_KNOWN_KEYS = {
    "id",
    "thread_title",
    "thread_url",
    "relevant_topics",
    "manual_topics",
    "tagged_date",
    "latest_post_date_iso",
    "thread_file",
    "original_post_date_iso",
    "post_count",
    "user_count",
    "reply_count",
}


def _text(value):
    """Null text fields read as empty strings."""
    return "" if value is None else value


@dataclass(eq=False)
class Discussion:
    """
    A forum discussion tagged with one or more topics.

    Compared by identity: the same Discussion object is shared by every
    topic it is tagged with.
    """
    id: str  # Key of the record in the source mapping
    title: str
    url: str
    topic_ids: List[str] = field(default_factory=list)
    tagged_at: str = ""  # ISO timestamp the thread was tagged
    latest_activity_at: Optional[str] = None  # ISO timestamp of the latest post
    thread_file: Optional[str] = None
    original_post_at: Optional[str] = None
    post_count: Optional[int] = None
    user_count: Optional[int] = None
    reply_count: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        # Validate topic ids
        if not isinstance(self.topic_ids, list) or not all(isinstance(t, str) for t in self.topic_ids):
            raise ValueError(f"topic_ids must be a list of strings, got {self.topic_ids!r}")
        self.topic_ids = list(self.topic_ids)

        # Validate text and timestamp fields
        for name in ("title", "url", "tagged_at"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")
        for name in ("latest_activity_at", "thread_file", "original_post_at"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {type(value).__name__}")

        # Validate counts
        for name in ("post_count", "user_count", "reply_count"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise ValueError(f"{name} must be an integer, got {value!r}")

    @property
    def activity_at(self) -> str:
        """Canonical activity timestamp: latest post, falling back to tagging time."""
        return self.latest_activity_at or self.tagged_at

    @property
    def activity_datetime(self) -> Optional[datetime]:
        return parse_timestamp(self.activity_at)

    @classmethod
    def from_dict(cls, discussion_id: str, data: dict) -> "Discussion":
        """
        Create Discussion from a raw dataset record (either schema variant).

        Raises:
            ValueError: If a field has the wrong type
        """
        topic_ids = data.get("relevant_topics")
        if topic_ids is None:
            topic_ids = data.get("manual_topics")
        if topic_ids is None:
            topic_ids = []

        return cls(
            id=discussion_id,
            title=_text(data.get("thread_title")),
            url=_text(data.get("thread_url")),
            topic_ids=topic_ids,
            tagged_at=_text(data.get("tagged_date")),
            latest_activity_at=data.get("latest_post_date_iso"),
            thread_file=data.get("thread_file"),
            original_post_at=data.get("original_post_date_iso"),
            post_count=data.get("post_count"),
            user_count=data.get("user_count"),
            reply_count=data.get("reply_count"),
            extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS}
        )

    def to_dict(self) -> dict:
        """Convert back to the raw record shape."""
        data = {
            "id": self.id,
            "thread_title": self.title,
            "thread_url": self.url,
            "relevant_topics": list(self.topic_ids),
            "tagged_date": self.tagged_at,
        }
        optional = {
            "latest_post_date_iso": self.latest_activity_at,
            "thread_file": self.thread_file,
            "original_post_date_iso": self.original_post_at,
            "post_count": self.post_count,
            "user_count": self.user_count,
            "reply_count": self.reply_count,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        data.update(self.extra)
        return data


@dataclass
class DatasetMetadata:
    """Dataset-level metadata block."""
    total_threads: int = 0
    last_updated: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        if isinstance(self.total_threads, bool) or not isinstance(self.total_threads, int):
            raise ValueError(f"total_threads must be an integer, got {self.total_threads!r}")
        if not isinstance(self.last_updated, str):
            raise ValueError(f"last_updated must be a string, got {type(self.last_updated).__name__}")

    @classmethod
    def from_dict(cls, data: dict, default_total: int = 0) -> "DatasetMetadata":
        total_threads = data.get("total_threads")
        return cls(
            total_threads=default_total if total_threads is None else total_threads,
            last_updated=_text(data.get("last_updated")),
            extra={k: v for k, v in data.items() if k not in ("total_threads", "last_updated")}
        )

    def to_dict(self) -> dict:
        return {
            "total_threads": self.total_threads,
            "last_updated": self.last_updated,
            **self.extra
        }


@dataclass
class Dataset:
    """
    Normalized dataset: metadata plus discussions keyed by id.

    records preserves the insertion order of the source mapping.
    """
    metadata: DatasetMetadata
    records: Dict[str, Discussion] = field(default_factory=dict)
