"""
Topic tips data model.

Represents the optional per-topic advisory document: prioritized tips,
key insights and common questions.
"""

from dataclasses import dataclass, field
from typing import List, Optional

PRIORITIES = ("critical", "high", "medium", "low")

SOURCE_TYPES = (
    "expert",
    "expert_validated",
    "patient_experience",
    "patient_validated",
    "patient_wisdom",
    "research_evidence",
    "practical_guidance",
    "community_debate",
)


@dataclass
class Tip:
    """A single piece of advice, cited from one or more discussions."""
    tip: str
    priority: str  # "critical", "high", "medium", or "low"
    source_type: str  # One of SOURCE_TYPES
    cited_threads: List[str] = field(default_factory=list)  # Discussion slugs
    notes: Optional[str] = None

    def __post_init__(self):
        # Validate priority
        if self.priority not in PRIORITIES:
            raise ValueError(
                f"Invalid priority: {self.priority}. Must be one of: {', '.join(PRIORITIES)}"
            )

        # Validate source type
        if self.source_type not in SOURCE_TYPES:
            raise ValueError(
                f"Invalid source_type: {self.source_type}. Must be one of: {', '.join(SOURCE_TYPES)}"
            )

    @classmethod
    def from_dict(cls, data: dict) -> "Tip":
        return cls(
            tip=data["tip"],
            priority=data["priority"],
            source_type=data["source_type"],
            cited_threads=data.get("cited_threads", []),
            notes=data.get("notes")
        )

    def to_dict(self) -> dict:
        return {
            "tip": self.tip,
            "priority": self.priority,
            "source_type": self.source_type,
            "cited_threads": self.cited_threads,
            "notes": self.notes
        }


@dataclass
class QAPair:
    question: str
    answer: str


@dataclass
class TopicTips:
    """Advisory document for one topic."""
    topic_name: str
    tips: List[Tip] = field(default_factory=list)
    key_insights: List[str] = field(default_factory=list)
    common_questions: List[QAPair] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "TopicTips":
        """
        Create TopicTips from JSON dict.

        Raises:
            KeyError: If a required field is missing
            ValueError: If a tip has an invalid priority or source type
        """
        return cls(
            topic_name=data["topic_name"],
            tips=[Tip.from_dict(t) for t in data.get("tips", [])],
            key_insights=list(data.get("key_insights", [])),
            common_questions=[
                QAPair(question=q["question"], answer=q["answer"])
                for q in data.get("common_questions", [])
            ]
        )

    def to_dict(self) -> dict:
        return {
            "topic_name": self.topic_name,
            "tips": [t.to_dict() for t in self.tips],
            "key_insights": self.key_insights,
            "common_questions": [
                {"question": q.question, "answer": q.answer}
                for q in self.common_questions
            ]
        }
