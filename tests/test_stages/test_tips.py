"""
Unit tests for topic tips loading and filtering.
"""

import json

import pytest

from src.models.tips import Tip, TopicTips
from src.stages.tips import count_by_priority, discussion_url, filter_tips, load_topic_tips


@pytest.fixture
def tips_document():
    return {
        "topic_name": "water_safety",
        "tips": [
            {
                "tip": "Set the water heater to at least 130F.",
                "priority": "critical",
                "source_type": "expert",
                "cited_threads": ["water-heater-temp"]
            },
            {
                "tip": "Remove shower heads and clean them monthly.",
                "priority": "high",
                "source_type": "patient_experience",
                "cited_threads": ["shower-filters", "shower-safety"],
                "notes": "Several members soak them in vinegar."
            },
            {
                "tip": "Studies found NTM in household plumbing biofilm.",
                "priority": "medium",
                "source_type": "research_evidence"
            },
            {
                "tip": "Filters are debated; some prefer boiling water.",
                "priority": "low",
                "source_type": "community_debate"
            }
        ],
        "key_insights": ["Hot water is the biggest lever."],
        "common_questions": [
            {"question": "Do shower filters work?", "answer": "Point-of-use filters help if changed often."}
        ]
    }


def test_tip_validation():
    """Test Tip priority and source validation."""
    tip = Tip(tip="Wash hands", priority="high", source_type="expert")
    assert tip.cited_threads == []

    with pytest.raises(ValueError, match="priority"):
        Tip(tip="Wash hands", priority="urgent", source_type="expert")

    with pytest.raises(ValueError, match="source_type"):
        Tip(tip="Wash hands", priority="high", source_type="rumour")


def test_topic_tips_serialization(tips_document):
    tips = TopicTips.from_dict(tips_document)

    assert len(tips.tips) == 4
    assert tips.common_questions[0].question == "Do shower filters work?"
    assert TopicTips.from_dict(tips.to_dict()) == tips


def test_load_topic_tips(tmp_path, tips_document):
    (tmp_path / "water_safety.json").write_text(json.dumps(tips_document), encoding="utf-8")

    tips = load_topic_tips("water_safety", str(tmp_path))

    assert tips.topic_name == "water_safety"
    assert tips.tips[1].notes == "Several members soak them in vinegar."


def test_missing_tips_is_not_an_error(tmp_path):
    assert load_topic_tips("nebulizers", str(tmp_path)) is None


def test_malformed_tips_returns_none(tmp_path, tips_document):
    tips_document["tips"][0]["priority"] = "urgent"
    (tmp_path / "water_safety.json").write_text(json.dumps(tips_document), encoding="utf-8")
    (tmp_path / "nebulizers.json").write_text("{broken", encoding="utf-8")

    assert load_topic_tips("water_safety", str(tmp_path)) is None
    assert load_topic_tips("nebulizers", str(tmp_path)) is None


def test_filter_tips(tips_document):
    tips = TopicTips.from_dict(tips_document).tips

    assert len(filter_tips(tips)) == 4
    assert [t.priority for t in filter_tips(tips, priority="critical")] == ["critical"]
    assert [t.source_type for t in filter_tips(tips, source="patient")] == ["patient_experience"]
    assert [t.source_type for t in filter_tips(tips, source="research")] == ["research_evidence"]
    assert filter_tips(tips, priority="critical", source="patient") == []


def test_filter_tips_invalid(tips_document):
    tips = TopicTips.from_dict(tips_document).tips

    with pytest.raises(ValueError):
        filter_tips(tips, priority="urgent")
    with pytest.raises(ValueError):
        filter_tips(tips, source="doctors")


def test_count_by_priority(tips_document):
    tips = TopicTips.from_dict(tips_document).tips

    assert count_by_priority(tips) == {"critical": 1, "high": 1, "medium": 1, "low": 1}
    assert count_by_priority([]) == {"critical": 0, "high": 0, "medium": 0, "low": 0}


def test_discussion_url():
    assert discussion_url("shower-filters", "https://forum.example.org/discussion/") == \
        "https://forum.example.org/discussion/shower-filters"
