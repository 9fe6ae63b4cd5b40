"""
Unit tests for the Taxonomy.
"""

import json
import os
import tempfile

import pytest

from src.exceptions import LoadError
from src.models.topic import CategoryDefinition, TopicDefinition
from src.registry.taxonomy import CATEGORIES, TOPIC_MAPPINGS, Taxonomy


def test_embedded_taxonomy_is_complete(taxonomy):
    """All 40 topics and 8 categories are present."""
    assert len(taxonomy.topics) == 40
    assert len(taxonomy.categories) == 8
    assert taxonomy.validate() == []


def test_declaration_order_preserved(taxonomy):
    """Topics iterate in the order they are declared."""
    assert list(taxonomy.topics) == list(TOPIC_MAPPINGS)
    assert list(taxonomy.categories) == list(CATEGORIES)
    assert next(iter(taxonomy.topics)) == "big3_antibiotics"


def test_topic_definition_serialization():
    """Test TopicDefinition to/from dict conversion."""
    topic = TopicDefinition(
        topic_id="water_safety",
        display_name="Water Safety",
        description="Making your home water safer",
        category_id="safety_environment"
    )

    restored = TopicDefinition.from_dict("water_safety", topic.to_dict())

    assert restored == topic


def test_category_definition_reads_emoji():
    category = CategoryDefinition.from_dict(
        "daily_living",
        {"displayName": "Daily Living", "description": "Work and life", "emoji": "🏠"}
    )
    assert category.icon == "🏠"
    assert category.to_dict()["emoji"] == "🏠"


def test_lookups(taxonomy):
    """Test topic/category lookups and missing ids."""
    assert taxonomy.get_topic("nebulizers").category_id == "airway_clearance"
    assert taxonomy.get_topic("nonexistent") is None
    assert taxonomy.get_category("airway_clearance").display_name == "Airway Clearance"
    assert taxonomy.get_category("nonexistent") is None
    assert taxonomy.display_name("water_safety") == "Water Safety"
    assert taxonomy.display_name("nonexistent") is None


def test_validate_reports_orphan_topics():
    """A topic whose category is not declared is reported."""
    taxonomy = Taxonomy(
        topic_mappings={"orphan": {"displayName": "Orphan", "description": "", "category": "missing"}},
        categories={}
    )
    assert taxonomy.validate() == ["orphan"]


def test_from_file_round_trip(taxonomy):
    """Test loading a taxonomy written by to_dict."""
    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "taxonomy.json")
        with open(path, "w", encoding="utf-8") as f:
            json.dump(taxonomy.to_dict(), f)

        loaded = Taxonomy.from_file(path)

        assert list(loaded.topics) == list(taxonomy.topics)
        assert loaded.get_category("equipment_care").icon == "🔧"


def test_from_file_missing():
    with pytest.raises(LoadError, match="not found"):
        Taxonomy.from_file("/nonexistent/taxonomy.json")


def test_from_file_malformed(tmp_path):
    """Missing top-level keys raise LoadError."""
    path = tmp_path / "taxonomy.json"
    path.write_text(json.dumps({"topics": {}}), encoding="utf-8")

    with pytest.raises(LoadError, match="Malformed"):
        Taxonomy.from_file(str(path))
