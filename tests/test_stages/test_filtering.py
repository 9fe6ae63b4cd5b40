"""
Unit tests for discussion filtering, sorting and date helpers.
"""

from datetime import datetime, timezone

import pytest

from src.stages.filtering import filter_discussions, sort_discussions
from src.utils.dates import month_key, parse_timestamp, time_range_cutoff

NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def discussions(make_discussion):
    return [
        make_discussion("filters", ["water_safety"], tagged_at="2025-05-01T00:00:00Z",
                        title="Best shower filter?", post_count=4),
        make_discussion("vest", ["vest_therapy"], tagged_at="2024-09-01T00:00:00Z",
                        title="Vest settings", post_count=20, reply_count=3),
        make_discussion("old-news", ["nebulizers"], tagged_at="2022-01-01T00:00:00Z",
                        title="Nebulizer brands", post_count=20, reply_count=9),
        make_discussion("revived", ["big3_antibiotics"], tagged_at="2021-03-01T00:00:00Z",
                        latest_activity_at="2025-06-01T00:00:00Z", title="azithromycin timing"),
    ]


@pytest.mark.parametrize("time_range, expected", [
    ("6months", datetime(2024, 12, 1, tzinfo=timezone.utc)),
    ("1year", datetime(2024, 6, 1, tzinfo=timezone.utc)),
    ("2years", datetime(2023, 6, 1, tzinfo=timezone.utc)),
])
def test_time_range_cutoff(time_range, expected):
    assert time_range_cutoff(time_range, NOW) == expected


def test_cutoff_crosses_year_boundary():
    now = datetime(2025, 3, 10, tzinfo=timezone.utc)
    assert time_range_cutoff("6months", now) == datetime(2024, 9, 1, tzinfo=timezone.utc)


def test_cutoff_all_is_none():
    assert time_range_cutoff("all", NOW) is None


def test_cutoff_invalid():
    with pytest.raises(ValueError, match="Invalid time range"):
        time_range_cutoff("3weeks", NOW)


def test_parse_timestamp_variants():
    assert parse_timestamp("2025-01-02T03:04:05.000Z") == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert parse_timestamp("2025-01-02T03:04:05") == datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert parse_timestamp("") is None
    assert parse_timestamp(None) is None
    assert parse_timestamp("yesterday") is None
    assert parse_timestamp(1736000000000) is None


def test_month_key():
    assert month_key(datetime(2025, 2, 28)) == "2025-02"


def test_filter_all_returns_copy(discussions):
    result = filter_discussions(discussions, "all", now=NOW)

    assert result == discussions
    assert result is not discussions


def test_filter_six_months(discussions):
    """Cutoff is compared against the activity timestamp."""
    result = filter_discussions(discussions, "6months", now=NOW)

    assert [d.id for d in result] == ["filters", "revived"]


def test_filter_two_years(discussions):
    result = filter_discussions(discussions, "2years", now=NOW)

    assert [d.id for d in result] == ["filters", "vest", "revived"]


def test_filter_query_matches_title(discussions, taxonomy):
    result = filter_discussions(discussions, query="  SHOWER ", taxonomy=taxonomy, now=NOW)

    assert [d.id for d in result] == ["filters"]


def test_filter_query_matches_topic_display_name(discussions, taxonomy):
    """'clearance' only appears in the display name of vest_therapy."""
    result = filter_discussions(discussions, query="clearance", taxonomy=taxonomy, now=NOW)

    assert [d.id for d in result] == ["vest"]


def test_filter_blank_query_ignored(discussions, taxonomy):
    assert len(filter_discussions(discussions, query="   ", taxonomy=taxonomy)) == 4


def test_filters_combine(discussions, taxonomy):
    result = filter_discussions(discussions, "6months", query="nebulizer", taxonomy=taxonomy, now=NOW)
    assert result == []

    result = filter_discussions(discussions, "6months", query="antibiotics", taxonomy=taxonomy, now=NOW)
    assert [d.id for d in result] == ["revived"]


def test_filter_does_not_mutate(discussions):
    before = list(discussions)
    filter_discussions(discussions, "6months", query="vest", now=NOW)
    assert discussions == before


def test_sort_latest_and_oldest(discussions):
    assert [d.id for d in sort_discussions(discussions, "latest")] == ["revived", "filters", "vest", "old-news"]
    assert [d.id for d in sort_discussions(discussions, "oldest")] == ["old-news", "vest", "filters", "revived"]


def test_sort_most_active(discussions):
    """Post count first, reply count breaks ties."""
    assert [d.id for d in sort_discussions(discussions, "most_active")] == ["old-news", "vest", "filters", "revived"]


def test_sort_alphabetical(discussions):
    assert [d.id for d in sort_discussions(discussions, "alphabetical")] == ["revived", "filters", "old-news", "vest"]


def test_sort_invalid(discussions):
    with pytest.raises(ValueError, match="Invalid sort option"):
        sort_discussions(discussions, "random")
