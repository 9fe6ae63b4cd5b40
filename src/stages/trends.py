"""
Trend Calculator and Trend Table.

Compares each topic's most recent months of activity with the months
before them, and exports the topic x month activity matrix for charting.
"""

import logging
import math
import os
from typing import Dict, List

import pandas as pd

from src.models.topic import TopicRecord, TrendingEntry

logger = logging.getLogger(__name__)


def calculate_percentage_change(recent: int, previous: int) -> int:
    """
    Percentage change from previous to recent, rounded half up.

    With no previous activity the change is 100 when there is recent
    activity and 0 otherwise.
    """
    if previous == 0:
        return 100 if recent > 0 else 0
    return math.floor((recent - previous) / previous * 100 + 0.5)


class TrendCalculator:
    """
    Ranks topics by how much their recent activity diverges from before.
    """

    def __init__(self, window_months: int = 3, limit: int = 10):
        """
        Initialize trend calculator.

        Args:
            window_months: Number of monthly entries in each window
            limit: Number of trending entries to keep
        """
        if window_months < 1:
            raise ValueError(f"window_months must be positive, got {window_months}")
        self.window_months = window_months
        self.limit = limit

    def entry_for(self, topic: TopicRecord) -> TrendingEntry:
        """Compare the last window of monthly entries with the window before it."""
        window = self.window_months
        counts = [m.count for m in topic.monthly_counts]

        recent = counts[-window:]
        previous = counts[-2 * window:-window] if len(counts) > window else []

        recent_activity = sum(recent)
        previous_activity = sum(previous)

        return TrendingEntry(
            topic=topic,
            recent_activity=recent_activity,
            previous_activity=previous_activity,
            percentage_change=calculate_percentage_change(recent_activity, previous_activity)
        )

    def calculate(self, topics: Dict[str, TopicRecord]) -> List[TrendingEntry]:
        """
        Build the trending list.

        Args:
            topics: topic_id -> TopicRecord, in taxonomy order

        Returns:
            Top entries by absolute percentage change; ties keep topic order
        """
        entries = [self.entry_for(topic) for topic in topics.values()]
        entries.sort(key=lambda e: abs(e.percentage_change), reverse=True)
        trending = entries[:self.limit]

        if trending:
            top = trending[0]
            logger.info(
                f"Calculated {len(trending)} trending topics "
                f"(top: {top.topic.id} {top.percentage_change:+d}%)"
            )
        return trending


def build_trend_table(topics: Dict[str, TopicRecord]) -> pd.DataFrame:
    """
    Build the topic x month activity matrix.

    Columns: Topic, Category, one column per month that has activity in any
    topic (oldest first, zero-filled), Total. Rows sorted by Total
    descending, ties in topic order.
    """
    months = sorted({m.month for topic in topics.values() for m in topic.monthly_counts})

    rows = []
    for topic in topics.values():
        row = {
            "Topic": topic.display_name,
            "Category": topic.category_id
        }
        monthly = {m.month: m.count for m in topic.monthly_counts}
        for month in months:
            row[month] = monthly.get(month, 0)
        rows.append(row)

    df = pd.DataFrame(rows, columns=["Topic", "Category"] + months)

    if df.empty:
        logger.warning("No topics found, creating empty trend table")
        df["Total"] = pd.Series(dtype="int64")
        return df

    df["Total"] = df[months].sum(axis=1) if months else 0
    df = df.sort_values("Total", ascending=False, kind="stable").reset_index(drop=True)
    return df


def export_trend_table(
    topics: Dict[str, TopicRecord],
    output_dir: str,
    filename: str = "trend_table.csv"
) -> str:
    """
    Write the trend table to CSV.

    Returns:
        Path to generated CSV file
    """
    df = build_trend_table(topics)

    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, filename)
    df.to_csv(output_path, index=False)

    logger.info(
        f"Trend table saved to {output_path} "
        f"({len(df)} topics, {len(df.columns) - 3} months)"
    )
    return output_path
