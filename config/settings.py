"""
Configuration settings for Community Insights.

Centralized configuration for data sources, aggregation and trend parameters.
"""

import os
from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
DATA_ROOT = PROJECT_ROOT / "data"
OUTPUT_ROOT = PROJECT_ROOT / "output"

# Datasets
DATASET_SOURCE = os.getenv("INSIGHTS_DATASET", str(DATA_ROOT / "manual_tags_production.json"))
GLOSSARY_SOURCE = os.getenv("INSIGHTS_GLOSSARY", str(DATA_ROOT / "glossary.json"))
TIMELINES_SOURCE = os.getenv("INSIGHTS_TIMELINES", str(DATA_ROOT / "patient_timelines.json"))
TOPIC_TIPS_DIR = DATA_ROOT / "topic_tips"
TAXONOMY_PATH = os.getenv("INSIGHTS_TAXONOMY", "")  # Empty = embedded taxonomy
STRICT_TAXONOMY = os.getenv("INSIGHTS_STRICT_TAXONOMY", "false").lower() == "true"  # Orphan topics fail at startup

# Dashboard falls back to the bundled sample dataset when the primary load fails
USE_FALLBACK_DATA = os.getenv("INSIGHTS_USE_FALLBACK", "true").lower() == "true"

# HTTP
HTTP_TIMEOUT_SECONDS = 30

# Trend Calculator
TRENDING_WINDOW_MONTHS = 3
TRENDING_LIMIT = 10

# Filter options
TIME_RANGES = ("all", "6months", "1year", "2years")
SORT_OPTIONS = ("latest", "oldest", "most_active", "alphabetical")
DEFAULT_TIME_RANGE = "all"
DEFAULT_SORT_BY = "latest"

# Forum links
DISCUSSION_BASE_URL = "https://connect.ntminfo.org/discussion"

# Output file names
VIEW_MODEL_FILENAME = "view_model.json"
TREND_TABLE_FILENAME = "trend_table.csv"

# Logging
LOG_LEVEL = os.getenv("INSIGHTS_LOG_LEVEL", "INFO")  # DEBUG, INFO, WARNING, ERROR
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FILE = "insights.log"
