"""
Dataset Loader.

Reads the raw tagged-discussions document from a data source and
normalizes both schema variants into a Dataset.
"""

import logging
from typing import Any, Optional

from src.exceptions import LoadError
from src.models.discussion import Dataset, DatasetMetadata, Discussion
from src.utils.sources import DataSource

logger = logging.getLogger(__name__)

# Record collection field names, newest format first
RECORD_FIELDS = ("enhanced_tags", "manual_tags")


def parse_dataset(payload: Any, source: str = "") -> Dataset:
    """
    Normalize a decoded dataset document.

    Args:
        payload: Decoded JSON document
        source: Source description used in error messages

    Returns:
        Dataset with discussions in source-mapping order

    Raises:
        LoadError: If the document is not the expected shape
    """
    if not isinstance(payload, dict):
        raise LoadError(
            f"Expected a JSON object, got {type(payload).__name__}",
            source=source
        )

    raw_records = None
    for field_name in RECORD_FIELDS:
        if payload.get(field_name) is not None:
            raw_records = payload[field_name]
            break
    if raw_records is None:
        raw_records = {}
        logger.warning(f"No record collection ({' / '.join(RECORD_FIELDS)}) in dataset {source}")

    if not isinstance(raw_records, dict):
        raise LoadError(
            f"Record collection must be an object, got {type(raw_records).__name__}",
            source=source
        )

    records = {}
    for discussion_id, raw in raw_records.items():
        if not isinstance(raw, dict):
            logger.warning(f"Skipping malformed record {discussion_id}: not an object")
            continue
        try:
            records[discussion_id] = Discussion.from_dict(discussion_id, raw)
        except ValueError as e:
            logger.warning(f"Skipping malformed record {discussion_id}: {e}")

    raw_metadata = payload.get("metadata")
    if raw_metadata is None:
        logger.warning(f"Dataset {source} has no metadata block, using record count")
        raw_metadata = {}
    if not isinstance(raw_metadata, dict):
        raise LoadError(
            f"Metadata must be an object, got {type(raw_metadata).__name__}",
            source=source
        )
    try:
        metadata = DatasetMetadata.from_dict(raw_metadata, default_total=len(records))
    except ValueError as e:
        raise LoadError(f"Malformed metadata: {e}", source=source) from e

    logger.info(
        f"Data loaded successfully: total_threads={metadata.total_threads}, "
        f"records={len(records)}"
    )
    return Dataset(metadata=metadata, records=records)


class DatasetLoader:
    """
    Loads the discussions dataset from a data source.

    No caching: every load() reads the source again. With a fallback source,
    any LoadError from the primary (transport or payload shape) switches to
    the fallback; the switch is logged at warning level and recorded in
    used_fallback.
    """

    def __init__(self, source: DataSource, fallback: Optional[DataSource] = None):
        """
        Initialize loader.

        Args:
            source: Where to read the raw document from
            fallback: Source to load instead when the primary fails
                (None surfaces the LoadError)
        """
        self.source = source
        self.fallback = fallback
        self.used_fallback = False

    def load(self) -> Dataset:
        """
        Read and normalize the dataset.

        Raises:
            LoadError: If the read fails or the payload has the wrong shape
                and no fallback is configured (or the fallback fails too)
        """
        self.used_fallback = False
        try:
            return self._load_from(self.source)
        except LoadError as e:
            if self.fallback is None:
                raise
            logger.warning(
                f"Primary source {self.source.name} failed ({e}), "
                f"falling back to {self.fallback.name}"
            )
            self.used_fallback = True
            return self._load_from(self.fallback)

    def _load_from(self, source: DataSource) -> Dataset:
        logger.info(f"Loading dataset from {source.name}")
        payload = source.fetch()
        return parse_dataset(payload, source=source.name)
