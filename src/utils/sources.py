"""
Data sources.

Reads raw JSON documents from files, HTTP endpoints or the bundled sample.
"""

import json
import logging
import os
from typing import Optional

import requests

from src.exceptions import LoadError
from src.utils.sample_data import sample_dataset

logger = logging.getLogger(__name__)


class DataSource:
    """
    A place a raw JSON document can be read from.

    Subclasses implement fetch(), which returns the decoded document or
    raises LoadError.
    """

    name = "source"

    def fetch(self):
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"


class FileDataSource(DataSource):
    """Reads a JSON document from the local filesystem."""

    def __init__(self, path: str):
        self.path = str(path)
        self.name = self.path

    def fetch(self):
        if not os.path.exists(self.path):
            logger.error(f"Dataset file not found: {self.path}")
            raise LoadError(f"Dataset file not found: {self.path}", source=self.path)

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse JSON from {self.path}: {e}")
            raise LoadError(f"Invalid JSON in {self.path}: {e}", source=self.path) from e
        except OSError as e:
            logger.error(f"Failed to read {self.path}: {e}")
            raise LoadError(f"Failed to read {self.path}: {e}", source=self.path) from e

        logger.debug(f"Read dataset from {self.path}")
        return data


class HttpDataSource(DataSource):
    """
    Reads a JSON document over HTTP(S).

    One GET per fetch, no retries; the timeout is the only bound.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP source.

        Args:
            url: Document URL
            timeout: Request timeout in seconds
            session: Optional shared requests session
        """
        self.url = url
        self.name = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self):
        logger.info(f"Loading data from {self.url}")
        try:
            response = self.session.get(self.url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {self.url} failed: {e}")
            raise LoadError(f"Failed to load data: {e}", source=self.url) from e

        logger.debug(f"Fetch response status: {response.status_code} {response.reason}")
        if response.status_code != 200:
            raise LoadError(
                f"Failed to load data: {response.status_code} {response.reason}",
                source=self.url
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {self.url} is not JSON: {e}")
            raise LoadError(f"Invalid JSON from {self.url}: {e}", source=self.url) from e


class SampleDataSource(DataSource):
    """Serves the bundled sample dataset."""

    name = "sample"

    def fetch(self):
        return sample_dataset()


def source_for(location: str, timeout: float = 30) -> DataSource:
    """Pick an HTTP or file source based on the location string."""
    if location.startswith(("http://", "https://")):
        return HttpDataSource(location, timeout=timeout)
    return FileDataSource(location)
