"""
Exceptions raised and reported by the insights engine.
"""


class InsightsError(Exception):
    """Base class for all engine errors."""


class LoadError(InsightsError):
    """
    Reading a dataset failed.

    Raised for transport failures (missing file, HTTP error, network error)
    and for payloads that do not have the expected shape.
    """

    def __init__(self, message: str, source: str = ""):
        super().__init__(message)
        self.source = source


class UnknownTopicError(InsightsError):
    """
    A record references a topic id that is not in the taxonomy.

    Diagnostic only: built for its message and logged, never raised out of
    the engine.
    """

    def __init__(self, topic_id: str, discussion_count: int = 0):
        super().__init__(
            f"No taxonomy entry for topic '{topic_id}' "
            f"({discussion_count} discussions dropped)"
        )
        self.topic_id = topic_id
        self.discussion_count = discussion_count


class UnknownCategoryError(InsightsError):
    """A topic references a category id that is not in the taxonomy (diagnostic only)."""

    def __init__(self, category_id: str, topic_id: str = ""):
        super().__init__(
            f"No taxonomy entry for category '{category_id}'"
            + (f" (topic '{topic_id}' dropped)" if topic_id else "")
        )
        self.category_id = category_id
        self.topic_id = topic_id


class NotFoundError(InsightsError):
    """A requested topic id or glossary slug has no derived record."""

    def __init__(self, kind: str, key: str):
        super().__init__(f"{kind.capitalize()} '{key}' not found")
        self.kind = kind
        self.key = key
