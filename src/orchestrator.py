"""
Insights Orchestrator.

Coordinates the stages (load → group → topics → categories → trending)
and the view layer's dataset loads.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from src.exceptions import InsightsError, NotFoundError, UnknownCategoryError
from src.models.discussion import Dataset
from src.models.topic import ProcessedData, TopicRecord
from src.registry.taxonomy import Taxonomy
from src.stages.categories import CategorySynthesizer
from src.stages.filtering import filter_discussions, sort_discussions
from src.stages.grouping import group_by_topic
from src.stages.loader import DatasetLoader
from src.stages.tips import count_by_priority, discussion_url, load_topic_tips
from src.stages.topics import TopicSynthesizer
from src.stages.trends import TrendCalculator
from src.utils.sources import DataSource, SampleDataSource, source_for
import config.settings as settings

logger = logging.getLogger(__name__)


class InsightsOrchestrator:
    """
    Runs the aggregation stages over a dataset.

    Coordinates:
    1. Loading → 2. Grouping → 3. Topic Synthesis
    → 4. Category Synthesis → 5. Trending

    Two load paths:
    - Dashboard (build_view_model): falls back to fallback_source on LoadError
      when one is configured
    - Topic page (get_topic, topic_page): LoadError is surfaced to the caller
    """

    def __init__(
        self,
        source: DataSource,
        fallback_source: Optional[DataSource] = None,
        taxonomy: Optional[Taxonomy] = None,
        trend_calculator: Optional[TrendCalculator] = None,
        tips_dir: Optional[str] = None
    ):
        """
        Initialize orchestrator.

        Args:
            source: Primary dataset source
            fallback_source: Source used by the dashboard path when the
                primary load fails (None disables the fallback)
            taxonomy: Topic/category taxonomy (embedded table by default)
            trend_calculator: Trend calculator (settings window/limit by default)
            tips_dir: Directory of per-topic tips documents
        """
        self.source = source
        self.fallback_source = fallback_source
        self.taxonomy = taxonomy or Taxonomy()
        self.trend_calculator = trend_calculator or TrendCalculator(
            window_months=settings.TRENDING_WINDOW_MONTHS,
            limit=settings.TRENDING_LIMIT
        )
        self.tips_dir = tips_dir
        self.used_fallback = False

        self.topic_synthesizer = TopicSynthesizer(self.taxonomy)
        self.category_synthesizer = CategorySynthesizer(self.taxonomy)

    @classmethod
    def from_settings(cls, dataset: Optional[str] = None, use_fallback: Optional[bool] = None) -> "InsightsOrchestrator":
        """
        Build an orchestrator from config.settings.

        Raises:
            LoadError: If TAXONOMY_PATH is set and cannot be read
            UnknownCategoryError: If STRICT_TAXONOMY is on and a topic
                points at an undeclared category
        """
        if use_fallback is None:
            use_fallback = settings.USE_FALLBACK_DATA

        taxonomy = Taxonomy.from_file(settings.TAXONOMY_PATH) if settings.TAXONOMY_PATH else Taxonomy()
        orphans = taxonomy.validate()
        if orphans and settings.STRICT_TAXONOMY:
            orphan = taxonomy.get_topic(orphans[0])
            raise UnknownCategoryError(orphan.category_id, orphan.topic_id)

        return cls(
            source=source_for(dataset or settings.DATASET_SOURCE, timeout=settings.HTTP_TIMEOUT_SECONDS),
            fallback_source=SampleDataSource() if use_fallback else None,
            taxonomy=taxonomy,
            tips_dir=str(settings.TOPIC_TIPS_DIR)
        )

    def process(self, dataset: Dataset) -> ProcessedData:
        """
        Derive the full view model from a dataset.

        Pure: the same dataset always produces an equal view model.
        """
        logger.info(f"Processing data - threads: {dataset.metadata.total_threads}")

        groups = group_by_topic(dataset.records)
        topics = self.topic_synthesizer.synthesize(groups)
        categories = self.category_synthesizer.synthesize(topics)
        trending = self.trend_calculator.calculate(topics)

        logger.info("Data processing complete")
        return ProcessedData(
            topics=topics,
            categories=categories,
            trending=trending,
            total_threads=dataset.metadata.total_threads,
            last_updated=dataset.metadata.last_updated
        )

    def build_view_model(self) -> ProcessedData:
        """
        Load and process the dataset for the dashboard.

        Raises:
            LoadError: If the load fails and no fallback is configured
        """
        loader = DatasetLoader(self.source, fallback=self.fallback_source)
        dataset = loader.load()
        self.used_fallback = loader.used_fallback
        return self.process(dataset)

    def get_topic(self, topic_id: str) -> TopicRecord:
        """
        Load the dataset and return one topic's record.

        Raises:
            LoadError: If the primary load fails (no fallback on this path)
            NotFoundError: If topic_id has no record
        """
        data = self.process(DatasetLoader(self.source).load())
        topic = data.topics.get(topic_id)
        if topic is None:
            raise NotFoundError("topic", topic_id)
        return topic

    def topic_page(
        self,
        topic_id: str,
        time_range: str = settings.DEFAULT_TIME_RANGE,
        query: Optional[str] = None,
        sort_by: str = settings.DEFAULT_SORT_BY
    ) -> dict:
        """
        Assemble the data a topic page shows.

        Returns:
            Dict with the topic, its filtered and sorted discussions and
            the topic's tips (None when it has none) with per-priority
            counts and forum links for the cited threads
        """
        topic = self.get_topic(topic_id)
        discussions = filter_discussions(
            topic.discussions,
            time_range=time_range,
            query=query,
            taxonomy=self.taxonomy
        )
        discussions = sort_discussions(discussions, sort_by)

        tips = load_topic_tips(topic_id, self.tips_dir) if self.tips_dir else None
        tips_view = None
        if tips:
            tips_view = tips.to_dict()
            tips_view["priorityCounts"] = count_by_priority(tips.tips)
            for tip in tips_view["tips"]:
                tip["cited_urls"] = [discussion_url(slug) for slug in tip["cited_threads"]]

        logger.info(
            f"Topic page {topic_id}: showing {len(discussions)} of {topic.count} discussions"
        )
        return {
            "topic": topic.to_dict(include_discussions=False),
            "threads": [d.to_dict() for d in discussions],
            "filters": {"timeRange": time_range, "searchQuery": query or "", "sortBy": sort_by},
            "tips": tips_view
        }


class ViewState(Enum):
    """Views the dashboard can show."""
    TOPICS = "topics"
    GLOSSARY = "glossary"
    TIMELINES = "timelines"


# View -> dataset slot it needs
REQUIRED_DATASET = {
    ViewState.TOPICS: "discussions",
    ViewState.GLOSSARY: "glossary",
    ViewState.TIMELINES: "timelines",
}


def dataset_for(view: ViewState) -> str:
    return REQUIRED_DATASET[view]


@dataclass(frozen=True)
class LoadRequest:
    slot: str
    request_id: int


class LoadTracker:
    """
    Tags loads with increasing request ids per dataset slot.

    Only the latest request issued for a slot is current; responses to
    older requests are stale and must be discarded.
    """

    def __init__(self):
        self._ids = itertools.count(1)
        self._latest: Dict[str, int] = {}

    def begin(self, slot: str) -> LoadRequest:
        request = LoadRequest(slot=slot, request_id=next(self._ids))
        self._latest[slot] = request.request_id
        return request

    def is_current(self, request: LoadRequest) -> bool:
        return self._latest.get(request.slot) == request.request_id


class ViewController:
    """
    State machine over the dashboard views.

    Switching views issues a load of the dataset that view needs.
    Subscribers are called with (view, result) when a current load
    completes; stale completions are dropped.
    """

    def __init__(self, loaders: Dict[str, Callable[[], Any]], initial: ViewState = ViewState.TOPICS):
        """
        Initialize view controller.

        Args:
            loaders: dataset slot -> zero-argument loader
            initial: Starting view
        """
        missing = [slot for slot in REQUIRED_DATASET.values() if slot not in loaders]
        if missing:
            raise ValueError(f"No loader for dataset slots: {', '.join(missing)}")

        self.loaders = loaders
        self.state = initial
        self.tracker = LoadTracker()
        self.results: Dict[str, Any] = {}
        self.errors: Dict[str, InsightsError] = {}
        self._subscribers: List[Callable[[ViewState, Any], None]] = []

    @classmethod
    def for_orchestrator(cls, orchestrator: InsightsOrchestrator) -> "ViewController":
        """Wire the standard loaders: processed discussions plus raw glossary/timelines."""
        glossary = source_for(settings.GLOSSARY_SOURCE, timeout=settings.HTTP_TIMEOUT_SECONDS)
        timelines = source_for(settings.TIMELINES_SOURCE, timeout=settings.HTTP_TIMEOUT_SECONDS)
        return cls({
            "discussions": orchestrator.build_view_model,
            "glossary": glossary.fetch,
            "timelines": timelines.fetch,
        })

    def subscribe(self, callback: Callable[[ViewState, Any], None]) -> None:
        self._subscribers.append(callback)

    def switch_to(self, view: ViewState) -> LoadRequest:
        """Change the current view and issue a load for its dataset."""
        if view != self.state:
            logger.info(f"View switch: {self.state.value} -> {view.value}")
        self.state = view
        return self.tracker.begin(dataset_for(view))

    def complete(self, request: LoadRequest, result: Any) -> bool:
        """
        Deliver a load result.

        Returns:
            True if the result was applied, False if it was stale
        """
        if not self.tracker.is_current(request):
            logger.debug(f"Discarding stale response for {request.slot} (request {request.request_id})")
            return False

        self.results[request.slot] = result
        self.errors.pop(request.slot, None)

        if dataset_for(self.state) == request.slot:
            for callback in self._subscribers:
                callback(self.state, result)
        return True

    def fail(self, request: LoadRequest, error: InsightsError) -> bool:
        """Record a failed load; stale failures are dropped like stale results."""
        if not self.tracker.is_current(request):
            logger.debug(f"Discarding stale error for {request.slot} (request {request.request_id})")
            return False
        self.errors[request.slot] = error
        return True

    def load(self, view: ViewState) -> Any:
        """
        Switch to a view and load its dataset synchronously.

        Raises:
            InsightsError: If the loader fails (also recorded in errors)
        """
        request = self.switch_to(view)
        try:
            result = self.loaders[request.slot]()
        except InsightsError as e:
            logger.error(f"Failed to load {request.slot} for {view.value} view: {e}")
            self.fail(request, e)
            raise

        self.complete(request, result)
        return result
