"""
Community Insights - Topic Aggregation and Trend Engine

CLI entry point for building the dashboard view model.
"""

import argparse
import json
import logging
import os
import sys

from src.exceptions import InsightsError
from src.orchestrator import InsightsOrchestrator
from src.stages.trends import export_trend_table
import config.settings as settings


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def write_json(data: dict, path: str) -> None:
    os.makedirs(os.path.dirname(path) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Community Insights - topic aggregation and trend analysis",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build the dashboard view model and trend table
  python main.py --dataset data/manual_tags_production.json

  # Topic page for water safety, last 6 months, matching "filter"
  python main.py --dataset data/manual_tags_production.json \\
                 --topic water_safety --time-range 6months --query filter
        """
    )

    parser.add_argument(
        "--dataset",
        default=settings.DATASET_SOURCE,
        help=f"Dataset path or URL (default: {settings.DATASET_SOURCE})"
    )

    parser.add_argument(
        "--output-dir",
        default=str(settings.OUTPUT_ROOT),
        help=f"Output directory (default: {settings.OUTPUT_ROOT})"
    )

    parser.add_argument(
        "--topic",
        help="Write the topic page for this topic id instead of the dashboard"
    )

    parser.add_argument(
        "--time-range",
        default=settings.DEFAULT_TIME_RANGE,
        choices=settings.TIME_RANGES,
        help="Time-range filter for --topic"
    )

    parser.add_argument(
        "--query",
        help="Search query for --topic"
    )

    parser.add_argument(
        "--sort-by",
        default=settings.DEFAULT_SORT_BY,
        choices=settings.SORT_OPTIONS,
        help="Sort order for --topic"
    )

    parser.add_argument(
        "--no-fallback",
        action="store_true",
        help="Fail instead of using the sample dataset when the load fails"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    return parser


def main(argv=None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    try:
        orchestrator = InsightsOrchestrator.from_settings(
            dataset=args.dataset,
            use_fallback=not args.no_fallback
        )

        if args.topic:
            page = orchestrator.topic_page(
                args.topic,
                time_range=args.time_range,
                query=args.query,
                sort_by=args.sort_by
            )
            output_path = os.path.join(args.output_dir, f"topic_{args.topic}.json")
            write_json(page, output_path)
            print(f"Topic page: {output_path} ({len(page['threads'])} threads)")
        else:
            data = orchestrator.build_view_model()
            view_model_path = os.path.join(args.output_dir, settings.VIEW_MODEL_FILENAME)
            write_json(data.to_dict(), view_model_path)
            trend_path = export_trend_table(
                data.topics,
                args.output_dir,
                settings.TREND_TABLE_FILENAME
            )
            if orchestrator.used_fallback:
                print("⚠️  Primary dataset unavailable, showing sample data")
            print(f"View model: {view_model_path}")
            print(f"Trend table: {trend_path}")
            print(f"Topics: {len(data.topics)}, categories: {len(data.categories)}, "
                  f"threads: {data.total_threads}")

        logger.info("Community Insights completed successfully")
        return 0

    except InsightsError as e:
        logger.error(f"Failed: {e}")
        print(f"\n❌ {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Interrupted by user")
        return 1

    except Exception as e:
        logger.error(f"Unexpected failure: {e}", exc_info=True)
        print(f"\n❌ Unexpected failure: {e}")
        print(f"Check {settings.LOG_FILE} for details")
        return 1


if __name__ == "__main__":
    sys.exit(main())
