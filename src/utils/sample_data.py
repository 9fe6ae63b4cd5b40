"""
Bundled sample dataset.

Served by SampleDataSource when the dashboard is configured to fall back
after a failed load, and handy for demos without the production file.
"""

import copy

SAMPLE_DATASET = {
    "metadata": {
        "approach": "true_manual_comprehension",
        "started": "2025-11-15T14:30:05.665045",
        "total_threads": 8,
        "tagged_count": 8,
        "last_updated": "2025-11-15T15:15:00.000000"
    },
    "enhanced_tags": {
        "water-safety-discussion": {
            "thread_file": "water-safety-discussion.md",
            "thread_title": "Best water filter for NTM patients?",
            "thread_url": "https://connect.ntminfo.org/discussion/water-safety-discussion",
            "relevant_topics": ["water_safety"],
            "topic_count": 1,
            "tagged_date": "2025-11-10T10:00:00.000Z"
        },
        "arikayce-hearing-issues": {
            "thread_file": "arikayce-hearing-issues.md",
            "thread_title": "Arikayce causing hearing problems",
            "thread_url": "https://connect.ntminfo.org/discussion/arikayce-hearing-issues",
            "relevant_topics": ["inhaled_medications", "hearing_complications"],
            "topic_count": 2,
            "tagged_date": "2025-11-12T14:30:00.000Z"
        },
        "nebulizer-cleaning": {
            "thread_file": "nebulizer-cleaning.md",
            "thread_title": "How often to clean nebulizer parts?",
            "thread_url": "https://connect.ntminfo.org/discussion/nebulizer-cleaning",
            "relevant_topics": ["equipment_sterilization", "nebulizers"],
            "topic_count": 2,
            "tagged_date": "2025-11-08T09:15:00.000Z"
        },
        "exercise-fatigue": {
            "thread_file": "exercise-fatigue.md",
            "thread_title": "Managing fatigue during treatment",
            "thread_url": "https://connect.ntminfo.org/discussion/exercise-fatigue",
            "relevant_topics": ["other_complications", "exercise_activity"],
            "topic_count": 2,
            "tagged_date": "2025-11-05T16:45:00.000Z"
        },
        "travel-tips": {
            "thread_file": "travel-tips.md",
            "thread_title": "Traveling with NTM - safety tips",
            "thread_url": "https://connect.ntminfo.org/discussion/travel-tips",
            "relevant_topics": ["travel_safety"],
            "topic_count": 1,
            "tagged_date": "2025-11-01T11:20:00.000Z"
        },
        "shower-safety": {
            "thread_file": "shower-safety.md",
            "thread_title": "Shower safety measures",
            "thread_url": "https://connect.ntminfo.org/discussion/shower-safety",
            "relevant_topics": ["water_safety"],
            "topic_count": 1,
            "tagged_date": "2025-10-28T14:10:00.000Z"
        },
        "medication-schedule": {
            "thread_file": "medication-schedule.md",
            "thread_title": "Managing complex medication schedules",
            "thread_url": "https://connect.ntminfo.org/discussion/medication-schedule",
            "relevant_topics": ["big3_antibiotics"],
            "topic_count": 1,
            "tagged_date": "2025-10-25T08:30:00.000Z"
        },
        "nutrition-support": {
            "thread_file": "nutrition-support.md",
            "thread_title": "Nutritional support during treatment",
            "thread_url": "https://connect.ntminfo.org/discussion/nutrition-support",
            "relevant_topics": ["nutrition_lifestyle"],
            "topic_count": 1,
            "tagged_date": "2025-10-20T13:45:00.000Z"
        }
    }
}


def sample_dataset() -> dict:
    """Return a fresh copy of the sample payload."""
    return copy.deepcopy(SAMPLE_DATASET)
