"""
Processing stages for Community Insights.

Contains the modules that turn a raw dataset into the dashboard view model:
- Loader
- Topic Grouper
- Topic Synthesizer
- Category Synthesizer
- Trend Calculator (+ trend table export)
- Discussion filters
- Topic tips
"""
