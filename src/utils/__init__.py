"""
Utility modules for Community Insights.

Cross-cutting concerns:
- Dates: Timestamp parsing, month keys, time-range cutoffs
- Sources: File/HTTP/sample data sources and the fallback policy
- Sample data: Bundled fallback dataset
"""
