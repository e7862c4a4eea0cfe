"""
Models module for the Patent Insights service.
"""

from patent_insights.models.patent_insights import (
    ChartPoint,
    InsightBundle,
    PatentRecord,
    QueryType,
    SearchQuery,
    SearchResult,
    SeriesCategory,
)

__all__ = [
    "ChartPoint",
    "InsightBundle",
    "PatentRecord",
    "QueryType",
    "SearchQuery",
    "SearchResult",
    "SeriesCategory",
]
