"""
Services module for the Patent Insights service.
"""

from patent_insights.services.patent_api import (
    ENDPOINTS,
    HttpError,
    NetworkError,
    ParseError,
    PatentApiClient,
    PatentSearchError,
)

__all__ = [
    # Client
    "ENDPOINTS",
    "PatentApiClient",

    # Errors
    "PatentSearchError",
    "NetworkError",
    "HttpError",
    "ParseError",
]
