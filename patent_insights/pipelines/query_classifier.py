"""
Query Classifier
patent_insights/pipelines/query_classifier.py

Maps a raw search string to a typed SearchQuery. Pure, no I/O.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Tuple

from patent_insights.models.patent_insights import QueryType, SearchQuery

logger = logging.getLogger(__name__)

ISIN_PATTERN = re.compile(r"[A-Z]{2}[A-Z0-9]{10}", re.ASCII)
URL_PATTERN = re.compile(r"https?://")

COMPANY_SUFFIXES = ["inc", "corp", "ltd", "llc", "gmbh", "ag", "sa", "plc", "co"]

# Word boundary matching so "co" does not fire on "cobalt" or "sa" on "sales"
COMPANY_PATTERN = re.compile(
    r"\b(" + "|".join(COMPANY_SUFFIXES) + r")\b",
    re.IGNORECASE | re.ASCII,
)


def _match_isin(raw: str) -> Optional[str]:
    candidate = raw.upper()
    return candidate if ISIN_PATTERN.fullmatch(candidate) else None


def _match_url(raw: str) -> Optional[str]:
    return raw if URL_PATTERN.match(raw) else None


def _match_company(raw: str) -> Optional[str]:
    return raw if COMPANY_PATTERN.search(raw) else None


# Classification rules (ordered by priority, first match wins).
# Each matcher returns the value to store, or None when it does not apply.
CLASSIFICATION_RULES: List[Tuple[QueryType, Callable[[str], Optional[str]]]] = [
    (QueryType.isin, _match_isin),
    (QueryType.url, _match_url),
    (QueryType.company, _match_company),
]


def classify_query(raw: str) -> SearchQuery:
    """
    Classify a raw search string.

    Args:
        raw: Free-form input (company name, ISIN, URL or technology theme)

    Returns:
        SearchQuery without a theme; anything unmatched is a theme search
    """
    for query_type, matcher in CLASSIFICATION_RULES:
        value = matcher(raw)
        if value is not None:
            logger.debug(f"Classified {raw!r} as {query_type.value}")
            return SearchQuery(type=query_type, value=value)

    logger.debug(f"Classified {raw!r} as theme (default)")
    return SearchQuery(type=QueryType.theme, value=raw)
