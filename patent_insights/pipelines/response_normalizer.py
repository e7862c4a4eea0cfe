"""
Response Normalizer
patent_insights/pipelines/response_normalizer.py

Maps a loosely-specified patent API payload into the canonical
SearchResult schema.

Every canonical field is looked up through an ordered alias list. Missing
or malformed fields fall back to defaults; only a payload whose top level
cannot be interpreted raises NormalizationError.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from typing import AbstractSet, Any, Dict, List, Optional, Sequence

from patent_insights.models.patent_insights import (
    ChartPoint,
    InsightBundle,
    PatentRecord,
    SearchQuery,
    SearchResult,
    SeriesCategory,
)
from patent_insights.services.patent_api import PatentSearchError

logger = logging.getLogger(__name__)


class NormalizationError(PatentSearchError):
    """Payload is decodable but structurally unusable."""


RECORD_LIST_ALIASES = ["patents", "records", "results"]
SUMMARY_ALIASES = ["summary", "narrative"]

TEXT_FIELD_ALIASES: Dict[str, List[str]] = {
    "title": ["title", "patent_title"],
    "assignee": ["assignee", "owner", "assignee_organization"],
    "publication_date": ["publication_date", "pub_date", "patent_date"],
    "application_date": ["application_date", "app_date", "filing_date"],
    "patent_number": ["patent_number", "number"],
    "abstract": ["abstract", "description", "patent_abstract"],
}

COUNT_FIELD_ALIASES: Dict[str, List[str]] = {
    "claims": ["claims_count", "claims", "num_claims"],
    "citations": ["citations_count", "citations", "citation_count"],
    "family_size": ["family_size"],
}

ID_ALIASES = ["id", "patent_id"]
TECHNOLOGY_ALIASES = ["technology_areas", "technology", "cpc_codes"]

POINT_LABEL_ALIASES = ["name", "label", "category"]
POINT_VALUE_ALIASES = ["value", "count", "amount"]

SERIES_ALIASES: Dict[SeriesCategory, List[str]] = {
    SeriesCategory.recent_activity: ["activity_timeline", "recent_activity"],
    SeriesCategory.technology_distribution: ["technology_distribution"],
    SeriesCategory.competitive_analysis: ["competitive_analysis", "competitive_landscape"],
    SeriesCategory.trend_analysis: ["trend_analysis", "trends"],
    SeriesCategory.portfolio_similarity: ["portfolio_similarity"],
    SeriesCategory.ma_targets: ["ma_targets", "m_and_a_targets"],
    SeriesCategory.infringement_risk: ["infringement_risk"],
    SeriesCategory.market_opportunity: ["market_opportunity"],
    SeriesCategory.patent_valuation: ["patent_valuation", "valuation"],
    SeriesCategory.technology_maturity: ["technology_maturity"],
    SeriesCategory.geographic_distribution: ["geographic_distribution"],
    SeriesCategory.citation_impact: ["citation_impact"],
}

MIN_FAMILY_SIZE = 1


def resolve_field(source: Mapping, aliases: Sequence[str]) -> Any:
    """First alias whose value is present and not None/empty string."""
    for alias in aliases:
        value = source.get(alias)
        if value is not None and value != "":
            return value
    return None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _to_number(value: Any) -> float:
    """Non-negative float; anything unusable becomes 0."""
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            return 0.0
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return 0.0
    else:
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return max(0.0, number)


def _to_count(value: Any) -> int:
    return int(_to_number(value))


def _to_string_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value else []
    if not isinstance(value, (list, tuple)):
        return []
    return [str(v) for v in value if v is not None and v != ""]


def _explicit_id(raw: Mapping) -> Optional[str]:
    """Id carried by the record itself: an id alias, else the patent number."""
    record_id = resolve_field(raw, ID_ALIASES)
    if record_id is None:
        record_id = resolve_field(raw, TEXT_FIELD_ALIASES["patent_number"])
    return None if record_id is None else str(record_id)


def _positional_id(index: int, taken: AbstractSet[str]) -> str:
    # First free patent_<n> from the record position on
    n = index
    while f"patent_{n}" in taken:
        n += 1
    return f"patent_{n}"


def normalize_record(raw: Mapping, index: int, taken: AbstractSet[str] = frozenset()) -> PatentRecord:
    """
    Build a PatentRecord from one raw record. `index` is 1-based.

    A record without an id or patent number gets a positional id that
    avoids every id in `taken`.
    """
    fields: Dict[str, Any] = {
        name: _to_text(resolve_field(raw, aliases))
        for name, aliases in TEXT_FIELD_ALIASES.items()
    }
    fields.update({
        name: _to_count(resolve_field(raw, aliases))
        for name, aliases in COUNT_FIELD_ALIASES.items()
    })
    fields["family_size"] = max(MIN_FAMILY_SIZE, fields["family_size"])

    record_id = _explicit_id(raw)
    fields["id"] = record_id if record_id is not None else _positional_id(index, taken)
    fields["technology"] = _to_string_list(resolve_field(raw, TECHNOLOGY_ALIASES))

    return PatentRecord(**fields)


def normalize_records(raw_records: Any) -> List[PatentRecord]:
    if raw_records is None:
        return []
    if not isinstance(raw_records, (list, tuple)):
        raise NormalizationError(
            f"Record list must be an array, got {type(raw_records).__name__}"
        )

    candidates = []
    for index, raw in enumerate(raw_records, start=1):
        if not isinstance(raw, Mapping):
            logger.warning(f"   ⚠️ Skipping record #{index}: not an object")
            continue
        candidates.append((index, raw))

    # Reserve the records' own ids so positional ids never shadow a later record
    taken = {record_id for record_id in (_explicit_id(raw) for _, raw in candidates) if record_id is not None}

    records: List[PatentRecord] = []
    seen_ids = set()
    for index, raw in candidates:
        record = normalize_record(raw, index, taken)
        if record.id in seen_ids:
            logger.warning(f"   ⚠️ Skipping duplicate record id {record.id!r}")
            continue
        seen_ids.add(record.id)
        taken.add(record.id)
        records.append(record)
    return records


def normalize_series(raw_series: Any) -> List[ChartPoint]:
    """Normalize one chart series. Malformed input yields an empty series."""
    if not isinstance(raw_series, (list, tuple)):
        return []

    points: List[ChartPoint] = []
    seen_labels = set()
    for item in raw_series:
        if not isinstance(item, Mapping):
            continue
        label = resolve_field(item, POINT_LABEL_ALIASES)
        if label is None:
            continue
        label = str(label)
        if label in seen_labels:
            continue
        seen_labels.add(label)
        points.append(ChartPoint(name=label, value=_to_number(resolve_field(item, POINT_VALUE_ALIASES))))
    return points


def normalize_insights(payload: Mapping, total_patents: int) -> InsightBundle:
    series = {
        category.value: normalize_series(resolve_field(payload, aliases))
        for category, aliases in SERIES_ALIASES.items()
    }
    missing = [name for name, points in series.items() if not points]
    if missing:
        logger.debug(f"   Empty series: {', '.join(missing)}")
    return InsightBundle(total_patents=total_patents, **series)


def default_summary(query: SearchQuery, record_count: int) -> str:
    return f'Analysis complete for "{query.value}" with {record_count} patents found.'


def normalize_response(payload: Any, query: SearchQuery) -> SearchResult:
    """
    Normalize a raw API payload.

    Args:
        payload: Decoded JSON body from the patent API
        query: The classified query the payload answers

    Returns:
        SearchResult with all twelve series present

    Raises:
        NormalizationError: payload is not an object, or its record list
            is not an array
    """
    if not isinstance(payload, Mapping):
        raise NormalizationError(
            f"Payload must be a JSON object, got {type(payload).__name__}"
        )

    records = normalize_records(resolve_field(payload, RECORD_LIST_ALIASES))
    insights = normalize_insights(payload, total_patents=len(records))

    summary: Optional[Any] = resolve_field(payload, SUMMARY_ALIASES)
    if not isinstance(summary, str) or not summary.strip():
        summary = default_summary(query, len(records))

    logger.info(f"   • Normalized {len(records)} patents")
    return SearchResult(query=query, patents=records, insights=insights, summary=summary)
