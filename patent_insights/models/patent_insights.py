"""
Patent Insights Data Models
patent_insights/models/patent_insights.py

Canonical schema every search result is normalized into, whether it came
from the remote patent API or from the synthetic generator.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator, model_validator
from pydantic.alias_generators import to_camel


class QueryType(str, Enum):
    company = "company"
    isin = "isin"
    url = "url"
    theme = "theme"


class SeriesCategory(str, Enum):
    """The twelve metric series every InsightBundle carries."""
    recent_activity = "recent_activity"                  # Patent activity timeline
    technology_distribution = "technology_distribution"
    competitive_analysis = "competitive_analysis"        # Competitive landscape
    trend_analysis = "trend_analysis"
    portfolio_similarity = "portfolio_similarity"
    ma_targets = "ma_targets"
    infringement_risk = "infringement_risk"
    market_opportunity = "market_opportunity"
    patent_valuation = "patent_valuation"
    technology_maturity = "technology_maturity"
    geographic_distribution = "geographic_distribution"
    citation_impact = "citation_impact"


class _CanonicalModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class SearchQuery(_CanonicalModel):
    """Classified search input. `type` depends on `value` only."""

    type: QueryType
    value: str
    theme: Optional[str] = None

    @field_validator("theme")
    @classmethod
    def blank_theme_is_absent(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ChartPoint(_CanonicalModel):
    name: str
    value: float = Field(0, ge=0)

    @field_serializer("value")
    def serialize_value(self, v: float):
        # Whole numbers go out as JSON integers
        return int(v) if float(v).is_integer() else v


class PatentRecord(_CanonicalModel):
    """Individual patent in a search result."""

    id: str
    title: str = ""
    assignee: str = ""
    publication_date: str = ""
    application_date: str = ""
    patent_number: str = ""
    abstract: str = ""
    claims: int = Field(0, ge=0)
    citations: int = Field(0, ge=0)
    family_size: int = Field(1, ge=1)
    technology: List[str] = Field(default_factory=list)


class InsightBundle(_CanonicalModel):
    """
    Aggregate analytics for a result.

    Holds one MetricSeries (ordered list of ChartPoint) per SeriesCategory.
    """

    total_patents: int = Field(0, ge=0)

    recent_activity: List[ChartPoint] = Field(default_factory=list)
    technology_distribution: List[ChartPoint] = Field(default_factory=list)
    competitive_analysis: List[ChartPoint] = Field(default_factory=list)
    trend_analysis: List[ChartPoint] = Field(default_factory=list)

    # Asset manager / M&A views
    portfolio_similarity: List[ChartPoint] = Field(default_factory=list)
    ma_targets: List[ChartPoint] = Field(default_factory=list)
    infringement_risk: List[ChartPoint] = Field(default_factory=list)
    market_opportunity: List[ChartPoint] = Field(default_factory=list)
    patent_valuation: List[ChartPoint] = Field(default_factory=list)
    technology_maturity: List[ChartPoint] = Field(default_factory=list)
    geographic_distribution: List[ChartPoint] = Field(default_factory=list)
    citation_impact: List[ChartPoint] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_unique_labels(self):
        for category in SeriesCategory:
            names = [point.name for point in self.series(category)]
            if len(names) != len(set(names)):
                raise ValueError(f"Duplicate labels in series '{category.value}'")
        return self

    def series(self, category: SeriesCategory) -> List[ChartPoint]:
        return getattr(self, category.value)


class SearchResult(_CanonicalModel):
    """Complete output of one search. Never partial."""

    query: SearchQuery
    patents: List[PatentRecord] = Field(default_factory=list)
    insights: InsightBundle
    summary: str

    @model_validator(mode="after")
    def check_consistency(self):
        if self.insights.total_patents != len(self.patents):
            raise ValueError(
                f"total_patents={self.insights.total_patents} does not match "
                f"{len(self.patents)} patent records"
            )
        ids = [p.id for p in self.patents]
        if len(ids) != len(set(ids)):
            raise ValueError("Patent ids must be unique within a result")
        return self
