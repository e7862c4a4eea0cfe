"""
Patent Search Pipeline
patent_insights/pipelines/patent_search.py

Entry point of the search service:
    1. Classify the raw query
    2. Fetch the payload from the patent API
    3. Normalize it into a SearchResult
    4. Fall back to synthetic data when live data is unavailable

search() never raises. Failures surface only as a degraded-mode notice at
the start of the summary.
"""

from __future__ import annotations

import logging
from typing import Optional

from patent_insights.config import ApiConfig, get_api_config
from patent_insights.models.patent_insights import SearchResult
from patent_insights.pipelines.query_classifier import classify_query
from patent_insights.pipelines.response_normalizer import normalize_response
from patent_insights.pipelines.search_state import (
    Fallback,
    LiveFailure,
    LiveSuccess,
    SearchOutcome,
    SearchStage,
    SearchState,
)
from patent_insights.pipelines.synthetic_data import generate_synthetic_result
from patent_insights.services.patent_api import PatentApiClient, PatentSearchError

logger = logging.getLogger(__name__)

DEGRADED_NOTICE = (
    'API connection issue detected. Displaying sample data for "{value}". '
    "Please verify your bearer token and API endpoint configuration. "
)


def with_degraded_notice(result: SearchResult) -> SearchResult:
    """Copy of `result` whose summary starts with the degraded-mode notice."""
    notice = DEGRADED_NOTICE.format(value=result.query.value)
    return result.model_copy(update={"summary": notice + result.summary})


def step1_classify_query(state: SearchState) -> SearchState:
    """Classify the raw input and attach the caller's theme."""
    query = classify_query(state.raw_query)
    if state.theme:
        query = query.model_copy(update={"theme": state.theme})
    state.query = query

    logger.info("-" * 40)
    logger.info(f"🔍 [1/3] CLASSIFIED QUERY: {query.type.value} = {query.value!r}")
    if query.theme:
        logger.info(f"   Theme: {query.theme}")
    return state


def _fall_back(state: SearchState, step: str, reason: str) -> SearchState:
    """Synthetic result with the degraded-mode notice."""
    state.add_error(step, reason)
    state.advance(SearchStage.falling_back)
    logger.warning(f"   ⚠️ Live data unavailable ({step}): {reason}")
    logger.info("   Using synthetic portfolio data")

    result = with_degraded_notice(generate_synthetic_result(state.query))
    state.outcome = LiveFailure(result=result, reason=reason)
    state.advance(SearchStage.done)
    return state


class PatentSearchService:
    """Resolves raw queries into SearchResults, live when possible."""

    def __init__(
        self,
        config: Optional[ApiConfig] = None,
        *,
        client: Optional[PatentApiClient] = None,
    ):
        self.config = config if config is not None else get_api_config()
        self.client = client or PatentApiClient(self.config)

    async def run(self, state: SearchState) -> SearchState:
        """Run every pipeline step on `state` until it is done."""
        state = step1_classify_query(state)

        if not self.config.is_configured:
            logger.info("   No live backend configured, using synthetic portfolio data")
            state.advance(SearchStage.falling_back)
            state.outcome = Fallback(result=generate_synthetic_result(state.query))
            state.advance(SearchStage.done)
            return state

        # Fetch
        state.advance(SearchStage.fetching)
        logger.info("-" * 40)
        logger.info("📡 [2/3] FETCHING FROM PATENT API")
        logger.info(f"   API: {self.config.base_url} (token: {self.config.masked_token()})")
        try:
            state.payload = await self.client.fetch(state.query)
        except PatentSearchError as e:
            return _fall_back(state, "fetch", f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.exception("   ❌ Unexpected error while fetching")
            return _fall_back(state, "fetch", f"{type(e).__name__}: {e}")

        if state.payload is None:
            return _fall_back(state, "fetch", "Empty response payload")

        # Normalize
        state.advance(SearchStage.normalizing)
        logger.info("-" * 40)
        logger.info("🧮 [3/3] NORMALIZING RESPONSE")
        try:
            result = normalize_response(state.payload, state.query)
        except PatentSearchError as e:
            return _fall_back(state, "normalize", f"{type(e).__name__}: {e}")
        except Exception as e:
            logger.exception("   ❌ Unexpected error while normalizing")
            return _fall_back(state, "normalize", f"{type(e).__name__}: {e}")

        state.outcome = LiveSuccess(result=result)
        state.advance(SearchStage.done)
        logger.info(f"   ✅ Live result: {result.insights.total_patents} patents")
        return state

    async def resolve(self, raw: str, theme: Optional[str] = None) -> SearchOutcome:
        state = await self.run(SearchState(raw_query=raw, theme=theme or None))
        return state.outcome

    async def search(self, raw: str, theme: Optional[str] = None) -> SearchResult:
        """
        Search patents for a company name, ISIN, URL or technology theme.

        Args:
            raw: Free-form search string
            theme: Optional technology theme to narrow the search

        Returns:
            Complete SearchResult (live, or synthetic when live data fails)
        """
        outcome = await self.resolve(raw, theme)
        return outcome.result


async def run_patent_search(
    raw: str,
    theme: Optional[str] = None,
    *,
    config: Optional[ApiConfig] = None,
) -> SearchResult:
    """Module-level shortcut for PatentSearchService(config).search()."""
    return await PatentSearchService(config).search(raw, theme)
