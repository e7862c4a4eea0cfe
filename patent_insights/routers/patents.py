"""
Patents Router - Patent Portfolio Search
patent_insights/routers/patents.py

- GET /search: Classify, fetch and normalize (or synthesize) a patent portfolio
- GET /classify: Classify a raw query without calling the patent API

Connection settings come from the environment; a request may override them
with the X-Patent-Api-Base-Url and Authorization headers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from patent_insights.config import get_api_config
from patent_insights.models.patent_insights import SearchQuery, SearchResult
from patent_insights.pipelines.patent_search import PatentSearchService
from patent_insights.pipelines.query_classifier import classify_query

router = APIRouter(prefix="/api/v1/patents", tags=["patents"])

BEARER_SCHEME = "bearer"


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from a Bearer header; None when there is nothing to override."""
    if not authorization or not authorization.strip():
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != BEARER_SCHEME:
        raise HTTPException(status_code=401, detail="Authorization header must use the Bearer scheme")
    return token.strip() or None


def get_search_service(
    x_patent_api_base_url: Optional[str] = Header(None, description="Overrides PATENT_API_BASE_URL"),
    authorization: Optional[str] = Header(None, description="Bearer token for the patent API"),
) -> PatentSearchService:
    """Search service for one request, with header overrides applied."""
    config = get_api_config().with_overrides(
        base_url=x_patent_api_base_url,
        bearer_token=_bearer_token(authorization),
    )
    return PatentSearchService(config)


def _require_text(q: str) -> str:
    if not q.strip():
        raise HTTPException(status_code=422, detail="Query must not be blank")
    return q


# ============================================
# GET /search - Patent portfolio analytics
# ============================================

@router.get("/search", response_model=SearchResult)
async def search_patents(
    q: str = Query(..., description="Company name, ISIN, URL or technology theme"),
    theme: Optional[str] = Query(None, description="Optional technology theme"),
    service: PatentSearchService = Depends(get_search_service),
):
    """
    Search a patent portfolio and return records, metric series and summary.

    Always answers with a complete result. When the patent API is not
    reachable the result is sample data and the summary says so.
    """
    return await service.search(_require_text(q), theme)


# ============================================
# GET /classify - Query classification only
# ============================================

@router.get("/classify", response_model=SearchQuery)
async def classify(
    q: str = Query(..., description="Raw search input"),
):
    """Return how a raw query would be classified (company, isin, url or theme)."""
    return classify_query(_require_text(q))
