"""
Tests for the search pipeline and its fallback behaviour
"""
import httpx
import pytest

from patent_insights.config import ApiConfig
from patent_insights.models.patent_insights import QueryType
from patent_insights.pipelines.patent_search import (
    DEGRADED_NOTICE,
    PatentSearchService,
    run_patent_search,
)
from patent_insights.pipelines.search_state import (
    Fallback,
    LiveFailure,
    LiveSuccess,
    SearchStage,
    SearchState,
)
from patent_insights.services.patent_api import PatentApiClient

# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio

NOTICE_PREFIX = "API connection issue detected."


def _refuse(request):
    raise httpx.ConnectError("connection refused", request=request)


async def test_unreachable_endpoint_falls_back_with_notice(make_service):
    """Test unreachable API gives 45 synthetic records and a notice"""
    outcome = await make_service(_refuse).resolve("Tesla Inc.")

    assert isinstance(outcome, LiveFailure)
    result = outcome.result
    assert len(result.patents) == 45
    assert result.insights.total_patents == 45
    assert result.summary.startswith(NOTICE_PREFIX)
    assert DEGRADED_NOTICE.format(value="Tesla Inc.") in result.summary
    assert "NetworkError" in outcome.reason


async def test_search_returns_result_on_failure(make_service):
    """Test search() itself never raises"""
    result = await make_service(_refuse).search("US0378331005")

    assert result.query.type == QueryType.isin
    assert result.summary.startswith(NOTICE_PREFIX)


@pytest.mark.parametrize("response", [
    httpx.Response(500, text="boom"),
    httpx.Response(404, json={"detail": "not found"}),
    httpx.Response(200, text="not json"),
    httpx.Response(200, content=b"null"),
    httpx.Response(200, json=[1, 2, 3]),
    httpx.Response(200, json={"patents": 17}),
])
async def test_failures_fall_back(make_service, response):
    """Test HTTP, parse, empty and unusable payloads all degrade"""
    outcome = await make_service(lambda request: response).resolve("artificial intelligence")

    assert isinstance(outcome, LiveFailure)
    assert len(outcome.result.patents) == 45
    assert outcome.result.summary.startswith(NOTICE_PREFIX)


async def test_empty_object_is_live_result(make_service):
    """Test {} normalizes to an empty live result"""
    outcome = await make_service(lambda request: httpx.Response(200, json={})).resolve("quantum")

    assert isinstance(outcome, LiveSuccess)
    assert outcome.result.patents == []
    assert outcome.result.insights.total_patents == 0
    assert not outcome.result.summary.startswith(NOTICE_PREFIX)


async def test_live_success(make_service, sample_payload):
    """Test a good payload is returned normalized and unchanged"""
    outcome = await make_service(lambda request: httpx.Response(200, json=sample_payload)).resolve(
        "Tesla Inc.", theme="batteries"
    )

    assert isinstance(outcome, LiveSuccess)
    result = outcome.result
    assert result.query.type == QueryType.company
    assert result.query.theme == "batteries"
    assert [p.id for p in result.patents] == ["US11000001", "US11000002"]
    assert result.summary == "Two Tesla battery patents found."


async def test_theme_forwarded_to_api(make_service):
    """Test the caller's theme reaches the request"""
    params = {}

    def handler(request):
        params.update(request.url.params)
        return httpx.Response(200, json={})

    await make_service(handler).search("https://apple.com", theme="wearables")

    assert params == {"url": "https://apple.com", "theme": "wearables"}


async def test_blank_theme_ignored(make_service):
    """Test an empty theme is treated as absent"""
    result = await make_service(lambda request: httpx.Response(200, json={})).search("Tesla Inc.", theme="")

    assert result.query.theme is None


async def test_not_configured_uses_plain_fallback():
    """Test no token means synthetic data without a notice and no request"""
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    config = ApiConfig(base_url="https://api.patents.test/v1", bearer_token="")
    service = PatentSearchService(config, client=PatentApiClient(config, transport=httpx.MockTransport(handler)))

    outcome = await service.resolve("Tesla Inc.")

    assert isinstance(outcome, Fallback)
    assert calls == []
    assert len(outcome.result.patents) == 45
    assert outcome.result.summary.startswith("Comprehensive patent analysis")


async def test_unexpected_client_error_falls_back(api_config):
    """Test errors outside the taxonomy are still contained"""
    class BrokenClient:
        async def fetch(self, query):
            raise RuntimeError("client bug")

    outcome = await PatentSearchService(api_config, client=BrokenClient()).resolve("Tesla Inc.")

    assert isinstance(outcome, LiveFailure)
    assert "RuntimeError" in outcome.reason


async def test_success_stage_history(make_service):
    """Test stage machine on the success path"""
    service = make_service(lambda request: httpx.Response(200, json={}))

    state = await service.run(SearchState(raw_query="Tesla Inc."))

    assert state.stage_history == [
        SearchStage.classifying,
        SearchStage.fetching,
        SearchStage.normalizing,
        SearchStage.done,
    ]
    assert state.errors == []
    assert state.completed_at is not None


async def test_fetch_failure_stage_history(make_service):
    """Test stage machine when the fetch fails"""
    state = await make_service(_refuse).run(SearchState(raw_query="Tesla Inc."))

    assert state.stage_history == [
        SearchStage.classifying,
        SearchStage.fetching,
        SearchStage.falling_back,
        SearchStage.done,
    ]
    assert state.errors[0]["step"] == "fetch"


async def test_normalize_failure_stage_history(make_service):
    """Test stage machine when normalization fails"""
    service = make_service(lambda request: httpx.Response(200, json=["not", "an", "object"]))

    state = await service.run(SearchState(raw_query="Tesla Inc."))

    assert state.stage_history == [
        SearchStage.classifying,
        SearchStage.fetching,
        SearchStage.normalizing,
        SearchStage.falling_back,
        SearchStage.done,
    ]
    assert state.errors[0]["step"] == "normalize"
    assert "NormalizationError" in state.errors[0]["error"]


async def test_done_is_terminal():
    """Test no transition leaves the done stage"""
    state = SearchState(raw_query="x")
    state.advance(SearchStage.falling_back)
    state.advance(SearchStage.done)

    with pytest.raises(RuntimeError):
        state.advance(SearchStage.fetching)


async def test_fallback_matches_direct_generation(make_service):
    """Test degraded results carry the same synthetic data"""
    first = await make_service(_refuse).search("Tesla Inc.")
    second = await make_service(lambda request: httpx.Response(503)).search("Tesla Inc.")

    assert first.patents == second.patents
    assert first.insights == second.insights


async def test_run_patent_search_without_backend():
    """Test module-level entry point with an unconfigured backend"""
    result = await run_patent_search("artificial intelligence", config=ApiConfig(bearer_token=""))

    assert result.query.type == QueryType.theme
    assert result.insights.total_patents == 45


async def test_oversized_number_keeps_live_result(make_service):
    """Test one unrepresentable number does not discard the live payload"""
    payload = {
        "patents": [{"id": "a", "claims_count": 10 ** 400}],
        "citation_impact": [{"name": "n", "value": 10 ** 400}],
    }

    outcome = await make_service(lambda request: httpx.Response(200, json=payload)).resolve("Tesla Inc.")

    assert isinstance(outcome, LiveSuccess)
    assert outcome.result.patents[0].claims == 0
    assert outcome.result.insights.citation_impact[0].value == 0
