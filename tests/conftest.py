"""
Shared fixtures for the patent insights tests
"""
import httpx
import pytest

from patent_insights.config import ApiConfig
from patent_insights.pipelines.patent_search import PatentSearchService
from patent_insights.services.patent_api import PatentApiClient

TEST_BASE_URL = "https://api.patents.test/v1"
TEST_TOKEN = "test-token-1234567890abcdef"


@pytest.fixture
def api_config():
    return ApiConfig(base_url=TEST_BASE_URL, bearer_token=TEST_TOKEN)


@pytest.fixture
def make_client(api_config):
    """Build a PatentApiClient whose requests go to `handler`."""
    def _make(handler, config=None):
        return PatentApiClient(config or api_config, transport=httpx.MockTransport(handler))
    return _make


@pytest.fixture
def make_service(api_config, make_client):
    """Build a PatentSearchService backed by a mocked transport."""
    def _make(handler, config=None):
        config = config or api_config
        return PatentSearchService(config, client=make_client(handler, config))
    return _make


@pytest.fixture
def sample_payload():
    """Payload using a mix of primary and alias field names."""
    return {
        "patents": [
            {
                "id": "US11000001",
                "title": "Battery thermal management",
                "assignee": "Tesla Inc.",
                "publication_date": "2023-05-01",
                "application_date": "2021-02-11",
                "patent_number": "US11000001",
                "abstract": "Cooling loop for battery packs.",
                "claims_count": 20,
                "citations_count": 7,
                "family_size": 3,
                "technology_areas": ["Energy", "Automotive"],
            },
            {
                "patent_id": "US11000002",
                "title": "Cell chemistry",
                "owner": "Tesla Inc.",
                "pub_date": "2022-11-15",
                "app_date": "2020-08-30",
                "number": "US11000002",
                "description": "Electrolyte additive.",
            },
        ],
        "activity_timeline": [
            {"name": "2022", "value": 1},
            {"label": "2023", "count": 1},
        ],
        "technology_distribution": [
            {"category": "Energy", "amount": 2},
            {"name": "Automotive", "value": 1},
        ],
        "infringement_risk": [{"name": "Cleared", "value": 90}],
        "summary": "Two Tesla battery patents found.",
    }
