"""
Tests for API configuration
"""
import pytest

from patent_insights.config import DEFAULT_BASE_URL, ApiConfig, get_api_config


def test_defaults():
    """Test default base URL and unconfigured token"""
    config = ApiConfig()

    assert config.base_url == DEFAULT_BASE_URL
    assert config.timeout is None
    assert not config.is_configured


def test_values_trimmed():
    """Test whitespace around URL and token is stripped"""
    config = ApiConfig(base_url="  https://api.example/v1 ", bearer_token="  abcdefghijklmnop \n")

    assert config.base_url == "https://api.example/v1"
    assert config.bearer_token.get_secret_value() == "abcdefghijklmnop"
    assert config.is_configured


def test_blank_token_not_configured():
    """Test whitespace-only token does not count"""
    assert not ApiConfig(bearer_token="   ").is_configured
    assert not ApiConfig(base_url="", bearer_token="abcdefghijklmnop").is_configured


def test_masked_token():
    """Test only a short prefix of the token is exposed"""
    config = ApiConfig(bearer_token="sk-live-0123456789abcdef")

    assert config.masked_token() == "sk-liv..."
    assert "0123456789abcdef" not in config.masked_token()
    assert ApiConfig(bearer_token="short").masked_token() == "***"


def test_token_hidden_in_repr():
    """Test the token never shows in the model repr"""
    config = ApiConfig(bearer_token="sk-live-0123456789abcdef")

    assert "sk-live-0123456789abcdef" not in repr(config)


def test_with_overrides():
    """Test overrides replace only non-empty values"""
    config = ApiConfig(base_url="https://a.example", bearer_token="token-aaaaaaaaaaaa", timeout=5)

    assert config.with_overrides() is config

    updated = config.with_overrides(bearer_token="token-bbbbbbbbbbbb")
    assert updated.base_url == "https://a.example"
    assert updated.bearer_token.get_secret_value() == "token-bbbbbbbbbbbb"
    assert updated.timeout == 5


def test_from_environment(monkeypatch):
    """Test configuration read from environment variables"""
    monkeypatch.setenv("PATENT_API_BASE_URL", "https://env.example/v1")
    monkeypatch.setenv("PATENT_API_BEARER_TOKEN", "env-token-abcdefgh")
    monkeypatch.setenv("PATENT_API_TIMEOUT", "12.5")

    config = get_api_config()

    assert config.base_url == "https://env.example/v1"
    assert config.bearer_token.get_secret_value() == "env-token-abcdefgh"
    assert config.timeout == 12.5


@pytest.mark.parametrize("raw", ["", "  ", "0", "-3"])
def test_timeout_disabled(monkeypatch, raw):
    """Test empty or non-positive timeout means no timeout"""
    monkeypatch.setenv("PATENT_API_TIMEOUT", raw)

    assert get_api_config().timeout is None


def test_invalid_timeout(monkeypatch):
    """Test a non-numeric timeout is reported"""
    monkeypatch.setenv("PATENT_API_TIMEOUT", "soon")

    with pytest.raises(ValueError):
        get_api_config()
