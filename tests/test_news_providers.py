"""
Tests for the NewsData.io and Finnhub.io adapters (httpx MockTransport)
"""
import httpx
import pytest

from finbuddy.domain.errors import ProviderUnavailable
from finbuddy.infrastructure.news.finnhub_adapter import FinnhubProvider
from finbuddy.infrastructure.news.http_utils import (
    epoch_to_iso,
    normalize_timestamp,
    sanitize_url,
)
from finbuddy.infrastructure.news.newsdata_adapter import NewsDataProvider


def mock_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_newsdata_maps_results():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json={
                "status": "success",
                "results": [
                    {
                        "title": "Sensex rises 200 points",
                        "link": "https://et.example/sensex",
                        "pubDate": "2024-03-01 10:15:00",
                        "source_id": "economictimes",
                    },
                    {"title": None, "link": "", "pubDate": None, "source_id": None},
                ],
            },
        )

    drafts = NewsDataProvider("nd-key", client=mock_client(handler)).fetch()

    assert seen["params"]["apikey"] == "nd-key"
    assert seen["params"]["country"] == "in"
    assert seen["params"]["category"] == "business"
    assert seen["params"]["language"] == "en"

    assert drafts[0].headline == "Sensex rises 200 points"
    assert drafts[0].url == "https://et.example/sensex"
    assert drafts[0].published_at == "2024-03-01T10:15:00+00:00"
    assert drafts[0].source == "economictimes"

    assert drafts[1].headline == "No title available"
    assert drafts[1].url is None
    assert drafts[1].source == "NewsData.io"
    assert drafts[1].published_at


def test_newsdata_caps_articles():
    results = [{"title": f"H{i}", "source_id": "x"} for i in range(25)]
    handler = lambda request: httpx.Response(200, json={"status": "success", "results": results})
    assert len(NewsDataProvider("k", client=mock_client(handler)).fetch()) == 10


def test_newsdata_error_status():
    handler = lambda request: httpx.Response(200, json={"status": "error", "message": "bad key"})
    with pytest.raises(ProviderUnavailable, match="bad key"):
        NewsDataProvider("k", client=mock_client(handler)).fetch()


def test_newsdata_http_error():
    handler = lambda request: httpx.Response(500)
    with pytest.raises(ProviderUnavailable, match="500"):
        NewsDataProvider("k", client=mock_client(handler)).fetch()


def test_newsdata_timeout():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    with pytest.raises(ProviderUnavailable, match="timeout"):
        NewsDataProvider("k", client=mock_client(handler)).fetch()


def test_finnhub_maps_results():
    seen = {}

    def handler(request):
        seen["path"] = request.url.path
        seen["params"] = dict(request.url.params)
        return httpx.Response(
            200,
            json=[
                {"headline": "Fed holds rates", "url": "https://f.example/1", "datetime": 1700000000, "source": "Reuters"},
                {"headline": "", "url": "https://f.example/2", "datetime": 1700000001},
                {"headline": "Oil slips", "datetime": 1700000002},
            ],
        )

    drafts = FinnhubProvider("fh-key", client=mock_client(handler)).fetch()

    assert seen["path"] == "/api/v1/news"
    assert seen["params"] == {"category": "general", "token": "fh-key"}
    assert [d.headline for d in drafts] == ["Fed holds rates", "Oil slips"]
    assert drafts[0].published_at == "2023-11-14T22:13:20+00:00"
    assert drafts[0].source == "Reuters"
    assert drafts[1].source == "Finnhub.io"
    assert drafts[1].url is None


def test_finnhub_rejects_non_list():
    handler = lambda request: httpx.Response(200, json={"error": "nope"})
    with pytest.raises(ProviderUnavailable, match="invalid data format"):
        FinnhubProvider("k", client=mock_client(handler)).fetch()


def test_finnhub_non_json_body():
    handler = lambda request: httpx.Response(200, text="<html>oops</html>")
    with pytest.raises(ProviderUnavailable, match="non-JSON"):
        FinnhubProvider("secret", client=mock_client(handler)).fetch()


@pytest.mark.parametrize("key", [None, ""])
def test_missing_key_means_not_configured(key):
    assert NewsDataProvider(key).is_configured() is False
    assert FinnhubProvider(key).is_configured() is False
    with pytest.raises(ProviderUnavailable):
        FinnhubProvider(key).fetch()


def test_sanitize_url_masks_credentials():
    url = "https://finnhub.io/api/v1/news?category=general&token=abc123"
    assert sanitize_url(url) == "https://finnhub.io/api/v1/news?category=general&token=***"
    assert sanitize_url("https://newsdata.io/api/1/news?apikey=xyz&size=10").count("xyz") == 0


def test_timestamp_helpers():
    assert normalize_timestamp("2024-03-01T10:15:00Z") == "2024-03-01T10:15:00Z"
    assert normalize_timestamp("") != ""
    assert epoch_to_iso(0) == "1970-01-01T00:00:00+00:00"
    assert epoch_to_iso("not-a-number").endswith("+00:00")
