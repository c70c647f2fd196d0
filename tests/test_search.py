"""Tests for the skills.sh search client"""

import httpx
import pytest

from skiller.config import SearchConfig
from skiller.errors import SearchError, SearchTimeoutError
from skiller.external import normalize_result, search_skills


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def _answer(payload, status=200):
    def handler(request):
        return httpx.Response(status, json=payload)
    return _client(handler)


class TestSearchSkills:
    def test_request(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        search_skills("pdf tools", limit=5, client=_client(handler))

        request = seen[0]
        assert request.url.host == "skills.sh"
        assert request.url.path == "/api/search"
        assert request.url.params["q"] == "pdf tools"
        assert request.url.params["limit"] == "5"
        assert request.headers["accept"] == "application/json"

    def test_default_limit_from_config(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        config = SearchConfig(url="https://example.test/find", limit=3)
        search_skills("x", config=config, client=_client(handler))
        assert str(seen[0].url).startswith("https://example.test/find?")
        assert seen[0].url.params["limit"] == "3"

    @pytest.mark.parametrize("payload", [
        [{"name": "pdf", "source": "anthropics/skills"}],
        {"results": [{"name": "pdf", "source": "anthropics/skills"}]},
        {"skills": [{"name": "pdf", "source": "anthropics/skills"}]},
    ])
    def test_response_shapes(self, payload):
        [result] = search_skills("pdf", client=_answer(payload))
        assert result.name == "pdf"
        assert result.source == "anthropics/skills"

    def test_unknown_shape_is_empty(self):
        assert search_skills("pdf", client=_answer({"count": 0})) == []

    def test_non_object_items_skipped(self):
        results = search_skills("pdf", client=_answer(["junk", {"name": "pdf"}]))
        assert [r.name for r in results] == ["pdf"]

    def test_http_error_status(self):
        with pytest.raises(SearchError) as exc_info:
            search_skills("pdf", client=_answer({"error": "down"}, status=503))
        assert exc_info.value.status_code == 503
        assert exc_info.value.retryable is True

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(SearchTimeoutError) as exc_info:
            search_skills("pdf", client=_client(handler))
        assert exc_info.value.retryable is True
        assert isinstance(exc_info.value, SearchError)

    def test_connection_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(SearchError, match="Search request failed"):
            search_skills("pdf", client=_client(handler))

    def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        with pytest.raises(SearchError, match="invalid JSON"):
            search_skills("pdf", client=_client(handler))

    def test_passed_client_left_open(self):
        client = _answer([])
        search_skills("pdf", client=client)
        assert not client.is_closed


class TestNormalizeResult:
    def test_full_item(self):
        result = normalize_result({
            "id": "42",
            "name": "pdf",
            "source": "anthropics/skills",
            "description": "Read PDFs",
            "author": "anthropic",
            "tags": ["docs", 1],
            "url": "https://skills.sh/pdf",
        })
        assert result.id == "42"
        assert result.tags == ["docs", "1"]
        assert result.install_source == "anthropics/skills"

    def test_alternative_keys(self):
        assert normalize_result({"slug": "pdf", "repo": "a/b"}).name == "pdf"
        assert normalize_result({"slug": "pdf", "repo": "a/b"}).source == "a/b"
        assert normalize_result({"github": "c/d"}).source == "c/d"

    def test_missing_fields(self):
        result = normalize_result({})
        assert result.name == "unknown"
        assert result.source == ""
        assert result.tags == []
        assert result.install_source == "unknown"
