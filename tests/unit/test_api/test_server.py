"""Tests for the FastAPI search server."""

import pytest
from fastapi.testclient import TestClient

from src.api.server import create_app
from src.orchestration.search_aggregator import SearchAggregator
from src.services.providers.mock import MockSearchProvider, expected_count


@pytest.fixture
def provider():
    return MockSearchProvider()


@pytest.fixture
def client(provider):
    """Create test client backed by the offline provider."""
    return TestClient(create_app(SearchAggregator(provider=provider)))


class TestSearchEndpoint:
    """Tests for POST /api/search."""

    def test_returns_totals_per_engine(self, client):
        response = client.post(
            "/api/search",
            json={"query": "hello world", "searchEngines": ["google", "Bing"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["query"] == "hello world"
        assert data["searchEngines"] == ["google", "Bing"]
        assert data["engineTotals"] == {
            "google": expected_count("hello", "google")
            + expected_count("world", "google"),
            "Bing": expected_count("hello", "bing") + expected_count("world", "bing"),
        }

    def test_accepts_snake_case_field(self, client):
        response = client.post(
            "/api/search", json={"query": "test", "search_engines": ["yandex"]}
        )

        assert response.status_code == 200
        assert response.json()["engineTotals"] == {
            "yandex": expected_count("test", "yandex")
        }

    def test_failed_word_contributes_zero(self):
        provider = MockSearchProvider(failing_words=["broken"])
        client = TestClient(create_app(SearchAggregator(provider=provider)))

        response = client.post(
            "/api/search",
            json={"query": "broken fine", "searchEngines": ["google"]},
        )

        assert response.status_code == 200
        assert response.json()["engineTotals"] == {
            "google": expected_count("fine", "google")
        }

    @pytest.mark.parametrize(
        "body,message",
        [
            ({"query": "", "searchEngines": ["google"]}, "cannot be empty"),
            ({"searchEngines": ["google"]}, "cannot be empty"),
            ({"query": "drop table", "searchEngines": ["google"]}, "Invalid characters"),
            ({"query": "hello", "searchEngines": []}, "At least one"),
            ({"query": "hello", "searchEngines": ["altavista"]}, "altavista"),
        ],
    )
    def test_rejects_invalid_requests(self, client, provider, body, message):
        response = client.post("/api/search", json=body)

        assert response.status_code == 400
        assert message in response.json()["message"]
        assert provider.calls == []


class TestInfoEndpoints:
    """Tests for the read-only endpoints."""

    def test_engines(self, client):
        response = client.get("/api/search/engines")

        assert response.status_code == 200
        assert response.json() == [
            "Google",
            "Bing",
            "Yahoo",
            "DuckDuckGo",
            "Baidu",
            "Yandex",
        ]

    def test_live(self, client):
        response = client.get("/live")

        assert response.status_code == 200
        assert response.json()["alive"] is True

    def test_metrics(self, client):
        client.post("/api/search", json={"query": "a", "searchEngines": ["google"]})

        response = client.get("/metrics")

        assert response.status_code == 200
        assert "hitcount_searches_total" in response.text
        assert response.headers["content-type"].startswith("text/plain")

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["backend"] == "mock"
        assert data["endpoints"]["search"] == "/api/search"
