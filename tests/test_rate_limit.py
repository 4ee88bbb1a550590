"""Rate limit 서비스 테스트."""

from __future__ import annotations

from pytest_httpx import HTTPXMock

from ghrest.client import GitHubClient

API = "https://api.github.com"


class TestRateLimit:
    def test_get_unwraps_resources(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{API}/rate_limit",
            json={
                "resources": {
                    "core": {"limit": 5000, "remaining": 4999, "reset": 1372700873, "used": 1},
                    "search": {"limit": 30, "remaining": 18, "reset": 1372697452, "used": 12},
                    "graphql": {"limit": 5000, "remaining": 4993, "reset": 1372700389, "used": 7},
                    "audit_log": {"limit": 1750, "remaining": 1750, "reset": 1372700873, "used": 0},
                },
                "rate": {"limit": 5000, "remaining": 4999, "reset": 1372700873, "used": 1},
            },
        )
        limits = client.rate_limit.get().data
        assert limits.core.remaining == 4999
        assert limits.search.used == 12
        assert limits.audit_log.limit == 1750
        assert limits.core.reset.year == 2013
        assert limits.code_search is None

    def test_empty_resources(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/rate_limit", json={})
        assert client.rate_limit.get().data is None
