"""Rate limit API.

GET /rate_limit 호출 자체는 rate limit에 계산되지 않는다.
"""

from __future__ import annotations

from ghrest.codec import ApiModel
from ghrest.response import ApiResponse, Rate
from ghrest.service import RequestTimeout, Service


class RateLimits(ApiModel):
    """리소스별 rate limit 상태."""

    core: Rate | None = None
    search: Rate | None = None
    graphql: Rate | None = None
    integration_manifest: Rate | None = None
    source_import: Rate | None = None
    code_scanning_upload: Rate | None = None
    actions_runner_registration: Rate | None = None
    scim: Rate | None = None
    dependency_snapshots: Rate | None = None
    code_search: Rate | None = None
    audit_log: Rate | None = None


class _RateLimitsResponse(ApiModel):
    resources: RateLimits | None = None


class RateLimitService(Service):
    """rate limit 조회 (client.rate_limit)."""

    def get(self, *, timeout: RequestTimeout = None) -> ApiResponse[RateLimits]:
        result = self._client.call("GET", "rate_limit", result_type=_RateLimitsResponse, timeout=timeout)
        if result.data is not None:
            result.data = result.data.resources
        return result
