"""Organization rulesets API."""

from __future__ import annotations

from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.rules import Ruleset
from ghrest.service import RequestTimeout, Service, build_path


class OrganizationRulesetsService(Service):
    """조직 ruleset (client.organizations.rulesets)."""

    def list(
        self, org: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Ruleset]]:
        url = add_options(build_path("orgs/{org}/rulesets", org=org), opts)
        return self._client.call("GET", url, result_type=list[Ruleset], timeout=timeout)

    def create(self, org: str, ruleset: Ruleset, *, timeout: RequestTimeout = None) -> ApiResponse[Ruleset]:
        return self._client.call(
            "POST", build_path("orgs/{org}/rulesets", org=org), ruleset, result_type=Ruleset, timeout=timeout
        )

    def get(self, org: str, ruleset_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[Ruleset]:
        url = build_path("orgs/{org}/rulesets/{id}", org=org, id=ruleset_id)
        return self._client.call("GET", url, result_type=Ruleset, timeout=timeout)

    def update(
        self, org: str, ruleset_id: int, ruleset: Ruleset, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Ruleset]:
        url = build_path("orgs/{org}/rulesets/{id}", org=org, id=ruleset_id)
        return self._client.call("PUT", url, ruleset, result_type=Ruleset, timeout=timeout)

    def delete(self, org: str, ruleset_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call(
            "DELETE", build_path("orgs/{org}/rulesets/{id}", org=org, id=ruleset_id), timeout=timeout
        )
