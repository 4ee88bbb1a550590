"""Organization webhooks API."""

from __future__ import annotations

from ghrest.errors import InvalidArgumentError
from ghrest.query import ListOptions, add_options
from ghrest.repos_hooks import Hook, HookConfig
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path


class OrganizationHooksService(Service):
    """조직 webhook CRUD (client.organizations.hooks)."""

    def list(
        self, org: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Hook]]:
        url = add_options(build_path("orgs/{org}/hooks", org=org), opts)
        return self._client.call("GET", url, result_type=list[Hook], timeout=timeout)

    def get(self, org: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[Hook]:
        url = build_path("orgs/{org}/hooks/{id}", org=org, id=hook_id)
        return self._client.call("GET", url, result_type=Hook, timeout=timeout)

    def create(self, org: str, hook: Hook, *, timeout: RequestTimeout = None) -> ApiResponse[Hook]:
        """조직 webhook 생성. config.url은 필수, name은 "web"만 허용된다."""
        if hook.config is None or not hook.config.url:
            raise InvalidArgumentError("조직 webhook은 config.url이 필요합니다")
        if "name" not in hook.model_fields_set:
            hook = hook.model_copy(update={"name": "web"})
        return self._client.call(
            "POST", build_path("orgs/{org}/hooks", org=org), hook, result_type=Hook, timeout=timeout
        )

    def edit(self, org: str, hook_id: int, hook: Hook, *, timeout: RequestTimeout = None) -> ApiResponse[Hook]:
        url = build_path("orgs/{org}/hooks/{id}", org=org, id=hook_id)
        return self._client.call("PATCH", url, hook, result_type=Hook, timeout=timeout)

    def delete(self, org: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call("DELETE", build_path("orgs/{org}/hooks/{id}", org=org, id=hook_id), timeout=timeout)

    def ping(self, org: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call(
            "POST", build_path("orgs/{org}/hooks/{id}/pings", org=org, id=hook_id), timeout=timeout
        )

    def get_configuration(self, org: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[HookConfig]:
        url = build_path("orgs/{org}/hooks/{id}/config", org=org, id=hook_id)
        return self._client.call("GET", url, result_type=HookConfig, timeout=timeout)

    def edit_configuration(
        self, org: str, hook_id: int, config: HookConfig, *, timeout: RequestTimeout = None
    ) -> ApiResponse[HookConfig]:
        url = build_path("orgs/{org}/hooks/{id}/config", org=org, id=hook_id)
        return self._client.call("PATCH", url, config, result_type=HookConfig, timeout=timeout)
