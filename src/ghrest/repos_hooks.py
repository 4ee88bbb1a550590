"""Repository webhooks API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ghrest.codec import ApiModel
from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path


class HookConfig(ApiModel):
    """webhook 전송 설정.

    secret은 쓰기 전용이라 조회 응답에는 "********"로 내려오거나 빠진다.
    insecure_ssl은 "0" / "1" 문자열이다.
    """

    content_type: str | None = None  # json | form
    insecure_ssl: str | None = None
    url: str | None = None
    secret: str | None = None


class Hook(ApiModel):
    """리포지토리/조직 webhook."""

    created_at: datetime | None = None
    updated_at: datetime | None = None
    url: str | None = None
    id: int | None = None
    type: str | None = None
    name: str | None = None
    test_url: str | None = None
    ping_url: str | None = None
    last_response: dict[str, Any] | None = None
    config: HookConfig | None = None
    events: list[str] | None = None
    active: bool | None = None


class RepositoryHooksService(Service):
    """리포지토리 webhook CRUD (client.repositories.hooks)."""

    def _path(self, owner: str, repo: str, suffix: str = "", **params: object) -> str:
        return build_path("repos/{owner}/{repo}/hooks" + suffix, owner=owner, repo=repo, **params)

    def list(
        self, owner: str, repo: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Hook]]:
        url = add_options(self._path(owner, repo), opts)
        return self._client.call("GET", url, result_type=list[Hook], timeout=timeout)

    def get(self, owner: str, repo: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[Hook]:
        return self._client.call("GET", self._path(owner, repo, "/{id}", id=hook_id), result_type=Hook, timeout=timeout)

    def create(self, owner: str, repo: str, hook: Hook, *, timeout: RequestTimeout = None) -> ApiResponse[Hook]:
        """webhook 생성. name을 지정하지 않으면 "web"으로 보낸다."""
        if "name" not in hook.model_fields_set:
            hook = hook.model_copy(update={"name": "web"})
        return self._client.call("POST", self._path(owner, repo), hook, result_type=Hook, timeout=timeout)

    def edit(
        self, owner: str, repo: str, hook_id: int, hook: Hook, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Hook]:
        return self._client.call(
            "PATCH", self._path(owner, repo, "/{id}", id=hook_id), hook, result_type=Hook, timeout=timeout
        )

    def delete(self, owner: str, repo: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call("DELETE", self._path(owner, repo, "/{id}", id=hook_id), timeout=timeout)

    def ping(self, owner: str, repo: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        """ping 이벤트 전송."""
        return self._client.call("POST", self._path(owner, repo, "/{id}/pings", id=hook_id), timeout=timeout)

    def test(self, owner: str, repo: str, hook_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        """최신 push로 push 이벤트를 다시 보낸다."""
        return self._client.call("POST", self._path(owner, repo, "/{id}/tests", id=hook_id), timeout=timeout)

    def get_configuration(
        self, owner: str, repo: str, hook_id: int, *, timeout: RequestTimeout = None
    ) -> ApiResponse[HookConfig]:
        url = self._path(owner, repo, "/{id}/config", id=hook_id)
        return self._client.call("GET", url, result_type=HookConfig, timeout=timeout)

    def edit_configuration(
        self, owner: str, repo: str, hook_id: int, config: HookConfig, *, timeout: RequestTimeout = None
    ) -> ApiResponse[HookConfig]:
        url = self._path(owner, repo, "/{id}/config", id=hook_id)
        return self._client.call("PATCH", url, config, result_type=HookConfig, timeout=timeout)
