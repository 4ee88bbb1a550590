"""Issue labels API (리포지토리 라벨 관리)."""

from __future__ import annotations

from ghrest.codec import ApiModel
from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path


class Label(ApiModel):
    id: int | None = None
    url: str | None = None
    name: str | None = None
    color: str | None = None  # "#" 없는 6자리 hex
    description: str | None = None
    default: bool | None = None
    node_id: str | None = None


class IssueLabelsService(Service):
    """리포지토리 라벨 CRUD (client.issues.labels)."""

    def list(
        self, owner: str, repo: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Label]]:
        url = add_options(build_path("repos/{owner}/{repo}/labels", owner=owner, repo=repo), opts)
        return self._client.call("GET", url, result_type=list[Label], timeout=timeout)

    def get(self, owner: str, repo: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[Label]:
        url = build_path("repos/{owner}/{repo}/labels/{name}", owner=owner, repo=repo, name=name)
        return self._client.call("GET", url, result_type=Label, timeout=timeout)

    def create(self, owner: str, repo: str, label: Label, *, timeout: RequestTimeout = None) -> ApiResponse[Label]:
        url = build_path("repos/{owner}/{repo}/labels", owner=owner, repo=repo)
        return self._client.call("POST", url, label, result_type=Label, timeout=timeout)

    def edit(
        self, owner: str, repo: str, name: str, label: Label, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Label]:
        """라벨 수정. label.name을 설정하면 이름이 바뀐다."""
        url = build_path("repos/{owner}/{repo}/labels/{name}", owner=owner, repo=repo, name=name)
        return self._client.call("PATCH", url, label, result_type=Label, timeout=timeout)

    def delete(self, owner: str, repo: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = build_path("repos/{owner}/{repo}/labels/{name}", owner=owner, repo=repo, name=name)
        return self._client.call("DELETE", url, timeout=timeout)
