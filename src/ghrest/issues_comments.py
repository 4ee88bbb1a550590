"""Issue comments API."""

from __future__ import annotations

from datetime import datetime

from ghrest.codec import ApiModel
from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path
from ghrest.users import User


class IssueComment(ApiModel):
    id: int | None = None
    node_id: str | None = None
    body: str | None = None
    user: User | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    author_association: str | None = None
    url: str | None = None
    html_url: str | None = None
    issue_url: str | None = None


class IssueListCommentsOptions(ListOptions):
    sort: str | None = None  # created | updated
    direction: str | None = None  # asc | desc
    since: datetime | None = None


class IssueCommentsService(Service):
    """이슈 댓글 (client.issues.comments)."""

    def list(
        self,
        owner: str,
        repo: str,
        number: int = 0,
        opts: IssueListCommentsOptions | None = None,
        *,
        timeout: RequestTimeout = None,
    ) -> ApiResponse[list[IssueComment]]:
        """댓글 목록. number가 0이면 리포지토리 전체 이슈의 댓글."""
        if number == 0:
            url = build_path("repos/{owner}/{repo}/issues/comments", owner=owner, repo=repo)
        else:
            url = build_path(
                "repos/{owner}/{repo}/issues/{number}/comments", owner=owner, repo=repo, number=number
            )
        return self._client.call("GET", add_options(url, opts), result_type=list[IssueComment], timeout=timeout)

    def get(
        self, owner: str, repo: str, comment_id: int, *, timeout: RequestTimeout = None
    ) -> ApiResponse[IssueComment]:
        url = build_path("repos/{owner}/{repo}/issues/comments/{id}", owner=owner, repo=repo, id=comment_id)
        return self._client.call("GET", url, result_type=IssueComment, timeout=timeout)

    def create(
        self, owner: str, repo: str, number: int, comment: IssueComment, *, timeout: RequestTimeout = None
    ) -> ApiResponse[IssueComment]:
        url = build_path("repos/{owner}/{repo}/issues/{number}/comments", owner=owner, repo=repo, number=number)
        return self._client.call("POST", url, comment, result_type=IssueComment, timeout=timeout)

    def edit(
        self, owner: str, repo: str, comment_id: int, comment: IssueComment, *, timeout: RequestTimeout = None
    ) -> ApiResponse[IssueComment]:
        url = build_path("repos/{owner}/{repo}/issues/comments/{id}", owner=owner, repo=repo, id=comment_id)
        return self._client.call("PATCH", url, comment, result_type=IssueComment, timeout=timeout)

    def delete(self, owner: str, repo: str, comment_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = build_path("repos/{owner}/{repo}/issues/comments/{id}", owner=owner, repo=repo, id=comment_id)
        return self._client.call("DELETE", url, timeout=timeout)
