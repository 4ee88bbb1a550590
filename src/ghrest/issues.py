"""Issues API.

GitHub은 PR도 이슈로 취급한다. pull_request가 채워져 있으면 PR이다.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from pydantic import Field

from ghrest.codec import ApiModel
from ghrest.issues_comments import IssueCommentsService
from ghrest.issues_labels import IssueLabelsService, Label
from ghrest.query import ListOptions, add_options
from ghrest.repos import Repository
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path
from ghrest.users import User

if TYPE_CHECKING:
    from ghrest.client import GitHubClient


class Milestone(ApiModel):
    url: str | None = None
    html_url: str | None = None
    labels_url: str | None = None
    id: int | None = None
    number: int | None = None
    state: str | None = None  # open | closed
    title: str | None = None
    description: str | None = None
    creator: User | None = None
    open_issues: int | None = None
    closed_issues: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_at: datetime | None = None
    due_on: datetime | None = None
    node_id: str | None = None


class PullRequestLinks(ApiModel):
    url: str | None = None
    html_url: str | None = None
    diff_url: str | None = None
    patch_url: str | None = None
    merged_at: datetime | None = None


class Reactions(ApiModel):
    total_count: int | None = None
    url: str | None = None
    plus_one: int | None = Field(None, alias="+1")
    minus_one: int | None = Field(None, alias="-1")
    laugh: int | None = None
    confused: int | None = None
    heart: int | None = None
    hooray: int | None = None
    rocket: int | None = None
    eyes: int | None = None


class Issue(ApiModel):
    """이슈 (또는 PR)."""

    id: int | None = None
    number: int | None = None
    state: str | None = None  # open | closed
    state_reason: str | None = None  # completed | not_planned | reopened
    locked: bool | None = None
    title: str | None = None
    body: str | None = None
    author_association: str | None = None
    user: User | None = None
    labels: list[Label] | None = None
    assignee: User | None = None
    comments: int | None = None
    closed_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    closed_by: User | None = None
    url: str | None = None
    html_url: str | None = None
    comments_url: str | None = None
    events_url: str | None = None
    labels_url: str | None = None
    repository_url: str | None = None
    milestone: Milestone | None = None
    pull_request: PullRequestLinks | None = None
    repository: Repository | None = None
    reactions: Reactions | None = None
    assignees: list[User] | None = None
    node_id: str | None = None
    draft: bool | None = None
    active_lock_reason: str | None = None

    def is_pull_request(self) -> bool:
        return self.pull_request is not None


class IssueRequest(ApiModel):
    """이슈 생성/수정 요청 본문.

    labels/assignees에 []를 설정하면 전부 지운다. milestone을 None으로 설정하면 마일스톤을 뗀다.
    """

    title: str | None = None
    body: str | None = None
    labels: list[str] | None = None
    assignee: str | None = None
    state: str | None = None
    state_reason: str | None = None
    milestone: int | None = None
    assignees: list[str] | None = None
    type: str | None = None


class LockIssueOptions(ApiModel):
    lock_reason: str | None = None  # off-topic | too heated | resolved | spam


class IssueListOptions(ListOptions):
    filter: str | None = None  # assigned | created | mentioned | subscribed | all
    state: str | None = None  # open | closed | all
    labels: list[str] | None = None
    sort: str | None = None  # created | updated | comments
    direction: str | None = None  # asc | desc
    since: datetime | None = None


class IssueListByRepoOptions(ListOptions):
    milestone: str | None = None  # 번호, "none", "*"
    state: str | None = None
    assignee: str | None = None
    creator: str | None = None
    mentioned: str | None = None
    labels: list[str] | None = None
    sort: str | None = None
    direction: str | None = None
    since: datetime | None = None
    type: str | None = None


class IssuesService(Service):
    """이슈 조회/생성/수정/잠금. 하위 서비스: comments, labels."""

    def __init__(self, client: GitHubClient) -> None:
        super().__init__(client)
        self.comments = IssueCommentsService(client)
        self.labels = IssueLabelsService(client)

    def list(
        self, all_repos: bool, opts: IssueListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Issue]]:
        """인증된 사용자에게 할당된 이슈 목록.

        all_repos가 True면 소유/멤버/조직 리포지토리 전체 (GET /issues),
        False면 소유/멤버 리포지토리만 (GET /user/issues).
        """
        url = "issues" if all_repos else "user/issues"
        return self._client.call("GET", add_options(url, opts), result_type=list[Issue], timeout=timeout)

    def list_by_org(
        self, org: str, opts: IssueListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Issue]]:
        url = add_options(build_path("orgs/{org}/issues", org=org), opts)
        return self._client.call("GET", url, result_type=list[Issue], timeout=timeout)

    def list_by_repo(
        self, owner: str, repo: str, opts: IssueListByRepoOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Issue]]:
        url = add_options(build_path("repos/{owner}/{repo}/issues", owner=owner, repo=repo), opts)
        return self._client.call("GET", url, result_type=list[Issue], timeout=timeout)

    def get(self, owner: str, repo: str, number: int, *, timeout: RequestTimeout = None) -> ApiResponse[Issue]:
        url = build_path("repos/{owner}/{repo}/issues/{number}", owner=owner, repo=repo, number=number)
        return self._client.call("GET", url, result_type=Issue, timeout=timeout)

    def create(
        self, owner: str, repo: str, issue: IssueRequest, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Issue]:
        url = build_path("repos/{owner}/{repo}/issues", owner=owner, repo=repo)
        return self._client.call("POST", url, issue, result_type=Issue, timeout=timeout)

    def edit(
        self, owner: str, repo: str, number: int, issue: IssueRequest, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Issue]:
        url = build_path("repos/{owner}/{repo}/issues/{number}", owner=owner, repo=repo, number=number)
        return self._client.call("PATCH", url, issue, result_type=Issue, timeout=timeout)

    def lock(
        self,
        owner: str,
        repo: str,
        number: int,
        opts: LockIssueOptions | None = None,
        *,
        timeout: RequestTimeout = None,
    ) -> ApiResponse[None]:
        url = build_path("repos/{owner}/{repo}/issues/{number}/lock", owner=owner, repo=repo, number=number)
        return self._client.call("PUT", url, opts, timeout=timeout)

    def unlock(self, owner: str, repo: str, number: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = build_path("repos/{owner}/{repo}/issues/{number}/lock", owner=owner, repo=repo, number=number)
        return self._client.call("DELETE", url, timeout=timeout)
