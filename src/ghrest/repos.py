"""Repositories API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ghrest.codec import ApiModel
from ghrest.orgs import Organization
from ghrest.query import ListOptions, add_options
from ghrest.repos_hooks import RepositoryHooksService
from ghrest.repos_rules import RepositoryRulesetsService
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path
from ghrest.users import User

if TYPE_CHECKING:
    from ghrest.client import GitHubClient


class RepositoryPermissions(ApiModel):
    admin: bool | None = None
    maintain: bool | None = None
    push: bool | None = None
    triage: bool | None = None
    pull: bool | None = None


class License(ApiModel):
    key: str | None = None
    name: str | None = None
    spdx_id: str | None = None
    url: str | None = None
    node_id: str | None = None


class Repository(ApiModel):
    """GitHub 리포지토리.

    생성/수정 요청에도 같은 모델을 쓴다. 설정한 필드만 전송된다.
    """

    id: int | None = None
    node_id: str | None = None
    owner: User | None = None
    name: str | None = None
    full_name: str | None = None
    description: str | None = None
    homepage: str | None = None
    default_branch: str | None = None
    created_at: datetime | None = None
    pushed_at: datetime | None = None
    updated_at: datetime | None = None
    html_url: str | None = None
    clone_url: str | None = None
    git_url: str | None = None
    ssh_url: str | None = None
    svn_url: str | None = None
    language: str | None = None
    fork: bool | None = None
    forks_count: int | None = None
    network_count: int | None = None
    open_issues_count: int | None = None
    stargazers_count: int | None = None
    subscribers_count: int | None = None
    watchers_count: int | None = None
    size: int | None = None
    auto_init: bool | None = None
    parent: Repository | None = None
    source: Repository | None = None
    template_repository: Repository | None = None
    organization: Organization | None = None
    permissions: RepositoryPermissions | None = None
    allow_rebase_merge: bool | None = None
    allow_update_branch: bool | None = None
    allow_squash_merge: bool | None = None
    allow_merge_commit: bool | None = None
    allow_auto_merge: bool | None = None
    allow_forking: bool | None = None
    web_commit_signoff_required: bool | None = None
    delete_branch_on_merge: bool | None = None
    use_squash_pr_title_as_default: bool | None = None
    squash_merge_commit_title: str | None = None  # PR_TITLE | COMMIT_OR_PR_TITLE
    squash_merge_commit_message: str | None = None  # PR_BODY | COMMIT_MESSAGES | BLANK
    merge_commit_title: str | None = None  # PR_TITLE | MERGE_MESSAGE
    merge_commit_message: str | None = None  # PR_BODY | PR_TITLE | BLANK
    topics: list[str] | None = None
    archived: bool | None = None
    disabled: bool | None = None
    license: License | None = None
    private: bool | None = None
    has_issues: bool | None = None
    has_wiki: bool | None = None
    has_pages: bool | None = None
    has_projects: bool | None = None
    has_downloads: bool | None = None
    has_discussions: bool | None = None
    is_template: bool | None = None
    license_template: str | None = None
    gitignore_template: str | None = None
    team_id: int | None = None  # 조직 리포지토리 생성 시에만
    visibility: str | None = None  # public | private | internal
    url: str | None = None
    hooks_url: str | None = None
    issues_url: str | None = None


class RepositoryListByUserOptions(ListOptions):
    type: str | None = None  # all | owner | member
    sort: str | None = None  # created | updated | pushed | full_name
    direction: str | None = None  # asc | desc


class RepositoryListByOrgOptions(ListOptions):
    type: str | None = None  # all | public | private | forks | sources | member
    sort: str | None = None
    direction: str | None = None


class RepositoriesService(Service):
    """리포지토리 조회/생성/수정/삭제. 하위 서비스: hooks, rulesets."""

    def __init__(self, client: GitHubClient) -> None:
        super().__init__(client)
        self.hooks = RepositoryHooksService(client)
        self.rulesets = RepositoryRulesetsService(client)

    def list_by_user(
        self, user: str, opts: RepositoryListByUserOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Repository]]:
        url = add_options(build_path("users/{user}/repos", user=user), opts)
        return self._client.call("GET", url, result_type=list[Repository], timeout=timeout)

    def list_by_org(
        self, org: str, opts: RepositoryListByOrgOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Repository]]:
        url = add_options(build_path("orgs/{org}/repos", org=org), opts)
        return self._client.call("GET", url, result_type=list[Repository], timeout=timeout)

    def get(self, owner: str, repo: str, *, timeout: RequestTimeout = None) -> ApiResponse[Repository]:
        url = build_path("repos/{owner}/{repo}", owner=owner, repo=repo)
        return self._client.call("GET", url, result_type=Repository, timeout=timeout)

    def get_by_id(self, repo_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[Repository]:
        return self._client.call(
            "GET", build_path("repositories/{id}", id=repo_id), result_type=Repository, timeout=timeout
        )

    def create(self, org: str, repo: Repository, *, timeout: RequestTimeout = None) -> ApiResponse[Repository]:
        """리포지토리 생성. org가 비어 있으면 인증된 사용자 소유로 만든다."""
        url = build_path("orgs/{org}/repos", org=org) if org else "user/repos"
        return self._client.call("POST", url, repo, result_type=Repository, timeout=timeout)

    def edit(
        self, owner: str, repo: str, repository: Repository, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Repository]:
        url = build_path("repos/{owner}/{repo}", owner=owner, repo=repo)
        return self._client.call("PATCH", url, repository, result_type=Repository, timeout=timeout)

    def delete(self, owner: str, repo: str, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call("DELETE", build_path("repos/{owner}/{repo}", owner=owner, repo=repo), timeout=timeout)
