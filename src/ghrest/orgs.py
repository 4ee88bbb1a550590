"""Organizations API."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from ghrest.codec import ApiModel
from ghrest.orgs_audit_log import AuditLogService
from ghrest.orgs_hooks import OrganizationHooksService
from ghrest.orgs_rules import OrganizationRulesetsService
from ghrest.query import ListOptions, ListSinceOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path
from ghrest.users import Plan

if TYPE_CHECKING:
    from ghrest.client import GitHubClient


class Organization(ApiModel):
    """GitHub 조직."""

    login: str | None = None
    id: int | None = None
    node_id: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    twitter_username: str | None = None
    description: str | None = None
    public_repos: int | None = None
    public_gists: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    total_private_repos: int | None = None
    owned_private_repos: int | None = None
    private_gists: int | None = None
    disk_usage: int | None = None
    collaborators: int | None = None
    billing_email: str | None = None
    type: str | None = None
    plan: Plan | None = None
    two_factor_requirement_enabled: bool | None = None
    is_verified: bool | None = None
    has_organization_projects: bool | None = None
    has_repository_projects: bool | None = None
    default_repository_permission: str | None = None  # read | write | admin | none
    members_can_create_repositories: bool | None = None
    members_can_create_public_repositories: bool | None = None
    members_can_create_private_repositories: bool | None = None
    web_commit_signoff_required: bool | None = None
    url: str | None = None
    events_url: str | None = None
    hooks_url: str | None = None
    issues_url: str | None = None
    members_url: str | None = None
    public_members_url: str | None = None
    repos_url: str | None = None


class OrganizationsListOptions(ListSinceOptions):
    """since: 이 ID 이후의 조직."""


class OrganizationsService(Service):
    """조직 조회/수정. 하위 서비스: audit_log, hooks, rulesets."""

    def __init__(self, client: GitHubClient) -> None:
        super().__init__(client)
        self.audit_log = AuditLogService(client)
        self.hooks = OrganizationHooksService(client)
        self.rulesets = OrganizationRulesetsService(client)

    def list(
        self, user: str = "", opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Organization]]:
        """사용자가 속한 조직 목록. user가 비어 있으면 인증된 사용자 기준."""
        url = build_path("users/{user}/orgs", user=user) if user else "user/orgs"
        return self._client.call("GET", add_options(url, opts), result_type=list[Organization], timeout=timeout)

    def list_all(
        self, opts: OrganizationsListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[Organization]]:
        """전체 조직 목록 (생성 순)."""
        return self._client.call(
            "GET", add_options("organizations", opts), result_type=list[Organization], timeout=timeout
        )

    def get(self, org: str, *, timeout: RequestTimeout = None) -> ApiResponse[Organization]:
        return self._client.call("GET", build_path("orgs/{org}", org=org), result_type=Organization, timeout=timeout)

    def get_by_id(self, org_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[Organization]:
        return self._client.call(
            "GET", build_path("organizations/{id}", id=org_id), result_type=Organization, timeout=timeout
        )

    def edit(
        self, org: str, organization: Organization, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Organization]:
        url = build_path("orgs/{org}", org=org)
        return self._client.call("PATCH", url, organization, result_type=Organization, timeout=timeout)
