"""webhook 이벤트 payload 모델."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from ghrest.codec import ApiModel
from ghrest.issues import Issue
from ghrest.issues_comments import IssueComment
from ghrest.issues_labels import Label
from ghrest.orgs import Organization
from ghrest.repos import Repository
from ghrest.repos_hooks import Hook
from ghrest.rules import Ruleset
from ghrest.users import User


class Installation(ApiModel):
    id: int | None = None
    node_id: str | None = None


# ── ping ──


class PingEvent(ApiModel):
    """webhook 생성 직후 전송되는 ping."""

    zen: str | None = None
    hook_id: int | None = None
    hook: Hook | None = None
    installation: Installation | None = None


# ── push ──


class CommitAuthor(ApiModel):
    name: str | None = None
    email: str | None = None
    username: str | None = None
    date: datetime | None = None


class HeadCommit(ApiModel):
    id: str | None = None
    tree_id: str | None = None
    distinct: bool | None = None
    message: str | None = None
    timestamp: datetime | None = None
    url: str | None = None
    author: CommitAuthor | None = None
    committer: CommitAuthor | None = None
    added: list[str] | None = None
    removed: list[str] | None = None
    modified: list[str] | None = None


class PushEventRepoOwner(ApiModel):
    name: str | None = None
    email: str | None = None
    login: str | None = None
    id: int | None = None


class PushEventRepository(ApiModel):
    """push payload의 repository. created_at/pushed_at이 epoch 초로 오고 organization은 login 문자열이다."""

    id: int | None = None
    node_id: str | None = None
    name: str | None = None
    full_name: str | None = None
    owner: PushEventRepoOwner | None = None
    private: bool | None = None
    description: str | None = None
    fork: bool | None = None
    created_at: datetime | None = None
    pushed_at: datetime | None = None
    updated_at: datetime | None = None
    homepage: str | None = None
    size: int | None = None
    stargazers_count: int | None = None
    watchers_count: int | None = None
    language: str | None = None
    forks_count: int | None = None
    open_issues_count: int | None = None
    default_branch: str | None = None
    master_branch: str | None = None
    organization: str | None = None
    html_url: str | None = None
    url: str | None = None


class PushEvent(ApiModel):
    ref: str | None = None
    before: str | None = None
    after: str | None = None
    created: bool | None = None
    deleted: bool | None = None
    forced: bool | None = None
    base_ref: str | None = None
    compare: str | None = None
    commits: list[HeadCommit] | None = None
    head_commit: HeadCommit | None = None
    repo: PushEventRepository | None = Field(None, alias="repository")
    pusher: CommitAuthor | None = None
    sender: User | None = None
    organization: Organization | None = None
    installation: Installation | None = None


# ── issues / issue_comment ──


class IssuesEvent(ApiModel):
    action: str | None = None  # opened | edited | closed | labeled | ...
    issue: Issue | None = None
    assignee: User | None = None
    label: Label | None = None
    changes: dict[str, Any] | None = None
    repo: Repository | None = Field(None, alias="repository")
    sender: User | None = None
    organization: Organization | None = None
    installation: Installation | None = None


class IssueCommentEvent(ApiModel):
    action: str | None = None  # created | edited | deleted
    issue: Issue | None = None
    comment: IssueComment | None = None
    changes: dict[str, Any] | None = None
    repo: Repository | None = Field(None, alias="repository")
    sender: User | None = None
    organization: Organization | None = None
    installation: Installation | None = None


# ── repository / repository_ruleset / organization ──


class RepositoryEvent(ApiModel):
    action: str | None = None  # created | deleted | archived | renamed | ...
    repo: Repository | None = Field(None, alias="repository")
    changes: dict[str, Any] | None = None
    org: Organization | None = Field(None, alias="organization")
    sender: User | None = None
    installation: Installation | None = None


class RepositoryRulesetEvent(ApiModel):
    action: str | None = None  # created | edited | deleted
    repository_ruleset: Ruleset | None = None
    changes: dict[str, Any] | None = None
    repository: Repository | None = None
    organization: Organization | None = None
    sender: User | None = None
    installation: Installation | None = None


class Membership(ApiModel):
    url: str | None = None
    state: str | None = None
    role: str | None = None
    organization_url: str | None = None
    user: User | None = None


class OrganizationEvent(ApiModel):
    action: str | None = None  # deleted | renamed | member_added | member_removed | member_invited
    invitation: dict[str, Any] | None = None
    membership: Membership | None = None
    organization: Organization | None = None
    sender: User | None = None
    installation: Installation | None = None


EVENT_TYPES: dict[str, type[ApiModel]] = {
    "issue_comment": IssueCommentEvent,
    "issues": IssuesEvent,
    "organization": OrganizationEvent,
    "ping": PingEvent,
    "push": PushEvent,
    "repository": RepositoryEvent,
    "repository_ruleset": RepositoryRulesetEvent,
}
