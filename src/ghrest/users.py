"""Users API."""

from __future__ import annotations

from datetime import datetime

from ghrest.codec import ApiModel
from ghrest.query import ListSinceOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path


class Plan(ApiModel):
    name: str | None = None
    space: int | None = None
    collaborators: int | None = None
    private_repos: int | None = None
    filled_seats: int | None = None
    seats: int | None = None


class User(ApiModel):
    """GitHub 사용자 (또는 조직 계정의 요약 정보)."""

    login: str | None = None
    id: int | None = None
    node_id: str | None = None
    avatar_url: str | None = None
    html_url: str | None = None
    gravatar_id: str | None = None
    name: str | None = None
    company: str | None = None
    blog: str | None = None
    location: str | None = None
    email: str | None = None
    hireable: bool | None = None
    bio: str | None = None
    twitter_username: str | None = None
    public_repos: int | None = None
    public_gists: int | None = None
    followers: int | None = None
    following: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    suspended_at: datetime | None = None
    type: str | None = None
    site_admin: bool | None = None
    total_private_repos: int | None = None
    owned_private_repos: int | None = None
    private_gists: int | None = None
    disk_usage: int | None = None
    collaborators: int | None = None
    two_factor_authentication: bool | None = None
    plan: Plan | None = None
    url: str | None = None
    repos_url: str | None = None
    # 리포지토리 collaborator 조회 시에만 채워진다
    permissions: dict[str, bool] | None = None
    role_name: str | None = None


class UserListOptions(ListSinceOptions):
    """since: 이 ID 이후의 사용자."""


class UsersService(Service):
    """사용자 조회/수정."""

    def get(self, user: str = "", *, timeout: RequestTimeout = None) -> ApiResponse[User]:
        """사용자 조회. user가 비어 있으면 인증된 사용자 (GET /user)."""
        url = build_path("users/{user}", user=user) if user else "user"
        return self._client.call("GET", url, result_type=User, timeout=timeout)

    def get_by_id(self, user_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[User]:
        return self._client.call("GET", build_path("user/{id}", id=user_id), result_type=User, timeout=timeout)

    def edit(self, user: User, *, timeout: RequestTimeout = None) -> ApiResponse[User]:
        """인증된 사용자 프로필 수정 (PATCH /user)."""
        return self._client.call("PATCH", "user", user, result_type=User, timeout=timeout)

    def list_all(
        self, opts: UserListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[User]]:
        """전체 사용자 목록 (가입 순). pagination은 since + Link 헤더."""
        return self._client.call("GET", add_options("users", opts), result_type=list[User], timeout=timeout)
