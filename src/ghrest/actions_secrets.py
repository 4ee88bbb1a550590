"""GitHub Actions secrets API.

secret 값은 호출자가 리포지토리/조직 public key로 미리 암호화(libsodium sealed box)해서
EncryptedSecret.encrypted_value에 base64로 넣어야 한다. 이 모듈은 암호화를 하지 않는다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from ghrest.codec import ApiModel
from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path

SelectedRepoIDs = list[int]


class PublicKey(ApiModel):
    """secret 암호화용 public key.

    key_id는 엔드포인트에 따라 문자열 또는 숫자로 내려오므로 항상 문자열로 맞춘다.
    """

    key_id: str | None = None
    key: str | None = None

    @field_validator("key_id", mode="before")
    @classmethod
    def key_id_as_string(cls, v: Any) -> Any:
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, bool):
            raise ValueError(f"unable to decode key_id of type {type(v).__name__}")
        if isinstance(v, int):
            return str(v)
        if isinstance(v, float):
            return str(int(v)) if v.is_integer() else repr(v)
        raise ValueError(f"unable to decode key_id of type {type(v).__name__}")


class Secret(ApiModel):
    name: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
    visibility: str | None = None  # all | private | selected (조직 secret)
    selected_repositories_url: str | None = None


class Secrets(ApiModel):
    total_count: int = 0
    secrets: list[Secret] = Field(default_factory=list)


class EncryptedSecret(ApiModel):
    """secret 생성/수정 요청. name은 URL 경로에만 쓰이고 본문에는 들어가지 않는다."""

    name: str = Field("", exclude=True)
    key_id: str | None = None
    encrypted_value: str | None = None
    visibility: str | None = None
    selected_repository_ids: SelectedRepoIDs | None = None


class ActionsService(Service):
    """Actions secrets (client.actions). 리포지토리/조직 버전을 모두 제공한다."""

    # ── 공통 ──

    def _get_public_key(self, prefix: str, *, timeout: RequestTimeout = None) -> ApiResponse[PublicKey]:
        return self._client.call("GET", f"{prefix}/actions/secrets/public-key", result_type=PublicKey, timeout=timeout)

    def _list_secrets(
        self, prefix: str, opts: ListOptions | None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Secrets]:
        return self._client.call(
            "GET", add_options(f"{prefix}/actions/secrets", opts), result_type=Secrets, timeout=timeout
        )

    def _get_secret(self, prefix: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[Secret]:
        url = prefix + build_path("/actions/secrets/{name}", name=name)
        return self._client.call("GET", url, result_type=Secret, timeout=timeout)

    def _put_secret(self, prefix: str, secret: EncryptedSecret, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = prefix + build_path("/actions/secrets/{name}", name=secret.name)
        return self._client.call("PUT", url, secret, timeout=timeout)

    def _delete_secret(self, prefix: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = prefix + build_path("/actions/secrets/{name}", name=name)
        return self._client.call("DELETE", url, timeout=timeout)

    # ── 리포지토리 ──

    def get_repo_public_key(self, owner: str, repo: str, *, timeout: RequestTimeout = None) -> ApiResponse[PublicKey]:
        return self._get_public_key(build_path("repos/{owner}/{repo}", owner=owner, repo=repo), timeout=timeout)

    def list_repo_secrets(
        self, owner: str, repo: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Secrets]:
        return self._list_secrets(build_path("repos/{owner}/{repo}", owner=owner, repo=repo), opts, timeout=timeout)

    def get_repo_secret(
        self, owner: str, repo: str, name: str, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Secret]:
        return self._get_secret(build_path("repos/{owner}/{repo}", owner=owner, repo=repo), name, timeout=timeout)

    def create_or_update_repo_secret(
        self, owner: str, repo: str, secret: EncryptedSecret, *, timeout: RequestTimeout = None
    ) -> ApiResponse[None]:
        """secret 생성(201) 또는 수정(204).

        Raises:
            InvalidArgumentError: secret.name이 비어 있는 경우
        """
        return self._put_secret(build_path("repos/{owner}/{repo}", owner=owner, repo=repo), secret, timeout=timeout)

    def delete_repo_secret(
        self, owner: str, repo: str, name: str, *, timeout: RequestTimeout = None
    ) -> ApiResponse[None]:
        return self._delete_secret(build_path("repos/{owner}/{repo}", owner=owner, repo=repo), name, timeout=timeout)

    # ── 조직 ──

    def get_org_public_key(self, org: str, *, timeout: RequestTimeout = None) -> ApiResponse[PublicKey]:
        return self._get_public_key(build_path("orgs/{org}", org=org), timeout=timeout)

    def list_org_secrets(
        self, org: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Secrets]:
        return self._list_secrets(build_path("orgs/{org}", org=org), opts, timeout=timeout)

    def get_org_secret(self, org: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[Secret]:
        return self._get_secret(build_path("orgs/{org}", org=org), name, timeout=timeout)

    def create_or_update_org_secret(
        self, org: str, secret: EncryptedSecret, *, timeout: RequestTimeout = None
    ) -> ApiResponse[None]:
        """조직 secret 생성/수정. visibility가 selected면 selected_repository_ids를 함께 보낸다."""
        return self._put_secret(build_path("orgs/{org}", org=org), secret, timeout=timeout)

    def delete_org_secret(self, org: str, name: str, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._delete_secret(build_path("orgs/{org}", org=org), name, timeout=timeout)
