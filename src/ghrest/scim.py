"""SCIM provisioning API (조직 SAML SSO 사용자 관리).

SCIM 스키마는 camelCase 키를 쓴다. 모델 필드는 snake_case, alias가 와이어 이름이다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from ghrest.codec import ApiModel
from ghrest.query import QueryOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path

SCIM_USER_SCHEMA = "urn:ietf:params:scim:schemas:core:2.0:User"
SCIM_PATCH_SCHEMA = "urn:ietf:params:scim:api:messages:2.0:PatchOp"


class SCIMUserName(ApiModel):
    given_name: str = Field(alias="givenName")
    family_name: str = Field(alias="familyName")
    formatted: str | None = None


class SCIMUserEmail(ApiModel):
    value: str
    primary: bool | None = None
    type: str | None = None


class SCIMMeta(ApiModel):
    resource_type: str | None = Field(None, alias="resourceType")
    created: datetime | None = None
    last_modified: datetime | None = Field(None, alias="lastModified")
    location: str | None = None


class SCIMUserAttributes(ApiModel):
    """SCIM 사용자 생성/수정 요청 본문. user_name, name, emails는 필수."""

    user_name: str = Field(alias="userName")
    name: SCIMUserName
    display_name: str | None = Field(None, alias="displayName")
    emails: list[SCIMUserEmail]
    schemas: list[str] | None = None
    external_id: str | None = Field(None, alias="externalId")
    groups: list[str] | None = None
    active: bool | None = None


class SCIMUser(SCIMUserAttributes):
    """프로비저닝된 SCIM 사용자."""

    id: str | None = None
    meta: SCIMMeta | None = None


class SCIMProvisionedIdentities(ApiModel):
    schemas: list[str] | None = None
    total_results: int | None = Field(None, alias="totalResults")
    items_per_page: int | None = Field(None, alias="itemsPerPage")
    start_index: int | None = Field(None, alias="startIndex")
    resources: list[SCIMUser] | None = Field(None, alias="Resources")


class ListSCIMProvisionedIdentitiesOptions(QueryOptions):
    start_index: int | None = Field(None, alias="startIndex")  # 1부터 시작
    count: int | None = None
    filter: str | None = None  # 예: 'userName eq "octocat"'


class SCIMOperation(ApiModel):
    op: str  # add | remove | replace
    path: str | None = None
    value: Any = None


class UpdateAttributeForSCIMUserOptions(ApiModel):
    schemas: list[str] | None = None
    operations: list[SCIMOperation] = Field(alias="Operations")


class SCIMService(Service):
    """조직 SCIM 사용자 프로비저닝 (client.scim)."""

    def _users(self, org: str) -> str:
        return build_path("scim/v2/organizations/{org}/Users", org=org)

    def _user(self, org: str, scim_user_id: str) -> str:
        return build_path("scim/v2/organizations/{org}/Users/{id}", org=org, id=scim_user_id)

    def list_provisioned_identities(
        self, org: str, opts: ListSCIMProvisionedIdentitiesOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[SCIMProvisionedIdentities]:
        url = add_options(self._users(org), opts)
        return self._client.call("GET", url, result_type=SCIMProvisionedIdentities, timeout=timeout)

    def provision_and_invite(
        self, org: str, user: SCIMUserAttributes, *, timeout: RequestTimeout = None
    ) -> ApiResponse[SCIMUser]:
        return self._client.call("POST", self._users(org), user, result_type=SCIMUser, timeout=timeout)

    def get_provisioning_info(
        self, org: str, scim_user_id: str, *, timeout: RequestTimeout = None
    ) -> ApiResponse[SCIMUser]:
        return self._client.call("GET", self._user(org, scim_user_id), result_type=SCIMUser, timeout=timeout)

    def update_provisioned_membership(
        self, org: str, scim_user_id: str, user: SCIMUserAttributes, *, timeout: RequestTimeout = None
    ) -> ApiResponse[SCIMUser]:
        """사용자 정보를 통째로 교체한다 (PUT)."""
        return self._client.call("PUT", self._user(org, scim_user_id), user, result_type=SCIMUser, timeout=timeout)

    def update_attribute(
        self, org: str, scim_user_id: str, opts: UpdateAttributeForSCIMUserOptions, *, timeout: RequestTimeout = None
    ) -> ApiResponse[SCIMUser]:
        """개별 속성 변경 (PATCH). schemas를 지정하지 않으면 PatchOp 스키마를 쓴다."""
        if "schemas" not in opts.model_fields_set:
            opts = opts.model_copy(update={"schemas": [SCIM_PATCH_SCHEMA]})
        return self._client.call("PATCH", self._user(org, scim_user_id), opts, result_type=SCIMUser, timeout=timeout)

    def delete_user(self, org: str, scim_user_id: str, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        return self._client.call("DELETE", self._user(org, scim_user_id), timeout=timeout)
