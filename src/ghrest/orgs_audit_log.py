"""Organization audit log API.

audit log 항목은 action마다 필드 구성이 달라서 공통 필드만 선언하고
나머지는 AuditEntry.additional_fields에 그대로 보관한다.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from ghrest.codec import ApiModel, PassthroughModel
from ghrest.query import ListCursorOptions, add_options
from ghrest.response import ApiResponse
from ghrest.service import RequestTimeout, Service, build_path


class GetAuditLogOptions(ListCursorOptions):
    phrase: str | None = None  # 검색어 (예: "action:workflows")
    include: str | None = None  # web | git | all
    order: str | None = None  # asc | desc


class ActorLocation(ApiModel):
    country_code: str | None = None


class AuditEntry(PassthroughModel):
    """audit log 항목 하나.

    @timestamp, created_at은 epoch 밀리초로 내려온다.
    """

    timestamp: datetime | None = Field(None, alias="@timestamp")
    document_id: str | None = Field(None, alias="_document_id")
    action: str | None = None
    actor: str | None = None
    actor_id: int | None = None
    actor_location: ActorLocation | None = None
    business: str | None = None
    business_id: int | None = None
    created_at: datetime | None = None
    external_identity_nameid: str | None = None
    external_identity_username: str | None = None
    hashed_token: str | None = None
    org: str | None = None
    org_id: int | None = None
    token_id: int | None = None
    token_scopes: str | None = None
    user: str | None = None
    user_id: int | None = None
    data: dict[str, Any] | None = None


class AuditLogService(Service):
    """조직 audit log 조회 (client.organizations.audit_log)."""

    def get(
        self, org: str, opts: GetAuditLogOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[AuditEntry]]:
        """audit log 한 페이지 조회. 다음 페이지는 응답의 after cursor로 이어간다."""
        url = add_options(build_path("orgs/{org}/audit-log", org=org), opts)
        return self._client.call("GET", url, result_type=list[AuditEntry], timeout=timeout)
