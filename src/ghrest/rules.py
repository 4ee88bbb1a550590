"""Ruleset 규칙 모델.

규칙은 ``{"type": ..., "parameters": {...}}`` 형태의 tagged union이다.
type 값으로 파라미터 모델을 고르고, 모르는 type이나 잘못된 파라미터는 디코딩 에러로 처리한다.

파라미터 필드 규칙
- 항상 출력되는 필드: 0값 기본값을 가진다 (False / 0 / "" / [])
- 선택 필드: None 기본값, None이면 출력하지 않는다
- bool/int 필드는 Strict 타입이라 "true", "5" 같은 문자열을 받지 않는다
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictInt, model_serializer, model_validator

from ghrest.codec import ApiModel


class RulesetRuleType:
    """규칙 type 값."""

    CREATION = "creation"
    UPDATE = "update"
    DELETION = "deletion"
    REQUIRED_LINEAR_HISTORY = "required_linear_history"
    MERGE_QUEUE = "merge_queue"
    REQUIRED_DEPLOYMENTS = "required_deployments"
    REQUIRED_SIGNATURES = "required_signatures"
    PULL_REQUEST = "pull_request"
    REQUIRED_STATUS_CHECKS = "required_status_checks"
    NON_FAST_FORWARD = "non_fast_forward"
    COMMIT_MESSAGE_PATTERN = "commit_message_pattern"
    COMMIT_AUTHOR_EMAIL_PATTERN = "commit_author_email_pattern"
    COMMITTER_EMAIL_PATTERN = "committer_email_pattern"
    BRANCH_NAME_PATTERN = "branch_name_pattern"
    TAG_NAME_PATTERN = "tag_name_pattern"
    FILE_PATH_RESTRICTION = "file_path_restriction"
    MAX_FILE_PATH_LENGTH = "max_file_path_length"
    FILE_EXTENSION_RESTRICTION = "file_extension_restriction"
    MAX_FILE_SIZE = "max_file_size"
    WORKFLOWS = "workflows"
    CODE_SCANNING = "code_scanning"
    COPILOT_CODE_REVIEW = "copilot_code_review"
    REPOSITORY_CREATE = "repository_create"
    REPOSITORY_DELETE = "repository_delete"
    REPOSITORY_NAME = "repository_name"
    REPOSITORY_TRANSFER = "repository_transfer"
    REPOSITORY_VISIBILITY = "repository_visibility"


class PatternRuleOperator:
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    CONTAINS = "contains"
    REGEX = "regex"


class RulesetEnforcement:
    DISABLED = "disabled"
    ACTIVE = "active"
    EVALUATE = "evaluate"


class RulesetTarget:
    BRANCH = "branch"
    TAG = "tag"
    PUSH = "push"
    REPOSITORY = "repository"


# ── 파라미터 모델 ──────────────────────────────────────


class RuleParameters(BaseModel):
    """규칙 파라미터 모델의 부모."""

    model_config = ConfigDict(extra="ignore")

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_none=True)


class EmptyRuleParameters(RuleParameters):
    """파라미터가 없는 규칙 (creation, deletion 등)."""


class UpdateRuleParameters(RuleParameters):
    update_allows_fetch_and_merge: StrictBool = False

    @model_serializer(mode="wrap")
    def _omit_false(self, handler: Any) -> Any:
        data = handler(self)
        if not data.get("update_allows_fetch_and_merge"):
            data.pop("update_allows_fetch_and_merge", None)
        return data


class MergeQueueRuleParameters(RuleParameters):
    check_response_timeout_minutes: StrictInt = 0
    grouping_strategy: str = ""  # ALLGREEN | HEADGREEN
    max_entries_to_build: StrictInt = 0
    max_entries_to_merge: StrictInt = 0
    merge_method: str = ""  # MERGE | SQUASH | REBASE
    min_entries_to_merge: StrictInt = 0
    min_entries_to_merge_wait_minutes: StrictInt = 0


class RequiredDeploymentsRuleParameters(RuleParameters):
    required_deployment_environments: list[str] = Field(default_factory=list)


class RulesetReviewer(RuleParameters):
    id: StrictInt | None = None
    type: str | None = None


class RulesetRequiredReviewer(RuleParameters):
    minimum_approvals: StrictInt | None = None
    file_patterns: list[str] | None = None
    reviewer: RulesetReviewer | None = None


class PullRequestRuleParameters(RuleParameters):
    allowed_merge_methods: list[str] | None = None
    dismiss_stale_reviews_on_push: StrictBool = False
    require_code_owner_review: StrictBool = False
    require_last_push_approval: StrictBool = False
    required_approving_review_count: StrictInt = 0
    required_reviewers: list[RulesetRequiredReviewer] | None = None
    required_review_thread_resolution: StrictBool = False


class RuleStatusCheck(RuleParameters):
    context: str = ""
    integration_id: StrictInt | None = None


class RequiredStatusChecksRuleParameters(RuleParameters):
    do_not_enforce_on_create: StrictBool | None = None
    required_status_checks: list[RuleStatusCheck] = Field(default_factory=list)
    strict_required_status_checks_policy: StrictBool = False


class PatternRuleParameters(RuleParameters):
    name: str | None = None
    negate: StrictBool | None = None
    operator: str = ""
    pattern: str = ""


class FilePathRestrictionRuleParameters(RuleParameters):
    restricted_file_paths: list[str] = Field(default_factory=list)


class MaxFilePathLengthRuleParameters(RuleParameters):
    max_file_path_length: StrictInt = 0


class FileExtensionRestrictionRuleParameters(RuleParameters):
    restricted_file_extensions: list[str] = Field(default_factory=list)


class MaxFileSizeRuleParameters(RuleParameters):
    max_file_size: StrictInt = 0


class RuleWorkflow(RuleParameters):
    path: str = ""
    ref: str | None = None
    repository_id: StrictInt | None = None
    sha: str | None = None


class WorkflowsRuleParameters(RuleParameters):
    do_not_enforce_on_create: StrictBool | None = None
    workflows: list[RuleWorkflow] = Field(default_factory=list)


class RuleCodeScanningTool(RuleParameters):
    alerts_threshold: str = ""  # none | errors | errors_and_warnings | all
    security_alerts_threshold: str = ""  # none | critical | high_or_higher | medium_or_higher | all
    tool: str = ""


class CodeScanningRuleParameters(RuleParameters):
    code_scanning_tools: list[RuleCodeScanningTool] = Field(default_factory=list)


class CopilotCodeReviewRuleParameters(RuleParameters):
    review_on_push: StrictBool = False
    review_draft_pull_requests: StrictBool = False


class RepositoryNamePatternRuleParameters(RuleParameters):
    negate: StrictBool = False
    pattern: str = ""


class RepositoryVisibilityRuleParameters(RuleParameters):
    internal: StrictBool = False
    private: StrictBool = False


# type -> 파라미터 모델 (정의 순서가 곧 직렬화 순서)
RULE_PARAMETERS: dict[str, type[RuleParameters]] = {
    RulesetRuleType.CREATION: EmptyRuleParameters,
    RulesetRuleType.UPDATE: UpdateRuleParameters,
    RulesetRuleType.DELETION: EmptyRuleParameters,
    RulesetRuleType.REQUIRED_LINEAR_HISTORY: EmptyRuleParameters,
    RulesetRuleType.MERGE_QUEUE: MergeQueueRuleParameters,
    RulesetRuleType.REQUIRED_DEPLOYMENTS: RequiredDeploymentsRuleParameters,
    RulesetRuleType.REQUIRED_SIGNATURES: EmptyRuleParameters,
    RulesetRuleType.PULL_REQUEST: PullRequestRuleParameters,
    RulesetRuleType.REQUIRED_STATUS_CHECKS: RequiredStatusChecksRuleParameters,
    RulesetRuleType.NON_FAST_FORWARD: EmptyRuleParameters,
    RulesetRuleType.COMMIT_MESSAGE_PATTERN: PatternRuleParameters,
    RulesetRuleType.COMMIT_AUTHOR_EMAIL_PATTERN: PatternRuleParameters,
    RulesetRuleType.COMMITTER_EMAIL_PATTERN: PatternRuleParameters,
    RulesetRuleType.BRANCH_NAME_PATTERN: PatternRuleParameters,
    RulesetRuleType.TAG_NAME_PATTERN: PatternRuleParameters,
    RulesetRuleType.FILE_PATH_RESTRICTION: FilePathRestrictionRuleParameters,
    RulesetRuleType.MAX_FILE_PATH_LENGTH: MaxFilePathLengthRuleParameters,
    RulesetRuleType.FILE_EXTENSION_RESTRICTION: FileExtensionRestrictionRuleParameters,
    RulesetRuleType.MAX_FILE_SIZE: MaxFileSizeRuleParameters,
    RulesetRuleType.WORKFLOWS: WorkflowsRuleParameters,
    RulesetRuleType.CODE_SCANNING: CodeScanningRuleParameters,
    RulesetRuleType.COPILOT_CODE_REVIEW: CopilotCodeReviewRuleParameters,
    RulesetRuleType.REPOSITORY_CREATE: EmptyRuleParameters,
    RulesetRuleType.REPOSITORY_DELETE: EmptyRuleParameters,
    RulesetRuleType.REPOSITORY_NAME: RepositoryNamePatternRuleParameters,
    RulesetRuleType.REPOSITORY_TRANSFER: EmptyRuleParameters,
    RulesetRuleType.REPOSITORY_VISIBILITY: RepositoryVisibilityRuleParameters,
}


def _parameters_for(rule_type: Any, raw: Any) -> RuleParameters | None:
    """type에 맞는 파라미터 모델로 raw를 검증한다."""
    if rule_type not in RULE_PARAMETERS:
        raise ValueError(f"unknown rule type: {rule_type!r}")
    params_cls = RULE_PARAMETERS[rule_type]

    if raw is None:
        if params_cls is EmptyRuleParameters:
            return None
        # 기본값이 빈 객체로 인코딩되는 파라미터(update)는 생략되어 와도 기본값으로 채운다
        default = params_cls()
        return default if not default.to_payload() else None
    if isinstance(raw, RuleParameters):
        if type(raw) is not params_cls:
            raise ValueError(
                f"rule type {rule_type!r} expects {params_cls.__name__}, got {type(raw).__name__}"
            )
    elif not isinstance(raw, dict):
        raise ValueError(f"parameters of rule type {rule_type!r} must be an object")

    if params_cls is EmptyRuleParameters:
        return None
    return raw if isinstance(raw, RuleParameters) else params_cls.model_validate(raw)


# ── 규칙 ───────────────────────────────────────────────


class RepositoryRule(BaseModel):
    """단일 규칙."""

    type: str
    parameters: RuleParameters | None = None

    @model_validator(mode="before")
    @classmethod
    def _select_parameters(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        data["parameters"] = _parameters_for(data.get("type"), data.get("parameters"))
        return data

    def _parameters_payload(self) -> dict[str, Any]:
        if self.parameters is None:
            return {}
        expected = RULE_PARAMETERS.get(self.type)
        if expected is None:
            raise ValueError(f"unknown rule type: {self.type!r}")
        if type(self.parameters) is not expected:
            raise ValueError(
                f"rule type {self.type!r} expects {expected.__name__}, got {type(self.parameters).__name__}"
            )
        return self.parameters.to_payload()

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.type}
        params = self._parameters_payload()
        if params:
            out["parameters"] = params
        return out

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class BranchRule(RepositoryRule):
    """브랜치에 적용되는 규칙 + 규칙이 속한 ruleset 정보."""

    ruleset_source_type: str = ""  # Repository | Organization | Enterprise
    ruleset_source: str = ""
    ruleset_id: int = 0

    @model_serializer(mode="plain")
    def _serialize(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "type": self.type,
            "ruleset_source_type": self.ruleset_source_type,
            "ruleset_source": self.ruleset_source,
            "ruleset_id": self.ruleset_id,
        }
        params = self._parameters_payload()
        if params:
            out["parameters"] = params
        return out


class RepositoryRulesetRules(BaseModel):
    """ruleset의 규칙 묶음. 규칙 type별 속성 하나씩.

    JSON 배열로 직렬화한다 (비어 있으면 ``[]``). 파라미터 없는 규칙은
    EmptyRuleParameters 인스턴스로 켠다.
    """

    creation: EmptyRuleParameters | None = None
    update: UpdateRuleParameters | None = None
    deletion: EmptyRuleParameters | None = None
    required_linear_history: EmptyRuleParameters | None = None
    merge_queue: MergeQueueRuleParameters | None = None
    required_deployments: RequiredDeploymentsRuleParameters | None = None
    required_signatures: EmptyRuleParameters | None = None
    pull_request: PullRequestRuleParameters | None = None
    required_status_checks: RequiredStatusChecksRuleParameters | None = None
    non_fast_forward: EmptyRuleParameters | None = None
    commit_message_pattern: PatternRuleParameters | None = None
    commit_author_email_pattern: PatternRuleParameters | None = None
    committer_email_pattern: PatternRuleParameters | None = None
    branch_name_pattern: PatternRuleParameters | None = None
    tag_name_pattern: PatternRuleParameters | None = None
    file_path_restriction: FilePathRestrictionRuleParameters | None = None
    max_file_path_length: MaxFilePathLengthRuleParameters | None = None
    file_extension_restriction: FileExtensionRestrictionRuleParameters | None = None
    max_file_size: MaxFileSizeRuleParameters | None = None
    workflows: WorkflowsRuleParameters | None = None
    code_scanning: CodeScanningRuleParameters | None = None
    copilot_code_review: CopilotCodeReviewRuleParameters | None = None
    repository_create: EmptyRuleParameters | None = None
    repository_delete: EmptyRuleParameters | None = None
    repository_name: RepositoryNamePatternRuleParameters | None = None
    repository_transfer: EmptyRuleParameters | None = None
    repository_visibility: RepositoryVisibilityRuleParameters | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_rule_list(cls, data: Any) -> Any:
        if not isinstance(data, list):
            return data
        fields: dict[str, Any] = {}
        for item in data:
            rule = RepositoryRule.model_validate(item)
            params = rule.parameters
            if params is None:
                params = RULE_PARAMETERS[rule.type]()
            fields[rule.type] = params
        return fields

    def to_rules(self) -> list[RepositoryRule]:
        rules = []
        for rule_type in RULE_PARAMETERS:
            params = getattr(self, rule_type)
            if params is not None:
                rules.append(RepositoryRule(type=rule_type, parameters=params))
        return rules

    @model_serializer(mode="plain")
    def _serialize(self) -> list[dict[str, Any]]:
        return [rule.to_payload() for rule in self.to_rules()]

    def to_payload(self) -> list[dict[str, Any]]:
        return self.model_dump(mode="json")


# ── Ruleset ────────────────────────────────────────────


class BypassActor(ApiModel):
    actor_id: int | None = None
    actor_type: str | None = None  # Integration | OrganizationAdmin | RepositoryRole | Team | DeployKey
    bypass_mode: str | None = None  # always | pull_request


class RulesetLink(ApiModel):
    href: str | None = None


class RulesetLinks(ApiModel):
    self_link: RulesetLink | None = Field(None, alias="self")
    html: RulesetLink | None = None


class RulesetRefConditionParameters(ApiModel):
    include: list[str]
    exclude: list[str]


class RulesetRepositoryNamesConditionParameters(ApiModel):
    include: list[str]
    exclude: list[str]
    protected: bool | None = None


class RulesetRepositoryIDsConditionParameters(ApiModel):
    repository_ids: list[int] | None = None


class RulesetRepositoryPropertyTargetParameters(ApiModel):
    name: str
    property_values: list[str]
    source: str | None = None


class RulesetRepositoryPropertyConditionParameters(ApiModel):
    include: list[RulesetRepositoryPropertyTargetParameters]
    exclude: list[RulesetRepositoryPropertyTargetParameters]


class RulesetConditions(ApiModel):
    ref_name: RulesetRefConditionParameters | None = None
    repository_id: RulesetRepositoryIDsConditionParameters | None = None
    repository_name: RulesetRepositoryNamesConditionParameters | None = None
    repository_property: RulesetRepositoryPropertyConditionParameters | None = None


class Ruleset(ApiModel):
    """리포지토리/조직 ruleset."""

    id: int | None = None
    name: str
    target: str | None = None
    source_type: str | None = None  # Repository | Organization | Enterprise
    source: str = ""
    enforcement: str
    bypass_actors: list[BypassActor] | None = None
    current_user_can_bypass: str | None = None
    node_id: str | None = None
    links: RulesetLinks | None = Field(None, alias="_links")
    conditions: RulesetConditions | None = None
    rules: RepositoryRulesetRules | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
