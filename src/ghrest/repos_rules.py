"""Repository rulesets API."""

from __future__ import annotations

from ghrest.query import ListOptions, add_options
from ghrest.response import ApiResponse
from ghrest.rules import BranchRule, Ruleset
from ghrest.service import RequestTimeout, Service, build_path


class RepositoryListRulesetsOptions(ListOptions):
    includes_parents: bool | None = None  # 상위 조직/엔터프라이즈 ruleset 포함


class RepositoryRulesetsService(Service):
    """리포지토리 ruleset (client.repositories.rulesets)."""

    def get_rules_for_branch(
        self, owner: str, repo: str, branch: str, opts: ListOptions | None = None, *, timeout: RequestTimeout = None
    ) -> ApiResponse[list[BranchRule]]:
        """브랜치에 실제로 적용되는 규칙 목록. 각 규칙에 출처 ruleset 정보가 붙는다."""
        url = build_path("repos/{owner}/{repo}/rules/branches/{branch}", owner=owner, repo=repo, branch=branch)
        return self._client.call("GET", add_options(url, opts), result_type=list[BranchRule], timeout=timeout)

    def list(
        self,
        owner: str,
        repo: str,
        opts: RepositoryListRulesetsOptions | None = None,
        *,
        timeout: RequestTimeout = None,
    ) -> ApiResponse[list[Ruleset]]:
        url = add_options(build_path("repos/{owner}/{repo}/rulesets", owner=owner, repo=repo), opts)
        return self._client.call("GET", url, result_type=list[Ruleset], timeout=timeout)

    def get(
        self, owner: str, repo: str, ruleset_id: int, *, includes_parents: bool = False, timeout: RequestTimeout = None
    ) -> ApiResponse[Ruleset]:
        url = build_path("repos/{owner}/{repo}/rulesets/{id}", owner=owner, repo=repo, id=ruleset_id)
        if includes_parents:
            url += "?includes_parents=true"
        return self._client.call("GET", url, result_type=Ruleset, timeout=timeout)

    def create(
        self, owner: str, repo: str, ruleset: Ruleset, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Ruleset]:
        url = build_path("repos/{owner}/{repo}/rulesets", owner=owner, repo=repo)
        return self._client.call("POST", url, ruleset, result_type=Ruleset, timeout=timeout)

    def update(
        self, owner: str, repo: str, ruleset_id: int, ruleset: Ruleset, *, timeout: RequestTimeout = None
    ) -> ApiResponse[Ruleset]:
        """ruleset 교체. bypass_actors=[]로 설정하면 bypass actor를 모두 지운다."""
        url = build_path("repos/{owner}/{repo}/rulesets/{id}", owner=owner, repo=repo, id=ruleset_id)
        return self._client.call("PUT", url, ruleset, result_type=Ruleset, timeout=timeout)

    def delete(self, owner: str, repo: str, ruleset_id: int, *, timeout: RequestTimeout = None) -> ApiResponse[None]:
        url = build_path("repos/{owner}/{repo}/rulesets/{id}", owner=owner, repo=repo, id=ruleset_id)
        return self._client.call("DELETE", url, timeout=timeout)
