"""Organizations / audit log / org hooks / org rulesets 서비스 테스트."""

from __future__ import annotations

import orjson
import pytest
from pytest_httpx import HTTPXMock

from ghrest.client import GitHubClient
from ghrest.errors import InvalidArgumentError
from ghrest.orgs import Organization, OrganizationsListOptions
from ghrest.orgs_audit_log import GetAuditLogOptions
from ghrest.repos_hooks import Hook, HookConfig
from ghrest.rules import PatternRuleParameters, RepositoryRulesetRules, Ruleset

API = "https://api.github.com"


class TestOrganizations:
    def test_get(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{API}/orgs/pseudolab",
            json={"login": "pseudolab", "id": 200, "plan": {"name": "free", "seats": 10}, "is_verified": False},
        )
        org = client.organizations.get("pseudolab").data
        assert org.login == "pseudolab"
        assert org.plan.seats == 10

    def test_get_by_id(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/organizations/200", json={"login": "pseudolab"})
        assert client.organizations.get_by_id(200).data.login == "pseudolab"

    def test_list_for_authenticated_user(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/user/orgs", json=[{"login": "a"}])
        assert client.organizations.list().data[0].login == "a"

    def test_list_for_user(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/users/octocat/orgs", json=[])
        assert client.organizations.list("octocat").data == []

    def test_list_all_since(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{API}/organizations?per_page=2&since=100",
            json=[{"login": "a", "id": 101}, {"login": "b", "id": 102}],
            headers={"Link": f'<{API}/organizations?per_page=2&since=102>; rel="next"'},
        )
        result = client.organizations.list_all(OrganizationsListOptions(since=100, per_page=2))
        assert result.next_page == 102

    def test_edit(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab", method="PATCH", json={"login": "pseudolab", "blog": ""})
        client.organizations.edit("pseudolab", Organization(blog="", members_can_create_repositories=False))
        assert orjson.loads(httpx_mock.get_request().content) == {"blog": "", "members_can_create_repositories": False}


class TestAuditLog:
    def test_get_with_cursor(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{API}/orgs/pseudolab/audit-log?include=all&per_page=100&phrase=action%3Arepo.create",
            json=[
                {
                    "@timestamp": 1700000000000,
                    "_document_id": "doc-1",
                    "action": "repo.create",
                    "actor": "octocat",
                    "actor_location": {"country_code": "KR"},
                    "repo": "pseudolab/new",
                    "visibility": "private",
                }
            ],
            headers={"Link": f'<{API}/orgs/pseudolab/audit-log?after=MS42NzM&per_page=100>; rel="next"'},
        )
        opts = GetAuditLogOptions(phrase="action:repo.create", include="all", per_page=100)
        result = client.organizations.audit_log.get("pseudolab", opts)
        entry = result.data[0]
        assert entry.document_id == "doc-1"
        assert entry.actor_location.country_code == "KR"
        assert entry.additional_fields == {"repo": "pseudolab/new", "visibility": "private"}
        assert result.after == "MS42NzM"


class TestOrganizationHooks:
    def test_create_requires_config_url(self, client: GitHubClient) -> None:
        with pytest.raises(InvalidArgumentError, match="config.url"):
            client.organizations.hooks.create("pseudolab", Hook(events=["push"]))

    def test_create(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks", method="POST", status_code=201, json={"id": 3})
        hook = Hook(config=HookConfig(url="https://example.com/hook"), active=True)
        assert client.organizations.hooks.create("pseudolab", hook).data.id == 3
        assert orjson.loads(httpx_mock.get_request().content) == {
            "config": {"url": "https://example.com/hook"},
            "active": True,
            "name": "web",
        }

    def test_get_list_delete(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks", json=[{"id": 3}])
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks/3", json={"id": 3, "name": "web"})
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks/3", method="DELETE", status_code=204)
        assert client.organizations.hooks.list("pseudolab").data[0].id == 3
        assert client.organizations.hooks.get("pseudolab", 3).data.name == "web"
        assert client.organizations.hooks.delete("pseudolab", 3).status_code == 204

    def test_edit_ping_configuration(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks/3", method="PATCH", json={"id": 3, "active": False})
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks/3/pings", method="POST", status_code=204)
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/hooks/3/config", json={"content_type": "form"})
        httpx_mock.add_response(
            url=f"{API}/orgs/pseudolab/hooks/3/config", method="PATCH", json={"content_type": "json"}
        )
        assert client.organizations.hooks.edit("pseudolab", 3, Hook(active=False)).data.active is False
        assert client.organizations.hooks.ping("pseudolab", 3).status_code == 204
        assert client.organizations.hooks.get_configuration("pseudolab", 3).data.content_type == "form"
        config = HookConfig(content_type="json")
        assert client.organizations.hooks.edit_configuration("pseudolab", 3, config).data.content_type == "json"


class TestOrganizationRulesets:
    def test_create(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        httpx_mock.add_response(
            url=f"{API}/orgs/pseudolab/rulesets",
            method="POST",
            status_code=201,
            json={"id": 9, "name": "names", "enforcement": "active", "source_type": "Organization"},
        )
        ruleset = Ruleset(
            name="names",
            enforcement="active",
            rules=RepositoryRulesetRules(
                branch_name_pattern=PatternRuleParameters(operator="regex", pattern="^(main|feat/.*)$")
            ),
        )
        assert client.organizations.rulesets.create("pseudolab", ruleset).data.source_type == "Organization"
        body = orjson.loads(httpx_mock.get_request().content)
        assert body["rules"] == [
            {"type": "branch_name_pattern", "parameters": {"operator": "regex", "pattern": "^(main|feat/.*)$"}}
        ]

    def test_get_list_update_delete(self, client: GitHubClient, httpx_mock: HTTPXMock) -> None:
        ruleset_json = {"id": 9, "name": "names", "enforcement": "disabled"}
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/rulesets", json=[ruleset_json])
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/rulesets/9", json=ruleset_json)
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/rulesets/9", method="PUT", json=ruleset_json)
        httpx_mock.add_response(url=f"{API}/orgs/pseudolab/rulesets/9", method="DELETE", status_code=204)
        assert client.organizations.rulesets.list("pseudolab").data[0].id == 9
        assert client.organizations.rulesets.get("pseudolab", 9).data.enforcement == "disabled"
        updated = client.organizations.rulesets.update("pseudolab", 9, Ruleset(name="names", enforcement="disabled"))
        assert updated.data.name == "names"
        assert client.organizations.rulesets.delete("pseudolab", 9).status_code == 204
