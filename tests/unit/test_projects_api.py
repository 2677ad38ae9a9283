"""Tests for the projects API: paging, lookup and provisioning calls."""

from __future__ import annotations

import json

import httpx
import pytest
import respx

from firebase_cli.client.api import ApiClient
from firebase_cli.client.errors import (
    ApiConnectionError,
    ApiRequestError,
    ConflictError,
    FirebaseEnableError,
    OperationError,
    PaginationLimitError,
    ProjectCreationError,
    ProjectExistsError,
    ProjectIdCheckError,
    ProjectListError,
    ProjectLookupError,
)
from firebase_cli.management.projects import ProjectsAPI
from firebase_cli.models.project import ParentResource, ParentResourceType

FB = "https://firebase.googleapis.com/v1beta1"
FB_V1 = "https://firebase.googleapis.com/v1"
CRM = "https://cloudresourcemanager.googleapis.com/v1"


def paged_server(pages: list[list[dict]], key: str = "results"):
    """respx side effect serving ``pages``; page i is requested with token ``t<i>``."""

    def handler(request: httpx.Request) -> httpx.Response:
        token = request.url.params.get("pageToken")
        index = 0 if token is None else int(token[1:])
        body: dict = {key: pages[index]}
        if index + 1 < len(pages):
            body["nextPageToken"] = f"t{index + 1}"
        return httpx.Response(200, json=body)

    return handler


def project(n: int) -> dict:
    return {"projectId": f"project-{n:03d}", "projectNumber": str(n)}


class TestGetProjectPage:
    @respx.mock
    def test_single_request_with_params(self, api: ProjectsAPI):
        route = respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": [project(1)], "nextPageToken": "abc"})
        )
        page = api.get_project_page("/projects", "results", 50, "prev-token")
        assert route.call_count == 1
        params = route.calls.last.request.url.params
        assert params["pageSize"] == "50"
        assert params["pageToken"] == "prev-token"
        assert page.items == [project(1)]
        assert page.next_page_token == "abc"

    @respx.mock
    def test_no_token_param_on_first_page(self, api: ProjectsAPI):
        route = respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": []})
        )
        api.get_project_page("/projects", "results", 10)
        assert "pageToken" not in route.calls.last.request.url.params

    @respx.mock
    def test_missing_items_default_to_empty(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(return_value=httpx.Response(200, json={}))
        page = api.get_project_page("/projects", "results", 10)
        assert page.items == []
        assert page.next_page_token is None

    @respx.mock
    def test_non_list_items_and_empty_token(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": "oops", "nextPageToken": ""})
        )
        page = api.get_project_page("/projects", "results", 10)
        assert page.items == []
        assert page.next_page_token is None

    @respx.mock
    def test_non_string_token_ignored(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": [], "nextPageToken": 42})
        )
        assert api.get_project_page("/projects", "results", 10).next_page_token is None

    def test_page_size_must_be_positive(self, api: ProjectsAPI):
        with pytest.raises(ValueError, match="positive"):
            api.get_project_page("/projects", "results", 0)


class TestTypedPages:
    @respx.mock
    def test_firebase_page_parses_models(self, api: ProjectsAPI, sample_projects):
        respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": sample_projects + [None]})
        )
        page = api.get_firebase_project_page(100)
        assert [p.project_id for p in page.items] == ["zeta-app", "Alpha-app", "beta-app"]
        assert page.items[0].display_name == "Zeta"

    @respx.mock
    def test_available_page_uses_project_info_key(self, api: ProjectsAPI):
        respx.get(f"{FB}/availableProjects").mock(
            return_value=httpx.Response(
                200,
                json={"projectInfo": [{"project": "projects/cloud-one", "displayName": "One"}]},
            )
        )
        page = api.get_available_cloud_project_page(100)
        assert page.items[0].project_id == "cloud-one"
        assert page.items[0].label == "cloud-one (One)"

    @respx.mock
    def test_list_failure_is_wrapped(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(return_value=httpx.Response(500, text="boom"))
        with pytest.raises(ProjectListError, match="Failed to list Firebase projects") as exc_info:
            api.get_firebase_project_page()
        assert isinstance(exc_info.value.original, ApiRequestError)
        assert exc_info.value.exit_code == 2

    @respx.mock
    def test_available_failure_is_wrapped(self, api: ProjectsAPI):
        respx.get(f"{FB}/availableProjects").mock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(ProjectListError, match="available Google Cloud"):
            api.get_available_cloud_project_page()

    @respx.mock
    def test_dropped_connection_is_wrapped(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(side_effect=httpx.RemoteProtocolError("hung up"))
        with pytest.raises(ProjectListError, match="Failed to list Firebase projects") as exc_info:
            api.list_firebase_projects()
        assert isinstance(exc_info.value.original, ApiConnectionError)

    @respx.mock
    def test_non_json_page_is_wrapped(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, text="<html>proxy login</html>")
        )
        with pytest.raises(ProjectListError, match="Failed to list Firebase projects") as exc_info:
            api.list_firebase_projects()
        assert isinstance(exc_info.value.original, ApiRequestError)


class TestListFirebaseProjects:
    @pytest.mark.parametrize("page_count", [1, 2, 5])
    @respx.mock
    def test_one_request_per_page(self, api: ProjectsAPI, page_count: int):
        pages = [[project(i * 10 + j) for j in range(3)] for i in range(page_count)]
        route = respx.get(f"{FB}/projects").mock(side_effect=paged_server(pages))
        projects = api.list_firebase_projects(page_size=3)
        assert route.call_count == page_count
        assert [p.project_id for p in projects] == [
            item["projectId"] for page in pages for item in page
        ]

    @respx.mock
    def test_matches_manual_chaining(self, api: ProjectsAPI):
        pages = [[project(1), project(2)], [project(3)], [project(4), project(5)]]
        respx.get(f"{FB}/projects").mock(side_effect=paged_server(pages))
        manual = []
        token = None
        while True:
            page = api.get_firebase_project_page(2, token)
            manual.extend(page.items)
            token = page.next_page_token
            if token is None:
                break
        assert api.list_firebase_projects(page_size=2) == manual

    @respx.mock
    def test_tokens_resubmitted_unchanged(self, api: ProjectsAPI):
        route = respx.get(f"{FB}/projects").mock(
            side_effect=[
                httpx.Response(200, json={"results": [project(1)], "nextPageToken": "opaque/+=="}),
                httpx.Response(200, json={"results": [project(2)]}),
            ]
        )
        api.list_firebase_projects()
        assert route.calls[1].request.url.params["pageToken"] == "opaque/+=="
        assert route.calls[0].request.url.params["pageSize"] == "1000"

    @respx.mock
    def test_page_limit(self):
        bounded = ProjectsAPI(
            ApiClient("https://firebase.googleapis.com", "v1beta1"),
            ApiClient("https://firebase.googleapis.com", "v1"),
            ApiClient("https://cloudresourcemanager.googleapis.com", "v1"),
            max_pages=3,
        )
        route = respx.get(f"{FB}/projects").mock(
            return_value=httpx.Response(200, json={"results": [project(1)], "nextPageToken": "again"})
        )
        with bounded, pytest.raises(PaginationLimitError, match="3 pages"):
            bounded.list_firebase_projects()
        assert route.call_count == 3


class TestGetFirebaseProject:
    @respx.mock
    def test_found(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/my-app").mock(
            return_value=httpx.Response(
                200, json={"projectId": "my-app", "displayName": "My App", "projectNumber": "42"},
            )
        )
        result = api.get_firebase_project("my-app")
        assert result.project_id == "my-app"
        assert result.display_name == "My App"

    @respx.mock
    def test_404_falls_back_to_resource_manager(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/gcp-only").mock(return_value=httpx.Response(404, json={}))
        respx.get(f"{CRM}/projects/gcp-only").mock(
            return_value=httpx.Response(
                200,
                json={
                    "projectId": "gcp-only",
                    "projectNumber": "7",
                    "name": "GCP Only",
                    "lifecycleState": "ACTIVE",
                    "parent": {"type": "organization", "id": "99"},
                },
            )
        )
        result = api.get_firebase_project("gcp-only")
        assert result.project_id == "gcp-only"
        assert result.display_name == "GCP Only"
        assert result.state == "ACTIVE"

    @respx.mock
    def test_404_fallback_failure(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/ghost").mock(return_value=httpx.Response(404, json={}))
        respx.get(f"{CRM}/projects/ghost").mock(return_value=httpx.Response(403, json={}))
        with pytest.raises(ProjectLookupError, match="Failed to get Firebase project ghost"):
            api.get_firebase_project("ghost")

    @pytest.mark.respx(assert_all_called=False)
    def test_other_errors_do_not_fall_back(self, respx_mock, api: ProjectsAPI):
        respx_mock.get(f"{FB}/projects/p").mock(return_value=httpx.Response(500, json={}))
        crm = respx_mock.get(f"{CRM}/projects/p")
        with pytest.raises(ProjectLookupError):
            api.get_firebase_project("p")
        assert crm.call_count == 0


class TestCheckFirebaseEnabled:
    @respx.mock
    def test_enabled(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/p1").mock(
            return_value=httpx.Response(200, json={"projectId": "p1"})
        )
        assert api.check_firebase_enabled_for_cloud_project("p1").project_id == "p1"

    @respx.mock
    def test_not_enabled(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/p1").mock(return_value=httpx.Response(404, json={}))
        assert api.check_firebase_enabled_for_cloud_project("p1") is None

    @respx.mock
    def test_error(self, api: ProjectsAPI):
        respx.get(f"{FB}/projects/p1").mock(return_value=httpx.Response(403, json={}))
        with pytest.raises(ProjectLookupError, match="Failed to check"):
            api.check_firebase_enabled_for_cloud_project("p1")


class TestCheckAndRecommendProjectId:
    @respx.mock
    def test_taken_with_suggestion(self, api: ProjectsAPI):
        route = respx.post(f"{FB_V1}/projects:checkProjectId").mock(
            return_value=httpx.Response(
                200,
                json={"projectIdStatus": "PROJECT_ID_TAKEN", "suggestedProjectId": "myapp-1"},
            )
        )
        result = api.check_and_recommend_project_id("myapp")
        assert result.is_available is False
        assert result.suggested_project_id == "myapp-1"
        assert json.loads(route.calls.last.request.content) == {"proposedId": "myapp"}

    @respx.mock
    def test_available(self, api: ProjectsAPI):
        respx.post(f"{FB_V1}/projects:checkProjectId").mock(
            return_value=httpx.Response(200, json={"projectIdStatus": "PROJECT_ID_AVAILABLE"})
        )
        result = api.check_and_recommend_project_id("fresh-app")
        assert result.is_available is True
        assert result.suggested_project_id is None

    @respx.mock
    def test_failure_wrapped(self, api: ProjectsAPI):
        respx.post(f"{FB_V1}/projects:checkProjectId").mock(
            return_value=httpx.Response(500, json={})
        )
        with pytest.raises(ProjectIdCheckError):
            api.check_and_recommend_project_id("myapp")

    @pytest.mark.parametrize(
        "reply",
        [
            httpx.Response(200, text="not json"),
            httpx.Response(200, json=["PROJECT_ID_AVAILABLE"]),
        ],
    )
    @respx.mock
    def test_unreadable_reply_wrapped(self, api: ProjectsAPI, reply: httpx.Response):
        respx.post(f"{FB_V1}/projects:checkProjectId").mock(return_value=reply)
        with pytest.raises(ProjectIdCheckError, match="Failed to check if project ID"):
            api.check_and_recommend_project_id("myapp")


class TestCreateCloudProject:
    @respx.mock
    def test_creates_and_polls(self, api: ProjectsAPI):
        create = respx.post(f"{CRM}/projects").mock(
            return_value=httpx.Response(200, json={"name": "operations/cp.1"})
        )
        respx.get(f"{CRM}/operations/cp.1").mock(
            return_value=httpx.Response(
                200, json={"done": True, "response": {"projectId": "new-app"}},
            )
        )
        parent = ParentResource(id="123", type=ParentResourceType.FOLDER)
        result = api.create_cloud_project("new-app", parent_resource=parent)
        assert result == {"projectId": "new-app"}
        assert json.loads(create.calls.last.request.content) == {
            "projectId": "new-app",
            "name": "new-app",
            "parent": {"id": "123", "type": "folder"},
        }

    @respx.mock
    def test_display_name_used(self, api: ProjectsAPI):
        create = respx.post(f"{CRM}/projects").mock(
            return_value=httpx.Response(200, json={"name": "operations/cp.2"})
        )
        respx.get(f"{CRM}/operations/cp.2").mock(
            return_value=httpx.Response(200, json={"done": True, "response": {}})
        )
        api.create_cloud_project("new-app", "New App")
        body = json.loads(create.calls.last.request.content)
        assert body["name"] == "New App"
        assert "parent" not in body

    @respx.mock
    def test_conflict_is_already_exists(self, api: ProjectsAPI):
        respx.post(f"{CRM}/projects").mock(return_value=httpx.Response(409, json={}))
        with pytest.raises(ProjectExistsError, match="already a project with ID taken-app") as exc_info:
            api.create_cloud_project("taken-app")
        assert isinstance(exc_info.value.original, ConflictError)
        assert exc_info.value.exit_code == 2

    @respx.mock
    def test_other_failure_is_generic(self, api: ProjectsAPI):
        respx.post(f"{CRM}/projects").mock(return_value=httpx.Response(400, json={}))
        with pytest.raises(ProjectCreationError) as exc_info:
            api.create_cloud_project("bad-app")
        assert not isinstance(exc_info.value, ProjectExistsError)
        assert "Failed to create project." in str(exc_info.value)

    @respx.mock
    def test_operation_failure_is_generic(self, api: ProjectsAPI):
        respx.post(f"{CRM}/projects").mock(
            return_value=httpx.Response(200, json={"name": "operations/cp.3"})
        )
        respx.get(f"{CRM}/operations/cp.3").mock(
            return_value=httpx.Response(200, json={"done": True, "error": {"message": "quota"}})
        )
        with pytest.raises(ProjectCreationError) as exc_info:
            api.create_cloud_project("quota-app")
        assert not isinstance(exc_info.value, ProjectExistsError)
        assert isinstance(exc_info.value.original, OperationError)


class TestAddFirebase:
    @respx.mock
    def test_adds_and_polls(self, api: ProjectsAPI):
        respx.post(f"{FB}/projects/new-app:addFirebase").mock(
            return_value=httpx.Response(200, json={"name": "operations/af.1"})
        )
        respx.get(f"{FB}/operations/af.1").mock(
            return_value=httpx.Response(
                200,
                json={
                    "done": True,
                    "response": {"projectId": "new-app", "displayName": "New App"},
                },
            )
        )
        result = api.add_firebase_to_cloud_project("new-app")
        assert result.project_id == "new-app"
        assert result.display_name == "New App"

    @respx.mock
    def test_failure(self, api: ProjectsAPI):
        respx.post(f"{FB}/projects/new-app:addFirebase").mock(
            return_value=httpx.Response(403, json={})
        )
        with pytest.raises(FirebaseEnableError, match="Failed to add Firebase"):
            api.add_firebase_to_cloud_project("new-app")
