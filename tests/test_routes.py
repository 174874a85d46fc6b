"""
HTTP surface tests: /rulesets/validate and the error envelope.
"""

import os

import pytest
from fastapi.testclient import TestClient

from ruleset_validator.domain.exceptions import GitCommandError
from ruleset_validator.interface.app import create_app
from ruleset_validator.interface.dependencies import get_use_case


@pytest.fixture
def client(use_case) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_use_case] = lambda: use_case
    return TestClient(app, raise_server_exceptions=False)


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_validate_returns_ruleset(client, mock_ruleset_files):
    mock_ruleset_files(module_name="rules_foo")

    response = client.post("/rulesets/validate", json={"repository": "bar/foo"})

    assert response.status_code == 200
    body = response.json()
    disk_path = os.path.join("/workspace", "bar", "foo", "main")
    assert body["canonical_name"] == "bar/foo"
    assert body["module_name"] == "rules_foo"
    assert body["branch"] == "main"
    assert body["disk_path"] == disk_path
    assert body["module_file_path"] == os.path.join(disk_path, "MODULE.bazel")
    assert body["presubmit_path"] == os.path.join(disk_path, ".bcr", "presubmit.yml")


def test_missing_files_are_listed(client, mock_ruleset_files):
    mock_ruleset_files(skip_metadata_file=True, skip_presubmit_file=True)

    response = client.post("/rulesets/validate", json={"repository": "bar/foo", "branch": "main"})

    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert body["missing_files"] == [
        os.path.join(".bcr", "metadata.template.json"),
        os.path.join(".bcr", "presubmit.yml"),
    ]


def test_invalid_module_file(client, mock_ruleset_files):
    mock_ruleset_files(missing_module_name=True, module_file_deps=True)

    response = client.post("/rulesets/validate", json={"repository": "bar/foo"})

    assert response.status_code == 422
    assert "name" in response.json()["message"]
    assert "missing_files" not in response.json()


def test_invalid_repository_name(client):
    response = client.post("/rulesets/validate", json={"repository": "just-a-name"})

    assert response.status_code == 422
    assert "owner" in response.json()["message"]


def test_blank_branch_is_a_validation_error(client):
    response = client.post("/rulesets/validate", json={"repository": "bar/foo", "branch": "  "})

    assert response.status_code == 422
    assert "branch" in response.json()["message"]


def test_git_failure_maps_to_bad_gateway(client, version_control):
    version_control.error = GitCommandError("'git clone' exited with status 128")

    response = client.post("/rulesets/validate", json={"repository": "bar/foo"})

    assert response.status_code == 502
    assert response.json()["status"] == "error"


def test_unexpected_errors_are_hidden(client, version_control):
    version_control.error = RuntimeError("boom")

    response = client.post("/rulesets/validate", json={"repository": "bar/foo"})

    assert response.status_code == 500
    assert "boom" not in response.json()["message"]


@pytest.mark.parametrize("repository", ["../foo", "./foo", "../.."])
def test_dot_segment_owner_is_rejected(client, version_control, repository):
    response = client.post("/rulesets/validate", json={"repository": repository})

    assert response.status_code == 422
    assert version_control.calls == []


@pytest.mark.parametrize("branch", ["--detach", "-b", "a..b"])
def test_option_like_or_invalid_branch_is_rejected(client, version_control, branch):
    response = client.post("/rulesets/validate", json={"repository": "bar/foo", "branch": branch})

    assert response.status_code == 422
    assert version_control.calls == []
