"""
Pytest configuration and fixtures.

The GitHub API is never reached: every test works against Mock objects shaped
like the PyGithub client, and ``calls`` records the order of remote calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from unittest.mock import Mock

import pytest

from transfer_issue_action.config import ActionInputs
from transfer_issue_action.events import GitHubEventSource

OWNER = "acme"
SOURCE_REPO = "app"
TARGET_REPO = "app-archive"
NEW_ISSUE_NUMBER = 42
STUB_ISSUE_NUMBER = 7


def make_label(name: str) -> Mock:
    label = Mock()
    label.name = name
    return label


@dataclass
class FakeGitHub:
    """A mocked PyGithub client with source and target repositories wired in."""

    client: Mock
    source_repo: Mock
    target_repo: Mock
    stub: Mock
    new_issue: Mock
    calls: list[str] = field(default_factory=list)

    def graphql_variables(self) -> dict[str, Any]:
        return self.client.requester.graphql_query.call_args.args[1]


def _recording(calls: list[str], name: str, return_value: Any = None) -> Mock:  # noqa: ANN401
    def record(*_args: Any, **_kwargs: Any) -> Any:  # noqa: ANN401
        calls.append(name)
        return return_value

    return Mock(side_effect=record)


@pytest.fixture
def fake_github() -> FakeGitHub:
    calls: list[str] = []

    target_repo = Mock()
    target_repo.full_name = f"{OWNER}/{TARGET_REPO}"
    target_repo.node_id = "R_target"
    target_repo.get_labels = _recording(calls, "list_labels", [make_label("enhancement")])
    target_repo.create_label = _recording(calls, "create_label")

    new_issue = Mock()
    new_issue.number = NEW_ISSUE_NUMBER
    new_issue.edit = _recording(calls, "apply_label")
    target_repo.get_issue = Mock(return_value=new_issue)

    stub = Mock()
    stub.number = STUB_ISSUE_NUMBER
    stub.create_comment = _recording(calls, "stub_comment")
    stub.edit = _recording(calls, "stub_close")
    stub.lock = _recording(calls, "stub_lock")

    source_repo = Mock()
    source_repo.full_name = f"{OWNER}/{SOURCE_REPO}"
    source_repo.create_issue = _recording(calls, "stub_create", stub)

    repos = {target_repo.full_name: target_repo, source_repo.full_name: source_repo}
    client = Mock()
    client.get_repo = Mock(side_effect=lambda path: repos[path])
    client.requester.graphql_query = _recording(
        calls,
        "transfer",
        ({}, {"data": {"transferIssue": {"issue": {"number": NEW_ISSUE_NUMBER}}}}),
    )

    return FakeGitHub(
        client=client,
        source_repo=source_repo,
        target_repo=target_repo,
        stub=stub,
        new_issue=new_issue,
        calls=calls,
    )


@pytest.fixture
def event_payload() -> dict[str, Any]:
    return {
        "action": "labeled",
        "repository": {"name": SOURCE_REPO, "node_id": "R_source", "owner": {"login": OWNER}},
        "issue": {
            "node_id": "I_1",
            "number": 3,
            "title": "Crash on start",
            "body": "please move",
            "user": {"login": "octocat"},
        },
        "label": {"name": "move"},
    }


@pytest.fixture
def event_source(event_payload: dict[str, Any]) -> GitHubEventSource:
    return GitHubEventSource(event_payload)


@pytest.fixture
def inputs() -> ActionInputs:
    return ActionInputs(target_repo=TARGET_REPO, token="test-token", create_stub="false")  # noqa: S106
