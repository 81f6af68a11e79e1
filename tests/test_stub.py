from unittest.mock import Mock, call

import pytest

from transfer_issue_action.models import SourceIssue, StubIssue
from transfer_issue_action.stub import (
    STUB_FALLBACK_BODY,
    STUB_FALLBACK_TITLE,
    build_stub_comment,
    create_stub,
)

URL = "https://github.com/acme/app-archive/issues/42"


@pytest.mark.unit
class TestCreateStub:
    """Test stub issue creation."""

    def _repo_with_stub(self, number: int = 7) -> tuple[Mock, Mock]:
        stub = Mock()
        stub.number = number
        source_repo = Mock()
        source_repo.full_name = "acme/app"
        source_repo.create_issue.return_value = stub
        return source_repo, stub

    def test_copies_title_and_body(self) -> None:
        source_repo, stub = self._repo_with_stub()
        issue = SourceIssue(node_id="I_1", author_login="octocat", title="Crash", body="Steps to reproduce")

        result = create_stub(source_repo, issue, URL)

        assert result == StubIssue(number=7)
        source_repo.create_issue.assert_called_once_with(title="Crash", body="Steps to reproduce")
        assert stub.mock_calls == [
            call.create_comment(build_stub_comment("octocat", URL)),
            call.edit(state="closed"),
            call.lock("off-topic"),
        ]

    def test_fallback_title_and_body(self) -> None:
        source_repo, _ = self._repo_with_stub()
        issue = SourceIssue(node_id="I_1", author_login="octocat")

        create_stub(source_repo, issue, URL)

        source_repo.create_issue.assert_called_once_with(title=STUB_FALLBACK_TITLE, body=STUB_FALLBACK_BODY)

    def test_comment_text(self) -> None:
        assert build_stub_comment("octocat", URL) == (
            "@octocat this is a stub issue that has been created as a placeholder in this repo.\n\n"
            f"Your original issue has been moved to [{URL}]({URL})"
        )
