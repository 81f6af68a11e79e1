"""Placeholder ("stub") issue left behind in the source repository after a transfer."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Final

from .models import SourceIssue, StubIssue

if TYPE_CHECKING:
    from .utils import StepLogger
    from github.Repository import Repository as GithubRepository

logger: logging.Logger = logging.getLogger(__name__)

STUB_FALLBACK_TITLE: Final[str] = "Issue Stub Test"
STUB_FALLBACK_BODY: Final[str] = "This is an automatically generated issue stub created for testing purposes."
STUB_LOCK_REASON: Final[str] = "off-topic"


def build_stub_comment(author_login: str, new_issue_url: str) -> str:
    """Build the comment pointing the original author to the moved issue."""
    body = f"@{author_login} this is a stub issue that has been created as a placeholder in this repo."
    body += "\n\n"
    body += f"Your original issue has been moved to [{new_issue_url}]({new_issue_url})"
    return body


def create_stub(
    source_repo: GithubRepository,
    source_issue: SourceIssue,
    new_issue_url: str,
    log: StepLogger = logger,
) -> StubIssue:
    """Create, comment on, close and lock a stub issue in the source repository.

    Each step is a separate API call. Nothing is rolled back if a later step
    fails, so a stub may be left open or unlocked.
    """
    log.debug("Creating issue stub")
    stub = source_repo.create_issue(
        title=source_issue.title or STUB_FALLBACK_TITLE,
        body=source_issue.body or STUB_FALLBACK_BODY,
    )
    log.debug(f"Stub issue created with issue number {stub.number}")

    stub.create_comment(build_stub_comment(source_issue.author_login, new_issue_url))
    log.debug("Stub issue comment created")

    stub.edit(state="closed")
    log.debug("Stub issue closed")

    stub.lock(STUB_LOCK_REASON)
    log.debug("Stub issue locked")

    log.info(f"Created stub issue {source_repo.full_name}#{stub.number}")
    return StubIssue(number=stub.number)
