"""Event sources supplying the context a transfer runs against.

The workflow never reads the webhook payload itself. It asks an EventSource
for the repository, issue and trigger label:

1. GitHubEventSource: reads the payload of the real triggering event
   (``GITHUB_EVENT_PATH``)
2. FixtureEventSource: supplies a synthetic issue and label so the workflow
   can be exercised without a live label event

The caller picks one with select_event_source().
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

from .exceptions import ContextError
from .models import SourceIssue, SourceRepository, TriggerLabel

if TYPE_CHECKING:
    from .config import ActionInputs

logger: logging.Logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Protocol for the context of the triggering event."""

    def get_repository(self) -> SourceRepository | None:
        """Return the repository the event came from, or None if the event has none."""
        ...

    def get_issue(self) -> SourceIssue | None:
        """Return the issue to transfer, or None if the event has no issue context."""
        ...

    def get_label(self) -> TriggerLabel | None:
        """Return the label that triggered the event, if any."""
        ...


def _malformed(section: str, error: Exception) -> ContextError:
    msg = f"Event payload has a malformed {section} context: {error!r}"
    return ContextError(msg)


class GitHubEventSource:
    """Context read from a GitHub webhook event payload."""

    def __init__(self, payload: Mapping[str, Any]) -> None:
        self.payload: Mapping[str, Any] = payload

    @classmethod
    def from_path(cls, event_path: str | Path) -> GitHubEventSource:
        try:
            with Path(event_path).open(encoding="utf-8") as f:
                payload = json.load(f)
        except (OSError, ValueError) as e:
            msg = f"Could not read event payload from {event_path}: {e}"
            raise ContextError(msg) from e
        if not isinstance(payload, dict):
            msg = f"Event payload in {event_path} is not a JSON object"
            raise ContextError(msg)
        return cls(payload)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> GitHubEventSource:
        env = os.environ if environ is None else environ
        event_path = env.get("GITHUB_EVENT_PATH")
        if not event_path:
            logger.debug("GITHUB_EVENT_PATH is not set, using an empty event payload")
            return cls({})
        return cls.from_path(event_path)

    def get_repository(self) -> SourceRepository | None:
        repository = self.payload.get("repository")
        if not repository:
            return None
        try:
            return SourceRepository(
                owner_login=repository["owner"]["login"],
                name=repository["name"],
                node_id=repository.get("node_id", ""),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise _malformed("repository", e) from e

    def get_issue(self) -> SourceIssue | None:
        issue = self.payload.get("issue")
        if not issue:
            return None
        try:
            return SourceIssue(
                node_id=issue["node_id"],
                author_login=(issue.get("user") or {}).get("login", ""),
                title=issue.get("title"),
                body=issue.get("body"),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise _malformed("issue", e) from e

    def get_label(self) -> TriggerLabel | None:
        label = self.payload.get("label")
        if not label:
            return None
        try:
            return TriggerLabel(name=label["name"])
        except (KeyError, TypeError) as e:
            raise _malformed("label", e) from e


class FixtureEventSource:
    """Synthetic issue and label on top of another source's repository.

    The synthetic issue is attributed to the repository owner.
    """

    def __init__(
        self,
        base: EventSource,
        issue_id: str,
        label_name: str,
        *,
        body: str | None = None,
        title: str | None = None,
    ) -> None:
        self.base: EventSource = base
        self.issue_id: str = issue_id
        self.label_name: str = label_name
        self.body: str | None = body
        self.title: str | None = title

    def get_repository(self) -> SourceRepository | None:
        return self.base.get_repository()

    def get_issue(self) -> SourceIssue | None:
        if not self.issue_id:
            return None
        repository = self.get_repository()
        return SourceIssue(
            node_id=self.issue_id,
            author_login=repository.owner_login if repository else "",
            title=self.title or None,
            body=self.body or None,
        )

    def get_label(self) -> TriggerLabel | None:
        return TriggerLabel(name=self.label_name)


def select_event_source(inputs: ActionInputs, environ: Mapping[str, str] | None = None) -> EventSource:
    """Pick the event source for a run.

    The fixture source is used when both ``issueId`` and ``testLabel`` inputs
    are supplied. Otherwise context comes from the triggering event.
    """
    event_source = GitHubEventSource.from_env(environ)
    if not inputs.test_mode:
        return event_source
    return FixtureEventSource(
        event_source,
        inputs.issue_id,
        inputs.test_label,
        body=inputs.test_body,
        title=inputs.test_title,
    )
