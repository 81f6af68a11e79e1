"""Data models for the issue transfer workflow.

These are transient values built from the triggering event and from API
responses. Nothing here is persisted between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

DEFAULT_LABEL_COLOR: Final[str] = "e327ae"
DEFAULT_SERVER_URL: Final[str] = "https://github.com"


@dataclass(frozen=True)
class SourceRepository:
    """Repository the triggering event came from."""

    owner_login: str
    name: str
    node_id: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.owner_login}/{self.name}"


@dataclass(frozen=True)
class SourceIssue:
    """Issue being transferred."""

    node_id: str
    author_login: str
    title: str | None = None
    body: str | None = None


@dataclass(frozen=True)
class TriggerLabel:
    """Label whose application triggered the run. Only used for logging."""

    name: str


@dataclass(frozen=True)
class TargetRepository:
    """Destination repository. Always owned by the source repository owner."""

    owner_login: str
    name: str
    node_id: str

    @property
    def full_name(self) -> str:
        return f"{self.owner_login}/{self.name}"


@dataclass(frozen=True)
class TransferResult:
    """Identity of the issue created in the target repository by a transfer."""

    new_issue_number: int
    new_issue_url: str


@dataclass(frozen=True)
class StubIssue:
    """Placeholder issue left behind in the source repository."""

    number: int


@dataclass(frozen=True)
class LabelSpec:
    """Label to apply to the transferred issue."""

    name: str
    color: str = DEFAULT_LABEL_COLOR  # Hex color without '#' prefix


@dataclass
class TransferOutputs:
    """Values exposed as action outputs."""

    new_issue_number: int
    new_issue_url: str
    destination_repo: str
    stub_issue_number: int | None = None

    def as_dict(self) -> dict[str, str]:
        outputs = {
            "new_issue_number": str(self.new_issue_number),
            "new_issue_url": self.new_issue_url,
            "destination_repo": self.destination_repo,
        }
        if self.stub_issue_number is not None:
            outputs["stub_issue_number"] = str(self.stub_issue_number)
        return outputs


def build_issue_url(server_url: str, owner_login: str, repo_name: str, issue_number: int) -> str:
    """Build the web URL of an issue. GitHub does not return it from the transfer mutation."""
    return f"{server_url.rstrip('/')}/{owner_login}/{repo_name}/issues/{issue_number}"
