"""Issue transfer workflow.

A run proceeds strictly top to bottom:

1. Input resolution: configuration from ActionInputs, context from an EventSource
2. Guard evaluation: required context, then the body-pattern guard
3. Target verification
4. Transfer (GraphQL ``transferIssue``)
5. Stub creation in the source repository (optional)
6. Labeling of the transferred issue (optional)

Error Handling
--------------
run() never raises for the known failure modes. It returns one of:

- Transferred: the issue was moved, with its outputs
- Skipped: the body-pattern guard declined the transfer (success, no outputs)
- Failed: a TransferError, plus any outputs produced before the failure

There are no retries and no compensation: a stub created but never locked is
left as it is.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

import requests
from github import Github, GithubException

from . import github_utils as ghu
from .exceptions import ContextError, RemoteCallError, TransferError
from .labels import apply_label, ensure_label
from .models import SourceIssue, SourceRepository, TargetRepository, TransferOutputs, TransferResult
from .stub import create_stub
from .utils import make_run_logger

if TYPE_CHECKING:
    from .utils import StepLogger
    from .config import ActionInputs
    from .events import EventSource


@dataclass
class Transferred:
    """The issue was transferred."""

    outputs: TransferOutputs


@dataclass
class Skipped:
    """The run ended successfully without transferring."""

    reason: str


@dataclass
class Failed:
    """The run failed. ``outputs`` holds whatever was produced before the failure."""

    error: TransferError
    outputs: TransferOutputs | None = None


WorkflowResult = Transferred | Skipped | Failed


@dataclass
class RunContext:
    """Per-run state handed to each remote step."""

    client: Github
    owner_login: str
    server_url: str
    log: StepLogger


def should_transfer(issue_body: str | None, pattern: str | None) -> bool:
    """Return False only when both body and pattern are present and the body does not match."""
    if not issue_body or not pattern:
        return True
    return re.search(pattern, issue_body) is not None


class TransferWorkflow:
    """Transfers one issue per run."""

    def __init__(
        self,
        inputs: ActionInputs,
        event_source: EventSource,
        *,
        client_factory: Callable[[str], Github] = ghu.get_client,
        log: StepLogger | None = None,
    ) -> None:
        self.inputs: ActionInputs = inputs
        self.event_source: EventSource = event_source
        self.client_factory: Callable[[str], Github] = client_factory
        self.log: StepLogger = log if log is not None else make_run_logger(debug=inputs.debug_enabled)
        self._outputs: TransferOutputs | None = None

    def run(self) -> WorkflowResult:
        """Execute the workflow and report how it ended."""
        self._outputs = None
        try:
            return self._run()
        except TransferError as e:
            return Failed(error=e, outputs=self._outputs)
        except (GithubException, requests.RequestException) as e:
            remote_error = RemoteCallError(str(e))
            remote_error.__cause__ = e
            return Failed(error=remote_error, outputs=self._outputs)

    def resolve_context(self) -> tuple[SourceRepository, SourceIssue]:
        """Validate inputs and fetch the event context, before any remote call.

        Raises:
            ConfigurationError: If a required input is missing or invalid
            ContextError: If the event has no issue or no repository context
        """
        self.inputs.validate()

        source_issue = self.event_source.get_issue()
        if source_issue is None:
            msg = "Action must run on an event that has an issue context!"
            raise ContextError(msg)
        source_repo = self.event_source.get_repository()
        if source_repo is None:
            msg = "Action must run on event that has a repository context!"
            raise ContextError(msg)

        trigger_label = self.event_source.get_label()
        self.log.debug(f"Source issue is {source_issue}")
        self.log.debug(f"Source repository is {source_repo}")
        self.log.debug(f"Label trigger is {trigger_label}")
        self.log.debug(f"Target repo is set to {self.inputs.target_repo}")
        self.log.debug(f"Body regexp is set to {self.inputs.req_regexp_match!r}")
        if self.inputs.req_label and trigger_label is not None and trigger_label.name != self.inputs.req_label:
            self.log.info(
                f"Trigger label '{trigger_label.name}' differs from req_label '{self.inputs.req_label}'; continuing"
            )
        return source_repo, source_issue

    def _run(self) -> WorkflowResult:
        source_repo, source_issue = self.resolve_context()

        pattern = self.inputs.req_regexp_match
        self.log.debug(f"Will transfer issue if the regex '{pattern}' matches the body:\n{source_issue.body}")
        if not should_transfer(source_issue.body, pattern):
            reason = f'Issue not transferred because body doesn\'t match "{pattern}"'
            self.log.info(reason)
            return Skipped(reason=reason)

        ctx = RunContext(
            client=self.client_factory(self.inputs.token),
            owner_login=source_repo.owner_login,
            server_url=self.inputs.server_url,
            log=self.log,
        )

        target_github_repo, target = ghu.get_target_repo(
            ctx.client, ctx.owner_login, self.inputs.target_repo, log=ctx.log
        )
        result = self._transfer(ctx, source_repo, source_issue, target)

        outputs = TransferOutputs(
            new_issue_number=result.new_issue_number,
            new_issue_url=result.new_issue_url,
            destination_repo=target.name,
        )
        self._outputs = outputs

        if self.inputs.stub_enabled:
            source_github_repo = ctx.client.get_repo(source_repo.full_name)
            stub = create_stub(source_github_repo, source_issue, result.new_issue_url, log=ctx.log)
            outputs.stub_issue_number = stub.number

        label_spec = self.inputs.label_spec
        if label_spec is not None:
            ctx.log.debug(f'Apply label "{label_spec.name}" to {result.new_issue_url} with color {label_spec.color}')
            ensure_label(target_github_repo, label_spec, log=ctx.log)
            apply_label(target_github_repo, result.new_issue_number, label_spec.name, log=ctx.log)

        return Transferred(outputs=outputs)

    def _transfer(
        self, ctx: RunContext, source_repo: SourceRepository, source_issue: SourceIssue, target: TargetRepository
    ) -> TransferResult:
        result = ghu.transfer_issue(ctx.client, source_issue.node_id, target, server_url=ctx.server_url, log=ctx.log)
        ctx.log.info(
            f"Transferred {source_repo.name}:{source_issue.node_id} to {target.name}#{result.new_issue_number}"
        )
        return result

