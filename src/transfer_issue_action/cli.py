"""
Command-line interface for the issue transfer action.

Inputs are read from the ``INPUT_*`` environment variables set by the Actions
runner. Command-line flags override them.
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import os
import sys
from collections.abc import Mapping, Sequence

from . import actions
from .config import ActionInputs
from .events import select_event_source
from .exceptions import ContextError
from .utils import setup_logging
from .workflow import Failed, Skipped, Transferred, TransferWorkflow, WorkflowResult

# Flags sharing their name with an ActionInputs field
_OVERRIDES: tuple[str, ...] = (
    "target_repo",
    "token",
    "req_regexp_match",
    "req_label",
    "create_stub",
    "apply_label",
    "debug",
    "issue_id",
    "test_label",
    "test_body",
    "test_title",
)


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Transfer an issue to another repository of the same owner")

    _ = parser.add_argument("--target-repo", "-t", dest="target_repo", help="Destination repository name")
    _ = parser.add_argument("--token", help="GitHub token (defaults to the INPUT_TOKEN environment variable)")
    _ = parser.add_argument(
        "--req-regexp-match", dest="req_regexp_match", help="Only transfer when the issue body matches this regex"
    )
    _ = parser.add_argument("--req-label", dest="req_label", help="Label expected to trigger the transfer")
    _ = parser.add_argument(
        "--create-stub", dest="create_stub", help='Leave a closed, locked stub issue behind unless "false"'
    )
    _ = parser.add_argument(
        "--apply-label",
        "-l",
        dest="apply_label",
        help='Label to apply to the new issue (format: "name" or "name:color"), or "false"',
    )
    _ = parser.add_argument("--debug", help='Enable verbose logging unless "false"')

    test_group = parser.add_argument_group("test mode")
    _ = test_group.add_argument("--issue-id", dest="issue_id", help="Node id of the issue to transfer")
    _ = test_group.add_argument("--test-label", dest="test_label", help="Label name standing in for the trigger")
    _ = test_group.add_argument("--test-body", dest="test_body", help="Body of the synthetic issue")
    _ = test_group.add_argument("--test-title", dest="test_title", help="Title of the synthetic issue")

    return parser.parse_args(argv)


def resolve_inputs(args: argparse.Namespace, environ: Mapping[str, str] | None = None) -> ActionInputs:
    """Build ActionInputs from the environment, then apply command-line overrides."""
    inputs = ActionInputs.from_env(environ)
    overrides = {name: getattr(args, name) for name in _OVERRIDES if getattr(args, name, None) is not None}
    return dataclasses.replace(inputs, **overrides)


def report(result: WorkflowResult, environ: Mapping[str, str] | None = None) -> int:
    """Present a workflow result to the runner and return the exit code."""
    match result:
        case Transferred(outputs=outputs):
            actions.set_outputs(outputs.as_dict(), environ)
            return 0
        case Skipped(reason=reason):
            actions.notice(reason)
            return 0
        case Failed(error=error, outputs=outputs):
            if outputs is not None:
                actions.set_outputs(outputs.as_dict(), environ)
            actions.error(str(error))
            return 1
    return 1


def main(argv: Sequence[str] | None = None) -> None:
    """Main entry point."""
    args = parse_arguments(argv)
    environ = os.environ
    inputs = resolve_inputs(args, environ)

    # Setup logging. The debug input only raises the level of the run logger.
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        if inputs.test_mode:
            actions.warning(f"Test mode enabled. Forcing usage with issue:label {inputs.issue_id}:{inputs.test_label}")
        try:
            event_source = select_event_source(inputs, environ)
        except ContextError as e:
            result: WorkflowResult = Failed(error=e)
        else:
            result = TransferWorkflow(inputs, event_source).run()
    except Exception as e:
        logger.exception("Issue transfer failed")
        actions.error(str(e))
        sys.exit(1)

    sys.exit(report(result, environ))
