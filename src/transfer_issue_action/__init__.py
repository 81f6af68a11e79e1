"""
Issue Transfer Action

Transfers an issue to another repository of the same owner, optionally leaving
a closed and locked stub issue behind and labeling the transferred issue.
"""

from __future__ import annotations

from .cli import main
from .config import ActionInputs
from .events import EventSource, FixtureEventSource, GitHubEventSource
from .exceptions import ConfigurationError, ContextError, RemoteCallError, TransferError, VerificationError
from .utils import setup_logging
from .workflow import Failed, Skipped, Transferred, TransferWorkflow, WorkflowResult, should_transfer

# Package version
__version__ = "0.1.0"

__all__ = [
    "ActionInputs",
    "ConfigurationError",
    "ContextError",
    "EventSource",
    "Failed",
    "FixtureEventSource",
    "GitHubEventSource",
    "RemoteCallError",
    "Skipped",
    "TransferError",
    "TransferWorkflow",
    "Transferred",
    "VerificationError",
    "WorkflowResult",
    "main",
    "setup_logging",
    "should_transfer",
]
