"""
Custom exception classes for the issue transfer action.
"""

from __future__ import annotations


class TransferError(Exception):
    """Base exception for transfer workflow errors."""


class ConfigurationError(TransferError):
    """Raised when a required input is missing or an input is invalid."""


class ContextError(TransferError):
    """Raised when the triggering event lacks issue or repository context."""


class VerificationError(TransferError):
    """Raised when the target repository cannot be accessed."""


class RemoteCallError(TransferError):
    """Raised when a GitHub API call fails during transfer, stub or labeling steps."""
