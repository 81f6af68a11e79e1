"""
Label handling for transferred issues.
"""

from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Final

from github import GithubException

from .models import LabelSpec

if TYPE_CHECKING:
    from .utils import StepLogger
    from github.Repository import Repository as GithubRepository

logger: logging.Logger = logging.getLogger(__name__)

_HEX_COLOR: Final[re.Pattern[str]] = re.compile(r"[0-9a-fA-F]{6}")


def _is_already_exists_error(exc: GithubException) -> bool:
    """Check if a GithubException is a 422 'already_exists' validation error."""
    if not isinstance(exc.data, dict):
        return False
    errors: object = exc.data.get("errors")  # pyright: ignore[reportUnknownVariableType]
    if not isinstance(errors, list):
        return False
    return any(isinstance(e, dict) and e.get("code") == "already_exists" for e in errors)  # pyright: ignore[reportUnknownArgumentType,reportUnknownVariableType]


def parse_label_spec(value: str) -> LabelSpec:
    """Parse an ``apply_label`` value of the form ``name`` or ``name:colorHex``.

    The color is the segment between the first and second colon; anything after
    a second colon is ignored. A missing or empty color falls back to
    DEFAULT_LABEL_COLOR. A leading '#' on the color is dropped since GitHub
    expects bare hex.

    Raises:
        ValueError: If the name is empty or the color is not six hex digits
    """
    parts = value.split(":")
    name = parts[0].strip()
    if not name:
        msg = f"Invalid label format: {value}"
        raise ValueError(msg)
    color = parts[1].strip().lstrip("#") if len(parts) > 1 else ""
    if not color:
        return LabelSpec(name=name)
    if not _HEX_COLOR.fullmatch(color):
        msg = f"Invalid label color '{color}', expected six hex digits"
        raise ValueError(msg)
    return LabelSpec(name=name, color=color)


def ensure_label(github_repo: GithubRepository, spec: LabelSpec, log: StepLogger = logger) -> bool:
    """Create the label in the repository unless one with the same name exists.

    Matching is an exact, case-sensitive comparison on the label name.

    Args:
        github_repo: Repository that should own the label
        spec: Label name and color
        log: Logger for this run

    Returns:
        True if the label was created, False if it already existed
    """
    existing_names = [label.name for label in github_repo.get_labels()]
    log.debug(f"Repository {github_repo.full_name} has labels {existing_names}")

    if spec.name in existing_names:
        log.debug(f"Using existing label: {spec.name}")
        return False

    try:
        github_repo.create_label(name=spec.name, color=spec.color)
    except GithubException as e:
        if e.status == 422 and _is_already_exists_error(e):
            # Label appeared between get_labels() and create_label()
            log.debug(f"Label already existed: {spec.name}")
            return False
        raise
    log.info(f"Created label {spec.name} with color {spec.color} in {github_repo.full_name}")
    return True


def apply_label(github_repo: GithubRepository, issue_number: int, label_name: str, log: StepLogger = logger) -> None:
    """Set the issue's labels to exactly ``[label_name]``.

    This replaces any labels the issue already carries.
    """
    issue = github_repo.get_issue(issue_number)
    issue.edit(labels=[label_name])
    log.info(f"Applied label {label_name} to {github_repo.full_name}#{issue_number}")
