"""
Action inputs for the issue transfer workflow.

The Actions runner exposes each ``with:`` input as an ``INPUT_<NAME>``
environment variable, with the name upper-cased and spaces replaced by
underscores.
"""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Final

from .exceptions import ConfigurationError
from .labels import parse_label_spec
from .models import DEFAULT_SERVER_URL, LabelSpec

DISABLED: Final[str] = "false"

_DEFAULTS: Final[dict[str, str]] = {
    "create_stub": "true",
    "apply_label": DISABLED,
    "debug": DISABLED,
}


def input_env_var(name: str) -> str:
    """Return the environment variable the runner uses for an action input."""
    return "INPUT_" + name.replace(" ", "_").upper()


def get_input(environ: Mapping[str, str], name: str) -> str:
    """Read an action input, falling back to its default when it was not provided."""
    value = environ.get(input_env_var(name))
    if value is None:
        return _DEFAULTS.get(name, "")
    return value.strip()


def is_enabled(value: str) -> bool:
    """Any value other than the literal string "false" enables a toggle."""
    return value != DISABLED


@dataclass
class ActionInputs:
    """Resolved configuration for one run."""

    target_repo: str
    token: str
    req_regexp_match: str = ""
    req_label: str = ""
    create_stub: str = _DEFAULTS["create_stub"]
    apply_label: str = _DEFAULTS["apply_label"]
    debug: str = _DEFAULTS["debug"]
    # Test mode only
    issue_id: str = ""
    test_label: str = ""
    test_body: str = ""
    test_title: str = ""
    server_url: str = DEFAULT_SERVER_URL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ActionInputs:
        env = os.environ if environ is None else environ
        return cls(
            target_repo=get_input(env, "target_repo"),
            token=get_input(env, "token"),
            req_regexp_match=get_input(env, "req_regexp_match"),
            req_label=get_input(env, "req_label"),
            create_stub=get_input(env, "create_stub"),
            apply_label=get_input(env, "apply_label"),
            debug=get_input(env, "debug"),
            issue_id=get_input(env, "issueId"),
            test_label=get_input(env, "testLabel"),
            test_body=get_input(env, "testBody"),
            test_title=get_input(env, "testTitle"),
            server_url=env.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
        )

    def validate(self) -> None:
        """Check required inputs and the body pattern before any remote call.

        Raises:
            ConfigurationError: If ``target_repo`` or ``token`` is missing, or if
                ``req_regexp_match`` is not a valid regular expression
        """
        if not self.target_repo:
            msg = "`target_repo` input must be defined"
            raise ConfigurationError(msg)
        if not self.token:
            msg = "`token` input must be defined"
            raise ConfigurationError(msg)
        if "/" in self.target_repo:
            msg = f"`target_repo` must be a repository name owned by the source owner, got '{self.target_repo}'"
            raise ConfigurationError(msg)
        if self.req_regexp_match:
            try:
                re.compile(self.req_regexp_match)
            except re.error as e:
                msg = f"Invalid `req_regexp_match` pattern '{self.req_regexp_match}': {e}"
                raise ConfigurationError(msg) from e
        try:
            _ = self.label_spec
        except ValueError as e:
            msg = f"Invalid `apply_label` value '{self.apply_label}': {e}"
            raise ConfigurationError(msg) from e

    @property
    def stub_enabled(self) -> bool:
        return is_enabled(self.create_stub)

    @property
    def debug_enabled(self) -> bool:
        return is_enabled(self.debug)

    @property
    def test_mode(self) -> bool:
        return bool(self.issue_id and self.test_label)

    @property
    def label_spec(self) -> LabelSpec | None:
        """Parsed ``apply_label`` input, or None when labeling is disabled."""
        if not is_enabled(self.apply_label) or not self.apply_label:
            return None
        return parse_label_spec(self.apply_label)
