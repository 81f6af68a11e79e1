"""
GitHub Actions runner integration: annotations and step outputs.
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import TextIO

logger: logging.Logger = logging.getLogger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str, stream: TextIO | None = None) -> None:
    """Write a workflow command such as ``::notice::message`` to stdout."""
    out = stream if stream is not None else sys.stdout
    print(f"::{command}::{_escape_data(message)}", file=out, flush=True)


def notice(message: str, stream: TextIO | None = None) -> None:
    issue_command("notice", message, stream)


def warning(message: str, stream: TextIO | None = None) -> None:
    issue_command("warning", message, stream)


def error(message: str, stream: TextIO | None = None) -> None:
    issue_command("error", message, stream)


def set_outputs(outputs: Mapping[str, str], environ: Mapping[str, str] | None = None) -> None:
    """Append step outputs to the file named by ``GITHUB_OUTPUT``.

    Multi-line values use the heredoc delimiter syntax. Outside a runner the
    outputs are only logged.
    """
    env = os.environ if environ is None else environ
    output_path = env.get("GITHUB_OUTPUT")
    if not output_path:
        for name, value in outputs.items():
            logger.info(f"Output {name}={value}")
        return

    with Path(output_path).open("a", encoding="utf-8") as f:
        for name, value in outputs.items():
            if "\n" in value:
                delimiter = f"ghadelimiter_{uuid.uuid4()}"
                f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            else:
                f.write(f"{name}={value}\n")
            logger.debug(f"Set output {name}={value}")
