# topmark:header:start
#
#   project      : ECResolve
#   file         : helpers.py
#   file_relpath : tests/helpers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared helpers for building config trees in tests."""

from __future__ import annotations

import textwrap
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def dedent(content: str) -> str:
    """Helper: dedent an inline config literal and drop the leading newline."""
    return textwrap.dedent(content).lstrip("\n")


def write_config(path: Path, content: str) -> None:
    """Helper: write dedented content to a file, creating parents."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dedent(content), encoding="utf-8")
