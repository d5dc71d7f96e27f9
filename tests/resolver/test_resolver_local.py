# topmark:header:start
#
#   project      : ECResolve
#   file         : test_resolver_local.py
#   file_relpath : tests/resolver/test_resolver_local.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolution against real directory trees on disk."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ecresolve.resolver import HierarchicalResolver
from tests.helpers import write_config

if TYPE_CHECKING:
    from pathlib import Path


@pytest.mark.integration
def test_end_to_end_on_disk(tmp_path: Path) -> None:
    """Nested configs on disk resolve with the nearest directory winning."""
    write_config(
        tmp_path / "proj" / ".editorconfig",
        """
        root = true
        indent_style = space
        indent_size = 4

        [*.md]
        trim_trailing_whitespace = false
        """,
    )
    write_config(
        tmp_path / "proj" / "docs" / ".editorconfig",
        """
        indent_size = 2
        """,
    )
    resolver = HierarchicalResolver()

    assert dict(resolver.resolve(tmp_path / "proj" / "docs" / "readme.md")) == {
        "indent_style": "space",
        "indent_size": 2,
        "trim_trailing_whitespace": False,
    }
    assert dict(resolver.resolve(tmp_path / "proj" / "app.cpp")) == {
        "indent_style": "space",
        "indent_size": 4,
    }


@pytest.mark.integration
def test_crlf_config_file(tmp_path: Path) -> None:
    """Windows line endings parse like Unix ones."""
    (tmp_path / ".editorconfig").write_bytes(
        b"root = true\r\n[*.py]\r\nindent_size = 4\r\nend_of_line = crlf\r\n"
    )
    props = HierarchicalResolver().resolve(tmp_path / "main.py")
    assert dict(props) == {"indent_size": 4, "end_of_line": "crlf"}


@pytest.mark.integration
def test_relative_path_is_resolved_against_cwd(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """A relative input path resolves the same as its absolute form."""
    write_config(
        tmp_path / ".editorconfig",
        """
        root = true
        [src/*.c]
        indent_style = tab
        """,
    )
    monkeypatch.chdir(tmp_path)
    resolver = HierarchicalResolver()

    relative = resolver.resolve("src/main.c")
    assert dict(relative) == {"indent_style": "tab"}
    assert resolver.resolve(tmp_path / "src" / "main.c") is relative


@pytest.mark.integration
def test_config_edit_is_seen_after_invalidation(tmp_path: Path) -> None:
    """The cache holds stale results until the edited config is invalidated."""
    config: Path = tmp_path / ".editorconfig"
    write_config(config, "root = true\nindent_size = 2\n")
    resolver = HierarchicalResolver()
    target: Path = tmp_path / "pkg" / "mod.py"

    assert resolver.resolve(target)["indent_size"] == 2
    write_config(config, "root = true\nindent_size = 8\n")
    assert resolver.resolve(target)["indent_size"] == 2

    assert resolver.invalidate_config(config) == 1
    assert resolver.resolve(target)["indent_size"] == 8
