"""Unit tests for the named template registry."""

from __future__ import annotations

from pathlib import Path

import pytest

from issue_commenter.errors import TemplateNotFoundError
from issue_commenter.templating.registry import TemplateRegistry


def test_shipped_templates_are_registered(registry: TemplateRegistry) -> None:
    assert "checking-work" in registry
    assert "lesson-finished" in registry
    assert registry.path_for("checking-work").name == "checking-work.md"


def test_from_directory_only_registers_markdown_files(tmp_path: Path) -> None:
    (tmp_path / "welcome.md").write_text("hi", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("ignored", encoding="utf-8")
    (tmp_path / "nested.md").mkdir()

    registry = TemplateRegistry.from_directory(tmp_path)

    assert registry.names == ["welcome"]
    assert registry.path_for("welcome") == tmp_path / "welcome.md"


def test_missing_directory_yields_empty_registry(tmp_path: Path) -> None:
    registry = TemplateRegistry.from_directory(tmp_path / "nope")

    assert registry.names == []


def test_lookup_does_not_escape_the_registry(tmp_path: Path) -> None:
    (tmp_path / "secret.md").write_text("secret", encoding="utf-8")
    templates = tmp_path / "templates"
    templates.mkdir()

    registry = TemplateRegistry.from_directory(templates)

    with pytest.raises(TemplateNotFoundError):
        registry.path_for("../secret")
