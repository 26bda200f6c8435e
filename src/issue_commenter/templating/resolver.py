"""Template resolution: selector -> raw text -> rendered comment body."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping

from issue_commenter.context import ActionContext
from issue_commenter.errors import (
    AmbiguousTargetError,
    FileReadError,
    NoTemplateError,
    VariableSyntaxError,
)
from issue_commenter.templating.registry import TemplateRegistry
from issue_commenter.templating.renderer import (
    LiteralTokenRenderer,
    MustacheRenderer,
    Renderer,
    contains_expressions,
)

logger = logging.getLogger(__name__)

TemplateReader = Callable[[Path], str]


@dataclass(frozen=True, slots=True)
class NamedTemplate:
    """A template shipped with the action, selected by name."""

    name: str


@dataclass(frozen=True, slots=True)
class FilePath:
    """An ad-hoc template file supplied by the calling workflow."""

    path: str


TemplateSelector = NamedTemplate | FilePath


def select_template(
    comment_template: str | None, comment_template_file: str | None
) -> TemplateSelector:
    """Build a selector from the two mutually exclusive inputs."""

    if comment_template and comment_template_file:
        raise AmbiguousTargetError()
    if comment_template:
        return NamedTemplate(comment_template)
    if comment_template_file:
        return FilePath(comment_template_file)
    raise NoTemplateError()


def parse_variables(raw: Mapping[str, Any] | str | None) -> dict[str, Any]:
    """Normalise the variable bag. Strings are parsed as JSON exactly once, here."""

    if raw is None:
        return {}
    if isinstance(raw, str):
        if not raw.strip():
            return {}
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            raise VariableSyntaxError(e.msg) from e
        if not isinstance(parsed, dict):
            raise VariableSyntaxError(f"expected a JSON object, got {type(parsed).__name__}")
        return parsed
    return dict(raw)


def _read_utf8(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class TemplateResolver:
    """Loads a template and renders it with the renderer of its family.

    Named templates always use Mustache. File templates follow `syntax`:
    `mustache`, `expression`, or `auto` (expression if the file contains a
    `${{ ... }}` token, Mustache otherwise).
    """

    def __init__(
        self,
        *,
        registry: TemplateRegistry,
        context: ActionContext | None = None,
        syntax: str = "auto",
        base_dir: Path | None = None,
        reader: TemplateReader | None = None,
    ) -> None:
        if syntax not in ("auto", "mustache", "expression"):
            raise ValueError(f"Unsupported template syntax: {syntax}")
        self._registry = registry
        self._context = context or ActionContext()
        self._syntax = syntax
        self._base_dir = base_dir
        self._reader = reader or _read_utf8

    def _locate(self, selector: TemplateSelector) -> Path:
        if isinstance(selector, NamedTemplate):
            return self._registry.path_for(selector.name)
        path = Path(selector.path)
        if not path.is_absolute():
            path = (self._base_dir or Path.cwd()) / path
        return path

    def _load(self, path: Path) -> str:
        try:
            return self._reader(path)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, str(e)) from e

    def renderer_for(self, selector: TemplateSelector, template: str) -> Renderer:
        if isinstance(selector, NamedTemplate) or self._syntax == "mustache":
            return MustacheRenderer()
        if self._syntax == "expression" or contains_expressions(template):
            return LiteralTokenRenderer(self._context.expression_values())
        return MustacheRenderer()

    def resolve(
        self,
        selector: TemplateSelector,
        variables: Mapping[str, Any] | str | None = None,
    ) -> str:
        """Render the selected template.

        Raises:
            TemplateNotFoundError: Named template is not registered.
            FileReadError: Template source cannot be read.
            VariableSyntaxError: `variables` is a string that is not a JSON object.
        """

        bag = parse_variables(variables)
        path = self._locate(selector)
        template = self._load(path)
        renderer = self.renderer_for(selector, template)

        logger.debug(
            "Rendering template",
            extra={"template": str(path), "renderer": renderer.name, "variables": sorted(bag)},
        )
        return renderer.render(template, bag)
