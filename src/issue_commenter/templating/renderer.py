"""Placeholder substitution strategies.

Two template families exist with independent placeholder syntaxes:

* Mustache (`{{login}}`, `{{nested.key}}`), used by the shipped templates.
* Workflow expressions (`${{ github.repository }}`), used by some ad-hoc template files.

Exactly one renderer is applied to a document. Running both would mangle literal
`{{` text left behind by the first pass.
"""

from __future__ import annotations

import logging
import re
from abc import ABC, abstractmethod
from typing import Any, Mapping

import chevron

logger = logging.getLogger(__name__)

EXPRESSION_TOKEN = re.compile(r"\$\{\{\s*([A-Za-z_][\w-]*(?:\.[\w-]+)+)\s*\}\}")
# Any `${{ ... }}` text, recognised or not, marks a document as expression-style.
EXPRESSION_LIKE = re.compile(r"\$\{\{.*?\}\}")


class Renderer(ABC):
    """Substitutes variables into raw template text."""

    name: str = "abstract"

    @abstractmethod
    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        """Render a template.

        Args:
            template: Raw template text.
            variables: Variable bag. Renderers may ignore it.

        Returns:
            The fully substituted text.
        """


class _JsonFalse(str):
    """Renders as `false` but stays falsy, so `{{#flag}}` sections are skipped."""

    # chevron returns falsy scopes carrying this marker instead of replacing them with "".
    _CHEVRON_return_scope_when_falsy = True

    def __bool__(self) -> bool:
        return False


def _json_scalars(value: Any) -> Any:
    """Spell leaf scalars the way JSON does: `true`, `false`, `1` rather than `True`, `1.0`."""

    if isinstance(value, Mapping):
        return {key: _json_scalars(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_json_scalars(item) for item in value]
    if value is True:
        return "true"
    if value is False:
        return _JsonFalse("false")
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


class MustacheRenderer(Renderer):
    """Full Mustache rendering via chevron. Missing keys render as empty strings."""

    name = "mustache"

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        return chevron.render(template, _json_scalars(variables))


class LiteralTokenRenderer(Renderer):
    """Replaces `${{ namespace.key }}` tokens from a fixed lookup table.

    Unrecognised keys are left in the output verbatim.
    """

    name = "expression"

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def render(self, template: str, variables: Mapping[str, Any]) -> str:
        unknown: set[str] = set()

        def _substitute(match: re.Match[str]) -> str:
            key = match.group(1)
            if key in self._values:
                return self._values[key]
            unknown.add(key)
            return match.group(0)

        output = EXPRESSION_TOKEN.sub(_substitute, template)
        if unknown:
            logger.debug("Left unrecognised expressions untouched", extra={"keys": sorted(unknown)})
        return output


def contains_expressions(template: str) -> bool:
    return EXPRESSION_LIKE.search(template) is not None
