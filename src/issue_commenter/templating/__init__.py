"""Template loading and variable substitution."""

from issue_commenter.templating.registry import TemplateRegistry
from issue_commenter.templating.renderer import LiteralTokenRenderer, MustacheRenderer, Renderer
from issue_commenter.templating.resolver import (
    FilePath,
    NamedTemplate,
    TemplateResolver,
    TemplateSelector,
    parse_variables,
    select_template,
)

__all__ = [
    "FilePath",
    "LiteralTokenRenderer",
    "MustacheRenderer",
    "NamedTemplate",
    "Renderer",
    "TemplateRegistry",
    "TemplateResolver",
    "TemplateSelector",
    "parse_variables",
    "select_template",
]
