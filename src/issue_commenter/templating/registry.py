"""Registry of named (premade) comment templates."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from issue_commenter.errors import TemplateNotFoundError

logger = logging.getLogger(__name__)

TEMPLATE_SUFFIX = ".md"


class TemplateRegistry:
    """Explicit mapping of template name -> file path.

    The mapping is fixed at construction time; lookups never touch the filesystem.
    """

    def __init__(self, templates: Mapping[str, Path]) -> None:
        self._templates = dict(templates)

    @classmethod
    def from_directory(cls, directory: Path) -> TemplateRegistry:
        """Register every `<name>.md` file found directly inside `directory`."""

        if not directory.is_dir():
            logger.warning("Template directory does not exist", extra={"path": str(directory)})
            return cls({})

        templates = {
            p.name[: -len(TEMPLATE_SUFFIX)]: p
            for p in sorted(directory.iterdir(), key=lambda p: p.name)
            if p.is_file() and p.name.endswith(TEMPLATE_SUFFIX)
        }
        logger.debug(
            "Registered named templates",
            extra={"path": str(directory), "templates": sorted(templates)},
        )
        return cls(templates)

    @property
    def names(self) -> list[str]:
        return sorted(self._templates)

    def __contains__(self, name: object) -> bool:
        return name in self._templates

    def path_for(self, name: str) -> Path:
        try:
            return self._templates[name]
        except KeyError:
            raise TemplateNotFoundError(name) from None
