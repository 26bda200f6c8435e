"""Ambient workflow context.

The repository and actor of the triggering workflow are captured once, at startup,
and handed to the core explicitly rather than read from the environment on demand.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Workflow values available to `${{ ... }}` expression templates."""

    repository: str | None = None
    actor: str | None = None
    server_url: str = "https://github.com"
    inputs: Mapping[str, str] = field(default_factory=dict)

    @property
    def repository_owner(self) -> str | None:
        if not self.repository or "/" not in self.repository:
            return None
        return self.repository.split("/", 1)[0]

    def expression_values(self) -> dict[str, str]:
        """Return the fixed table of recognised expression keys.

        Keys whose value is unknown are omitted, so their tokens stay in the output as-is.
        """

        values: dict[str, str] = {"github.server_url": self.server_url}
        if self.repository:
            values["github.repository"] = self.repository
        if self.repository_owner:
            values["github.repository_owner"] = self.repository_owner
        if self.actor:
            values["github.actor"] = self.actor
        for name, value in self.inputs.items():
            values[f"inputs.{name}"] = value
        return values
