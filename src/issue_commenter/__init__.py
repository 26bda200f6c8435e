"""Issue Commenter.

Posts, or updates, a single issue / pull request comment rendered from a template:
- premade templates shipped in `templates/` (Mustache placeholders)
- ad-hoc template files from the calling workflow (Mustache or `${{ ... }}` expressions)
- optional replacement of the authenticated user's most recent comment
"""

__version__ = "0.1.0"

from issue_commenter.action import ActionInputs, run_action
from issue_commenter.config import ActionSettings

__all__ = ["__version__", "ActionInputs", "ActionSettings", "run_action"]
