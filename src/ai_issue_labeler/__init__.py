"""AI Issue Labeler.

Suggests labels for a GitHub issue with an LLM, reconciles them against the
repository's existing labels (creating missing ones), and applies them:
- configuration loaded from the environment / `.env`
- structured logging
- one run per triggering issue event
"""

__version__ = "0.1.0"

from ai_issue_labeler.config import LabelerSettings

__all__ = ["__version__", "LabelerSettings"]
