"""Git-related services for worktree-setup."""

from .repository import load_repository_context
from .worktrees import WorktreeService

__all__ = [
    "load_repository_context",
    "WorktreeService",
]
