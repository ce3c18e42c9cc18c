"""Data models for worktree-setup."""

from .repository import RepositoryContext
from .worktree import WorktreeInfo, BranchLocation, InstallReport, CreateResult

__all__ = [
    "RepositoryContext",
    "WorktreeInfo",
    "BranchLocation",
    "InstallReport",
    "CreateResult",
]
