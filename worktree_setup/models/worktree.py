"""Worktree data models."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional


class BranchLocation(Enum):
    """Where a branch was found when binding a worktree to it."""
    NEW = "new"
    LOCAL = "local"
    REMOTE = "remote"
    EXISTING = "existing"  # Worktree directory was already there
    MISSING = "missing"


@dataclass
class WorktreeInfo:
    """Information about a git worktree."""

    path: str
    branch_name: str
    commit_sha: str
    is_main: bool  # Is this the main working tree?
    is_orphaned: bool  # Directory missing?

    @property
    def short_sha(self) -> str:
        return self.commit_sha[:7]

    def __str__(self) -> str:
        """String representation of worktree."""
        status = "orphaned" if self.is_orphaned else "active"
        main_marker = " (main)" if self.is_main else ""
        branch = self.branch_name or "(detached)"
        return f"{branch} @ {self.path}{main_marker} [{status}]"


@dataclass
class InstallReport:
    """Outcome of a dependency install pass over a worktree."""

    processed: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)  # package -> error message

    @property
    def count(self) -> int:
        """Number of packages an install was attempted in, failures included."""
        return len(self.processed)

    @property
    def succeeded(self) -> List[str]:
        return [p for p in self.processed if p not in self.failed]


@dataclass
class CreateResult:
    """Outcome of a create command."""

    path: Path
    branch: str
    created: bool
    location: BranchLocation
    install_report: Optional[InstallReport] = None
