"""Custom exceptions for worktree-setup"""

from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from worktree_setup.models.worktree import WorktreeInfo


class WorktreeSetupError(Exception):
    """Base exception for all worktree-setup errors."""
    pass


class NotARepositoryError(WorktreeSetupError):
    """Exception raised when the working directory is not inside a git work tree."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        message = "Not in a git repository"
        if path:
            message += f": {path}"
        super().__init__(message)


class MissingArgumentError(WorktreeSetupError):
    """Exception raised when a command is invoked without a required argument."""

    def __init__(self, argument: str, usage: Optional[str] = None):
        self.argument = argument
        self.usage = usage
        super().__init__(f"{argument} required")


class GitOperationError(WorktreeSetupError):
    """Exception raised for errors in Git operations."""

    def __init__(self, operation: str, branch: Optional[str] = None, message: Optional[str] = None):
        self.operation = operation
        self.branch = branch
        self.message = message

        error_msg = f"Git operation '{operation}' failed"
        if branch:
            error_msg += f" for branch '{branch}'"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)


class BranchNotFoundError(GitOperationError):
    """Exception raised when a branch exists neither locally nor on the remote."""

    def __init__(self, branch: str, remote: str = "origin", hint: Optional[str] = None):
        self.remote = remote
        self.hint = hint
        super().__init__("find_branch", branch, f"Branch not found locally or on remote '{remote}'")


class WorktreeNotFoundError(WorktreeSetupError):
    """Exception raised when no worktree directory exists for a branch."""

    def __init__(self, path: Path, worktrees: Optional[List["WorktreeInfo"]] = None):
        self.path = path
        self.worktrees = worktrees or []
        super().__init__(f"Worktree not found: {path}")


class DependencyInstallError(WorktreeSetupError):
    """Exception raised when the package installer fails in a directory."""

    def __init__(self, package: str, message: Optional[str] = None):
        self.package = package
        self.message = message

        error_msg = f"Dependency install failed in {package}"
        if message:
            error_msg += f": {message}"

        super().__init__(error_msg)
