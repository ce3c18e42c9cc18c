"""Worktree operations service for worktree-setup."""

import git
import os
from pathlib import Path
from typing import Optional, Dict, Any, List, Union

from worktree_setup.exceptions import GitOperationError
from worktree_setup.models.worktree import WorktreeInfo, BranchLocation
from worktree_setup.logging_config import get_logger

logger = get_logger(__name__)


def describe_git_error(command: str, e: git.exc.GitCommandError) -> str:
    """Build a readable message from a GitCommandError."""
    stderr = (getattr(e, "stderr", None) or "").strip()
    status = e.status if hasattr(e, "status") else "unknown"
    # GitPython wraps captured output as "stderr: '...'"
    if stderr.startswith("stderr: "):
        stderr = stderr[len("stderr: "):]
        if len(stderr) >= 2 and stderr[0] == stderr[-1] == "'":
            stderr = stderr[1:-1]
        stderr = stderr.strip()

    if stderr:
        return f"git {command} failed (exit {status}): {stderr}"
    return f"git {command} failed with exit code {status}"


class WorktreeService:
    """Service for the git calls worktree commands are built from."""

    def __init__(self, repo_path: Union[str, Path], remote: str = "origin"):
        """Initialize the worktree service.

        Args:
            repo_path: Path to the git repository
            remote: Name of the remote that holds shared branches
        """
        self.repo_path = str(repo_path)
        self.remote = remote

    def _get_repo(self):
        """Get a git.Repo instance for the repository.

        GitPython repos are lightweight - they don't clone, just open the existing repo.

        Returns:
            git.Repo: A fresh repository instance
        """
        return git.Repo(self.repo_path)

    def get_worktree_info(self) -> List[WorktreeInfo]:
        """Get detailed information about all worktrees.

        Returns:
            List of WorktreeInfo objects for all worktrees, main working tree first
        """
        worktree_list: List[WorktreeInfo] = []
        try:
            repo = self._get_repo()
            output = repo.git.worktree("list", "--porcelain")
        except git.exc.GitCommandError as e:
            logger.warning(describe_git_error("worktree list", e))
            return worktree_list

        # Porcelain format, one block per worktree separated by blank lines:
        # worktree /path/to/worktree
        # HEAD commit_sha
        # branch refs/heads/branch-name   (or "detached")
        current: Dict[str, Any] = {}
        for line in output.split("\n") + [""]:
            line = line.strip()

            if not line:
                if current.get("path"):
                    path = current["path"]
                    worktree_list.append(
                        WorktreeInfo(
                            path=path,
                            branch_name=current.get("branch", ""),
                            commit_sha=current.get("HEAD", ""),
                            is_main=not worktree_list,  # First entry is the main working tree
                            is_orphaned=not os.path.exists(path),
                        )
                    )
                current = {}
                continue

            if line.startswith("worktree "):
                current["path"] = line.split(" ", 1)[1]
            elif line.startswith("HEAD "):
                current["HEAD"] = line.split(" ", 1)[1]
            elif line.startswith("branch "):
                branch_ref = line.split(" ", 1)[1]
                if branch_ref.startswith("refs/heads/"):
                    current["branch"] = branch_ref[len("refs/heads/"):]
                else:
                    current["branch"] = ""
            elif line.startswith("detached"):
                current["branch"] = ""

        logger.debug(f"Found {len(worktree_list)} worktrees")
        for wt in worktree_list:
            logger.debug(f"  {wt}")
        return worktree_list

    def _ref_exists(self, ref: str) -> bool:
        """Check whether a fully-qualified ref exists."""
        try:
            self._get_repo().git.show_ref("--verify", "--quiet", ref)
            return True
        except git.exc.GitCommandError:
            return False

    def local_branch_exists(self, branch_name: str) -> bool:
        """Check if a local branch exists."""
        return self._ref_exists(f"refs/heads/{branch_name}")

    def remote_branch_exists(self, branch_name: str) -> bool:
        """Check if a remote-tracking branch exists on the configured remote."""
        return self._ref_exists(f"refs/remotes/{self.remote}/{branch_name}")

    def get_branch_location(self, branch_name: str) -> BranchLocation:
        """Find where a branch lives, preferring the local branch."""
        if self.local_branch_exists(branch_name):
            return BranchLocation.LOCAL
        if self.remote_branch_exists(branch_name):
            return BranchLocation.REMOTE
        return BranchLocation.MISSING

    def list_local_branches(self, pattern: str) -> List[str]:
        """List local branch names matching a glob pattern such as ``feature/*``."""
        try:
            output = self._get_repo().git.branch("--list", pattern, "--format=%(refname:short)")
        except git.exc.GitCommandError as e:
            logger.debug(describe_git_error("branch --list", e))
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]

    def list_remote_branches(self, pattern: str) -> List[str]:
        """List remote-tracking branches matching ``pattern``, without the remote prefix."""
        prefix = f"{self.remote}/"
        try:
            output = self._get_repo().git.branch(
                "-r", "--list", f"{prefix}{pattern}", "--format=%(refname:short)"
            )
        except git.exc.GitCommandError as e:
            logger.debug(describe_git_error("branch -r --list", e))
            return []

        branches = []
        for line in output.splitlines():
            line = line.strip()
            if line.startswith(prefix):
                branches.append(line[len(prefix):])
        return branches

    def fetch(self, branch_name: str) -> bool:
        """Fetch a branch from the remote.

        Returns:
            True if the fetch succeeded, False otherwise
        """
        try:
            self._get_repo().git.fetch(self.remote, branch_name)
            logger.info(f"Fetched {self.remote}/{branch_name}")
            return True
        except git.exc.GitCommandError as e:
            logger.debug(describe_git_error("fetch", e))
            return False

    def add_worktree(
        self,
        path: Union[str, Path],
        branch_name: str,
        new_branch: bool = False,
        start_point: Optional[str] = None,
        track: bool = False,
    ) -> None:
        """Create a worktree at ``path`` bound to ``branch_name``.

        Args:
            path: Directory for the new worktree
            branch_name: Branch to check out in the worktree
            new_branch: Create ``branch_name`` at ``start_point`` first (``-b``)
            start_point: Commit-ish the new branch starts from
            track: Set up upstream tracking for the new branch (``--track``)

        Raises:
            GitOperationError: If git refuses to create the worktree
        """
        args = ["add", str(path)]
        if new_branch:
            if track:
                args.append("--track")
            args.extend(["-b", branch_name])
            if start_point:
                args.append(start_point)
        else:
            args.append(branch_name)

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error("worktree add", e)
            logger.error(f"Failed to create worktree at {path}: {error_msg}")
            raise GitOperationError("worktree add", branch_name, error_msg)
        logger.info(f"Created worktree at {path} for branch {branch_name}")

    def remove_worktree(self, path: Union[str, Path], force: bool = False) -> None:
        """Remove a worktree at the specified path.

        Args:
            path: Path to the worktree directory
            force: Force removal even if working tree is dirty or locked

        Raises:
            GitOperationError: If git refuses to remove the worktree
        """
        args = ["remove", str(path)]
        if force:
            args.append("--force")

        try:
            self._get_repo().git.worktree(*args)
        except git.exc.GitCommandError as e:
            error_msg = describe_git_error("worktree remove", e)
            logger.error(f"Failed to remove worktree at {path}: {error_msg}")
            raise GitOperationError("worktree remove", message=error_msg)
        logger.info(f"Removed worktree at {path}")
