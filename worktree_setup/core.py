"""Core functionality for worktree-setup"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from worktree_setup.config import Config
from worktree_setup.exceptions import BranchNotFoundError, MissingArgumentError, WorktreeNotFoundError
from worktree_setup.logging_config import get_logger
from worktree_setup.models.repository import RepositoryContext
from worktree_setup.models.worktree import BranchLocation, CreateResult, InstallReport, WorktreeInfo
from worktree_setup.naming import normalize_new_branch, resolve_worktree_dir
from worktree_setup.services.display_service import DisplayService
from worktree_setup.services.git.worktrees import WorktreeService
from worktree_setup.services.installer_service import DependencyInstaller

logger = get_logger(__name__)


class WorktreeManager:
    """Creates, lists and removes sibling worktrees for a repository."""

    def __init__(
        self,
        context: RepositoryContext,
        config: Union[Config, dict, None] = None,
        worktree_service: Optional[WorktreeService] = None,
        installer: Optional[DependencyInstaller] = None,
        display_service: Optional[DisplayService] = None,
    ):
        """Initialize WorktreeManager.

        Args:
            context: Repository the commands operate on
            config: Configuration dict or Config object
            worktree_service: Git capability; defaults to one bound to ``context.root``
            installer: Dependency installer; defaults to one running the configured command
            display_service: Console output
        """
        self.context = context
        if config is None:
            self.config = Config()
        elif isinstance(config, dict):
            self.config = Config.from_dict(config)
        else:
            self.config = config

        self.worktree_service = worktree_service or WorktreeService(context.root, self.config.remote)
        self.installer = installer or DependencyInstaller(self.config)
        self.display_service = display_service or DisplayService(installed_dir=self.config.installed_dir)

    def resolve(self, branch: str) -> Path:
        """Return the worktree directory for a branch."""
        return resolve_worktree_dir(self.context, branch, self.config.feature_prefix)

    def _require_branch(self, branch: Optional[str], command: str) -> str:
        if not branch or not branch.strip():
            raise MissingArgumentError("Branch name", usage=f"{self.display_service.prog_name} {command} <branch>")
        return branch.strip()

    def collect_listing(self) -> Tuple[List[WorktreeInfo], List[Tuple[str, Optional[Path]]], List[str]]:
        """Gather worktrees, local feature branches and remote-only feature branches.

        Returns:
            Tuple of (worktrees, [(local branch, existing worktree dir or None)], remote-only branches)
        """
        pattern = f"{self.config.feature_prefix}*"
        worktrees = self.worktree_service.get_worktree_info()

        local_branches = []
        for branch in self.worktree_service.list_local_branches(pattern):
            wt_dir = self.resolve(branch)
            local_branches.append((branch, wt_dir if wt_dir.is_dir() else None))

        remote_only = [
            branch
            for branch in self.worktree_service.list_remote_branches(pattern)
            if not self.worktree_service.local_branch_exists(branch)
        ]
        return worktrees, local_branches, remote_only

    def list_worktrees(self) -> None:
        """Print existing worktrees and available feature branches."""
        worktrees, local_branches, remote_only = self.collect_listing()
        self.display_service.display_list(worktrees, local_branches, remote_only)

    def create(self, branch: Optional[str], new_branch: bool = False, install: bool = True) -> CreateResult:
        """Create a worktree for a branch.

        Nothing is changed when the target directory already exists. Otherwise
        exactly one ``git worktree add`` is issued, then dependencies are installed
        unless ``install`` is False.

        Args:
            branch: Existing branch, or the name of the branch to create
            new_branch: Cut a new branch from the integration branch
            install: Run the dependency installer in the new worktree

        Returns:
            CreateResult describing the worktree

        Raises:
            MissingArgumentError: If no branch was given
            BranchNotFoundError: If the branch is neither local nor on the remote
            GitOperationError: If git fails to create the worktree
        """
        branch = self._require_branch(branch, "create [--new]")
        remote = self.config.remote

        if new_branch:
            branch = normalize_new_branch(branch, self.config.branch_namespaces, self.config.feature_prefix)

        wt_dir = self.resolve(branch)
        if wt_dir.exists():
            logger.info(f"Worktree already exists at {wt_dir}")
            result = CreateResult(path=wt_dir, branch=branch, created=False, location=BranchLocation.EXISTING)
            self.display_service.display_create_result(result)
            return result

        if new_branch:
            integration = self.config.integration_branch
            start_point = f"{remote}/{integration}"
            self.display_service.display_creating(branch, BranchLocation.NEW, integration)
            if not self.worktree_service.fetch(integration):
                logger.warning(f"Could not fetch {start_point}; using the last fetched state")
            self.worktree_service.add_worktree(wt_dir, branch, new_branch=True, start_point=start_point)
            location = BranchLocation.NEW
        else:
            location = self.worktree_service.get_branch_location(branch)
            if location == BranchLocation.LOCAL:
                self.display_service.display_creating(branch, location)
                self.worktree_service.add_worktree(wt_dir, branch)
            elif location == BranchLocation.REMOTE:
                source = f"{remote}/{branch}"
                self.display_service.display_creating(branch, location, source)
                self.worktree_service.add_worktree(
                    wt_dir, branch, new_branch=True, start_point=source, track=True
                )
            else:
                raise BranchNotFoundError(
                    branch,
                    remote,
                    hint=f"Use --new to create a new branch: {self.display_service.prog_name} create --new {branch}",
                )

        result = CreateResult(path=wt_dir, branch=branch, created=True, location=location)
        if install:
            result.install_report = self.installer.install(wt_dir)

        self.display_service.display_create_result(result)
        return result

    def _existing_worktree_dir(self, branch: str) -> Path:
        wt_dir = self.resolve(branch)
        if not wt_dir.is_dir():
            raise WorktreeNotFoundError(wt_dir, self.worktree_service.get_worktree_info())
        return wt_dir

    def remove(self, branch: Optional[str]) -> Path:
        """Force-remove the worktree for a branch; the branch itself is kept.

        Raises:
            MissingArgumentError: If no branch was given
            WorktreeNotFoundError: If the worktree directory does not exist
            GitOperationError: If git fails to remove the worktree
        """
        branch = self._require_branch(branch, "remove")
        wt_dir = self._existing_worktree_dir(branch)

        self.display_service.info(f"Removing worktree: {wt_dir}")
        self.worktree_service.remove_worktree(wt_dir, force=True)
        self.display_service.display_removed(wt_dir, branch)
        return wt_dir

    def install(self, branch: Optional[str]) -> InstallReport:
        """Install missing dependencies in an existing worktree."""
        branch = self._require_branch(branch, "install")
        wt_dir = self._existing_worktree_dir(branch)

        report = self.installer.install(wt_dir)
        self.display_service.display_install_report(report)
        return report
