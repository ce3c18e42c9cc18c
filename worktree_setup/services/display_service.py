"""Console output for worktree commands"""
from pathlib import Path
from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape

from worktree_setup.models.worktree import WorktreeInfo, InstallReport, CreateResult, BranchLocation

PROG_NAME = "worktree-setup"

console = Console(soft_wrap=True, highlight=False)
err_console = Console(stderr=True, soft_wrap=True, highlight=False)


class DisplayService:
    def __init__(self, prog_name: str = PROG_NAME, installed_dir: str = "node_modules"):
        self.prog_name = prog_name
        self.installed_dir = installed_dir

    def error(self, message: str, hints: Optional[List[str]] = None) -> None:
        """Print a fatal error, with optional follow-up lines, to stderr."""
        err_console.print(f"[red]ERROR:[/red] {escape(message)}")
        for hint in hints or []:
            err_console.print(f"  {escape(hint)}")

    def warning(self, message: str) -> None:
        err_console.print(f"[yellow]WARNING:[/yellow] {escape(message)}")

    def cancelled(self) -> None:
        err_console.print("\n[yellow]Operation cancelled by user[/yellow]")

    def exception(self) -> None:
        """Print the traceback of the exception being handled."""
        err_console.print_exception()

    def info(self, message: str) -> None:
        console.print(escape(message))

    def _section(self, title: str) -> None:
        console.print(f"[bold]=== {escape(title)} ===[/bold]")

    def display_worktrees(self, worktrees: List[WorktreeInfo]) -> None:
        """Print worktrees in the layout of ``git worktree list``."""
        if not worktrees:
            console.print("  (none)")
            return

        width = max(len(wt.path) for wt in worktrees)
        for wt in worktrees:
            branch = f"[{wt.branch_name}]" if wt.branch_name else "(detached HEAD)"
            markers = ""
            if wt.is_main:
                markers += " (main)"
            if wt.is_orphaned:
                markers += " [yellow](orphaned)[/yellow]"
            console.print(f"{escape(wt.path.ljust(width))}  {wt.short_sha}  {escape(branch)}{markers}")

    def display_list(
        self,
        worktrees: List[WorktreeInfo],
        local_branches: List[Tuple[str, Optional[Path]]],
        remote_only_branches: List[str],
    ) -> None:
        """Print the three sections of the list command.

        Args:
            worktrees: Worktrees registered with git
            local_branches: (branch, worktree path or None) pairs for local feature branches
            remote_only_branches: Remote feature branches with no local branch
        """
        self._section("Existing Worktrees")
        self.display_worktrees(worktrees)
        console.print()

        self._section("Feature Branches (local)")
        if not local_branches:
            console.print("  (none)")
        for branch, path in local_branches:
            if path is not None:
                console.print(f"  {escape(branch)}  [cyan]{escape(f'[worktree: {path}]')}[/cyan]")
            else:
                console.print(f"  {escape(branch)}")
        console.print()

        self._section("Remote Feature Branches (not checked out locally)")
        if not remote_only_branches:
            console.print("  (none)")
        for branch in remote_only_branches:
            console.print(f"  {escape(branch)}")

    def display_install_report(self, report: InstallReport) -> None:
        for message in report.failed.values():
            self.warning(f"{message} (you can retry manually)")

        if report.count == 0:
            console.print(f"All packages already have {escape(self.installed_dir)} installed.")
        else:
            console.print(f"Installed dependencies in {report.count} package(s).")

    def display_creating(self, branch: str, location: BranchLocation, source: Optional[str] = None) -> None:
        """Announce which kind of worktree is about to be created."""
        if location == BranchLocation.NEW:
            console.print(f"Creating new branch '{escape(branch)}' from {escape(source or '')}...")
        elif location == BranchLocation.LOCAL:
            console.print(f"Creating worktree for local branch '{escape(branch)}'...")
        elif location == BranchLocation.REMOTE:
            console.print(f"Creating worktree for remote branch '{escape(source or branch)}'...")

    def display_create_result(self, result: CreateResult) -> None:
        path = escape(str(result.path))
        if not result.created:
            console.print(f"Worktree already exists: {path}")
            console.print()
            console.print("To use it:")
            console.print(f"  cd {path}")
            return

        console.print()
        console.print(f"[green]Worktree created:[/green] {path}")

        if result.install_report is not None:
            console.print()
            self.display_install_report(result.install_report)

        console.print()
        console.print("=========================================")
        console.print("  Worktree ready!")
        console.print("=========================================")
        console.print()
        console.print("Start working there:")
        console.print(f"  cd {path}")
        console.print()
        console.print("When done, remove the worktree:")
        console.print(f"  {self.prog_name} remove {escape(result.branch)}")

    def display_removed(self, path: Path, branch: str) -> None:
        console.print(f"Worktree removed: {escape(str(path))}")
        console.print(f"Branch '{escape(branch)}' is preserved.")
        console.print()
        console.print("To also delete the branch:")
        console.print(f"  git branch -d {escape(branch)}")

    def display_worktree_not_found(self, path: Path, worktrees: List[WorktreeInfo]) -> None:
        """Report a missing worktree along with the worktrees git does know about."""
        self.error(f"Worktree not found: {path}")
        console.print("Existing worktrees:")
        self.display_worktrees(worktrees)
