"""Dependency installation for freshly created worktrees"""
import subprocess
from pathlib import Path
from typing import List, Optional, Sequence, Union

from worktree_setup.config import Config
from worktree_setup.exceptions import DependencyInstallError
from worktree_setup.logging_config import get_logger
from worktree_setup.models.worktree import InstallReport

logger = get_logger(__name__)


class PackageManager:
    """Runs the package installer inside a single package directory."""

    def __init__(self, command: Sequence[str]):
        self.command: List[str] = list(command)

    def install(self, directory: Union[str, Path]) -> None:
        """Install dependencies in ``directory``.

        Raises:
            DependencyInstallError: If the installer cannot be run or exits non-zero
        """
        directory = Path(directory)
        logger.debug(f"Running {' '.join(self.command)} in {directory}")
        try:
            subprocess.run(
                self.command,
                cwd=directory,
                check=True,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            raise DependencyInstallError(directory.name, f"'{self.command[0]}' not found on PATH")
        except subprocess.CalledProcessError as e:
            output = (e.stderr or e.stdout or "").strip()
            message = f"exit {e.returncode}"
            if output:
                message += f": {output.splitlines()[-1]}"
            raise DependencyInstallError(directory.name, message)
        except OSError as e:
            # Installer not executable, package directory not enterable, ...
            raise DependencyInstallError(directory.name, f"could not run '{self.command[0]}': {e}")


class DependencyInstaller:
    """Installs missing dependencies in a worktree's package directories."""

    def __init__(self, config: Config, package_manager: Optional[PackageManager] = None):
        self.config = config
        self.package_manager = package_manager or PackageManager(config.install_command)

    def needs_install(self, package_dir: Path) -> bool:
        """A package needs installing when it has a manifest but no installed-dependency directory."""
        return (
            (package_dir / self.config.manifest_file).is_file()
            and not (package_dir / self.config.installed_dir).is_dir()
        )

    def install(self, worktree_dir: Union[str, Path]) -> InstallReport:
        """Install dependencies in every configured package that needs it.

        A failure in one package is recorded in the report and the remaining
        packages are still processed.

        Args:
            worktree_dir: Root of the worktree

        Returns:
            InstallReport listing processed and failed packages
        """
        worktree_dir = Path(worktree_dir)
        report = InstallReport()

        for package in self.config.packages:
            package_dir = worktree_dir / package
            if not self.needs_install(package_dir):
                logger.debug(f"Skipping {package}: nothing to install")
                continue

            logger.info(f"Installing dependencies in {package}...")
            report.processed.append(package)
            try:
                self.package_manager.install(package_dir)
            except DependencyInstallError as e:
                logger.debug(f"Install failed in {package}: {e}")
                report.failed[package] = str(e)

        logger.info(f"Processed {report.count} package(s), {len(report.failed)} failed")
        return report
