"""Pytest fixtures for worktree-setup tests"""
import logging
import tempfile
from pathlib import Path
from unittest.mock import Mock
import pytest
import git

from worktree_setup.config import Config
from worktree_setup.core import WorktreeManager
from worktree_setup.services.git.repository import load_repository_context
from worktree_setup.services.installer_service import DependencyInstaller, PackageManager


def _configure_user(repo):
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")


def _commit_file(repo, name, content, message):
    path = Path(repo.working_dir) / name
    path.write_text(content)
    repo.index.add([name])
    repo.index.commit(message)


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by setup_logging during CLI tests."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        # git reports resolved paths (e.g. /private/var on macOS)
        yield Path(tmpdir).resolve()


@pytest.fixture
def mock_config():
    """Create a configuration dictionary."""
    return {
        'remote': 'origin',
        'integration_branch': 'develop',
        'verbose': False,
        'debug': False,
    }


@pytest.fixture
def origin_repo(temp_dir):
    """Create a bare 'origin' with main, develop and a remote-only feature branch."""
    seed_path = temp_dir / "seed"
    seed_path.mkdir()
    seed = git.Repo.init(seed_path)
    _configure_user(seed)

    _commit_file(seed, "README.md", "# Test Repository\n", "Initial commit")
    seed.git.branch('-M', 'main')

    seed.git.checkout('-b', 'develop')
    _commit_file(seed, "develop.txt", "Develop content\n", "Develop work")

    seed.git.checkout('-b', 'feature/remote-only')
    _commit_file(seed, "remote.txt", "Remote content\n", "Remote-only feature")
    seed.git.checkout('main')

    bare = git.Repo.init(temp_dir / "origin.git", bare=True)
    seed.create_remote('origin', bare.git_dir)
    seed.git.push('origin', '--all')
    bare.git.symbolic_ref('HEAD', 'refs/heads/main')

    yield bare

    seed.close()
    bare.close()


@pytest.fixture
def git_repo(temp_dir, origin_repo):
    """Clone origin to <tmp>/home/app and add a local-only feature branch."""
    home = temp_dir / "home"
    home.mkdir()
    repo = git.Repo.clone_from(origin_repo.git_dir, home / "app")
    _configure_user(repo)

    repo.git.branch('feature/local-work')

    yield repo

    repo.close()


@pytest.fixture
def repo_context(git_repo):
    """RepositoryContext for the cloned repository."""
    return load_repository_context(git_repo.working_dir)


@pytest.fixture
def mock_package_manager():
    """A package manager that records install calls instead of running npm."""
    return Mock(spec=PackageManager)


@pytest.fixture
def manager(repo_context, mock_config, mock_package_manager):
    """WorktreeManager bound to the cloned repository with a fake installer."""
    config = Config.from_dict(mock_config)
    return WorktreeManager(
        repo_context,
        config,
        installer=DependencyInstaller(config, mock_package_manager),
    )


@pytest.fixture
def make_package():
    """Write a package directory with a manifest (and optionally installed deps)."""

    def _make(root: Path, name: str, installed: bool = False) -> Path:
        package_dir = Path(root) / name
        package_dir.mkdir(parents=True, exist_ok=True)
        (package_dir / "package.json").write_text('{"name": "%s"}\n' % name)
        if installed:
            (package_dir / "node_modules").mkdir()
        return package_dir

    return _make
