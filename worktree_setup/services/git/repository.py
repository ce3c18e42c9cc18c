"""Repository context loading for worktree-setup."""

import os
from pathlib import Path
from typing import Optional

import git

from worktree_setup.exceptions import GitOperationError, NotARepositoryError
from worktree_setup.logging_config import get_logger
from worktree_setup.models.repository import RepositoryContext

logger = get_logger(__name__)


def load_repository_context(cwd: Optional[str] = None) -> RepositoryContext:
    """Resolve the repository enclosing ``cwd``.

    Args:
        cwd: Directory to resolve from; defaults to the process working directory

    Returns:
        RepositoryContext for the top-level directory of the work tree

    Raises:
        NotARepositoryError: If ``cwd`` is not inside a git work tree
        GitOperationError: If the git executable cannot be run
    """
    cwd = os.fspath(cwd) if cwd is not None else os.getcwd()
    if not os.path.isdir(cwd):
        raise NotARepositoryError(cwd)

    try:
        toplevel = git.Git(cwd).rev_parse("--show-toplevel")
    except git.exc.GitCommandNotFound as e:
        raise GitOperationError("rev-parse", message=f"git executable not found ({e})")
    except git.exc.GitCommandError as e:
        logger.debug(f"rev-parse failed in {cwd}: {(e.stderr or '').strip()}")
        raise NotARepositoryError(cwd)

    if not toplevel:
        # Inside a .git directory or a bare repository
        raise NotARepositoryError(cwd)

    context = RepositoryContext.from_root(Path(toplevel.strip()))
    logger.debug(f"Repository context: root={context.root} name={context.name} parent={context.parent}")
    return context
