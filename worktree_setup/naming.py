"""Branch to worktree directory naming."""

from pathlib import Path
from typing import Iterable

from worktree_setup.models.repository import RepositoryContext

DEFAULT_FEATURE_PREFIX = "feature/"
DEFAULT_NAMESPACES = ("feature/", "hotfix/", "release/")


def branch_suffix(branch: str, strip_prefix: str = DEFAULT_FEATURE_PREFIX) -> str:
    """Return the directory suffix for a branch.

    Leading ``strip_prefix`` namespaces are removed and every remaining ``/``
    becomes ``-``, so ``feature/story-1`` and ``story-1`` share a suffix.

    Args:
        branch: Branch identifier, with or without the feature prefix
        strip_prefix: Namespace that is dropped from the suffix

    Returns:
        Suffix used after ``--`` in the worktree directory name
    """
    while strip_prefix and branch.startswith(strip_prefix):
        branch = branch[len(strip_prefix):]
    return branch.replace("/", "-")


def resolve_worktree_dir(
    context: RepositoryContext,
    branch: str,
    strip_prefix: str = DEFAULT_FEATURE_PREFIX,
) -> Path:
    """Return the sibling directory a branch's worktree lives in.

    The layout is ``{parent}/{repo_name}--{suffix}``.
    """
    return context.parent / f"{context.name}--{branch_suffix(branch, strip_prefix)}"


def normalize_new_branch(
    branch: str,
    namespaces: Iterable[str] = DEFAULT_NAMESPACES,
    default_prefix: str = DEFAULT_FEATURE_PREFIX,
) -> str:
    """Prefix a new branch name with ``default_prefix`` unless it already has a namespace."""
    if any(branch.startswith(ns) for ns in namespaces):
        return branch
    return f"{default_prefix}{branch}"
