"""Version information for worktree-setup."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("worktree-setup")
except PackageNotFoundError:
    # Fallback when running from source without an install
    __version__ = "0.0.0+unknown"
