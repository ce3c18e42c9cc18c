"""Services used by the worktree commands."""
