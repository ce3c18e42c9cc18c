"""Allow running as ``python -m worktree_setup``."""

import sys

from worktree_setup.cli import main

sys.exit(main())
