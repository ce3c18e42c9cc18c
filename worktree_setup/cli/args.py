"""Command-line argument parsing for worktree-setup."""

import argparse
from typing import List, Optional

from worktree_setup.__version__ import __version__
from worktree_setup.services.display_service import DisplayService

EXAMPLES = """\
Examples:
  %(prog)s list
  %(prog)s create feature/story-10.11-view-consistency
  %(prog)s create --new story-10.12-new-feature
  %(prog)s remove feature/story-10.11-view-consistency

Worktrees are created next to the repository as <repo>--<branch>, with a
leading feature/ dropped and remaining slashes turned into dashes.
"""


class WorktreeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors in the tool's ERROR: format."""

    def error(self, message):
        DisplayService().error(message, ["Run 'worktree-setup --help' for usage"])
        self.exit(2)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per worktree operation."""
    parser = WorktreeArgumentParser(
        prog="worktree-setup",
        description="Create isolated git worktrees next to the repository for parallel work",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show verbose output")
    parser.add_argument("--version", action="version", version=f"worktree-setup {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information for troubleshooting"
    )
    parser.add_argument("--remote", default="origin", help="Remote holding shared branches (default: origin)")
    parser.add_argument(
        "--integration-branch",
        default="develop",
        help="Branch new feature branches are cut from (default: develop)",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    subparsers.add_parser("list", help="List existing worktrees and available feature branches")

    create = subparsers.add_parser(
        "create",
        help="Create a worktree for an existing branch, or a new branch with --new",
    )
    create.add_argument("branch", nargs="?", help="Branch to check out in the worktree")
    create.add_argument(
        "--new",
        action="store_true",
        help="Create a new branch from the integration branch (feature/ is added if no namespace is given)",
    )
    create.add_argument(
        "--no-install", action="store_true", help="Skip dependency install after creating the worktree"
    )

    remove = subparsers.add_parser("remove", help="Remove a worktree (keeps the branch)")
    remove.add_argument("branch", nargs="?", help="Branch whose worktree should be removed")

    install = subparsers.add_parser("install", help="Install dependencies in all packages of a worktree")
    install.add_argument("branch", nargs="?", help="Branch whose worktree should be set up")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)
