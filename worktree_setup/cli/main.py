"""Entry point for the worktree-setup command."""

import sys
from typing import List, Optional

from worktree_setup.cli.args import build_parser
from worktree_setup.config import Config
from worktree_setup.core import WorktreeManager
from worktree_setup.exceptions import (
    BranchNotFoundError,
    MissingArgumentError,
    WorktreeNotFoundError,
    WorktreeSetupError,
)
from worktree_setup.logging_config import setup_logging
from worktree_setup.services.display_service import DisplayService
from worktree_setup.services.git.repository import load_repository_context

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def run(argv: Optional[List[str]] = None, cwd: Optional[str] = None) -> int:
    """Parse arguments, run one command and return its exit status.

    Args:
        argv: Arguments without the program name; defaults to ``sys.argv[1:]``
        cwd: Directory the repository is resolved from; defaults to the process cwd
    """
    parser = build_parser()
    parsed_args = parser.parse_args(argv)

    if not parsed_args.command:
        parser.print_help()
        return EXIT_OK

    setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

    display = DisplayService(prog_name=parser.prog)
    try:
        config = Config(
            remote=parsed_args.remote,
            integration_branch=parsed_args.integration_branch,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )
        context = load_repository_context(cwd)
        display.installed_dir = config.installed_dir
        manager = WorktreeManager(context, config, display_service=display)

        if parsed_args.command == "list":
            manager.list_worktrees()
        elif parsed_args.command == "create":
            manager.create(parsed_args.branch, new_branch=parsed_args.new, install=not parsed_args.no_install)
        elif parsed_args.command == "remove":
            manager.remove(parsed_args.branch)
        elif parsed_args.command == "install":
            manager.install(parsed_args.branch)
        return EXIT_OK
    except MissingArgumentError as e:
        display.error(str(e), [f"Usage: {e.usage}"] if e.usage else None)
        return EXIT_USAGE
    except BranchNotFoundError as e:
        display.error(str(e), [e.hint] if e.hint else None)
        return EXIT_FAILURE
    except WorktreeNotFoundError as e:
        display.display_worktree_not_found(e.path, e.worktrees)
        return EXIT_FAILURE
    except (WorktreeSetupError, ValueError) as e:
        display.error(str(e))
        if parsed_args.debug:
            display.exception()
        return EXIT_FAILURE
    except KeyboardInterrupt:
        display.cancelled()
        return EXIT_FAILURE


def main() -> int:
    """Main entry point for the application."""
    return run(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
