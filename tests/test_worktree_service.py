"""Tests for WorktreeService"""
from pathlib import Path
from unittest.mock import Mock, patch

import git
import pytest

from worktree_setup.exceptions import GitOperationError
from worktree_setup.models.worktree import BranchLocation
from worktree_setup.services.git.worktrees import WorktreeService, describe_git_error


PORCELAIN_OUTPUT = """worktree /home/u/app
HEAD 1111111111111111111111111111111111111111
branch refs/heads/main

worktree /home/u/app--x-1
HEAD 2222222222222222222222222222222222222222
branch refs/heads/feature/x-1

worktree /home/u/app--detached
HEAD 3333333333333333333333333333333333333333
detached
"""


class TestWorktreeListing:
    """Test parsing of git worktree list --porcelain."""

    def test_parse_porcelain(self):
        service = WorktreeService("/home/u/app")
        mock_repo = Mock()
        mock_repo.git.worktree.return_value = PORCELAIN_OUTPUT

        with patch.object(service, "_get_repo", return_value=mock_repo):
            worktrees = service.get_worktree_info()

        assert [wt.path for wt in worktrees] == ["/home/u/app", "/home/u/app--x-1", "/home/u/app--detached"]
        assert [wt.branch_name for wt in worktrees] == ["main", "feature/x-1", ""]
        assert [wt.is_main for wt in worktrees] == [True, False, False]
        assert worktrees[1].short_sha == "2222222"
        # None of these paths exist on the test machine
        assert all(wt.is_orphaned for wt in worktrees)
        mock_repo.git.worktree.assert_called_once_with("list", "--porcelain")

    def test_parse_without_trailing_blank_line(self):
        service = WorktreeService("/home/u/app")
        mock_repo = Mock()
        mock_repo.git.worktree.return_value = "worktree /home/u/app\nHEAD abc\nbranch refs/heads/main"

        with patch.object(service, "_get_repo", return_value=mock_repo):
            worktrees = service.get_worktree_info()

        assert len(worktrees) == 1
        assert worktrees[0].branch_name == "main"

    def test_list_failure_returns_empty(self):
        service = WorktreeService("/home/u/app")
        mock_repo = Mock()
        mock_repo.git.worktree.side_effect = git.exc.GitCommandError("worktree", 128, stderr="fatal: boom")

        with patch.object(service, "_get_repo", return_value=mock_repo):
            assert service.get_worktree_info() == []

    def test_real_repo_lists_main_worktree(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        worktrees = service.get_worktree_info()
        assert len(worktrees) == 1
        assert worktrees[0].is_main
        assert worktrees[0].branch_name == "main"
        assert not worktrees[0].is_orphaned


class TestBranchQueries:
    """Test branch existence and listing."""

    def test_branch_location(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        assert service.get_branch_location("feature/local-work") == BranchLocation.LOCAL
        assert service.get_branch_location("feature/remote-only") == BranchLocation.REMOTE
        assert service.get_branch_location("feature/nope") == BranchLocation.MISSING

    def test_local_takes_precedence(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        # main exists both locally and as origin/main
        assert service.remote_branch_exists("main")
        assert service.get_branch_location("main") == BranchLocation.LOCAL

    def test_other_remote_name(self, git_repo):
        service = WorktreeService(git_repo.working_dir, remote="upstream")
        assert not service.remote_branch_exists("feature/remote-only")

    def test_list_local_branches(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        assert service.list_local_branches("feature/*") == ["feature/local-work"]

    def test_list_remote_branches_strips_remote(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        assert service.list_remote_branches("feature/*") == ["feature/remote-only"]

    def test_fetch(self, git_repo):
        service = WorktreeService(git_repo.working_dir)
        assert service.fetch("develop") is True
        assert service.fetch("does-not-exist") is False


class TestWorktreeMutation:
    """Test worktree add/remove."""

    def test_add_and_remove(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_dir)
        wt_path = temp_dir / "home" / "app--local-work"

        service.add_worktree(wt_path, "feature/local-work")
        assert (wt_path / "README.md").is_file()
        assert {wt.branch_name for wt in service.get_worktree_info()} == {"main", "feature/local-work"}

        service.remove_worktree(wt_path, force=True)
        assert not wt_path.exists()
        assert service.local_branch_exists("feature/local-work")

    def test_add_new_branch_with_tracking(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_dir)
        wt_path = temp_dir / "home" / "app--remote-only"

        service.add_worktree(
            wt_path, "feature/remote-only", new_branch=True, start_point="origin/feature/remote-only", track=True
        )

        upstream = git_repo.git.rev_parse("--abbrev-ref", "feature/remote-only@{upstream}")
        assert upstream == "origin/feature/remote-only"
        assert (wt_path / "remote.txt").is_file()

    def test_add_failure_raises(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_dir)
        # main is already checked out in the main working tree
        with pytest.raises(GitOperationError, match="worktree add"):
            service.add_worktree(temp_dir / "home" / "app--main", "main")

    def test_remove_failure_raises(self, git_repo, temp_dir):
        service = WorktreeService(git_repo.working_dir)
        with pytest.raises(GitOperationError, match="worktree remove"):
            service.remove_worktree(temp_dir / "home" / "not-a-worktree", force=True)

    def test_add_builds_arguments(self):
        service = WorktreeService("/home/u/app")
        mock_repo = Mock()
        with patch.object(service, "_get_repo", return_value=mock_repo):
            service.add_worktree(Path("/home/u/app--x"), "feature/x", new_branch=True, start_point="origin/develop")

        mock_repo.git.worktree.assert_called_once_with(
            "add", "/home/u/app--x", "-b", "feature/x", "origin/develop"
        )


class TestDescribeGitError:
    """Test formatting of GitCommandError messages."""

    def test_with_stderr(self):
        error = git.exc.GitCommandError(["git", "worktree"], 128, stderr="fatal: 'x' is already checked out")
        message = describe_git_error("worktree add", error)
        assert message == "git worktree add failed (exit 128): fatal: 'x' is already checked out"

    def test_without_stderr(self):
        error = git.exc.GitCommandError(["git", "worktree"], 1)
        message = describe_git_error("worktree add", error)
        assert message.startswith("git worktree add failed")
