import datetime

import pytest
from pytest import CaptureFixture

from git_ff.branch_store import BranchScope
from git_ff.client.ff import FastForwardClient
from git_ff.client.recent import RecentClient
from git_ff.exceptions import FfException, RepositoryAccessException

from .base_test import BaseTest
from .mockers_branch_store import InMemoryBranchStore, commit_hash


def local_time(timestamp: int) -> str:
    return datetime.datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


class TestFastForwardClient(BaseTest):

    def setup_method(self) -> None:
        super().setup_method()
        self.store = InMemoryBranchStore()
        self.store.add_commit(1)
        self.store.add_commit(2, 1)
        self.store.add_commit(3, 2)
        self.store.add_commit(5, 1)
        self.store.add_branch("master", 3)
        self.store.add_branch("behind", 2, is_current=True)
        self.store.add_branch("diverged-branch", 5)

    def fast_forward(self, *branch_names: str, opt_all: bool = False, opt_list: bool = False, opt_only: bool = False,
                     opt_not: bool = False, opt_fail_on_branch_error: bool = False) -> None:
        FastForwardClient(self.store).fast_forward(
            target_spec="master", branch_names=frozenset(branch_names), opt_all=opt_all, opt_list=opt_list,
            opt_only=opt_only, opt_not=opt_not, opt_fail_on_branch_error=opt_fail_on_branch_error)

    def test_list(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward(opt_list=True)
        assert capsys.readouterr().out == (
            "  master           already on master\n"
            "* behind           fast-forward to master\n"
            "  diverged-branch  non-fast-forward to master\n"
        )
        assert self.store.ref_updates == []

    def test_list_only(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward(opt_list=True, opt_only=True)
        assert capsys.readouterr().out == "master\nbehind\n"

    def test_list_not(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward(opt_list=True, opt_not=True)
        assert capsys.readouterr().out == "diverged-branch\n"

    def test_list_explicit_branches(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward("diverged-branch", opt_list=True)
        assert capsys.readouterr().out == "  diverged-branch  non-fast-forward to master\n"

    def test_current_branch_only_by_default(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward()
        assert capsys.readouterr().out == "Fast-forwarded behind to master\n"
        assert self.store.ref_updates == [("behind", commit_hash(2), commit_hash(3))]
        assert self.store.working_tree_updates == [(commit_hash(2), commit_hash(3))]

    def test_all(self, capsys: CaptureFixture[str]) -> None:
        self.fast_forward(opt_all=True)
        captured = capsys.readouterr()
        assert captured.out == "Branch master already on master\nFast-forwarded behind to master\n"
        assert captured.err == "Not possible to fast-forward diverged-branch\n"

    def test_fail_on_branch_error(self, capsys: CaptureFixture[str]) -> None:
        with pytest.raises(FfException) as e:
            self.fast_forward("diverged-branch", "behind", opt_fail_on_branch_error=True)
        assert e.value.msg == "Fast-forward failed for 1 branch(es)"
        # Failures don't stop the remaining branches from being processed.
        assert self.store.tip_of("behind") == commit_hash(3)
        assert capsys.readouterr().err == "Not possible to fast-forward diverged-branch\n"

    def test_detached_head(self, capsys: CaptureFixture[str]) -> None:
        self.store.branch_refs = [ref._replace(is_current=False) for ref in self.store.branch_refs]
        self.fast_forward()
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Warn: Not currently on any branch, nothing to fast-forward\n"

    def test_broken_repository(self) -> None:
        self.store.is_broken = True
        with pytest.raises(RepositoryAccessException):
            self.fast_forward()
        assert self.store.ref_updates == []


class TestRecentClient(BaseTest):

    def setup_method(self) -> None:
        super().setup_method()
        self.store = InMemoryBranchStore()
        self.store.add_commit(1, time=1500000000)
        self.store.add_commit(2, time=1600000000)
        self.store.add_commit(3, time=1700000000)
        self.store.add_branch("master", 1)
        self.store.add_branch("develop", 2, is_current=True)
        self.store.add_branch("origin/master", 3, scope=BranchScope.REMOTE)
        self.store.add_branch("origin/HEAD", None, scope=BranchScope.REMOTE)
        self.store.add_branch("upstream/a-very-long-branch", 1, scope=BranchScope.REMOTE)

    def test_local(self, capsys: CaptureFixture[str]) -> None:
        RecentClient(self.store).display_recent(opt_all=False, opt_remote=None, opt_describe=False)
        assert capsys.readouterr().out == (
            f"* develop  ({local_time(1600000000)})\n"
            f"  master   ({local_time(1500000000)})\n"
        )

    def test_all(self, capsys: CaptureFixture[str]) -> None:
        RecentClient(self.store).display_recent(opt_all=True, opt_remote=None, opt_describe=False)
        captured = capsys.readouterr()
        assert captured.out == (
            f"  origin/master                ({local_time(1700000000)})\n"
            f"* develop                      ({local_time(1600000000)})\n"
            f"  master                       ({local_time(1500000000)})\n"
            f"  upstream/a-very-long-branch  ({local_time(1500000000)})\n"
        )
        assert captured.err == "Warn: Cannot get commit for branch origin/HEAD, skipping\n"

    def test_remote(self, capsys: CaptureFixture[str]) -> None:
        RecentClient(self.store).display_recent(opt_all=False, opt_remote="origin", opt_describe=False)
        # Column width still accounts for the branches of the other remote.
        assert capsys.readouterr().out == f"  origin/master                ({local_time(1700000000)})\n"

    def test_describe(self, capsys: CaptureFixture[str]) -> None:
        self.store.descriptions[commit_hash(2)] = "v2.0"
        RecentClient(self.store).display_recent(opt_all=False, opt_remote=None, opt_describe=True)
        assert capsys.readouterr().out == (
            f"* develop  ({local_time(1600000000)}) v2.0\n"
            f"  master   ({local_time(1500000000)})\n"
        )

    def test_broken_repository(self) -> None:
        self.store.is_broken = True
        with pytest.raises(RepositoryAccessException):
            RecentClient(self.store).display_recent(opt_all=False, opt_remote=None, opt_describe=False)
