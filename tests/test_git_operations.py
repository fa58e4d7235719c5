import os
from tempfile import mkdtemp

import pytest

from git_ff.branch_store import BranchScope
from git_ff.custom_types import FullCommitHash, LocalBranchShortName
from git_ff.exceptions import RepositoryAccessException
from git_ff.git_operations import GitContext

from .base_test import BaseTest
from .mockers import execute, popen, write_to_file
from .mockers_git_repository import (add_file_and_commit, add_worktree,
                                     check_out, commit, create_annotated_tag,
                                     create_branch_at, create_lightweight_tag,
                                     create_repo, create_tag_on_tree,
                                     get_current_commit_hash, new_branch)


class TestGitOperations(BaseTest):

    def test_expect_repository_outside_of_repository(self) -> None:
        os.chdir(mkdtemp())
        with pytest.raises(RepositoryAccessException) as e:
            GitContext().expect_repository()
        assert e.value.msg == "Not a git repository"

    def test_resolve_commit(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        create_annotated_tag("v1.0")
        commit_hash = get_current_commit_hash()

        git = GitContext()
        assert git.resolve_commit(commit_hash) == commit_hash
        assert git.resolve_commit(40 * 'a') is None
        assert git.resolve_commit(commit_hash[:10]) is None
        # Tag objects are not commits, even though they point to one.
        tag_object_hash = popen("git rev-parse v1.0")
        assert git.resolve_commit(tag_object_hash) is None

    def test_branches(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        new_branch("develop")
        commit("develop commit")
        develop_hash = get_current_commit_hash()
        execute(f"git update-ref refs/remotes/origin/develop {develop_hash}")
        execute("git symbolic-ref refs/remotes/origin/HEAD refs/remotes/origin/develop")

        git = GitContext()
        local = list(git.iterate_branches(BranchScope.LOCAL))
        assert [(ref.name, ref.is_current) for ref in local] == [("develop", True), ("master", False)]
        assert local[0].tip == develop_hash
        assert isinstance(local[0].last_commit_time, int)

        remote = list(git.iterate_branches(BranchScope.REMOTE))
        assert [(ref.name, ref.tip) for ref in remote] == [("origin/HEAD", None), ("origin/develop", develop_hash)]
        assert len(list(git.iterate_branches(BranchScope.ALL))) == 4

        branch = git.lookup_branch("origin/develop", BranchScope.REMOTE)
        assert branch is not None and branch.tip == develop_hash
        assert git.lookup_branch("origin/develop", BranchScope.LOCAL) is None
        assert git.lookup_branch("origin/HEAD", BranchScope.REMOTE) is None

    def test_local_branch_named_like_a_remote_ref(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        old_hash = FullCommitHash.of(get_current_commit_hash())
        create_branch_at("refs/remotes/x", "master")
        commit("master second commit")
        new_hash = FullCommitHash.of(get_current_commit_hash())

        git = GitContext()
        local = list(git.iterate_branches(BranchScope.LOCAL))
        assert [(ref.name, ref.tip) for ref in local] == [("master", new_hash), ("refs/remotes/x", old_hash)]
        assert list(git.iterate_branches(BranchScope.REMOTE)) == []

        branch = git.lookup_branch("refs/remotes/x", BranchScope.LOCAL)
        assert branch is not None
        assert git.set_branch_tip(branch, new_tip=new_hash, expected_old_tip=old_hash).success
        assert popen("git rev-parse refs/heads/refs/remotes/x") == new_hash

    def test_branch_checked_out_in_another_worktree(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        create_branch_at("elsewhere", "master")
        create_branch_at("idle", "master")
        worktree_path = add_worktree("elsewhere")

        local = {ref.name: ref for ref in GitContext().iterate_branches(BranchScope.LOCAL)}
        assert local["master"].is_current and local["master"].worktree_path is None
        assert not local["elsewhere"].is_current
        assert local["elsewhere"].worktree_path is not None
        assert os.path.samefile(local["elsewhere"].worktree_path, worktree_path)
        assert local["idle"].worktree_path is None

        # Seen from within the other worktree, the roles are swapped.
        os.chdir(worktree_path)
        local = {ref.name: ref for ref in GitContext().iterate_branches(BranchScope.LOCAL)}
        assert local["elsewhere"].is_current and local["elsewhere"].worktree_path is None
        assert local["master"].worktree_path is not None

    def test_tags(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        commit_hash = get_current_commit_hash()
        create_lightweight_tag("light")
        create_annotated_tag("annotated")
        create_tag_on_tree("on-tree")

        git = GitContext()
        light = git.find_tag_target("light")
        assert light is not None and light.is_commit and light.object_hash == commit_hash
        annotated = git.find_tag_target("annotated")
        assert annotated is not None and annotated.is_commit and annotated.object_hash == commit_hash
        on_tree = git.find_tag_target("on-tree")
        assert on_tree is not None and on_tree.object_type == "tree"
        assert git.find_tag_target("no-such-tag") is None

    def test_get_merge_base(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        root_hash = FullCommitHash.of(get_current_commit_hash())
        commit("master second commit")
        master_hash = FullCommitHash.of(get_current_commit_hash())
        execute("git checkout -q --orphan unrelated")
        commit("unrelated commit")
        unrelated_hash = FullCommitHash.of(get_current_commit_hash())

        git = GitContext()
        assert git.get_merge_base(root_hash, master_hash) == root_hash
        assert git.get_merge_base(master_hash, root_hash) == root_hash
        assert git.get_merge_base(master_hash, master_hash) == master_hash
        assert git.get_merge_base(master_hash, unrelated_hash) is None

    def test_set_branch_tip_is_compare_and_set(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        old_hash = FullCommitHash.of(get_current_commit_hash())
        commit("master second commit")
        new_hash = FullCommitHash.of(get_current_commit_hash())
        create_branch_at("feature", old_hash)

        git = GitContext()
        feature = git.lookup_branch(LocalBranchShortName.of("feature"), BranchScope.LOCAL)
        assert feature is not None

        # Someone else moved the branch in the meantime.
        stale = feature._replace(tip=new_hash)
        result = git.set_branch_tip(stale, new_tip=new_hash, expected_old_tip=new_hash)
        assert not result.success
        assert result.reason

        result = git.set_branch_tip(feature, new_tip=new_hash, expected_old_tip=old_hash)
        assert result.success
        updated = git.lookup_branch("feature", BranchScope.LOCAL)
        assert updated is not None and updated.tip == new_hash

    def test_update_working_tree(self) -> None:
        create_repo()
        new_branch("master")
        add_file_and_commit(file_path="a.txt", file_content="1\n", message="first")
        old_hash = FullCommitHash.of(get_current_commit_hash())
        add_file_and_commit(file_path="a.txt", file_content="2\n", message="second")
        new_hash = FullCommitHash.of(get_current_commit_hash())
        check_out(old_hash)

        git = GitContext()
        write_to_file("a.txt", "dirty\n")
        result = git.update_working_tree(old_hash, new_hash)
        assert result.conflicting_paths == ("a.txt",)
        assert not result.is_ok

        write_to_file("a.txt", "1\n")
        result = git.update_working_tree(old_hash, new_hash)
        assert result.is_ok
        with open("a.txt") as f:
            assert f.read() == "2\n"
        # References are left alone, only the working tree moves.
        assert get_current_commit_hash() == old_hash

    def test_describe(self) -> None:
        create_repo()
        new_branch("master")
        commit("master first commit")
        create_lightweight_tag("v1.0")
        commit_hash = FullCommitHash.of(get_current_commit_hash())

        assert GitContext().describe(commit_hash) == "v1.0"

    def test_config(self) -> None:
        create_repo()
        execute("git config ff.failOnBranchError yes")
        execute("git config recent.all false")

        git = GitContext()
        assert git.get_boolean_config_attr("ff.failOnBranchError", default_value=False) is True
        assert git.get_boolean_config_attr("recent.all", default_value=True) is False
        assert git.get_boolean_config_attr("recent.describe", default_value=False) is False
