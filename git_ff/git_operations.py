import re
from typing import Dict, Iterator, List, Optional, Tuple

from git_ff import utils
from git_ff.branch_store import (Branch, BranchRef, BranchScope,
                                 BranchStore, CheckoutResult,
                                 RefUpdateResult, TagTarget)
from git_ff.constants import REFLOG_MESSAGE_PREFIX, TAG_REF_PREFIX
from git_ff.custom_types import (AnyBranchName, FullCommitHash,
                                 LocalBranchFullName, LocalBranchShortName,
                                 RemoteBranchFullName, RemoteBranchShortName)
from git_ff.exceptions import (RepositoryAccessException,
                               UnderlyingGitException, UnexpectedFfException)
from git_ff.utils import CommandResult, debug, fmt, hex_repr

BRANCH_REF_FORMAT = "%(refname)\t%(objectname)\t%(objecttype)\t%(committerdate:raw)\t%(HEAD)\t%(symref)\t%(worktreepath)"
TAG_REF_FORMAT = "%(refname)\t%(objecttype)\t%(objectname)\t%(*objecttype)\t%(*objectname)"

# Git reports paths blocking a checkout either one per line, indented with a tab,
# or (in older versions) as `Entry '<path>' ...` messages.
CONFLICTING_ENTRY_REGEX = re.compile("^error: (?:Entry|Untracked working tree file) '(.+)' (?:not uptodate|would be overwritten by merge)")


class GitContext(BranchStore):

    def __init__(self) -> None:
        self.__git_dir: Optional[str] = None

        self.__branches_cached: Dict[BranchScope, List[BranchRef]] = {}
        self.__config_cached: Optional[Dict[str, str]] = None
        self.__merge_base_cached: Dict[Tuple[FullCommitHash, FullCommitHash], Optional[FullCommitHash]] = {}
        self.__tag_targets_cached: Optional[Dict[str, TagTarget]] = None

    def flush_caches(self) -> None:
        self.__branches_cached = {}
        self.__config_cached = None
        self.__tag_targets_cached = None

    def _popen_git(self, git_cmd: str, *args: str, allow_non_zero: bool = False) -> CommandResult:
        exit_code, stdout, stderr = utils.popen_cmd("git", git_cmd, *args)
        if not allow_non_zero and exit_code != 0:
            exit_code_msg: str = fmt(f"`{utils.get_cmd_shell_repr('git', git_cmd, *args)}` returned {exit_code}\n")
            stdout_msg: str = f"\n{utils.bold('stdout')}:\n{utils.dim(stdout)}" if stdout else ""
            stderr_msg: str = f"\n{utils.bold('stderr')}:\n{utils.dim(stderr)}" if stderr else ""
            # Not applying the formatter to avoid transforming whatever characters might be in the output of the command.
            raise UnderlyingGitException(exit_code_msg + stdout_msg + stderr_msg, apply_fmt=False)
        return CommandResult(stdout, stderr, exit_code)

    def get_git_dir(self) -> str:
        if not self.__git_dir:
            try:
                self.__git_dir = self._popen_git("rev-parse", "--git-dir").stdout.strip()
            except UnderlyingGitException:
                raise RepositoryAccessException("Not a git repository")
        return self.__git_dir

    def expect_repository(self) -> None:
        git_dir = self.get_git_dir()
        # A repository whose refs cannot be listed is as good as no repository at all.
        try:
            self._popen_git("for-each-ref", "--count=1", "--format=%(refname)")
        except UnderlyingGitException as e:
            raise RepositoryAccessException(f"Cannot read references of the repository at `{git_dir}`:\n{e}", apply_fmt=False)

    def __ensure_config_loaded(self) -> None:
        if self.__config_cached is None:
            self.__config_cached = {}
            git_config_stdout = self._popen_git("config", "--list", "--null").stdout
            for config_entry in filter(None, git_config_stdout.split("\0")):
                # Apparently, even on Windows, this command uses just \n (and not \r\n) to separate config key from value.
                key_and_value_lines = config_entry.split('\n', 1)
                if len(key_and_value_lines) == 2:
                    key, value_lines = key_and_value_lines
                    self.__config_cached[key.lower()] = value_lines
                else:
                    raise UnexpectedFfException(f"Cannot parse config entry: {config_entry}.")

    def get_config_attr_or_none(self, key: str) -> Optional[str]:
        self.__ensure_config_loaded()
        assert self.__config_cached is not None
        return self.__config_cached.get(key.lower())

    def get_boolean_config_attr_or_none(self, key: str) -> Optional[bool]:
        value = self.get_config_attr_or_none(key)
        if value is None:
            return None
        return value.lower() in ('true', 'yes', 'on', '1')

    def get_boolean_config_attr(self, key: str, default_value: bool) -> bool:
        value = self.get_boolean_config_attr_or_none(key)
        return value if value is not None else default_value

    def resolve_commit(self, text: str) -> Optional[FullCommitHash]:
        if not FullCommitHash.is_valid(text):
            return None
        # Unlike `rev-parse`, `cat-file -t` neither peels tags nor falls back to ref names.
        result = self._popen_git("cat-file", "-t", text, allow_non_zero=True)
        if result.exit_code != 0 or result.stdout.strip() != "commit":
            debug(f"{text} is not a commit in the object store")
            return None
        return FullCommitHash.of(text)

    def __load_branches(self, scope: BranchScope) -> List[BranchRef]:
        if scope == BranchScope.ALL:
            return self.__get_branches(BranchScope.LOCAL) + self.__get_branches(BranchScope.REMOTE)
        refs_prefix = "refs/heads" if scope == BranchScope.LOCAL else "refs/remotes"

        result: List[BranchRef] = []
        raw = utils.get_non_empty_lines(self._popen_git("for-each-ref", f"--format={BRANCH_REF_FORMAT}", refs_prefix).stdout)
        for line in raw:
            # The worktree path goes last, so it may contain tabs of its own.
            values = line.split("\t", 6)
            if len(values) != 7:
                raise UnexpectedFfException(
                    f"`git for-each-ref` did not return exactly 7 values for `{refs_prefix}`: "
                    f"`{values}` ({hex_repr(line)}).")
            ref_name, object_hash, object_type, committer_date_raw, head_marker, symref, worktree_path = values
            if scope == BranchScope.LOCAL:
                name: AnyBranchName = LocalBranchFullName.of(ref_name).to_short_name()
            else:
                name = RemoteBranchFullName.of(ref_name).to_short_name()

            # Symbolic refs (like `origin/HEAD`) don't point to a commit by themselves.
            if symref or object_type != "commit" or not FullCommitHash.is_valid(object_hash):
                debug(f"{ref_name} does not directly point to a commit (symref: `{symref}`, type: `{object_type}`)")
                tip: Optional[FullCommitHash] = None
                last_commit_time: Optional[int] = None
            else:
                tip = FullCommitHash.of(object_hash)
                # Using 'committerdate:raw' instead of 'committerdate:unix' since the latter isn't supported by some older versions of git.
                last_commit_time = int(committer_date_raw.split(' ')[0])
            is_current = head_marker == "*"
            # `%(worktreepath)` is also filled in for the branch checked out in the current worktree.
            result.append(BranchRef(name=name, scope=scope, is_current=is_current, tip=tip,
                                    last_commit_time=last_commit_time,
                                    worktree_path=worktree_path if worktree_path and not is_current else None))
        return result

    def __get_branches(self, scope: BranchScope) -> List[BranchRef]:
        if scope not in self.__branches_cached:
            self.__branches_cached[scope] = self.__load_branches(scope)
        return self.__branches_cached[scope]

    def iterate_branches(self, scope: BranchScope) -> Iterator[BranchRef]:
        return iter(self.__get_branches(scope))

    def lookup_branch(self, name: str, scope: BranchScope) -> Optional[Branch]:
        for branch_ref in self.__get_branches(scope):
            if branch_ref.name == name and branch_ref.tip is not None:
                return Branch(name=branch_ref.name, scope=branch_ref.scope, is_current=branch_ref.is_current,
                              tip=branch_ref.tip, last_commit_time=branch_ref.last_commit_time or 0,
                              worktree_path=branch_ref.worktree_path)
        return None

    def __load_tag_targets(self) -> Dict[str, TagTarget]:
        result: Dict[str, TagTarget] = {}
        raw = utils.get_non_empty_lines(self._popen_git("for-each-ref", f"--format={TAG_REF_FORMAT}", "refs/tags").stdout)
        for line in raw:
            # The worktree path goes last, so it may contain tabs of its own.
            values = line.split("\t", 6)
            if len(values) != 5:
                raise UnexpectedFfException(
                    f"`git for-each-ref` did not return exactly 5 values for `refs/tags`: "
                    f"`{values}` ({hex_repr(line)}).")
            ref_name, object_type, object_hash, peeled_object_type, peeled_object_hash = values
            tag_name = ref_name[len(TAG_REF_PREFIX):]
            if object_type == "tag":
                result[tag_name] = TagTarget(object_hash=peeled_object_hash, object_type=peeled_object_type)
            else:
                result[tag_name] = TagTarget(object_hash=object_hash, object_type=object_type)
        return result

    def find_tag_target(self, name: str) -> Optional[TagTarget]:
        if self.__tag_targets_cached is None:
            self.__tag_targets_cached = self.__load_tag_targets()
        return self.__tag_targets_cached.get(name)

    def get_merge_base(self, hash1: FullCommitHash, hash2: FullCommitHash) -> Optional[FullCommitHash]:
        if hash1 == hash2:
            return hash1
        if hash1 > hash2:
            hash1, hash2 = hash2, hash1
        if (hash1, hash2) not in self.__merge_base_cached:
            # Without '--all', there's only one merge base even for criss-cross histories.
            # That's enough for the is-ancestor checks: if one commit is an ancestor of the other,
            # then it's the only merge base; otherwise none of the merge bases equals either commit.
            # Unrelated histories make `git merge-base` exit with 1 and print nothing.
            merge_base = self._popen_git("merge-base", hash1, hash2, allow_non_zero=True).stdout.strip()
            self.__merge_base_cached[hash1, hash2] = FullCommitHash.of(merge_base) if merge_base else None
        return self.__merge_base_cached[hash1, hash2]

    @staticmethod
    def __get_conflicting_paths(stderr: str) -> Tuple[str, ...]:
        paths: List[str] = []
        for line in stderr.splitlines():
            match = CONFLICTING_ENTRY_REGEX.match(line)
            if match:
                paths.append(match.group(1))
            elif line.startswith("\t") and line.strip():
                paths.append(line.strip())
        return tuple(paths)

    def update_working_tree(self, from_hash: FullCommitHash, to_hash: FullCommitHash) -> CheckoutResult:
        # Two-tree merge: carries local modifications over, unless they touch a path that differs
        # between the two commits, in which case nothing at all is written.
        # Stale stat info in the index would otherwise make unmodified files look modified.
        self._popen_git("update-index", "-q", "--refresh", allow_non_zero=True)
        result = self._popen_git("read-tree", "-m", "-u", from_hash, to_hash, allow_non_zero=True)
        utils.mark_current_directory_as_possibly_non_existent()
        self.flush_caches()
        if result.exit_code == 0:
            return CheckoutResult()
        conflicting_paths = self.__get_conflicting_paths(result.stderr)
        if conflicting_paths:
            return CheckoutResult(conflicting_paths=conflicting_paths)
        return CheckoutResult(error=result.stderr.strip() or f"`git read-tree` returned {result.exit_code}")

    def set_branch_tip(self, branch: Branch, new_tip: FullCommitHash, expected_old_tip: FullCommitHash) -> RefUpdateResult:
        if branch.scope == BranchScope.LOCAL:
            ref_name: AnyBranchName = LocalBranchShortName(branch.name).full_name()
        else:
            ref_name = RemoteBranchShortName(branch.name).full_name()
        reflog_message = f"{REFLOG_MESSAGE_PREFIX}: fast-forward to {new_tip}"
        # Passing the old value makes `update-ref` fail instead of overwriting a concurrent change.
        result = self._popen_git("update-ref", "-m", reflog_message, ref_name, new_tip, expected_old_tip, allow_non_zero=True)
        self.flush_caches()
        if result.exit_code != 0:
            return RefUpdateResult(success=False, reason=result.stderr.strip() or f"`git update-ref` returned {result.exit_code}")
        return RefUpdateResult(success=True)

    def describe(self, commit_hash: FullCommitHash) -> str:
        return self._popen_git("describe", "--tags", commit_hash).stdout.strip()
