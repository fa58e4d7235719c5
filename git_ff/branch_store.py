from abc import ABCMeta, abstractmethod
from enum import Enum, auto
from typing import Iterator, NamedTuple, Optional, Tuple

from git_ff.custom_types import AnyBranchName, FullCommitHash


class BranchScope(Enum):
    LOCAL = auto()
    REMOTE = auto()
    ALL = auto()


class BranchRef(NamedTuple):
    """A branch as enumerated from the reference store.

    `tip` is None when the reference does not resolve to a commit
    (a symbolic ref like `origin/HEAD`, or a ref to a missing object).
    `worktree_path` is set only for a branch checked out in a worktree other than the current one."""
    name: AnyBranchName
    scope: BranchScope
    is_current: bool
    tip: Optional[FullCommitHash]
    last_commit_time: Optional[int]
    worktree_path: Optional[str] = None


class Branch(NamedTuple):
    name: AnyBranchName
    scope: BranchScope
    is_current: bool
    tip: FullCommitHash
    last_commit_time: int
    worktree_path: Optional[str] = None


class TagTarget(NamedTuple):
    object_hash: str
    object_type: str

    @property
    def is_commit(self) -> bool:
        return self.object_type == "commit"


class CheckoutResult(NamedTuple):
    conflicting_paths: Tuple[str, ...] = ()
    error: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        return not self.conflicting_paths and self.error is None


class RefUpdateResult(NamedTuple):
    success: bool
    reason: Optional[str] = None


# flake8: noqa U100
# So that flake8 doesn't complain about unused params in abstract class.
class BranchStore(metaclass=ABCMeta):  # pragma: no cover
    """Narrow view of a repository's reference and object store,
    as needed for target resolution and fast-forwarding."""

    @abstractmethod
    def expect_repository(self) -> None:
        """Raises RepositoryAccessException if the store cannot be opened or read."""

    @abstractmethod
    def resolve_commit(self, text: str) -> Optional[FullCommitHash]:
        """Returns the commit with exactly this full hash, or None if there is no such commit."""

    @abstractmethod
    def lookup_branch(self, name: str, scope: BranchScope) -> Optional[Branch]:
        pass

    @abstractmethod
    def find_tag_target(self, name: str) -> Optional[TagTarget]:
        """Returns the object the tag `refs/tags/<name>` points at.
        Annotated tags are dereferenced exactly once."""

    @abstractmethod
    def iterate_branches(self, scope: BranchScope) -> Iterator[BranchRef]:
        pass

    @abstractmethod
    def get_merge_base(self, hash1: FullCommitHash, hash2: FullCommitHash) -> Optional[FullCommitHash]:
        """Returns None if the two commits have no common ancestor."""

    @abstractmethod
    def update_working_tree(self, from_hash: FullCommitHash, to_hash: FullCommitHash) -> CheckoutResult:
        """Moves the index and working tree from `from_hash` to `to_hash`
        without overwriting any local modifications. Does not move any reference."""

    @abstractmethod
    def set_branch_tip(self, branch: Branch, new_tip: FullCommitHash, expected_old_tip: FullCommitHash) -> RefUpdateResult:
        """Atomically points the branch to `new_tip`, provided it still points to `expected_old_tip`."""

    @abstractmethod
    def describe(self, commit_hash: FullCommitHash) -> str:
        """May raise UnderlyingGitException when there's nothing to describe the commit with."""
