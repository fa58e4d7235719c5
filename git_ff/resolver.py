from enum import Enum, auto
from typing import NamedTuple, Optional, Tuple

from git_ff.branch_store import BranchScope, BranchStore
from git_ff.custom_types import FullCommitHash
from git_ff.exceptions import (NonCommitTagException,
                               UnresolvedTargetException)
from git_ff.utils import bold, debug


class ResolutionStrategy(Enum):
    COMMIT_HASH = auto()
    LOCAL_BRANCH = auto()
    REMOTE_BRANCH = auto()
    TAG = auto()


# First match wins. A spec shaped like a full commit hash is only ever looked up as a commit.
RESOLUTION_ORDER: Tuple[ResolutionStrategy, ...] = (
    ResolutionStrategy.COMMIT_HASH,
    ResolutionStrategy.LOCAL_BRANCH,
    ResolutionStrategy.REMOTE_BRANCH,
    ResolutionStrategy.TAG,
)


class ResolvedTarget(NamedTuple):
    spec: str
    commit_hash: FullCommitHash
    resolved_by: ResolutionStrategy

    def __str__(self) -> str:
        return self.spec


def _resolve_tag(spec: str, store: BranchStore) -> Optional[FullCommitHash]:
    tag_target = store.find_tag_target(spec)
    if tag_target is None:
        return None
    if not tag_target.is_commit:
        raise NonCommitTagException(
            f"Tag {bold(spec)} does not point to a commit (it points to a {tag_target.object_type})")
    return FullCommitHash.of(tag_target.object_hash)


def _try_strategy(strategy: ResolutionStrategy, spec: str, store: BranchStore) -> Optional[FullCommitHash]:
    if strategy == ResolutionStrategy.COMMIT_HASH:
        if not FullCommitHash.is_valid(spec):
            return None
        return store.resolve_commit(spec.lower())
    elif strategy == ResolutionStrategy.LOCAL_BRANCH:
        branch = store.lookup_branch(spec, BranchScope.LOCAL)
        return branch.tip if branch else None
    elif strategy == ResolutionStrategy.REMOTE_BRANCH:
        branch = store.lookup_branch(spec, BranchScope.REMOTE)
        return branch.tip if branch else None
    elif strategy == ResolutionStrategy.TAG:
        return _resolve_tag(spec, store)
    else:  # pragma: no cover
        raise ValueError(f"Unknown resolution strategy: {strategy}")


def resolve_target(spec: str, store: BranchStore) -> ResolvedTarget:
    """Resolves a commit hash, local branch, remote branch or tag name (in this order) to a commit.

    The result is computed once per run and never re-resolved,
    even if the underlying reference moves in the meantime.
    A spec shaped like a full commit hash is never looked up as a branch or a tag."""
    if not spec:
        raise UnresolvedTargetException("Cannot resolve an empty fast-forward target")
    for strategy in RESOLUTION_ORDER:
        commit_hash = _try_strategy(strategy, spec, store)
        if commit_hash is not None:
            debug(f"resolved {spec} as {strategy.name.lower()} to {commit_hash}")
            return ResolvedTarget(spec=spec, commit_hash=commit_hash, resolved_by=strategy)
        if strategy == ResolutionStrategy.COMMIT_HASH and FullCommitHash.is_valid(spec):
            raise UnresolvedTargetException(f"Cannot resolve {bold(spec)}: no such commit")
    raise UnresolvedTargetException(f"Cannot resolve {bold(spec)}")
