from typing import AbstractSet, List, NamedTuple, Optional

from git_ff.branch_store import Branch, BranchRef, BranchScope, BranchStore
from git_ff.custom_types import AnyBranchName
from git_ff.utils import bold, debug, warn


class BranchSelection(NamedTuple):
    branches: List[Branch]
    # Longest name among ALL enumerated branches, including the ones filtered out or skipped,
    # so that the columns don't shift when the filter changes.
    name_width: int
    skipped: List[AnyBranchName]


def remote_prefix(remote: str) -> str:
    return f"{remote}/"


def _to_branch(branch_ref: BranchRef) -> Optional[Branch]:
    if branch_ref.tip is None:
        return None
    return Branch(name=branch_ref.name, scope=branch_ref.scope, is_current=branch_ref.is_current,
                  tip=branch_ref.tip, last_commit_time=branch_ref.last_commit_time or 0,
                  worktree_path=branch_ref.worktree_path)


def _passes_filters(branch_ref: BranchRef, prefix: Optional[str], names: AbstractSet[str], head_only: bool) -> bool:
    if prefix is not None and not branch_ref.name.startswith(prefix):
        return False
    if names:
        return branch_ref.name in names
    return branch_ref.is_current or not head_only


def enumerate_branches(
        store: BranchStore,
        scope: BranchScope,
        *,
        prefix: Optional[str] = None,
        names: AbstractSet[str] = frozenset(),
        head_only: bool = False
) -> BranchSelection:
    """Lists the branches of the given scope that pass the name-prefix filter and the explicit-name-set filter.

    An empty `names` set means no restriction, unless `head_only` is set,
    in which case only the checked-out branch is selected.
    Branches that don't resolve to a commit are skipped with a warning."""
    branches: List[Branch] = []
    skipped: List[AnyBranchName] = []
    name_width = 0
    found_names = set()

    for branch_ref in store.iterate_branches(scope):
        name_width = max(name_width, len(branch_ref.name))
        if not _passes_filters(branch_ref, prefix, names, head_only):
            continue
        found_names.add(branch_ref.name)

        branch = _to_branch(branch_ref)
        if branch is None:
            warn(f"Cannot get commit for branch {bold(branch_ref.name)}, skipping")
            skipped.append(branch_ref.name)
            continue
        branches.append(branch)

    for name in sorted(names):
        if name not in found_names:
            warn(f"Branch {bold(name)} not found, skipping")

    debug(f"selected {len(branches)} branch(es), skipped {len(skipped)}, name width {name_width}")
    return BranchSelection(branches=branches, name_width=name_width, skipped=skipped)
