from typing import List, NamedTuple, Optional

from git_ff.branch_store import Branch, BranchStore
from git_ff.exceptions import UnderlyingGitException
from git_ff.utils import debug


class RecencyEntry(NamedTuple):
    branch: Branch
    timestamp: int
    annotation: Optional[str] = None


def _describe_or_none(branch: Branch, store: BranchStore) -> Optional[str]:
    try:
        return store.describe(branch.tip) or None
    except UnderlyingGitException as e:
        # Commits with no tag in their history can't be described, and that's fine.
        debug(f"cannot describe {branch.name}: {e}")
        return None


def collect_recent(branches: List[Branch], store: BranchStore, *, describe: bool = False) -> List[RecencyEntry]:
    entries = [RecencyEntry(branch=branch, timestamp=branch.last_commit_time) for branch in branches]
    # `sorted` is stable, so branches with equal timestamps keep their enumeration order.
    entries = sorted(entries, key=lambda entry: entry.timestamp, reverse=True)
    if describe:
        entries = [entry._replace(annotation=_describe_or_none(entry.branch, store)) for entry in entries]
    return entries
