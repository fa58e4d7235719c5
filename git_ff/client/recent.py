from typing import Optional

from git_ff.branch_store import BranchScope
from git_ff.branches import enumerate_branches, remote_prefix
from git_ff.client.base import BranchClient
from git_ff.recency import collect_recent
from git_ff.utils import (current_marker, dim, format_unix_timestamp,
                          pad_branch_name)


class RecentClient(BranchClient):
    def display_recent(self, *, opt_all: bool, opt_remote: Optional[str], opt_describe: bool) -> None:
        if opt_remote:
            scope = BranchScope.REMOTE
            prefix: Optional[str] = remote_prefix(opt_remote)
        else:
            scope = BranchScope.ALL if opt_all else BranchScope.LOCAL
            prefix = None

        selection = enumerate_branches(self._store, scope, prefix=prefix)
        for entry in collect_recent(selection.branches, self._store, describe=opt_describe):
            line = current_marker(entry.branch.is_current)
            line += pad_branch_name(entry.branch.name, selection.name_width)
            line += f"({format_unix_timestamp(entry.timestamp)})"
            if entry.annotation:
                line += f" {dim(entry.annotation)}"
            print(line)
