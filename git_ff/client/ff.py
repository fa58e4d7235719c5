import sys
from typing import AbstractSet, List

from git_ff import utils
from git_ff.branch_store import Branch, BranchScope
from git_ff.branches import enumerate_branches
from git_ff.client.base import BranchClient
from git_ff.exceptions import FfException
from git_ff.fast_forward import (BranchOutcome, Classification,
                                 FastForwardExecutor, FastForwardReport)
from git_ff.resolver import resolve_target
from git_ff.utils import current_marker, pad_branch_name, warn


def print_progress(current: int, total: int, branch: Branch) -> None:
    if utils.verbose_mode:
        print(utils.dim(f"[{current}/{total}] {branch.name}"), file=sys.stderr)


class FastForwardClient(BranchClient):

    def fast_forward(
            self, *,
            target_spec: str,
            branch_names: AbstractSet[str],
            opt_all: bool,
            opt_list: bool,
            opt_only: bool,
            opt_not: bool,
            opt_fail_on_branch_error: bool
    ) -> FastForwardReport:
        # Resolved exactly once: later moves of the target reference don't affect this run.
        target = resolve_target(target_spec, self._store)

        # Without explicit branches, listing covers all local branches, while fast-forwarding
        # only covers the checked-out one (unless told to cover all).
        head_only = not branch_names and not opt_list and not opt_all
        selection = enumerate_branches(self._store, BranchScope.LOCAL, names=branch_names, head_only=head_only)
        if head_only and not selection.branches:
            warn("Not currently on any branch, nothing to fast-forward")

        executor = FastForwardExecutor(self._store, target, head_only=head_only, on_progress=print_progress)
        report = executor.run(selection.branches, apply=not opt_list)

        if opt_list:
            self.__print_list(report.outcomes, opt_only=opt_only, opt_not=opt_not)
        else:
            self.__print_outcomes(report.outcomes)
            if opt_fail_on_branch_error and report.has_failures:
                failed_count = len([outcome for outcome in report.outcomes if outcome.is_failure])
                raise FfException(f"Fast-forward failed for {failed_count} branch(es)")
        return report

    @staticmethod
    def __print_list(outcomes: List[BranchOutcome], *, opt_only: bool, opt_not: bool) -> None:
        if opt_only or opt_not:
            for outcome in outcomes:
                # A branch already on the target counts as (trivially) fast-forwardable.
                diverged = outcome.classification == Classification.DIVERGED
                if diverged == opt_not:
                    print(outcome.branch.name)
            return

        name_width = max((len(outcome.branch.name) for outcome in outcomes), default=0)
        for outcome in outcomes:
            print(current_marker(outcome.branch.is_current) + pad_branch_name(outcome.branch.name, name_width) + outcome.message)

    @staticmethod
    def __print_outcomes(outcomes: List[BranchOutcome]) -> None:
        for outcome in outcomes:
            if outcome.is_failure:
                print(outcome.message, file=sys.stderr)
            else:
                print(outcome.message)
