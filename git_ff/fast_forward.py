from enum import Enum, auto
from typing import Callable, List, NamedTuple, Optional, Tuple

from git_ff.branch_store import Branch, BranchStore
from git_ff.custom_types import FullCommitHash
from git_ff.resolver import ResolvedTarget
from git_ff.utils import debug


class Classification(Enum):
    FAST_FORWARDABLE = auto()
    ALREADY_UP_TO_DATE = auto()
    DIVERGED = auto()


class OutcomeStatus(Enum):
    LISTED = auto()
    ADVANCED = auto()
    UP_TO_DATE = auto()
    NOT_POSSIBLE = auto()
    CHECKOUT_CONFLICT = auto()
    REFERENCE_UPDATE_FAILED = auto()
    CHECKED_OUT_ELSEWHERE = auto()


FAILURE_STATUSES = frozenset({
    OutcomeStatus.NOT_POSSIBLE,
    OutcomeStatus.CHECKOUT_CONFLICT,
    OutcomeStatus.REFERENCE_UPDATE_FAILED,
    OutcomeStatus.CHECKED_OUT_ELSEWHERE,
})


class BranchOutcome(NamedTuple):
    branch: Branch
    classification: Classification
    status: OutcomeStatus
    message: str
    conflicting_paths: Tuple[str, ...] = ()

    @property
    def is_failure(self) -> bool:
        return self.status in FAILURE_STATUSES


class FastForwardReport(NamedTuple):
    target: ResolvedTarget
    outcomes: List[BranchOutcome]

    @property
    def has_failures(self) -> bool:
        return any(outcome.is_failure for outcome in self.outcomes)


ProgressCallback = Callable[[int, int, Branch], None]


def classify(tip: FullCommitHash, target_hash: FullCommitHash, store: BranchStore) -> Classification:
    # Equality goes first: the merge base of a commit with itself is that very commit,
    # which would otherwise pass for a fast-forward.
    if tip == target_hash:
        return Classification.ALREADY_UP_TO_DATE
    if store.get_merge_base(tip, target_hash) == tip:
        return Classification.FAST_FORWARDABLE
    return Classification.DIVERGED


def list_message(classification: Classification, target: ResolvedTarget) -> str:
    if classification == Classification.ALREADY_UP_TO_DATE:
        return f"already on {target}"
    elif classification == Classification.FAST_FORWARDABLE:
        return f"fast-forward to {target}"
    else:
        return f"non-fast-forward to {target}"


class FastForwardExecutor:
    def __init__(self, store: BranchStore, target: ResolvedTarget, *, head_only: bool = False,
                 on_progress: Optional[ProgressCallback] = None) -> None:
        self.__store: BranchStore = store
        self.__target: ResolvedTarget = target
        self.__head_only: bool = head_only
        self.__on_progress: Optional[ProgressCallback] = on_progress

    def __touches_working_tree(self, branch: Branch) -> bool:
        return branch.is_current or self.__head_only

    def __advance(self, branch: Branch) -> BranchOutcome:
        target = self.__target
        touches_working_tree = self.__touches_working_tree(branch)
        if touches_working_tree:
            checkout_result = self.__store.update_working_tree(from_hash=branch.tip, to_hash=target.commit_hash)
            if checkout_result.conflicting_paths:
                return BranchOutcome(
                    branch=branch, classification=Classification.FAST_FORWARDABLE, status=OutcomeStatus.CHECKOUT_CONFLICT,
                    message=f"Cannot fast-forward {branch.name}, checkout conflict in: {', '.join(checkout_result.conflicting_paths)}",
                    conflicting_paths=checkout_result.conflicting_paths)
            if not checkout_result.is_ok:
                return BranchOutcome(
                    branch=branch, classification=Classification.FAST_FORWARDABLE, status=OutcomeStatus.CHECKOUT_CONFLICT,
                    message=f"Cannot fast-forward {branch.name}, checkout failed: {checkout_result.error}")

        ref_update_result = self.__store.set_branch_tip(branch, new_tip=target.commit_hash, expected_old_tip=branch.tip)
        if not ref_update_result.success:
            message = f"Cannot update {branch.name} to {target}: {ref_update_result.reason}"
            if touches_working_tree:
                message += (f"\nThe working tree is already at {target}; to bring it back to {branch.name}, "
                            f"run: git read-tree -m -u {target.commit_hash} {branch.tip}")
            return BranchOutcome(
                branch=branch, classification=Classification.FAST_FORWARDABLE, status=OutcomeStatus.REFERENCE_UPDATE_FAILED,
                message=message)
        return BranchOutcome(
            branch=branch, classification=Classification.FAST_FORWARDABLE, status=OutcomeStatus.ADVANCED,
            message=f"Fast-forwarded {branch.name} to {target}")

    def __process(self, branch: Branch, apply: bool) -> BranchOutcome:
        classification = classify(branch.tip, self.__target.commit_hash, self.__store)
        debug(f"{branch.name} ({branch.tip}) is {classification.name.lower()} relative to {self.__target.commit_hash}")
        if not apply:
            return BranchOutcome(branch=branch, classification=classification, status=OutcomeStatus.LISTED,
                                 message=list_message(classification, self.__target))
        if classification == Classification.DIVERGED:
            return BranchOutcome(branch=branch, classification=classification, status=OutcomeStatus.NOT_POSSIBLE,
                                 message=f"Not possible to fast-forward {branch.name}")
        elif classification == Classification.ALREADY_UP_TO_DATE:
            return BranchOutcome(branch=branch, classification=classification, status=OutcomeStatus.UP_TO_DATE,
                                 message=f"Branch {branch.name} already on {self.__target}")
        elif branch.worktree_path is not None:
            # Only that worktree can update its own index and files.
            return BranchOutcome(branch=branch, classification=classification, status=OutcomeStatus.CHECKED_OUT_ELSEWHERE,
                                 message=f"Cannot fast-forward {branch.name}, checked out in {branch.worktree_path}")
        else:
            return self.__advance(branch)

    def run(self, branches: List[Branch], *, apply: bool) -> FastForwardReport:
        outcomes: List[BranchOutcome] = []
        for index, branch in enumerate(branches, start=1):
            if self.__on_progress:
                self.__on_progress(index, len(branches), branch)
            outcomes.append(self.__process(branch, apply))
        return FastForwardReport(target=self.__target, outcomes=outcomes)
