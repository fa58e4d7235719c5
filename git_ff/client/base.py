from git_ff.branch_store import BranchStore


class BranchClient:

    def __init__(self, store: BranchStore) -> None:
        # Fails before anything gets enumerated if the repository can't be opened.
        store.expect_repository()
        self._store: BranchStore = store
