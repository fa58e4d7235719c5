from typing import List, Optional


class CommandLineOptions:

    def __init__(self) -> None:
        self.opt_all: bool = False
        self.opt_branches: List[str] = list()
        self.opt_describe: bool = False
        self.opt_fail_on_branch_error: bool = False
        self.opt_list: bool = False
        self.opt_not: bool = False
        self.opt_only: bool = False
        self.opt_remote: Optional[str] = None
        self.opt_target: Optional[str] = None

    def __repr__(self) -> str:  # pragma: no cover; debug only
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.__dict__.items())
        return f"{self.__class__.__module__}.{self.__class__.__qualname__}({attrs})"
