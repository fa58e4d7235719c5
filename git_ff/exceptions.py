from enum import IntEnum

from git_ff import utils


class UnderlyingGitException(Exception):
    def __init__(self, msg: str, apply_fmt: bool = True) -> None:
        self.msg: str = utils.fmt(msg) if apply_fmt else msg

    def __str__(self) -> str:
        return str(self.msg)


class FfException(Exception):
    def __init__(self, msg: str, apply_fmt: bool = True) -> None:
        self.msg: str = utils.fmt(msg) if apply_fmt else msg

    def __str__(self) -> str:
        return str(self.msg)


class UnresolvedTargetException(FfException):
    pass


class NonCommitTagException(UnresolvedTargetException):
    pass


class RepositoryAccessException(FfException):
    pass


class UnexpectedFfException(FfException):
    def __init__(self, msg: str, apply_fmt: bool = True) -> None:
        super().__init__(f"{msg}\n\nThis is most likely a bug in git-ff, consider reporting it", apply_fmt=apply_fmt)


class ExitCode(IntEnum):
    SUCCESS = 0
    FF_EXCEPTION = 1
    ARGUMENT_ERROR = 2
    KEYBOARD_INTERRUPT = 3
    END_OF_FILE_SIGNAL = 4
