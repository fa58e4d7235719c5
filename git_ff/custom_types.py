import string

from git_ff.constants import (FULL_COMMIT_HASH_LENGTH,
                              LOCAL_BRANCH_REF_PREFIX,
                              REMOTE_BRANCH_REF_PREFIX)
from git_ff.exceptions import UnexpectedFfException


class AnyRevision(str):
    @staticmethod
    def of(value: str) -> "AnyRevision":
        if not value:
            raise UnexpectedFfException(f'AnyRevision.of should not accept {value} as a param.')
        return AnyRevision(value)

    def full_name(self) -> "AnyRevision":
        return self


class AnyBranchName(AnyRevision):
    @staticmethod
    def of(value: str) -> "AnyBranchName":
        if not value:
            raise UnexpectedFfException(f'AnyBranchName.of should not accept {value} as a param.')
        return AnyBranchName(value)

    def full_name(self) -> "AnyBranchName":
        return self


class LocalBranchShortName(AnyBranchName):
    @staticmethod
    def of(value: str) -> "LocalBranchShortName":
        if not value or value.startswith(LOCAL_BRANCH_REF_PREFIX) or value.startswith(REMOTE_BRANCH_REF_PREFIX):
            raise UnexpectedFfException(
                f'LocalBranchShortName cannot be empty nor accept `refs/heads` or `refs/remotes`. Provided value: {value}.')
        return LocalBranchShortName(value)

    def full_name(self) -> "LocalBranchFullName":
        return LocalBranchFullName(LOCAL_BRANCH_REF_PREFIX + self)


class LocalBranchFullName(AnyBranchName):
    @staticmethod
    def of(value: str) -> "LocalBranchFullName":
        if value and value.startswith(LOCAL_BRANCH_REF_PREFIX):
            return LocalBranchFullName(value)
        raise UnexpectedFfException(
            f'LocalBranchFullName needs to have `refs/heads` prefix before branch name. Provided value: {value}.')

    def full_name(self) -> "LocalBranchFullName":
        return self

    def to_short_name(self) -> LocalBranchShortName:
        # Whatever follows the prefix is the name, even if it looks like a ref itself (`refs/heads/refs/remotes/x`).
        return LocalBranchShortName(self[len(LOCAL_BRANCH_REF_PREFIX):])


class RemoteBranchShortName(AnyBranchName):
    @staticmethod
    def of(value: str) -> "RemoteBranchShortName":
        if not value or value.startswith(LOCAL_BRANCH_REF_PREFIX) or value.startswith(REMOTE_BRANCH_REF_PREFIX):
            raise UnexpectedFfException(
                f'RemoteBranchShortName cannot be empty nor accept `refs/heads` or `refs/remotes`. Provided value: {value}.')
        return RemoteBranchShortName(value)

    def full_name(self) -> "RemoteBranchFullName":
        return RemoteBranchFullName(REMOTE_BRANCH_REF_PREFIX + self)


class RemoteBranchFullName(AnyBranchName):
    @staticmethod
    def of(value: str) -> "RemoteBranchFullName":
        if value and value.startswith(REMOTE_BRANCH_REF_PREFIX):
            return RemoteBranchFullName(value)
        raise UnexpectedFfException(
            f'RemoteBranchFullName needs to have `refs/remotes` prefix before branch name. Provided value: {value}.')

    def full_name(self) -> "RemoteBranchFullName":
        return self

    def to_short_name(self) -> RemoteBranchShortName:
        return RemoteBranchShortName(self[len(REMOTE_BRANCH_REF_PREFIX):])


class FullCommitHash(AnyRevision):
    @staticmethod
    def of(value: str) -> "FullCommitHash":
        if FullCommitHash.is_valid(value):
            return FullCommitHash(value.lower())
        raise UnexpectedFfException(
            f'FullCommitHash requires {FULL_COMMIT_HASH_LENGTH} hex digits. Provided value: "{value}".')

    @staticmethod
    def is_valid(value: str) -> bool:
        return len(value) == FULL_COMMIT_HASH_LENGTH and all(c in string.hexdigits for c in value)

    def full_name(self) -> "FullCommitHash":
        return self
