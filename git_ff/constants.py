# Spaces between the longest branch name and the next column.
COLUMN_GAP = 2

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

LOCAL_BRANCH_REF_PREFIX = "refs/heads/"
REMOTE_BRANCH_REF_PREFIX = "refs/remotes/"
TAG_REF_PREFIX = "refs/tags/"

FULL_COMMIT_HASH_LENGTH = 40

REFLOG_MESSAGE_PREFIX = "ff"
