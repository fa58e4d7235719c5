FF_FAIL_ON_BRANCH_ERROR = 'ff.failOnBranchError'
RECENT_ALL = 'recent.all'
RECENT_DESCRIBE = 'recent.describe'
