"""Exit codes for the dotnetreports CLI."""

EXIT_SUCCESS = 0
EXIT_ISSUES_FOUND = 1
EXIT_RUN_ERROR = 2
EXIT_INVALID_USAGE = 3
