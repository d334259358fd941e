"""Exit codes shared by CLI commands."""

VALIDATION_EXIT_CODE = 2
UPSTREAM_EXIT_CODE = 3
SYSTEM_EXIT_CODE = 4
