"""Exit codes for the pydeduce CLI."""

EXIT_SUCCESS = 0
EXIT_ERROR = 1
