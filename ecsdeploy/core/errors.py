"""Exit codes for CLI commands.

CI jobs chain commands with `build && deploy`, so every fatal error maps to
the same non-zero code.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes. Values are part of the CLI contract."""

    OK = 0
    FAILURE = 1
