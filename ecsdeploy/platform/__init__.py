"""Platform abstraction layer."""

from .files import transient_text_file
from .process import (
    ProcessError,
    run,
    run_silent,
)

__all__ = [
    # files
    "transient_text_file",
    # process
    "ProcessError",
    "run",
    "run_silent",
]
