"""Filesystem helpers."""

from __future__ import annotations

import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

__all__ = ["transient_text_file"]


@contextmanager
def transient_text_file(
    content: str,
    *,
    prefix: str,
    suffix: str,
    encoding: str = "utf-8",
) -> Iterator[Path]:
    """Write `content` to a private temp file and delete it on exit.

    The file is removed whether the body returns or raises, so no stale
    document is left behind for the next run.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=prefix, suffix=suffix)
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding=encoding, newline="") as handle:
            handle.write(content)
            handle.flush()
        yield tmp_path
    finally:
        tmp_path.unlink(missing_ok=True)
