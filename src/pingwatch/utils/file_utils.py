"""
File system utilities for pingwatch.
"""

import os
from pathlib import Path


def atomic_write_text(path: Path, content: str) -> None:
    """
    Replace a file's content without exposing a half-written file.

    Writes to a sibling temporary file, then renames it over the target.
    The temporary file is removed if the write fails.

    Args:
        path: Destination file
        content: Full text to write (UTF-8)

    Raises:
        OSError: If the directory is missing, not writable, or the disk is full
    """
    tmp = path.with_name(f".{path.name}.tmp")
    try:
        tmp.write_text(content, encoding="utf-8")
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
