"""
Atomic report file writing.

The rendered report is written to a temporary file in the target directory
and moved into place, so a reader never observes a half-written report.
"""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Union

import structlog

logger = structlog.get_logger(__name__)


def atomic_write_text(target_path: Union[str, Path], content: str) -> Path:
    """
    Atomically write text to `target_path`, creating parent directories.

    Uses a same-directory temporary file followed by os.replace, falling back
    to shutil.move when the rename is refused.

    Raises:
        OSError: If neither the rename nor the fallback move succeeds.
    """
    target_path = Path(target_path)
    target_path.parent.mkdir(parents=True, exist_ok=True)
    temp_file_path = None

    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            dir=target_path.parent,
            prefix=f".{target_path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        ) as temp_file:
            temp_file_path = Path(temp_file.name)
            temp_file.write(content)
            temp_file.flush()
            os.fsync(temp_file.fileno())

        try:
            os.replace(temp_file_path, target_path)
        except OSError as rename_error:
            logger.warning("Atomic rename failed, falling back to shutil.move", error=str(rename_error))
            try:
                shutil.move(str(temp_file_path), str(target_path))
            except (OSError, shutil.Error) as move_error:
                raise OSError(
                    f"Failed to write {target_path}: rename failed ({rename_error}), move failed ({move_error})"
                ) from move_error

    except Exception:
        if temp_file_path is not None and temp_file_path.exists():
            temp_file_path.unlink(missing_ok=True)
        raise

    logger.debug("Report written", target=str(target_path), bytes=len(content))
    return target_path
