"""
File I/O for save files.

Loading, writing and backup naming live here so the engine itself stays free
of filesystem concerns. None of these functions alter byte content.

Naming:
  - backup copy:  "(BACKUP) <filename>" in the same directory
  - edited copy:  "(EDITED) <filename>" in the same directory
"""

import logging
import shutil
from pathlib import Path
from typing import Union

from ..core.errors import SaveIOError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

BACKUP_PREFIX = "(BACKUP) "
EDITED_PREFIX = "(EDITED) "


def load_file(path: PathLike) -> bytes:
    """
    Read a whole save file.

    Raises:
        SaveIOError: if the file cannot be opened or read.
    """
    path = Path(path)
    try:
        with open(path, 'rb') as f:
            data = f.read()
    except FileNotFoundError as e:
        raise SaveIOError("LoadFile", str(path), "could not open input file", e) from e
    except OSError as e:
        raise SaveIOError("LoadFile", str(path), f"read error ({e.strerror or e})", e) from e
    logger.debug(f"Loaded {len(data)} bytes from {path}")
    return data


def write_file(path: PathLike, data: bytes) -> None:
    """
    Write bytes to `path`, replacing any existing file.

    Raises:
        SaveIOError: if the file cannot be opened, written or flushed.
    """
    path = Path(path)
    try:
        with open(path, 'wb') as f:
            f.write(data)
            f.flush()
    except OSError as e:
        raise SaveIOError("WriteFile", str(path), f"write error ({e.strerror or e})", e) from e
    logger.info(f"Wrote {len(data)} bytes to {path}")


def _prefixed_path(path: PathLike, prefix: str) -> Path:
    path = Path(path)
    return path.with_name(prefix + path.name)


def make_backup_path(path: PathLike) -> Path:
    return _prefixed_path(path, BACKUP_PREFIX)


def make_edited_path(path: PathLike) -> Path:
    return _prefixed_path(path, EDITED_PREFIX)


def backup_file(path: PathLike) -> Path:
    """
    Copy `path` to its "(BACKUP)" name unless that backup already exists.

    An existing backup is never overwritten, so the oldest copy survives
    repeated runs.

    Returns:
        The backup path, whether it was created now or earlier.

    Raises:
        SaveIOError: if the source is missing or the copy fails.
    """
    path = Path(path)
    backup = make_backup_path(path)

    if backup.exists():
        logger.debug(f"Backup already present: {backup}")
        return backup

    if not path.is_file():
        raise SaveIOError("BackupFile", str(path), "source file not found")

    try:
        shutil.copy2(path, backup)
    except OSError as e:
        raise SaveIOError("BackupFile", str(backup), f"copy failed ({e.strerror or e})", e) from e
    logger.info(f"Created backup: {backup}")
    return backup
