"""
Filesystem helpers used by the gamelist core.

Lists ROM archives for availability checks and wraps the few other
filesystem queries the gamelist needs.
"""

import logging
from pathlib import Path
from typing import List, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ScannerError(Exception):
    """ROM directory listing errors."""
    pass


def list_directory(path: PathLike, extension: str = 'zip') -> List[str]:
    """
    List files of a directory having the given extension.

    Args:
        path: Directory to list
        extension: Extension without dot, compared case-insensitively
                   (empty string lists every file)

    Returns:
        Sorted filenames relative to the directory. Empty list if the
        directory does not exist.

    Raises:
        ScannerError: If the path is not a directory or cannot be read
    """
    directory = Path(path)

    if not directory.exists():
        logger.warning(f"ROM directory not found: {directory}")
        return []

    if not directory.is_dir():
        raise ScannerError(f"ROM path is not a directory: {directory}")

    suffix = f".{extension.lower()}" if extension else None

    try:
        entries = list(directory.iterdir())
    except PermissionError:
        raise ScannerError(f"Permission denied accessing ROM directory: {directory}")
    except OSError as e:
        raise ScannerError(f"Failed to list ROM directory: {e}")

    files = [
        entry.name for entry in entries
        if entry.is_file() and (suffix is None or entry.suffix.lower() == suffix)
    ]
    logger.debug(f"Found {len(files)} '{extension}' files in {directory}")
    return sorted(files)


def path_exists(file: PathLike) -> bool:
    return Path(file).exists()


def file_size(file: PathLike) -> int:
    """Size of a file in bytes, 0 if it does not exist."""
    try:
        return Path(file).stat().st_size
    except OSError:
        return 0


def make_dir(path: PathLike) -> None:
    """Create a directory and its parents if missing."""
    Path(path).mkdir(parents=True, exist_ok=True)
