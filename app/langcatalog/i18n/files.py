"""File-system helpers for loading languages from disk."""

import os
from pathlib import Path
from typing import Callable, Iterator, Optional, Union

from langcatalog.i18n.exceptions import InvalidFileNameError

ErrorHandler = Callable[[Path, OSError], None]


def language_name_from_path(path: Union[str, Path]) -> str:
    """Derive a language name from a file's base name without extension.

    Example:
        >>> language_name_from_path("locales/pt-br.json")
        'pt-br'

    Raises:
        InvalidFileNameError: If the stem is empty or not representable as text.
    """
    stem = Path(path).stem
    if not stem:
        raise InvalidFileNameError(path)
    try:
        # Undecodable bytes survive in str paths as lone surrogates
        stem.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidFileNameError(path) from e
    return stem


def search_files(
    root: Union[str, Path],
    on_error: Optional[ErrorHandler] = None,
) -> Iterator[Path]:
    """Yield every regular file under ``root``, recursively.

    Directories are walked with an explicit stack of pending directories,
    entries in name order. Failing to list ``root`` always raises; failing
    to list a sub-directory raises unless ``on_error`` is given, in which
    case it is called with the directory and the error and the walk goes on.

    Args:
        root: Directory to walk.
        on_error: Optional handler for unreadable sub-directories.

    Raises:
        OSError: If a directory cannot be listed.
    """
    root = Path(root)
    pending = [root]

    while pending:
        directory = pending.pop()
        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            if on_error is None or directory == root:
                raise
            on_error(directory, e)
            continue

        for entry in entries:
            if entry.is_dir():
                pending.append(Path(entry.path))
            elif entry.is_file():
                yield Path(entry.path)


def list_files(directory: Union[str, Path]) -> Iterator[Path]:
    """Yield the regular files directly inside ``directory``, in name order.

    Raises:
        OSError: If the directory cannot be listed.
    """
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_file():
            yield Path(entry.path)
