from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Iterable

from ..errors import FileShareIOError, IOErrorKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_dir: bool
    size: int
    mtime: float = 0.0

    def as_dict(self) -> dict:
        return asdict(self)


def sort_key(entry: DirectoryEntry) -> tuple[bool, str, str]:
    return (not entry.is_dir, entry.name.lower(), entry.name)


def sort_entries(entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    return sorted(entries, key=sort_key)


def _entry(item: os.DirEntry) -> DirectoryEntry | None:
    try:
        stat = item.stat()
    except OSError:
        # dangling or looping symlink, or removed since scandir saw it
        try:
            stat = item.stat(follow_symlinks=False)
        except FileNotFoundError:
            return None
    return DirectoryEntry(
        name=item.name,
        is_dir=item.is_dir(),
        size=stat.st_size,
        mtime=stat.st_mtime,
    )


def list_dir(path: Path) -> list[DirectoryEntry]:
    try:
        handle = os.scandir(path)
    except FileNotFoundError as exc:
        raise FileShareIOError(IOErrorKind.NOT_FOUND, 'Unable to open dir: not found') from exc
    except NotADirectoryError as exc:
        raise FileShareIOError(IOErrorKind.NOT_A_DIRECTORY, 'Unable to open dir: not a directory') from exc
    except PermissionError as exc:
        raise FileShareIOError(IOErrorKind.PERMISSION_DENIED, 'Unable to open dir: permission denied') from exc
    except OSError as exc:
        raise FileShareIOError(IOErrorKind.READ_FAILURE, 'Unable to open dir') from exc

    with handle:
        try:
            entries = [entry for entry in map(_entry, handle) if entry is not None]
        except OSError as exc:
            logger.warning('Failed to read directory %s: %s', path, exc)
            raise FileShareIOError(IOErrorKind.READ_FAILURE, 'Unable to read dir') from exc
    return sort_entries(entries)
