from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import BinaryIO, Iterator

from ..errors import FileShareIOError, IOErrorKind

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 1024 * 1024


def open_for_read(path: Path) -> BinaryIO:
    try:
        return path.open('rb')
    except FileNotFoundError as exc:
        raise FileShareIOError(IOErrorKind.NOT_FOUND, 'Unable to open file: not found') from exc
    except IsADirectoryError as exc:
        raise FileShareIOError(IOErrorKind.IS_A_DIRECTORY, 'Unable to open file: is a directory') from exc
    except PermissionError as exc:
        raise FileShareIOError(IOErrorKind.PERMISSION_DENIED, 'Unable to open file: permission denied') from exc
    except OSError as exc:
        raise FileShareIOError(IOErrorKind.READ_FAILURE, 'Unable to open file') from exc


def iter_chunks(handle: BinaryIO, chunk_size: int = DEFAULT_CHUNK_SIZE) -> Iterator[bytes]:
    """Yield the contents of *handle*, closing it however iteration ends."""
    with handle:
        while chunk := handle.read(chunk_size):
            yield chunk


def download_name(path: Path) -> str:
    return path.name


def upload_name(suggested: str) -> str:
    name = (suggested or '').replace('\\', '/').rsplit('/', 1)[-1]
    if name in {'', '.', '..'} or '\x00' in name:
        raise FileShareIOError(IOErrorKind.CREATE_FAILURE, 'Invalid file name')
    return name


def create_and_write(
    directory: Path,
    suggested_name: str,
    incoming: BinaryIO,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> Path:
    """Write *incoming* to ``directory / basename(suggested_name)``.

    *directory* must already be containment-checked. An interrupted copy
    leaves the partial file behind.
    """
    target = directory / upload_name(suggested_name)
    try:
        out = target.open('wb')
    except OSError as exc:
        logger.warning('Unable to create %s: %s', target, exc)
        raise FileShareIOError(IOErrorKind.CREATE_FAILURE, 'Unable to create file') from exc

    written = 0
    with out:
        try:
            while chunk := incoming.read(chunk_size):
                out.write(chunk)
                written += len(chunk)
            out.flush()
            os.fsync(out.fileno())
        except OSError as exc:
            logger.warning('Upload to %s interrupted after %d bytes: %s', target, written, exc)
            raise FileShareIOError(IOErrorKind.WRITE_FAILURE, 'Unable to write file') from exc

    logger.info('Stored upload %s (%d bytes)', target, written)
    return target
