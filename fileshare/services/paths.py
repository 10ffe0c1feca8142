from __future__ import annotations

import logging
import os
from pathlib import Path, PurePosixPath

from ..errors import ConfigurationError, ContainmentError

logger = logging.getLogger(__name__)


def _is_within(base: Path, candidate: Path) -> bool:
    return candidate == base or base in candidate.parents


def validate_path(requested_path: str, base: str | os.PathLike) -> Path:
    """Resolve *requested_path* under *base* and prove it stays there.

    *base* must already be canonical (see :func:`resolve_base_dir`). The
    lexical check runs first so an escaping path never reaches the
    filesystem; symlinks are then followed and the result checked again.
    """
    if '\x00' in requested_path:
        raise ContainmentError('Invalid path')

    base_path = Path(base)
    joined = Path(os.path.normpath(os.path.join(base_path, requested_path.lstrip('/'))))
    if not _is_within(base_path, joined):
        logger.info('Rejected path outside base directory: %r', requested_path)
        raise ContainmentError()

    try:
        candidate = joined.resolve(strict=False)
    except (OSError, RuntimeError) as exc:
        raise ContainmentError('Invalid path') from exc
    if not _is_within(base_path, candidate):
        logger.info('Rejected symlink leaving base directory: %r', requested_path)
        raise ContainmentError()
    return candidate


def resolve_base_dir(raw: str | os.PathLike) -> Path:
    try:
        base = Path(raw).expanduser().resolve(strict=True)
    except (OSError, RuntimeError) as exc:
        raise ConfigurationError(f'Base directory {str(raw)!r} is not accessible: {exc}') from exc
    if not base.is_dir():
        raise ConfigurationError(f'Base directory {str(base)!r} is not a directory')
    return base


class PathResolver:
    def __init__(self, base: str | os.PathLike):
        self.base = resolve_base_dir(base)

    def resolve(self, relative: str) -> Path:
        return validate_path(relative, self.base)

    def relative(self, path: Path) -> str:
        rel = path.relative_to(self.base)
        if rel == Path('.'):
            return ''
        return PurePosixPath(*rel.parts).as_posix()
