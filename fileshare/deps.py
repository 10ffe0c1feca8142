from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from .errors import ContainmentError, FileShareError, FileShareIOError, IOErrorKind
from .services.file_ops import FileOps

logger = logging.getLogger(__name__)


def get_file_ops(request: Request) -> FileOps:
    return request.app.state.file_ops


def http_error(exc: FileShareError) -> HTTPException:
    if isinstance(exc, ContainmentError):
        return HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f'Error: {exc}')
    if isinstance(exc, FileShareIOError):
        logger.warning('Filesystem error (%s): %s', exc.kind.value, exc)
        if exc.kind is IOErrorKind.NOT_FOUND:
            return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f'Error: {exc}')
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f'Error: {exc}')
