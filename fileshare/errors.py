from __future__ import annotations

from enum import Enum


class FileShareError(Exception):
    pass


class ConfigurationError(FileShareError):
    pass


class ContainmentError(FileShareError, PermissionError):
    def __init__(self, message: str = 'Attempted access outside of base directory'):
        super().__init__(message)


class IOErrorKind(str, Enum):
    NOT_FOUND = 'not_found'
    NOT_A_DIRECTORY = 'not_a_directory'
    IS_A_DIRECTORY = 'is_a_directory'
    PERMISSION_DENIED = 'permission_denied'
    READ_FAILURE = 'read_failure'
    CREATE_FAILURE = 'create_failure'
    WRITE_FAILURE = 'write_failure'


class FileShareIOError(FileShareError):
    """Filesystem fault surfaced to the client; never retried."""

    def __init__(self, kind: IOErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message
