from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO

from . import listing, transfer
from .listing import DirectoryEntry
from .paths import PathResolver


class FileOps:
    def __init__(self, root: str | os.PathLike, chunk_size: int = transfer.DEFAULT_CHUNK_SIZE):
        self.resolver = PathResolver(root)
        self.chunk_size = chunk_size

    @property
    def root(self) -> Path:
        return self.resolver.base

    def safe_path(self, rel: str) -> Path:
        return self.resolver.resolve(rel)

    def relative(self, path: Path) -> str:
        return self.resolver.relative(path)

    def list_dir(self, rel: str) -> tuple[Path, list[DirectoryEntry]]:
        target = self.safe_path(rel)
        return target, listing.list_dir(target)

    def open_file(self, rel: str) -> tuple[Path, BinaryIO]:
        target = self.safe_path(rel)
        return target, transfer.open_for_read(target)

    def save_upload(self, rel_dir: str, filename: str, stream: BinaryIO) -> Path:
        target_dir = self.safe_path(rel_dir)
        # the file itself may be a symlink leaving the base
        self.safe_path(f'{self.relative(target_dir)}/{transfer.upload_name(filename)}')
        return transfer.create_and_write(target_dir, filename, stream, self.chunk_size)
