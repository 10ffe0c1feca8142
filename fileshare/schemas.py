from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class EntryOut(BaseModel):
    name: str
    path: str
    is_dir: bool
    size: int
    mtime: int


class ApiResponse(BaseModel):
    ok: bool
    message: str = ''
    data: Optional[Any] = None
