from __future__ import annotations

from urllib.parse import quote

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile
from fastapi.responses import RedirectResponse, StreamingResponse
from starlette.background import BackgroundTask

from ..deps import get_file_ops, http_error
from ..errors import FileShareError
from ..render import dir_href, render_listing
from ..schemas import ApiResponse, EntryOut
from ..services.file_ops import FileOps
from ..services.transfer import download_name, iter_chunks

router = APIRouter(tags=['files'])
api_router = APIRouter(prefix='/api/files', tags=['files-api'])


def _content_disposition(filename: str) -> str:
    quoted = quote(filename)
    if quoted == filename:
        return f'attachment; filename="{filename}"'
    fallback = ''.join(ch if ' ' <= ch < '\x7f' else '_' for ch in filename).replace('"', "'")
    return f'attachment; filename="{fallback}"; filename*=utf-8\'\'{quoted}'


@router.get('/dir/{path:path}')
def list_dir_page(request: Request, path: str, ops: FileOps = Depends(get_file_ops)):
    try:
        target, entries = ops.list_dir(path)
    except FileShareError as exc:
        raise http_error(exc)
    return render_listing(request, ops.relative(target), entries, title=request.app.title)


@router.get('/file/{path:path}')
def download(path: str, ops: FileOps = Depends(get_file_ops)):
    try:
        target, handle = ops.open_file(path)
    except FileShareError as exc:
        raise http_error(exc)

    headers = {'Content-Disposition': _content_disposition(download_name(target))}
    return StreamingResponse(
        iter_chunks(handle, ops.chunk_size),
        media_type='application/octet-stream',
        headers=headers,
        background=BackgroundTask(handle.close),
    )


@router.post('/upload')
def upload(
    dir_: str = Form(default='', alias='dir'),
    file: UploadFile = File(...),
    ops: FileOps = Depends(get_file_ops),
):
    try:
        written = ops.save_upload(dir_, file.filename or '', file.file)
    except FileShareError as exc:
        raise http_error(exc)
    return RedirectResponse(dir_href(ops.relative(written.parent)), status_code=302)


@api_router.get('/list')
def list_files(path: str = Query(default=''), ops: FileOps = Depends(get_file_ops)):
    try:
        target, entries = ops.list_dir(path)
    except FileShareError as exc:
        raise http_error(exc)

    rel_dir = ops.relative(target)
    data = [
        EntryOut(
            name=entry.name,
            path=f'{rel_dir}/{entry.name}' if rel_dir else entry.name,
            is_dir=entry.is_dir,
            size=entry.size,
            mtime=int(entry.mtime),
        )
        for entry in entries
    ]
    return ApiResponse(ok=True, data=data)
