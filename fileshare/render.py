from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

from fastapi import Request
from fastapi.templating import Jinja2Templates

from .services.listing import DirectoryEntry

TEMPLATES_DIR = Path(__file__).resolve().parent / 'templates'

_UNITS = ('KiB', 'MiB', 'GiB', 'TiB')


def human_size(size: int) -> str:
    if size < 1024:
        return f'{size} B'
    value = float(size)
    for unit in _UNITS:
        value /= 1024
        # 1023.95 and up would print as "1024.0"
        if value < 1023.95:
            return f'{value:.1f} {unit}'
    return f'{value / 1024:.1f} PiB'


def _segments(rel_dir: str) -> list[str]:
    return [part for part in rel_dir.split('/') if part]


def dir_href(rel_dir: str) -> str:
    return '/dir/' + quote('/'.join(_segments(rel_dir)))


def entry_href(rel_dir: str, entry: DirectoryEntry) -> str:
    target = quote('/'.join(_segments(rel_dir) + [entry.name]))
    if entry.is_dir:
        return f'/dir/{target}'
    return f'/file/{target}'


def breadcrumbs(rel_dir: str) -> list[tuple[str, str]]:
    crumbs = [('Home', '/dir/')]
    walked: list[str] = []
    for part in _segments(rel_dir):
        walked.append(part)
        crumbs.append((part, dir_href('/'.join(walked))))
    return crumbs


def parent_href(rel_dir: str) -> str | None:
    parts = _segments(rel_dir)
    if not parts:
        return None
    return dir_href('/'.join(parts[:-1]))


templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.filters['human_size'] = human_size


def render_listing(request: Request, rel_dir: str, entries: list[DirectoryEntry], title: str = 'File Share'):
    rows = [
        {
            'name': entry.name,
            'href': entry_href(rel_dir, entry),
            'is_dir': entry.is_dir,
            'size': entry.size,
        }
        for entry in entries
    ]
    return templates.TemplateResponse(
        request,
        'listing.html',
        {
            'title': title,
            'dir': rel_dir,
            'crumbs': breadcrumbs(rel_dir),
            'parent': parent_href(rel_dir),
            'items': rows,
        },
    )
