from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, settings
from .errors import ConfigurationError
from .render import TEMPLATES_DIR
from .routers import files
from .services.file_ops import FileOps

logger = logging.getLogger(__name__)

STATIC_DIR = TEMPLATES_DIR.parent / 'static'

_SECURITY_HEADERS = {
    'Content-Security-Policy': "default-src 'self'; style-src 'self'",
    'X-Frame-Options': 'DENY',
    'X-Content-Type-Options': 'nosniff',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}

_ERROR_PAGE = (
    '<html><body><h1>Unexpected error</h1>'
    '<p>Something went wrong while handling this request.</p></body></html>'
)


def _apply_security_headers(response):
    for key, value in _SECURITY_HEADERS.items():
        response.headers[key] = value
    return response


async def security_middleware(request: Request, call_next):
    response = await call_next(request)
    return _apply_security_headers(response)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception('Unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    if request.url.path.startswith('/api/'):
        response = JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)
    else:
        response = HTMLResponse(_ERROR_PAGE, status_code=500)
    return _apply_security_headers(response)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: Settings = app.state.settings
    try:
        ops = FileOps(config.base_dir, chunk_size=config.chunk_size)
    except ConfigurationError as exc:
        raise RuntimeError(f'Refusing to start: {exc}') from exc
    app.state.file_ops = ops
    logger.info('Serving %s', ops.root)
    yield


def create_app(config: Settings | None = None) -> FastAPI:
    config = config or settings
    app = FastAPI(title=config.app_name, lifespan=lifespan)
    app.state.settings = config

    app.middleware('http')(security_middleware)
    app.add_exception_handler(Exception, unhandled_exception_handler)
    app.mount('/static', StaticFiles(directory=str(STATIC_DIR)), name='static')

    @app.get('/')
    def root():
        return RedirectResponse('/dir/', status_code=302)

    @app.get('/healthz')
    def healthz():
        return {'ok': True}

    app.include_router(files.router)
    app.include_router(files.api_router)
    return app


app = create_app()
