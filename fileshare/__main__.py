from __future__ import annotations

import argparse
import logging
import sys

import uvicorn
from pydantic import ValidationError

from .config import Settings, settings
from .errors import ConfigurationError
from .main import create_app
from .services.paths import resolve_base_dir

logger = logging.getLogger('fileshare')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='fileshare', description='Share a directory over HTTP')
    parser.add_argument('--host', default=None, help=f'Address to bind (default {settings.app_host})')
    parser.add_argument('--port', type=int, default=None, help=f'Port to listen on (default {settings.app_port})')
    parser.add_argument('--basedir', default=None, help=f'Base directory to work from (default {settings.base_dir!r})')
    parser.add_argument('--log-level', default=None, choices=['critical', 'error', 'warning', 'info', 'debug'])
    return parser


def load_settings(argv: list[str] | None = None) -> Settings:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides = {
        'app_host': args.host,
        'app_port': args.port,
        'base_dir': args.basedir,
        'log_level': args.log_level,
    }
    try:
        return Settings(**{key: value for key, value in overrides.items() if value is not None})
    except ValidationError as exc:
        parser.error(str(exc))


def main(argv: list[str] | None = None) -> int:
    config = load_settings(argv)
    level = config.log_level.lower()
    logging.basicConfig(level=level.upper(), format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        base = resolve_base_dir(config.base_dir)
    except ConfigurationError as exc:
        logger.error('%s', exc)
        return 2
    config = config.model_copy(update={'base_dir': str(base)})

    logger.info('Sharing %s on %s:%d', base, config.app_host, config.app_port)
    uvicorn.run(create_app(config), host=config.app_host, port=config.app_port, log_level=level)
    return 0


if __name__ == '__main__':
    sys.exit(main())
