from __future__ import annotations

from pathlib import Path

import pytest

from fileshare.errors import ConfigurationError, ContainmentError
from fileshare.services import paths
from fileshare.services.paths import PathResolver


@pytest.fixture
def resolver(tmp_path):
    base = tmp_path / 'data'
    base.mkdir()
    return PathResolver(base)


def test_validate_path_blocks_traversal(tmp_path):
    with pytest.raises(ContainmentError):
        paths.validate_path('../../etc/passwd', str(tmp_path.resolve()))


def test_containment_error_is_a_permission_error(resolver):
    with pytest.raises(PermissionError, match='outside of base directory'):
        resolver.resolve('..')


def test_sibling_directory_sharing_prefix_is_rejected(resolver, tmp_path):
    sibling = tmp_path / 'data2'
    sibling.mkdir()
    (sibling / 'secret').write_text('nope')

    with pytest.raises(ContainmentError):
        resolver.resolve('../data2/secret')


def test_escaping_path_never_touches_filesystem(resolver, monkeypatch):
    def _boom(self, *args, **kwargs):
        raise AssertionError(f'filesystem accessed for {self}')

    monkeypatch.setattr(Path, 'resolve', _boom)

    with pytest.raises(ContainmentError):
        resolver.resolve('a/../../../etc/shadow')


@pytest.mark.parametrize(
    'relative, expected',
    [
        ('', ()),
        ('.', ()),
        ('/', ()),
        ('docs', ('docs',)),
        ('a/./b/../c', ('a', 'c')),
        ('//a//b/', ('a', 'b')),
        ('/etc/passwd', ('etc', 'passwd')),
        ('a/b/../../..//data/x', ('x',)),
    ],
)
def test_resolve_returns_canonical_path_inside_base(resolver, relative, expected):
    resolved = resolver.resolve(relative)

    assert resolved == resolver.base.joinpath(*expected)
    assert '..' not in resolved.parts
    assert resolved.is_absolute()


def test_symlink_pointing_outside_base_is_rejected(resolver, tmp_path):
    outside = tmp_path / 'outside'
    outside.mkdir()
    (outside / 'secret.txt').write_text('secret')
    (resolver.base / 'escape').symlink_to(outside, target_is_directory=True)

    with pytest.raises(ContainmentError):
        resolver.resolve('escape/secret.txt')


def test_symlink_inside_base_resolves_to_target(resolver):
    real = resolver.base / 'real'
    real.mkdir()
    (resolver.base / 'alias').symlink_to(real, target_is_directory=True)

    assert resolver.resolve('alias') == real


def test_nul_byte_is_rejected(resolver):
    with pytest.raises(ContainmentError):
        resolver.resolve('file\x00.txt')


def test_relative_reports_posix_path_from_base(resolver):
    nested = resolver.base / 'a' / 'b'

    assert resolver.relative(resolver.base) == ''
    assert resolver.relative(nested) == 'a/b'


def test_resolve_base_dir_rejects_missing_directory(tmp_path):
    with pytest.raises(ConfigurationError):
        paths.resolve_base_dir(tmp_path / 'missing')


def test_resolve_base_dir_rejects_regular_file(tmp_path):
    target = tmp_path / 'file.txt'
    target.write_text('x')

    with pytest.raises(ConfigurationError, match='not a directory'):
        paths.resolve_base_dir(target)


def test_resolver_canonicalizes_base(tmp_path):
    (tmp_path / 'data').mkdir()

    resolver = PathResolver(f'{tmp_path}/data/../data/.')

    assert resolver.base == (tmp_path / 'data').resolve()
