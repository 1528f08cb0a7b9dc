"""Tests for path helpers."""

import pytest
import os

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cb_pkg.errors import FileSystemError
from cb_pkg.paths import split_ext, extension, path_join, target_path, path_exists, files_in


class TestSplitExt:
    """Test cases for split_ext."""

    @pytest.mark.parametrize('path,expected', [
        ('x.y', ('x', 'y')),
        ('x', ('x', '')),
        ('/x/y/z.f', ('/x/y/z', 'f')),
        ('/x/y/z', ('/x/y/z', '')),
        ('/x/y.z/p.q/r.s.t', ('/x/y.z/p.q/r.s', 't')),
    ])
    def test_split_ext(self, path, expected):
        assert split_ext(path) == expected

    def test_dot_in_directory_counts(self):
        """Dots in directory names split the path even without a file extension."""
        assert split_ext('a.d/file') == ('a', 'd/file')

    def test_trailing_dot(self):
        """A trailing dot leaves an empty extension and a stem without the dot."""
        assert split_ext('x.') == ('x', '')
        assert split_ext('a/b.c.') == ('a/b.c', '')


class TestExtension:
    """Test cases for extension."""

    @pytest.mark.parametrize('path', ['', 'x', 'z.b/x'])
    def test_no_extension(self, path):
        assert extension(path) is None

    @pytest.mark.parametrize('path', ['x.y', 'z/x.y', 'z.b/x.y'])
    def test_extension(self, path):
        assert extension(path) == 'y'

    def test_disagrees_with_split_ext(self):
        """extension only looks at the final segment, split_ext at the whole path."""
        assert extension('z.b/x') is None
        assert split_ext('z.b/x') == ('z', 'b/x')

    def test_trailing_dot(self):
        assert extension('x.') == ''
        assert extension('z/x.y.') == ''


class TestPathJoin:
    """Test cases for path_join."""

    @pytest.mark.parametrize('segments,expected', [
        (('a',), 'a'),
        (('/a',), '/a'),
        (('a', 'b'), 'a/b'),
        (('a/', 'b'), 'a/b'),
        (('a', '/b'), 'a/b'),
        (('/a', 'b'), '/a/b'),
        (('a', 'b', 'c'), 'a/b/c'),
        (('/a/', '/b/', 'c/'), '/a/b/c'),
    ])
    def test_path_join(self, segments, expected):
        assert path_join(*segments) == expected


class TestFileHelpers:
    """Test cases for the filesystem-facing helpers."""

    def test_target_path(self):
        assert target_path('index.md', '/tmp/site') == '/tmp/site/index.html'
        assert target_path('notes.v2.md', 'site/') == 'site/notes.v2.html'
        assert target_path('README', 'site') == 'site/README.html'

    def test_path_exists(self, temp_dir):
        assert path_exists('/')
        assert path_exists(temp_dir)
        assert not path_exists(os.path.join(temp_dir, 'missing'))

    def test_files_in_sorted(self, markup_dir):
        for name in ['b.md', 'a.md', 'sub']:
            path = os.path.join(markup_dir, name)
            if name == 'sub':
                os.mkdir(path)
            else:
                open(path, 'w').close()
        assert files_in(markup_dir) == ['a.md', 'b.md', 'sub']

    def test_files_in_missing_directory(self, temp_dir):
        missing = os.path.join(temp_dir, 'nope')
        with pytest.raises(FileSystemError) as excinfo:
            files_in(missing)
        assert excinfo.value.path == missing
