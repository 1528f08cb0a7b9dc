"""
Path helpers for cb.

These work on plain strings with '/' separators so the build can be exercised
against any directory layout. Note that ``split_ext`` splits on every dot in
the whole path while ``extension`` only looks at the final segment; the two
disagree on paths with dotted directory names.
"""

import os
from typing import List, Optional, Tuple

from .errors import FileSystemError


def split_ext(path: str) -> Tuple[str, str]:
    """Split ``path`` into (stem, extension) on its last dot.

    Dots anywhere in the path count, including those in directory names.
    A path without any dot comes back unchanged with an empty extension.
    """
    parts = path.split('.')
    if len(parts) == 1:
        return path, ''
    return '.'.join(parts[:-1]), parts[-1]


def extension(path: str) -> Optional[str]:
    """Return the extension of the last path segment, or None if it has none."""
    name = path.split('/')[-1]
    if '.' not in name:
        return None
    return name.rsplit('.', 1)[1]


def path_join(*segments: str) -> str:
    """Join path segments with single '/' separators.

    The result is absolute only if the first segment is.
    """
    cleaned = []
    for segment in segments:
        if segment.startswith('/'):
            segment = segment[1:]
        if segment.endswith('/'):
            segment = segment[:-1]
        cleaned.append(segment)
    base = '/'.join(cleaned)
    if segments and segments[0].startswith('/'):
        return '/' + base
    return base


def target_path(filename: str, site_dir: str) -> str:
    """Output path for a source file: ``<site_dir>/<stem>.html``."""
    stem, _ = split_ext(filename)
    return path_join(site_dir, stem + '.html')


def path_exists(path: str) -> bool:
    return os.path.exists(path)


def files_in(dirname: str) -> List[str]:
    """Sorted names of every entry in ``dirname`` (not recursive)."""
    try:
        return sorted(os.listdir(dirname))
    except (IOError, OSError) as e:
        raise FileSystemError(f"Cannot list markup directory: {e.strerror or e}", dirname) from e
