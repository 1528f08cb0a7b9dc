"""
cb - a minimal static site builder.

cb reads a directory of Markdown files, converts each one to HTML, places the
result inside a page template and writes ``<name>.html`` into the site
directory. Hybrid documents with an EDN header above raw markup can be split
with ``preprocess_hybrid``.
"""

__version__ = "1.0.0"

from .core import BuildConfig, Builder, MarkdownConverter, run_build
from .errors import (
    CbError,
    ConfigError,
    FileSystemError,
    MarkupConversionError,
    ParseError,
    TemplateError,
)
from .hybrid import preprocess_hybrid
from .paths import extension, path_join, split_ext

__all__ = [
    'BuildConfig', 'Builder', 'MarkdownConverter', 'run_build',
    'CbError', 'ConfigError', 'FileSystemError', 'MarkupConversionError',
    'ParseError', 'TemplateError',
    'preprocess_hybrid', 'extension', 'path_join', 'split_ext',
]
