"""
Exception hierarchy for cb.

Every failure the build can hit is raised as a subclass of ``CbError`` so the
command-line interface has a single thing to catch. Errors carry the path of
the file that was being handled when they were raised, if there was one.
"""

from typing import Optional


class CbError(Exception):
    """Base class for all cb errors."""

    kind = 'CbError'

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.kind}: {self.path}: {self.message}"
        return f"{self.kind}: {self.message}"


class FileSystemError(CbError):
    """A source directory or file could not be read, or a target not written."""

    kind = 'FileSystemError'


class TemplateError(CbError):
    """The page template is missing or has no usable insertion marker."""

    kind = 'TemplateError'


class MarkupConversionError(CbError):
    """The Markdown converter rejected a source file."""

    kind = 'MarkupConversionError'


class ParseError(CbError):
    """A hybrid document does not start with a well-formed header value."""

    kind = 'ParseError'

    def __init__(self, message: str, position: int = 0, path: Optional[str] = None):
        super().__init__(f"{message} (at offset {position})", path)
        self.position = position


class ConfigError(CbError):
    """The configuration file is malformed or names unknown options."""

    kind = 'ConfigError'
