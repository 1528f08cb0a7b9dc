"""
Page templates and the insertion marker.

A template is any text containing the placeholder ``<div id='_body'></div>``
exactly once; the tag names and attribute are matched case-insensitively.
Generated HTML goes between the opening and the closing tag.
"""

import logging
import string
from typing import Optional, Tuple

from .errors import TemplateError

DEFAULT_TEMPLATE = "<DIV ID='_body'></DIV>"

MARKER_OPEN = "<div id='_body'>"
MARKER_CLOSE = "</div>"

# Only ASCII letters are folded so offsets in the folded text match the template.
ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)

logger = logging.getLogger('cb')


def load_template(path: Optional[str] = None) -> str:
    """Read the template at ``path``, or return the default template."""
    if not path:
        return DEFAULT_TEMPLATE
    try:
        with open(path, 'r', encoding='utf-8') as f:
            template = f.read()
    except (IOError, OSError) as e:
        raise TemplateError(f"Cannot read template: {e.strerror or e}", path) from e
    logger.debug(f"Loaded template from {path}")
    return template


def find_marker(template: str) -> Tuple[int, int]:
    """Locate the insertion marker.

    Returns the offset right after the opening tag and the offset of the
    closing tag. Raises TemplateError unless there is exactly one marker.
    """
    marker = MARKER_OPEN + MARKER_CLOSE
    lowered = template.translate(ASCII_LOWER)
    first = lowered.find(marker)
    if first == -1:
        raise TemplateError(f"Template has no {DEFAULT_TEMPLATE} insertion marker")
    if lowered.find(marker, first + len(marker)) != -1:
        raise TemplateError("Template has more than one insertion marker")
    start = first + len(MARKER_OPEN)
    return start, start


def inject(template: str, html: str) -> str:
    """Place ``html`` inside the template's insertion marker."""
    start, end = find_marker(template)
    return template[:start] + html + template[end:]
