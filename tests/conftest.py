"""Test configuration and fixtures for cb tests."""

import pytest
import tempfile
import shutil
import logging
from pathlib import Path


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def markup_dir(temp_dir):
    """Create an empty markup source directory."""
    markup = Path(temp_dir) / 'markup'
    markup.mkdir()
    return str(markup)


@pytest.fixture
def site_dir(temp_dir):
    """Path of the (not yet existing) site directory."""
    return str(Path(temp_dir) / 'site')


@pytest.fixture
def index_md(markup_dir):
    """A markup directory holding index.md with the text 'hello'."""
    index = Path(markup_dir) / 'index.md'
    index.write_text('hello', encoding='utf-8')
    return str(index)


@pytest.fixture
def template_file(temp_dir):
    """A template with text around the insertion marker."""
    template = Path(temp_dir) / 'template.html'
    template.write_text("FindMe <DIV ID='_body'></DIV>", encoding='utf-8')
    return str(template)


@pytest.fixture(autouse=True)
def reset_cb_logger():
    """Drop handlers added by Builder so each test configures logging afresh."""
    yield
    logger = logging.getLogger('cb')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
