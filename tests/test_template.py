"""Tests for templates and marker injection."""

import pytest
import os

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from cb_pkg.errors import TemplateError
from cb_pkg.template import DEFAULT_TEMPLATE, find_marker, inject, load_template


class TestTemplate:
    """Test cases for template loading and injection."""

    def test_default_template(self):
        assert load_template() == DEFAULT_TEMPLATE
        assert load_template(None) == "<DIV ID='_body'></DIV>"

    def test_load_template_file(self, template_file):
        assert load_template(template_file) == "FindMe <DIV ID='_body'></DIV>"

    def test_load_missing_template(self, temp_dir):
        missing = os.path.join(temp_dir, 'missing.html')
        with pytest.raises(TemplateError) as excinfo:
            load_template(missing)
        assert excinfo.value.path == missing

    def test_inject_default(self):
        assert inject(DEFAULT_TEMPLATE, '<p>hi</p>') == "<DIV ID='_body'><p>hi</p></DIV>"

    def test_inject_preserves_surroundings_and_case(self):
        template = "<html>\n<body><Div Id='_BODY'></dIv>\n</body></html>"
        result = inject(template, '<p>x</p>')
        assert result == "<html>\n<body><Div Id='_BODY'><p>x</p></dIv>\n</body></html>"

    def test_find_marker_offsets(self):
        start, end = find_marker("ab<div id='_body'></div>cd")
        assert start == end == 2 + len("<div id='_body'>")

    def test_missing_marker(self):
        with pytest.raises(TemplateError, match='no'):
            inject('<html></html>', '<p>x</p>')

    def test_marker_must_be_empty(self):
        with pytest.raises(TemplateError):
            find_marker("<div id='_body'>old</div>")

    def test_duplicate_marker(self):
        template = "<div id='_body'></div><DIV ID='_body'></DIV>"
        with pytest.raises(TemplateError, match='more than one'):
            find_marker(template)

    def test_non_ascii_text_before_marker(self):
        template = "İstanbul <div id='_body'></div>"
        assert inject(template, 'x') == "İstanbul <div id='_body'>x</div>"
