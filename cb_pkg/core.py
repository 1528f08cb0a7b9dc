import os
import logging
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Mapping, Optional

import mistune

from .errors import CbError, ConfigError, FileSystemError, MarkupConversionError, TemplateError
from .paths import files_in, path_join, target_path
from .template import find_marker, inject, load_template

CONFIG_KEYS = {
    'markup_dir': ('markup_dir', 'markupDir', 'markupdir', 'markup'),
    'site_dir': ('site_dir', 'siteDir', 'sitedir', 'site'),
    'template': ('template',),
}


class MarkdownConverter:
    """Markdown to HTML conversion backed by mistune."""

    def __init__(self):
        self.markdown_parser = self.create_markdown_parser()

    def create_markdown_parser(self):
        """Create a Mistune markdown parser with a custom renderer."""
        class CustomRenderer(mistune.HTMLRenderer):
            def __init__(self):
                super().__init__(escape=False)
            def block_code(self, code, info=None):
                escaped_code = mistune.escape(code)
                return '<pre style="white-space: pre-wrap;"><code>{}</code></pre>'.format(escaped_code)
        return mistune.create_markdown(
            renderer=CustomRenderer(),
            plugins=['table', 'task_lists', 'strikethrough']
        )

    def __call__(self, text: str) -> str:
        try:
            return self.markdown_parser(text)
        except Exception as e:
            raise MarkupConversionError(f"Markdown conversion failed: {e}") from e


@dataclass(frozen=True)
class BuildConfig:
    markup_dir: str
    site_dir: str
    template: Optional[str] = None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'BuildConfig':
        """Build a config from a mapping such as ``{'markupdir': ..., 'sitedir': ...}``."""
        known = {alias: name for name, aliases in CONFIG_KEYS.items() for alias in aliases}
        unknown = sorted(key for key in values if key not in known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")

        resolved = {}
        for key, value in values.items():
            resolved[known[key]] = value
        for required in ('markup_dir', 'site_dir'):
            if not resolved.get(required):
                raise ConfigError(f"Missing required configuration key: {required}")
        return cls(**resolved)


@dataclass
class BuildResult:
    written: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)


class InfoFilter(logging.Filter):
    """Filter to allow only selected INFO messages to be shown in the console."""
    def filter(self, record):
        if record.levelno >= logging.WARNING:
            return True
        allowed_messages = [
            "Building site from",
            "Site build completed in",
            "Total pages generated:",
            "Skipped entries:",
        ]
        return any(msg in record.getMessage() for msg in allowed_messages)


class Builder:
    """Converts every file in a markup directory into a page of the site."""

    def __init__(self, config: BuildConfig, converter: Optional[Callable[[str], str]] = None,
                 log_dir: Optional[str] = None, verbose: bool = False):
        self.config = config
        self.converter = converter or MarkdownConverter()
        self.log_dir = log_dir
        self.verbose = verbose
        self.pages_generated = 0
        self.setup_logging()

    def setup_logging(self):
        """Set up logging configuration."""
        self.logger = logging.getLogger('cb')
        console_level = logging.DEBUG if self.verbose else logging.INFO

        # Console handler with filter
        console_handler = next(
            (h for h in self.logger.handlers if type(h) is logging.StreamHandler), None
        )
        if console_handler is None:
            console_handler = logging.StreamHandler()
            console_handler.setFormatter(logging.Formatter('%(message)s'))
            self.logger.addHandler(console_handler)
        console_handler.setLevel(console_level)
        for log_filter in list(console_handler.filters):
            console_handler.removeFilter(log_filter)
        if not self.verbose:
            console_handler.addFilter(InfoFilter())

        if self.log_dir:
            self.add_file_handler(self.log_dir)

        file_logging = any(isinstance(h, logging.FileHandler) for h in self.logger.handlers)
        self.logger.setLevel(logging.DEBUG if file_logging else console_level)

    def add_file_handler(self, log_dir: str):
        """File handler for all logs, one per log directory."""
        log_dir = os.path.abspath(log_dir)
        for handler in self.logger.handlers:
            if isinstance(handler, logging.FileHandler) and os.path.dirname(handler.baseFilename) == log_dir:
                return
        os.makedirs(log_dir, exist_ok=True)
        log_filename = datetime.now().strftime('cb_%Y-%m-%d_%H-%M-%S.log')
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
        self.logger.addHandler(file_handler)

    def load_template(self) -> str:
        """Load the configured template and check it has a usable marker."""
        template = load_template(self.config.template)
        try:
            find_marker(template)
        except TemplateError as e:
            e.path = self.config.template
            raise
        return template

    def create_output_dir(self):
        try:
            os.makedirs(self.config.site_dir, exist_ok=True)
        except (IOError, OSError) as e:
            raise FileSystemError(f"Cannot create site directory: {e.strerror or e}",
                                  self.config.site_dir) from e

    def build_file(self, source: str, name: str, template: str) -> str:
        """Convert one source file and write it into the site directory."""
        target = target_path(name, self.config.site_dir)
        try:
            with open(source, 'r', encoding='utf-8') as f:
                markup = f.read()
        except (IOError, OSError, UnicodeDecodeError) as e:
            raise FileSystemError(f"Cannot read source file: {e}") from e

        page = inject(template, self.converter(markup))

        try:
            with open(target, 'w', encoding='utf-8') as f:
                f.write(page)
        except (IOError, OSError) as e:
            raise FileSystemError(f"Cannot write {target}: {e.strerror or e}") from e

        self.logger.debug(f"Built {source} -> {target}")
        return target

    def run(self) -> BuildResult:
        """Main build process."""
        start_time = time.time()
        markup_dir = self.config.markup_dir
        self.logger.info(f"Building site from {markup_dir} into {self.config.site_dir}")

        entries = files_in(markup_dir)
        template = self.load_template()
        self.create_output_dir()

        result = BuildResult()
        for name in entries:
            source = path_join(markup_dir, name)
            if os.path.isdir(source):
                self.logger.warning(f"Skipping directory {source}")
                result.skipped.append(source)
                continue
            try:
                result.written.append(self.build_file(source, name, template))
            except CbError as e:
                if e.path is None:
                    e.path = source
                self.logger.error(f"Build aborted while processing {source}: {e}")
                raise
            self.pages_generated += 1

        total_time = time.time() - start_time
        self.logger.info(f"Site build completed in {total_time:.6f} seconds.")
        self.logger.info(f"Total pages generated: {self.pages_generated}")
        if result.skipped:
            self.logger.info(f"Skipped entries: {len(result.skipped)}")
        return result


def run_build(config) -> None:
    """Build the site described by ``config`` (a BuildConfig or a mapping)."""
    if not isinstance(config, BuildConfig):
        config = BuildConfig.from_mapping(config)
    Builder(config).run()
