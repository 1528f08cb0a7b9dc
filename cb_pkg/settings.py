#!/usr/bin/env python3
"""
Settings loader for cb.
Supports configuration from cb.yml, cb.yaml, or cb.json files.
"""

import os
import json
import yaml
from typing import Dict, Any, Optional

from .core import BuildConfig
from .errors import ConfigError


class CbSettings:
    """Load and manage cb configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'markup': 'markup',
        'site': 'site',
        'template': None,
        'log_dir': None,
    }

    # Settings written by create_sample_config, matching the starter files of `cb --init`
    SAMPLE_SETTINGS = dict(DEFAULT_SETTINGS, template='template.html')

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['cb.yml', 'cb.yaml', 'cb.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ConfigError("Configuration must be a mapping", config_file)
            unknown = sorted(set(loaded_settings) - set(self.DEFAULT_SETTINGS))
            if unknown:
                raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}", config_file)
            self.settings.update(loaded_settings)

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Dictionary of configuration settings
        """
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ConfigError(f"Unsupported config file format: {file_ext}", config_path)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML: {e}", config_path) from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON: {e}", config_path) from e
        except (IOError, OSError) as e:
            raise ConfigError(f"Error reading configuration file: {e}", config_path) from e

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'cb.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    # Custom YAML output with comments
                    f.write("# cb configuration file\n\n")
                    f.write("# Directory holding the Markdown sources\n")
                    f.write("markup: markup\n\n")
                    f.write("# Directory the HTML pages are written to\n")
                    f.write("site: site\n\n")
                    f.write("# Optional page template containing <div id='_body'></div>\n")
                    f.write("template: template.html\n\n")
                    f.write("# Optional directory for build logs\n")
                    f.write("log_dir: null\n")
                elif file_format == 'json':
                    json.dump(self.SAMPLE_SETTINGS, f, indent=2)
                else:
                    raise ConfigError(f"Unsupported config file format: {file_format}", config_path)
        except (IOError, OSError) as e:
            raise ConfigError(f"Error writing configuration file: {e}", config_path) from e

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.
        """
        merged = self.settings.copy()
        for key, value in args_dict.items():
            if value is not None and key in merged:
                merged[key] = value
        self.settings = merged
        return merged.copy()

    def to_build_config(self) -> BuildConfig:
        """Turn the current settings into a BuildConfig."""
        def expand(path):
            return os.path.expanduser(path) if path else path

        return BuildConfig(
            markup_dir=expand(self.settings['markup']),
            site_dir=expand(self.settings['site']),
            template=expand(self.settings['template']),
        )
