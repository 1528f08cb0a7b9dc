#!/usr/bin/env python3
"""
Command-line interface for cb - minimal static site builder.
"""

import os
import sys
import argparse
from typing import List, Optional

from . import __version__
from .core import Builder
from .errors import CbError
from .settings import CbSettings


def create_starter_structure(settings: dict) -> None:
    """Create the markup directory with a sample page and a sample template."""
    markup_dir = settings['markup']
    if os.path.exists(markup_dir):
        print(f"Directory already exists: {markup_dir}")
    else:
        os.makedirs(markup_dir, exist_ok=True)
        print(f"Created directory: {markup_dir}")

    index_path = os.path.join(markup_dir, 'index.md')
    if os.path.exists(index_path):
        print(f"Sample page already exists: {index_path}")
    else:
        with open(index_path, 'w', encoding='utf-8') as f:
            f.write("# Welcome\n\nThis page was built with **cb**.\n")
        print(f"Created sample page: {index_path}")

    template_path = 'template.html'
    if os.path.exists(template_path):
        print(f"Template already exists: {template_path}")
    else:
        with open(template_path, 'w', encoding='utf-8') as f:
            f.write("<!DOCTYPE html>\n<html>\n<body>\n<div id='_body'></div>\n</body>\n</html>\n")
        print(f"Created template: {template_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='cb', description='cb - minimal static site builder')
    parser.add_argument('--markup', type=str,
                        help='Directory containing the Markdown sources')
    parser.add_argument('--site', type=str,
                        help='Output directory for the generated pages')
    parser.add_argument('--template', type=str,
                        help="Page template containing <div id='_body'></div>")
    parser.add_argument('--log-dir', dest='log_dir', type=str,
                        help='Write a detailed build log into this directory')
    parser.add_argument('--verbose', action='store_true',
                        help='Print every build message')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter pages')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    settings_loader = CbSettings()

    try:
        if args.init:
            config_path = settings_loader.create_sample_config(args.init)
            print(f"Created sample configuration file: {config_path}")
            create_starter_structure(settings_loader.settings)
            print("\nRun 'cb' to build your site.")
            return 0

        settings_loader.load_settings()
        # Command line arguments take precedence
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)

        builder = Builder(
            settings_loader.to_build_config(),
            log_dir=final_settings['log_dir'],
            verbose=args.verbose,
        )
        builder.run()
    except CbError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
