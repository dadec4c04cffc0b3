# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Command-line entry point.

Usage::

    embedkit                                  # scan ./node_modules
    embedkit path/to/app --generate-license-file --out-dir dist
    embedkit --modules dist/modules.txt       # only packages a bundle used

``--modules`` takes a file with one module path per line, as reported
by the bundler. Without it, every installed package is included.

Exit codes:
    0  Assets written.
    2  Invalid configuration or unreadable --modules file.
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from embedkit._types import LicenseCategory, Manifest, PackageDescriptor
from embedkit.config import EmbedConfig, load_config
from embedkit.errors import EmbedKitError
from embedkit.logging import configure_logging, get_logger
from embedkit.pipeline import run_pipeline, write_assets
from embedkit.resolver import resolve_packages, scan_node_modules

logger = get_logger(__name__)

_CATEGORY_STYLES: dict[LicenseCategory, str] = {
    LicenseCategory.PERMISSIVE: 'green',
    LicenseCategory.COPYLEFT: 'bold red',
    LicenseCategory.TRANSITIVE_COPYLEFT: 'yellow',
    LicenseCategory.UNKNOWN: 'magenta',
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='embedkit',
        description='Inventory third-party packages embedded in a build and record their licenses.',
    )
    parser.add_argument('project_dir', nargs='?', type=Path, default=Path('.'), help='Project root (default: .)')
    parser.add_argument('--modules', type=Path, help='File listing the module paths a build consumed, one per line.')
    parser.add_argument('--out-dir', type=Path, help='Where to write assets (default: PROJECT_DIR).')
    parser.add_argument('--config', type=Path, help='embedkit.toml or pyproject.toml (default: PROJECT_DIR).')
    parser.add_argument('--output-file-name', help='Name of the JSON manifest.')
    parser.add_argument(
        '--generate-license-file',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Also write THIRD-PARTY-NOTICES.html.',
    )
    parser.add_argument('--concurrency', type=int, help='Maximum license files read at once.')
    parser.add_argument('--json-log', action='store_true', help='Log as JSON lines.')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug logging.')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only warnings and errors; no summary table.')
    return parser


def _resolve_config(args: argparse.Namespace) -> EmbedConfig:
    config = load_config(args.config or args.project_dir)
    overrides = {
        'output_file_name': args.output_file_name,
        'generate_license_file': args.generate_license_file,
        'concurrency': args.concurrency,
    }
    return dataclasses.replace(config, **{k: v for k, v in overrides.items() if v is not None})


def _descriptors(args: argparse.Namespace) -> list[PackageDescriptor]:
    if args.modules is None:
        return scan_node_modules(args.project_dir)
    try:
        lines = args.modules.read_text(encoding='utf-8').splitlines()
    except (OSError, UnicodeDecodeError) as exc:
        raise EmbedKitError(
            f'Cannot read modules file {args.modules}: {exc}',
            hint='Pass a UTF-8 text file with one module path per line.',
        ) from exc
    paths = [line.strip() for line in lines if line.strip()]
    return resolve_packages(paths)


def _summary_table(manifest: Manifest) -> Table:
    table = Table(title=f'Embedded dependencies ({len(manifest)})')
    table.add_column('Package')
    table.add_column('Version')
    table.add_column('License')
    table.add_column('Category')
    table.add_column('Copyright', overflow='fold')
    for record in manifest.packages:
        style = _CATEGORY_STYLES[record.category]
        table.add_row(
            escape(record.name),
            escape(record.version),
            escape(record.license_id or '-'),
            f'[{style}]{record.category.value}[/{style}]',
            escape(record.copyright or '-'),
        )
    return table


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the exit code."""
    args = _build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        config = _resolve_config(args)
    except EmbedKitError as exc:
        logger.error('invalid_config', error=str(exc), hint=exc.hint)
        return 2

    try:
        descriptors = _descriptors(args)
    except EmbedKitError as exc:
        logger.error('invalid_input', error=str(exc), hint=exc.hint)
        return 2

    result = run_pipeline(descriptors, config)
    for path in write_assets(result, args.out_dir or args.project_dir):
        logger.info('asset_written', path=str(path))
    for warning in result.warnings:
        logger.warning('build_warning', message=warning.message)

    if not args.quiet:
        Console().print(_summary_table(result.manifest))
    return 0


if __name__ == '__main__':
    sys.exit(main())
