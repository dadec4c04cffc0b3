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

r"""Configuration for the embedded-dependencies pipeline.

Configuration is an explicit :class:`EmbedConfig` value handed to
:func:`embedkit.pipeline.run_pipeline`; nothing is read from ambient
state once the pipeline has started.

TOML sources (first found wins)::

    embedkit.toml           top-level table
    pyproject.toml          [tool.embedkit] table

Example ``embedkit.toml``::

    output-file-name = "licenses.json"
    generate-license-file = true
    concurrency = 16

Keys may be written in kebab-case or snake_case.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from embedkit._types import Manifest, PackageDescriptor
from embedkit.errors import ConfigError
from embedkit.logging import get_logger

__all__ = [
    'DEFAULT_CONCURRENCY',
    'DEFAULT_LICENSE_FILE_NAME',
    'DEFAULT_OUTPUT_FILE_NAME',
    'EmbedConfig',
    'load_config',
    'parse_config',
]

logger = get_logger(__name__)

DEFAULT_OUTPUT_FILE_NAME = 'embedded-dependencies.json'
DEFAULT_LICENSE_FILE_NAME = 'THIRD-PARTY-NOTICES.html'
DEFAULT_CONCURRENCY = 8

_ALLOWED_KEYS = frozenset({
    'output_file_name',
    'generate_license_file',
    'license_file_name',
    'concurrency',
})


@dataclass(frozen=True)
class EmbedConfig:
    """Options for one pipeline run.

    Attributes:
        output_file_name: Name of the JSON manifest asset.
        generate_license_file: Also render the notices document.
        license_file_name: Name of the notices asset.
        concurrency: Maximum number of license files read at once.
        package_filter: Optional predicate; packages for which it
            returns ``False`` are left out of the manifest.
        notices_renderer: Optional replacement for the built-in HTML
            notices renderer. Receives the manifest, returns the
            document text.
    """

    output_file_name: str = DEFAULT_OUTPUT_FILE_NAME
    generate_license_file: bool = False
    license_file_name: str = DEFAULT_LICENSE_FILE_NAME
    concurrency: int = DEFAULT_CONCURRENCY
    package_filter: Callable[[PackageDescriptor], bool] | None = None
    notices_renderer: Callable[[Manifest], str] | None = None

    def __post_init__(self) -> None:
        """Validate field values."""
        _check_file_name('output_file_name', self.output_file_name)
        _check_file_name('license_file_name', self.license_file_name)
        if self.output_file_name == self.license_file_name:
            raise ConfigError(
                f'output_file_name and license_file_name must differ (both are {self.output_file_name!r})',
            )
        if isinstance(self.concurrency, bool) or not isinstance(self.concurrency, int) or self.concurrency < 1:
            raise ConfigError(f'concurrency must be a positive integer, got {self.concurrency!r}')


def _check_file_name(key: str, value: object) -> None:
    if not isinstance(value, str):
        raise ConfigError(f'{key} must be a string, got {type(value).__name__}')
    if not value.strip():
        raise ConfigError(f'{key} must not be empty')
    if '/' in value or '\\' in value:
        raise ConfigError(
            f'{key} must be a bare file name, got {value!r}',
            hint='Use --out-dir to choose where assets are written.',
        )


def parse_config(table: dict[str, Any]) -> EmbedConfig:
    """Build an :class:`EmbedConfig` from a parsed TOML table.

    Args:
        table: The ``[tool.embedkit]`` table (or the whole
            ``embedkit.toml`` document).

    Returns:
        A validated :class:`EmbedConfig`.

    Raises:
        ConfigError: On unknown keys or wrongly typed values.
    """
    values: dict[str, Any] = {}
    for raw_key, value in table.items():
        key = raw_key.replace('-', '_')
        if key not in _ALLOWED_KEYS:
            raise ConfigError(
                f'Unknown key {raw_key!r} in embedkit config',
                hint=f'Valid keys: {", ".join(sorted(k.replace("_", "-") for k in _ALLOWED_KEYS))}',
            )
        values[key] = value

    if 'generate_license_file' in values and not isinstance(values['generate_license_file'], bool):
        raise ConfigError('generate_license_file must be a boolean')

    return EmbedConfig(**values)


def load_config(path: Path) -> EmbedConfig:
    """Load configuration from *path*.

    *path* may be an ``embedkit.toml`` file, a ``pyproject.toml`` file or
    a directory containing either. A missing file or missing
    ``[tool.embedkit]`` table yields the defaults.

    Raises:
        ConfigError: If the file is not valid TOML or the table is invalid.
    """
    if path.is_dir():
        candidates = [path / 'embedkit.toml', path / 'pyproject.toml']
        path = next((c for c in candidates if c.is_file()), candidates[0])

    if not path.is_file():
        logger.debug('config_not_found', path=str(path))
        return EmbedConfig()

    try:
        with path.open('rb') as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f'Invalid TOML in {path}: {exc}') from exc

    if path.name == 'pyproject.toml':
        table = data.get('tool', {}).get('embedkit', {})
    else:
        table = data

    if not isinstance(table, dict):
        raise ConfigError(f'embedkit config in {path} must be a table')

    config = parse_config(table)
    logger.debug('config_loaded', path=str(path), keys=sorted(table))
    return config
