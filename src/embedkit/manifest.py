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

"""Assemble, serialize and validate the embedded-dependencies manifest.

Serialized form (``embedded-dependencies.json``)::

    {
      "packages": [
        {
          "name": "fake-package-mit-license",
          "version": "1.0.0",
          "licenseId": "MIT",
          "licenseFilePath": "node_modules/fake-package-mit-license/LICENSE-MIT.txt",
          "licenseText": "...",
          "copyright": "Copyright © 2023 FAKE-PACKAGE-MIT-LICENSE",
          "isCopyleft": false,
          "isTransitiveCopyleft": false,
          "category": "permissive"
        }
      ]
    }

Records are sorted by name, then version, using code point order, and
keys are always written in the same order, so an unchanged dependency
graph serializes to identical bytes on every run. Unset fields are
omitted.
"""

from __future__ import annotations

import importlib.resources
import json
from collections.abc import Iterable
from functools import cache
from typing import Any

import jsonschema

from embedkit._types import Manifest, PackageKey, PackageRecord
from embedkit.logging import get_logger

__all__ = [
    'build_manifest',
    'manifest_to_dict',
    'serialize_manifest',
    'validate_manifest',
]

logger = get_logger(__name__)

# (attribute, JSON key) in output order.
_FIELDS: tuple[tuple[str, str], ...] = (
    ('name', 'name'),
    ('version', 'version'),
    ('license_id', 'licenseId'),
    ('license_file_path', 'licenseFilePath'),
    ('license_text', 'licenseText'),
    ('copyright', 'copyright'),
    ('is_copyleft', 'isCopyleft'),
    ('is_transitive_copyleft', 'isTransitiveCopyleft'),
    ('category', 'category'),
    ('author', 'author'),
    ('repository', 'repository'),
)


def build_manifest(records: Iterable[PackageRecord]) -> Manifest:
    """Deduplicate and sort *records* into a :class:`Manifest`.

    The first record seen for a ``(name, version)`` pair wins.
    """
    unique: dict[PackageKey, PackageRecord] = {}
    for record in records:
        if record.key in unique:
            logger.debug('duplicate_record_dropped', package=record.name, version=record.version)
            continue
        unique[record.key] = record
    ordered = tuple(unique[key] for key in sorted(unique))
    return Manifest(packages=ordered)


def _record_to_dict(record: PackageRecord) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for attr, key in _FIELDS:
        value = getattr(record, attr)
        if value is None:
            continue
        out[key] = value.value if attr == 'category' else value
    return out


def manifest_to_dict(manifest: Manifest) -> dict[str, Any]:
    """Return the JSON-ready form of *manifest*."""
    return {'packages': [_record_to_dict(r) for r in manifest.packages]}


def serialize_manifest(manifest: Manifest) -> bytes:
    """Serialize *manifest* to UTF-8 JSON bytes."""
    text = json.dumps(manifest_to_dict(manifest), indent=2, ensure_ascii=False)
    return (text + '\n').encode('utf-8')


@cache
def _schema() -> dict[str, Any]:
    resource = importlib.resources.files('embedkit') / 'data' / 'manifest.schema.json'
    return json.loads(resource.read_text(encoding='utf-8'))


def validate_manifest(data: Any) -> list[str]:  # noqa: ANN401
    """Validate a parsed manifest against the bundled JSON Schema.

    Args:
        data: Parsed JSON (usually from :func:`manifest_to_dict` or
            ``json.loads`` of a manifest file).

    Returns:
        Human-readable violations, empty if the manifest is valid.
    """
    validator = jsonschema.Draft202012Validator(_schema())
    errors = sorted(validator.iter_errors(data), key=lambda e: list(e.absolute_path))
    return [f'{".".join(str(p) for p in e.absolute_path) or "(root)"}: {e.message}' for e in errors]
