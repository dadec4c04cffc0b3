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

"""Render the third-party notices document from a manifest.

Packages are grouped by license category, most restrictive first::

    Copyleft
      name@version, copyright, full license text
    Transitive copyleft
    Unknown license
    Permissive

An empty manifest produces no document and a single warning instead.
"""

from __future__ import annotations

import html
from collections.abc import Callable

from embedkit._types import Diagnostic, LicenseCategory, Manifest, PackageRecord
from embedkit.logging import get_logger

__all__ = [
    'NO_DEPENDENCIES_WARNING',
    'WARNING_PREFIX',
    'generate_notices',
    'render_notices_html',
]

logger = get_logger(__name__)

WARNING_PREFIX = '[embedded-dependencies-webpack-plugin]'
NO_DEPENDENCIES_WARNING = (
    f'{WARNING_PREFIX}: No third party dependencies were found. Skipping license file generation.'
)

_GROUP_ORDER: tuple[tuple[LicenseCategory, str], ...] = (
    (LicenseCategory.COPYLEFT, 'Copyleft'),
    (LicenseCategory.TRANSITIVE_COPYLEFT, 'Transitive copyleft'),
    (LicenseCategory.UNKNOWN, 'Unknown license'),
    (LicenseCategory.PERMISSIVE, 'Permissive'),
)

_STYLE = (
    'body{font-family:sans-serif;max-width:60em;margin:2em auto}'
    'pre{white-space:pre-wrap;background:#f6f8fa;padding:1em}'
    '.copyright{font-style:italic}'
)


def _render_entry(record: PackageRecord) -> list[str]:
    anchor = html.escape(f'{record.name}@{record.version}', quote=True)
    lines = [
        f'<section class="package" id="{anchor}">',
        f'<h3>{html.escape(record.name)} <small>{html.escape(record.version)}</small></h3>',
    ]
    if record.license_id:
        lines.append(f'<p class="license">License: {html.escape(record.license_id)}</p>')
    if record.copyright:
        lines.append(f'<p class="copyright">{html.escape(record.copyright)}</p>')
    if record.license_text:
        lines.append(f'<pre>{html.escape(record.license_text)}</pre>')
    lines.append('</section>')
    return lines


def render_notices_html(manifest: Manifest) -> str:
    """Render *manifest* as a standalone HTML page.

    Empty groups are left out. Input order within a group is kept, so a
    sorted manifest gives a sorted page.
    """
    lines = [
        '<!DOCTYPE html>',
        '<html lang="en">',
        '<head>',
        '<meta charset="utf-8">',
        '<title>Third-Party Notices</title>',
        f'<style>{_STYLE}</style>',
        '</head>',
        '<body>',
        '<h1>Third-Party Notices</h1>',
        '<p>This software includes the following third-party packages.</p>',
    ]
    for category, title in _GROUP_ORDER:
        members = [r for r in manifest.packages if r.category is category]
        if not members:
            continue
        lines.append(f'<h2 id="{category.value}">{title} ({len(members)})</h2>')
        for record in members:
            lines.extend(_render_entry(record))
    lines.extend(['</body>', '</html>', ''])
    return '\n'.join(lines)


def generate_notices(
    manifest: Manifest,
    renderer: Callable[[Manifest], str] | None = None,
) -> tuple[str | None, list[Diagnostic]]:
    """Produce the notices document, or the empty-manifest warning.

    Args:
        manifest: The build's manifest.
        renderer: Replacement for :func:`render_notices_html`.

    Returns:
        ``(document, diagnostics)``. *document* is ``None`` when the
        manifest is empty; *diagnostics* then holds exactly one warning.
    """
    if manifest.empty:
        logger.warning('no_third_party_dependencies')
        return None, [Diagnostic(severity='warning', message=NO_DEPENDENCIES_WARNING)]
    render = renderer or render_notices_html
    document = render(manifest)
    logger.debug('notices_rendered', packages=len(manifest), chars=len(document))
    return document, []
