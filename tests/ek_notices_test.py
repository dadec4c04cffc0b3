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

"""Tests for the third-party notices document."""

from __future__ import annotations

from embedkit._types import LicenseCategory, Manifest, PackageRecord
from embedkit.manifest import build_manifest
from embedkit.notices import NO_DEPENDENCIES_WARNING, generate_notices, render_notices_html


def _manifest() -> Manifest:
    return build_manifest([
        PackageRecord(
            name='mit-pkg',
            version='1.0.0',
            license_id='MIT',
            license_text='Permission is hereby granted <free of charge>',
            copyright='Copyright 2020 A & B',
        ),
        PackageRecord(
            name='gpl-pkg',
            version='2.0.0',
            license_id='GPL-3.0',
            is_copyleft=True,
            category=LicenseCategory.COPYLEFT,
        ),
        PackageRecord(
            name='app-pkg',
            version='0.1.0',
            license_id='ISC',
            is_transitive_copyleft=True,
            category=LicenseCategory.TRANSITIVE_COPYLEFT,
        ),
    ])


class TestRenderNoticesHtml:
    """Tests for render_notices_html()."""

    def test_groups_most_restrictive_first(self) -> None:
        """Test groups most restrictive first."""
        page = render_notices_html(_manifest())
        copyleft = page.index('id="copyleft"')
        transitive = page.index('id="transitive-copyleft"')
        permissive = page.index('id="permissive"')
        assert copyleft < transitive < permissive

    def test_empty_groups_omitted(self) -> None:
        """Test empty groups omitted."""
        assert 'id="unknown"' not in render_notices_html(_manifest())

    def test_group_counts(self) -> None:
        """Test group counts."""
        page = render_notices_html(_manifest())
        assert 'Copyleft (1)</h2>' in page
        assert 'Permissive (1)</h2>' in page

    def test_entries_escaped(self) -> None:
        """Test entries escaped."""
        page = render_notices_html(_manifest())
        assert 'Copyright 2020 A &amp; B' in page
        assert '&lt;free of charge&gt;' in page
        assert '<free of charge>' not in page

    def test_entry_anchor(self) -> None:
        """Test entry anchor."""
        assert '<section class="package" id="gpl-pkg@2.0.0">' in render_notices_html(_manifest())

    def test_deterministic(self) -> None:
        """Test deterministic."""
        assert render_notices_html(_manifest()) == render_notices_html(_manifest())


class TestGenerateNotices:
    """Tests for generate_notices()."""

    def test_empty_manifest_warns(self) -> None:
        """Test empty manifest warns."""
        document, diagnostics = generate_notices(Manifest())
        assert document is None
        assert len(diagnostics) == 1
        assert diagnostics[0].severity == 'warning'
        assert '[embedded-dependencies-webpack-plugin]' in diagnostics[0].message
        assert 'No third party dependencies were found' in diagnostics[0].message
        assert diagnostics[0].message == NO_DEPENDENCIES_WARNING

    def test_non_empty_renders(self) -> None:
        """Test non empty renders."""
        document, diagnostics = generate_notices(_manifest())
        assert diagnostics == []
        assert document is not None
        assert document.startswith('<!DOCTYPE html>')

    def test_custom_renderer(self) -> None:
        """Test custom renderer."""
        document, _ = generate_notices(_manifest(), renderer=lambda m: f'{len(m)} packages')
        assert document == '3 packages'

    def test_custom_renderer_not_called_when_empty(self) -> None:
        """Test custom renderer not called when empty."""
        calls: list[Manifest] = []
        document, diagnostics = generate_notices(Manifest(), renderer=lambda m: calls.append(m) or '')
        assert document is None
        assert calls == []
        assert len(diagnostics) == 1
