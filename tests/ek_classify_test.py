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

"""Tests for copyleft classification."""

from __future__ import annotations

import pytest
from embedkit._types import LicenseCategory, PackageKey
from embedkit.licenses import classify_graph, classify_license, is_copyleft_license

APP: PackageKey = ('app', '1.0.0')
AGPL: PackageKey = ('agpl-dep', '2.0.0')
MIT: PackageKey = ('mit-dep', '3.0.0')
MID: PackageKey = ('middle', '0.1.0')


class TestClassifyLicense:
    """Tests for classify_license()."""

    @pytest.mark.parametrize('declared', ['MIT', 'Apache-2.0', 'ISC', 'BSD-3-Clause', '0BSD', 'mit', 'CC0-1.0'])
    def test_permissive(self, declared: str) -> None:
        """Test permissive."""
        assert classify_license(declared) is LicenseCategory.PERMISSIVE

    @pytest.mark.parametrize(
        'declared',
        ['GPL-3.0', 'GPL-2.0-only', 'GPL-3.0-or-later', 'GPL-2.0+', 'AGPL-3.0-only', 'LGPL-2.1', 'MPL-2.0', 'EPL-2.0'],
    )
    def test_copyleft(self, declared: str) -> None:
        """Test copyleft."""
        assert classify_license(declared) is LicenseCategory.COPYLEFT

    @pytest.mark.parametrize(
        'declared',
        [None, '', '   ', 'UNLICENSED', 'SEE LICENSE IN LICENSE.txt', 'LicenseRef-Proprietary', 'Totally-Custom-1.0'],
    )
    def test_unknown(self, declared: str | None) -> None:
        """Test unknown."""
        assert classify_license(declared) is LicenseCategory.UNKNOWN

    def test_unparseable_is_unknown(self) -> None:
        """Test unparseable is unknown."""
        assert classify_license('MIT OR') is LicenseCategory.UNKNOWN
        assert classify_license('MIT / Apache') is LicenseCategory.UNKNOWN

    def test_or_takes_least_restrictive(self) -> None:
        """Test or takes least restrictive."""
        assert classify_license('(MIT OR GPL-3.0-only)') is LicenseCategory.PERMISSIVE
        assert classify_license('GPL-2.0 OR Custom-1.0') is LicenseCategory.UNKNOWN

    def test_and_takes_most_restrictive(self) -> None:
        """Test and takes most restrictive."""
        assert classify_license('MIT AND GPL-3.0-only') is LicenseCategory.COPYLEFT
        assert classify_license('MIT AND Custom-1.0') is LicenseCategory.UNKNOWN

    def test_with_exception_uses_base(self) -> None:
        """Test with exception uses base."""
        assert classify_license('GPL-2.0-only WITH Classpath-exception-2.0') is LicenseCategory.COPYLEFT
        assert classify_license('Apache-2.0 WITH LLVM-exception') is LicenseCategory.PERMISSIVE

    def test_aliases(self) -> None:
        """Test aliases."""
        assert classify_license('GPLv3') is LicenseCategory.COPYLEFT
        assert classify_license('Apache 2.0') is LicenseCategory.PERMISSIVE
        assert classify_license('MIT License') is LicenseCategory.PERMISSIVE


class TestIsCopyleftLicense:
    """Tests for is_copyleft_license()."""

    def test_suffixes_stripped(self) -> None:
        """Test suffixes stripped."""
        assert is_copyleft_license('AGPL-3.0-or-later')
        assert is_copyleft_license('agpl-3.0+')
        assert not is_copyleft_license('MIT')


class TestClassifyGraph:
    """Tests for classify_graph()."""

    def test_permissive_with_agpl_dependency(self) -> None:
        """Test permissive with agpl dependency."""
        result = classify_graph({APP: 'Apache-2.0', AGPL: 'AGPL-3.0-only'}, {APP: [AGPL]})
        assert result[APP].is_copyleft is False
        assert result[APP].is_transitive_copyleft is True
        assert result[APP].category is LicenseCategory.TRANSITIVE_COPYLEFT
        assert result[AGPL].is_copyleft is True
        assert result[AGPL].is_transitive_copyleft is False
        assert result[AGPL].category is LicenseCategory.COPYLEFT

    def test_all_permissive(self) -> None:
        """Test all permissive."""
        result = classify_graph({APP: 'MIT', MIT: 'MIT'}, {APP: [MIT]})
        assert not result[APP].is_copyleft
        assert not result[APP].is_transitive_copyleft
        assert result[APP].category is LicenseCategory.PERMISSIVE

    def test_indirect_dependency(self) -> None:
        """Test indirect dependency."""
        result = classify_graph({APP: 'MIT', MID: 'ISC', AGPL: 'AGPL-3.0'}, {APP: [MID], MID: [AGPL]})
        assert result[APP].is_transitive_copyleft
        assert result[MID].is_transitive_copyleft

    def test_copyleft_package_is_never_transitive(self) -> None:
        """Test copyleft package is never transitive."""
        gpl: PackageKey = ('gpl', '1.0.0')
        result = classify_graph({gpl: 'GPL-3.0', AGPL: 'AGPL-3.0'}, {gpl: [AGPL]})
        assert result[gpl].is_copyleft
        assert not result[gpl].is_transitive_copyleft

    def test_unknown_dependency_propagates(self) -> None:
        """Test unknown dependency propagates."""
        result = classify_graph({APP: 'MIT', MID: None}, {APP: [MID]})
        assert result[MID].is_copyleft
        assert result[MID].category is LicenseCategory.UNKNOWN
        assert result[APP].is_transitive_copyleft

    def test_cycle_without_copyleft(self) -> None:
        """Test cycle without copyleft."""
        result = classify_graph({APP: 'MIT', MID: 'MIT'}, {APP: [MID], MID: [APP]})
        assert not result[APP].is_transitive_copyleft
        assert not result[MID].is_transitive_copyleft

    def test_cycle_reaching_copyleft_from_any_member(self) -> None:
        """Every member of a cycle sees what any member reaches."""
        licenses = {APP: 'MIT', MID: 'MIT', AGPL: 'AGPL-3.0'}
        # app <-> middle, and only app points at the AGPL package. A naive
        # memoized walk starting at app would record middle as clean.
        result = classify_graph(licenses, {APP: [MID, AGPL], MID: [APP]})
        assert result[APP].is_transitive_copyleft
        assert result[MID].is_transitive_copyleft

    def test_copyleft_inside_cycle(self) -> None:
        """Test copyleft inside cycle."""
        result = classify_graph({APP: 'MIT', AGPL: 'AGPL-3.0'}, {APP: [AGPL], AGPL: [APP]})
        assert result[APP].is_transitive_copyleft
        assert result[AGPL].is_copyleft
        assert not result[AGPL].is_transitive_copyleft

    def test_self_loop(self) -> None:
        """Test self loop."""
        result = classify_graph({APP: 'MIT'}, {APP: [APP]})
        assert not result[APP].is_transitive_copyleft

    def test_dangling_edges_ignored(self) -> None:
        """Test dangling edges ignored."""
        result = classify_graph({APP: 'MIT'}, {APP: [('not-bundled', '1.0.0')]})
        assert not result[APP].is_transitive_copyleft

    def test_deep_chain_does_not_recurse(self) -> None:
        """Test deep chain does not recurse."""
        depth = 5000
        keys = [(f'pkg-{i:05d}', '1.0.0') for i in range(depth)]
        licenses: dict[PackageKey, str | None] = {k: 'MIT' for k in keys}
        licenses[keys[-1]] = 'GPL-3.0'
        edges = {keys[i]: [keys[i + 1]] for i in range(depth - 1)}
        result = classify_graph(licenses, edges)
        assert result[keys[0]].is_transitive_copyleft
        assert result[keys[-1]].is_copyleft

    def test_result_independent_of_input_order(self) -> None:
        """Test result independent of input order."""
        licenses = {APP: 'MIT', MID: 'MIT', AGPL: 'AGPL-3.0'}
        edges = {APP: [MID], MID: [APP, AGPL]}
        forward = classify_graph(licenses, edges)
        backward = classify_graph(dict(reversed(list(licenses.items()))), edges)
        assert forward == backward
