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

r"""Copyleft classification, direct and through the dependency graph.

Key Concepts (ELI5)::

    ┌──────────────────────┬───────────────────────────────────────────────┐
    │ Concept              │ Plain-English                                 │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ Copyleft             │ Derivative works must ship under the same     │
    │                      │ (share-alike) terms: GPL, AGPL, MPL, ...      │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ Unknown              │ No license, a custom one, or one we do not    │
    │                      │ recognize. Flagged like copyleft so a human   │
    │                      │ looks at it.                                  │
    ├──────────────────────┼───────────────────────────────────────────────┤
    │ Transitive copyleft  │ The package itself is fine, but something it  │
    │                      │ pulls in (directly or indirectly) is not.     │
    └──────────────────────┴───────────────────────────────────────────────┘

Expressions are judged structurally:

- ``A OR B``: the least restrictive branch (the consumer may choose).
- ``A AND B``: the most restrictive branch.
- ``A WITH exception`` and ``A+``: judged as ``A``.

The dependency graph may contain cycles (peer and optional
dependencies do that). :func:`classify_graph` collapses it into
strongly connected components, so every package in a cycle sees the
same closure no matter where the walk started.

Usage::

    from embedkit.licenses import classify_graph, classify_license

    classify_license('MIT OR GPL-3.0')  # LicenseCategory.PERMISSIVE
    result = classify_graph(
        {('app', '1.0.0'): 'MIT', ('agpl-dep', '2.0.0'): 'AGPL-3.0'},
        {('app', '1.0.0'): [('agpl-dep', '2.0.0')]},
    )
    result['app', '1.0.0'].is_transitive_copyleft  # True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from embedkit._types import LicenseCategory, PackageKey
from embedkit.logging import get_logger
from embedkit.spdx_expr import And, ExprNode, LicenseId, LicenseRef, Or, ParseError, With, parse

__all__ = [
    'COPYLEFT_LICENSES',
    'Classification',
    'PERMISSIVE_LICENSES',
    'classify_graph',
    'classify_license',
    'is_copyleft_license',
]

logger = get_logger(__name__)

# Base identifiers, lowercased, with ``-only`` / ``-or-later`` / ``+`` removed.
COPYLEFT_LICENSES: frozenset[str] = frozenset({
    # GNU family.
    'gpl-1.0',
    'gpl-2.0',
    'gpl-3.0',
    'agpl-1.0',
    'agpl-3.0',
    'lgpl-2.0',
    'lgpl-2.1',
    'lgpl-3.0',
    'gfdl-1.1',
    'gfdl-1.2',
    'gfdl-1.3',
    # File- and module-level share-alike.
    'mpl-1.0',
    'mpl-1.1',
    'mpl-2.0',
    'mpl-2.0-no-copyleft-exception',
    'epl-1.0',
    'epl-2.0',
    'cddl-1.0',
    'cddl-1.1',
    'cpl-1.0',
    'cpal-1.0',
    'eupl-1.0',
    'eupl-1.1',
    'eupl-1.2',
    'osl-1.0',
    'osl-2.0',
    'osl-2.1',
    'osl-3.0',
    'rpl-1.1',
    'rpl-1.5',
    'ms-rl',
    'sleepycat',
    'sspl-1.0',
    # Share-alike content licenses.
    'cc-by-sa-2.0',
    'cc-by-sa-2.5',
    'cc-by-sa-3.0',
    'cc-by-sa-4.0',
    'cc-by-nc-sa-4.0',
})

PERMISSIVE_LICENSES: frozenset[str] = frozenset({
    '0bsd',
    'afl-2.1',
    'afl-3.0',
    'apache-1.1',
    'apache-2.0',
    'artistic-2.0',
    'blueoak-1.0.0',
    'bsd-1-clause',
    'bsd-2-clause',
    'bsd-3-clause',
    'bsd-3-clause-clear',
    'bsl-1.0',
    'cc-by-3.0',
    'cc-by-4.0',
    'cc0-1.0',
    'isc',
    'mit',
    'mit-0',
    'ms-pl',
    'ncsa',
    'postgresql',
    'psf-2.0',
    'python-2.0',
    'unicode-dfs-2016',
    'unlicense',
    'upl-1.0',
    'w3c',
    'wtfpl',
    'x11',
    'zlib',
})

# Non-SPDX spellings seen in the wild, lowercased → SPDX expression.
_ALIASES: dict[str, str] = {
    'gplv2': 'GPL-2.0',
    'gpl v2': 'GPL-2.0',
    'gplv3': 'GPL-3.0',
    'gpl v3': 'GPL-3.0',
    'agplv3': 'AGPL-3.0',
    'agpl v3': 'AGPL-3.0',
    'lgplv2.1': 'LGPL-2.1',
    'lgplv3': 'LGPL-3.0',
    'apache 2.0': 'Apache-2.0',
    'apache-2': 'Apache-2.0',
    'apache2': 'Apache-2.0',
    'apache license 2.0': 'Apache-2.0',
    'apache license, version 2.0': 'Apache-2.0',
    'mit license': 'MIT',
    'the mit license': 'MIT',
    'isc license': 'ISC',
    'bsd': 'BSD-3-Clause',
    'new bsd': 'BSD-3-Clause',
    'simplified bsd': 'BSD-2-Clause',
    'public domain': 'Unlicense',
}

_SUFFIXES = ('-only', '-or-later')

# Declarations that say "look elsewhere" or "not licensed".
_UNDETERMINED_PREFIXES = ('see license in', 'unlicensed')

# Ordering used to combine OR / AND branches.
_RESTRICTIVENESS: dict[LicenseCategory, int] = {
    LicenseCategory.PERMISSIVE: 0,
    LicenseCategory.UNKNOWN: 1,
    LicenseCategory.COPYLEFT: 2,
}


def _base_id(license_id: str) -> str:
    base = license_id.strip().lower().rstrip('+')
    for suffix in _SUFFIXES:
        if base.endswith(suffix):
            return base[: -len(suffix)]
    return base


def is_copyleft_license(license_id: str) -> bool:
    """Return ``True`` if the single identifier *license_id* is copyleft."""
    return _base_id(license_id) in COPYLEFT_LICENSES


def _classify_id(license_id: str) -> LicenseCategory:
    base = _base_id(license_id)
    if base in COPYLEFT_LICENSES:
        return LicenseCategory.COPYLEFT
    if base in PERMISSIVE_LICENSES:
        return LicenseCategory.PERMISSIVE
    return LicenseCategory.UNKNOWN


def _evaluate(node: ExprNode) -> LicenseCategory:
    if isinstance(node, LicenseId):
        return _classify_id(node.id)
    if isinstance(node, LicenseRef):
        return LicenseCategory.UNKNOWN
    if isinstance(node, With):
        return _evaluate(node.license)
    sides = (_evaluate(node.left), _evaluate(node.right))
    if isinstance(node, Or):
        return min(sides, key=_RESTRICTIVENESS.__getitem__)
    if isinstance(node, And):
        return max(sides, key=_RESTRICTIVENESS.__getitem__)
    return LicenseCategory.UNKNOWN  # pragma: no cover


def classify_license(declared: str | None) -> LicenseCategory:
    """Classify a declared license string on its own.

    Args:
        declared: License string from package metadata.

    Returns:
        :attr:`LicenseCategory.PERMISSIVE`, :attr:`LicenseCategory.COPYLEFT`
        or :attr:`LicenseCategory.UNKNOWN`. Never
        :attr:`LicenseCategory.TRANSITIVE_COPYLEFT`.
    """
    if declared is None or not declared.strip():
        return LicenseCategory.UNKNOWN
    text = declared.strip()
    lowered = text.lower()
    if lowered.startswith(_UNDETERMINED_PREFIXES):
        return LicenseCategory.UNKNOWN
    text = _ALIASES.get(lowered, text)
    try:
        expr = parse(text)
    except ParseError:
        logger.debug('license_expression_unparseable', declared=declared)
        return LicenseCategory.UNKNOWN
    return _evaluate(expr)


@dataclass(frozen=True)
class Classification:
    """Classifier result for one package.

    Attributes:
        is_copyleft: Own license is copyleft or undetermined.
        is_transitive_copyleft: Not copyleft itself, but a package
            reachable through its dependency edges is.
        category: Notice grouping.
    """

    is_copyleft: bool
    is_transitive_copyleft: bool
    category: LicenseCategory


def _strongly_connected(
    nodes: list[PackageKey],
    succ: Mapping[PackageKey, list[PackageKey]],
) -> list[list[PackageKey]]:
    """Tarjan's algorithm, iterative.

    Components come out in reverse topological order: every component
    appears after all components it has edges into.
    """
    index: dict[PackageKey, int] = {}
    low: dict[PackageKey, int] = {}
    stack: list[PackageKey] = []
    on_stack: set[PackageKey] = set()
    components: list[list[PackageKey]] = []

    def _enter(node: PackageKey) -> None:
        index[node] = low[node] = len(index)
        stack.append(node)
        on_stack.add(node)

    for root in nodes:
        if root in index:
            continue
        _enter(root)
        work = [(root, iter(succ[root]))]
        while work:
            node, children = work[-1]
            descended = False
            for child in children:
                if child not in index:
                    _enter(child)
                    work.append((child, iter(succ[child])))
                    descended = True
                    break
                if child in on_stack:
                    low[node] = min(low[node], index[child])
            if descended:
                continue
            work.pop()
            if work:
                parent = work[-1][0]
                low[parent] = min(low[parent], low[node])
            if low[node] == index[node]:
                component: list[PackageKey] = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(component)
    return components


def classify_graph(
    licenses: Mapping[PackageKey, str | None],
    edges: Mapping[PackageKey, Iterable[PackageKey]],
) -> dict[PackageKey, Classification]:
    """Classify every package, including transitive copyleft exposure.

    Args:
        licenses: Declared license string per package.
        edges: Direct dependencies per package. Edges to keys missing
            from *licenses* are ignored.

    Returns:
        Mapping from package key to :class:`Classification`.
    """
    nodes = sorted(licenses)
    own = {key: classify_license(licenses[key]) for key in nodes}
    own_copyleft = {key: cat is not LicenseCategory.PERMISSIVE for key, cat in own.items()}

    succ: dict[PackageKey, list[PackageKey]] = {}
    for key in nodes:
        targets: set[PackageKey] = set()
        for dep in edges.get(key, ()):
            if dep in licenses:
                targets.add(dep)
            else:
                logger.debug('dependency_edge_dropped', package=f'{key[0]}@{key[1]}', dep=f'{dep[0]}@{dep[1]}')
        succ[key] = sorted(targets)

    components = _strongly_connected(nodes, succ)
    component_of = {member: i for i, comp in enumerate(components) for member in comp}

    # A component reaches copyleft if any member is copyleft or any
    # successor component does. Successors were finalized earlier.
    reaches: list[bool] = []
    for i, comp in enumerate(components):
        hit = any(own_copyleft[member] for member in comp) or any(
            reaches[component_of[dep]] for member in comp for dep in succ[member] if component_of[dep] != i
        )
        reaches.append(hit)

    result: dict[PackageKey, Classification] = {}
    for key in nodes:
        transitive = not own_copyleft[key] and reaches[component_of[key]]
        if own[key] is not LicenseCategory.PERMISSIVE:
            category = own[key]
        elif transitive:
            category = LicenseCategory.TRANSITIVE_COPYLEFT
        else:
            category = LicenseCategory.PERMISSIVE
        result[key] = Classification(
            is_copyleft=own_copyleft[key],
            is_transitive_copyleft=transitive,
            category=category,
        )
    return result
