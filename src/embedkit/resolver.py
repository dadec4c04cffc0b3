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

r"""Resolve installed ``node_modules`` packages into package descriptors.

A bundler reports the files it pulled into a build. Every file under a
``node_modules`` directory belongs to exactly one installed package::

    app/node_modules/lodash/lodash.js                      → lodash
    app/node_modules/@babel/runtime/helpers/extends.js     → @babel/runtime
    app/node_modules/a/node_modules/b/index.js             → b (nested copy)

For each package root found this way, ``package.json`` supplies the
name, version, declared license, author, repository and dependency
names. Dependency names are turned into ``(name, version)`` edges by
Node's lookup order: ``<dir>/node_modules/<dep>`` for the package's
own directory, then each ancestor directory in turn.

Usage::

    from embedkit.resolver import resolve_packages, scan_node_modules

    used = resolve_packages(module_paths_from_the_bundler)
    everything = scan_node_modules(Path('.'))
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from embedkit._types import PackageDescriptor, PackageKey
from embedkit.logging import get_logger

__all__ = [
    'package_root_for',
    'read_package_descriptor',
    'read_package_json',
    'resolve_packages',
    'scan_node_modules',
]

logger = get_logger(__name__)

_NODE_MODULES = 'node_modules'

# package.json sections whose keys are runtime dependency names.
_DEPENDENCY_SECTIONS = ('dependencies', 'optionalDependencies', 'peerDependencies')


def package_root_for(module_path: str | Path) -> Path | None:
    """Return the installed package directory owning *module_path*.

    The innermost ``node_modules`` segment wins, so nested copies are
    attributed to themselves. Returns ``None`` for first-party files.
    """
    parts = Path(module_path).parts
    for i in range(len(parts) - 2, -1, -1):
        if parts[i] != _NODE_MODULES:
            continue
        name = parts[i + 1]
        if name.startswith('@'):
            if i + 2 >= len(parts):
                return None
            return Path(*parts[: i + 3])
        if name.startswith('.'):
            continue
        return Path(*parts[: i + 2])
    return None


def read_package_json(pkg_dir: Path) -> dict[str, Any] | None:
    """Load ``package.json`` from *pkg_dir*, or ``None`` if unusable."""
    manifest = pkg_dir / 'package.json'
    try:
        data = json.loads(manifest.read_text(encoding='utf-8'))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        logger.warning('package_json_unreadable', path=str(manifest), error=str(exc))
        return None
    if not isinstance(data, dict):
        logger.warning('package_json_not_object', path=str(manifest))
        return None
    return data


def _nonempty_str(value: object) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _declared_license(data: dict[str, Any]) -> str | None:
    # "license": "MIT" or "license": "(MIT OR Apache-2.0)"
    lic = data.get('license')
    if _nonempty_str(lic):
        return _nonempty_str(lic)
    # Legacy: "license": {"type": "MIT", "url": "..."}
    if isinstance(lic, dict) and _nonempty_str(lic.get('type')):
        return _nonempty_str(lic.get('type'))
    # Deprecated: "licenses": [{"type": "MIT"}, ...]
    licenses = data.get('licenses')
    if isinstance(licenses, list) and licenses:
        types = [t for entry in licenses if isinstance(entry, dict) and (t := _nonempty_str(entry.get('type')))]
        if len(types) == 1:
            return types[0]
        if types:
            return '(' + ' OR '.join(types) + ')'
    return None


def _person(value: object) -> str | None:
    if isinstance(value, dict):
        return _nonempty_str(value.get('name'))
    return _nonempty_str(value)


def _repository(value: object) -> str | None:
    if isinstance(value, dict):
        return _nonempty_str(value.get('url'))
    return _nonempty_str(value)


def _dependency_names(data: dict[str, Any]) -> list[str]:
    names: set[str] = set()
    for section in _DEPENDENCY_SECTIONS:
        deps = data.get(section)
        if isinstance(deps, dict):
            names.update(k for k in deps if isinstance(k, str) and k)
    return sorted(names)


def _listing(pkg_dir: Path) -> tuple[str, ...]:
    try:
        return tuple(sorted(entry.name for entry in pkg_dir.iterdir() if entry.is_file()))
    except OSError as exc:
        logger.warning('package_dir_unlistable', path=str(pkg_dir), error=str(exc))
        return ()


def _identity(data: dict[str, Any], pkg_dir: Path) -> PackageKey | None:
    name = _nonempty_str(data.get('name'))
    version = _nonempty_str(data.get('version'))
    if name is None or version is None:
        logger.warning('package_metadata_invalid', path=str(pkg_dir), name=data.get('name'), version=data.get('version'))
        return None
    return (name, version)


def read_package_descriptor(
    pkg_dir: Path,
    dependency_edges: tuple[PackageKey, ...] = (),
) -> PackageDescriptor | None:
    """Build a :class:`PackageDescriptor` for one installed package.

    Returns ``None`` (and logs a warning) when ``package.json`` is
    missing, invalid, or lacks a name or version.
    """
    data = read_package_json(pkg_dir)
    if data is None:
        return None
    return _descriptor_from(data, pkg_dir, dependency_edges)


def _descriptor_from(
    data: dict[str, Any],
    pkg_dir: Path,
    dependency_edges: tuple[PackageKey, ...],
) -> PackageDescriptor | None:
    key = _identity(data, pkg_dir)
    if key is None:
        return None
    return PackageDescriptor(
        name=key[0],
        version=key[1],
        root_path=pkg_dir,
        root_directory_listing=_listing(pkg_dir),
        declared_license_id=_declared_license(data),
        dependency_edges=dependency_edges,
        author=_person(data.get('author')),
        repository=_repository(data.get('repository')),
    )


class _Resolver:
    """Caches ``package.json`` reads while walking dependency edges."""

    def __init__(self) -> None:
        self._data: dict[Path, dict[str, Any] | None] = {}

    def data(self, pkg_dir: Path) -> dict[str, Any] | None:
        if pkg_dir not in self._data:
            self._data[pkg_dir] = read_package_json(pkg_dir)
        return self._data[pkg_dir]

    def installed(self, from_dir: Path, dep_name: str) -> Path | None:
        for base in (from_dir, *from_dir.parents):
            if base.name == _NODE_MODULES:
                continue
            candidate = base / _NODE_MODULES / dep_name
            if (candidate / 'package.json').is_file():
                return candidate
        return None

    def edges(self, pkg_dir: Path, data: dict[str, Any]) -> tuple[PackageKey, ...]:
        keys: set[PackageKey] = set()
        for dep_name in _dependency_names(data):
            dep_dir = self.installed(pkg_dir, dep_name)
            if dep_dir is None:
                logger.debug('dependency_not_installed', package=str(pkg_dir), dep=dep_name)
                continue
            dep_data = self.data(dep_dir)
            dep_key = _identity(dep_data, dep_dir) if dep_data is not None else None
            if dep_key is not None:
                keys.add(dep_key)
        return tuple(sorted(keys))

    def describe(self, pkg_dirs: Iterable[Path]) -> list[PackageDescriptor]:
        seen: set[Path] = set()
        out: list[PackageDescriptor] = []
        for pkg_dir in pkg_dirs:
            real = pkg_dir.resolve()
            if real in seen:
                continue
            seen.add(real)
            data = self.data(pkg_dir)
            if data is None:
                continue
            descriptor = _descriptor_from(data, pkg_dir, self.edges(pkg_dir, data))
            if descriptor is not None:
                out.append(descriptor)
        logger.debug('packages_resolved', count=len(out))
        return out


def resolve_packages(module_paths: Iterable[str | Path]) -> list[PackageDescriptor]:
    """Descriptors for the packages owning the given module files.

    Args:
        module_paths: Absolute or relative paths of the modules a build
            consumed. First-party paths are ignored.

    Returns:
        One descriptor per distinct package directory.
    """
    roots: dict[Path, None] = {}
    for module_path in module_paths:
        root = package_root_for(module_path)
        if root is not None:
            roots.setdefault(root, None)
    return _Resolver().describe(roots)


def _walk_node_modules(node_modules: Path) -> Iterable[Path]:
    try:
        entries = sorted(node_modules.iterdir())
    except OSError:
        return
    for entry in entries:
        if entry.name.startswith('.') or not entry.is_dir():
            continue
        if entry.name.startswith('@'):
            try:
                candidates = sorted(p for p in entry.iterdir() if p.is_dir())
            except OSError as exc:
                logger.warning('scope_dir_unlistable', path=str(entry), error=str(exc))
                continue
        else:
            candidates = [entry]
        for pkg_dir in candidates:
            if (pkg_dir / 'package.json').is_file():
                yield pkg_dir
                yield from _walk_node_modules(pkg_dir / _NODE_MODULES)


def scan_node_modules(project_dir: Path) -> list[PackageDescriptor]:
    """Descriptors for every package installed under *project_dir*.

    Walks ``node_modules`` recursively, including nested copies.
    Hidden directories such as ``.bin`` are skipped.
    """
    return _Resolver().describe(_walk_node_modules(project_dir / _NODE_MODULES))
