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

"""Shared leaf-level types used across embedkit.

This module must have **zero** imports from other ``embedkit``
modules to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path

__all__ = [
    'Diagnostic',
    'LicenseCategory',
    'Manifest',
    'PackageDescriptor',
    'PackageKey',
    'PackageRecord',
]

# ``(name, version)``: the identity of a package within one build.
PackageKey = tuple[str, str]


class LicenseCategory(str, enum.Enum):
    """Notice grouping for a package's license."""

    PERMISSIVE = 'permissive'
    COPYLEFT = 'copyleft'
    TRANSITIVE_COPYLEFT = 'transitive-copyleft'
    UNKNOWN = 'unknown'


@dataclass(frozen=True)
class PackageDescriptor:
    """A resolved package as supplied by the host build.

    Attributes:
        name: Package identifier (may be scoped, e.g. ``@scope/name``).
        version: Resolved version string.
        root_path: Install directory of the package. License files are
            read relative to it.
        root_directory_listing: File names present in *root_path*.
        declared_license_id: License string from package metadata, or
            ``None`` if the package declares none.
        dependency_edges: ``(name, version)`` keys of the packages this
            one depends on.
        author: Author from package metadata.
        repository: Repository URL from package metadata.
    """

    name: str
    version: str
    root_path: Path = field(default_factory=Path)
    root_directory_listing: tuple[str, ...] = ()
    declared_license_id: str | None = None
    dependency_edges: tuple[PackageKey, ...] = ()
    author: str | None = None
    repository: str | None = None

    @property
    def key(self) -> PackageKey:
        """``(name, version)`` identity of this package."""
        return (self.name, self.version)


@dataclass(frozen=True)
class PackageRecord:
    """License metadata for one package, as written to the manifest.

    Attributes:
        name: Package identifier.
        version: Resolved version.
        license_id: Declared license identifier or expression.
        license_file_path: Path of the chosen license file.
        license_text: Raw contents of the license file.
        copyright: Extracted copyright line.
        is_copyleft: ``True`` if the package's own license is copyleft
            or could not be determined.
        is_transitive_copyleft: ``True`` if the package is not copyleft
            itself but something it depends on is.
        category: Notice grouping derived from the two flags above.
        author: Author from package metadata.
        repository: Repository URL from package metadata.
    """

    name: str
    version: str
    license_id: str | None = None
    license_file_path: str | None = None
    license_text: str | None = None
    copyright: str | None = None
    is_copyleft: bool = False
    is_transitive_copyleft: bool = False
    category: LicenseCategory = LicenseCategory.PERMISSIVE
    author: str | None = None
    repository: str | None = None

    @property
    def key(self) -> PackageKey:
        """``(name, version)`` identity of this record."""
        return (self.name, self.version)


@dataclass(frozen=True)
class Manifest:
    """All third-party packages embedded by one build, in sorted order."""

    packages: tuple[PackageRecord, ...] = ()

    def __len__(self) -> int:
        """Return the number of packages."""
        return len(self.packages)

    @property
    def empty(self) -> bool:
        """``True`` if no third-party package was found."""
        return not self.packages


@dataclass(frozen=True)
class Diagnostic:
    """A message for the host's diagnostics sink.

    Attributes:
        severity: ``'warning'`` or ``'error'``.
        message: Human-readable message.
    """

    severity: str
    message: str

    def __str__(self) -> str:
        """Return ``severity: message``."""
        return f'{self.severity}: {self.message}'
