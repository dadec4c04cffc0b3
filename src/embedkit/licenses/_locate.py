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

r"""Pick the license file out of a package root directory listing.

Recognized names (case-insensitive)::

    LICENSE            LICENSE.txt        LICENSE.md
    LICENSE-MIT        LICENSE-MIT.txt    license-apache.md

Rejected::

    LICENSES           license-info.json  MY-LICENSE.txt

When several files match, the preference order is:

    1. ``LICENSE`` with no extension.
    2. ``LICENSE.txt`` / ``LICENSE.md``.
    3. Qualified variants (``LICENSE-MIT.txt``, ...).
    4. Ordinal order of the file name.

This module performs no I/O; the caller supplies the listing.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

__all__ = [
    'LICENSE_FILE_RE',
    'is_license_file',
    'locate_license_file',
]

# ``license``, then an optional ``-qualifier`` (no dots, separators or whitespace),
# then an optional ``.txt`` / ``.md`` extension. Always used with fullmatch.
LICENSE_FILE_RE: re.Pattern[str] = re.compile(
    r'''
    license
    (?P<qualifier>-[^./\\\s]+)?
    (?P<ext>\.(?:txt|md))?
    ''',
    re.IGNORECASE | re.VERBOSE,
)


def is_license_file(name: str) -> bool:
    """Return ``True`` if *name* is a recognized license file name."""
    return LICENSE_FILE_RE.fullmatch(name) is not None


def _rank(name: str) -> tuple[int, str]:
    m = LICENSE_FILE_RE.fullmatch(name)
    if m is None:
        tier = 3
    elif m.group('qualifier'):
        tier = 2
    elif m.group('ext'):
        tier = 1
    else:
        tier = 0
    return (tier, name)


def locate_license_file(listing: Iterable[str]) -> str | None:
    """Choose the license file from a package root listing.

    Args:
        listing: File names in the package root (no paths).

    Returns:
        The chosen file name, or ``None`` if nothing matches.
    """
    candidates = [name for name in listing if is_license_file(name)]
    if not candidates:
        return None
    return min(candidates, key=_rank)
