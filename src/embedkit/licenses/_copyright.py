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

r"""Extract the copyright line from license text.

The statement is the literal word ``Copyright``, an optional ``©``, ``(C)`` or
``(c)`` marker, a four-digit year and the rest of that line::

    Copyright 2023 Fake Package Apache License w/ AGPL Transitive
    Copyright © 2023 FAKE-PACKAGE-MIT-LICENSE
    Copyright (C) 2007 Free Software Foundation, Inc. <https://fsf.org/>

The whole matched span is returned, trimmed. Year and holder are not
split apart. Only the first statement in the text counts.

Texts whose copyright phrasing does not fit (``Copyright: Jane Doe``,
``(c) 2020 ...`` without the word, a year-less line) yield ``None``;
that is a normal outcome, not an error.
"""

from __future__ import annotations

import re

__all__ = [
    'COPYRIGHT_RE',
    'extract_copyright',
]

# ``[ \t]`` rather than ``\s`` so a match never crosses a line break;
# ``.`` already stops at ``\n``.
COPYRIGHT_RE: re.Pattern[str] = re.compile(
    r'''
    Copyright               # case-sensitive keyword
    [ \t]*
    (?:©|\([Cc]\))?         # optional symbol marker
    [ \t]*
    \d{4}                   # year
    .*                      # rest of the line
    ''',
    re.VERBOSE,
)


def extract_copyright(text: str) -> str | None:
    """Return the first copyright statement in *text*, or ``None``.

    Args:
        text: Raw license file contents.

    Returns:
        The matched statement with surrounding whitespace removed.
    """
    if not text:
        return None
    m = COPYRIGHT_RE.search(text)
    if m is None:
        return None
    return m.group(0).strip()
