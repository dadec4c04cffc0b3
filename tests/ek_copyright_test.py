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

"""Tests for copyright line extraction."""

from __future__ import annotations

from pathlib import Path

import pytest
from embedkit.licenses import extract_copyright

_NODE_MODULES = Path(__file__).parent / 'fixtures' / 'node_modules'

_FSF = 'Copyright (C) 2007 Free Software Foundation, Inc. <https://fsf.org/>'


def _fixture(package: str, file_name: str) -> str:
    return (_NODE_MODULES / package / file_name).read_text(encoding='utf-8')


class TestFixtureLicenses:
    """Copyright lines from the fake installed packages."""

    def test_apache_license(self) -> None:
        """Test apache license."""
        text = _fixture('fake-package-apache-with-copyleft-dep', 'LICENSE.txt')
        assert extract_copyright(text) == 'Copyright 2023 Fake Package Apache License w/ AGPL Transitive'

    def test_mit_license(self) -> None:
        """Test mit license."""
        text = _fixture('fake-package-mit-license', 'LICENSE-MIT.txt')
        assert extract_copyright(text) == 'Copyright © 2023 FAKE-PACKAGE-MIT-LICENSE'

    def test_agpl_license_upper_case_file(self) -> None:
        """Test agpl license upper case file."""
        text = _fixture('fake-package-agpl-license', 'LICENSE')
        assert extract_copyright(text) == _FSF

    def test_gpl_license_lower_case_file(self) -> None:
        """Test gpl license lower case file."""
        text = _fixture('fake-package-copyleft-license', 'license')
        assert extract_copyright(text) == _FSF


class TestExtractCopyright:
    """Tests for extract_copyright()."""

    @pytest.mark.parametrize(
        'line',
        [
            'Copyright 2023 Fake Package Apache License w/ AGPL Transitive',
            'Copyright © 2023 FAKE-PACKAGE-MIT-LICENSE',
            _FSF,
            'Copyright (c) 2015 Jane Doe',
            'Copyright 2019-2024 The Authors',
        ],
    )
    def test_returns_whole_line(self, line: str) -> None:
        """Test returns whole line."""
        assert extract_copyright(f'Some License\n\n  {line}  \n\nBody text.\n') == line

    def test_first_match_wins(self) -> None:
        """Test first match wins."""
        text = 'Copyright 2020 First Holder\nCopyright 2021 Second Holder\n'
        assert extract_copyright(text) == 'Copyright 2020 First Holder'

    def test_does_not_span_lines(self) -> None:
        """Test does not span lines."""
        text = 'Copyright 2020 Holder\nnext line\n'
        assert extract_copyright(text) == 'Copyright 2020 Holder'

    def test_year_on_next_line_is_not_a_match(self) -> None:
        """Test year on next line is not a match."""
        assert extract_copyright('Copyright\n2020 Holder\n') is None

    def test_skips_yearless_mentions(self) -> None:
        """Test skips yearless mentions."""
        text = 'The above copyright notice.\nCopyright notice applies.\nCopyright 1999 Real Holder\n'
        assert extract_copyright(text) == 'Copyright 1999 Real Holder'

    def test_keyword_is_case_sensitive(self) -> None:
        """Test keyword is case sensitive."""
        assert extract_copyright('COPYRIGHT 2020 Shouting Holder\n') is None
        assert extract_copyright('copyright 2020 quiet holder\n') is None

    def test_crlf_line_endings(self) -> None:
        """Test crlf line endings."""
        assert extract_copyright('MIT\r\nCopyright 2022 Windows User\r\nmore\r\n') == 'Copyright 2022 Windows User'

    def test_unrecognized_phrasing(self) -> None:
        """Test unrecognized phrasing."""
        assert extract_copyright('(c) 2020 Someone\nAll rights reserved.\n') is None
        assert extract_copyright('Copyright: Someone\n') is None

    def test_empty_text(self) -> None:
        """Test empty text."""
        assert extract_copyright('') is None
