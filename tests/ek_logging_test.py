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

"""Tests for embedkit.logging module."""

from __future__ import annotations

import logging

import pytest
from embedkit.logging import _MAX_FIELD_CHARS, configure_logging, get_logger, truncate_long_values


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_default_level_is_info(self) -> None:
        """Default logging level should be INFO."""
        configure_logging()
        assert logging.root.level == logging.INFO

    def test_verbose_sets_debug(self) -> None:
        """Verbose flag should set DEBUG level."""
        configure_logging(verbose=True)
        assert logging.root.level == logging.DEBUG

    def test_quiet_sets_warning(self) -> None:
        """Quiet flag should set WARNING level."""
        configure_logging(quiet=True)
        assert logging.root.level == logging.WARNING

    def test_json_log_does_not_crash(self) -> None:
        """JSON log mode should configure without errors."""
        configure_logging(json_log=True)
        get_logger().info('test_json', key='value')

    def test_json_log_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """EMBEDKIT_JSON_LOG=1 switches to JSON without the flag."""
        monkeypatch.setenv('EMBEDKIT_JSON_LOG', '1')
        configure_logging()
        get_logger('test').warning('env_json', key='value')


class TestTruncateLongValues:
    """Tests for the truncation processor."""

    def test_short_values_untouched(self) -> None:
        """Short strings and non-strings pass through."""
        event = {'event': 'x', 'path': 'LICENSE', 'count': 3, 'flag': None}
        assert truncate_long_values(None, 'info', event) == event

    def test_long_value_shortened(self) -> None:
        """Long strings are cut and annotated with the dropped length."""
        text = 'a' * (_MAX_FIELD_CHARS + 50)
        result = truncate_long_values(None, 'info', {'event': 'read', 'text': text})
        assert result['text'].startswith('a' * _MAX_FIELD_CHARS)
        assert result['text'].endswith('[50 more chars]')

    def test_event_never_truncated(self) -> None:
        """The event name itself is kept whole."""
        name = 'e' * (_MAX_FIELD_CHARS * 2)
        assert truncate_long_values(None, 'info', {'event': name})['event'] == name
