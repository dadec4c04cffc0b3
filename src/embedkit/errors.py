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

"""Exceptions raised by embedkit.

The pipeline itself never raises for per-package problems; those
degrade the affected record instead. Only configuration mistakes,
which are detected before any package is processed, are errors.
"""

from __future__ import annotations

__all__ = [
    'ConfigError',
    'EmbedKitError',
]


class EmbedKitError(Exception):
    """Base class for all embedkit errors.

    Attributes:
        hint: Optional actionable suggestion for the user.
    """

    def __init__(self, message: str, *, hint: str = '') -> None:
        self.hint = hint
        super().__init__(message)


class ConfigError(EmbedKitError):
    """Raised when an embedkit configuration table is invalid."""
