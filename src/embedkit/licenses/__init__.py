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

"""License file location, copyright extraction and copyleft classification."""

from embedkit.licenses._classify import (
    COPYLEFT_LICENSES,
    PERMISSIVE_LICENSES,
    Classification,
    classify_graph,
    classify_license,
    is_copyleft_license,
)
from embedkit.licenses._copyright import COPYRIGHT_RE, extract_copyright
from embedkit.licenses._locate import LICENSE_FILE_RE, is_license_file, locate_license_file

__all__ = [
    'COPYLEFT_LICENSES',
    'COPYRIGHT_RE',
    'Classification',
    'LICENSE_FILE_RE',
    'PERMISSIVE_LICENSES',
    'classify_graph',
    'classify_license',
    'extract_copyright',
    'is_copyleft_license',
    'is_license_file',
    'locate_license_file',
]
