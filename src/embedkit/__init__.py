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

"""embedkit: license manifests for the third-party packages embedded in a build.

Usage::

    from embedkit import EmbedConfig, run_pipeline, scan_node_modules

    result = run_pipeline(scan_node_modules(Path('.')), EmbedConfig(generate_license_file=True))
"""

from embedkit._types import Diagnostic, LicenseCategory, Manifest, PackageDescriptor, PackageRecord
from embedkit.config import EmbedConfig, load_config
from embedkit.errors import ConfigError, EmbedKitError
from embedkit.manifest import build_manifest, serialize_manifest, validate_manifest
from embedkit.notices import generate_notices, render_notices_html
from embedkit.pipeline import BuildResult, run_pipeline, run_pipeline_async, write_assets
from embedkit.resolver import resolve_packages, scan_node_modules

__all__ = [
    'BuildResult',
    'ConfigError',
    'Diagnostic',
    'EmbedConfig',
    'EmbedKitError',
    'LicenseCategory',
    'Manifest',
    'PackageDescriptor',
    'PackageRecord',
    'build_manifest',
    'generate_notices',
    'load_config',
    'render_notices_html',
    'resolve_packages',
    'run_pipeline',
    'run_pipeline_async',
    'scan_node_modules',
    'serialize_manifest',
    'validate_manifest',
    'write_assets',
]
