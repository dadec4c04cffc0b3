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

r"""Pipeline entry point: descriptors in, build assets and warnings out.

Stages::

    PackageDescriptor ─┬─ locate license file ─ read ─ extract copyright   (parallel, bounded)
                       └─ classify (whole graph, after all reads)
                                     │
                            build manifest ─ serialize ─ [render notices]

License files are read concurrently, at most ``config.concurrency`` at a
time, on worker threads. Each package's read is independent; a failed
read only clears that package's license fields. Classification needs
the whole dependency graph and runs once all reads are done. Nothing in
here raises for a per-package problem.

Usage::

    from embedkit.config import EmbedConfig
    from embedkit.pipeline import run_pipeline, write_assets
    from embedkit.resolver import scan_node_modules

    result = run_pipeline(scan_node_modules(Path('.')), EmbedConfig(generate_license_file=True))
    for warning in result.warnings:
        print(warning)
    write_assets(result, Path('dist'))
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Protocol

from embedkit._types import Diagnostic, Manifest, PackageDescriptor, PackageKey, PackageRecord
from embedkit.config import DEFAULT_CONCURRENCY, EmbedConfig
from embedkit.licenses import classify_graph, extract_copyright, locate_license_file
from embedkit.logging import get_logger
from embedkit.manifest import build_manifest, serialize_manifest
from embedkit.notices import generate_notices

__all__ = [
    'BuildResult',
    'FileReader',
    'LicenseFile',
    'LocalFileReader',
    'collect_license_files',
    'run_pipeline',
    'run_pipeline_async',
    'write_assets',
]

logger = get_logger(__name__)


class FileReader(Protocol):
    """Reads license files on behalf of the pipeline."""

    def read_text(self, path: Path) -> str:
        """Return the text content of *path*."""  # pragma: no cover
        ...


class LocalFileReader:
    """Reads from the local file system as UTF-8.

    Undecodable bytes are replaced rather than failing the read.
    """

    def read_text(self, path: Path) -> str:
        """Return the text content of *path*."""
        return path.read_text(encoding='utf-8', errors='replace')


@dataclass(frozen=True)
class LicenseFile:
    """A located and read license file.

    Attributes:
        path: Path of the file.
        text: Its contents.
        copyright: Extracted copyright line, if any.
    """

    path: str
    text: str
    copyright: str | None = None


@dataclass
class BuildResult:
    """Everything one pipeline run hands back to the host.

    Attributes:
        manifest: The sorted manifest.
        assets: Output file name → file content.
        warnings: Diagnostics for the host's warning sink.
    """

    manifest: Manifest
    assets: dict[str, bytes] = field(default_factory=dict)
    warnings: list[Diagnostic] = field(default_factory=list)


async def collect_license_files(
    descriptors: Iterable[PackageDescriptor],
    *,
    reader: FileReader | None = None,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> dict[PackageKey, LicenseFile]:
    """Locate, read and extract the license file of every package.

    Args:
        descriptors: Packages to process.
        reader: File reader; defaults to :class:`LocalFileReader`.
        concurrency: Maximum number of reads in flight.

    Returns:
        Mapping from package key to :class:`LicenseFile`. Packages with
        no license file, or whose file could not be read, are absent.
    """
    file_reader: FileReader = reader or LocalFileReader()
    sem = asyncio.Semaphore(concurrency)
    results: dict[PackageKey, LicenseFile] = {}

    async def _do_one(descriptor: PackageDescriptor) -> None:
        file_name = locate_license_file(descriptor.root_directory_listing)
        if file_name is None:
            logger.debug('license_file_missing', package=descriptor.name, version=descriptor.version)
            return
        path = descriptor.root_path / file_name
        async with sem:
            try:
                text = await asyncio.to_thread(file_reader.read_text, path)
            except Exception as exc:  # noqa: BLE001
                logger.warning(
                    'license_file_unreadable',
                    package=descriptor.name,
                    version=descriptor.version,
                    path=str(path),
                    error=str(exc),
                    exc_info=True,
                )
                return
        copyright_line = extract_copyright(text)
        if copyright_line is None:
            logger.debug('copyright_not_found', package=descriptor.name, path=str(path))
        results[descriptor.key] = LicenseFile(path=str(path), text=text, copyright=copyright_line)

    await asyncio.gather(*[_do_one(d) for d in descriptors])
    return results


def _prepare(
    descriptors: Iterable[PackageDescriptor],
    config: EmbedConfig,
) -> list[PackageDescriptor]:
    """Drop malformed and filtered-out descriptors, merge duplicates."""
    merged: dict[PackageKey, PackageDescriptor] = {}
    for descriptor in descriptors:
        if not descriptor.name.strip() or not descriptor.version.strip():
            logger.warning('package_metadata_invalid', name=descriptor.name, version=descriptor.version)
            continue
        if config.package_filter is not None and not config.package_filter(descriptor):
            logger.debug('package_filtered_out', package=descriptor.name, version=descriptor.version)
            continue
        existing = merged.get(descriptor.key)
        if existing is None:
            merged[descriptor.key] = descriptor
            continue
        edges = tuple(sorted(set(existing.dependency_edges) | set(descriptor.dependency_edges)))
        merged[descriptor.key] = replace(existing, dependency_edges=edges)
    return list(merged.values())


async def run_pipeline_async(
    descriptors: Iterable[PackageDescriptor],
    config: EmbedConfig | None = None,
    *,
    reader: FileReader | None = None,
) -> BuildResult:
    """Run the full pipeline.

    Args:
        descriptors: Resolved packages from the host build.
        config: Options; defaults to :class:`EmbedConfig`.
        reader: File reader for license files.

    Returns:
        A :class:`BuildResult`. The manifest asset is always present;
        the notices asset only when requested and non-empty.
    """
    config = config or EmbedConfig()
    packages = _prepare(descriptors, config)

    files = await collect_license_files(packages, reader=reader, concurrency=config.concurrency)
    classes = classify_graph(
        {d.key: d.declared_license_id for d in packages},
        {d.key: d.dependency_edges for d in packages},
    )

    records: list[PackageRecord] = []
    for descriptor in packages:
        found = files.get(descriptor.key)
        verdict = classes[descriptor.key]
        records.append(
            PackageRecord(
                name=descriptor.name,
                version=descriptor.version,
                license_id=descriptor.declared_license_id,
                license_file_path=found.path if found else None,
                license_text=found.text if found else None,
                copyright=found.copyright if found else None,
                is_copyleft=verdict.is_copyleft,
                is_transitive_copyleft=verdict.is_transitive_copyleft,
                category=verdict.category,
                author=descriptor.author,
                repository=descriptor.repository,
            )
        )

    manifest = build_manifest(records)
    result = BuildResult(manifest=manifest)
    result.assets[config.output_file_name] = serialize_manifest(manifest)

    if config.generate_license_file:
        document, diagnostics = generate_notices(manifest, config.notices_renderer)
        result.warnings.extend(diagnostics)
        if document is not None:
            result.assets[config.license_file_name] = document.encode('utf-8')

    logger.info(
        'manifest_built',
        packages=len(manifest),
        copyleft=sum(r.is_copyleft for r in manifest.packages),
        transitive_copyleft=sum(r.is_transitive_copyleft for r in manifest.packages),
        assets=sorted(result.assets),
    )
    return result


def run_pipeline(
    descriptors: Iterable[PackageDescriptor],
    config: EmbedConfig | None = None,
    *,
    reader: FileReader | None = None,
) -> BuildResult:
    """Synchronous wrapper around :func:`run_pipeline_async`."""
    return asyncio.run(run_pipeline_async(descriptors, config, reader=reader))


def write_assets(result: BuildResult, out_dir: Path) -> list[Path]:
    """Write every asset in *result* into *out_dir*.

    Returns:
        The written paths, in asset name order.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    written: list[Path] = []
    for name in sorted(result.assets):
        target = out_dir / name
        target.write_bytes(result.assets[name])
        written.append(target)
    return written
