"""Filesystem writers for generated Java sources."""

from __future__ import annotations

import zipfile
from collections.abc import Sequence
from pathlib import Path

from .model_types import GeneratedUnit

_DOCUMENT_SUFFIXES = (".json", ".yaml", ".yml")


class WriteError(RuntimeError):
    """Raised when output files cannot be written."""


def write_units(units: Sequence[GeneratedUnit], output_dir: Path) -> list[Path]:
    """Write one ``<name>.java`` file per unit.

    Args:
        units (Sequence[GeneratedUnit]): Units to write.
        output_dir (Path): Target directory, created when missing.

    Returns:
        list[Path]: Written file paths, in unit order.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(f"Failed to create output directory {output_dir}: {exc}") from exc

    written: list[Path] = []
    for unit in units:
        path = output_dir / unit.file_name
        _write_file(path, unit.code)
        written.append(path)
    return written


def write_archive(units: Sequence[GeneratedUnit], archive_path: Path) -> Path:
    """Bundle all units into one zip archive, one ``<name>.java`` entry each.

    Args:
        units (Sequence[GeneratedUnit]): Units to archive.
        archive_path (Path): Zip file to create or replace.

    Returns:
        Path: The archive path.
    """
    try:
        archive_path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive_path, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for unit in units:
                archive.writestr(unit.file_name, unit.code)
    except OSError as exc:
        raise WriteError(f"Failed to write archive {archive_path}: {exc}") from exc
    return archive_path


def default_archive_name(document_name: str) -> str:
    """Name the archive after the source document, ``petstore.yaml`` -> ``petstore-models.zip``."""
    stem = document_name
    for suffix in _DOCUMENT_SUFFIXES:
        if stem.endswith(suffix):
            stem = stem[: -len(suffix)]
            break
    return f"{stem}-models.zip"


def _write_file(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(f"Failed to write file {path}: {exc}") from exc
