"""High-level generator orchestration."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .classifier import build_schema_catalog
from .config import GenerationOptions
from .expander import expand_selection
from .loader import ParseError, SpecError, load_document_file, parse_document
from .model_types import GeneratedUnit, SchemaCatalog, SchemaSummary
from .writer import WriteError, write_archive, write_units

logger = logging.getLogger(__name__)

ERROR_UNIT_NAME = "Error"


@dataclass(frozen=True)
class GenerationRun:
    """Generated units plus what was written for them."""

    units: tuple[GeneratedUnit, ...]
    warnings: tuple[str, ...]
    written_paths: tuple[Path, ...]
    # Set only when ``units`` is the single failure unit, never from unit names.
    failed: bool = False


def list_schemas(spec_text: str) -> tuple[SchemaSummary, ...]:
    """Return the schema summaries of a document, for building a selection."""
    return build_schema_catalog(parse_document(spec_text)).summaries


def generate_code(
    spec_text: str,
    options: GenerationOptions,
    selected_names: Iterable[str],
) -> list[GeneratedUnit]:
    """Generate Java classes for the selected schemas of a document.

    This is the error boundary of the generator: it never raises. Any failure
    while loading, expanding or rendering is logged and returned as a single
    unit named ``Error`` whose code is a comment describing the failure.

    Args:
        spec_text (str): OpenAPI 2.0 or 3.x document text (YAML or JSON).
        options (GenerationOptions): Active generation options.
        selected_names (Iterable[str]): Base schema names to generate.

    Returns:
        list[GeneratedUnit]: Units sorted by qualified name.
    """
    try:
        catalog = build_schema_catalog(parse_document(spec_text))
        return expand_selection(selected_names, catalog, options)
    except Exception as exc:  # noqa: BLE001
        return [_failure_unit(exc)]


def generate_from_catalog(
    catalog: SchemaCatalog,
    options: GenerationOptions,
    selected_names: Iterable[str],
) -> list[GeneratedUnit]:
    """Same as :func:`generate_code` for an already loaded catalog."""
    units, _ = _expand_guarded(catalog, options, selected_names)
    return units


def run_generation(
    *,
    input_path: Path,
    options: GenerationOptions,
    selected_names: Optional[Sequence[str]] = None,
    output_dir: Optional[Path] = None,
    archive_path: Optional[Path] = None,
) -> GenerationRun:
    """Generate Java classes from an OpenAPI file and write them out.

    Args:
        input_path (Path): Path to the OpenAPI document.
        options (GenerationOptions): Active generation options.
        selected_names (Optional[Sequence[str]]): Schemas to generate; all
            schemas of the document when empty or ``None``.
        output_dir (Optional[Path]): Directory for ``<name>.java`` files.
        archive_path (Optional[Path]): Zip archive to write.

    Returns:
        GenerationRun: Units, warnings and written paths.
    """
    document = load_document_file(input_path)
    catalog = build_schema_catalog(document)
    logger.debug("Loaded %d schemas from %s", len(catalog.schemas), input_path)

    warnings: list[str] = []
    if not catalog.schemas:
        warnings.append(f"No schemas found in {input_path}")
    if selected_names:
        selection = list(selected_names)
        unknown = [name for name in selection if catalog.summary(name) is None]
        if unknown:
            warnings.append(f"Unknown schema names ignored: {', '.join(unknown)}")
    else:
        selection = [summary.name for summary in catalog.summaries]

    units, failed = _expand_guarded(catalog, options, selection)
    logger.debug("Generated %d units", len(units))

    written: list[Path] = []
    if output_dir is not None:
        written.extend(write_units(units, output_dir))
    if archive_path is not None:
        written.append(write_archive(units, archive_path))

    return GenerationRun(
        units=tuple(units),
        warnings=tuple(warnings),
        written_paths=tuple(written),
        failed=failed,
    )


def _expand_guarded(
    catalog: SchemaCatalog,
    options: GenerationOptions,
    selected_names: Iterable[str],
) -> tuple[list[GeneratedUnit], bool]:
    try:
        return expand_selection(selected_names, catalog, options), False
    except Exception as exc:  # noqa: BLE001
        return [_failure_unit(exc)], True


def _failure_unit(exc: Exception) -> GeneratedUnit:
    logger.exception("Java generation failed")
    message = str(exc) or type(exc).__name__
    lines = message.splitlines() or [message]
    code = "\n".join(
        [f"// Generation failed: {lines[0]}", *(f"// {line}" for line in lines[1:])]
    )
    return GeneratedUnit(name=ERROR_UNIT_NAME, code=code)


__all__ = [
    "ERROR_UNIT_NAME",
    "GenerationRun",
    "ParseError",
    "SpecError",
    "WriteError",
    "generate_code",
    "generate_from_catalog",
    "list_schemas",
    "run_generation",
]
