"""Command line interface for OpenAPI to Java generation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Optional

from .classifier import build_schema_catalog
from .config import ConfigError, DateType, EnumType, ValidationApi, load_options, merge_options
from .generator import run_generation
from .loader import SpecError, load_document_file
from .model_types import SchemaSummary
from .writer import WriteError, default_archive_name

_BOOLEAN_FLAGS: tuple[tuple[str, str, str], ...] = (
    ("lombok", "use_lombok", "Lombok annotations instead of accessors"),
    ("helpers", "generate_helpers", "getter/setter generation"),
    ("jackson", "use_jackson", "Jackson annotations"),
    ("validation", "use_validation_annotations", "Bean Validation annotations"),
    ("optional", "use_optional", "Optional<> wrapping of non-required fields"),
    ("boxed", "use_boxed_primitives", "boxed numeric and boolean types"),
)


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI parser."""
    parser = argparse.ArgumentParser(
        prog="openapi-to-java-generator",
        description="Generate Java model classes from OpenAPI/Swagger schemas",
    )
    parser.add_argument("--input", required=True, help="Path to an OpenAPI YAML or JSON file")
    parser.add_argument("--output", help="Directory to write <Name>.java files into")
    parser.add_argument(
        "--archive",
        nargs="?",
        const="",
        default=None,
        help="Write a zip archive; defaults to <input>-models.zip next to the input",
    )
    parser.add_argument(
        "--schema",
        action="append",
        default=[],
        dest="schemas",
        help="Schema to generate (repeatable); all schemas when omitted",
    )
    parser.add_argument("--config", help="YAML file with generation options")
    parser.add_argument(
        "--list", action="store_true", help="List schemas and their roles, then exit"
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    options = parser.add_argument_group("generation options")
    options.add_argument("--package", dest="package_name", help="Java package name")
    options.add_argument(
        "--validation-api",
        choices=[item.value for item in ValidationApi],
        help="Bean Validation namespace",
    )
    options.add_argument(
        "--date-type",
        choices=[item.value for item in DateType],
        help="Java type for date and date-time strings",
    )
    options.add_argument(
        "--enum-type",
        choices=[item.value for item in EnumType],
        help="Render enum schemas as Java enums or string constant holders",
    )
    for flag, dest, description in _BOOLEAN_FLAGS:
        options.add_argument(
            f"--{flag}",
            dest=dest,
            action=argparse.BooleanOptionalAction,
            default=None,
            help=f"Toggle {description}",
        )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Run CLI and return process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    input_path = Path(args.input)
    try:
        if args.list:
            catalog = build_schema_catalog(load_document_file(input_path))
            for summary in catalog.summaries:
                print(format_summary(summary))
            return 0

        options = merge_options(load_options(_optional_path(args.config)), _overrides(args))
        run = run_generation(
            input_path=input_path,
            options=options,
            selected_names=args.schemas,
            output_dir=_optional_path(args.output),
            archive_path=_archive_path(args.archive, input_path),
        )
    except (SpecError, ConfigError, WriteError) as exc:
        parser.error(str(exc))
        return 2

    for warning in run.warnings:
        print(f"Warning: {warning}")

    if run.written_paths:
        for path in run.written_paths:
            print(f"Wrote {path}")
    else:
        for unit in run.units:
            print(f"// ===== {unit.file_name} =====")
            print(unit.code)

    return 1 if run.failed else 0


def format_summary(summary: SchemaSummary) -> str:
    """Render one schema listing line, e.g. ``Order [response] (3 properties)``."""
    roles = [
        role
        for role, flag in (("request", summary.is_request), ("response", summary.is_response))
        if flag
    ]
    role_text = f" [{', '.join(roles)}]" if roles else ""
    count = len(summary.properties)
    noun = "property" if count == 1 else "properties"
    return f"{summary.name}{role_text} ({count} {noun})"


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {
        "package_name": args.package_name,
        "validation_api": args.validation_api,
        "date_type": args.date_type,
        "enum_type": args.enum_type,
    }
    for _, dest, _ in _BOOLEAN_FLAGS:
        overrides[dest] = getattr(args, dest)
    return overrides


def _optional_path(value: Optional[str]) -> Optional[Path]:
    return Path(value) if value else None


def _archive_path(value: Optional[str], input_path: Path) -> Optional[Path]:
    if value is None:
        return None
    if value:
        return Path(value)
    return input_path.with_name(default_archive_name(input_path.name))


if __name__ == "__main__":
    raise SystemExit(main())
