"""OpenAPI document loading and schema container lookup."""

from __future__ import annotations

from pathlib import Path

import yaml

from .json_types import JSONObject, JSONValue, OpenAPIDocument


class SpecError(RuntimeError):
    """Raised when input is not a usable OpenAPI document."""


class ParseError(SpecError):
    """Raised when document text cannot be read or parsed."""


def parse_document(text: str) -> OpenAPIDocument:
    """Parse OpenAPI document text (YAML or JSON) into a mapping.

    Args:
        text (str): Raw document text.

    Returns:
        OpenAPIDocument: Parsed document.
    """
    try:
        payload: JSONValue = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ParseError(f"Failed to parse document: {exc}") from exc

    if not isinstance(payload, dict):
        raise SpecError("Invalid OpenAPI/Swagger document: expected a mapping at the top level")
    return payload


def load_document_file(path: Path) -> OpenAPIDocument:
    """Read and parse an OpenAPI document from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ParseError(f"Failed to read OpenAPI file {path}: {exc}") from exc
    return parse_document(text)


def get_schema_container(document: OpenAPIDocument) -> JSONObject:
    """Return the named-schema container for the document's dialect.

    Swagger 2.0 documents keep schemas under ``definitions``; OpenAPI 3.x
    documents under ``components.schemas``. Documents with neither marker,
    or without the container, yield an empty mapping.

    Args:
        document (OpenAPIDocument): Parsed document.

    Returns:
        JSONObject: Schema name to raw schema mapping.
    """
    container: JSONValue = None
    if document.get("swagger"):
        container = document.get("definitions")
    elif document.get("openapi"):
        components = document.get("components")
        if isinstance(components, dict):
            container = components.get("schemas")
    if not isinstance(container, dict):
        return {}
    return container


def get_paths(document: OpenAPIDocument) -> JSONObject:
    """Return the ``paths`` object, empty when absent."""
    paths = document.get("paths")
    return paths if isinstance(paths, dict) else {}
