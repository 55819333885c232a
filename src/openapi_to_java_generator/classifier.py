"""Schema catalog construction and request/response role classification."""

from __future__ import annotations

from typing import Optional

from .json_types import JSONObject, JSONValue, OpenAPIDocument
from .loader import get_paths, get_schema_container
from .model_types import PropertySummary, SchemaCatalog, SchemaSummary
from .naming import ref_name
from .schema_nodes import SchemaNode, parse_schema

_PATH_ITEM_RESERVED_KEYS = {"parameters"}


def build_schema_catalog(document: OpenAPIDocument) -> SchemaCatalog:
    """Build the typed schema map and role-annotated summaries for a document.

    Args:
        document (OpenAPIDocument): Parsed OpenAPI 2.0 or 3.x document.

    Returns:
        SchemaCatalog: Schemas in document order plus one summary per schema.
    """
    container = get_schema_container(document)
    schemas: dict[str, SchemaNode] = {
        name: parse_schema(name, raw) for name, raw in container.items() if isinstance(name, str)
    }
    request_names, response_names = classify_roles(document)
    summaries = tuple(
        SchemaSummary(
            name=name,
            description=schema.description,
            properties=_property_summaries(schema.raw),
            is_request=name in request_names,
            is_response=name in response_names,
        )
        for name, schema in schemas.items()
    )
    return SchemaCatalog(schemas=schemas, summaries=summaries)


def classify_roles(document: OpenAPIDocument) -> tuple[set[str], set[str]]:
    """Collect schema names used directly as request and as response bodies.

    Only references at the operation boundary count: a body schema that is a
    ``$ref``, or an array whose ``items`` is a ``$ref``. Schemas that are only
    nested inside other schemas are in neither set.

    Args:
        document (OpenAPIDocument): Parsed document.

    Returns:
        tuple[set[str], set[str]]: Request-flavoured and response-flavoured names.
    """
    request_names: set[str] = set()
    response_names: set[str] = set()
    for path_item in get_paths(document).values():
        if not isinstance(path_item, dict):
            continue
        for method, operation in path_item.items():
            if method in _PATH_ITEM_RESERVED_KEYS or not isinstance(operation, dict):
                continue
            if not operation:
                continue
            for schema in _request_body_schemas(operation):
                _add_boundary_ref(schema, request_names)
            for schema in _response_body_schemas(operation):
                _add_boundary_ref(schema, response_names)
    return request_names, response_names


def _request_body_schemas(operation: JSONObject) -> list[JSONValue]:
    schemas = _content_schemas(operation.get("requestBody"))
    parameters = operation.get("parameters")
    if isinstance(parameters, list):
        # Swagger 2.0 request bodies are ``in: body`` parameters.
        for parameter in parameters:
            if isinstance(parameter, dict) and parameter.get("in") == "body":
                schemas.append(parameter.get("schema"))
    return schemas


def _response_body_schemas(operation: JSONObject) -> list[JSONValue]:
    responses = operation.get("responses")
    if not isinstance(responses, dict):
        return []
    schemas: list[JSONValue] = []
    for response in responses.values():
        schemas.extend(_content_schemas(response))
        if isinstance(response, dict) and "schema" in response:
            # Swagger 2.0 responses carry the schema directly.
            schemas.append(response.get("schema"))
    return schemas


def _content_schemas(node: JSONValue) -> list[JSONValue]:
    if not isinstance(node, dict):
        return []
    content = node.get("content")
    if not isinstance(content, dict):
        return []
    return [media.get("schema") for media in content.values() if isinstance(media, dict)]


def _add_boundary_ref(schema: JSONValue, names: set[str]) -> None:
    target = _boundary_ref_name(schema)
    if target is not None:
        names.add(target)


def _boundary_ref_name(schema: JSONValue) -> Optional[str]:
    if not isinstance(schema, dict):
        return None
    if "$ref" in schema:
        return ref_name(schema.get("$ref"))
    items = schema.get("items")
    if schema.get("type") == "array" and isinstance(items, dict):
        return ref_name(items.get("$ref"))
    return None


def _property_summaries(raw: JSONObject) -> tuple[PropertySummary, ...]:
    properties = raw.get("properties")
    if not isinstance(properties, dict):
        return ()
    required = raw.get("required")
    required_names: set[str] = set()
    if isinstance(required, list):
        required_names = {name for name in required if isinstance(name, str)}
    return tuple(
        PropertySummary(
            name=name,
            type=_summary_type(prop),
            required=name in required_names,
        )
        for name, prop in properties.items()
    )


def _summary_type(prop: JSONValue) -> str:
    if not isinstance(prop, dict):
        return "Object"
    target = ref_name(prop.get("$ref"))
    if target is not None:
        return target
    prop_type = prop.get("type")
    if prop_type == "array":
        return f"List<{_summary_type(prop.get('items'))}>"
    if prop_type == "string" and "enum" in prop:
        return "enum"
    if prop.get("format") == "int64":
        return "long"
    return prop_type if isinstance(prop_type, str) and prop_type else "Object"
