"""Typing aliases for parsed OpenAPI documents.

Documents are loaded with PyYAML and stay plain JSON-compatible values until
``schema_nodes`` converts their schema subtrees into typed nodes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TypeAlias, Union

JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONPrimitive, list["JSONValue"], Mapping[str, "JSONValue"]]
JSONObject: TypeAlias = Mapping[str, JSONValue]

# Whole Swagger 2.0 / OpenAPI 3.x document, and one raw named schema in it.
OpenAPIDocument: TypeAlias = JSONObject
RawSchema: TypeAlias = JSONObject
