"""Render Java source files for resolved schemas."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

import jinja2

from .config import EnumType, GenerationOptions
from .json_types import JSONValue
from .naming import capitalize_first, enum_constant_name, field_identifier, to_upper_camel
from .resolver import resolve_schema
from .schema_nodes import SchemaNode
from .type_mapping import declared_type, java_string, map_constraints

TEMPLATE_DIR = Path(__file__).parent / "templates"
GENERATOR_NAME = "openapi-to-java-generator"

_EXCERPT_LINES = 10

_LOMBOK_ANNOTATIONS: tuple[str, ...] = (
    "Data",
    "Builder",
    "AllArgsConstructor",
    "NoArgsConstructor",
)
_JSON_PROPERTY_IMPORT = "com.fasterxml.jackson.annotation.JsonProperty"
_JSON_INCLUDE_IMPORT = "com.fasterxml.jackson.annotation.JsonInclude"

_ENVIRONMENT = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=jinja2.StrictUndefined,
)


@dataclass(frozen=True)
class _FieldView:
    name: str
    java_type: str
    annotations: tuple[str, ...]

    @property
    def accessor_suffix(self) -> str:
        return capitalize_first(self.name)


@dataclass(frozen=True)
class _ConstantView:
    name: str
    literal: str


def synthesize(
    schema_name: str,
    schemas: Mapping[str, SchemaNode],
    options: GenerationOptions,
    suffix: str = "",
) -> str:
    """Render the Java source for one schema.

    The result depends only on the arguments, so identical inputs always give
    byte-identical output.

    Args:
        schema_name (str): Name of the schema in ``schemas``.
        schemas (Mapping[str, SchemaNode]): All named schemas of the document.
        options (GenerationOptions): Active generation options.
        suffix (str): Role suffix appended to the class name.

    Returns:
        str: Java source text, or a one-line comment if the schema is unknown.
    """
    schema = schemas.get(schema_name)
    if schema is None:
        return f"// Schema {schema_name} not found."

    class_name = to_upper_camel(schema_name) + suffix
    if schema.is_enum:
        if options.enum_type is EnumType.ENUM:
            return _render_enum(class_name, schema, options)
        return _render_constants(class_name, schema, options)
    return _render_class(class_name, schema, schemas, options)


def _render_class(
    class_name: str,
    schema: SchemaNode,
    schemas: Mapping[str, SchemaNode],
    options: GenerationOptions,
) -> str:
    resolved = resolve_schema(schema, schemas)
    imports: set[str] = set()
    class_annotations: list[str] = []

    if options.use_lombok:
        for annotation in _LOMBOK_ANNOTATIONS:
            imports.add(f"lombok.{annotation}")
            class_annotations.append(f"@{annotation}")
        imports.add(f"{options.validation_api.value}.annotation.Generated")
        class_annotations.append(f'@Generated("{GENERATOR_NAME}")')
    if options.use_jackson:
        imports.update((_JSON_PROPERTY_IMPORT, _JSON_INCLUDE_IMPORT))
        class_annotations.append("@JsonInclude(JsonInclude.Include.NON_NULL)")

    fields: list[_FieldView] = []
    used_identifiers: set[str] = set()
    for name, prop in resolved.fields.items():
        required = name in resolved.required
        java_type = declared_type(prop, required=required, options=options)
        imports.update(java_type.imports)

        annotations: list[str] = []
        if options.use_validation_annotations:
            for directive in map_constraints(name, prop, required=required, options=options):
                annotations.append(directive.annotation)
                imports.add(directive.import_name)
        if options.use_jackson:
            annotations.append(f'@JsonProperty("{java_string(name)}")')

        fields.append(
            _FieldView(
                name=_unique_name(field_identifier(name), used_identifiers),
                java_type=java_type.name,
                annotations=tuple(annotations),
            )
        )

    with_accessors = not options.use_lombok and options.generate_helpers
    return _ENVIRONMENT.get_template("class.java.j2").render(
        package_name=options.package_name,
        imports=sorted(imports),
        excerpt=_schema_excerpt(schema),
        class_annotations=class_annotations,
        class_name=class_name,
        fields=fields,
        accessors=fields if with_accessors else [],
    )


def _render_enum(class_name: str, schema: SchemaNode, options: GenerationOptions) -> str:
    imports = [_JSON_PROPERTY_IMPORT] if options.use_jackson and schema.enum else []
    return _ENVIRONMENT.get_template("enum.java.j2").render(
        package_name=options.package_name,
        imports=imports,
        class_name=class_name,
        constants=_constants(schema),
        use_jackson=options.use_jackson,
    )


def _render_constants(class_name: str, schema: SchemaNode, options: GenerationOptions) -> str:
    return _ENVIRONMENT.get_template("constants.java.j2").render(
        package_name=options.package_name,
        imports=[],
        class_name=class_name,
        constants=_constants(schema),
    )


def _constants(schema: SchemaNode) -> list[_ConstantView]:
    constants: list[_ConstantView] = []
    used_names: set[str] = set()
    for value in schema.enum or ():
        literal = _literal_text(value)
        name = _unique_name(enum_constant_name(literal), used_names, separator="_")
        constants.append(_ConstantView(name=name, literal=java_string(literal)))
    return constants


def _unique_name(name: str, used: set[str], separator: str = "") -> str:
    candidate = name
    index = 2
    while candidate in used:
        candidate = f"{name}{separator}{index}"
        index += 1
    used.add(candidate)
    return candidate


def _literal_text(value: JSONValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _schema_excerpt(schema: SchemaNode) -> list[str]:
    dumped = json.dumps(schema.raw, indent=2, ensure_ascii=False, default=str)
    lines = [f"Original schema: {schema.name}", *dumped.splitlines()[:_EXCERPT_LINES]]
    # Keep the block comment closed only by its own terminator.
    return [line.replace("*/", "*\\/") for line in lines]
