"""Map typed property nodes to Java types and validation annotations."""

from __future__ import annotations

from typing import Optional, Union

from .config import DateType, GenerationOptions
from .model_types import JavaType, ValidationDirective
from .naming import to_lower_camel, to_upper_camel
from .schema_nodes import (
    ArrayProperty,
    Number,
    ObjectProperty,
    PrimitiveKind,
    PrimitiveProperty,
    PropertyNode,
    RefProperty,
    UnknownProperty,
)

_BOXED_TYPES: dict[str, str] = {
    "boolean": "Boolean",
    "double": "Double",
    "float": "Float",
    "int": "Integer",
    "long": "Long",
}
_DATE_FORMATS = {"date", "date-time"}

_LIST_IMPORT = "java.util.List"
_OPTIONAL_IMPORT = "java.util.Optional"
_BIG_DECIMAL_IMPORT = "java.math.BigDecimal"
_OFFSET_DATE_TIME_IMPORT = "java.time.OffsetDateTime"
_UNIQUE_ELEMENTS_IMPORT = "org.hibernate.validator.constraints.UniqueElements"
_JAVA_INT_MIN = -(2**31)
_JAVA_INT_MAX = 2**31 - 1
_JAVA_LONG_MIN = -(2**63)
_JAVA_LONG_MAX = 2**63 - 1

_UUID_PATTERN = "^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"
_IPV4_PATTERN = (
    r"^((25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}"
    r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)$"
)
_IPV4_OCTET = r"(25[0-5]|(2[0-4]|1{0,1}[0-9]){0,1}[0-9])"
_IPV6_PATTERN = "|".join(
    (
        "([0-9a-fA-F]{1,4}:){7,7}[0-9a-fA-F]{1,4}",
        "([0-9a-fA-F]{1,4}:){1,7}:",
        "([0-9a-fA-F]{1,4}:){1,6}:[0-9a-fA-F]{1,4}",
        "([0-9a-fA-F]{1,4}:){1,5}(:[0-9a-fA-F]{1,4}){1,2}",
        "([0-9a-fA-F]{1,4}:){1,4}(:[0-9a-fA-F]{1,4}){1,3}",
        "([0-9a-fA-F]{1,4}:){1,3}(:[0-9a-fA-F]{1,4}){1,4}",
        "([0-9a-fA-F]{1,4}:){1,2}(:[0-9a-fA-F]{1,4}){1,5}",
        "[0-9a-fA-F]{1,4}:((:[0-9a-fA-F]{1,4}){1,6})",
        ":((:[0-9a-fA-F]{1,4}){1,7}|:)",
        "fe80:(:[0-9a-fA-F]{0,4}){0,4}%[0-9a-zA-Z]{1,}",
        rf"::(ffff(:0{{1,4}}){{0,1}}:){{0,1}}({_IPV4_OCTET}\.){{3,3}}{_IPV4_OCTET}",
        rf"([0-9a-fA-F]{{1,4}}:){{1,4}}:({_IPV4_OCTET}\.){{3,3}}{_IPV4_OCTET}",
    )
)

# format -> (regex, message suffix)
_FORMAT_PATTERNS: dict[str, tuple[str, str]] = {
    "uuid": (_UUID_PATTERN, "must be a valid UUID"),
    "ipv4": (_IPV4_PATTERN, "must be a valid IPv4 address"),
    "ipv6": (_IPV6_PATTERN, "must be a valid IPv6 address"),
}


def boxed(type_name: str) -> str:
    """Return the wrapper type for a Java primitive, other names unchanged."""
    return _BOXED_TYPES.get(type_name, type_name)


def map_type(prop: PropertyNode, options: GenerationOptions) -> JavaType:
    """Map a property node to the Java type used to declare it.

    Args:
        prop (PropertyNode): Typed property.
        options (GenerationOptions): Active generation options.

    Returns:
        JavaType: Type text plus the imports it needs.
    """
    if isinstance(prop, RefProperty):
        return JavaType(name=to_upper_camel(prop.ref_name))
    if isinstance(prop, PrimitiveProperty):
        return _map_primitive(prop, options)
    if isinstance(prop, ArrayProperty):
        item_type = (
            map_type(prop.items, options) if prop.items is not None else JavaType(name="Object")
        )
        return JavaType(
            name=f"List<{boxed(item_type.name)}>",
            imports=item_type.imports | {_LIST_IMPORT},
        )
    if isinstance(prop, ObjectProperty):
        return JavaType(name="Object")
    if isinstance(prop, UnknownProperty):
        return JavaType(name=to_upper_camel(prop.type_name) if prop.type_name else "Object")
    raise TypeError(f"Unsupported property node: {prop!r}")


def declared_type(prop: PropertyNode, *, required: bool, options: GenerationOptions) -> JavaType:
    """Map a field's type, wrapping it in ``Optional`` when configured.

    Args:
        prop (PropertyNode): Typed property.
        required (bool): Whether the field is in the schema's required set.
        options (GenerationOptions): Active generation options.

    Returns:
        JavaType: Field declaration type.
    """
    java_type = map_type(prop, options)
    if not options.use_optional or required:
        return java_type
    return JavaType(
        name=f"Optional<{boxed(java_type.name)}>",
        imports=java_type.imports | {_OPTIONAL_IMPORT},
    )


def _map_primitive(prop: PrimitiveProperty, options: GenerationOptions) -> JavaType:
    if prop.kind is PrimitiveKind.STRING:
        if prop.format in _DATE_FORMATS and options.date_type is DateType.OFFSET_DATE_TIME:
            return JavaType(name="OffsetDateTime", imports=frozenset({_OFFSET_DATE_TIME_IMPORT}))
        return JavaType(name="String")
    if prop.kind is PrimitiveKind.INTEGER:
        return JavaType(name=_numeric("long" if prop.format == "int64" else "int", options))
    if prop.kind is PrimitiveKind.NUMBER:
        if prop.format in ("double", "float"):
            return JavaType(name=_numeric(prop.format, options))
        return JavaType(name="BigDecimal", imports=frozenset({_BIG_DECIMAL_IMPORT}))
    if prop.kind is PrimitiveKind.BOOLEAN:
        return JavaType(name=_numeric("boolean", options))
    raise TypeError(f"Unsupported primitive kind: {prop.kind!r}")


def _numeric(primitive: str, options: GenerationOptions) -> str:
    return boxed(primitive) if options.use_boxed_primitives else primitive


def map_constraints(
    field_name: str,
    prop: PropertyNode,
    *,
    required: bool,
    options: GenerationOptions,
) -> tuple[ValidationDirective, ...]:
    """Build the validation annotations for one field.

    Directives come in a fixed order: ``@NotNull`` first, then string
    length/pattern/format checks, then array size/uniqueness checks, then
    numeric lower and upper bounds.

    Args:
        field_name (str): Property name as written in the document.
        prop (PropertyNode): Typed property.
        required (bool): Whether the field is in the schema's required set.
        options (GenerationOptions): Active generation options.

    Returns:
        tuple[ValidationDirective, ...]: Annotations with their imports.
    """
    builder = _DirectiveBuilder(
        field_name=to_lower_camel(field_name),
        namespace=f"{options.validation_api.value}.validation.constraints",
    )
    if required:
        builder.constraint("NotNull", builder.message("is required"))

    if isinstance(prop, PrimitiveProperty) and prop.kind is PrimitiveKind.STRING:
        _string_directives(builder, prop)
    elif isinstance(prop, ArrayProperty):
        _array_directives(builder, prop)
    elif isinstance(prop, PrimitiveProperty) and prop.kind in (
        PrimitiveKind.INTEGER,
        PrimitiveKind.NUMBER,
    ):
        _numeric_directives(builder, prop)
    return tuple(builder.directives)


class _DirectiveBuilder:
    def __init__(self, *, field_name: str, namespace: str) -> None:
        self.field_name = field_name
        self._namespace = namespace
        self.directives: list[ValidationDirective] = []

    def constraint(self, annotation: str, arguments: str) -> None:
        self.add(annotation, arguments, import_name=f"{self._namespace}.{annotation}")

    def add(self, annotation: str, arguments: str, *, import_name: str) -> None:
        self.directives.append(
            ValidationDirective(annotation=f"@{annotation}({arguments})", import_name=import_name)
        )

    def message(self, text: str) -> str:
        return f'message = "{java_string(f"{self.field_name} {text}")}"'


def _string_directives(builder: _DirectiveBuilder, prop: PrimitiveProperty) -> None:
    constraints = prop.constraints
    _size_directive(
        builder,
        minimum=constraints.min_length,
        maximum=constraints.max_length,
        between="characters",
        at_least="characters",
        at_most=("cannot be longer than", "characters"),
    )
    if constraints.pattern:
        builder.constraint(
            "Pattern",
            f'regexp = "{java_string(constraints.pattern)}", '
            + builder.message(f"must match the pattern: {constraints.pattern}"),
        )
    if prop.format == "email":
        builder.constraint("Email", builder.message("must be a valid email address"))
    format_pattern = _FORMAT_PATTERNS.get(prop.format or "")
    if format_pattern is not None:
        regexp, message = format_pattern
        builder.constraint(
            "Pattern",
            f'regexp = "{java_string(regexp)}", {builder.message(message)}',
        )


def _array_directives(builder: _DirectiveBuilder, prop: ArrayProperty) -> None:
    constraints = prop.constraints
    _size_directive(
        builder,
        minimum=constraints.min_items,
        maximum=constraints.max_items,
        between="items",
        at_least="items",
        at_most=("cannot contain more than", "items"),
        contain=True,
    )
    if constraints.unique_items:
        builder.add(
            "UniqueElements",
            builder.message("must not contain duplicates"),
            import_name=_UNIQUE_ELEMENTS_IMPORT,
        )


def _size_directive(
    builder: _DirectiveBuilder,
    *,
    minimum: Optional[int],
    maximum: Optional[int],
    between: str,
    at_least: str,
    at_most: tuple[str, str],
    contain: bool = False,
) -> None:
    verb = "must contain" if contain else "must be"
    if minimum is not None and maximum is not None:
        builder.constraint(
            "Size",
            f"min = {minimum}, max = {maximum}, "
            + builder.message(f"{verb} between {minimum} and {maximum} {between}"),
        )
    elif minimum is not None:
        builder.constraint(
            "Size",
            f"min = {minimum}, " + builder.message(f"{verb} at least {minimum} {at_least}"),
        )
    elif maximum is not None:
        phrase, unit = at_most
        builder.constraint(
            "Size",
            f"max = {maximum}, " + builder.message(f"{phrase} {maximum} {unit}"),
        )


def _numeric_directives(builder: _DirectiveBuilder, prop: PrimitiveProperty) -> None:
    constraints = prop.constraints
    lower, lower_strict = _bound(constraints.minimum, constraints.exclusive_minimum)
    if lower is not None:
        text = number_text(lower)
        if lower_strict:
            builder.constraint(
                "DecimalMin",
                f'value = "{text}", inclusive = false, '
                + builder.message(f"must be greater than {text}"),
            )
        elif _is_integral(lower):
            builder.constraint(
                "Min",
                f"value = {_long_literal(lower)}, "
                + builder.message(f"must be at least {text}"),
            )
        else:
            builder.constraint(
                "DecimalMin", f'value = "{text}", ' + builder.message(f"must be at least {text}")
            )

    upper, upper_strict = _bound(constraints.maximum, constraints.exclusive_maximum)
    if upper is not None:
        text = number_text(upper)
        if upper_strict:
            builder.constraint(
                "DecimalMax",
                f'value = "{text}", inclusive = false, '
                + builder.message(f"must be less than {text}"),
            )
        elif _is_integral(upper):
            builder.constraint(
                "Max",
                f"value = {_long_literal(upper)}, "
                + builder.message(f"must be at most {text}"),
            )
        else:
            builder.constraint(
                "DecimalMax", f'value = "{text}", ' + builder.message(f"must be at most {text}")
            )


def _bound(
    value: Optional[Number],
    exclusive: Optional[Union[bool, Number]],
) -> tuple[Optional[Number], bool]:
    if value is not None:
        return value, bool(exclusive)
    # OpenAPI 3.1 puts the strict bound itself in exclusiveMinimum/exclusiveMaximum.
    if exclusive is not None and not isinstance(exclusive, bool):
        return exclusive, True
    return None, False


def _is_integral(value: Number) -> bool:
    # @Min/@Max take a Java long.
    whole = isinstance(value, int) or value.is_integer()
    return whole and _JAVA_LONG_MIN <= value <= _JAVA_LONG_MAX


def _long_literal(value: Number) -> str:
    text = number_text(value)
    return text if _JAVA_INT_MIN <= value <= _JAVA_INT_MAX else f"{text}L"


def number_text(value: Number) -> str:
    """Render a bound the way it appears in Java source, ``10.0`` as ``10``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def java_string(text: str) -> str:
    """Escape text for use inside a Java string literal."""
    return text.replace("\\", "\\\\").replace('"', '\\"')
