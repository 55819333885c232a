"""Typed view of the schema subtrees of an OpenAPI document.

Raw schema mappings are converted once, at load time, into a small closed set
of frozen node types. Everything downstream (classification, resolution, type
mapping, synthesis) works on these nodes instead of loosely typed dicts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Optional, TypeAlias, Union

from .json_types import JSONObject, JSONValue, RawSchema
from .naming import ref_name

Number: TypeAlias = Union[int, float]
PropertyNode: TypeAlias = Union[
    "RefProperty", "PrimitiveProperty", "ArrayProperty", "ObjectProperty", "UnknownProperty"
]
CompositionMember: TypeAlias = Union["RefMember", "InlineMember"]


class PrimitiveKind(StrEnum):
    """Scalar ``type`` keywords with a direct Java mapping."""

    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"


_PRIMITIVE_TYPES = frozenset(kind.value for kind in PrimitiveKind)


@dataclass(frozen=True)
class Constraints:
    """Validation keywords carried by a property."""

    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    minimum: Optional[Number] = None
    maximum: Optional[Number] = None
    exclusive_minimum: Optional[Union[bool, Number]] = None
    exclusive_maximum: Optional[Union[bool, Number]] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: bool = False


@dataclass(frozen=True)
class RefProperty:
    """Property that points at another named schema."""

    ref_name: str


@dataclass(frozen=True)
class PrimitiveProperty:
    """String, integer, number or boolean property."""

    kind: PrimitiveKind
    format: Optional[str] = None
    constraints: Constraints = field(default_factory=Constraints)
    enum: Optional[tuple[JSONValue, ...]] = None


@dataclass(frozen=True)
class ArrayProperty:
    """Array property; ``items`` is ``None`` when the document omits it."""

    items: Optional[PropertyNode]
    constraints: Constraints = field(default_factory=Constraints)


@dataclass(frozen=True)
class ObjectProperty:
    """Object property without further structure of its own."""


@dataclass(frozen=True)
class UnknownProperty:
    """Property whose ``type`` keyword is missing or not recognised."""

    type_name: Optional[str] = None


@dataclass(frozen=True)
class RefMember:
    """``allOf`` member that references a named schema."""

    ref_name: str


@dataclass(frozen=True)
class InlineMember:
    """``allOf`` member written inline."""

    properties: dict[str, PropertyNode]
    required: tuple[str, ...] = ()
    all_of: tuple[CompositionMember, ...] = ()


@dataclass(frozen=True)
class SchemaNode:
    """One named schema of the document."""

    name: str
    description: Optional[str]
    properties: dict[str, PropertyNode]
    required: tuple[str, ...]
    all_of: tuple[CompositionMember, ...]
    enum: Optional[tuple[JSONValue, ...]]
    raw: RawSchema

    @property
    def is_enum(self) -> bool:
        """Whether the schema declares an ``enum`` list."""
        return self.enum is not None


def parse_schema(name: str, raw: JSONValue) -> SchemaNode:
    """Convert one raw named schema into a :class:`SchemaNode`.

    Args:
        name (str): Schema name under the document's schema container.
        raw (JSONValue): Parsed schema mapping. Non-mapping values produce an
            empty schema.

    Returns:
        SchemaNode: Typed schema node.
    """
    node: RawSchema = raw if isinstance(raw, dict) else {}
    description = node.get("description")
    enum_values = node.get("enum")
    return SchemaNode(
        name=name,
        description=description if isinstance(description, str) else None,
        properties=_parse_properties(node.get("properties")),
        required=_parse_required(node.get("required")),
        all_of=_parse_all_of(node.get("allOf")),
        enum=tuple(enum_values) if isinstance(enum_values, list) else None,
        raw=node,
    )


def parse_property(raw: JSONValue) -> PropertyNode:
    """Convert one raw property schema into its typed variant."""
    if not isinstance(raw, dict):
        return UnknownProperty()

    target = ref_name(raw.get("$ref"))
    if target is not None:
        return RefProperty(ref_name=target)

    type_name = _type_keyword(raw.get("type"))
    if type_name == "array":
        items = raw.get("items")
        return ArrayProperty(
            items=parse_property(items) if isinstance(items, dict) else None,
            constraints=_parse_constraints(raw),
        )
    if type_name in _PRIMITIVE_TYPES:
        format_value = raw.get("format")
        enum_values = raw.get("enum")
        return PrimitiveProperty(
            kind=PrimitiveKind(type_name),
            format=format_value if isinstance(format_value, str) else None,
            constraints=_parse_constraints(raw),
            enum=tuple(enum_values) if isinstance(enum_values, list) else None,
        )
    if type_name == "object" or (type_name is None and isinstance(raw.get("properties"), dict)):
        return ObjectProperty()
    return UnknownProperty(type_name=type_name)


def _type_keyword(value: JSONValue) -> Optional[str]:
    # OpenAPI 3.1 allows ``type: [string, "null"]``.
    if isinstance(value, list):
        candidates = [item for item in value if isinstance(item, str) and item != "null"]
        return candidates[0] if candidates else None
    if isinstance(value, str) and value:
        return value
    return None


def _parse_properties(raw: JSONValue) -> dict[str, PropertyNode]:
    if not isinstance(raw, dict):
        return {}
    return {
        name: parse_property(prop) for name, prop in raw.items() if isinstance(name, str)
    }


def _parse_required(raw: JSONValue) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(name for name in raw if isinstance(name, str))


def _parse_all_of(raw: JSONValue) -> tuple[CompositionMember, ...]:
    if not isinstance(raw, list):
        return ()
    members: list[CompositionMember] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        target = ref_name(item.get("$ref"))
        if target is not None:
            members.append(RefMember(ref_name=target))
            continue
        members.append(
            InlineMember(
                properties=_parse_properties(item.get("properties")),
                required=_parse_required(item.get("required")),
                all_of=_parse_all_of(item.get("allOf")),
            )
        )
    return tuple(members)


def _parse_constraints(raw: JSONObject) -> Constraints:
    return Constraints(
        min_length=_int_or_none(raw.get("minLength")),
        max_length=_int_or_none(raw.get("maxLength")),
        pattern=raw.get("pattern") if isinstance(raw.get("pattern"), str) else None,
        minimum=_number_or_none(raw.get("minimum")),
        maximum=_number_or_none(raw.get("maximum")),
        exclusive_minimum=_bound_flag(raw.get("exclusiveMinimum")),
        exclusive_maximum=_bound_flag(raw.get("exclusiveMaximum")),
        min_items=_int_or_none(raw.get("minItems")),
        max_items=_int_or_none(raw.get("maxItems")),
        unique_items=raw.get("uniqueItems") is True,
    )


def _int_or_none(value: JSONValue) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _number_or_none(value: JSONValue) -> Optional[Number]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


def _bound_flag(value: JSONValue) -> Optional[Union[bool, Number]]:
    if isinstance(value, bool):
        return value
    return _number_or_none(value)
