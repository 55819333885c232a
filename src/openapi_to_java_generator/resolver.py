"""Flatten ``allOf`` composition into one field set per schema."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .model_types import ResolvedSchema
from .schema_nodes import CompositionMember, InlineMember, PropertyNode, RefMember, SchemaNode


@dataclass
class _ResolutionState:
    fields: dict[str, PropertyNode] = field(default_factory=dict)
    required: set[str] = field(default_factory=set)
    seen: set[str] = field(default_factory=set)


def resolve_schema(schema: SchemaNode, schemas: Mapping[str, SchemaNode]) -> ResolvedSchema:
    """Resolve the effective fields and required names of ``schema``.

    ``allOf`` members are folded depth-first in order, and the schema's own
    properties last, so inherited fields come before subclass fields and a
    later definition of a name replaces an earlier one. Each referenced schema
    is folded at most once per call, which also terminates reference cycles.
    The input nodes are never modified.

    Args:
        schema (SchemaNode): Schema to resolve.
        schemas (Mapping[str, SchemaNode]): All named schemas of the document.

    Returns:
        ResolvedSchema: Ordered fields and the merged required-name set.
    """
    state = _ResolutionState(seen={schema.name})
    _fold(
        all_of=schema.all_of,
        properties=schema.properties,
        required=schema.required,
        schemas=schemas,
        state=state,
    )
    return ResolvedSchema(fields=state.fields, required=frozenset(state.required))


def _fold(
    *,
    all_of: tuple[CompositionMember, ...],
    properties: Mapping[str, PropertyNode],
    required: tuple[str, ...],
    schemas: Mapping[str, SchemaNode],
    state: _ResolutionState,
) -> None:
    for member in all_of:
        if isinstance(member, RefMember):
            target = schemas.get(member.ref_name)
            if target is None or member.ref_name in state.seen:
                continue
            state.seen.add(member.ref_name)
            _fold(
                all_of=target.all_of,
                properties=target.properties,
                required=target.required,
                schemas=schemas,
                state=state,
            )
        elif isinstance(member, InlineMember):
            _fold(
                all_of=member.all_of,
                properties=member.properties,
                required=member.required,
                schemas=schemas,
                state=state,
            )
        else:
            raise TypeError(f"Unsupported allOf member: {member!r}")

    state.fields.update(properties)
    state.required.update(required)
