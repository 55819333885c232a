"""Expand a schema selection into generation targets and their dependencies."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field

from .config import GenerationOptions
from .model_types import (
    REQUEST_SUFFIX,
    RESPONSE_SUFFIX,
    GeneratedUnit,
    QualifiedName,
    SchemaCatalog,
)
from .schema_nodes import (
    ArrayProperty,
    CompositionMember,
    InlineMember,
    PropertyNode,
    RefMember,
    RefProperty,
    SchemaNode,
)
from .synthesizer import synthesize

logger = logging.getLogger(__name__)


@dataclass
class ExpansionContext:
    """Per-run expansion state.

    One context belongs to exactly one :func:`expand_selection` call; it is
    never shared between runs.
    """

    schemas: Mapping[str, SchemaNode]
    options: GenerationOptions
    processed: set[str] = field(default_factory=set)
    units: list[GeneratedUnit] = field(default_factory=list)


def expand_selection(
    selected: Iterable[str],
    catalog: SchemaCatalog,
    options: GenerationOptions,
) -> list[GeneratedUnit]:
    """Generate units for the selected schemas and everything they reference.

    A selected schema is generated once per role it plays: ``<Name>Request``
    when it is a request body, ``<Name>Response`` when it is a response body,
    and a bare ``<Name>`` when it is neither. Referenced schemas are always
    generated bare. No qualified name is generated twice.

    Args:
        selected (Iterable[str]): Base schema names chosen by the caller.
        catalog (SchemaCatalog): Schemas and summaries of the document.
        options (GenerationOptions): Active generation options.

    Returns:
        list[GeneratedUnit]: Units sorted by qualified name.
    """
    context = ExpansionContext(schemas=catalog.schemas, options=options)
    for name in selected:
        summary = catalog.summary(name)
        if summary is None:
            logger.debug("Skipping unknown selected schema %s", name)
            continue
        if summary.is_request:
            schedule(QualifiedName(name, REQUEST_SUFFIX), context)
        if summary.is_response:
            schedule(QualifiedName(name, RESPONSE_SUFFIX), context)
        if not summary.is_request and not summary.is_response:
            schedule(QualifiedName(name), context)
    return sorted(context.units, key=lambda unit: unit.name)


def schedule(target: QualifiedName, context: ExpansionContext) -> None:
    """Generate ``target`` and its dependencies unless already generated.

    Unknown or empty schema names are skipped silently.

    Args:
        target (QualifiedName): Schema name and role suffix to generate.
        context (ExpansionContext): Per-run expansion state.
    """
    qualified_name = str(target)
    if not target.base_name or qualified_name in context.processed:
        return
    schema = context.schemas.get(target.base_name)
    if schema is None:
        logger.debug("Skipping reference to unknown schema %s", target.base_name)
        return

    context.processed.add(qualified_name)
    for dependency in schema_dependencies(schema):
        schedule(QualifiedName(dependency), context)

    code = synthesize(target.base_name, context.schemas, context.options, target.suffix)
    context.units.append(GeneratedUnit(name=qualified_name, code=code))


def schema_dependencies(schema: SchemaNode) -> Iterator[str]:
    """Yield the names of schemas referenced by ``schema``, in document order.

    Covers references in direct properties (including array items), ``allOf``
    references, and properties of inline ``allOf`` members, following nested
    ``allOf`` lists inside inline members.
    """
    for prop in schema.properties.values():
        yield from _property_refs(prop)
    yield from _member_refs(schema.all_of)


def _member_refs(members: tuple[CompositionMember, ...]) -> Iterator[str]:
    for member in members:
        if isinstance(member, RefMember):
            yield member.ref_name
        elif isinstance(member, InlineMember):
            for prop in member.properties.values():
                yield from _property_refs(prop)
            yield from _member_refs(member.all_of)


def _property_refs(prop: PropertyNode) -> Iterator[str]:
    if isinstance(prop, RefProperty):
        yield prop.ref_name
    elif isinstance(prop, ArrayProperty) and prop.items is not None:
        yield from _property_refs(prop.items)
