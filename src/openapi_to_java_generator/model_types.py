"""Internal datatypes for classification and generation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .naming import to_upper_camel
from .schema_nodes import PropertyNode, SchemaNode

REQUEST_SUFFIX = "Request"
RESPONSE_SUFFIX = "Response"


@dataclass(frozen=True)
class PropertySummary:
    """Display row for one direct property of a schema."""

    name: str
    type: str
    required: bool


@dataclass(frozen=True)
class SchemaSummary:
    """Schema listing entry annotated with its request/response roles."""

    name: str
    description: Optional[str]
    properties: tuple[PropertySummary, ...]
    is_request: bool
    is_response: bool


@dataclass(frozen=True)
class SchemaCatalog:
    """Typed schema map plus summaries for one loaded document."""

    schemas: dict[str, SchemaNode]
    summaries: tuple[SchemaSummary, ...]

    def summary(self, name: str) -> Optional[SchemaSummary]:
        """Return the summary for ``name`` if the document defines it."""
        for summary in self.summaries:
            if summary.name == name:
                return summary
        return None


@dataclass(frozen=True)
class QualifiedName:
    """Generation identity: a base schema name plus a role suffix."""

    base_name: str
    suffix: str = ""

    def __str__(self) -> str:
        return to_upper_camel(self.base_name) + self.suffix


@dataclass(frozen=True)
class ResolvedSchema:
    """Flattened field set of a schema after ``allOf`` composition."""

    fields: dict[str, PropertyNode]
    required: frozenset[str]


@dataclass(frozen=True)
class JavaType:
    """Java type text and the classes it needs imported."""

    name: str
    imports: frozenset[str] = frozenset()


@dataclass(frozen=True)
class ValidationDirective:
    """One Bean Validation annotation emitted on a field."""

    annotation: str
    import_name: str


@dataclass(frozen=True)
class GeneratedUnit:
    """One generated Java source file."""

    name: str
    code: str

    @property
    def file_name(self) -> str:
        """File name the unit is written under."""
        return f"{self.name}.java"
