"""OpenAPI to Java model generator package."""

from __future__ import annotations

from .cli import main
from .config import GenerationOptions
from .generator import GenerationRun, generate_code, list_schemas, run_generation
from .model_types import GeneratedUnit, SchemaSummary

__all__ = [
    "GeneratedUnit",
    "GenerationOptions",
    "GenerationRun",
    "SchemaSummary",
    "generate_code",
    "list_schemas",
    "main",
    "run_generation",
]
