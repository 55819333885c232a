"""Naming helpers for Java identifiers."""

from __future__ import annotations

import re
from typing import Optional

from .json_types import JSONValue

_SEPARATED_CHAR_RE = re.compile(r"(?:^|[-_])(\w)", re.ASCII)
_SEPARATOR_RE = re.compile(r"[-_]")
_ENUM_CONSTANT_SANITIZE_RE = re.compile(r"[^a-zA-Z0-9_]")
_IDENTIFIER_SANITIZE_RE = re.compile(r"[^a-zA-Z0-9_$-]+")

JAVA_RESERVED_WORDS = frozenset(
    {
        "abstract", "assert", "boolean", "break", "byte", "case", "catch", "char",
        "class", "const", "continue", "default", "do", "double", "else", "enum",
        "extends", "false", "final", "finally", "float", "for", "goto", "if",
        "implements", "import", "instanceof", "int", "interface", "long", "native",
        "new", "null", "package", "private", "protected", "public", "return",
        "short", "static", "strictfp", "super", "switch", "synchronized", "this",
        "throw", "throws", "transient", "true", "try", "void", "volatile", "while",
        "_",
    }
)


def to_upper_camel(raw: str) -> str:
    """Convert ``snake_case``/``kebab-case`` text into an UpperCamel class name.

    Args:
        raw (str): Text to convert.

    Returns:
        str: Converted text, empty for empty input.
    """
    if not raw:
        return ""
    upper = _SEPARATED_CHAR_RE.sub(lambda match: match.group(1).upper(), raw)
    return _SEPARATOR_RE.sub("", upper)


def to_lower_camel(raw: str) -> str:
    """Convert text into a lowerCamel field or parameter name.

    Args:
        raw (str): Text to convert.

    Returns:
        str: Converted text, empty for empty input.
    """
    upper = to_upper_camel(raw)
    return upper[:1].lower() + upper[1:]


def capitalize_first(raw: str) -> str:
    """Upper-case only the first character of ``raw``."""
    return raw[:1].upper() + raw[1:]


def enum_constant_name(value: str) -> str:
    """Turn an enum literal into a Java constant name."""
    text = _ENUM_CONSTANT_SANITIZE_RE.sub("_", value).upper()
    if not text:
        return "EMPTY"
    if text[0].isdigit():
        text = f"_{text}"
    return text


def ref_name(ref: JSONValue) -> Optional[str]:
    """Return the schema name a ``$ref`` points at."""
    if not isinstance(ref, str) or not ref:
        return None
    name = ref.rsplit("/", maxsplit=1)[-1]
    return name or None


def field_identifier(raw: str) -> str:
    """Convert a property name into a legal Java field identifier.

    Characters that cannot appear in a Java identifier act as word separators,
    a leading digit gets a ``_`` prefix, and reserved words get a ``_`` suffix.

    Args:
        raw (str): Property name as written in the document.

    Returns:
        str: lowerCamel Java identifier.
    """
    text = to_lower_camel(_IDENTIFIER_SANITIZE_RE.sub("_", raw).strip("_")) or "value"
    if text[0].isdigit():
        text = f"_{text}"
    if text in JAVA_RESERVED_WORDS:
        text = f"{text}_"
    return text
