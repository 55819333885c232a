"""Generation options and configuration file loading."""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

_CONFIG_SECTION = "java"


class ConfigError(RuntimeError):
    """Raised when generation options cannot be loaded or validated."""


class ValidationApi(StrEnum):
    """Bean Validation namespace to import annotations from."""

    JAKARTA = "jakarta"
    JAVAX = "javax"


class DateType(StrEnum):
    """Java type used for ``date`` and ``date-time`` strings."""

    STRING = "String"
    OFFSET_DATE_TIME = "OffsetDateTime"


class EnumType(StrEnum):
    """How enum schemas are rendered."""

    ENUM = "enum"
    STRING = "string"


class GenerationOptions(BaseModel):
    """Options controlling the shape of generated Java classes.

    Keys are accepted both in camelCase (``packageName``) and snake_case
    (``package_name``).
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=False,
    )

    package_name: str = "com.example.model"
    use_lombok: bool = False
    generate_helpers: bool = True
    use_jackson: bool = True
    use_validation_annotations: bool = True
    validation_api: ValidationApi = ValidationApi.JAKARTA
    use_optional: bool = False
    use_boxed_primitives: bool = True
    date_type: DateType = DateType.OFFSET_DATE_TIME
    enum_type: EnumType = EnumType.ENUM


def build_options(values: dict[str, Any]) -> GenerationOptions:
    """Validate a flat option mapping into :class:`GenerationOptions`."""
    try:
        return GenerationOptions.model_validate(values)
    except ValidationError as exc:
        raise ConfigError(f"Invalid generation options: {exc}") from exc


def merge_options(base: GenerationOptions, overrides: dict[str, Any]) -> GenerationOptions:
    """Return ``base`` with every non-``None`` override applied.

    Args:
        base (GenerationOptions): Options to start from.
        overrides (dict[str, Any]): Snake_case option values; ``None`` means
            "not given".

    Returns:
        GenerationOptions: New validated options.
    """
    values = base.model_dump()
    values.update({key: value for key, value in overrides.items() if value is not None})
    return build_options(values)


def load_options(path: Optional[Path]) -> GenerationOptions:
    """Load options from a YAML file, or return defaults when ``path`` is ``None``.

    The file may list options at the top level or nest them under a ``java``
    key.

    Args:
        path (Optional[Path]): Configuration file path.

    Returns:
        GenerationOptions: Validated options.
    """
    if path is None:
        return GenerationOptions()
    try:
        with path.open("r", encoding="utf-8") as handle:
            payload = yaml.safe_load(handle)
    except OSError as exc:
        raise ConfigError(f"Failed to read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML in {path}: {exc}") from exc

    if payload is None:
        return GenerationOptions()
    if not isinstance(payload, dict):
        raise ConfigError(f"Config file {path} must contain a mapping, got {type(payload)!r}")

    section = payload.get(_CONFIG_SECTION, payload)
    if not isinstance(section, dict):
        raise ConfigError(f"'{_CONFIG_SECTION}' section in {path} must be a mapping")
    return build_options(section)
