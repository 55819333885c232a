"""Tests for Java source rendering."""

from __future__ import annotations

from openapi_to_java_generator.config import EnumType, GenerationOptions
from openapi_to_java_generator.schema_nodes import parse_schema
from openapi_to_java_generator.synthesizer import synthesize

from .fixture_helpers import fixture_catalog

_DEFAULTS = GenerationOptions()


def test_missing_schema_renders_comment() -> None:
    """Unknown names produce a one-line comment instead of a class."""
    assert synthesize("Ghost", {}, _DEFAULTS) == "// Schema Ghost not found."


def test_enum_schema_renders_java_enum() -> None:
    """Enum schemas become Java enums with Jackson literal mappings."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("pet_status", schemas, _DEFAULTS)
    assert code.strip() == "\n".join(
        [
            "package com.example.model;",
            "",
            "import com.fasterxml.jackson.annotation.JsonProperty;",
            "",
            "public enum PetStatus {",
            '    @JsonProperty("available")',
            "    AVAILABLE,",
            '    @JsonProperty("pending")',
            "    PENDING,",
            '    @JsonProperty("sold-out")',
            "    SOLD_OUT",
            "}",
        ]
    )


def test_enum_without_jackson() -> None:
    """Without Jackson the enum has no imports or annotations."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("pet_status", schemas, GenerationOptions(use_jackson=False))
    assert "import" not in code
    assert "@JsonProperty" not in code
    assert "    AVAILABLE,\n    PENDING,\n    SOLD_OUT\n}" in code


def test_enum_as_string_constants() -> None:
    """The string enum type renders a constants holder class."""
    schemas = fixture_catalog("swagger_store.yaml").schemas
    code = synthesize("LoyaltyLevel", schemas, GenerationOptions(enum_type=EnumType.STRING))
    assert "public final class LoyaltyLevel {" in code
    assert '    public static final String BRONZE = "bronze";' in code
    assert "    private LoyaltyLevel() {" in code


def test_duplicate_enum_constant_names_are_numbered() -> None:
    """Literals that sanitise to the same name stay distinct."""
    schema = parse_schema("Mode", {"type": "string", "enum": ["a-b", "a_b", "A B", True]})
    code = synthesize("Mode", {"Mode": schema}, _DEFAULTS)
    assert "    A_B,\n" in code
    assert "    A_B_2,\n" in code
    assert "    A_B_3,\n" in code
    assert '    @JsonProperty("true")\n    TRUE\n' in code


def test_class_with_defaults() -> None:
    """Default options emit Jackson, validation annotations and accessors."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Pet", schemas, _DEFAULTS, "Request")

    assert code.startswith("package com.example.model;\n\n")
    assert "import jakarta.validation.constraints.NotNull;\n" in code
    assert "import jakarta.validation.constraints.Size;\n" in code
    assert "import java.time.OffsetDateTime;\n" in code
    assert "import java.util.List;\n" in code
    assert "import java.util.Optional;" not in code
    assert "@JsonInclude(JsonInclude.Include.NON_NULL)\npublic class PetRequest {\n" in code
    assert (
        '    @NotNull(message = "name is required")\n'
        '    @Size(min = 1, max = 64, message = "name must be between 1 and 64 characters")\n'
        '    @JsonProperty("name")\n'
        "    private String name;\n"
    ) in code
    assert '    @JsonProperty("born_at")\n    private OffsetDateTime bornAt;\n' in code
    assert "    private PetStatus status;\n" in code
    assert "    private List<String> tags;\n" in code
    assert "    public OffsetDateTime getBornAt() {\n        return bornAt;\n    }\n" in code
    assert "    public void setBornAt(OffsetDateTime bornAt) {\n" in code
    assert code.rstrip().endswith("}")


def test_imports_are_sorted_and_unique() -> None:
    """The import block is sorted with no duplicates."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Order", schemas, _DEFAULTS)
    imports = [line for line in code.splitlines() if line.startswith("import ")]
    assert imports == sorted(set(imports))


def test_excerpt_comment() -> None:
    """The class is preceded by a short excerpt of its source schema."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Address", schemas, _DEFAULTS)
    assert "/*\n Original schema: Address\n {\n" in code
    excerpt = code.split("/*\n", 1)[1].split("*/", 1)[0]
    assert len(excerpt.splitlines()) <= 11


def test_excerpt_cannot_close_comment_early() -> None:
    """A ``*/`` inside the schema text is escaped."""
    schema = parse_schema("Note", {"type": "object", "description": "a */ b"})
    code = synthesize("Note", {"Note": schema}, _DEFAULTS)
    assert code.count("*/") == 1


def test_lombok_replaces_accessors() -> None:
    """Lombok mode adds class annotations and drops hand-written accessors."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Address", schemas, GenerationOptions(use_lombok=True))
    for annotation in ("@Data", "@Builder", "@AllArgsConstructor", "@NoArgsConstructor"):
        assert f"{annotation}\n" in code
    assert "import lombok.Data;" in code
    assert '@Generated("openapi-to-java-generator")' in code
    assert "import jakarta.annotation.Generated;" in code
    assert "getStreet" not in code


def test_helpers_disabled() -> None:
    """Without helpers only fields are emitted."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Address", schemas, GenerationOptions(generate_helpers=False))
    assert "private String street;" in code
    assert "public String getStreet()" not in code


def test_optional_fields() -> None:
    """Optional wrapping applies to non-required fields only."""
    schemas = fixture_catalog("petstore.yaml").schemas
    code = synthesize("Error", schemas, GenerationOptions(use_optional=True))
    assert "private Integer code;" in code
    code = synthesize("Pet", schemas, GenerationOptions(use_optional=True))
    assert "private String name;" in code
    assert "private Optional<Long> id;" in code
    assert "import java.util.Optional;" in code


def test_minimal_options() -> None:
    """Disabling every feature leaves a plain class without imports."""
    schemas = fixture_catalog("petstore.yaml").schemas
    options = GenerationOptions(
        package_name="",
        use_jackson=False,
        use_validation_annotations=False,
        generate_helpers=False,
    )
    code = synthesize("Address", schemas, options)
    assert code.startswith("/*\n")
    assert "import" not in code
    assert "@" not in code.split("*/", 1)[1]


def test_composed_class_contains_inherited_fields() -> None:
    """allOf members are flattened into the generated class."""
    schemas = fixture_catalog("composition.yaml").schemas
    code = synthesize("Dog", schemas, _DEFAULTS, "Response")
    assert "public class DogResponse {" in code
    body = code.split("public class DogResponse {", 1)[1]
    declarations = ("String name", "Integer age", "String breed", "Owner owner")
    positions = [body.index(f"private {decl};") for decl in declarations]
    assert positions == sorted(positions)
    assert '@NotNull(message = "name is required")' in body


def test_rendering_is_deterministic() -> None:
    """Identical inputs give identical output."""
    schemas = fixture_catalog("petstore.yaml").schemas
    assert synthesize("Order", schemas, _DEFAULTS) == synthesize("Order", schemas, _DEFAULTS)


def test_colliding_field_identifiers_are_numbered() -> None:
    """Properties that camel-case to the same identifier get distinct fields."""
    schema = parse_schema(
        "User",
        {
            "type": "object",
            "properties": {"user_id": {"type": "string"}, "userId": {"type": "integer"}},
        },
    )
    code = synthesize("User", {"User": schema}, _DEFAULTS)
    assert '    @JsonProperty("user_id")\n    private String userId;\n' in code
    assert '    @JsonProperty("userId")\n    private Integer userId2;\n' in code
    assert code.count("public String getUserId()") == 1
    assert code.count("public Integer getUserId2()") == 1
