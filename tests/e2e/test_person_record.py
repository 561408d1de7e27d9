"""
End-to-end test: Person record with enums, tuples, shared definitions and
pattern properties.

This test runs the complete pipeline (validate, dereference, parse) on a
fixture schema and checks the AST a renderer would receive.
"""

import json
import pytest
from pathlib import Path

from schema_ast.schema import ParserOptions, ast_to_dict, dereference, parse
from schema_ast.schema.types import (
    ArrayType,
    EnumType,
    InterfaceType,
    NullType,
    NumberType,
    StringType,
    TupleType,
    UnionType,
)
from schema_ast.validation import validate_schema


FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"
with open(FIXTURES_DIR / "schemas" / "person.json") as f:
    PERSON_SCHEMA = json.load(f)


@pytest.mark.e2e
class TestPersonRecord:
    """Test the person record pipeline."""

    @pytest.fixture
    def ast(self):
        """Parse the fixture with default options."""
        return parse(dereference(PERSON_SCHEMA))

    def test_schema_is_well_formed(self):
        """Test the fixture passes meta-schema validation."""
        assert validate_schema(PERSON_SCHEMA).is_valid is True

    def test_root_interface(self, ast):
        """Test the root is a named interface with members in order."""
        assert isinstance(ast, InterfaceType)
        assert ast.standalone_name == "Person"
        assert [p.key_name for p in ast.properties] == [
            "name",
            "age",
            "status",
            "address",
            "previous_addresses",
            "location",
            "nickname",
            "^x-",
            "[k: string]",
        ]

    def test_required_members(self, ast):
        """Test required flags follow the required list."""
        required = {p.key_name for p in ast.properties if p.is_required}

        assert required == {"name", "status", "[k: string]"}

    def test_member_types(self, ast):
        """Test each member's AST variant."""
        members = {p.key_name: p.ast for p in ast.properties}

        assert isinstance(members["name"], StringType)
        assert members["name"].comment == "Full name."
        assert isinstance(members["age"], NumberType)
        assert isinstance(members["location"], TupleType)
        assert len(members["location"].elements) == 2
        assert isinstance(members["nickname"], UnionType)
        assert [type(m) for m in members["nickname"].members] == [StringType, NullType]
        assert isinstance(members["[k: string]"], NumberType)

    def test_status_enum(self, ast):
        """Test the labelled enum is named after its property."""
        status = ast.properties[2].ast

        assert isinstance(status, EnumType)
        assert status.standalone_name == "Status"
        assert [(m.label, m.ast.value) for m in status.members] == [
            ("Active", "active"),
            ("Suspended", "suspended"),
        ]

    def test_shared_address_definition(self, ast):
        """Test both uses of the address definition share one named node."""
        members = {p.key_name: p.ast for p in ast.properties}
        address = members["address"]

        assert isinstance(address, InterfaceType)
        assert address.standalone_name == "Address"
        assert [(p.key_name, p.is_required) for p in address.properties] == [("street", False), ("city", True)]
        assert isinstance(members["previous_addresses"], ArrayType)
        assert members["previous_addresses"].element is address

    def test_pattern_property_comment(self, ast):
        """Test the pattern property keeps its description and gains a reference note."""
        pattern = ast.properties[7]

        assert pattern.is_pattern_property is True
        assert pattern.ast.comment == (
            "Vendor extension.\n\n"
            "This interface was referenced by `Person`'s JSON-Schema definition\n"
            "via the `patternProperty` \"^x-\"."
        )

    def test_unreachable_definitions(self):
        """Test definitions become trailing members when requested."""
        ast = parse(dereference(PERSON_SCHEMA), ParserOptions(unreachable_definitions=True))

        keys = [p.key_name for p in ast.properties]
        assert keys[-3:] == ["address", "unused_note", "[k: string]"]

        note = ast.properties[-2]
        assert note.is_unreachable_definition is True
        assert note.ast.standalone_name == "UnusedNote"

    def test_json_dump_is_stable(self):
        """Test two independent runs serialize identically."""
        first = json.dumps(ast_to_dict(parse(dereference(PERSON_SCHEMA))), sort_keys=True)
        second = json.dumps(ast_to_dict(parse(dereference(PERSON_SCHEMA))), sort_keys=True)

        assert first == second
