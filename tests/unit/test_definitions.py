"""
Unit tests for the definitions harvester.
"""

from schema_ast.schema.definitions import find_definition_key, get_definitions, index_definitions


class TestGetDefinitions:
    """Test collecting definitions across a document."""

    def test_root_definitions(self):
        """Test top-level definitions are collected."""
        user = {"type": "object"}
        schema = {"definitions": {"user": user}}

        assert get_definitions(schema) == {"user": user}

    def test_nested_definitions(self):
        """Test definitions declared inside nested schemas are collected."""
        species = {"enum": ["cat", "dog"]}
        schema = {
            "definitions": {"user": {"type": "object"}},
            "properties": {
                "pet": {"definitions": {"species": species}},
            },
        }

        definitions = get_definitions(schema)

        assert list(definitions) == ["user", "species"]
        assert definitions["species"] is species

    def test_property_named_definitions_is_not_harvested(self):
        """Test a property called "definitions" is a schema, not a definitions map."""
        schema = {"properties": {"definitions": {"type": "string"}}}

        assert get_definitions(schema) == {}

    def test_enum_values_are_not_walked(self):
        """Test literal data is never mistaken for schemas."""
        schema = {"enum": [{"definitions": {"fake": {}}}]}

        assert get_definitions(schema) == {}

    def test_cyclic_document_terminates(self):
        """Test a self-referencing document is walked once."""
        node = {"definitions": {"leaf": {"type": "string"}}, "properties": {}}
        node["properties"]["self"] = node

        assert list(get_definitions(node)) == ["leaf"]

    def test_later_duplicate_key_wins(self):
        """Test a nested definition overrides a same-named earlier one."""
        inner = {"type": "number"}
        schema = {
            "definitions": {"item": {"type": "string"}, "other": {}},
            "properties": {"nested": {"definitions": {"item": inner}}},
        }

        definitions = get_definitions(schema)

        assert list(definitions) == ["item", "other"]
        assert definitions["item"] is inner

    def test_schema_keywords_are_walked(self):
        """Test definitions under items and combinators are collected."""
        schema = {
            "items": {"definitions": {"entry": {"type": "string"}}},
            "anyOf": [{"definitions": {"choice": {"type": "number"}}}],
        }

        assert list(get_definitions(schema)) == ["entry", "choice"]

    def test_unknown_keyword_is_data(self):
        """Test a definitions map under a vendor keyword is not harvested."""
        real = {"type": "string"}
        schema = {
            "x-meta": {"definitions": {"ghost": {"type": "number"}}},
            "definitions": {"real": real},
        }

        assert get_definitions(schema) == {"real": real}

    def test_schema_map_under_unknown_keyword_is_data(self):
        """Test properties nested in vendor data do not reach schema position."""
        schema = {"x-meta": {"properties": {"p": {"definitions": {"ghost": {}}}}}}

        assert get_definitions(schema) == {}


class TestIndexDefinitions:
    """Test the reverse identity index."""

    def test_lookup_by_identity(self):
        """Test nodes are found by identity, not by value."""
        declared = {"type": "string"}
        lookalike = {"type": "string"}
        schema = {"definitions": {"name": declared}}

        index = index_definitions(schema)

        assert find_definition_key(index, declared) == "name"
        assert find_definition_key(index, lookalike) is None

    def test_first_key_wins_for_aliases(self):
        """Test a node declared under two keys is named after the first."""
        shared = {"type": "string"}
        schema = {"definitions": {"primary": shared, "alias": shared}}

        assert find_definition_key(index_definitions(schema), shared) == "primary"
