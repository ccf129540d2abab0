import pytest

from specguard.parser.flatten import MAX_DEPTH, flatten, map_type


class TestMapType:
    @pytest.mark.parametrize(
        "declared, expected",
        [
            ("string", "string"),
            ("number", "number"),
            ("integer", "number"),
            ("boolean", "boolean"),
            ("array", "array"),
            ("object", "object"),
        ],
    )
    def test_known_types(self, declared, expected):
        assert map_type(declared) == expected

    @pytest.mark.parametrize("declared", [None, "file", "null", "", ["string", "null"]])
    def test_anything_else_is_string(self, declared):
        assert map_type(declared) == "string"


class TestFlatten:
    def test_object_properties_with_required_flags(self):
        schema = {
            "type": "object",
            "required": ["name"],
            "properties": {
                "name": {"type": "string", "description": "Pet name"},
                "age": {"type": "integer", "format": "int32", "default": 1},
                "status": {"type": "string", "enum": ["available", "adopted"]},
            },
        }
        warnings = []
        fields = flatten(schema, warnings)

        assert [f.key for f in fields] == ["name", "age", "status"]
        assert fields[0].required is True
        assert fields[0].label == "Name"
        assert fields[0].description == "Pet name"
        assert fields[1].required is False
        assert fields[1].type == "number"
        assert fields[1].format == "int32"
        assert fields[1].default == 1
        assert fields[2].enum == ["available", "adopted"]
        assert warnings == []

    def test_depth_bound_drops_third_level(self):
        schema = {
            "type": "object",
            "properties": {
                "a": {
                    "type": "object",
                    "properties": {
                        "b": {
                            "type": "object",
                            "properties": {"c": {"type": "string"}},
                        }
                    },
                }
            },
        }
        fields = flatten(schema, [])

        assert [f.key for f in fields] == ["a"]
        b = fields[0].properties
        assert [f.key for f in b] == ["b"]
        assert b[0].properties == []

    def test_beyond_max_depth_returns_empty(self):
        schema = {"type": "object", "properties": {"x": {"type": "string"}}}
        assert flatten(schema, [], MAX_DEPTH) == []
        assert len(flatten(schema, [], MAX_DEPTH - 1)) == 1

    def test_top_level_array_uses_item_schema_at_same_depth(self):
        schema = {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "owner": {"type": "object", "properties": {"name": {"type": "string"}}},
                },
            },
        }
        fields = flatten(schema, [])

        assert fields[0].key == "owner"
        assert [f.key for f in fields[0].properties] == ["name"]

    def test_array_property_builds_item_field(self):
        schema = {
            "type": "object",
            "properties": {
                "tags": {"type": "array", "items": {"type": "string", "enum": ["a", "b"]}},
                "pets": {
                    "type": "array",
                    "items": {"type": "object", "properties": {"id": {"type": "integer"}}},
                },
            },
        }
        tags, pets = flatten(schema, [])

        assert tags.type == "array"
        assert tags.items.key == "item"
        assert tags.items.label == "Item"
        assert tags.items.type == "string"
        assert tags.items.required is False
        assert tags.items.enum == ["a", "b"]
        assert pets.items.type == "object"
        assert [f.key for f in pets.items.properties] == ["id"]

    def test_reference_properties_are_skipped(self):
        schema = {
            "type": "object",
            "properties": {
                "id": {"type": "integer"},
                "owner": {"$ref": "#/components/schemas/Owner"},
                "friends": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
            },
        }
        fields = flatten(schema, [])

        assert [f.key for f in fields] == ["id", "friends"]
        assert fields[1].items is None

    @pytest.mark.parametrize(
        "schema",
        [
            {"type": "string"},
            {"type": "object"},
            {"type": "array"},
            {"$ref": "#/components/schemas/Pet"},
        ],
    )
    def test_non_object_schemas_flatten_to_nothing(self, schema):
        assert flatten(schema, []) == []

    def test_malformed_schema_becomes_warning(self):
        warnings = []
        fields = flatten({"type": "object", "properties": ["not", "a", "mapping"]}, warnings)

        assert fields == []
        assert len(warnings) == 1
        assert warnings[0].startswith("Failed to convert schema:")

    def test_malformed_subtree_only_empties_that_subtree(self):
        schema = {
            "type": "object",
            "properties": {
                "ok": {"type": "string"},
                "bad": {"type": "object", "properties": ["oops"]},
            },
        }
        warnings = []
        fields = flatten(schema, warnings)

        assert [f.key for f in fields] == ["ok", "bad"]
        assert fields[1].properties == []
        assert len(warnings) == 1

    def test_self_referencing_schema_terminates(self):
        node = {"type": "object", "properties": {}}
        node["properties"]["child"] = node
        fields = flatten(node, [])

        assert fields[0].key == "child"
        assert fields[0].properties[0].key == "child"
        assert fields[0].properties[0].properties == []
