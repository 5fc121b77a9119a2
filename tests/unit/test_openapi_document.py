# tests/unit/test_openapi_document.py
"""
Unit tests for the OpenAPI 3.0 rewrite.
"""

from tracker.openapi import OPENAPI_VERSION, to_openapi_30


class TestToOpenAPI30:
    """Tests for to_openapi_30."""

    def test_sets_version(self):
        document = to_openapi_30({"openapi": "3.1.0", "paths": {}})

        assert document["openapi"] == OPENAPI_VERSION

    def test_scalar_or_null(self):
        document = to_openapi_30({
            "openapi": "3.1.0",
            "components": {"schemas": {"Thing": {"properties": {
                "note": {"anyOf": [{"type": "string"}, {"type": "null"}], "title": "Note"},
            }}}},
        })

        note = document["components"]["schemas"]["Thing"]["properties"]["note"]
        assert note == {"type": "string", "nullable": True, "title": "Note"}

    def test_ref_or_null_is_wrapped(self):
        document = to_openapi_30({
            "openapi": "3.1.0",
            "components": {"schemas": {"Thing": {"properties": {
                "owner": {"anyOf": [{"$ref": "#/components/schemas/User"}, {"type": "null"}]},
            }}}},
        })

        owner = document["components"]["schemas"]["Thing"]["properties"]["owner"]
        assert owner == {"allOf": [{"$ref": "#/components/schemas/User"}], "nullable": True}

    def test_union_keeps_remaining_options(self):
        document = to_openapi_30({
            "openapi": "3.1.0",
            "components": {"schemas": {"Thing": {
                "anyOf": [{"type": "string"}, {"type": "integer"}, {"type": "null"}],
            }}},
        })

        thing = document["components"]["schemas"]["Thing"]
        assert thing == {"anyOf": [{"type": "string"}, {"type": "integer"}], "nullable": True}

    def test_nested_defs_are_hoisted(self):
        """Inline $defs move to components without replacing existing schemas."""
        document = to_openapi_30({
            "openapi": "3.1.0",
            "paths": {"/x": {"put": {"requestBody": {"content": {"application/json": {"schema": {
                "properties": {"status": {"$ref": "#/components/schemas/Status"}},
                "$defs": {
                    "Status": {"enum": ["a", "b"], "type": "string"},
                    "Existing": {"type": "integer"},
                },
            }}}}}}},
            "components": {"schemas": {"Existing": {"type": "string"}}},
        })

        schemas = document["components"]["schemas"]
        body = document["paths"]["/x"]["put"]["requestBody"]["content"]["application/json"]["schema"]
        assert "$defs" not in body
        assert schemas["Status"] == {"enum": ["a", "b"], "type": "string"}
        assert schemas["Existing"] == {"type": "string"}
