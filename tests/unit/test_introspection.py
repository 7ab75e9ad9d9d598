"""
Unit tests for introspection models.
"""

from typegraph import introspect


class TestIntrospect:

    def test_only_reachable_types(self, registry):
        registry.define_type("Organization", implements=["Node"])
        schema = registry.finalize()

        info = introspect(schema)

        assert info.get_type("Organization") is None
        assert info.get_type("Gist") is not None
        assert [t.name for t in info.types] == [t.name for t in schema.reachable_types()]

    def test_roots(self, schema):
        info = introspect(schema)

        assert info.query_type.name == "Query"
        assert info.query_type.kind == "OBJECT"
        assert info.mutation_type is None

    def test_object_type(self, schema):
        repository = introspect(schema).get_type("Repository")

        assert [f.name for f in repository.fields] == ["id", "viewerHasStarred", "stargazers", "name"]
        assert [i.name for i in repository.interfaces] == ["Node", "Starrable"]
        assert repository.possible_types is None
        assert repository.enum_values is None

    def test_wrapped_type_refs(self, schema):
        connection = introspect(schema).get_type("StargazerConnection")
        nodes = next(f for f in connection.fields if f.name == "nodes")

        assert nodes.type.kind == "NON_NULL"
        assert nodes.type.of_type.kind == "LIST"
        assert nodes.type.of_type.of_type.kind == "NON_NULL"
        assert nodes.type.of_type.of_type.of_type.name == "User"

    def test_interface_possible_types(self, schema):
        starrable = introspect(schema).get_type("Starrable")

        assert starrable.kind == "INTERFACE"
        assert starrable.description == "Things that can be starred."
        assert [t.name for t in starrable.possible_types] == ["Gist", "Repository"]

    def test_enum_and_input(self, schema):
        info = introspect(schema)

        assert [v.name for v in info.get_type("OrderDirection").enum_values] == ["ASC", "DESC"]
        assert [f.name for f in info.get_type("StarOrder").input_fields] == ["direction"]

    def test_camel_case_dump(self, schema):
        data = introspect(schema).model_dump(by_alias=True)

        assert data["queryType"] == {"kind": "OBJECT", "name": "Query", "ofType": None}
        starrable = next(t for t in data["types"] if t["name"] == "Starrable")
        stargazers = next(f for f in starrable["fields"] if f["name"] == "stargazers")
        assert "possibleTypes" in starrable
        assert stargazers["isDeprecated"] is False
        assert [a["name"] for a in stargazers["args"]] == ["orderBy", "first", "after", "last", "before"]
