"""
Unit tests for the SDL printer and schema fingerprint.
"""

import pytest

from typegraph import SchemaRegistry, argument, field, print_schema
from typegraph.core.printer import format_value


def comment_schema(orphans=("Comment",)):
    registry = SchemaRegistry()
    registry.define_interface("Node", fields=[field("id", "ID", null=False)])
    registry.define_type("Comment", implements=["Node"], fields=[field("body", str, description="Comment text")])
    registry.define_type("Query", fields=[field("node", "Node", arguments=[argument("id", "ID", required=True)])])
    registry.define_schema(query="Query", orphan_types=orphans)
    return registry.finalize()


class TestPrintSchema:

    def test_reachable_types(self):
        assert print_schema(comment_schema()) == (
            "schema {\n"
            "  query: Query\n"
            "}\n"
            "\n"
            "type Comment implements Node {\n"
            "  id: ID!\n"
            '  "Comment text"\n'
            "  body: String\n"
            "}\n"
            "\n"
            "interface Node {\n"
            "  id: ID!\n"
            "}\n"
            "\n"
            "type Query {\n"
            "  node(id: ID!): Node\n"
            "}\n"
        )

    def test_unreachable_types_omitted(self):
        assert "Comment" not in print_schema(comment_schema(orphans=()))

    def test_deprecation_and_defaults(self):
        registry = SchemaRegistry()
        registry.define_enum("Color", ["RED", "GREEN"])
        registry.define_type(
            "Query",
            fields=[
                field("old_name", str, deprecation_reason="Use name"),
                field("tags", [str], arguments=[argument("first", int, default=10)]),
                field("paint", "Color", arguments=[argument("colors", ["Color"], default=["RED"])]),
            ],
        )
        registry.define_schema(query="Query")

        sdl = print_schema(registry.finalize())

        assert '  oldName: String @deprecated(reason: "Use name")' in sdl
        assert "  tags(first: Int = 10): [String!]" in sdl
        assert 'enum Color {\n  RED\n  GREEN\n}' in sdl

    def test_sample_schema_sections(self, schema):
        sdl = print_schema(schema)

        assert "type Repository implements Node & Starrable {" in sdl
        assert '"Things that can be starred."\ninterface Starrable {' in sdl
        assert "input StarOrder {\n  direction: OrderDirection!\n}" in sdl
        assert "type Gist implements Node & Starrable {" in sdl


class TestFingerprint:

    def test_changes_with_reachable_set(self):
        assert comment_schema().fingerprint != comment_schema(orphans=()).fingerprint

    def test_stable_across_builds(self):
        assert comment_schema().fingerprint == comment_schema().fingerprint


@pytest.mark.parametrize("value,expected", [
    ("DESC", '"DESC"'),
    (10, "10"),
    (True, "true"),
    (None, "null"),
    ([1, 2], "[1, 2]"),
    ({"direction": "ASC"}, '{direction: "ASC"}'),
])
def test_format_value(value, expected):
    assert format_value(value) == expected
