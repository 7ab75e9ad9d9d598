"""
Unit tests for type resolution.
"""

import pytest

from tests.starrable import Gist, Repository, User
from typegraph import (
    ExecutionContext,
    ImpossibleTypeError,
    SchemaDefinitionError,
    SchemaRegistry,
    UnknownTypeError,
    UnresolvableTypeError,
    field,
    resolve_by_class,
)


class Recorder:
    """resolve_type stand-in that records its calls."""

    def __init__(self, result):
        self.result = result
        self.calls = []

    def __call__(self, value, context):
        self.calls.append((value, context))
        return self.result


def feed_registry(interface_resolver=None, default_resolver=None, orphans=("Repository", "Gist")):
    registry = SchemaRegistry()
    registry.define_interface("Starrable", fields=[field("id", "ID", null=False)], resolve_type=interface_resolver)
    registry.define_type("Repository", implements=["Starrable"])
    registry.define_type("Gist", implements=["Starrable"])
    registry.define_type("User", fields=[field("login", str)])
    registry.define_type("Query", fields=[field("starrable", "Starrable"), field("viewer", "User")])
    registry.define_schema(query="Query", orphan_types=orphans, resolve_type=default_resolver)
    return registry.finalize()


class TestResolutionOrder:
    """Interface behavior, then schema default, then failure."""

    def test_interface_behavior_is_authoritative(self):
        default = Recorder("Gist")
        schema = feed_registry(Recorder("Repository"), default)

        resolved = schema.resolve_type(object(), "Starrable")

        assert resolved.name == "Repository"
        assert default.calls == []

    def test_empty_result_falls_back_to_default(self):
        default = Recorder("Gist")
        schema = feed_registry(Recorder(None), default)

        assert schema.resolve_type(object(), "Starrable").name == "Gist"
        assert len(default.calls) == 1

    def test_default_used_without_interface_behavior(self):
        schema = feed_registry(default_resolver=Recorder("Repository"))

        assert schema.resolve_type(object(), "Starrable").name == "Repository"

    def test_nothing_configured(self):
        schema = feed_registry()

        with pytest.raises(UnresolvableTypeError, match="'Starrable'"):
            schema.resolve_type(object(), "Starrable")

    def test_everything_returns_empty(self):
        schema = feed_registry(Recorder(""), Recorder(None))

        with pytest.raises(UnresolvableTypeError):
            schema.resolve_type(object(), "Starrable")

    def test_arguments_passed_through(self):
        recorder = Recorder("Repository")
        schema = feed_registry(recorder)
        value = object()
        context = ExecutionContext(schema=schema, viewer="octocat")

        schema.resolve_type(value, "Starrable", context)

        assert recorder.calls == [(value, context)]

    def test_definition_result_accepted(self):
        holder = {}
        schema = feed_registry(lambda value, ctx: holder["gist"])
        holder["gist"] = schema.get_type("Gist")

        assert schema.resolve_type(object(), "Starrable") is holder["gist"]

    def test_declared_type_may_be_definition(self):
        schema = feed_registry(Recorder("Gist"))

        assert schema.resolve_type(object(), schema.get_type("Starrable")).name == "Gist"

    def test_behavior_errors_propagate(self):
        def broken(value, context):
            raise RuntimeError("boom")

        schema = feed_registry(broken)

        with pytest.raises(RuntimeError, match="boom"):
            schema.resolve_type(object(), "Starrable")


class TestResolutionFailures:
    """Results that are not usable."""

    def test_unknown_name(self):
        schema = feed_registry(Recorder("Organization"))

        with pytest.raises(UnknownTypeError, match="Organization") as exc_info:
            schema.resolve_type(object(), "Starrable")
        assert not isinstance(exc_info.value, UnresolvableTypeError)

    def test_declared_but_unreachable_name(self):
        schema = feed_registry(Recorder("Gist"), orphans=["Repository"])

        with pytest.raises(UnknownTypeError, match="orphan_types"):
            schema.resolve_type(object(), "Starrable")

    def test_type_not_implementing_interface(self):
        schema = feed_registry(Recorder("User"))

        with pytest.raises(ImpossibleTypeError, match="'User' is not a possible type of 'Starrable'"):
            schema.resolve_type(object(), "Starrable")

    def test_object_declared_type_resolves_to_itself(self):
        schema = feed_registry()

        assert schema.resolve_type(object(), "User").name == "User"

    def test_scalar_declared_type(self):
        schema = feed_registry()

        with pytest.raises(SchemaDefinitionError):
            schema.resolve_type("x", "String")

    def test_failed_resolution_leaves_schema_intact(self):
        schema = feed_registry(Recorder("Organization"))
        fingerprint = schema.fingerprint

        with pytest.raises(UnknownTypeError):
            schema.resolve_type(object(), "Starrable")

        assert schema.fingerprint == fingerprint
        assert [t.name for t in schema.possible_types("Starrable")] == ["Gist", "Repository"]


class TestUnions:

    def test_union_resolve_type(self):
        registry = SchemaRegistry()
        registry.define_type("Repository", fields=[field("name", str)])
        registry.define_type("User", fields=[field("login", str)])
        registry.define_union(
            "SearchResult",
            ["Repository", "User"],
            resolve_type=resolve_by_class([(Repository, "Repository"), (User, "User")]),
        )
        registry.define_type("Query", fields=[field("search", ["SearchResult"])])
        registry.define_schema(query="Query")
        schema = registry.finalize()

        assert schema.resolve_type(User(id=1, login="hubot"), "SearchResult").name == "User"
        with pytest.raises(UnresolvableTypeError):
            schema.resolve_type(Gist(id=1, description="x"), "SearchResult")


class TestResolveByClass:

    def test_first_matching_class_wins(self):
        class SpecialRepository(Repository):
            pass

        resolve = resolve_by_class([(SpecialRepository, "Special"), (Repository, "Repository")])

        assert resolve(SpecialRepository(id=1, name="a"), None) == "Special"
        assert resolve(Repository(id=2, name="b"), None) == "Repository"
        assert resolve(object(), None) is None

    def test_sample_schema(self, schema, repo, gist):
        assert schema.resolve_type(repo, "Starrable").name == "Repository"
        assert schema.resolve_type(gist, "Node").name == "Gist"
