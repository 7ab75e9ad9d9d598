"""
Unit tests for FieldExecutor.

Tests cover:
- Composed behaviors invoked per implementing type
- Default attribute resolution
- Argument coercion
- Context passed to behaviors
"""

import pytest

from typegraph import (
    ArgumentError,
    ExecutionContext,
    FieldExecutor,
    FieldNotFoundError,
    SchemaRegistry,
    argument,
    decode_global_id,
    field,
)


def echo_arguments(obj, args, ctx):
    return dict(args)


def executor_for(*fields, behaviors=None):
    registry = SchemaRegistry()
    registry.define_type("Query", fields=list(fields), behaviors=behaviors)
    registry.define_schema(query="Query")
    return FieldExecutor(registry.finalize())


class TestComposedBehaviors:
    """Interface behaviors run on every implementer."""

    def test_viewer_has_starred_repository(self, executor, repo, context):
        assert executor.resolve_field("Repository", "viewerHasStarred", repo, {}, context) is True

    def test_viewer_has_not_starred_gist(self, executor, gist, context):
        assert executor.resolve_field("Gist", "viewerHasStarred", gist, {}, context) is False

    def test_without_viewer(self, executor, schema, repo):
        context = ExecutionContext(schema=schema)

        assert executor.resolve_field("Repository", "viewerHasStarred", repo, {}, context) is False

    def test_stargazers_connection(self, executor, repo, context):
        connection = executor.resolve_field(
            "Repository",
            "stargazers",
            repo,
            {"orderBy": {"direction": "DESC"}, "first": 1},
            context,
        )

        assert [u.login for u in connection["nodes"]] == ["octocat"]
        assert executor.resolve_field("StargazerConnection", "totalCount", connection, {}, context) == 2

    def test_stargazers_ascending(self, executor, repo, context):
        connection = executor.resolve_field(
            "Repository", "stargazers", repo, {"orderBy": {"direction": "ASC"}}, context
        )

        assert [u.login for u in connection["nodes"]] == ["hubot", "octocat"]

    def test_global_id_uses_concrete_type(self, executor, repo, gist, context):
        repo_id = executor.resolve_field("Repository", "id", repo, {}, context)
        gist_id = executor.resolve_field("Gist", "id", gist, {}, context)

        assert decode_global_id(repo_id) == ("Repository", "10")
        assert decode_global_id(gist_id) == ("Gist", "20")

    def test_root_field_with_resolver(self, executor, repo, context):
        assert executor.resolve_field("Query", "repository", None, {"name": "typegraph"}, context) is repo
        assert executor.resolve_field("Query", "repository", None, {"name": "other"}, context) is None

    def test_behavior_errors_propagate(self, executor, repo, schema):
        context = ExecutionContext(schema=schema)

        with pytest.raises(KeyError, match="repositories"):
            executor.resolve_field("Query", "repository", None, {"name": "typegraph"}, context)

    def test_resolve_abstract(self, executor, gist, context):
        assert executor.resolve_abstract(gist, "Starrable", context).name == "Gist"


class TestDefaultResolution:
    """Fields without a behavior read from the parent object."""

    def test_attribute(self, executor, repo):
        assert executor.resolve_field("Repository", "name", repo) == "typegraph"

    def test_mapping_key_in_snake_case(self, executor):
        assert executor.resolve_field("StargazerConnection", "totalCount", {"total_count": 3}) == 3

    def test_mapping_key_as_declared(self, executor):
        assert executor.resolve_field("StargazerConnection", "totalCount", {"totalCount": 4}) == 4

    def test_missing_value_is_none(self, executor):
        assert executor.resolve_field("Query", "viewer", {}) is None

    def test_bound_method_is_called(self):
        class Root:
            def version(self):
                return "1.0"

        executor = executor_for(field("version", str))

        assert executor.resolve_field("Query", "version", Root()) == "1.0"

    def test_unknown_field(self, executor, repo):
        with pytest.raises(FieldNotFoundError):
            executor.resolve_field("Repository", "owner", repo)


class TestArguments:
    """Argument coercion."""

    def test_default_applied(self):
        executor = executor_for(
            field("items", [int], arguments=[argument("first", int, default=10)]),
            behaviors={"items": echo_arguments},
        )

        assert executor.resolve_field("Query", "items", None) == {"first": 10}
        assert executor.resolve_field("Query", "items", None, {"first": 2}) == {"first": 2}

    def test_absent_optional_argument_left_out(self):
        executor = executor_for(
            field("items", [int], arguments=[argument("after", str)]),
            behaviors={"items": echo_arguments},
        )

        assert executor.resolve_field("Query", "items", None) == {}
        assert executor.resolve_field("Query", "items", None, {"after": None}) == {"after": None}

    def test_missing_required_argument(self, executor):
        with pytest.raises(ArgumentError, match="missing required argument 'name'"):
            executor.resolve_field("Query", "repository", None, {})

    def test_null_for_non_null_argument(self, executor):
        with pytest.raises(ArgumentError, match="argument 'name' must not be null"):
            executor.resolve_field("Query", "repository", None, {"name": None})

    def test_unknown_argument(self, executor):
        with pytest.raises(ArgumentError, match=r"unknown arguments \['owner'\]"):
            executor.resolve_field("Query", "repository", None, {"name": "typegraph", "owner": "octocat"})

    def test_camelized_argument_names(self):
        executor = executor_for(
            field("items", [int], arguments=[argument("order_by", str)]),
            behaviors={"items": echo_arguments},
        )

        assert executor.resolve_field("Query", "items", None, {"orderBy": "name"}) == {"orderBy": "name"}
        with pytest.raises(ArgumentError):
            executor.resolve_field("Query", "items", None, {"order_by": "name"})


class TestContext:
    """Context handed to behaviors."""

    def test_context_scoped_to_field(self):
        executor = executor_for(
            field("where", str),
            behaviors={"where": lambda obj, args, ctx: (ctx.parent_type, ctx.field_name)},
        )

        assert executor.resolve_field("Query", "where", None) == ("Query", "where")

    def test_schema_injected_when_missing(self):
        executor = executor_for(
            field("fingerprint", str),
            behaviors={"fingerprint": lambda obj, args, ctx: ctx.schema.fingerprint},
        )
        context = ExecutionContext(viewer="octocat")

        assert executor.resolve_field("Query", "fingerprint", None, {}, context) == executor.schema.fingerprint
        assert context.schema is None

    def test_request_values(self, context, repo):
        assert context["viewer"].login == "octocat"
        assert context["repositories"]["typegraph"] is repo
        assert context.get("missing", "fallback") == "fallback"
        with pytest.raises(KeyError):
            context["missing"]
