import pytest

from tests.starrable import Gist, Repository, User, build_registry
from typegraph import ExecutionContext, FieldExecutor


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def schema(registry):
    return registry.finalize()


@pytest.fixture
def executor(schema):
    return FieldExecutor(schema)


@pytest.fixture
def octocat():
    return User(id=1, login="octocat")


@pytest.fixture
def hubot():
    return User(id=2, login="hubot")


@pytest.fixture
def repo(octocat, hubot):
    return Repository(id=10, name="typegraph", stargazers=[octocat, hubot])


@pytest.fixture
def gist(hubot):
    return Gist(id=20, description="snippets", stargazers=[hubot])


@pytest.fixture
def context(schema, repo, octocat):
    octocat.starred.add(("Repository", repo.id))
    return ExecutionContext(schema=schema, viewer=octocat, values={"repositories": {repo.name: repo}})
