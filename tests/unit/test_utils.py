"""
Unit tests for case conversion and default attribute resolution.
"""

import pytest

from typegraph.core.utils import resolve_attribute, to_camel_case, to_snake_case


@pytest.mark.parametrize("name,expected", [
    ("viewerHasStarred", "viewer_has_starred"),
    ("totalCount", "total_count"),
    ("viewerID", "viewer_id"),
    ("IDToken", "id_token"),
    ("login", "login"),
    ("already_snake", "already_snake"),
])
def test_to_snake_case(name, expected):
    assert to_snake_case(name) == expected


@pytest.mark.parametrize("name,expected", [
    ("viewer_has_starred", "viewerHasStarred"),
    ("order_by", "orderBy"),
    ("id", "id"),
    ("_private_value", "_privateValue"),
])
def test_to_camel_case(name, expected):
    assert to_camel_case(name) == expected


class TestResolveAttribute:

    def test_snake_case_attribute_preferred(self):
        class Viewer:
            viewer_id = 1
            viewerID = 2

        assert resolve_attribute(Viewer(), "viewerID") == 1

    def test_declared_name_fallback(self):
        assert resolve_attribute({"viewerID": 2}, "viewerID") == 2

    def test_missing(self):
        assert resolve_attribute(object(), "login") is None
