"""Tests for ngapigen.parser.resolver."""

from __future__ import annotations

from typing import Any

import pytest

from ngapigen.exceptions import SpecParseError
from ngapigen.parser.resolver import deref, ref_name, resolve_ref


@pytest.fixture()
def root() -> dict[str, Any]:
    return {
        "components": {
            "parameters": {
                "CourseId": {"name": "courseId", "in": "path"},
                "Alias": {"$ref": "#/components/parameters/CourseId"},
                "LoopA": {"$ref": "#/components/parameters/LoopB"},
                "LoopB": {"$ref": "#/components/parameters/LoopA"},
            },
            "schemas": {
                "a/b": {"type": "string"},
                "t~x": {"type": "integer"},
            },
        },
        "servers": [{"url": "https://one"}, {"url": "https://two"}],
    }


class TestResolveRef:
    """JSON Pointer navigation."""

    def test_resolves_component(self, root: dict[str, Any]) -> None:
        assert resolve_ref("#/components/parameters/CourseId", root)["name"] == "courseId"

    def test_escaped_segments(self, root: dict[str, Any]) -> None:
        assert resolve_ref("#/components/schemas/a~1b", root) == {"type": "string"}
        assert resolve_ref("#/components/schemas/t~0x", root) == {"type": "integer"}

    def test_list_index(self, root: dict[str, Any]) -> None:
        assert resolve_ref("#/servers/1/url", root) == "https://two"

    def test_external_ref(self, root: dict[str, Any]) -> None:
        with pytest.raises(SpecParseError, match="External"):
            resolve_ref("other.yaml#/components/schemas/X", root)

    def test_missing_key(self, root: dict[str, Any]) -> None:
        with pytest.raises(SpecParseError, match="not found"):
            resolve_ref("#/components/schemas/Missing", root)

    def test_bad_index(self, root: dict[str, Any]) -> None:
        with pytest.raises(SpecParseError, match="invalid array index"):
            resolve_ref("#/servers/9", root)


class TestDeref:
    """Following reference chains."""

    def test_plain_node_unchanged(self, root: dict[str, Any]) -> None:
        node = {"type": "string"}
        assert deref(node, root) is node

    def test_single_hop(self, root: dict[str, Any]) -> None:
        node = {"$ref": "#/components/parameters/CourseId"}
        assert deref(node, root)["name"] == "courseId"

    def test_chain(self, root: dict[str, Any]) -> None:
        assert deref({"$ref": "#/components/parameters/Alias"}, root)["name"] == "courseId"

    def test_cycle(self, root: dict[str, Any]) -> None:
        with pytest.raises(SpecParseError, match="Circular"):
            deref({"$ref": "#/components/parameters/LoopA"}, root)

    def test_non_dict(self, root: dict[str, Any]) -> None:
        assert deref(None, root) is None
        assert deref([1], root) == [1]


class TestRefName:
    """Model names from references."""

    def test_name(self) -> None:
        assert ref_name({"$ref": "#/components/schemas/CourseCreate"}) == "CourseCreate"

    def test_not_a_ref(self) -> None:
        assert ref_name({"type": "string"}) is None
        assert ref_name(None) is None
