import pytest

from api_spec_gen.errors import MissingSchemaError
from api_spec_gen.generator.parameters import collect_pending, query_parameters, resolve_parameters
from api_spec_gen.parser.base import PendingParameters


def _get_op(schema_name: str) -> dict:
    return {"get": {"operationId": schema_name, "parameters": PendingParameters(schema_name=schema_name)}}


GET_POSTS = {
    "type": "object",
    "properties": {
        "community_id": {"type": "number"},
        "page": {"type": "number"},
    },
}


class TestQueryParameters:
    def test_optional_by_default(self):
        params = query_parameters(GET_POSTS)
        assert [p["name"] for p in params] == ["community_id", "page"]
        assert all(p["in"] == "query" for p in params)
        assert all(p["required"] is False for p in params)

    def test_required_from_schema(self):
        schema = {
            "properties": {"community_id": {"type": "number"}, "mod_person_id": {"type": "number"}},
            "required": ["community_id"],
        }
        params = {p["name"]: p["required"] for p in query_parameters(schema)}
        assert params == {"community_id": True, "mod_person_id": False}

    def test_schema_fragment_is_shared(self):
        schema = {"properties": {"page": {"type": "number"}}}
        params = query_parameters(schema)
        assert params[0]["schema"] is schema["properties"]["page"]

    def test_schema_without_properties(self):
        assert query_parameters({"type": "object"}) == []


class TestCollectPending:
    def test_same_schema_shares_list(self):
        paths = {"/a": _get_op("GetThing"), "/b": _get_op("GetThing")}
        pending = collect_pending(paths)
        assert list(pending) == ["GetThing"]
        assert paths["/a"]["get"]["parameters"] is paths["/b"]["get"]["parameters"]

    def test_ignores_non_get_and_resolved(self):
        paths = {
            "/a": {"post": {"requestBody": {}}},
            "/b": {"get": {"parameters": []}},
        }
        assert collect_pending(paths) == {}


class TestResolveParameters:
    def test_resolves_and_prunes(self):
        paths = {"/post/list": _get_op("GetPosts")}
        schemas = {"GetPosts": GET_POSTS, "GetPostsResponse": {"type": "object"}}

        consumed = resolve_parameters(paths, schemas)

        assert consumed == {"GetPosts"}
        assert "GetPosts" not in schemas
        assert "GetPostsResponse" in schemas
        params = paths["/post/list"]["get"]["parameters"]
        assert isinstance(params, list)
        assert len(params) == 2
        assert all(p["required"] is False for p in params)

    def test_every_get_is_resolved(self):
        paths = {"/a": _get_op("A"), "/b": _get_op("B"), "/c": _get_op("A")}
        schemas = {"A": {"properties": {"x": {}}}, "B": {"properties": {"y": {}}}}
        resolve_parameters(paths, schemas)
        for path_item in paths.values():
            assert isinstance(path_item["get"]["parameters"], list)
        assert schemas == {}

    def test_missing_schema_is_fatal(self):
        paths = {"/a": _get_op("Nope")}
        with pytest.raises(MissingSchemaError) as exc:
            resolve_parameters(paths, {})
        assert exc.value.schema_name == "Nope"
