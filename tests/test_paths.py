from api_spec_gen.config import GeneratorConfig
from api_spec_gen.generator.paths import build_operation, build_paths
from api_spec_gen.parser.base import CallDescriptor, PendingParameters


def _make_call(method: str, path: str, function_name: str = "fn",
               request: str = "Req", response: str = "Resp") -> CallDescriptor:
    return CallDescriptor(
        description=f"{function_name} description",
        method=method,
        path=path,
        function_name=function_name,
        request_schema=request,
        response_schema=response,
    )


class TestBuildOperation:
    def test_get_gets_pending_parameters(self):
        op = build_operation(_make_call("GET", "/post/list", request="GetPosts"))
        assert op["parameters"] == PendingParameters(schema_name="GetPosts")
        assert "requestBody" not in op

    def test_post_gets_request_body(self):
        op = build_operation(_make_call("POST", "/user/login", request="Login"))
        assert "parameters" not in op
        schema = op["requestBody"]["content"]["application/json"]["schema"]
        assert schema == {"$ref": "#/components/schemas/Login"}
        assert "required" not in op["requestBody"]

    def test_request_body_required_when_configured(self):
        config = GeneratorConfig(require_request_body=True)
        op = build_operation(_make_call("PUT", "/post"), config)
        assert op["requestBody"]["required"] is True

    def test_single_ok_response(self):
        op = build_operation(_make_call("DELETE", "/post", response="PostResponse"))
        assert list(op["responses"]) == ["200"]
        ok = op["responses"]["200"]
        assert ok["description"] == "OK"
        assert ok["content"]["application/json"]["schema"] == {"$ref": "#/components/schemas/PostResponse"}

    def test_metadata(self):
        op = build_operation(_make_call("GET", "/private_message/list", function_name="getPrivateMessages"))
        assert op["tags"] == ["Private Message"]
        assert op["operationId"] == "getPrivateMessages"
        assert op["description"] == "getPrivateMessages description"


class TestBuildPaths:
    def test_methods_share_a_path_item(self):
        paths = build_paths([
            _make_call("GET", "/post", function_name="getPost"),
            _make_call("PUT", "/post", function_name="editPost"),
        ])
        assert set(paths["/post"]) == {"get", "put"}

    def test_last_definition_wins(self):
        paths = build_paths([
            _make_call("POST", "/post", function_name="first"),
            _make_call("POST", "/post", function_name="second"),
        ])
        assert paths["/post"]["post"]["operationId"] == "second"

    def test_empty_input(self):
        assert build_paths([]) == {}
