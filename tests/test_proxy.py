import json

import httpx
import pytest
from fastapi.testclient import TestClient

from api.app import create_app
from api.proxy import ForwardingProxy
from config.settings import ServerSettings

SETTINGS = ServerSettings(token="secret", upstream_url="https://upstream.test/")


def make_client(handler, settings=SETTINGS):
    upstream = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TestClient(create_app(settings, http_client=upstream))


def test_resolve_target():
    proxy = ForwardingProxy(SETTINGS, http_client=None)

    assert proxy.resolve_target("chat/completions") == "https://upstream.test/v1/chat/completions"
    assert proxy.resolve_target("models/org/m", "wait=1") == "https://upstream.test/models/org/m?wait=1"
    assert proxy.resolve_target("datasets/x") is None


def test_model_route_is_forwarded_with_server_token():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, content=b"\x89PNG", headers={"content-type": "image/png"})

    client = make_client(handler)
    response = client.post(
        "/api/hf/models/foo/bar",
        json={"inputs": "a cat"},
        headers={"Accept": "image/png", "X-Other": "dropped"},
    )

    assert response.status_code == 200
    assert response.content == b"\x89PNG"
    assert response.headers["content-type"] == "image/png"
    assert response.headers["access-control-allow-origin"] == "*"
    forwarded = seen[0]
    assert str(forwarded.url) == "https://upstream.test/models/foo/bar"
    assert forwarded.method == "POST"
    assert forwarded.headers["authorization"] == "Bearer secret"
    assert forwarded.headers["accept"] == "image/png"
    assert "x-other" not in forwarded.headers
    assert json.loads(forwarded.content) == {"inputs": "a cat"}
    assert "secret" not in response.text


def test_chat_route_keeps_query_string():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"choices": []})

    response = make_client(handler).post("/api/hf/chat/completions?x=1", json={})

    assert response.status_code == 200
    assert str(seen[0].url) == "https://upstream.test/v1/chat/completions?x=1"


def test_get_requests_have_no_body():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    make_client(handler).get("/api/hf/models/org/m")

    assert seen[0].method == "GET"
    assert seen[0].content == b""


def test_upstream_status_is_relayed():
    response = make_client(lambda request: httpx.Response(503, text="loading")).post(
        "/api/hf/models/org/m", json={}
    )

    assert response.status_code == 503
    assert response.text == "loading"


def test_unknown_route_is_rejected():
    response = make_client(lambda request: pytest.fail("should not forward")).get("/api/hf/datasets/x")

    assert response.status_code == 404
    assert response.json() == {"error": "Unknown HF proxy route"}


def test_missing_token_is_reported():
    settings = ServerSettings(token=None, upstream_url="https://upstream.test")
    response = make_client(lambda request: pytest.fail("should not forward"), settings).post(
        "/api/hf/chat/completions", json={}
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Missing HF_TOKEN on server"}


def test_preflight_is_answered_locally():
    settings = ServerSettings(token=None)
    response = make_client(lambda request: pytest.fail("should not forward"), settings).options(
        "/api/hf/models/org/m"
    )

    assert response.status_code == 204
    assert response.headers["access-control-allow-origin"] == "*"
    assert "POST" in response.headers["access-control-allow-methods"]


def test_transport_failure_returns_bad_gateway():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    response = make_client(handler).post("/api/hf/models/org/m", json={})

    assert response.status_code == 502
    assert response.json() == {"error": "Upstream request failed"}


def test_health():
    response = make_client(lambda request: httpx.Response(200)).get("/health")

    assert response.json() == {"status": "ok"}


@pytest.mark.parametrize(
    "route",
    [
        "models/../../api/whoami-v2",
        "models/./org/m",
        "models/%2e%2e/%2e%2e/api/whoami-v2",
        "models/%252e%252e/api/whoami-v2",
        "chat/completions/../../api/whoami-v2",
    ],
)
def test_dot_segments_are_not_resolved(route):
    assert ForwardingProxy(SETTINGS, http_client=None).resolve_target(route) is None


def test_encoded_traversal_is_not_forwarded():
    response = make_client(lambda request: pytest.fail("should not forward")).get(
        "/api/hf/models/%2e%2e/%2e%2e/api/whoami-v2"
    )

    assert response.status_code == 404
    assert response.json() == {"error": "Unknown HF proxy route"}
