"""Tests for the render server endpoints."""

import httpx
import pytest
from fastapi.testclient import TestClient

from vestaboard.config import (
    BoardSize,
    ReadWriteConfig,
    TransportConfig,
    VestaboardConfig,
)
from vestaboard.server_app import ServerApp

HELLO = {"components": [{"template": "HELLO"}]}


@pytest.fixture
def client():
    server = ServerApp(config=VestaboardConfig())
    with TestClient(server.get_fastapi_app()) as c:
        yield c


def rw_server(handler):
    config = VestaboardConfig(
        transport=TransportConfig(kind="rw", rw=ReadWriteConfig("rw-key")),
    )
    return ServerApp(config=config, http_transport=httpx.MockTransport(handler))


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_board_info(client):
    assert client.get("/api/board").json() == {"rows": 6, "cols": 22, "transport": "none"}


def test_render(client):
    response = client.post("/api/render", json=HELLO)
    assert response.status_code == 200
    body = response.json()
    assert body["layout"][0][:6] == [8, 5, 12, 12, 15, 0]
    assert len(body["layout"]) == 6
    assert body["display"].startswith(" " + "-" * 44)


def test_render_custom_board_size():
    server = ServerApp(config=VestaboardConfig(board=BoardSize(2, 5)))
    with TestClient(server.get_fastapi_app()) as c:
        layout = c.post("/api/render", json=HELLO).json()["layout"]
    assert layout == [[8, 5, 12, 12, 15], [0, 0, 0, 0, 0]]


def test_render_rejects_bad_document(client):
    response = client.post("/api/render", json={"components": [{"style": {}}]})
    assert response.status_code == 400


def test_send_without_transport(client):
    assert client.post("/api/send", json=HELLO).status_code == 503


def test_send_through_transport():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"status": "ok", "id": "msg-1", "created": 1})

    with TestClient(rw_server(handler).get_fastapi_app()) as c:
        response = c.post("/api/send", json=HELLO)

    assert response.status_code == 200
    assert response.json()["message"] == "msg-1"
    assert len(requests) == 1


def test_send_reports_transport_failure():
    def handler(request):
        return httpx.Response(500, text="boom")

    with TestClient(rw_server(handler).get_fastapi_app()) as c:
        response = c.post("/api/send", json=HELLO)
    assert response.status_code == 502


@pytest.mark.parametrize("raw", [None, 5, [1, 2, 3]])
def test_render_rejects_malformed_raw_characters(client, raw):
    response = client.post("/api/render", json={"components": [{"rawCharacters": raw}]})
    assert response.status_code == 400
