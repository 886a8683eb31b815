"""
Tests for the postal code, directory and WhatsApp proxies.

Upstream services are replaced with ``httpx.MockTransport``.
"""

import httpx
import pytest

from beauty_manager import config
from beauty_manager.main import app
from beauty_manager.routes.external_apis import build_whatsapp_link, get_http_client


@pytest.fixture
def upstream(client):
    """Route upstream calls to a handler set by the test"""
    calls = []
    state = {"handler": None}

    def dispatch(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return state["handler"](request)

    async def override_http_client():
        async with httpx.AsyncClient(transport=httpx.MockTransport(dispatch)) as http_client:
            yield http_client

    app.dependency_overrides[get_http_client] = override_http_client

    def use(handler):
        state["handler"] = handler
        return calls

    return use


class TestCepLookup:
    def test_maps_viacep_fields(self, client, upstream):
        calls = upstream(
            lambda request: httpx.Response(
                200,
                json={
                    "cep": "01310-100",
                    "logradouro": "Avenida Paulista",
                    "bairro": "Bela Vista",
                    "localidade": "São Paulo",
                    "uf": "SP",
                },
            )
        )

        resp = client.get("/external-apis/cep/01310-100")

        assert resp.status_code == 200
        assert resp.json() == {
            "cep": "01310-100",
            "street": "Avenida Paulista",
            "neighborhood": "Bela Vista",
            "city": "São Paulo",
            "state": "SP",
        }
        assert calls[0].url.path.endswith("/01310100/json/")

    def test_short_cep_rejected_without_upstream_call(self, client, upstream):
        calls = upstream(lambda request: httpx.Response(200, json={}))
        assert client.get("/external-apis/cep/123").status_code == 400
        assert calls == []

    def test_unknown_cep(self, client, upstream):
        upstream(lambda request: httpx.Response(200, json={"erro": True}))
        assert client.get("/external-apis/cep/99999999").status_code == 404

    def test_upstream_failure(self, client, upstream):
        upstream(lambda request: httpx.Response(503))
        assert client.get("/external-apis/cep/01310100").status_code == 502


class TestDirectories:
    def test_states(self, client, upstream):
        calls = upstream(
            lambda request: httpx.Response(
                200,
                json=[
                    {"id": 12, "sigla": "AC", "nome": "Acre", "regiao": {"id": 1}},
                    {"id": 27, "sigla": "AL", "nome": "Alagoas", "regiao": {"id": 2}},
                ],
            )
        )

        resp = client.get("/external-apis/states")

        assert resp.json() == [
            {"id": 12, "sigla": "AC", "nome": "Acre"},
            {"id": 27, "sigla": "AL", "nome": "Alagoas"},
        ]
        assert calls[0].url.params["orderBy"] == "nome"

    def test_cities(self, client, upstream):
        calls = upstream(
            lambda request: httpx.Response(200, json=[{"id": 3550308, "nome": "São Paulo", "microrregiao": {}}])
        )

        resp = client.get("/external-apis/cities/35")

        assert resp.json() == [{"id": 3550308, "nome": "São Paulo"}]
        assert "/estados/35/municipios" in calls[0].url.path

    def test_directory_failure(self, client, upstream):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        upstream(fail)
        assert client.get("/external-apis/states").status_code == 502


class TestWhatsapp:
    def test_link_encoding(self):
        link = build_whatsapp_link("(11) 98765-4321", "Olá! Amanhã às 10h?")
        assert link == "https://wa.me/11987654321?text=Ol%C3%A1!%20Amanh%C3%A3%20%C3%A0s%2010h%3F"

    def test_generate_link_requires_auth(self, client):
        resp = client.post("/external-apis/whatsapp/generate-link", json={"phone": "11987654321", "message": "Oi"})
        assert resp.status_code == 401

    def test_generate_link_rejects_short_phone(self, client, auth_headers):
        resp = client.post(
            "/external-apis/whatsapp/generate-link", json={"phone": "1234", "message": "Oi"}, headers=auth_headers
        )
        assert resp.status_code == 400

    def test_send_falls_back_to_link_when_unconfigured(self, client, auth_headers, upstream, monkeypatch):
        monkeypatch.setattr(config, "WHATSAPP_API_URL", "")
        calls = upstream(lambda request: httpx.Response(200, json={}))

        resp = client.post(
            "/external-apis/whatsapp/send", json={"phone": "11987654321", "message": "Oi"}, headers=auth_headers
        )

        assert resp.json() == {"sent": False, "link": "https://wa.me/11987654321?text=Oi", "providerResponse": None}
        assert calls == []

    def test_send_through_provider(self, client, auth_headers, upstream, monkeypatch):
        monkeypatch.setattr(config, "WHATSAPP_API_URL", "https://whatsapp.test")
        monkeypatch.setattr(config, "WHATSAPP_API_KEY", "key-123")
        calls = upstream(lambda request: httpx.Response(200, json={"id": "msg-1"}))

        resp = client.post(
            "/external-apis/whatsapp/send",
            json={"phone": "(11) 98765-4321", "message": "Oi"},
            headers=auth_headers,
        )

        assert resp.json()["sent"] is True
        assert resp.json()["providerResponse"] == {"id": "msg-1"}
        assert calls[0].headers["Authorization"] == "Bearer key-123"
        assert calls[0].url.path == "/messages"

    def test_send_falls_back_when_provider_fails(self, client, auth_headers, upstream, monkeypatch):
        monkeypatch.setattr(config, "WHATSAPP_API_URL", "https://whatsapp.test")
        monkeypatch.setattr(config, "WHATSAPP_API_KEY", "key-123")
        upstream(lambda request: httpx.Response(500))

        resp = client.post(
            "/external-apis/whatsapp/send", json={"phone": "11987654321", "message": "Oi"}, headers=auth_headers
        )

        assert resp.json()["sent"] is False
        assert resp.json()["link"].startswith("https://wa.me/11987654321")
