from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.core.errors import ErrorKind, STATUS_BY_KIND, ServiceError, install_error_handlers


def test_health_and_info(client):
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/v1/_info").json()["service"] == "storefront"

def test_every_error_kind_has_a_status():
    assert set(STATUS_BY_KIND) == set(ErrorKind)
    assert STATUS_BY_KIND[ErrorKind.INSUFFICIENT_STOCK] == 409

def test_error_handlers_apply_the_mapping():
    app = FastAPI()
    install_error_handlers(app)

    @app.get("/stock")
    def stock():
        raise ServiceError(ErrorKind.INSUFFICIENT_STOCK, "Insufficient stock")

    @app.get("/boom")
    def boom():
        raise RuntimeError("kaput")

    c = TestClient(app, raise_server_exceptions=False)
    r = c.get("/stock")
    assert r.status_code == 409
    assert r.json() == {"message": "Insufficient stock"}
    r = c.get("/boom")
    assert r.status_code == 500
    assert r.json() == {"message": "kaput"}

def test_bad_query_param_is_400(client):
    r = client.get("/products", params={"limit": "lots"})
    assert r.status_code == 400
    assert "limit" in r.json()["message"]

def test_negative_paging_is_400(client):
    for path in ("/products", "/users"):
        assert client.get(path, params={"limit": -1}).status_code == 400
        assert client.get(path, params={"offset": -1}).status_code == 400
