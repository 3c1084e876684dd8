import pytest
from fastapi.testclient import TestClient

from storefront.core.config import Settings
from storefront.db.session import Base, make_engine, make_session_factory
from storefront.main import create_app


@pytest.fixture
def engine(tmp_path):
    # file-backed so concurrent sessions see each other's commits
    eng = make_engine(f"sqlite:///{tmp_path / 'storefront.db'}")
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def db(session_factory):
    s = session_factory()
    yield s
    s.close()


@pytest.fixture
def client(engine):
    settings = Settings(POSTGRES_DSN=str(engine.url), ENABLE_METRICS=False, LOG_LEVEL="WARNING")
    return TestClient(create_app(settings, engine=engine))


@pytest.fixture
def make_user(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        body = {
            "email": f"user{counter['n']}@example.com",
            "firstName": "Ada",
            "lastName": "Lovelace",
            "address": "12 Analytical St",
            "userPreference": {"receiveEmail": True},
        }
        body.update(overrides)
        r = client.post("/users", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make


@pytest.fixture
def make_product(client):
    def _make(stock=5, price=9.99, **overrides):
        body = {
            "name": "Widget",
            "description": "A widget",
            "category": "HOUSEHOLD_SUPPLIES",
            "price": price,
            "stock": stock,
        }
        body.update(overrides)
        r = client.post("/products", json=body)
        assert r.status_code == 201, r.text
        return r.json()

    return _make
