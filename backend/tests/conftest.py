import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from pokedex_bff.core.settings import settings
from pokedex_bff.db.session import Database
from pokedex_bff.main import create_app

POKEAPI = settings.POKEAPI_BASE.rstrip("/")


class FakeUpstream:
    """httpx.MockTransport handler: canned responses keyed by method and URL (no query)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, url, *, status=200, json=None, text=None, exc=None):
        self.routes[(method.upper(), url)] = (status, json, text, exc)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, f"{request.url.scheme}://{request.url.host}{request.url.path}")
        if key not in self.routes:
            return httpx.Response(404, json={"detail": "Not found"})
        status, body, text, exc = self.routes[key]
        if exc is not None:
            raise exc
        if text is not None:
            return httpx.Response(status, text=text)
        return httpx.Response(status, json=body)


@pytest.fixture()
def database():
    db = Database("sqlite+pysqlite:///:memory:", poolclass=StaticPool)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture()
def db(database):
    session = database.session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def upstream():
    return FakeUpstream()


@pytest.fixture()
def client(database, upstream):
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
    app = create_app(database=database, http_client=http_client)
    with TestClient(app) as c:
        yield c


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client):
    """Register a user and return the /auth/register payload."""

    def _register(email="ash@example.com", password="pikachu123", name="Ash"):
        r = client.post("/auth/register", json={"email": email, "password": password, "name": name})
        assert r.status_code == 200, r.text
        return r.json()

    return _register
