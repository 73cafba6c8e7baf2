from datetime import timedelta

from jose import jwt

from conftest import auth
from pokedex_bff.core.security import create_access_token, decode_access_token
from pokedex_bff.core.settings import settings


def test_register_then_login(client, register):
    data = register()
    assert data["user"] == {"email": "ash@example.com", "name": "Ash", "code": data["user"]["code"]}
    assert len(data["user"]["code"]) == 7
    assert decode_access_token(data["token"])["email"] == "ash@example.com"

    r = client.post("/auth/login", json={"email": "ash@example.com", "password": "pikachu123"})
    assert r.status_code == 200
    body = r.json()
    assert body["user"]["code"] == data["user"]["code"]
    assert decode_access_token(body["token"])["email"] == "ash@example.com"

    # The issued token opens protected routes.
    me = client.get("/api/favorites", headers=auth(body["token"]))
    assert me.status_code == 200


def test_register_duplicate_email(client, register):
    register()
    r = client.post(
        "/auth/register",
        json={"email": "ASH@example.com", "password": "other", "name": "Ash again"},
    )
    assert r.status_code == 400
    assert r.json()["detail"] == "User exists"


def test_register_requires_email_and_password(client):
    r = client.post("/auth/register", json={"email": "misty@example.com"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Email and password required"

    r = client.post("/auth/register", json={"password": "x"})
    assert r.status_code == 400


def test_login_failures(client, register, db):
    register()

    wrong = client.post("/auth/login", json={"email": "ash@example.com", "password": "nope"})
    assert wrong.status_code == 400
    assert wrong.json()["detail"] == "Invalid credentials"

    unknown = client.post("/auth/login", json={"email": "brock@example.com", "password": "x"})
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "Invalid credentials"

    missing = client.post("/auth/login", json={"email": "ash@example.com"})
    assert missing.status_code == 400


def test_login_rejects_oauth_only_account(client, db):
    from pokedex_bff.db import store

    store.create_user(db, email="gary@example.com", name="Gary", password="", code="gary123")

    r = client.post("/auth/login", json={"email": "gary@example.com", "password": "anything"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Please use Google Sign-In for this account"


def test_token_lifetime_is_seven_days():
    claims = decode_access_token(create_access_token("ash@example.com"))
    assert claims["exp"] - claims["iat"] == 7 * 24 * 3600


def test_protected_route_requires_valid_token(client, register):
    token = register()["token"]

    missing = client.get("/api/teams")
    assert missing.status_code == 401
    assert missing.json()["detail"] == "Missing Authorization header"

    malformed = client.get("/api/teams", headers={"Authorization": token})
    assert malformed.status_code == 401
    assert malformed.json()["detail"] == "Invalid Authorization header"

    expired = create_access_token("ash@example.com", expires_delta=timedelta(days=-1))
    r = client.get("/api/teams", headers=auth(expired))
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid token"

    forged = jwt.encode({"email": "ash@example.com"}, "not-the-secret", algorithm="HS256")
    assert client.get("/api/teams", headers=auth(forged)).status_code == 401

    # Swap in another payload but keep the original signature.
    header, _payload, signature = token.split(".")
    other_payload = create_access_token("misty@example.com").split(".")[1]
    tampered = ".".join([header, other_payload, signature])
    assert client.get("/api/teams", headers=auth(tampered)).status_code == 401

    assert client.get("/api/teams", headers=auth(token)).status_code == 200


def test_token_for_unknown_user_is_rejected(client):
    token = create_access_token("ghost@example.com")
    r = client.get("/api/friends", headers=auth(token))
    assert r.status_code == 401
    assert r.json()["detail"] == "User not found"


def test_token_without_email_claim_is_rejected(client):
    token = jwt.encode({"sub": "x"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    assert client.get("/api/friends", headers=auth(token)).status_code == 401


def test_malformed_json_is_a_400(client):
    r = client.post(
        "/auth/login", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert r.status_code == 400


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"ok": True, "name": "Pokedex BFF"}
