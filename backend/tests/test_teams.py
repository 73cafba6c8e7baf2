from conftest import auth

CHARMANDER = {"id": 4, "name": "charmander", "types": ["fire"]}
SQUIRTLE = {"id": 7, "name": "squirtle", "types": ["water"], "level": 12}


def _create(client, token, name, pokemons=()):
    r = client.post(
        "/api/teams", json={"team": {"name": name, "pokemons": list(pokemons)}}, headers=auth(token)
    )
    assert r.status_code == 200, r.text
    return r.json()["teams"]


def test_teams_listed_newest_first(client, register):
    token = register()["token"]
    _create(client, token, "A")
    teams = _create(client, token, "B", [CHARMANDER])

    assert [t["name"] for t in teams] == ["B", "A"]
    assert teams[0]["pokemons"][0]["name"] == "charmander"
    assert [t["name"] for t in client.get("/api/teams", headers=auth(token)).json()["teams"]] == ["B", "A"]


def test_update_by_index_targets_listed_position(client, register):
    token = register()["token"]
    _create(client, token, "A")
    _create(client, token, "B")

    r = client.put("/api/teams/0", json={"team": {"name": "B2", "pokemons": [SQUIRTLE]}}, headers=auth(token))
    assert r.status_code == 200
    teams = r.json()["teams"]
    assert [t["name"] for t in teams] == ["B2", "A"]
    assert teams[0]["pokemons"] == [SQUIRTLE]
    assert teams[1]["pokemons"] == []


def test_partial_update_keeps_roster(client, register):
    token = register()["token"]
    _create(client, token, "A", [CHARMANDER])

    r = client.put("/api/teams/0", json={"team": {"name": "Fire"}}, headers=auth(token))
    team = r.json()["teams"][0]
    assert team["name"] == "Fire"
    assert team["pokemons"][0]["id"] == 4


def test_delete_by_index(client, register):
    token = register()["token"]
    _create(client, token, "A")
    _create(client, token, "B")
    _create(client, token, "C")

    r = client.delete("/api/teams/1", headers=auth(token))
    assert r.status_code == 200
    assert [t["name"] for t in r.json()["teams"]] == ["C", "A"]


def test_out_of_range_index_is_404(client, register):
    token = register()["token"]
    _create(client, token, "A")

    assert client.put("/api/teams/5", json={"team": {"name": "x"}}, headers=auth(token)).status_code == 404
    assert client.delete("/api/teams/1", headers=auth(token)).status_code == 404
    assert client.delete("/api/teams/-1", headers=auth(token)).status_code == 404


def test_stable_id_routes(client, register):
    token = register()["token"]
    _create(client, token, "A")
    teams = _create(client, token, "B")
    a_id = next(t["id"] for t in teams if t["name"] == "A")

    r = client.put(f"/api/teams/by-id/{a_id}", json={"team": {"name": "A2"}}, headers=auth(token))
    assert r.status_code == 200
    assert [t["name"] for t in r.json()["teams"]] == ["B", "A2"]

    r = client.delete(f"/api/teams/by-id/{a_id}", headers=auth(token))
    assert [t["name"] for t in r.json()["teams"]] == ["B"]
    assert client.delete(f"/api/teams/by-id/{a_id}", headers=auth(token)).status_code == 404


def test_cannot_touch_other_users_team(client, register):
    ash = register()["token"]
    misty = register(email="misty@example.com", name="Misty")["token"]
    team_id = _create(client, ash, "A")[0]["id"]

    r = client.put(f"/api/teams/by-id/{team_id}", json={"team": {"name": "mine"}}, headers=auth(misty))
    assert r.status_code == 404
    assert client.delete("/api/teams/0", headers=auth(misty)).status_code == 404
    assert client.get("/api/teams", headers=auth(ash)).json()["teams"][0]["name"] == "A"


def test_team_body_required(client, register):
    token = register()["token"]
    r = client.post("/api/teams", json={}, headers=auth(token))
    assert r.status_code == 400
    assert r.json()["detail"] == "team required"
    assert client.put("/api/teams/0", json={}, headers=auth(token)).status_code == 400


def test_roster_keeps_records_as_sent(client, register):
    token = register()["token"]
    pikachu = {
        "id": 25,
        "name": "pikachu",
        "types": [{"slot": 1, "type": {"name": "electric", "url": "https://pokeapi.co/api/v2/type/13/"}}],
        "stats": [{"base_stat": 35, "stat": {"name": "hp"}}],
    }
    eevee = {"name": "eevee"}

    teams = _create(client, token, "Mixed", [pikachu, eevee])
    assert teams[0]["pokemons"] == [pikachu, eevee]

    r = client.put("/api/teams/0", json={"team": {"pokemons": [eevee, pikachu]}}, headers=auth(token))
    assert r.status_code == 200
    assert r.json()["teams"][0]["pokemons"] == [eevee, pikachu]


def test_team_names_are_trimmed_on_update(client, register):
    token = register()["token"]
    team_id = _create(client, token, "  A  ")[0]["id"]
    assert client.get("/api/teams", headers=auth(token)).json()["teams"][0]["name"] == "A"

    r = client.put("/api/teams/0", json={"team": {"name": "  Rain Dance  "}}, headers=auth(token))
    assert r.json()["teams"][0]["name"] == "Rain Dance"

    r = client.put(f"/api/teams/by-id/{team_id}", json={"team": {"name": " Sun "}}, headers=auth(token))
    assert r.json()["teams"][0]["name"] == "Sun"
