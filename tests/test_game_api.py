def _new(client, seed=42):
    resp = client.post("/api/game", json={"seed": seed})
    assert resp.status_code == 201
    return resp.get_json()


def test_create_game_with_seed(client):
    data = _new(client, 12345)
    state = data["state"]
    assert data["game_id"]
    assert state["seed"] == 12345
    assert state["level"] == 1 and state["turn"] == 0
    assert state["width"] == 100 and state["height"] == 30
    assert state["entities"][0]["name"] == "player"


def test_same_seed_same_map(client):
    a = _new(client, 7)["state"]
    b = _new(client, 7)["state"]
    assert a["tiles"] == b["tiles"]
    assert a["entities"] == b["entities"]


def test_bad_seed_rejected(client):
    resp = client.post("/api/game", json={"seed": "alpha"})
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "bad_seed"


def test_get_state_and_unknown_game(client):
    game_id = _new(client)["game_id"]
    resp = client.get(f"/api/game/{game_id}")
    assert resp.status_code == 200
    assert resp.get_json()["state"]["seed"] == 42
    assert client.get("/api/game/nope").status_code == 404


def test_command_rest_advances_turn(client):
    game_id = _new(client)["game_id"]
    resp = client.post(f"/api/game/{game_id}/command", json={"command": "rest"})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["action"] == "took_turn"
    assert body["state"]["turn"] == 1


def test_unrecognized_command_does_not_take_turn(client):
    game_id = _new(client)["game_id"]
    body = client.post(f"/api/game/{game_id}/command", json={"command": "fly"}).get_json()
    assert body["action"] == "didnt_take_turn"
    assert body["state"]["turn"] == 0


def test_exit_discards_game(client):
    game_id = _new(client)["game_id"]
    body = client.post(f"/api/game/{game_id}/command", json={"command": "exit"}).get_json()
    assert body["action"] == "exit"
    assert client.get(f"/api/game/{game_id}").status_code == 404


def test_descend_off_stairs_conflicts(client):
    game_id = _new(client)["game_id"]
    resp = client.post(f"/api/game/{game_id}/descend")
    assert resp.status_code == 409
    assert resp.get_json()["error"] == "not_on_stairs"


def test_use_rejects_bad_slot(client):
    game_id = _new(client)["game_id"]
    assert client.post(f"/api/game/{game_id}/use", json={"slot": 0}).status_code == 400
    assert client.post(f"/api/game/{game_id}/use", json={"slot": "x"}).status_code == 400


def test_oldest_game_evicted_when_full(client, test_app):
    cap = test_app.config["DELVE_MAX_GAMES"]
    ids = [_new(client, seed)["game_id"] for seed in range(cap + 1)]
    assert client.get(f"/api/game/{ids[0]}").status_code == 404
    assert client.get(f"/api/game/{ids[-1]}").status_code == 200
