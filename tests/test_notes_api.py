# File: tests/test_notes_api.py

from bson import ObjectId


def _create(client, headers, **body):
    resp = client.post("/api/notes", json=body, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_list_requires_session(client):
    resp = client.get("/api/notes")
    assert resp.status_code == 401
    assert resp.json()["error"]


def test_garbage_token_is_rejected(client):
    resp = client.get("/api/notes", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_every_note_route_requires_session(client, alice):
    note = _create(client, alice["headers"], title="Mine")
    nid = note["id"]
    assert client.post("/api/notes", json={"title": "x"}).status_code == 401
    assert client.put(f"/api/notes/{nid}", json={"title": "a", "content": "b"}).status_code == 401
    assert client.patch(f"/api/notes/{nid}", json={"isFavorite": True}).status_code == 401
    assert client.delete(f"/api/notes/{nid}").status_code == 401


def test_list_empty_for_new_user(client, alice):
    resp = client.get("/api/notes", headers=alice["headers"])
    assert resp.status_code == 200
    assert resp.json() == []


def test_create_applies_server_fields_and_defaults(client, alice):
    resp = client.post("/api/notes", json={"title": "T1", "content": "C1"}, headers=alice["headers"])
    assert resp.status_code == 201
    note = resp.json()
    assert ObjectId.is_valid(note["id"])
    assert note["createdAt"]
    assert note["ownerId"] == alice["user"]["id"]
    assert note["color"] == "yellow"
    assert note["isFavorite"] is False


def test_create_without_title_and_content_fails(client, alice):
    resp = client.post("/api/notes", json={"title": "", "content": ""}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Title or content is required"

    resp = client.post("/api/notes", json={}, headers=alice["headers"])
    assert resp.status_code == 400


def test_create_title_only_defaults_content(client, alice):
    note = _create(client, alice["headers"], title="Hi", content="")
    assert note["title"] == "Hi"
    assert note["content"] == ""


def test_create_content_only_uses_placeholder_title(client, alice):
    note = _create(client, alice["headers"], content="<p>body</p>")
    assert note["title"] == "Untitled"
    assert note["content"] == "<p>body</p>"


def test_create_with_palette_color(client, alice):
    note = _create(client, alice["headers"], title="Blue", color="blue")
    assert note["color"] == "blue"


def test_create_rejects_unknown_color(client, alice):
    resp = client.post("/api/notes", json={"title": "x", "color": "magenta"}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"


def test_list_is_most_recent_first(client, alice):
    ids = [_create(client, alice["headers"], title=t)["id"] for t in ("t1", "t2", "t3")]
    resp = client.get("/api/notes", headers=alice["headers"])
    assert [n["id"] for n in resp.json()] == list(reversed(ids))


def test_put_trims_title_and_content(client, alice):
    note = _create(client, alice["headers"], title="Old", content="old")
    resp = client.put(
        f"/api/notes/{note['id']}",
        json={"title": "  New title  ", "content": "  <p>new</p>\n"},
        headers=alice["headers"],
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["title"] == "New title"
    assert body["content"] == "<p>new</p>"
    assert body["createdAt"] == note["createdAt"]
    assert body["color"] == note["color"]


def test_put_whitespace_title_is_invalid(client, alice):
    note = _create(client, alice["headers"], title="Old", content="old")
    resp = client.put(f"/api/notes/{note['id']}", json={"title": "   ", "content": "x"}, headers=alice["headers"])
    assert resp.status_code == 400
    assert resp.json()["error"] == "Title and content are required"


def test_put_missing_content_is_invalid(client, alice):
    note = _create(client, alice["headers"], title="Old", content="old")
    resp = client.put(f"/api/notes/{note['id']}", json={"title": "New"}, headers=alice["headers"])
    assert resp.status_code == 400


def test_put_unknown_note_is_not_found(client, alice):
    resp = client.put(f"/api/notes/{ObjectId()}", json={"title": "a", "content": "b"}, headers=alice["headers"])
    assert resp.status_code == 404
    assert resp.json()["error"] == "Note not found"


def test_patch_explicit_false_unfavorites(client, alice):
    note = _create(client, alice["headers"], title="Pin me")
    url = f"/api/notes/{note['id']}"
    resp = client.patch(url, json={"isFavorite": True}, headers=alice["headers"])
    assert resp.status_code == 200
    assert resp.json()["isFavorite"] is True

    resp = client.patch(url, json={"isFavorite": False}, headers=alice["headers"])
    assert resp.status_code == 200
    assert resp.json()["isFavorite"] is False


def test_patch_applies_only_present_fields(client, alice):
    note = _create(client, alice["headers"], title="Keep", content="<b>markup</b>  ")
    resp = client.patch(f"/api/notes/{note['id']}", json={"title": "Renamed"}, headers=alice["headers"])
    body = resp.json()
    assert body["title"] == "Renamed"
    # PATCH no recorta ni toca el markup
    assert body["content"] == "<b>markup</b>  "
    assert body["isFavorite"] is False


def test_patch_rejects_explicit_null(client, alice):
    note = _create(client, alice["headers"], title="x")
    resp = client.patch(f"/api/notes/{note['id']}", json={"isFavorite": None}, headers=alice["headers"])
    assert resp.status_code == 400


def test_delete_then_delete_again(client, alice):
    note = _create(client, alice["headers"], title="Bye")
    url = f"/api/notes/{note['id']}"
    first = client.delete(url, headers=alice["headers"])
    assert first.status_code == 200
    assert first.json() == {"message": "Note deleted successfully"}
    assert client.delete(url, headers=alice["headers"]).status_code == 404
    assert client.delete(url, headers=alice["headers"]).status_code == 404


def test_malformed_id_is_not_found(client, alice):
    resp = client.delete("/api/notes/not-an-object-id", headers=alice["headers"])
    assert resp.status_code == 404


def test_other_users_note_is_invisible(client, alice, bob):
    note = _create(client, alice["headers"], title="Private", content="secret")
    url = f"/api/notes/{note['id']}"

    assert client.get("/api/notes", headers=bob["headers"]).json() == []
    assert client.put(url, json={"title": "h", "content": "h"}, headers=bob["headers"]).status_code == 404
    assert client.patch(url, json={"isFavorite": True}, headers=bob["headers"]).status_code == 404
    assert client.delete(url, headers=bob["headers"]).status_code == 404

    mine = client.get("/api/notes", headers=alice["headers"]).json()
    assert len(mine) == 1
    assert mine[0]["title"] == "Private"
    assert mine[0]["isFavorite"] is False


def test_sign_up_sign_in_create_then_foreign_delete(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "A", "email": "a@example.com", "password": "pw-a"},
    )
    assert resp.status_code == 201
    a_id = resp.json()["id"]
    token_a = client.post("/api/auth/login", json={"email": "a@example.com", "password": "pw-a"}).json()["access_token"]

    resp = client.post(
        "/api/notes",
        json={"title": "T1", "content": "C1"},
        headers={"Authorization": f"Bearer {token_a}"},
    )
    assert resp.status_code == 201
    note = resp.json()
    assert note["id"] and note["createdAt"]
    assert note["ownerId"] == a_id
    assert note["color"] == "yellow"

    client.post("/api/auth/register", json={"name": "B", "email": "b@example.com", "password": "pw-b"})
    token_b = client.post("/api/auth/login", json={"email": "b@example.com", "password": "pw-b"}).json()["access_token"]
    resp = client.delete(f"/api/notes/{note['id']}", headers={"Authorization": f"Bearer {token_b}"})
    assert resp.status_code == 404


def test_error_body_carries_request_id(client):
    resp = client.get("/api/notes", headers={"X-Request-Id": "req-123"})
    assert resp.status_code == 401
    assert resp.headers["X-Request-Id"] == "req-123"
    assert resp.json()["request_id"] == "req-123"
