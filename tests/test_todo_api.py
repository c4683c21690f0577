def test_todo_api_crud_flow(client, alice):
    resp = client.get("/api/todos", headers=alice)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "todos": []}

    create_payload = {"title": "Prepare slides", "description": "For Friday meeting"}
    resp = client.post("/api/todos", json=create_payload, headers=alice)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    todo = body["todo"]
    assert todo["title"] == create_payload["title"]
    assert todo["completed"] is False
    assert todo["priority"] == "medium"
    todo_id = todo["id"]

    resp = client.put(f"/api/todos/{todo_id}", json={"completed": True}, headers=alice)
    assert resp.status_code == 200
    updated = resp.json()["todo"]
    assert updated["completed"] is True
    assert updated["title"] == "Prepare slides"
    assert updated["description"] == "For Friday meeting"

    resp = client.delete(f"/api/todos/{todo_id}", headers=alice)
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    resp = client.get("/api/todos", headers=alice)
    assert resp.json()["todos"] == []


def test_list_todos_without_token_is_rejected(client):
    resp = client.get("/api/todos")
    assert resp.status_code == 401
    assert resp.json() == {"error": "No token provided"}


def test_malformed_authorization_header_is_rejected(client):
    resp = client.get("/api/todos", headers={"Authorization": "Token abc"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "No token provided"}


def test_undefined_token_is_invalid(client):
    resp = client.get("/api/todos", headers={"Authorization": "Bearer undefined"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid token"}


def test_undecodable_token_is_invalid(client):
    resp = client.get("/api/todos", headers={"Authorization": "Bearer !!not-base64!!"})
    assert resp.status_code == 401
    assert resp.json()["error"] == "Invalid token"


def test_create_todo_requires_title(client, alice):
    resp = client.post("/api/todos", json={"description": "no title"}, headers=alice)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Title is required"}

    resp = client.post("/api/todos", json={"title": "   "}, headers=alice)
    assert resp.status_code == 400


def test_create_todo_with_explicit_priority(client, alice):
    resp = client.post("/api/todos", json={"title": "Ship", "priority": "high"}, headers=alice)
    assert resp.status_code == 201
    assert resp.json()["todo"]["priority"] == "high"


def test_create_todo_rejects_unknown_priority(client, alice):
    resp = client.post("/api/todos", json={"title": "Ship", "priority": "urgent"}, headers=alice)
    assert resp.status_code == 400
    assert "Priority must be one of" in resp.json()["error"]


def test_update_missing_todo_returns_404(client, alice):
    resp = client.put("/api/todos/does-not-exist", json={"title": "x"}, headers=alice)
    assert resp.status_code == 404
    assert resp.json() == {"error": "Todo not found"}


def test_todos_are_scoped_to_their_owner(client, alice, bob):
    todo = client.post("/api/todos", json={"title": "Alice only"}, headers=alice).json()["todo"]

    assert client.get("/api/todos", headers=bob).json()["todos"] == []

    resp = client.put(f"/api/todos/{todo['id']}", json={"title": "Hijacked"}, headers=bob)
    assert resp.status_code == 404

    resp = client.delete(f"/api/todos/{todo['id']}", headers=bob)
    assert resp.status_code == 404

    todos = client.get("/api/todos", headers=alice).json()["todos"]
    assert [t["title"] for t in todos] == ["Alice only"]


def test_same_partial_update_twice_is_idempotent(client, alice):
    todo = client.post("/api/todos", json={"title": "Draft"}, headers=alice).json()["todo"]
    changes = {"title": "Final", "priority": "low", "completed": True}

    first = client.put(f"/api/todos/{todo['id']}", json=changes, headers=alice).json()["todo"]
    second = client.put(f"/api/todos/{todo['id']}", json=changes, headers=alice).json()["todo"]

    first.pop("updated_at")
    second.pop("updated_at")
    assert first == second


def test_empty_title_update_is_rejected(client, alice):
    todo = client.post("/api/todos", json={"title": "Keep"}, headers=alice).json()["todo"]
    resp = client.put(f"/api/todos/{todo['id']}", json={"title": ""}, headers=alice)
    assert resp.status_code == 400


def test_invalid_body_type_maps_to_400(client, alice):
    todo = client.post("/api/todos", json={"title": "Keep"}, headers=alice).json()["todo"]
    resp = client.put(f"/api/todos/{todo['id']}", json={"completed": "sometimes"}, headers=alice)
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request body"
