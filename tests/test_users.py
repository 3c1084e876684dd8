# tests/test_users.py
def test_create_and_get_user(client, make_user):
    user = make_user(email="ada@example.com")
    assert user["email"] == "ada@example.com"
    assert user["firstName"] == "Ada"
    assert user["userPreference"]["receiveEmail"] is True
    r = client.get(f"/users/{user['id']}")
    assert r.status_code == 200
    assert r.json()["userPreference"]["id"] == user["userPreference"]["id"]

def test_create_user_validation(client):
    r = client.post("/users", json={"email": "not-an-email", "firstName": "A", "lastName": "B",
                                    "address": "x", "userPreference": {"receiveEmail": False}})
    assert r.status_code == 400
    r = client.post("/users", json={"email": "a@example.com", "firstName": "", "lastName": "B",
                                    "address": "x", "userPreference": {"receiveEmail": False}})
    assert r.status_code == 400

def test_list_users_paginates_and_includes_preference(client, make_user):
    for _ in range(3):
        make_user()
    r = client.get("/users", params={"limit": 2})
    assert r.status_code == 200
    users = r.json()
    assert len(users) == 2
    assert users[0]["userPreference"] == {"receiveEmail": True}
    assert len(client.get("/users", params={"offset": 2, "order": "oldest"}).json()) == 1

def test_patch_user_updates_fields_and_preference(client, make_user):
    user = make_user()
    r = client.patch(f"/users/{user['id']}", json={"lastName": "Byron", "userPreference": {"receiveEmail": False}})
    assert r.status_code == 200
    body = r.json()
    assert body["lastName"] == "Byron"
    assert body["firstName"] == "Ada"
    assert body["userPreference"]["receiveEmail"] is False

def test_missing_user_is_404(client):
    assert client.get("/users/missing").status_code == 404
    assert client.patch("/users/missing", json={"lastName": "X"}).status_code == 404
    assert client.delete("/users/missing").status_code == 404

def test_delete_user(client, make_user):
    user = make_user()
    assert client.delete(f"/users/{user['id']}").status_code == 204
    assert client.get(f"/users/{user['id']}").status_code == 404

def test_saved_products(client, make_user, make_product):
    user = make_user()
    p = make_product()
    assert client.get(f"/users/{user['id']}/saved-products").json() == []
    r = client.post(f"/users/{user['id']}/saved-products", json={"productId": p["id"]})
    assert r.status_code == 200
    assert [sp["id"] for sp in r.json()] == [p["id"]]
    # saving twice keeps a single entry
    r = client.post(f"/users/{user['id']}/saved-products", json={"productId": p["id"]})
    assert len(r.json()) == 1
    assert client.post(f"/users/{user['id']}/saved-products", json={"productId": "ghost"}).status_code == 404

def test_user_orders(client, make_user, make_product):
    user = make_user()
    other = make_user()
    p = make_product(stock=5)
    client.post("/orders", json={"userId": user["id"], "orderItems": [{"productId": p["id"], "quantity": 1, "unitPrice": 1}]})
    assert len(client.get(f"/users/{user['id']}/orders").json()) == 1
    assert client.get(f"/users/{other['id']}/orders").json() == []
    assert client.get("/users/missing/orders").status_code == 404
