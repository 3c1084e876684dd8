# tests/test_products.py
def test_create_and_get_product(client, make_product):
    p = make_product(stock=7, price=12.5, name="Racket", category="SPORTS")
    assert p["stock"] == 7
    assert p["category"] == "SPORTS"
    r = client.get(f"/products/{p['id']}")
    assert r.status_code == 200
    assert r.json()["name"] == "Racket"

def test_product_validation(client):
    base = {"name": "X", "description": "", "category": "SPORTS", "price": 1, "stock": 1}
    for override in ({"price": -1}, {"stock": -1}, {"category": "TOYS"}, {"name": ""}, {"colour": "red"}):
        r = client.post("/products", json={**base, **override})
        assert r.status_code == 400, override

def test_list_products_order_and_filter(client, make_product):
    make_product(price=30, category="SPORTS")
    make_product(price=10, category="BEAUTY")
    make_product(price=20, category="SPORTS")
    prices = [p["price"] for p in client.get("/products", params={"order": "priceLowest"}).json()]
    assert prices == [10, 20, 30]
    prices = [p["price"] for p in client.get("/products", params={"order": "priceHighest"}).json()]
    assert prices == [30, 20, 10]
    sports = client.get("/products", params={"category": "SPORTS"}).json()
    assert {p["category"] for p in sports} == {"SPORTS"}
    assert len(sports) == 2
    assert len(client.get("/products", params={"limit": 1}).json()) == 1

def test_patch_product(client, make_product):
    p = make_product(stock=1)
    r = client.patch(f"/products/{p['id']}", json={"stock": 40})
    assert r.status_code == 200
    assert r.json()["stock"] == 40
    assert r.json()["name"] == p["name"]
    assert client.patch("/products/missing", json={"stock": 1}).status_code == 404

def test_delete_product(client, make_product):
    p = make_product()
    assert client.delete(f"/products/{p['id']}").status_code == 204
    assert client.get(f"/products/{p['id']}").status_code == 404
    assert client.delete(f"/products/{p['id']}").status_code == 404
