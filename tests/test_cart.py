"""Guest and signed-in shopping carts."""

from conftest import make_product


class TestGuestCart:
    def test_add_update_remove(self, client, db):
        product = make_product(db)

        added = client.post("/api/cart", json={
            "session_id": "guest-1", "product_id": product.id, "quantity": 1, "size": "M",
        })
        assert added.status_code == 201
        item_id = added.json()["id"]

        updated = client.patch(
            f"/api/cart/{item_id}", params={"session_id": "guest-1"}, json={"quantity": 3}
        )
        assert updated.json()["quantity"] == 3

        cart = client.get("/api/cart", params={"session_id": "guest-1"}).json()
        assert [(i["product_id"], i["quantity"], i["size"]) for i in cart] == [(product.id, 3, "M")]

        removed = client.delete(f"/api/cart/{item_id}", params={"session_id": "guest-1"})
        assert removed.json() == {"success": True}
        assert client.get("/api/cart", params={"session_id": "guest-1"}).json() == []

    def test_guest_needs_session_id(self, client, db):
        product = make_product(db)

        response = client.post("/api/cart", json={"product_id": product.id, "quantity": 1})

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION"

    def test_unknown_product(self, client):
        response = client.post("/api/cart", json={
            "session_id": "guest-1", "product_id": 404, "quantity": 1,
        })
        assert response.status_code == 404

    def test_carts_are_isolated(self, client, db):
        product = make_product(db)
        item_id = client.post("/api/cart", json={
            "session_id": "guest-1", "product_id": product.id, "quantity": 1,
        }).json()["id"]

        assert client.get("/api/cart", params={"session_id": "guest-2"}).json() == []
        response = client.patch(
            f"/api/cart/{item_id}", params={"session_id": "guest-2"}, json={"quantity": 5}
        )
        assert response.status_code == 404
        assert client.delete(f"/api/cart/{item_id}").status_code == 404

    def test_clear(self, client, db):
        product = make_product(db)
        for session_id in ("guest-1", "guest-1", "guest-2"):
            client.post("/api/cart", json={
                "session_id": session_id, "product_id": product.id, "quantity": 1,
            })

        client.delete("/api/cart", params={"session_id": "guest-1"})

        assert client.get("/api/cart", params={"session_id": "guest-1"}).json() == []
        assert len(client.get("/api/cart", params={"session_id": "guest-2"}).json()) == 1


class TestUserCart:
    def test_cart_follows_user(self, client, db, customer, customer_headers):
        product = make_product(db)

        added = client.post("/api/cart", headers=customer_headers, json={
            "session_id": "browser-tab", "product_id": product.id, "quantity": 2,
        }).json()

        assert added["user_id"] == customer.id
        assert added["session_id"] is None
        assert len(client.get("/api/cart", headers=customer_headers).json()) == 1
        assert client.get("/api/cart", params={"session_id": "browser-tab"}).json() == []

    def test_rejects_zero_quantity(self, client, db, customer_headers):
        product = make_product(db)
        response = client.post("/api/cart", headers=customer_headers, json={
            "product_id": product.id, "quantity": 0,
        })
        assert response.status_code == 422
