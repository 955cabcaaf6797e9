"""HTTP surface: status codes, error bodies and role gates."""

from decimal import Decimal

from inventory_engine.core.auth import get_current_user
from inventory_engine.core.jwt import create_access_token, decode_access_token
from inventory_engine.main import app
from inventory_engine.models import InventoryItem, Notification, SalesOrder


def checkout_body(*lines, **extra):
    body = {
        "items": [
            {"product_id": product.id, "quantity": quantity, "price": price}
            for product, quantity, price in lines
        ],
        "payment_method": "Cash",
    }
    body.update(extra)
    return body


def test_health(client):
    assert client.get("/").status_code == 200


class TestCheckoutEndpoint:

    def test_success_returns_order_invoice_and_alerts(self, client, db, staff, cafe):
        response = client.post("/pos/checkout", json=checkout_body((cafe["latte"], 40, "3.50")))

        assert response.status_code == 201
        body = response.json()
        assert body["order"]["user_id"] == staff.id
        assert Decimal(body["order"]["total"]) == Decimal("140.00")
        assert body["order"]["payment_status"] == "Paid"
        assert len(body["order"]["items"]) == 1
        assert Decimal(body["invoice"]["amount"]) == Decimal("140.00")
        assert [n["title"] for n in body["notifications"]] == ["The stock of Milk is low"]

    def test_actor_comes_from_token_not_body(self, client, db, staff, owner, cafe):
        response = client.post(
            "/pos/checkout",
            json=checkout_body((cafe["cup"], 1, 1), actor_id=owner.id),
        )

        assert response.status_code == 201
        assert db.query(SalesOrder).one().user_id == staff.id

    def test_shortage_is_a_conflict_naming_the_item(self, client, db, cafe):
        response = client.post("/pos/checkout", json=checkout_body((cafe["latte"], 60, 3)))

        assert response.status_code == 409
        assert response.json() == {
            "error": "INSUFFICIENT_STOCK",
            "detail": "Insufficient Milk stock",
        }
        assert db.query(SalesOrder).count() == 0

    def test_unit_mismatch_is_reported_separately(self, client, db, make_item, make_bom):
        syrup = make_item("Syrup", unit="ml", stock=500, category="material")
        mocha = make_item("Mocha")
        make_bom(mocha, (syrup, 20, "gram"))

        response = client.post("/pos/checkout", json=checkout_body((mocha, 1, 4)))

        assert response.status_code == 422
        assert response.json()["error"] == "INCOMPATIBLE_UNITS"

    def test_empty_cart(self, client):
        response = client.post("/pos/checkout", json=checkout_body())

        assert response.status_code == 400
        assert response.json()["error"] == "VALIDATION_ERROR"

    def test_unknown_product(self, client, cafe):
        response = client.post(
            "/pos/checkout",
            json={"items": [{"product_id": 9999, "quantity": 1, "price": 1}]},
        )

        assert response.status_code == 404
        assert response.json()["error"] == "NOT_FOUND"

    def test_non_positive_quantity_fails_schema_validation(self, client, cafe):
        response = client.post("/pos/checkout", json=checkout_body((cafe["cup"], 0, 1)))

        assert response.status_code == 422

    def test_requires_authentication(self, client, cafe):
        del app.dependency_overrides[get_current_user]

        response = client.post("/pos/checkout", json=checkout_body((cafe["cup"], 1, 1)))

        assert response.status_code == 401


class TestSalesEndpoints:

    def test_staff_cannot_submit_sales_orders(self, client, cafe):
        response = client.post("/sales", json=checkout_body((cafe["cup"], 1, 1)))

        assert response.status_code == 403

    def test_owner_submits_then_pays(self, client, db, owner, cafe):
        app.dependency_overrides[get_current_user] = lambda: owner

        created = client.post(
            "/sales",
            json={"items": [{"product_id": cafe["cup"].id, "quantity": 2, "price": "5.00"}]},
        )
        assert created.status_code == 201
        order_id = created.json()["order"]["id"]
        assert created.json()["invoice"] is None
        assert created.json()["order"]["payment_status"] == "Unpaid"

        paid = client.post(f"/sales/{order_id}/pay", json={"amount": "10.00"})
        assert paid.status_code == 201

        fetched = client.get(f"/sales/{order_id}")
        assert fetched.status_code == 200
        assert fetched.json()["payment_status"] == "Paid"
        assert len(fetched.json()["invoices"]) == 1

    def test_missing_order(self, client):
        assert client.get("/sales/404").status_code == 404


class TestInventoryEndpoints:

    def test_low_stock_filter(self, client, db, cafe):
        db.get(InventoryItem, cafe["milk"].id).stock = Decimal("1")
        db.commit()

        response = client.get("/inventory", params={"low_stock": True})

        assert response.status_code == 200
        assert [row["product"] for row in response.json()] == ["Milk", "Latte"]

    def test_get_item(self, client, cafe):
        response = client.get(f"/inventory/{cafe['cup'].id}")

        assert response.status_code == 200
        assert response.json()["code"] == "CUP"
        assert client.get("/inventory/9999").status_code == 404


class TestNotificationEndpoints:

    def test_list_mark_read_and_delete(self, client, db, cafe):
        client.post("/pos/checkout", json=checkout_body((cafe["cup"], 5, 1)))

        listed = client.get("/notifications")
        assert listed.status_code == 200
        assert len(listed.json()) == 1
        notification_id = listed.json()[0]["id"]

        marked = client.patch(f"/notifications/{notification_id}")
        assert marked.json()["is_read"] is True
        assert client.get("/notifications", params={"unread_only": True}).json() == []

        assert client.delete(f"/notifications/{notification_id}").status_code == 204
        assert db.query(Notification).count() == 0
        assert client.delete(f"/notifications/{notification_id}").status_code == 404

    def test_sweep_requires_manager(self, client):
        assert client.post("/notifications/sweep").status_code == 403

    def test_sweep_as_owner(self, client, owner, cafe):
        app.dependency_overrides[get_current_user] = lambda: owner

        response = client.post("/notifications/sweep")

        # Latte is made to order and sits at zero stock
        assert response.status_code == 200
        assert [n["title"] for n in response.json()] == ["The stock of Latte is out"]


def test_access_token_round_trip():
    token = create_access_token({"sub": "42"})

    assert decode_access_token(token)["sub"] == "42"
    assert decode_access_token(token + "x") is None
