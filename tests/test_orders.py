"""Order placement and ticket issuance through the HTTP API."""

import pytest

from conftest import (
    MemoryBlobStore, RecordingNotifier, auth_headers, make_event, make_user, set_setting
)
from storefront.main import app
from storefront.models import Event, Order, OrderItem, Ticket
from storefront.models.order import OrderStatus
from storefront.models.ticket import TicketStatus
from storefront.services.notifications import NotificationDispatcher, get_dispatcher
from storefront.services.storage import get_blob_store


def clothing_payload(**overrides):
    payload = {
        "customer_name": "Ada Obi",
        "customer_email": "ada@example.com",
        "customer_phone": "+234 801 234 5678",
        "shipping_address": "12 Marina Road",
        "city": "Lagos",
        "country": "Nigeria",
        "order_type": "clothing",
        "total_amount": 11500,
        "items": [
            {
                "product_name": "Linen Shirt",
                "size": "M",
                "color": "White",
                "quantity": 2,
                "price": 4500,
                "subtotal": 9000,
            },
            {
                "product_name": "Silk Scarf",
                "quantity": 1,
                "price": 2500,
                "subtotal": 2500,
            },
        ],
    }
    payload.update(overrides)
    return payload


def event_payload(event_id, quantity=2, total=5000, **overrides):
    payload = {
        "customer_name": "Ada Obi",
        "customer_email": "ada@example.com",
        "customer_phone": "+234 801 234 5678",
        "order_type": "event",
        "total_amount": total,
        "event_id": event_id,
        "ticket_quantity": quantity,
    }
    payload.update(overrides)
    return payload


class TestClothingOrders:
    def test_creates_pending_order_with_items(self, client, db):
        response = client.post("/api/orders", json=clothing_payload())

        assert response.status_code == 201
        body = response.json()
        assert body["order_number"].startswith("LV")

        order = db.query(Order).filter(Order.id == body["order_id"]).one()
        assert order.status == OrderStatus.PENDING
        assert order.total_amount == 11500

        items = db.query(OrderItem).filter(OrderItem.order_id == order.id).all()
        assert len(items) == 2
        assert all(item.subtotal == item.quantity * item.price for item in items)
        assert db.query(Ticket).count() == 0

    def test_order_numbers_are_unique(self, client):
        numbers = {
            client.post("/api/orders", json=clothing_payload()).json()["order_number"]
            for _ in range(5)
        }
        assert len(numbers) == 5

    def test_signed_in_order_is_bound_to_user(self, client, db, customer, customer_headers):
        response = client.post("/api/orders", json=clothing_payload(), headers=customer_headers)
        order = db.query(Order).filter(Order.id == response.json()["order_id"]).one()
        assert order.user_id == customer.id

    def test_guest_order_has_no_user(self, client, db):
        response = client.post("/api/orders", json=clothing_payload())
        order = db.query(Order).filter(Order.id == response.json()["order_id"]).one()
        assert order.user_id is None

    def test_notifies_admin_by_whatsapp_and_email(
        self, client, db, owner_notifier, email_notifier
    ):
        set_setting(db, "whatsapp_number", "+234 801 000 0000")
        set_setting(db, "admin_email", "owner@example.com")

        response = client.post("/api/orders", json=clothing_payload())
        number = response.json()["order_number"]

        assert len(owner_notifier.sent) == 1
        assert "https://wa.me/2348010000000?text=" in owner_notifier.sent[0].content

        assert len(email_notifier.sent) == 1
        mail = email_notifier.sent[0]
        assert mail.recipient == "owner@example.com"
        assert mail.title == f"New Order #{number}"
        assert "*" not in mail.content
        assert "Linen Shirt" in mail.content


class TestOrderValidation:
    @pytest.mark.parametrize("overrides", [
        {"customer_email": "not-an-email"},
        {"customer_name": ""},
        {"total_amount": -1},
        {"items": []},
        {"items": None},
        {"order_type": "rental"},
    ])
    def test_rejects_invalid_clothing_order(self, client, db, overrides):
        response = client.post("/api/orders", json=clothing_payload(**overrides))

        assert response.status_code == 422
        assert response.json()["code"] == "VALIDATION"
        assert db.query(Order).count() == 0

    def test_rejects_item_with_wrong_subtotal(self, client, db):
        payload = clothing_payload()
        payload["items"][0]["subtotal"] = 1
        response = client.post("/api/orders", json=payload)
        assert response.status_code == 422
        assert db.query(Order).count() == 0

    def test_rejects_item_with_zero_quantity(self, client):
        payload = clothing_payload()
        payload["items"][0].update(quantity=0, subtotal=0)
        assert client.post("/api/orders", json=payload).status_code == 422

    def test_event_order_requires_event_and_quantity(self, client, db):
        event = make_event(db)

        missing_event = event_payload(event.id)
        del missing_event["event_id"]
        assert client.post("/api/orders", json=missing_event).status_code == 422

        missing_quantity = event_payload(event.id)
        del missing_quantity["ticket_quantity"]
        assert client.post("/api/orders", json=missing_quantity).status_code == 422

        zero_quantity = event_payload(event.id, quantity=0)
        assert client.post("/api/orders", json=zero_quantity).status_code == 422

        db.expire_all()
        assert db.get(Event, event.id).available_tickets == 10


class TestEventOrders:
    def test_issues_one_ticket_per_unit(self, client, db, blob_store):
        event = make_event(db, total=10, available=3)

        response = client.post("/api/orders", json=event_payload(event.id, quantity=2))

        assert response.status_code == 201
        order_id = response.json()["order_id"]

        db.expire_all()
        assert db.get(Event, event.id).available_tickets == 1

        tickets = db.query(Ticket).filter(Ticket.order_id == order_id).all()
        assert len(tickets) == 2
        for ticket in tickets:
            assert ticket.ticket_number.startswith("LVT")
            assert ticket.status == TicketStatus.VALID
            assert ticket.quantity == 1
            assert ticket.price == 2500
            assert ticket.event_name == "Summer Show"
            assert ticket.qr_code == f"https://blobs.test/qrcodes/{ticket.ticket_number}.png"
            assert blob_store.blobs[f"qrcodes/{ticket.ticket_number}.png"].startswith(b"\x89PNG")

    def test_ticket_price_rounds_down(self, client, db):
        event = make_event(db)

        response = client.post("/api/orders", json=event_payload(event.id, quantity=3, total=5000))

        prices = [t.price for t in db.query(Ticket).filter(
            Ticket.order_id == response.json()["order_id"]
        )]
        assert prices == [1666, 1666, 1666]

    def test_can_buy_the_last_tickets(self, client, db):
        event = make_event(db, total=5, available=2)

        response = client.post("/api/orders", json=event_payload(event.id, quantity=2))

        assert response.status_code == 201
        db.expire_all()
        assert db.get(Event, event.id).available_tickets == 0

    def test_capacity_exceeded_changes_nothing(self, client, db, blob_store):
        event = make_event(db, total=10, available=3)

        response = client.post("/api/orders", json=event_payload(event.id, quantity=4))

        assert response.status_code == 409
        assert response.json()["code"] == "CAPACITY"
        db.expire_all()
        assert db.get(Event, event.id).available_tickets == 3
        assert db.query(Order).count() == 0
        assert db.query(Ticket).count() == 0
        assert blob_store.blobs == {}

    def test_unknown_event(self, client, db):
        response = client.post("/api/orders", json=event_payload(999))

        assert response.status_code == 404
        assert response.json() == {"code": "NOT_FOUND", "message": "Event not found"}
        assert db.query(Order).count() == 0

    def test_issuance_failure_rolls_back_everything(self, client, db):
        event = make_event(db, total=10, available=5)
        failing_store = MemoryBlobStore(fail_after=2)
        app.dependency_overrides[get_blob_store] = lambda: failing_store

        response = client.post("/api/orders", json=event_payload(event.id, quantity=3))

        assert response.status_code == 500
        assert response.json()["code"] == "TICKET_ISSUANCE_FAILED"
        db.expire_all()
        assert db.get(Event, event.id).available_tickets == 5
        assert db.query(Order).count() == 0
        assert db.query(Ticket).count() == 0
        assert failing_store.blobs == {}
        assert len(failing_store.deleted) == 2

    def test_sends_tickets_to_purchaser(self, client, db, owner_notifier, email_notifier):
        event = make_event(db)
        set_setting(db, "admin_email", "owner@example.com")

        response = client.post("/api/orders", json=event_payload(event.id, quantity=2))
        number = response.json()["order_number"]

        recipients = [(n.recipient, n.title) for n in email_notifier.sent]
        assert ("ada@example.com", "Your Tickets for Summer Show") in recipients
        assert ("owner@example.com", "New Event Ticket Purchase - Summer Show") in recipients
        assert ("owner@example.com", f"New Event Booking #{number}") in recipients

        purchase = [n for n in email_notifier.sent if n.recipient == "ada@example.com"][0]
        for ticket in db.query(Ticket).all():
            assert ticket.qr_code in purchase.html_content

        assert [n.title for n in owner_notifier.sent] == ["New Event Ticket Purchase"]

    def test_notification_failure_does_not_fail_order(self, client, db):
        event = make_event(db)
        set_setting(db, "whatsapp_number", "+2348010000000")
        set_setting(db, "admin_email", "owner@example.com")
        broken = NotificationDispatcher(
            owner=RecordingNotifier("owner", fail=True),
            email=RecordingNotifier("email", fail=True),
        )
        app.dependency_overrides[get_dispatcher] = lambda: broken

        response = client.post("/api/orders", json=event_payload(event.id, quantity=1))

        assert response.status_code == 201
        assert db.query(Ticket).count() == 1


class TestOrderAccess:
    def test_owner_can_view_order_and_items(self, client, customer_headers):
        order_id = client.post(
            "/api/orders", json=clothing_payload(), headers=customer_headers
        ).json()["order_id"]

        response = client.get(f"/api/orders/{order_id}", headers=customer_headers)
        assert response.status_code == 200
        assert response.json()["customer_email"] == "ada@example.com"

        items = client.get(f"/api/orders/{order_id}/items", headers=customer_headers).json()
        assert [item["product_name"] for item in items] == ["Linen Shirt", "Silk Scarf"]

        mine = client.get("/api/orders/mine", headers=customer_headers).json()
        assert [o["id"] for o in mine] == [order_id]

    def test_other_users_are_forbidden(self, client, db, customer_headers):
        order_id = client.post(
            "/api/orders", json=clothing_payload(), headers=customer_headers
        ).json()["order_id"]
        stranger = auth_headers(make_user(db, "stranger"))

        response = client.get(f"/api/orders/{order_id}", headers=stranger)
        assert response.status_code == 403
        assert response.json()["code"] == "FORBIDDEN"

    def test_admin_can_view_any_order(self, client, admin_headers):
        order_id = client.post("/api/orders", json=clothing_payload()).json()["order_id"]
        assert client.get(f"/api/orders/{order_id}", headers=admin_headers).status_code == 200

    def test_requires_login(self, client):
        order_id = client.post("/api/orders", json=clothing_payload()).json()["order_id"]
        assert client.get(f"/api/orders/{order_id}").status_code == 401

    def test_lookup_by_number(self, client):
        number = client.post("/api/orders", json=clothing_payload()).json()["order_number"]

        assert client.get(f"/api/orders/by-number/{number}").json()["order_number"] == number
        assert client.get("/api/orders/by-number/LVMISSING").status_code == 404

    def test_admin_updates_status(self, client, admin_headers, customer_headers):
        order_id = client.post("/api/orders", json=clothing_payload()).json()["order_id"]

        denied = client.patch(
            f"/api/orders/{order_id}/status", json={"status": "shipped"}, headers=customer_headers
        )
        assert denied.status_code == 403

        response = client.patch(
            f"/api/orders/{order_id}/status", json={"status": "shipped"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "shipped"

        listing = client.get("/api/orders", headers=admin_headers).json()
        assert [o["status"] for o in listing] == ["shipped"]
