"""
Payment and shipping endpoint tests.
"""

import pytest

from conftest import create_order


@pytest.fixture
def order_id(client, admin_headers, catalog):
    resp = create_order(
        client, admin_headers, catalog.customer_id,
        [{"productId": catalog.phone_id, "quantity": 5, "price": 10}],
    )
    return resp.get_json()["id"]


def _payment(client, headers, order_id, **overrides):
    body = {"orderId": order_id, "paymentMethod": "credit_card", "amount": 50}
    body.update(overrides)
    return client.post("/api/payments", json=body, headers=headers)


class TestPayments:

    def test_create(self, client, admin_headers, order_id):
        resp = _payment(client, admin_headers, order_id, transactionCode="TX-1")
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["orderId"] == order_id
        assert body["amount"] == "50.00"
        assert body["transactionCode"] == "TX-1"
        assert body["paymentDate"].endswith("Z")
        assert body["order"]["id"] == order_id

    def test_payment_appears_on_order(self, client, admin_headers, order_id):
        _payment(client, admin_headers, order_id)
        order = client.get(f"/api/orders/{order_id}", headers=admin_headers).get_json()
        assert [p["amount"] for p in order["payments"]] == ["50.00"]

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"amount": 0}, "amount"),
            ({"amount": -5}, "amount"),
            ({"paymentMethod": "barter"}, "paymentMethod"),
            ({"paymentDate": "yesterday"}, "paymentDate"),
        ],
    )
    def test_invalid_payload(self, client, admin_headers, order_id, overrides, field):
        resp = _payment(client, admin_headers, order_id, **overrides)
        assert resp.status_code == 400
        assert field in resp.get_json()["errors"]

    def test_unknown_order_rejected(self, client, admin_headers, order_id):
        resp = _payment(client, admin_headers, order_id + 999)
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"orderId": "order not found"}

    def test_list_filters_by_order_and_sorts_by_date(self, client, admin_headers, catalog, order_id):
        other = create_order(
            client, admin_headers, catalog.customer_id,
            [{"productId": catalog.cable_id, "quantity": 1, "price": 5}],
        ).get_json()["id"]

        old = _payment(client, admin_headers, order_id, paymentDate="2026-01-01T10:00:00Z").get_json()
        new = _payment(client, admin_headers, order_id, paymentDate="2026-03-01T10:00:00Z").get_json()
        _payment(client, admin_headers, other)

        body = client.get(f"/api/payments?orderId={order_id}", headers=admin_headers).get_json()
        assert body["total"] == 2
        assert [p["id"] for p in body["payments"]] == [new["id"], old["id"]]
        assert body["payments"][1]["paymentDate"] == "2026-01-01T10:00:00Z"

        everything = client.get("/api/payments", headers=admin_headers).get_json()
        assert everything["total"] == 3

    def test_update_and_delete(self, client, admin_headers, order_id):
        payment = _payment(client, admin_headers, order_id).get_json()

        resp = client.put(
            f"/api/payments/{payment['id']}",
            json={"amount": "25.255", "paymentMethod": "cash"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        assert resp.get_json()["amount"] == "25.26"
        assert resp.get_json()["paymentMethod"] == "cash"

        assert client.delete(f"/api/payments/{payment['id']}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/payments/{payment['id']}", headers=admin_headers).status_code == 404

    def test_echoed_order_object_is_ignored(self, client, admin_headers, order_id):
        payment = _payment(client, admin_headers, order_id).get_json()
        resp = client.put(f"/api/payments/{payment['id']}", json=payment, headers=admin_headers)
        assert resp.status_code == 200


class TestShipping:

    def test_create_defaults_to_pending(self, client, admin_headers, order_id):
        resp = client.post(
            "/api/shipping",
            json={"orderId": order_id, "carrier": "DHL", "trackingCode": "TRK123"},
            headers=admin_headers,
        )
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["shippingStatus"] == "pending"
        assert body["shippedAt"] is None
        assert body["order"]["id"] == order_id

    def test_invalid_status_rejected(self, client, admin_headers, order_id):
        resp = client.post(
            "/api/shipping",
            json={"orderId": order_id, "shippingStatus": "teleported"},
            headers=admin_headers,
        )
        assert resp.status_code == 400
        assert "shippingStatus" in resp.get_json()["errors"]

    def test_unknown_order_rejected(self, client, admin_headers, order_id):
        resp = client.post("/api/shipping", json={"orderId": order_id + 999}, headers=admin_headers)
        assert resp.status_code == 400

    def test_update_to_shipped(self, client, admin_headers, order_id):
        shipping = client.post("/api/shipping", json={"orderId": order_id}, headers=admin_headers).get_json()

        resp = client.put(
            f"/api/shipping/{shipping['id']}",
            json={"shippingStatus": "shipped", "shippedAt": "2026-05-02T08:30:00+02:00"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["shippingStatus"] == "shipped"
        assert body["shippedAt"] == "2026-05-02T06:30:00Z"

    def test_list_key_filter_and_search(self, client, admin_headers, catalog, order_id):
        other = create_order(
            client, admin_headers, catalog.customer_id,
            [{"productId": catalog.cable_id, "quantity": 1, "price": 5}],
        ).get_json()["id"]
        client.post("/api/shipping", json={"orderId": order_id, "trackingCode": "AAA111"}, headers=admin_headers)
        client.post("/api/shipping", json={"orderId": other, "trackingCode": "BBB222"}, headers=admin_headers)

        by_order = client.get(f"/api/shipping?orderId={other}", headers=admin_headers).get_json()
        assert by_order["total"] == 1
        assert by_order["shippings"][0]["trackingCode"] == "BBB222"

        by_code = client.get("/api/shipping?search=aaa", headers=admin_headers).get_json()
        assert [s["orderId"] for s in by_code["shippings"]] == [order_id]

    def test_delete(self, client, admin_headers, order_id):
        shipping = client.post("/api/shipping", json={"orderId": order_id}, headers=admin_headers).get_json()

        resp = client.delete(f"/api/shipping/{shipping['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert client.delete(f"/api/shipping/{shipping['id']}", headers=admin_headers).status_code == 404
