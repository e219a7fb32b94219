"""
Order and order item tests.

Covers atomic creation of an order with its items, server-side line
totals, header updates and cascading deletes.
"""

import re
from decimal import Decimal

import pytest

from erp.extensions import db
from erp.models import Order, OrderItem, Payment, Shipping
from erp.services import orders_service
from erp.validation import ValidationError

from conftest import create_order

ORDER_NUMBER_RE = re.compile(r"^ORD-\d{6}[A-Z0-9]{3}$")


def _line(product_id, quantity=1, price=10):
    return {"productId": product_id, "quantity": quantity, "price": price}


class TestOrderCreation:

    def test_creates_header_and_items(self, client, admin_headers, catalog):
        resp = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id, 2, 10)])
        assert resp.status_code == 201
        body = resp.get_json()

        assert ORDER_NUMBER_RE.match(body["orderNumber"])
        assert body["status"] == "pending"
        assert body["customer"]["id"] == catalog.customer_id
        assert len(body["items"]) == 1
        item = body["items"][0]
        assert item["productId"] == catalog.phone_id
        assert item["quantity"] == 2
        assert item["price"] == "10.00"
        assert item["total"] == "20.00"
        assert item["product"]["sku"] == "PH-1"

        assert db.session.query(OrderItem).filter_by(order_id=body["id"]).count() == 1

    def test_total_computed_when_omitted(self, client, admin_headers, catalog):
        resp = create_order(
            client, admin_headers, catalog.customer_id,
            [_line(catalog.phone_id, 2, 10), _line(catalog.cable_id, 1, "5.50")],
            discount=2, shippingCost=3,
        )
        body = resp.get_json()
        assert body["totalAmount"] == "26.50"
        assert body["discount"] == "2.00"
        assert body["shippingCost"] == "3.00"

    def test_client_total_is_kept(self, client, admin_headers, catalog):
        resp = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id, 1, 10)],
            totalAmount=9.99,
        )
        assert resp.get_json()["totalAmount"] == "9.99"

    def test_client_line_total_is_ignored(self, client, admin_headers, catalog):
        line = {**_line(catalog.phone_id, 3, 10), "total": 1}
        resp = create_order(client, admin_headers, catalog.customer_id, [line])
        assert resp.status_code == 201
        assert resp.get_json()["items"][0]["total"] == "30.00"

    def test_supplied_order_number_is_used_once(self, client, admin_headers, catalog):
        first = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)], orderNumber="ORD-MANUAL1"
        )
        assert first.status_code == 201
        assert first.get_json()["orderNumber"] == "ORD-MANUAL1"

        second = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)], orderNumber="ORD-MANUAL1"
        )
        assert second.status_code == 400
        assert second.get_json()["error"] == "Conflict"
        assert db.session.query(Order).count() == 1

    def test_flat_header_body_accepted(self, client, admin_headers, catalog):
        resp = client.post(
            "/api/orders",
            json={"customerId": catalog.customer_id, "items": [_line(catalog.phone_id)]},
            headers=admin_headers,
        )
        assert resp.status_code == 201


class TestOrderCreationRejected:

    def test_zero_items(self, client, admin_headers, catalog):
        resp = create_order(client, admin_headers, catalog.customer_id, [])
        assert resp.status_code == 400
        body = resp.get_json()
        assert body["message"] == "Order must contain at least one item"
        assert "items" in body["errors"]
        assert db.session.query(Order).count() == 0

    def test_missing_items_key(self, client, admin_headers, catalog):
        resp = client.post("/api/orders", json={"order": {"customerId": catalog.customer_id}}, headers=admin_headers)
        assert resp.status_code == 400
        assert db.session.query(Order).count() == 0

    def test_unknown_product(self, client, admin_headers, catalog):
        resp = create_order(
            client, admin_headers, catalog.customer_id,
            [_line(catalog.phone_id), _line(catalog.phone_id + 999)],
        )
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"items[1].productId": "product not found"}
        assert db.session.query(Order).count() == 0
        assert db.session.query(OrderItem).count() == 0

    def test_unknown_customer(self, client, admin_headers, catalog):
        resp = create_order(client, admin_headers, catalog.customer_id + 999, [_line(catalog.phone_id)])
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"customerId": "customer not found"}

    def test_missing_customer(self, client, admin_headers, catalog):
        resp = client.post(
            "/api/orders", json={"order": {}, "items": [_line(catalog.phone_id)]}, headers=admin_headers
        )
        assert resp.status_code == 400
        assert resp.get_json()["errors"]["customerId"] == "is required"

    @pytest.mark.parametrize(
        "line,field",
        [
            ({"quantity": 0, "price": 10}, "items[0].quantity"),
            ({"quantity": 1, "price": 0}, "items[0].price"),
            ({"quantity": "two", "price": 10}, "items[0].quantity"),
            ({"price": 10}, "items[0].quantity"),
        ],
    )
    def test_invalid_line(self, client, admin_headers, catalog, line, field):
        resp = create_order(
            client, admin_headers, catalog.customer_id, [{"productId": catalog.phone_id, **line}]
        )
        assert resp.status_code == 400
        assert field in resp.get_json()["errors"]
        assert db.session.query(Order).count() == 0

    @pytest.mark.parametrize(
        "header,field",
        [
            ({"status": "lost"}, "status"),
            ({"paymentMethod": "barter"}, "paymentMethod"),
            ({"discount": -1}, "discount"),
        ],
    )
    def test_invalid_header(self, client, admin_headers, catalog, header, field):
        resp = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)], **header)
        assert resp.status_code == 400
        assert field in resp.get_json()["errors"]

    def test_failure_while_adding_items_rolls_back_header(self, app, catalog, monkeypatch):
        def broken_build_item(order, line):
            raise RuntimeError("disk full")

        monkeypatch.setattr(orders_service, "_build_item", broken_build_item)

        header = {"customer_id": catalog.customer_id}
        items = [{"product_id": catalog.phone_id, "quantity": 1, "price": Decimal("10.00")}]
        with pytest.raises(RuntimeError):
            orders_service.create_order(header=header, items=items)

        assert db.session.query(Order).count() == 0
        assert db.session.query(OrderItem).count() == 0

    def test_service_rejects_empty_items(self, app, catalog):
        with pytest.raises(ValidationError) as exc:
            orders_service.create_order(header={"customer_id": catalog.customer_id}, items=[])
        assert "items" in exc.value.errors


class TestOrderNumbers:

    def test_format(self):
        for _ in range(50):
            assert ORDER_NUMBER_RE.match(orders_service.generate_order_number())

    def test_generated_numbers_are_unique_in_db(self, client, admin_headers, catalog):
        numbers = {
            create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()["orderNumber"]
            for _ in range(5)
        }
        assert len(numbers) == 5


class TestOrderUpdateAndDelete:

    def test_update_header_leaves_items(self, client, admin_headers, catalog):
        order = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id, 2, 10)]
        ).get_json()

        resp = client.put(
            f"/api/orders/{order['id']}",
            json={"order": {"status": "paid", "paymentMethod": "credit_card", "notes": "gift"}},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["status"] == "paid"
        assert body["paymentMethod"] == "credit_card"
        assert body["notes"] == "gift"
        assert body["totalAmount"] == "20.00"
        assert len(body["items"]) == 1

    def test_update_accepts_flat_body(self, client, admin_headers, catalog):
        order = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()
        resp = client.put(f"/api/orders/{order['id']}", json={"status": "delivered"}, headers=admin_headers)
        assert resp.get_json()["status"] == "delivered"

    def test_update_invalid_status(self, client, admin_headers, catalog):
        order = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()
        resp = client.put(f"/api/orders/{order['id']}", json={"status": "lost"}, headers=admin_headers)
        assert resp.status_code == 400

    def test_update_missing_order(self, client, admin_headers, catalog):
        resp = client.put("/api/orders/999999", json={"status": "shipped"}, headers=admin_headers)
        assert resp.status_code == 404

    def test_delete_cascades_to_items_only(self, client, admin_headers, catalog):
        order = create_order(
            client, admin_headers, catalog.customer_id,
            [_line(catalog.phone_id), _line(catalog.cable_id)],
        ).get_json()
        client.post(
            "/api/payments",
            json={"orderId": order["id"], "paymentMethod": "cash", "amount": 10},
            headers=admin_headers,
        )
        client.post("/api/shipping", json={"orderId": order["id"], "carrier": "DHL"}, headers=admin_headers)

        resp = client.delete(f"/api/orders/{order['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Order deleted successfully"

        assert db.session.query(OrderItem).filter_by(order_id=order["id"]).count() == 0
        assert db.session.query(Payment).filter_by(order_id=order["id"]).count() == 1
        assert db.session.query(Shipping).filter_by(order_id=order["id"]).count() == 1
        assert client.get(f"/api/orders/{order['id']}", headers=admin_headers).status_code == 404

    def test_list_newest_first(self, client, admin_headers, catalog):
        first = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()
        second = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()

        body = client.get("/api/orders", headers=admin_headers).get_json()
        assert body["total"] == 2
        assert [o["id"] for o in body["orders"]] == [second["id"], first["id"]]

    def test_search_by_order_number(self, client, admin_headers, catalog):
        create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)], orderNumber="ORD-FINDME1")
        create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)])

        body = client.get("/api/orders?search=findme", headers=admin_headers).get_json()
        assert [o["orderNumber"] for o in body["orders"]] == ["ORD-FINDME1"]


class TestOrderItems:

    def _order(self, client, headers, catalog):
        return create_order(
            client, headers, catalog.customer_id, [_line(catalog.phone_id, 2, 10)]
        ).get_json()

    def test_list_items_of_order(self, client, admin_headers, catalog):
        order = self._order(client, admin_headers, catalog)

        resp = client.get(f"/api/order-items/{order['id']}", headers=admin_headers)
        assert resp.status_code == 200
        items = resp.get_json()["items"]
        assert len(items) == 1
        assert items[0]["orderId"] == order["id"]

    def test_list_items_of_missing_order(self, client, admin_headers, catalog):
        assert client.get("/api/order-items/999999", headers=admin_headers).status_code == 404

    def test_add_update_delete_item(self, client, admin_headers, catalog):
        order = self._order(client, admin_headers, catalog)

        created = client.post(
            "/api/order-items",
            json={"orderId": order["id"], "productId": catalog.cable_id, "quantity": 4, "price": "5.50"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        item = created.get_json()
        assert item["total"] == "22.00"

        updated = client.put(f"/api/order-items/{item['id']}", json={"quantity": 1}, headers=admin_headers)
        assert updated.status_code == 200
        assert updated.get_json()["total"] == "5.50"

        # Header total is not recomputed from item edits
        header = client.get(f"/api/orders/{order['id']}", headers=admin_headers).get_json()
        assert header["totalAmount"] == "20.00"
        assert len(header["items"]) == 2

        deleted = client.delete(f"/api/order-items/{item['id']}", headers=admin_headers)
        assert deleted.status_code == 200
        assert client.delete(f"/api/order-items/{item['id']}", headers=admin_headers).status_code == 404

    def test_add_item_to_missing_order(self, client, admin_headers, catalog):
        resp = client.post(
            "/api/order-items",
            json={"orderId": 999999, "productId": catalog.cable_id, "quantity": 1, "price": 1},
            headers=admin_headers,
        )
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"orderId": "order not found"}

    def test_update_item_price_recomputes_total(self, client, admin_headers, catalog):
        order = self._order(client, admin_headers, catalog)
        item_id = order["items"][0]["id"]

        resp = client.put(f"/api/order-items/{item_id}", json={"price": 12.5}, headers=admin_headers)
        body = resp.get_json()
        assert body["price"] == "12.50"
        assert body["total"] == "25.00"

    def test_sales_can_edit_items(self, client, sales_headers, catalog):
        order = self._order(client, sales_headers, catalog)
        item_id = order["items"][0]["id"]

        resp = client.put(f"/api/order-items/{item_id}", json={"quantity": 5}, headers=sales_headers)
        assert resp.status_code == 200


class TestNumericLimits:

    @pytest.mark.parametrize(
        "line,field",
        [
            ({"quantity": 10 ** 20, "price": 10}, "items[0].quantity"),
            ({"quantity": 1, "price": 1e30}, "items[0].price"),
            ({"quantity": 2 ** 31 - 1, "price": "99999999.99"}, "items[0].quantity"),
        ],
    )
    def test_oversized_line(self, client, admin_headers, catalog, line, field):
        resp = create_order(
            client, admin_headers, catalog.customer_id, [{"productId": catalog.phone_id, **line}]
        )
        assert resp.status_code == 400
        assert field in resp.get_json()["errors"]
        assert db.session.query(Order).count() == 0

    def test_oversized_customer_id(self, client, admin_headers, catalog):
        resp = create_order(client, admin_headers, 10 ** 20, [_line(catalog.phone_id)])
        assert resp.status_code == 400
        assert resp.get_json()["errors"]["customerId"] == "out of range"

    def test_discount_larger_than_order(self, client, admin_headers, catalog):
        resp = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id, 1, 10)],
            discount=15, shippingCost=2,
        )
        assert resp.status_code == 400
        assert "discount" in resp.get_json()["errors"]
        assert db.session.query(Order).count() == 0

    def test_discount_equal_to_order_is_free(self, client, admin_headers, catalog):
        resp = create_order(
            client, admin_headers, catalog.customer_id, [_line(catalog.phone_id, 1, 10)], discount=10
        )
        assert resp.status_code == 201
        assert resp.get_json()["totalAmount"] == "0.00"

    def test_oversized_item_quantity_on_update(self, client, admin_headers, catalog):
        order = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()
        item_id = order["items"][0]["id"]

        resp = client.put(f"/api/order-items/{item_id}", json={"quantity": 10 ** 20}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.get_json()["errors"] == {"quantity": "out of range"}

    def test_page_beyond_range_is_empty(self, client, admin_headers, catalog):
        create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)])
        body = client.get(f"/api/orders?page={10 ** 20}", headers=admin_headers).get_json()
        assert body["orders"] == []
        assert body["total"] == 1


class TestOrderNumberRace:

    def test_number_taken_after_check_is_conflict(self, client, admin_headers, catalog, monkeypatch):
        first = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.phone_id)]).get_json()
        monkeypatch.setattr(orders_service, "_next_order_number", lambda: first["orderNumber"])

        resp = create_order(client, admin_headers, catalog.customer_id, [_line(catalog.cable_id)])
        assert resp.status_code == 400
        assert resp.get_json() == {"error": "Conflict", "message": orders_service.DUPLICATE_ORDER_NUMBER}
        assert db.session.query(Order).count() == 1
        assert db.session.query(OrderItem).count() == 1
