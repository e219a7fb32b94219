"""
Customer endpoint tests.
"""

from conftest import create_order


def _customer(client, headers, **overrides):
    body = {"name": "John Smith", "email": "john@example.com"}
    body.update(overrides)
    return client.post("/api/customers", json=body, headers=headers)


class TestCustomers:

    def test_create_with_camel_case_fields(self, client, admin_headers):
        resp = _customer(client, admin_headers, zipCode="1000-001", city="Porto", phone="+351 900")
        assert resp.status_code == 201
        body = resp.get_json()
        assert body["zipCode"] == "1000-001"
        assert body["city"] == "Porto"

        fetched = client.get(f"/api/customers/{body['id']}", headers=admin_headers).get_json()
        assert fetched["zipCode"] == "1000-001"

    def test_snake_case_fields_accepted(self, client, admin_headers):
        resp = _customer(client, admin_headers, zip_code="4000")
        assert resp.status_code == 201
        assert resp.get_json()["zipCode"] == "4000"

    def test_duplicate_email_conflicts(self, client, admin_headers):
        assert _customer(client, admin_headers).status_code == 201
        resp = _customer(client, admin_headers, name="Someone Else")
        assert resp.status_code == 400
        assert resp.get_json()["error"] == "Conflict"

    def test_invalid_email_rejected(self, client, admin_headers):
        resp = _customer(client, admin_headers, email="john-at-example")
        assert resp.status_code == 400
        assert "email" in resp.get_json()["errors"]

    def test_missing_fields_reported_together(self, client, admin_headers):
        resp = client.post("/api/customers", json={}, headers=admin_headers)
        assert resp.status_code == 400
        errors = resp.get_json()["errors"]
        assert errors["name"] == "is required"
        assert errors["email"] == "is required"

    def test_overlong_field_rejected(self, client, admin_headers):
        resp = _customer(client, admin_headers, zipCode="9" * 21)
        assert resp.status_code == 400
        assert "zipCode" in resp.get_json()["errors"]

    def test_partial_update_keeps_other_fields(self, client, admin_headers):
        created = _customer(client, admin_headers, city="Porto").get_json()

        resp = client.put(f"/api/customers/{created['id']}", json={"phone": "123"}, headers=admin_headers)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["phone"] == "123"
        assert body["city"] == "Porto"
        assert body["email"] == "john@example.com"

    def test_empty_string_clears_optional_field(self, client, admin_headers):
        created = _customer(client, admin_headers, city="Porto").get_json()

        resp = client.put(f"/api/customers/{created['id']}", json={"city": ""}, headers=admin_headers)
        assert resp.get_json()["city"] is None

    def test_update_to_taken_email_conflicts(self, client, admin_headers):
        _customer(client, admin_headers)
        other = _customer(client, admin_headers, email="other@example.com").get_json()

        resp = client.put(
            f"/api/customers/{other['id']}", json={"email": "john@example.com"}, headers=admin_headers
        )
        assert resp.status_code == 400

    def test_search_matches_city(self, client, admin_headers):
        _customer(client, admin_headers, city="Lisbon")
        _customer(client, admin_headers, name="Ana", email="ana@example.com", city="Faro")

        body = client.get("/api/customers?search=lisb", headers=admin_headers).get_json()
        assert body["total"] == 1
        assert body["customers"][0]["name"] == "John Smith"

    def test_list_is_ordered_by_name(self, client, admin_headers):
        _customer(client, admin_headers, name="Zed", email="z@example.com")
        _customer(client, admin_headers, name="Amy", email="a@example.com")

        body = client.get("/api/customers", headers=admin_headers).get_json()
        assert [c["name"] for c in body["customers"]] == ["Amy", "Zed"]

    def test_delete(self, client, admin_headers):
        created = _customer(client, admin_headers).get_json()

        resp = client.delete(f"/api/customers/{created['id']}", headers=admin_headers)
        assert resp.status_code == 200
        assert resp.get_json()["message"] == "Customer deleted successfully"
        assert client.delete(f"/api/customers/{created['id']}", headers=admin_headers).status_code == 404

    def test_deleting_customer_keeps_orders(self, client, admin_headers, catalog):
        order = create_order(
            client, admin_headers, catalog.customer_id,
            [{"productId": catalog.phone_id, "quantity": 1, "price": 10}],
        ).get_json()

        assert client.delete(f"/api/customers/{catalog.customer_id}", headers=admin_headers).status_code == 200

        resp = client.get(f"/api/orders/{order['id']}", headers=admin_headers)
        assert resp.status_code == 200
        body = resp.get_json()
        assert body["customerId"] == catalog.customer_id
        assert body["customer"] is None
