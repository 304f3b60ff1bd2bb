"""
API tests for products, checkout quote, payment order requests and orders.

Amounts come back as JSON strings ("1178.82") because the response models
use Decimal.
"""
import logging
from decimal import Decimal

import pytest

from storefront import config
from storefront.models import Order
from storefront.pricing import InconsistentTotalError
from tests.test_helpers import line_payload


def _scenario_c_lines():
    return [
        line_payload("299", rate="0", ref="book", gst_type="EXEMPT"),
        line_payload("999", rate="18", ref="speaker"),
    ]


class TestProductEndpoints:
    """Test catalog product creation and GST validation."""

    def test_create_product_with_standard_rate(self, client):
        resp = client.post("/api/v1/products", json={
            "name": "Bluetooth Speaker",
            "category": "electronics",
            "price": "999",
            "gst_rate": "18",
            "hsn_code": "8517",
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Bluetooth Speaker"
        assert Decimal(data["gst_rate"]) == Decimal("18")
        assert data["gst_type"] == "CGST_SGST"
        assert data["gst_warning"] is None

    def test_missing_rate_uses_category_suggestion(self, client):
        resp = client.post("/api/v1/products", json={
            "name": "Cotton Kurta",
            "category": "clothing",
            "price": "1180",
            "gst_inclusive": True,
        })
        assert resp.status_code == 201
        data = resp.json()
        assert Decimal(data["gst_rate"]) == Decimal("12")
        assert data["hsn_code"] == "6203"
        assert data["gst_inclusive"] is True

    def test_missing_rate_without_suggestion_uses_default(self, client):
        resp = client.post("/api/v1/products", json={"name": "Widget", "price": "10"})
        assert resp.status_code == 201
        assert Decimal(resp.json()["gst_rate"]) == config.DEFAULT_GST_RATE

    def test_non_standard_rate_is_accepted_with_warning(self, client):
        resp = client.post("/api/v1/products", json={"name": "Odd", "price": "100", "gst_rate": "10"})
        assert resp.status_code == 201
        assert "not a standard GST rate" in resp.json()["gst_warning"]

    def test_rate_above_maximum_is_rejected(self, client):
        resp = client.post("/api/v1/products", json={"name": "Luxury", "price": "100", "gst_rate": "30"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "GST rate cannot exceed 28%"

    def test_negative_rate_is_rejected(self, client):
        resp = client.post("/api/v1/products", json={"name": "Bad", "price": "100", "gst_rate": "-5"})
        assert resp.status_code == 400
        assert resp.json()["detail"] == "GST rate cannot be negative"

    def test_hsn_code_length_is_limited(self, client):
        resp = client.post("/api/v1/products", json={
            "name": "Bad", "price": "100", "gst_rate": "18", "hsn_code": "12345678901",
        })
        assert resp.status_code == 400
        assert resp.json()["detail"] == "HSN code cannot exceed 10 characters"

    def test_unknown_gst_type_is_rejected(self, client):
        resp = client.post("/api/v1/products", json={"name": "Bad", "price": "100", "gst_type": "VAT"})
        assert resp.status_code == 400

    def test_get_product(self, client, seeded_products):
        product_id = seeded_products["book"].id
        resp = client.get(f"/api/v1/products/{product_id}")
        assert resp.status_code == 200
        assert resp.json()["gst_type"] == "EXEMPT"

    def test_get_missing_product(self, client):
        assert client.get("/api/v1/products/999").status_code == 404

    def test_gst_rates_with_suggestion(self, client):
        resp = client.get("/api/v1/products/gst-rates", params={"category": "Jewelry"})
        assert resp.status_code == 200
        data = resp.json()
        assert [row["label"] for row in data["rates"]] == ["0%", "3%", "5%", "12%", "18%", "28%"]
        assert Decimal(data["suggestion"]["rate"]) == Decimal("3")
        assert data["suggestion"]["hsn"] == "7113"

    def test_gst_rates_without_category(self, client):
        resp = client.get("/api/v1/products/gst-rates")
        assert resp.status_code == 200
        assert resp.json()["suggestion"] is None


class TestCartLines:
    """Test product snapshots into cart lines."""

    def test_add_line_snapshots_tax_config(self, client, seeded_products):
        gadget_id = seeded_products["gadget"].id
        resp = client.post("/api/v1/cart/lines", json={"product_id": gadget_id, "quantity": 2})
        assert resp.status_code == 201
        data = resp.json()
        assert data["line_ref"] == str(gadget_id)
        assert data["name"] == "Bluetooth Speaker"
        assert data["unit_price"] == "999.00"
        assert data["quantity"] == 2
        assert Decimal(data["tax"]["rate"]) == Decimal("18")
        assert data["tax"]["hsn_code"] == "8517"

    def test_add_unknown_product(self, client):
        resp = client.post("/api/v1/cart/lines", json={"product_id": 404})
        assert resp.status_code == 404

    def test_snapshot_survives_product_edit(self, client, db_session, seeded_products):
        gadget = seeded_products["gadget"]
        line = client.post("/api/v1/cart/lines", json={"product_id": gadget.id}).json()

        gadget.price = Decimal("1299.00")
        gadget.gst_rate = Decimal("28")
        db_session.commit()

        resp = client.post("/api/v1/pricing/quote", json={"lines": [line]})
        assert resp.status_code == 200
        assert resp.json()["breakdown"]["grand_total"] == "1178.82"


class TestQuote:
    """Test the checkout summary endpoint."""

    def test_scenario_c_quote(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": _scenario_c_lines()})
        assert resp.status_code == 200
        data = resp.json()
        breakdown = data["breakdown"]
        assert breakdown["items_subtotal"] == "1298.00"
        assert breakdown["tax_total"] == "179.82"
        assert breakdown["shipping_fee"] == "0.00"
        assert breakdown["grand_total"] == "1477.82"
        assert [line["line_ref"] for line in breakdown["lines"]] == ["book", "speaker"]
        assert data["show_tax_line"] is True
        assert data["gst_components"] == {"cgst": "89.91", "sgst": "89.91", "igst": "0.00"}
        assert data["currency"] == "INR"
        assert data["grand_total_minor"] == 147782
        assert [row["label"] for row in data["summary"]] == ["Subtotal", "Tax", "Shipping", "Total"]

    def test_zero_rated_quote_hides_tax_row(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": [line_payload("299", rate="0")]})
        data = resp.json()
        assert data["show_tax_line"] is False
        assert [row["label"] for row in data["summary"]] == ["Subtotal", "Shipping", "Total"]
        assert data["breakdown"]["shipping_fee"] == "99.00"
        assert data["breakdown"]["grand_total"] == "398.00"

    def test_empty_cart_quote_pays_flat_fee(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": []})
        assert resp.status_code == 200
        assert resp.json()["breakdown"]["grand_total"] == "99.00"

    def test_configured_threshold_is_used(self, client, monkeypatch):
        monkeypatch.setattr(config, "FREE_SHIPPING_THRESHOLD", Decimal("2000"))
        resp = client.post("/api/v1/pricing/quote", json={"lines": _scenario_c_lines()})
        assert resp.json()["breakdown"]["shipping_fee"] == "99.00"
        assert resp.json()["breakdown"]["grand_total"] == "1576.82"

    def test_negative_rate_is_a_generic_pricing_error(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": [line_payload("100", rate="-5")]})
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Pricing error, please retry", "code": "INVALID_TAX_CONFIG"}

    def test_huge_unit_price_is_a_generic_pricing_error(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": [line_payload("1e27")]})
        assert resp.status_code == 400
        assert resp.json() == {"detail": "Pricing error, please retry", "code": "INVALID_CART_LINE"}

    def test_zero_quantity_is_a_generic_pricing_error(self, client):
        resp = client.post("/api/v1/pricing/quote", json={"lines": [line_payload("100", quantity=0)]})
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_CART_LINE"

    def test_inconsistent_total_returns_500(self, client, monkeypatch, caplog):
        def broken_price_order(lines, shipping):
            raise InconsistentTotalError(grand_total=Decimal("1.00"), expected_total=Decimal("2.00"))

        monkeypatch.setattr("storefront.services.checkout.price_order", broken_price_order)
        with caplog.at_level(logging.ERROR):
            resp = client.post("/api/v1/pricing/quote", json={"lines": _scenario_c_lines()})
        assert resp.status_code == 500
        assert resp.json()["detail"] == "Pricing error, please retry"
        assert any(record.levelno == logging.ERROR for record in caplog.records)


class TestPaymentOrders:
    """Test the payment gateway order request."""

    def test_amount_matches_quote(self, client):
        lines = _scenario_c_lines()
        quote = client.post("/api/v1/pricing/quote", json={"lines": lines}).json()
        resp = client.post("/api/v1/payments/orders", json={"lines": lines, "receipt": "rcpt_test"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["amount"] == 147782
        assert data["amount"] == quote["grand_total_minor"]
        assert data["currency"] == "INR"
        assert data["receipt"] == "rcpt_test"
        assert data["breakdown"] == quote["breakdown"]

    def test_receipt_is_generated(self, client):
        resp = client.post("/api/v1/payments/orders", json={"lines": [line_payload("999", rate="18")]})
        assert resp.json()["receipt"].startswith("rcpt_")
        assert resp.json()["amount"] == 117882

    def test_empty_cart_is_rejected(self, client):
        resp = client.post("/api/v1/payments/orders", json={"lines": []})
        assert resp.status_code == 400


class TestOrders:
    """Test order placement, retrieval and re-verification."""

    def _place(self, client, **overrides):
        body = {"lines": _scenario_c_lines(), "payment_method": "razorpay"}
        body.update(overrides)
        return client.post("/api/v1/orders", json=body)

    def test_place_order_stores_breakdown(self, client):
        resp = self._place(client, customer_name="Asha", customer_email="asha@example.in")
        assert resp.status_code == 201
        data = resp.json()
        assert data["order_number"].startswith("ORD-")
        assert data["status"] == "pending"
        assert data["payment_status"] == "unpaid"
        assert data["items_price"] == "1298.00"
        assert data["tax_price"] == "179.82"
        assert data["shipping_price"] == "0.00"
        assert data["total_price"] == "1477.82"
        assert data["show_tax_line"] is True
        assert [item["line_ref"] for item in data["items"]] == ["book", "speaker"]
        assert data["items"][1]["tax_amount"] == "179.82"
        assert data["items"][0]["gst_type"] == "EXEMPT"

    def test_matching_client_total_is_accepted(self, client):
        resp = self._place(client, client_total="1477.82")
        assert resp.status_code == 201

    def test_mismatched_client_total_is_refused(self, client, db_session):
        resp = self._place(client, client_total="1400.00")
        assert resp.status_code == 409
        assert resp.json() == {"detail": "Pricing error, please retry", "code": "PRICE_MISMATCH"}
        assert db_session.query(Order).count() == 0

    def test_guest_order_requires_email(self, client):
        resp = self._place(client, is_guest_order=True)
        assert resp.status_code == 400

    def test_guest_order(self, client):
        resp = self._place(client, is_guest_order=True, customer_email="guest@example.in")
        assert resp.status_code == 201
        assert resp.json()["is_guest_order"] is True

    def test_unknown_payment_method(self, client):
        assert self._place(client, payment_method="barter").status_code == 422

    @pytest.mark.parametrize("method", ["cash_on_delivery", "Credit_Card"])
    def test_payment_method_is_normalised(self, client, method):
        resp = self._place(client, payment_method=method)
        assert resp.status_code == 201
        assert resp.json()["payment_method"] == method.lower()

    def test_empty_cart_is_rejected(self, client):
        assert self._place(client, lines=[]).status_code == 400

    def test_get_order(self, client):
        order_id = self._place(client).json()["id"]
        resp = client.get(f"/api/v1/orders/{order_id}")
        assert resp.status_code == 200
        assert resp.json()["total_price"] == "1477.82"

    def test_get_missing_order(self, client):
        assert client.get("/api/v1/orders/12345").status_code == 404
        assert client.get("/api/v1/orders/12345/verify").status_code == 404

    def test_verify_order(self, client):
        order_id = self._place(client).json()["id"]
        resp = client.get(f"/api/v1/orders/{order_id}/verify")
        assert resp.status_code == 200
        data = resp.json()
        assert data["consistent"] is True
        assert data["stored"]["grand_total"] == data["recomputed"]["grand_total"] == "1477.82"

    def test_verify_ignores_later_config_changes(self, client, monkeypatch):
        order_id = self._place(client).json()["id"]
        monkeypatch.setattr(config, "FREE_SHIPPING_THRESHOLD", Decimal("5000"))
        data = client.get(f"/api/v1/orders/{order_id}/verify").json()
        assert data["consistent"] is True
        assert data["recomputed"]["shipping_fee"] == "0.00"

    def test_rate_with_three_decimals_is_refused(self, client, db_session):
        resp = self._place(client, lines=[line_payload("1000", rate="18.125")])
        assert resp.status_code == 400
        assert resp.json()["code"] == "INVALID_TAX_CONFIG"
        assert db_session.query(Order).count() == 0

    def test_two_decimal_rate_survives_storage(self, client):
        order = self._place(client, lines=[line_payload("1000", rate="18.13")]).json()
        assert order["tax_price"] == "181.30"
        assert order["items"][0]["gst_rate"] == "18.13"

        data = client.get(f"/api/v1/orders/{order['id']}/verify").json()
        assert data["consistent"] is True
        assert data["recomputed"]["grand_total"] == "1181.30"

    @pytest.mark.parametrize("gst_type", ["EXEMPT", "ZERO_RATED"])
    def test_verify_untaxed_line_with_catalog_rate(self, client, gst_type):
        lines = [line_payload("1000", rate="18", gst_type=gst_type)]
        order_id = self._place(client, lines=lines).json()["id"]

        data = client.get(f"/api/v1/orders/{order_id}/verify").json()
        assert data["consistent"] is True
        assert data["stored"]["lines"] == data["recomputed"]["lines"]
        assert Decimal(data["stored"]["lines"][0]["effective_rate"]) == 0

    def test_verify_detects_tampered_total(self, client, db_session):
        order_id = self._place(client).json()["id"]
        order = db_session.get(Order, order_id)
        order.total_price = Decimal("1000.00")
        db_session.commit()

        data = client.get(f"/api/v1/orders/{order_id}/verify").json()
        assert data["consistent"] is False
        assert data["stored"]["grand_total"] == "1000.00"
        assert data["recomputed"]["grand_total"] == "1477.82"

    def test_order_from_cart_line_snapshots(self, client, seeded_products):
        book_id = seeded_products["book"].id
        gadget_id = seeded_products["gadget"].id
        lines = [
            client.post("/api/v1/cart/lines", json={"product_id": book_id}).json(),
            client.post("/api/v1/cart/lines", json={"product_id": gadget_id}).json(),
        ]
        quote = client.post("/api/v1/pricing/quote", json={"lines": lines}).json()
        resp = client.post("/api/v1/orders", json={
            "lines": lines,
            "payment_method": "razorpay",
            "client_total": quote["breakdown"]["grand_total"],
        })
        assert resp.status_code == 201
        assert resp.json()["total_price"] == "1477.82"
