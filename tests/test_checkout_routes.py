import pytest
from fastapi.testclient import TestClient

from lms_checkout.main import app


@pytest.fixture
def client():
    return TestClient(app)


ITEM = {"id": "mem_1", "name": "Yoga", "price": 100, "category_id": "cat_1"}
FEES = {"tax_percent": 10, "card_fees_percent": 3, "currency": "usd", "payment_keys": [{"provider": "stripe"}]}
OFFER = {"id": "off_1", "code": "SAVE20", "discount_type": "percentage", "discount_value": 20}
USER = {"first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"}


class TestSummaryRoute:
    def test_summary(self, client):
        res = client.post("/checkout/summary", json={"item": ITEM, "fee_config": FEES})

        assert res.status_code == 200
        body = res.json()
        assert body["summary"]["total_price"] == 113.3
        assert body["payment_provider"] == "stripe"

    def test_summary_with_offer(self, client):
        res = client.post("/checkout/summary", json={"item": ITEM, "fee_config": FEES, "offer": OFFER})

        body = res.json()
        assert body["summary"]["item_discount"] == 20
        assert body["item"]["discount"] == 20
        assert body["offer"]["code"] == "SAVE20"

    def test_free_checkout_has_no_provider(self, client):
        offer = {"id": "o", "code": "FREE", "discount_type": "amount", "discount_value": 500}

        res = client.post("/checkout/summary", json={"item": ITEM, "fee_config": FEES, "offer": offer})

        body = res.json()
        assert body["summary"]["total_price"] == 0
        assert body["summary"]["payment_required"] is False
        assert body["payment_provider"] == "none"

    def test_missing_price_is_rejected(self, client):
        res = client.post("/checkout/summary", json={"item": {"id": "x"}})

        assert res.status_code == 422

    def test_bad_leg(self, client):
        item = dict(ITEM, membership_type="recurring", subscription_amount=10)

        res = client.post("/checkout/summary", json={"item": item, "offer": OFFER, "recurring_leg": "sideways"})

        assert res.status_code == 400

    def test_offer_with_utc_expiry(self, client):
        offer = dict(OFFER, expires_at="2999-01-01T00:00:00Z")

        res = client.post("/checkout/summary", json={"item": ITEM, "fee_config": FEES, "offer": offer})

        assert res.status_code == 200
        assert res.json()["summary"]["item_discount"] == 20

    def test_expired_utc_offer_is_dropped(self, client):
        offer = dict(OFFER, expires_at="2020-01-01T00:00:00+02:00")

        res = client.post("/checkout/summary", json={"item": ITEM, "fee_config": FEES, "offer": offer})

        assert res.status_code == 200
        body = res.json()
        assert body["summary"]["offer_applied"] is False
        assert body["offer_result"]["reason"] == "This offer code has expired"


class TestOfferRoute:
    def test_accepted(self, client):
        res = client.post("/checkout/offer", json={"item": ITEM, "offer": OFFER})

        assert res.status_code == 200
        assert res.json()["item"]["offer_id"] == "off_1"

    def test_rejected(self, client):
        offer = dict(OFFER, max_price=50)

        res = client.post("/checkout/offer", json={"item": ITEM, "offer": offer})

        assert res.status_code == 400
        assert "50.00" in res.json()["detail"]


class TestPayloadRoute:
    def _body(self, **overrides):
        body = {
            "item": ITEM,
            "user": USER,
            "summary": {"total_price": 49.995},
            "payment_info": {"nonce": "tok_1", "method_type": "card"},
            "context": {"tenant_id": "tenant_1", "org_id": "org_1"},
            "fee_config": FEES,
        }
        body.update(overrides)
        return body

    def test_item_payload(self, client):
        res = client.post("/checkout/payload/item", json=self._body())

        assert res.status_code == 200
        body = res.json()
        assert body["payment"]["amount"] == "50.00"
        assert body["payment"]["currency"] == "USD"
        assert body["firstName"] == "Ada"

    def test_incomplete_contact(self, client):
        res = client.post("/checkout/payload/item", json=self._body(user={"first_name": "Ada"}))

        assert res.status_code == 400
        assert set(res.json()["detail"]["fields"]) == {"last_name", "email"}

    def test_unknown_kind(self, client):
        res = client.post("/checkout/payload/donation", json=self._body())

        assert res.status_code == 404


class TestPlanSelectRoute:
    def test_filters_and_sorts(self, client):
        cycle = {"frequency": 1, "unit": "months"}
        pricings = [
            {"id": "b", "plan_id": "p", "payment_type": "recurring", "subscription_amount": 40, "billing_cycle": cycle},
            {"id": "a", "plan_id": "p", "payment_type": "recurring", "subscription_amount": 20, "billing_cycle": cycle},
            {"id": "y", "plan_id": "p", "payment_type": "recurring", "subscription_amount": 200,
             "billing_cycle": {"frequency": 1, "unit": "years"}},
        ]

        res = client.post("/checkout/plans/select", json={"period": "monthly", "pricings": pricings})

        assert [p["id"] for p in res.json()["pricings"]] == ["a", "b"]


def test_health(client):
    res = client.get("/health/check")

    assert res.status_code == 200
    assert res.json()["status"] == "ok"
