"""Integration tests for the Reviews API endpoints via TestClient."""

import pytest
from fastapi.testclient import TestClient

from storefront.http import create_app


@pytest.fixture()
def client():
    return TestClient(create_app())


def _auth(token):
    return {"Authorization": f"Bearer {token}"}


def _submit(client, order, product_id, headers=None, **overrides):
    payload = {
        "product_id": product_id,
        "order_id": str(order.id),
        "rating": 5,
        "title": "Best cake in town",
        "comment": "Moist and fresh.",
    }
    payload.update(overrides)
    return client.post("/reviews", json=payload, headers=headers or {})


class TestSubmitReviewAPI:
    def test_submit_returns_201(self, client, delivered_order, product_id):
        response = _submit(client, delivered_order, product_id)
        assert response.status_code == 201
        body = response.json()
        assert body["verified"] is True
        assert body["rating"] == 5
        assert body["customer_name"] == "Asha Rao"

    def test_signed_in_review_records_account(self, client, delivered_order, product_id, registered_account):
        response = _submit(client, delivered_order, product_id, headers=_auth(registered_account.token))
        assert response.json()["account_id"] == str(registered_account.account.id)

    def test_undelivered_order(self, client, place_order, product_id):
        response = _submit(client, place_order(), product_id)
        assert response.status_code == 422
        assert response.json()["error"] == "Precondition"

    def test_duplicate(self, client, delivered_order, product_id):
        _submit(client, delivered_order, product_id)
        response = _submit(client, delivered_order, product_id, rating=2)
        assert response.status_code == 409
        assert response.json()["error"] == "Conflict"

    def test_rating_out_of_range(self, client, delivered_order, product_id):
        response = _submit(client, delivered_order, product_id, rating=7)
        assert response.status_code == 400
        assert response.json()["error"] == "Validation"

    def test_unknown_order(self, client, product_id):
        response = client.post("/reviews", json={"product_id": product_id, "order_id": "missing", "rating": 5})
        assert response.status_code == 404


class TestReviewQueriesAPI:
    def test_product_reviews(self, client, delivered_order, product_id):
        _submit(client, delivered_order, product_id)
        response = client.get(f"/reviews/product/{product_id}")
        assert response.status_code == 200
        body = response.json()
        assert body["total"] == 1
        assert body["pages"] == 1
        assert body["reviews"][0]["rating"] == 5

    def test_check(self, client, delivered_order, product_id):
        before = client.get(f"/reviews/check/{delivered_order.id}/{product_id}").json()
        assert before == {"has_reviewed": False, "review": None}

        _submit(client, delivered_order, product_id)
        after = client.get(f"/reviews/check/{delivered_order.id}/{product_id}").json()
        assert after["has_reviewed"] is True

    def test_order_reviews(self, client, delivered_order, product_id):
        _submit(client, delivered_order, product_id)
        response = client.get(f"/reviews/order/{delivered_order.id}")
        assert list(response.json()) == [str(product_id)]


class TestDeleteReviewAPI:
    def test_owner_deletes(self, client, delivered_order, product_id, registered_account, catalog):
        review_id = _submit(client, delivered_order, product_id, headers=_auth(registered_account.token)).json()["id"]
        response = client.delete(f"/reviews/{review_id}", headers=_auth(registered_account.token))
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert catalog.get_product(product_id).review_count == 0

    def test_other_account_is_forbidden(self, client, delivered_order, product_id, registered_account, admin_session):
        review_id = _submit(client, delivered_order, product_id, headers=_auth(registered_account.token)).json()["id"]
        response = client.delete(f"/reviews/{review_id}", headers=_auth(admin_session.token))
        assert response.status_code == 403

    def test_unknown_review(self, client):
        assert client.delete("/reviews/missing").status_code == 404
