"""BDD tests for verified reviews and the product rating."""

import re

import pytest
from protean.exceptions import ValidationError
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.shared.errors import StorefrontError

scenarios("features/verified_reviews.feature")


@pytest.fixture()
def error():
    """Container for the failure a step captured."""
    return {"exc": None}


@pytest.fixture()
def submitted():
    return {"review": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a product in the catalog", target_fixture="product")
def product_in_catalog(product_id):
    return product_id


@given("an order for the product", target_fixture="order")
def order_for_product(place_order):
    return place_order()


@given("the order has been delivered", target_fixture="order")
def order_delivered(ledger, order):
    return ledger.update_status(str(order.id), "delivered")


@given(parsers.cfparse("the customer reviewed the product with rating {rating:d}"))
def customer_reviewed(engine, product, order, rating, submitted):
    submitted["review"] = engine.submit(product, str(order.id), rating=rating)


@given(parsers.cfparse("delivered orders rated {ratings}"))
def delivered_orders_rated(engine, ledger, place_order, product, ratings):
    for rating in re.findall(r"\d", ratings):
        order = ledger.update_status(str(place_order().id), "delivered")
        engine.submit(product, str(order.id), rating=int(rating))


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse("the customer reviews the product with rating {rating:d}"))
def customer_reviews(engine, product, order, rating, error, submitted):
    try:
        submitted["review"] = engine.submit(product, str(order.id), rating=rating)
    except (StorefrontError, ValidationError) as exc:
        error["exc"] = exc


@when("the review is deleted")
def review_deleted(engine, submitted):
    engine.delete(str(submitted["review"].id))


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the review is accepted")
def review_accepted(error, submitted):
    assert error["exc"] is None
    assert submitted["review"].verified is True


@then(parsers.cfparse('the review is rejected with "{kind}"'))
def review_rejected(error, kind):
    assert isinstance(error["exc"], StorefrontError)
    assert error["exc"].kind == kind


@then(parsers.cfparse("the product has {count:d} reviews averaging {average:f}"))
def product_rating(catalog, product, count, average):
    stored = catalog.get_product(product)
    assert stored.review_count == count
    assert stored.average_rating == pytest.approx(average)
