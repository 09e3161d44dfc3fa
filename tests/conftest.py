import os
from pathlib import Path

import pytest

os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("PASSWORD_HASH_ROUNDS", "4")
os.environ.setdefault("EMAIL_ADAPTER", "fake")


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Initialize the storefront domain and push its context for the whole session."""
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront.config import get_settings

    get_settings.cache_clear()

    from storefront.domain import storefront

    storefront.init()
    storefront.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from storefront.domain import storefront
    from storefront.utils.db import drop_db, setup_db

    setup_db(storefront)

    yield

    drop_db(storefront)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Clear stores and notification adapters after every test."""
    yield

    from protean import current_domain

    from storefront.config import get_settings
    from storefront.notifications.channel import reset_channels

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    for _, broker in current_domain.brokers.items():
        broker._data_reset()

    current_domain.event_store.store._data_reset()
    reset_channels()
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def email_outbox():
    from storefront.notifications.channel import NotificationChannel, get_channel

    return get_channel(NotificationChannel.EMAIL.value)


@pytest.fixture()
def sms_outbox():
    from storefront.notifications.channel import NotificationChannel, get_channel

    return get_channel(NotificationChannel.SMS.value)


@pytest.fixture()
def catalog():
    from storefront.catalogue.catalog import Catalog

    return Catalog()


@pytest.fixture()
def identity():
    from storefront.identity.manager import IdentityActivationManager

    return IdentityActivationManager()


@pytest.fixture()
def ledger():
    from storefront.ordering.ledger import OrderLedger

    return OrderLedger()


@pytest.fixture()
def engine():
    from storefront.reviews.engine import ReviewIntegrityEngine

    return ReviewIntegrityEngine()


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------
CUSTOMER = {
    "name": "Asha Rao",
    "email": "asha@example.com",
    "phone": "9876543210",
    "address": "12 MG Road, Bengaluru",
    "postal_code": "560001",
}


@pytest.fixture()
def customer():
    return dict(CUSTOMER)


@pytest.fixture()
def product_id(catalog):
    return catalog.add_product(name="Red Velvet Cake", price=10.0, image="/img/red-velvet.jpg", category="cakes")


@pytest.fixture()
def second_product_id(catalog):
    return catalog.add_product(name="Lemon Tart", price=4.5, category="tarts")


@pytest.fixture()
def place_order(ledger, customer, product_id):
    """Place an order for two units of ``product_id`` at 10.00 unless told otherwise."""

    def _place(items=None, **overrides):
        items = items or [{"product_id": product_id, "name": "Red Velvet Cake", "price": 10.0, "quantity": 2}]
        subtotal = sum(item["price"] * item["quantity"] for item in items)
        kwargs = {
            "customer": overrides.pop("customer", customer),
            "items": items,
            "subtotal": subtotal,
            "delivery_fee": 5.0,
            "total": subtotal + 5.0,
        }
        kwargs.update(overrides)
        return ledger.create(**kwargs)

    return _place


@pytest.fixture()
def delivered_order(ledger, place_order):
    order = place_order()
    return ledger.update_status(str(order.id), "delivered")


@pytest.fixture()
def registered_account(identity):
    """An activated customer account and its session token."""
    from storefront.identity.account.account import Account

    identity.initiate(
        name="Ravi Kumar",
        email="ravi@example.com",
        password="secret-123",
        phone="9123456780",
        address="4 Park Street, Kolkata",
        postal_code="700016",
    )
    from protean import current_domain

    pending = current_domain.repository_for(Account).find_by_email("ravi@example.com")
    return identity.complete("ravi@example.com", pending.registration_otp.code)


@pytest.fixture()
def admin_session(identity):
    return identity.create_admin(name="Store Admin", email="admin@example.com", password="admin-pass")
