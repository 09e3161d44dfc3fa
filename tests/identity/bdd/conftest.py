"""Shared BDD fixtures and step definitions for account activation."""

import pytest
from protean import current_domain
from pytest_bdd import parsers, then

from storefront.identity.account.account import Account


@pytest.fixture()
def error():
    """Container for the failure a step captured."""
    return {"exc": None}


def find_account(email):
    return current_domain.repository_for(Account).find_by_email(email)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the request fails with "{kind}"'))
def request_fails_with(error, kind):
    assert error["exc"] is not None
    assert error["exc"].kind == kind


@then("the account is active")
def account_is_active(email):
    assert find_account(email).is_active is True


@then("the account is still pending")
def account_is_pending(email):
    assert find_account(email).is_active is False


@then("the email address is verified")
def email_is_verified(email):
    assert find_account(email).is_email_verified is True
