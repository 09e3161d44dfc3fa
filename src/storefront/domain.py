"""Storefront domain: account activation, order ledger and verified reviews.

A single domain hosts every aggregate so that review eligibility can read
order state synchronously from the same store.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
