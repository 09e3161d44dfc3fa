"""Domain events for the Account aggregate.

One-time codes never travel in events.
"""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Account")
class RegistrationStarted:
    """A pending account was opened, or a pending signup was restarted."""

    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    restarted: String(default="false")
    started_at: DateTime(required=True)


@storefront.event(part_of="Account")
class RegistrationCodeReissued:
    """A fresh registration code replaced the previous one."""

    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    reissued_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AccountActivated:
    """A pending account redeemed its registration code and became active."""

    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    activated_at: DateTime(required=True)


@storefront.event(part_of="Account")
class EmailCodeIssued:
    __version__ = 1

    account_id: Identifier(required=True)
    issued_at: DateTime(required=True)


@storefront.event(part_of="Account")
class EmailVerified:
    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    verified_at: DateTime(required=True)


@storefront.event(part_of="Account")
class PhoneCodeIssued:
    __version__ = 1

    account_id: Identifier(required=True)
    issued_at: DateTime(required=True)


@storefront.event(part_of="Account")
class PhoneVerified:
    __version__ = 1

    account_id: Identifier(required=True)
    phone: String(required=True)
    verified_at: DateTime(required=True)


@storefront.event(part_of="Account")
class ProfileUpdated:
    """Profile fields changed. A new phone number drops its verification."""

    __version__ = 1

    account_id: Identifier(required=True)
    name: String(required=True)
    phone: String()
    address: String()
    postal_code: String()
    phone_verification_reset: String(default="false")
    updated_at: DateTime(required=True)


@storefront.event(part_of="Account")
class AdminAccountCreated:
    __version__ = 1

    account_id: Identifier(required=True)
    email: String(required=True)
    created_at: DateTime(required=True)
