"""Account aggregate with the OneTimeCode value object.

An account is opened pending and becomes active exactly once, by redeeming
the registration code mailed to it. Email and phone verification reuse the
same one-time code primitive, each in its own slot:

    registration_otp  pending → active
    email_otp         is_email_verified
    phone_otp         is_phone_verified

Issuing a code replaces whatever the slot held. A successful redemption
clears the slot.
"""

import hmac
import re
import secrets
from datetime import UTC, datetime, timedelta
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, String, ValueObject

from storefront.domain import storefront
from storefront.identity.account.events import (
    AccountActivated,
    AdminAccountCreated,
    EmailCodeIssued,
    EmailVerified,
    PhoneCodeIssued,
    PhoneVerified,
    ProfileUpdated,
    RegistrationCodeReissued,
    RegistrationStarted,
)
from storefront.shared.contact import contact_errors, normalize_email
from storefront.shared.errors import CodeExpired, Conflict, InvalidCode, PreconditionFailed

_CODE_PATTERN = re.compile(r"^\d{6}$")

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


class AccountRole(Enum):
    USER = "user"
    ADMIN = "admin"


@storefront.value_object(part_of="Account")
class OneTimeCode:
    """A six-digit code and the moment it stops being redeemable."""

    code: String(required=True, max_length=6)
    expires_at: DateTime(required=True)

    @invariant.post
    def code_must_be_six_digits(self):
        if self.code is not None and not _CODE_PATTERN.match(self.code):
            raise ValidationError({"code": ["One-time code must be exactly six digits"]})

    @classmethod
    def issue(cls, ttl_minutes: int = 10, now: datetime | None = None) -> "OneTimeCode":
        now = now or datetime.now(UTC)
        return cls(
            code=str(secrets.randbelow(900000) + 100000),
            expires_at=now + timedelta(minutes=ttl_minutes),
        )

    def matches(self, candidate) -> bool:
        if candidate is None:
            return False
        return hmac.compare_digest(self.code.encode(), str(candidate).strip().encode())

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(UTC)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=UTC)
        return now > expires_at


def _redeem(slot: OneTimeCode | None, candidate, now: datetime) -> None:
    """Raise unless ``candidate`` matches the code in ``slot`` and it is still live."""
    if slot is None or not slot.matches(candidate):
        raise InvalidCode("Invalid verification code")
    if slot.is_expired(now):
        raise CodeExpired("Verification code has expired. Please request a new one")


@storefront.aggregate
class Account:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password_hash: String(max_length=255)
    phone: String(max_length=10)
    address: String(max_length=500)
    postal_code: String(max_length=6)
    role: String(choices=AccountRole, default=AccountRole.USER.value)

    is_active: Boolean(default=False)
    is_email_verified: Boolean(default=False)
    is_phone_verified: Boolean(default=False)

    registration_otp: ValueObject(OneTimeCode)
    email_otp: ValueObject(OneTimeCode)
    phone_otp: ValueObject(OneTimeCode)

    created_at: DateTime()
    activated_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def contact_details_must_be_well_formed(self):
        errors = contact_errors(email=self.email, phone=self.phone, postal_code=self.postal_code)
        if errors:
            raise ValidationError(errors)

    @invariant.post
    def active_account_holds_no_registration_code(self):
        if self.is_active and self.registration_otp is not None:
            raise ValidationError({"registration_otp": ["An active account cannot hold a registration code"]})

    @property
    def is_admin(self) -> bool:
        return self.role == AccountRole.ADMIN.value

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    @classmethod
    def open_pending(
        cls,
        name,
        email,
        password_hash,
        phone=None,
        address=None,
        postal_code=None,
        ttl_minutes=10,
    ):
        """Open a pending account holding a fresh registration code."""
        now = datetime.now(UTC)
        account = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            phone=phone or None,
            address=address,
            postal_code=postal_code or None,
            role=AccountRole.USER.value,
            is_active=False,
            is_email_verified=False,
            is_phone_verified=False,
            registration_otp=OneTimeCode.issue(ttl_minutes, now),
            created_at=now,
            updated_at=now,
        )
        account.raise_(
            RegistrationStarted(
                account_id=str(account.id),
                email=account.email,
                restarted="false",
                started_at=now,
            )
        )
        return account

    @classmethod
    def create_admin(cls, name, email, password_hash, phone=None):
        """An admin starts active, with both contact channels verified."""
        now = datetime.now(UTC)
        account = cls(
            name=name,
            email=normalize_email(email),
            password_hash=password_hash,
            phone=phone or None,
            role=AccountRole.ADMIN.value,
            is_active=True,
            is_email_verified=True,
            is_phone_verified=bool(phone),
            created_at=now,
            activated_at=now,
            updated_at=now,
        )
        account.raise_(AdminAccountCreated(account_id=str(account.id), email=account.email, created_at=now))
        return account

    def restart_registration(self, name, password_hash, phone=None, address=None, postal_code=None, ttl_minutes=10):
        """Overwrite a pending signup in place and issue a new registration code."""
        if self.is_active:
            raise Conflict("User already registered. Please log in")

        now = datetime.now(UTC)
        with atomic_change(self):
            self.name = name
            self.password_hash = password_hash
            self.phone = phone or None
            self.address = address
            self.postal_code = postal_code or None
            self.registration_otp = OneTimeCode.issue(ttl_minutes, now)
            self.updated_at = now

        self.raise_(
            RegistrationStarted(
                account_id=str(self.id),
                email=self.email,
                restarted="true",
                started_at=now,
            )
        )

    def reissue_registration_code(self, ttl_minutes=10):
        if self.is_active:
            raise Conflict("Account is already active")

        now = datetime.now(UTC)
        self.registration_otp = OneTimeCode.issue(ttl_minutes, now)
        self.updated_at = now
        self.raise_(RegistrationCodeReissued(account_id=str(self.id), email=self.email, reissued_at=now))

    def activate(self, code):
        """Redeem the registration code. Receiving it proves the email address."""
        if self.is_active:
            raise Conflict("Account is already active. Please log in")

        now = datetime.now(UTC)
        _redeem(self.registration_otp, code, now)

        with atomic_change(self):
            self.is_active = True
            self.is_email_verified = True
            self.registration_otp = None
            self.activated_at = now
            self.updated_at = now

        self.raise_(AccountActivated(account_id=str(self.id), email=self.email, activated_at=now))

    # -------------------------------------------------------------------
    # Contact verification
    # -------------------------------------------------------------------
    def issue_email_code(self, ttl_minutes=10):
        if self.is_email_verified:
            raise Conflict("Email is already verified")

        now = datetime.now(UTC)
        self.email_otp = OneTimeCode.issue(ttl_minutes, now)
        self.updated_at = now
        self.raise_(EmailCodeIssued(account_id=str(self.id), issued_at=now))

    def verify_email(self, code):
        if self.is_email_verified:
            raise Conflict("Email is already verified")

        now = datetime.now(UTC)
        _redeem(self.email_otp, code, now)

        with atomic_change(self):
            self.is_email_verified = True
            self.email_otp = None
            self.updated_at = now

        self.raise_(EmailVerified(account_id=str(self.id), email=self.email, verified_at=now))

    def issue_phone_code(self, ttl_minutes=10):
        if not self.phone:
            raise PreconditionFailed("Please add a phone number to your profile first")
        if self.is_phone_verified:
            raise Conflict("Phone is already verified")

        now = datetime.now(UTC)
        self.phone_otp = OneTimeCode.issue(ttl_minutes, now)
        self.updated_at = now
        self.raise_(PhoneCodeIssued(account_id=str(self.id), issued_at=now))

    def verify_phone(self, code):
        if not self.phone:
            raise PreconditionFailed("Please add a phone number to your profile first")
        if self.is_phone_verified:
            raise Conflict("Phone is already verified")

        now = datetime.now(UTC)
        _redeem(self.phone_otp, code, now)

        with atomic_change(self):
            self.is_phone_verified = True
            self.phone_otp = None
            self.updated_at = now

        self.raise_(PhoneVerified(account_id=str(self.id), phone=self.phone, verified_at=now))

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def update_profile(self, name=_UNSET, phone=_UNSET, address=_UNSET, postal_code=_UNSET):
        now = datetime.now(UTC)
        phone_changed = phone is not _UNSET and (phone or None) != self.phone

        with atomic_change(self):
            if name is not _UNSET:
                self.name = name
            if phone_changed:
                self.phone = phone or None
                self.is_phone_verified = False
                self.phone_otp = None
            if address is not _UNSET:
                self.address = address
            if postal_code is not _UNSET:
                self.postal_code = postal_code or None
            self.updated_at = now

        self.raise_(
            ProfileUpdated(
                account_id=str(self.id),
                name=self.name,
                phone=self.phone,
                address=self.address,
                postal_code=self.postal_code,
                phone_verification_reset=str(phone_changed).lower(),
                updated_at=now,
            )
        )


@storefront.repository(part_of=Account)
class AccountRepository:
    def find_by_email(self, email) -> Account | None:
        matches = self._dao.query.filter(email=normalize_email(email)).all().items
        return matches[0] if matches else None

    def admin_exists(self) -> bool:
        return bool(self._dao.query.filter(role=AccountRole.ADMIN.value).all().items)
