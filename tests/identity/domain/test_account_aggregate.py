from datetime import UTC, datetime, timedelta

import pytest
from protean.exceptions import ValidationError
from protean.utils import DomainObjects
from protean.utils.reflection import declared_fields

from storefront.identity.account.account import Account, AccountRole, OneTimeCode
from storefront.identity.account.events import (
    AccountActivated,
    EmailVerified,
    PhoneVerified,
    ProfileUpdated,
    RegistrationStarted,
)
from storefront.shared.errors import CodeExpired, Conflict, InvalidCode, PreconditionFailed


def _pending(**overrides):
    defaults = {
        "name": "Asha Rao",
        "email": "Asha@Example.com",
        "password_hash": "hashed",
        "phone": "9876543210",
        "address": "12 MG Road",
        "postal_code": "560001",
    }
    defaults.update(overrides)
    return Account.open_pending(**defaults)


def _active(**overrides):
    account = _pending(**overrides)
    account.activate(account.registration_otp.code)
    account._events.clear()
    return account


def _expired_code():
    return OneTimeCode(code="123456", expires_at=datetime.now(UTC) - timedelta(minutes=1))


def test_account_aggregate_element_type():
    assert Account.element_type == DomainObjects.AGGREGATE


def test_account_has_code_slots():
    fields = declared_fields(Account)
    assert all(name in fields for name in ("registration_otp", "email_otp", "phone_otp"))


class TestOpenPending:
    def test_starts_pending_with_code(self):
        account = _pending()
        assert account.is_active is False
        assert account.is_email_verified is False
        assert account.role == AccountRole.USER.value
        assert account.registration_otp is not None
        assert account.created_at is not None

    def test_email_is_normalized(self):
        assert _pending().email == "asha@example.com"

    def test_raises_registration_started(self):
        account = _pending()
        event = account._events[-1]
        assert isinstance(event, RegistrationStarted)
        assert event.restarted == "false"

    def test_rejects_malformed_email(self):
        with pytest.raises(ValidationError) as exc:
            _pending(email="not-an-email")
        assert "email" in exc.value.messages

    def test_rejects_malformed_phone(self):
        with pytest.raises(ValidationError) as exc:
            _pending(phone="1234567890")
        assert "phone" in exc.value.messages

    def test_rejects_postal_code_starting_with_zero(self):
        with pytest.raises(ValidationError) as exc:
            _pending(postal_code="012345")
        assert "postal_code" in exc.value.messages

    def test_contact_fields_are_optional(self):
        account = _pending(phone=None, address=None, postal_code=None)
        assert account.phone is None


class TestRestartRegistration:
    def test_overwrites_details_and_issues_new_code(self):
        account = _pending()
        account.restart_registration(name="Asha R", password_hash="new-hash", phone="9123456780")

        assert account.name == "Asha R"
        assert account.password_hash == "new-hash"
        assert account.phone == "9123456780"
        assert account.registration_otp is not None
        assert account.is_active is False
        assert account._events[-1].restarted == "true"

    def test_active_account_cannot_restart(self):
        account = _active()
        with pytest.raises(Conflict):
            account.restart_registration(name="Again", password_hash="x")


class TestActivate:
    def test_activates_with_correct_code(self):
        account = _pending()
        account.activate(account.registration_otp.code)

        assert account.is_active is True
        assert account.is_email_verified is True
        assert account.registration_otp is None
        assert account.activated_at is not None
        assert isinstance(account._events[-1], AccountActivated)

    def test_wrong_code_is_rejected(self):
        account = _pending()
        wrong = "000000" if account.registration_otp.code != "000000" else "111111"
        with pytest.raises(InvalidCode):
            account.activate(wrong)
        assert account.is_active is False
        assert account.registration_otp is not None

    def test_expired_code_is_rejected(self):
        account = _pending()
        account.registration_otp = _expired_code()
        with pytest.raises(CodeExpired):
            account.activate("123456")
        assert account.is_active is False

    def test_wrong_code_wins_over_expiry(self):
        account = _pending()
        account.registration_otp = _expired_code()
        with pytest.raises(InvalidCode):
            account.activate("654321")

    def test_already_active_is_a_conflict(self):
        account = _active()
        with pytest.raises(Conflict):
            account.activate("123456")

    def test_active_account_cannot_hold_registration_code(self):
        account = _active()
        with pytest.raises(ValidationError):
            account.registration_otp = OneTimeCode.issue()


class TestEmailVerification:
    def test_activation_already_verifies_email(self):
        account = _active()
        with pytest.raises(Conflict):
            account.issue_email_code()

    def test_issue_and_verify(self):
        account = _active()
        account.is_email_verified = False
        account.issue_email_code()
        account.verify_email(account.email_otp.code)

        assert account.is_email_verified is True
        assert account.email_otp is None
        assert isinstance(account._events[-1], EmailVerified)

    def test_verify_without_code_issued(self):
        account = _active()
        account.is_email_verified = False
        with pytest.raises(InvalidCode):
            account.verify_email("123456")

    def test_expired_email_code(self):
        account = _active()
        account.is_email_verified = False
        account.email_otp = _expired_code()
        with pytest.raises(CodeExpired):
            account.verify_email("123456")


class TestPhoneVerification:
    def test_issue_and_verify(self):
        account = _active()
        account.issue_phone_code()
        code = account.phone_otp.code
        account.verify_phone(code)

        assert account.is_phone_verified is True
        assert account.phone_otp is None
        assert isinstance(account._events[-1], PhoneVerified)

    def test_issue_requires_phone(self):
        account = _active(phone=None)
        with pytest.raises(PreconditionFailed):
            account.issue_phone_code()

    def test_verify_requires_phone(self):
        account = _active(phone=None)
        with pytest.raises(PreconditionFailed):
            account.verify_phone("123456")

    def test_already_verified_is_a_conflict(self):
        account = _active()
        account.issue_phone_code()
        account.verify_phone(account.phone_otp.code)
        with pytest.raises(Conflict):
            account.issue_phone_code()

    def test_wrong_phone_code(self):
        account = _active()
        account.issue_phone_code()
        wrong = "000000" if account.phone_otp.code != "000000" else "111111"
        with pytest.raises(InvalidCode):
            account.verify_phone(wrong)
        assert account.is_phone_verified is False


class TestUpdateProfile:
    def test_updates_only_given_fields(self):
        account = _active()
        account.update_profile(name="Asha R.")
        assert account.name == "Asha R."
        assert account.address == "12 MG Road"
        assert isinstance(account._events[-1], ProfileUpdated)

    def test_phone_change_resets_verification(self):
        account = _active()
        account.issue_phone_code()
        account.verify_phone(account.phone_otp.code)

        account.update_profile(phone="9123456780")
        assert account.phone == "9123456780"
        assert account.is_phone_verified is False
        assert account._events[-1].phone_verification_reset == "true"

    def test_same_phone_keeps_verification(self):
        account = _active()
        account.issue_phone_code()
        account.verify_phone(account.phone_otp.code)

        account.update_profile(phone="9876543210")
        assert account.is_phone_verified is True

    def test_invalid_postal_code_is_rejected(self):
        account = _active()
        with pytest.raises(ValidationError):
            account.update_profile(postal_code="12345")


class TestCreateAdmin:
    def test_admin_starts_active_and_verified(self):
        admin = Account.create_admin(name="Admin", email="admin@example.com", password_hash="h")
        assert admin.is_admin
        assert admin.is_active is True
        assert admin.is_email_verified is True
        assert admin.is_phone_verified is False
        assert admin.registration_otp is None
