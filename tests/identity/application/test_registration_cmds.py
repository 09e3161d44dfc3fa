from datetime import UTC, datetime, timedelta

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.identity.account.account import Account, OneTimeCode
from storefront.identity.account.registration import (
    CompleteRegistration,
    ResendRegistrationCode,
    StartRegistration,
)
from storefront.identity.security import verify_password
from storefront.shared.errors import CodeExpired, Conflict, InvalidCode, NotFound


def _start(**overrides):
    defaults = {
        "name": "Asha Rao",
        "email": "asha@example.com",
        "password": "secret-123",
        "phone": "9876543210",
        "address": "12 MG Road, Bengaluru",
        "postal_code": "560001",
    }
    defaults.update(overrides)
    return current_domain.process(StartRegistration(**defaults), asynchronous=False)


def _account(account_id):
    return current_domain.repository_for(Account).get(account_id)


def _complete(email, code):
    return current_domain.process(CompleteRegistration(email=email, code=code), asynchronous=False)


class TestStartRegistration:
    def test_opens_pending_account(self):
        account = _account(_start())
        assert account.is_active is False
        assert account.registration_otp is not None
        assert verify_password("secret-123", account.password_hash)

    def test_password_is_never_stored_plain(self):
        account = _account(_start())
        assert account.password_hash != "secret-123"

    def test_short_password_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _start(password="12345")
        assert "password" in exc.value.messages

    def test_second_start_reuses_pending_account(self):
        first = _start()
        second = _start(name="Asha R")
        assert first == second

        account = _account(second)
        assert account.name == "Asha R"
        assert len(current_domain.repository_for(Account)._dao.query.all().items) == 1

    def test_email_match_is_case_insensitive(self):
        first = _start()
        second = _start(email="ASHA@example.com")
        assert first == second

    def test_active_account_is_a_conflict(self):
        account_id = _start()
        _complete("asha@example.com", _account(account_id).registration_otp.code)

        with pytest.raises(Conflict) as exc:
            _start()
        assert exc.value.message == "User already registered. Please log in"


class TestResendRegistrationCode:
    def test_issues_new_code_for_pending_account(self):
        account_id = _start()
        result = current_domain.process(ResendRegistrationCode(email="asha@example.com"), asynchronous=False)
        assert result == account_id
        assert _account(account_id).registration_otp is not None

    def test_unknown_email_is_not_found(self):
        with pytest.raises(NotFound):
            current_domain.process(ResendRegistrationCode(email="nobody@example.com"), asynchronous=False)

    def test_active_account_is_not_found(self):
        account_id = _start()
        _complete("asha@example.com", _account(account_id).registration_otp.code)
        with pytest.raises(NotFound):
            current_domain.process(ResendRegistrationCode(email="asha@example.com"), asynchronous=False)


class TestCompleteRegistration:
    def test_activates_account(self):
        account_id = _start()
        _complete("asha@example.com", _account(account_id).registration_otp.code)

        account = _account(account_id)
        assert account.is_active is True
        assert account.is_email_verified is True
        assert account.registration_otp is None

    def test_unknown_email_is_not_found(self):
        with pytest.raises(NotFound):
            _complete("nobody@example.com", "123456")

    def test_wrong_code_is_rejected(self):
        account_id = _start()
        code = _account(account_id).registration_otp.code
        wrong = "000000" if code != "000000" else "111111"

        with pytest.raises(InvalidCode):
            _complete("asha@example.com", wrong)
        assert _account(account_id).is_active is False

    def test_expired_code_is_rejected(self):
        repo = current_domain.repository_for(Account)
        account = repo.get(_start())
        account.registration_otp = OneTimeCode(code="123456", expires_at=datetime.now(UTC) - timedelta(minutes=1))
        repo.add(account)

        with pytest.raises(CodeExpired):
            _complete("asha@example.com", "123456")
        assert repo.get(account.id).is_active is False

    def test_code_from_before_restart_no_longer_works(self):
        account_id = _start()
        old_code = _account(account_id).registration_otp.code
        _start()
        new_code = _account(account_id).registration_otp.code

        if old_code != new_code:
            with pytest.raises(InvalidCode):
                _complete("asha@example.com", old_code)
        _complete("asha@example.com", new_code)
        assert _account(account_id).is_active is True

    def test_second_completion_is_a_conflict(self):
        account_id = _start()
        code = _account(account_id).registration_otp.code
        _complete("asha@example.com", code)

        with pytest.raises(Conflict):
            _complete("asha@example.com", code)
