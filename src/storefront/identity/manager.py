"""IdentityActivationManager — signup activation, contact verification and sessions.

Each operation dispatches one command; codes are sent after that command's
unit of work commits. Delivery is best-effort: a failed send is logged and
reported in the returned ``CodeDispatch``, never raised.
"""

import json
import threading
from dataclasses import dataclass

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.identity.account.account import Account
from storefront.identity.account.profile import CreateAdmin, UpdateProfile
from storefront.identity.account.registration import (
    CompleteRegistration,
    ResendRegistrationCode,
    StartRegistration,
)
from storefront.identity.account.verification import (
    IssueEmailCode,
    IssuePhoneCode,
    VerifyEmail,
    VerifyPhone,
)
from storefront.identity.security import create_session_token, decode_session_token, verify_password
from storefront.notifications.gateway import DeliveryResult, NotificationGateway
from storefront.shared.errors import NotFound, Unauthenticated

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CodeDispatch:
    """Where a one-time code was sent and whether delivery succeeded.

    ``dev_code`` carries the code itself only when ``EXPOSE_DEV_OTP`` is on.
    """

    destination: str
    delivered: bool
    dev_code: str | None = None


@dataclass(frozen=True)
class ActivationResult:
    account: Account
    token: str


class IdentityActivationManager:
    # Serializes the email lookup and insert of new accounts.
    _registration_lock = threading.Lock()

    def __init__(self, gateway: NotificationGateway | None = None):
        self.gateway = gateway or NotificationGateway()

    # -------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------
    def initiate(self, name, email, password, phone=None, address=None, postal_code=None) -> CodeDispatch:
        command = StartRegistration(
            name=name,
            email=email,
            password=password,
            phone=phone or None,
            address=address,
            postal_code=postal_code or None,
        )
        with self._registration_lock:
            account_id = current_domain.process(command, asynchronous=False)
        account = self.get_account(account_id)
        logger.info("registration_started", account_id=account_id, email=account.email)
        return self._send_registration_code(account)

    def resend(self, email) -> CodeDispatch:
        account_id = current_domain.process(ResendRegistrationCode(email=email), asynchronous=False)
        account = self.get_account(account_id)
        logger.info("registration_code_reissued", account_id=account_id)
        return self._send_registration_code(account)

    def complete(self, email, otp) -> ActivationResult:
        account_id = current_domain.process(CompleteRegistration(email=email, code=otp), asynchronous=False)
        account = self.get_account(account_id)
        logger.info("account_activated", account_id=account_id)

        self.gateway.send_template(account.email, "welcome", {"name": account.name})
        return ActivationResult(account=account, token=create_session_token(account_id))

    # -------------------------------------------------------------------
    # Contact verification
    # -------------------------------------------------------------------
    def send_email_code(self, account_id) -> CodeDispatch:
        current_domain.process(IssueEmailCode(account_id=account_id), asynchronous=False)
        account = self.get_account(account_id)
        code = account.email_otp.code
        delivery = self.gateway.send_template(
            account.email,
            "email_verification",
            {"name": account.name, "code": code, "ttl_minutes": get_settings().otp_ttl_minutes},
        )
        return self._dispatched(account.email, delivery, code)

    def verify_email(self, account_id, otp) -> Account:
        current_domain.process(VerifyEmail(account_id=account_id, code=otp), asynchronous=False)
        logger.info("email_verified", account_id=str(account_id))
        return self.get_account(account_id)

    def send_phone_code(self, account_id) -> CodeDispatch:
        current_domain.process(IssuePhoneCode(account_id=account_id), asynchronous=False)
        account = self.get_account(account_id)
        code = account.phone_otp.code
        delivery = self.gateway.send_template_sms(
            account.phone,
            "phone_verification",
            {"code": code, "ttl_minutes": get_settings().otp_ttl_minutes},
        )
        return self._dispatched(account.phone, delivery, code)

    def verify_phone(self, account_id, otp) -> Account:
        current_domain.process(VerifyPhone(account_id=account_id, code=otp), asynchronous=False)
        logger.info("phone_verified", account_id=str(account_id))
        return self.get_account(account_id)

    # -------------------------------------------------------------------
    # Sessions and profile
    # -------------------------------------------------------------------
    def login(self, email, password) -> ActivationResult:
        account = current_domain.repository_for(Account).find_by_email(email or "")
        if account is None or not verify_password(password or "", account.password_hash):
            raise Unauthenticated("Invalid email or password")
        if not account.is_active:
            raise Unauthenticated("Please complete registration by verifying your email first")

        logger.info("account_logged_in", account_id=str(account.id))
        return ActivationResult(account=account, token=create_session_token(str(account.id)))

    def authenticate(self, token) -> Account:
        account_id = decode_session_token(token)
        try:
            account = current_domain.repository_for(Account).get(account_id)
        except ObjectNotFoundError:
            raise Unauthenticated("Not authorized, account not found") from None
        if not account.is_active:
            raise Unauthenticated("Not authorized, account is not active")
        return account

    def update_profile(self, account_id, **changes) -> Account:
        current_domain.process(
            UpdateProfile(account_id=account_id, changes=json.dumps(changes)),
            asynchronous=False,
        )
        return self.get_account(account_id)

    def create_admin(self, name, email, password, phone=None) -> ActivationResult:
        command = CreateAdmin(name=name, email=email, password=password, phone=phone or None)
        with self._registration_lock:
            account_id = current_domain.process(command, asynchronous=False)
        logger.info("admin_created", account_id=account_id)
        return ActivationResult(account=self.get_account(account_id), token=create_session_token(account_id))

    def get_account(self, account_id) -> Account:
        try:
            return current_domain.repository_for(Account).get(account_id)
        except ObjectNotFoundError:
            raise NotFound("Account not found") from None

    # -------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------
    def _send_registration_code(self, account: Account) -> CodeDispatch:
        code = account.registration_otp.code
        delivery = self.gateway.send_template(
            account.email,
            "registration_code",
            {"name": account.name, "code": code, "ttl_minutes": get_settings().otp_ttl_minutes},
        )
        return self._dispatched(account.email, delivery, code)

    def _dispatched(self, destination: str, delivery: DeliveryResult, code: str) -> CodeDispatch:
        return CodeDispatch(
            destination=destination,
            delivered=delivery.success,
            dev_code=code if get_settings().expose_dev_otp else None,
        )
