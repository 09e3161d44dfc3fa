"""Registration — start, resend and complete a signup."""

from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.account.account import Account
from storefront.identity.security import hash_password
from storefront.shared.errors import Conflict, NotFound


@storefront.command(part_of="Account")
class StartRegistration:
    """Open (or reopen) a pending account and issue a registration code."""

    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=128, sanitize=False)
    phone: String(max_length=10)
    address: String(max_length=500)
    postal_code: String(max_length=6)


@storefront.command(part_of="Account")
class ResendRegistrationCode:
    email: String(required=True, max_length=254)


@storefront.command(part_of="Account")
class CompleteRegistration:
    email: String(required=True, max_length=254)
    code: String(required=True, max_length=64)


@storefront.command_handler(part_of=Account)
class RegistrationHandler:
    @handle(StartRegistration)
    def start_registration(self, command):
        repo = current_domain.repository_for(Account)
        ttl = get_settings().otp_ttl_minutes
        password_hash = hash_password(command.password)

        account = repo.find_by_email(command.email)
        if account is not None and account.is_active:
            raise Conflict("User already registered. Please log in")

        if account is None:
            account = Account.open_pending(
                name=command.name,
                email=command.email,
                password_hash=password_hash,
                phone=command.phone,
                address=command.address,
                postal_code=command.postal_code,
                ttl_minutes=ttl,
            )
        else:
            account.restart_registration(
                name=command.name,
                password_hash=password_hash,
                phone=command.phone,
                address=command.address,
                postal_code=command.postal_code,
                ttl_minutes=ttl,
            )

        repo.add(account)
        return str(account.id)

    @handle(ResendRegistrationCode)
    def resend_registration_code(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.find_by_email(command.email)
        if account is None or account.is_active:
            raise NotFound("No pending registration found for this email")

        account.reissue_registration_code(get_settings().otp_ttl_minutes)
        repo.add(account)
        return str(account.id)

    @handle(CompleteRegistration)
    def complete_registration(self, command):
        repo = current_domain.repository_for(Account)
        account = repo.find_by_email(command.email)
        if account is None:
            raise NotFound("No registration found for this email")

        account.activate(command.code)
        repo.add(account)
        return str(account.id)
