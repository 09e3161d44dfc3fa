"""Post-activation contact verification — email and phone codes."""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.config import get_settings
from storefront.domain import storefront
from storefront.identity.account.account import Account
from storefront.shared.errors import NotFound


@storefront.command(part_of="Account")
class IssueEmailCode:
    account_id: Identifier(required=True)


@storefront.command(part_of="Account")
class VerifyEmail:
    account_id: Identifier(required=True)
    code: String(required=True, max_length=64)


@storefront.command(part_of="Account")
class IssuePhoneCode:
    account_id: Identifier(required=True)


@storefront.command(part_of="Account")
class VerifyPhone:
    account_id: Identifier(required=True)
    code: String(required=True, max_length=64)


def load_account(repo, account_id) -> Account:
    try:
        return repo.get(account_id)
    except ObjectNotFoundError:
        raise NotFound("Account not found") from None


@storefront.command_handler(part_of=Account)
class ContactVerificationHandler:
    @handle(IssueEmailCode)
    def issue_email_code(self, command):
        repo = current_domain.repository_for(Account)
        account = load_account(repo, command.account_id)
        account.issue_email_code(get_settings().otp_ttl_minutes)
        repo.add(account)
        return str(account.id)

    @handle(VerifyEmail)
    def verify_email(self, command):
        repo = current_domain.repository_for(Account)
        account = load_account(repo, command.account_id)
        account.verify_email(command.code)
        repo.add(account)
        return str(account.id)

    @handle(IssuePhoneCode)
    def issue_phone_code(self, command):
        repo = current_domain.repository_for(Account)
        account = load_account(repo, command.account_id)
        account.issue_phone_code(get_settings().otp_ttl_minutes)
        repo.add(account)
        return str(account.id)

    @handle(VerifyPhone)
    def verify_phone(self, command):
        repo = current_domain.repository_for(Account)
        account = load_account(repo, command.account_id)
        account.verify_phone(command.code)
        repo.add(account)
        return str(account.id)
