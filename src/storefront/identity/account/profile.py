"""Profile updates and admin bootstrap."""

import json

from protean import handle
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.account.account import Account
from storefront.identity.account.verification import load_account
from storefront.identity.security import hash_password
from storefront.shared.errors import Conflict

_PROFILE_FIELDS = ("name", "phone", "address", "postal_code")


@storefront.command(part_of="Account")
class UpdateProfile:
    account_id: Identifier(required=True)
    changes: Text(required=True)  # JSON object holding only the fields being changed


@storefront.command(part_of="Account")
class CreateAdmin:
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254)
    password: String(required=True, min_length=6, max_length=128, sanitize=False)
    phone: String(max_length=10)


@storefront.command_handler(part_of=Account)
class AccountAdministrationHandler:
    @handle(UpdateProfile)
    def update_profile(self, command):
        repo = current_domain.repository_for(Account)
        account = load_account(repo, command.account_id)

        changes = json.loads(command.changes)
        account.update_profile(**{key: value for key, value in changes.items() if key in _PROFILE_FIELDS})
        repo.add(account)
        return str(account.id)

    @handle(CreateAdmin)
    def create_admin(self, command):
        repo = current_domain.repository_for(Account)
        if repo.admin_exists():
            raise Conflict("Admin already exists")
        if repo.find_by_email(command.email) is not None:
            raise Conflict("Email already registered")

        account = Account.create_admin(
            name=command.name,
            email=command.email,
            password_hash=hash_password(command.password),
            phone=command.phone,
        )
        repo.add(account)
        return str(account.id)
