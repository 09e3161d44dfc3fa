"""Session dependencies for FastAPI routes."""

import structlog
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from storefront.identity.account.account import Account
from storefront.identity.manager import IdentityActivationManager
from storefront.shared.errors import Forbidden, Unauthenticated

logger = structlog.get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_identity_manager() -> IdentityActivationManager:
    return IdentityActivationManager()


async def optional_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> Account | None:
    """The session's account, or None for guests. A bad token is treated as a guest."""
    if credentials is None:
        return None
    try:
        return identity.authenticate(credentials.credentials)
    except Unauthenticated as exc:
        logger.info("optional_session_ignored", reason=exc.message)
        return None


async def current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> Account:
    if credentials is None:
        raise Unauthenticated("Not authorized, no token")
    return identity.authenticate(credentials.credentials)


async def admin_account(account: Account = Depends(current_account)) -> Account:
    if not account.is_admin:
        raise Forbidden("Not authorized as admin")
    return account
