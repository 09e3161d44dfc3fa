"""FastAPI endpoints for account activation, sessions and contact verification."""

from fastapi import APIRouter, Depends

from storefront.config import get_settings
from storefront.identity.account.account import Account
from storefront.identity.api.dependencies import current_account, get_identity_manager
from storefront.identity.api.schemas import (
    AccountEnvelope,
    AccountResponse,
    CodeSentResponse,
    CompleteRegistrationRequest,
    CreateAdminRequest,
    EmailRequest,
    InitiateRegistrationRequest,
    LoginRequest,
    OtpRequest,
    SessionResponse,
    UpdateProfileRequest,
)
from storefront.identity.manager import ActivationResult, CodeDispatch, IdentityActivationManager
from storefront.shared.errors import Forbidden

router = APIRouter(prefix="/auth", tags=["auth"])


def _code_sent(message: str, dispatch: CodeDispatch) -> CodeSentResponse:
    return CodeSentResponse(
        message=message,
        destination=dispatch.destination,
        delivered=dispatch.delivered,
        dev_otp=dispatch.dev_code,
    )


def _session(result: ActivationResult) -> SessionResponse:
    return SessionResponse(token=result.token, account=AccountResponse.from_account(result.account))


@router.post("/initiate-register", response_model=CodeSentResponse)
async def initiate_register(
    body: InitiateRegistrationRequest,
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> CodeSentResponse:
    dispatch = identity.initiate(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
        address=body.address,
        postal_code=body.postal_code,
    )
    return _code_sent("Verification code sent to your email", dispatch)


@router.post("/complete-register", status_code=201, response_model=SessionResponse)
async def complete_register(
    body: CompleteRegistrationRequest,
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> SessionResponse:
    return _session(identity.complete(body.email, body.otp))


@router.post("/resend-register-otp", response_model=CodeSentResponse)
async def resend_register_otp(
    body: EmailRequest,
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> CodeSentResponse:
    return _code_sent("A new verification code has been sent", identity.resend(body.email))


@router.post("/login", response_model=SessionResponse)
async def login(
    body: LoginRequest,
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> SessionResponse:
    return _session(identity.login(body.email, body.password))


@router.get("/me", response_model=AccountResponse)
async def me(account: Account = Depends(current_account)) -> AccountResponse:
    return AccountResponse.from_account(account)


@router.put("/profile", response_model=AccountResponse)
async def update_profile(
    body: UpdateProfileRequest,
    account: Account = Depends(current_account),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> AccountResponse:
    changes = body.model_dump(exclude_unset=True)
    return AccountResponse.from_account(identity.update_profile(str(account.id), **changes))


@router.post("/send-email-otp", response_model=CodeSentResponse)
async def send_email_otp(
    account: Account = Depends(current_account),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> CodeSentResponse:
    return _code_sent("Verification code sent to your email", identity.send_email_code(str(account.id)))


@router.post("/verify-email", response_model=AccountEnvelope)
async def verify_email(
    body: OtpRequest,
    account: Account = Depends(current_account),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> AccountEnvelope:
    verified = identity.verify_email(str(account.id), body.otp)
    return AccountEnvelope(message="Email verified", account=AccountResponse.from_account(verified))


@router.post("/send-phone-otp", response_model=CodeSentResponse)
async def send_phone_otp(
    account: Account = Depends(current_account),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> CodeSentResponse:
    return _code_sent("Verification code sent to your phone", identity.send_phone_code(str(account.id)))


@router.post("/verify-phone", response_model=AccountEnvelope)
async def verify_phone(
    body: OtpRequest,
    account: Account = Depends(current_account),
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> AccountEnvelope:
    verified = identity.verify_phone(str(account.id), body.otp)
    return AccountEnvelope(message="Phone verified", account=AccountResponse.from_account(verified))


@router.post("/create-admin", status_code=201, response_model=SessionResponse)
async def create_admin(
    body: CreateAdminRequest,
    identity: IdentityActivationManager = Depends(get_identity_manager),
) -> SessionResponse:
    if get_settings().is_production:
        raise Forbidden("Admin bootstrap is disabled in production")
    return _session(identity.create_admin(body.name, body.email, body.password, body.phone))
