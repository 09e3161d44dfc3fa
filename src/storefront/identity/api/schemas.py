"""Pydantic request/response schemas for the auth API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Request Schemas ---


class InitiateRegistrationRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Rao",
                    "email": "asha@example.com",
                    "password": "s3cret-pass",
                    "phone": "9876543210",
                    "address": "12 MG Road, Bengaluru",
                    "postal_code": "560001",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    phone: str | None = Field(None, max_length=10)
    address: str | None = Field(None, max_length=500)
    postal_code: str | None = Field(None, max_length=6)


class CompleteRegistrationRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "asha@example.com", "otp": "482913"}]}}

    email: str = Field(..., max_length=254)
    otp: str = Field(..., max_length=64)


class EmailRequest(BaseModel):
    email: str = Field(..., max_length=254)


class LoginRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"email": "asha@example.com", "password": "s3cret-pass"}]}}

    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)


class OtpRequest(BaseModel):
    otp: str = Field(..., max_length=64)


class UpdateProfileRequest(BaseModel):
    model_config = {
        "json_schema_extra": {"examples": [{"name": "Asha R.", "phone": "9123456780", "postal_code": "560002"}]}
    }

    name: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=10)
    address: str | None = Field(None, max_length=500)
    postal_code: str | None = Field(None, max_length=6)


class CreateAdminRequest(BaseModel):
    name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=254)
    password: str = Field(..., max_length=128)
    phone: str | None = Field(None, max_length=10)


# --- Response Schemas ---


class AccountResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    address: str | None = None
    postal_code: str | None = None
    role: str
    is_active: bool
    is_email_verified: bool
    is_phone_verified: bool
    created_at: datetime | None = None

    @classmethod
    def from_account(cls, account) -> AccountResponse:
        return cls(
            id=str(account.id),
            name=account.name,
            email=account.email,
            phone=account.phone,
            address=account.address,
            postal_code=account.postal_code,
            role=account.role,
            is_active=account.is_active,
            is_email_verified=account.is_email_verified,
            is_phone_verified=account.is_phone_verified,
            created_at=account.created_at,
        )


class SessionResponse(BaseModel):
    token: str
    account: AccountResponse


class CodeSentResponse(BaseModel):
    message: str
    destination: str
    delivered: bool
    dev_otp: str | None = None


class AccountEnvelope(BaseModel):
    message: str
    account: AccountResponse
