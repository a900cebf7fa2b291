"""Account Schemas — signup/login request bodies and the auth response.

Invariants:
    - Request fields are optional at this layer; AccountDirectory reports missing ones
      as ValidationError so every "missing field" answer has the same shape
    - AuthResponse exposes id, token and username only (never salt or hash)
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class SignupRequest(BaseModel):
    email: str | None = None
    username: str | None = None
    password: str | None = None
    newsletter: bool | None = False


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class AccountSummary(BaseModel):
    username: str


class AuthResponse(BaseModel):
    """Returned by signup and login."""
    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    auth_token: str = Field(alias="authToken")
    account: AccountSummary

    @classmethod
    def from_account(cls, account) -> "AuthResponse":
        return cls(
            id=account.id,
            auth_token=account.auth_token,
            account=AccountSummary(username=account.username),
        )
