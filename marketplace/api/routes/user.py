"""User Routes — signup and login.

Invariants:
    - Signup answers 201 with {id, authToken, account: {username}}
    - Login answers 200 with the same shape and the token issued at signup
    - Salt and hash never appear in a response
"""

import logging

from fastapi import APIRouter, Depends, status

from marketplace.api.deps import get_account_directory
from marketplace.schemas.account import AuthResponse, LoginRequest, SignupRequest
from marketplace.services.account_directory import AccountDirectory

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/user", tags=["user"])


@router.post(
    "/signup", response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
async def signup(
    body: SignupRequest,
    accounts: AccountDirectory = Depends(get_account_directory),
):
    """Create an account and return its bearer token."""
    account = await accounts.create(
        body.email, body.username, body.password, body.newsletter,
    )
    return AuthResponse.from_account(account)


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    accounts: AccountDirectory = Depends(get_account_directory),
):
    """Check credentials and return the account's existing token."""
    account = await accounts.login(body.email, body.password)
    return AuthResponse.from_account(account)
