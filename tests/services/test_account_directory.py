"""Account Directory — signup, login, and token resolution against a real store.

Invariants:
    - Second signup with the same email fails with ConflictError; first token still resolves
    - Login returns the id and token issued at signup
    - Unknown email and wrong password produce the same UnauthorizedError message
"""

import pytest

from marketplace.core.credentials import compute_hash
from marketplace.core.errors import ConflictError, UnauthorizedError, ValidationError
from marketplace.infrastructure.account_store import SqlAccountStore


async def test_create_persists_account_with_credentials(accounts):
    account = await accounts.create("a@b.com", "alice", "pw123", True)
    assert account.id is not None
    assert account.username == "alice"
    assert account.newsletter is True
    assert account.avatar is None
    assert account.password_hash == compute_hash("pw123", account.password_salt)
    assert account.password_hash != "pw123"
    assert account.auth_token


async def test_salts_and_tokens_differ_between_accounts(accounts):
    a = await accounts.create("a@b.com", "alice", "pw123", False)
    b = await accounts.create("c@d.com", "bob", "pw123", False)
    assert a.password_salt != b.password_salt
    assert a.password_hash != b.password_hash
    assert a.auth_token != b.auth_token


async def test_duplicate_email_conflicts_and_first_token_survives(accounts):
    first = await accounts.create("a@b.com", "alice", "pw123", False)
    with pytest.raises(ConflictError):
        await accounts.create("a@b.com", "alice2", "other", False)
    found = await accounts.find_by_token(first.auth_token)
    assert found is not None
    assert found.id == first.id


async def test_email_is_case_sensitive(accounts):
    await accounts.create("a@b.com", "alice", "pw123", False)
    other = await accounts.create("A@B.com", "alice", "pw123", False)
    assert other.email == "A@B.com"


@pytest.mark.parametrize("email,username,password", [
    (None, "alice", "pw"), ("a@b.com", "", "pw"), ("a@b.com", "alice", None),
])
async def test_missing_fields_rejected_without_write(accounts, email, username, password):
    with pytest.raises(ValidationError):
        await accounts.create(email, username, password, False)
    if email:
        assert await accounts.find_by_email(email) is None


async def test_unique_index_maps_race_to_conflict(test_db):
    store = SqlAccountStore(test_db)
    fields = dict(
        username="x", newsletter=False, password_salt="s",
        password_hash="h", auth_token="t1",
    )
    await store.add(email="race@b.com", **fields)
    with pytest.raises(ConflictError):
        await store.add(email="race@b.com", **{**fields, "auth_token": "t2"})


async def test_find_by_email_absent_returns_none(accounts):
    assert await accounts.find_by_email("nope@x.com") is None


async def test_find_by_token_absent_returns_none(accounts):
    assert await accounts.find_by_token("not-a-token") is None


# ─── login ───────────────────────────────────────────────────────

async def test_login_round_trip_returns_same_id_and_token(accounts):
    created = await accounts.create("a@b.com", "alice", "pw123", False)
    logged_in = await accounts.login("a@b.com", "pw123")
    assert logged_in.id == created.id
    assert logged_in.auth_token == created.auth_token


async def test_login_never_rotates_token(accounts):
    created = await accounts.create("a@b.com", "alice", "pw123", False)
    token = created.auth_token
    await accounts.login("a@b.com", "pw123")
    await accounts.login("a@b.com", "pw123")
    assert (await accounts.find_by_email("a@b.com")).auth_token == token


async def test_login_failures_share_one_message(accounts):
    await accounts.create("a@b.com", "alice", "pw123", False)
    with pytest.raises(UnauthorizedError) as wrong_password:
        await accounts.login("a@b.com", "wrong")
    with pytest.raises(UnauthorizedError) as unknown_email:
        await accounts.login("nope@x.com", "pw123")
    assert wrong_password.value.message == unknown_email.value.message


async def test_login_missing_fields(accounts):
    with pytest.raises(ValidationError):
        await accounts.login("a@b.com", "")


# ─── authenticate ────────────────────────────────────────────────

async def test_authenticate_missing_header(accounts):
    with pytest.raises(UnauthorizedError) as exc:
        await accounts.authenticate(None)
    assert exc.value.message == "missing token"


async def test_authenticate_unissued_token(accounts):
    with pytest.raises(UnauthorizedError) as exc:
        await accounts.authenticate("Bearer never-issued-token")
    assert exc.value.message == "invalid token"


async def test_authenticate_bare_prefix_is_invalid(accounts):
    with pytest.raises(UnauthorizedError) as exc:
        await accounts.authenticate("Bearer ")
    assert exc.value.message == "invalid token"


async def test_authenticate_resolves_matching_account(accounts):
    await accounts.create("other@b.com", "other", "pw", False)
    created = await accounts.create("a@b.com", "alice", "pw123", False)
    principal = await accounts.authenticate(f"Bearer {created.auth_token}")
    assert principal.id == created.id
