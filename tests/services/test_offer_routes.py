"""Offer Routes — publish (protected), search, fetch, and fallback routes over HTTP.

Invariants:
    - Publish requires a bearer token resolved before any write
    - Search answers {count, matchedOffers} and never 400s on malformed filters
    - Unknown offer id and unknown route both answer 404
"""

from uuid import uuid4

from httpx import ASGITransport, AsyncClient

from marketplace.infrastructure import asset_uploader
from marketplace.infrastructure.asset_uploader import get_uploader
from marketplace.main import app

FORM = {
    "title": "Red Jacket", "description": "Warm jacket", "price": "35",
    "condition": "Neuf", "city": "Paris", "brand": "Zara", "size": "M", "color": "Rouge",
}


def _auth(account) -> dict:
    return {"Authorization": f"Bearer {account.auth_token}"}


async def _publish(client, account, **overrides):
    return await client.post("/offer/publish", data={**FORM, **overrides}, headers=_auth(account))


# ─── publish ─────────────────────────────────────────────────────

async def test_publish_without_picture(client, seller):
    res = await _publish(client, seller)
    assert res.status_code == 201
    body = res.json()
    assert body["image"] is None
    assert body["title"] == "Red Jacket"
    assert body["price"] == 35.0
    assert body["owner"] == {"username": "Seller", "avatar": None}
    assert body["details"] == [
        {"MARQUE": "Zara"}, {"TAILLE": "M"}, {"ÉTAT": "Neuf"},
        {"COULEUR": "Rouge"}, {"EMPLACEMENT": "Paris"},
    ]


async def test_publish_with_picture(client, seller, fake_uploader):
    res = await client.post(
        "/offer/publish",
        data=FORM,
        files={"picture": ("jacket.png", b"\x89PNG\r\n", "image/png")},
        headers=_auth(seller),
    )
    assert res.status_code == 201
    assert res.json()["image"]["secure_url"] == "https://res.example.com/img1.jpg"
    assert fake_uploader.calls == [(b"\x89PNG\r\n", "image/png")]


async def test_publish_upload_failure_is_internal_and_writes_nothing(client, seller, fake_uploader):
    fake_uploader.fail = True
    res = await client.post(
        "/offer/publish",
        data=FORM,
        files={"picture": ("jacket.png", b"img", "image/png")},
        headers=_auth(seller),
    )
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "UPLOAD_ERROR"
    assert (await client.get("/offers")).json()["count"] == 0


async def test_publish_without_token(client):
    res = await client.post("/offer/publish", data=FORM)
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "missing token"
    assert res.headers["www-authenticate"] == "Bearer"


async def test_publish_with_unissued_token(client, fake_uploader):
    res = await client.post(
        "/offer/publish",
        data=FORM,
        files={"picture": ("jacket.png", b"img", "image/png")},
        headers={"Authorization": "Bearer never-issued"},
    )
    assert res.status_code == 401
    assert res.json()["error"]["message"] == "invalid token"
    assert fake_uploader.calls == []
    assert (await client.get("/offers")).json()["count"] == 0


async def test_publish_owner_is_token_holder(client, seller):
    signup = await client.post(
        "/user/signup",
        json={"email": "buyer@example.com", "username": "Buyer", "password": "pw"},
    )
    res = await client.post(
        "/offer/publish", data=FORM,
        headers={"Authorization": f"Bearer {signup.json()['authToken']}"},
    )
    assert res.json()["owner"]["username"] == "Buyer"


async def test_publish_negative_price_rejected(client, seller):
    res = await _publish(client, seller, price="-5")
    assert res.status_code == 400


async def test_publish_non_numeric_price_rejected(client, seller):
    res = await _publish(client, seller, price="cheap")
    assert res.status_code == 400


# ─── search ──────────────────────────────────────────────────────

async def test_search_envelope_and_filters(client, seller):
    for price in range(0, 120, 10):
        await _publish(client, seller, title=f"Item {price}", price=str(price))
    res = await client.get(
        "/offers",
        params={"priceMin": 10, "priceMax": 50, "sort": "price-desc", "page": 1, "limit": 5},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["count"] == 5
    assert [o["price"] for o in body["matchedOffers"]] == [50.0, 40.0, 30.0, 20.0, 10.0]


async def test_search_title_filter(client, seller):
    await _publish(client, seller, title="Red Jacket")
    await _publish(client, seller, title="Blue Scarf")
    res = await client.get("/offers", params={"title": "JACKET"})
    body = res.json()
    assert body["count"] == 1
    assert body["matchedOffers"][0]["title"] == "Red Jacket"


async def test_search_ignores_malformed_params(client, seller):
    await _publish(client, seller)
    res = await client.get(
        "/offers",
        params={"priceMin": "abc", "priceMax": "", "sort": "zzz", "page": "-3", "limit": "x"},
    )
    assert res.status_code == 200
    assert res.json()["count"] == 1


async def test_search_owner_projection_only(client, seller):
    await _publish(client, seller)
    offer = (await client.get("/offers")).json()["matchedOffers"][0]
    assert set(offer["owner"]) == {"username", "avatar"}


# ─── fetch ───────────────────────────────────────────────────────

async def test_get_offer_by_id(client, seller):
    created = (await _publish(client, seller)).json()
    res = await client.get(f"/offers/{created['id']}")
    assert res.status_code == 200
    fetched = res.json()
    fetched.pop("created_at")
    created.pop("created_at")
    assert fetched == created


async def test_get_unknown_offer_is_not_found(client):
    res = await client.get(f"/offers/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_get_malformed_offer_id_is_not_found(client):
    res = await client.get("/offers/not-an-id")
    assert res.status_code == 404


async def test_search_with_out_of_range_pagination_falls_back(client, seller):
    for price in ("10", "20"):
        await _publish(client, seller, price=price)
    huge = "99999999999999999999"
    for params in ({"page": huge}, {"limit": huge}, {"page": huge, "limit": huge}):
        res = await client.get("/offers", params=params)
        assert res.status_code == 200
        body = res.json()
        assert body["count"] == 2
        assert len(body["matchedOffers"]) == 2


async def test_reads_do_not_need_the_uploader(client, seller, monkeypatch):
    created = (await _publish(client, seller)).json()
    app.dependency_overrides.pop(get_uploader)
    monkeypatch.setattr(asset_uploader, "uploader", None)

    assert (await client.get("/offers")).json()["count"] == 1
    assert (await client.get(f"/offers/{created['id']}")).status_code == 200


# ─── fallback routes ─────────────────────────────────────────────

async def test_welcome_route(client):
    res = await client.get("/")
    assert res.status_code == 200
    assert "message" in res.json()


async def test_unknown_route(client):
    res = await client.get("/nowhere/at/all")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "This route does not exist"


async def test_unknown_route_head_is_not_found(client):
    res = await client.head("/nowhere")
    assert res.status_code == 404


async def test_unknown_route_options_is_not_found(client):
    res = await client.options("/nowhere")
    assert res.status_code == 404
    assert res.json()["error"]["message"] == "This route does not exist"


async def test_unhandled_failure_reports_message(client, seller, monkeypatch):
    async def explode(self, query):
        raise RuntimeError("store exploded")

    monkeypatch.setattr(
        "marketplace.services.offer_directory.OfferDirectory.search", explode,
    )
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as raw_client:
        res = await raw_client.get("/offers")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "INTERNAL_ERROR"
    assert res.json()["error"]["message"] == "store exploded"
    assert "Traceback" not in res.text
