import pytest

from conftest import ADMIN_KEY, BrokenNotifier, client_for, make_settings
from leadintake.main import create_app


@pytest.mark.asyncio
async def test_health(app):
    async with client_for(app) as ac:
        r = await ac.get("/health")
        assert r.status_code == 200
        assert r.json() == {"ok": True}
        r = await ac.get("/api/v1/health")
        assert r.json() == {"ok": True}


@pytest.mark.asyncio
async def test_submit_waitlist_returns_id(app, notifier):
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/waitlist", json={"name": "Ada Lovelace", "email": "ADA@X.COM", "city": "Lagos"})
        assert r.status_code == 200
        body = r.json()
        assert body["ok"] is True
        assert isinstance(body["id"], int)
    assert notifier.sent[0]["to"] == "ada@x.com"


@pytest.mark.asyncio
async def test_submit_courier_and_legacy_paths(app):
    async with client_for(app) as ac:
        r1 = await ac.post("/api/v1/intake/courier", json={"name": "Kofi", "email": "kofi@example.com", "route": "Accra-Kumasi"})
        r2 = await ac.post("/api/v1/courier", json={"name": "Ama", "email": "ama@example.com", "route": "Tema-Accra"})
        r3 = await ac.post("/api/v1/waitlist", json={"name": "Ada", "email": "ada@example.com", "city": "Lagos"})
    assert r1.status_code == r2.status_code == r3.status_code == 200
    assert r2.json()["id"] > r1.json()["id"]


@pytest.mark.asyncio
async def test_validation_error_envelope(app, admin_headers):
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/waitlist", json={"name": "A", "email": "bad"})
        assert r.status_code == 400
        assert r.json() == {
            "ok": False,
            "error": "name: must be at least 2 characters; email: invalid format; city: required",
        }
        listing = await ac.get("/api/v1/admin/waitlist", headers=admin_headers)
        assert listing.json()["items"] == []


@pytest.mark.asyncio
async def test_malformed_json_is_400(app):
    async with client_for(app) as ac:
        r = await ac.post(
            "/api/v1/intake/waitlist",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
    assert r.status_code == 400
    assert r.json()["ok"] is False


@pytest.mark.asyncio
async def test_unknown_intake_type(app):
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/payments", json={"name": "Ada"})
    assert r.status_code == 404
    assert r.json() == {"ok": False, "error": "Unknown intake type"}


@pytest.mark.asyncio
async def test_notification_failure_still_returns_id():
    app = create_app(make_settings(), notifier=BrokenNotifier())
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/waitlist", json={"name": "Ada", "email": "ada@example.com", "city": "Lagos"})
    assert r.status_code == 200
    assert r.json()["ok"] is True


@pytest.mark.asyncio
async def test_storage_failure_hides_driver_message(app):
    from leadintake.core.database import Base

    Base.metadata.drop_all(bind=app.state.engine)
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/waitlist", json={"name": "Ada", "email": "ada@example.com", "city": "Lagos"})
    assert r.status_code == 500
    assert r.json() == {"ok": False, "error": "Database error"}


@pytest.mark.asyncio
async def test_unknown_route_uses_envelope(app):
    async with client_for(app) as ac:
        r = await ac.get("/api/v1/nope")
    assert r.status_code == 404
    assert r.json()["ok"] is False


@pytest.mark.asyncio
async def test_oversized_body_rejected(notifier):
    app = create_app(make_settings(MAX_BODY_BYTES=64), notifier=notifier)
    async with client_for(app) as ac:
        r = await ac.post("/api/v1/intake/courier", json={"name": "Kofi", "email": "kofi@example.com", "route": "x" * 150})
    assert r.status_code == 413
    assert r.json() == {"ok": False, "error": "Payload too large"}
    assert r.headers["x-content-type-options"] == "nosniff"


@pytest.mark.asyncio
async def test_oversized_chunked_body_rejected(notifier):
    app = create_app(make_settings(MAX_BODY_BYTES=64), notifier=notifier)

    async def chunks():
        yield b'{"name": "Kofi", "email": "kofi@example.com", "route": "'
        for _ in range(10):
            yield b"x" * 20
        yield b'"}'

    async with client_for(app) as ac:
        r = await ac.post(
            "/api/v1/intake/courier", content=chunks(), headers={"content-type": "application/json"}
        )
        listing = await ac.get("/api/v1/admin/couriers", headers={"x-admin-key": ADMIN_KEY})
    assert "content-length" not in r.request.headers
    assert r.status_code == 413
    assert r.json() == {"ok": False, "error": "Payload too large"}
    assert r.headers["x-content-type-options"] == "nosniff"
    assert listing.json()["items"] == []


@pytest.mark.asyncio
async def test_security_headers(app):
    async with client_for(app) as ac:
        r = await ac.get("/")
    assert r.headers["x-content-type-options"] == "nosniff"
    assert r.headers["x-frame-options"] == "DENY"
