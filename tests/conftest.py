import os

# Keep the module-level app off disk and off Redis while tests import it
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from httpx import ASGITransport, AsyncClient

from leadintake.core.config import Settings
from leadintake.core.database import build_engine, build_session_factory, init_db
from leadintake.main import create_app
from leadintake.models.intake import CourierApplication, WaitlistEntry
from leadintake.services.record_store import RecordStore

ADMIN_KEY = "s3cret-admin-key"


class FakeNotifier:
    def __init__(self):
        self.sent = []

    def notify(self, to, subject, html):
        self.sent.append({"to": to, "subject": subject, "html": html})


class BrokenNotifier:
    def notify(self, to, subject, html):
        raise RuntimeError("smtp down")


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "ADMIN_KEY": ADMIN_KEY,
        "RATE_LIMIT_ENABLED": False,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def client_for(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest.fixture
def session_factory():
    engine = build_engine("sqlite://")
    init_db(engine)
    yield build_session_factory(engine)
    engine.dispose()


@pytest.fixture
def waitlist_store(session_factory):
    return RecordStore(session_factory, WaitlistEntry)


@pytest.fixture
def courier_store(session_factory):
    return RecordStore(session_factory, CourierApplication)


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def app(notifier):
    return create_app(make_settings(), notifier=notifier)


@pytest.fixture
def admin_headers():
    return {"x-admin-key": ADMIN_KEY}
