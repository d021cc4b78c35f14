"""Shared test fixtures."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from signoff.config import settings
from signoff.db.base import Base
# Import all models to register with Base.metadata
import signoff.db.models  # noqa: F401
from signoff.db.models.org import OrgRow
from signoff.db.models.user import UserRow
from signoff.events.activity import ActivityNotifier
from signoff.models.caller import Caller

ORG_ID = "org_acme"
OTHER_ORG_ID = "org_globex"


class RecordingNotifier(ActivityNotifier):
    """Captures activity events instead of delivering them."""

    def __init__(self, fail: bool = False):
        self.events: list[dict] = []
        self.fail = fail

    async def created(self, entity_kind, entity_id, label, org_id=None):
        self.events.append(
            {"kind": "created", "entity_kind": entity_kind, "entity_id": entity_id, "label": label}
        )
        if self.fail:
            raise RuntimeError("activity sink unavailable")

    async def status_changed(self, entity_kind, entity_id, label, from_status=None, to_status=None, org_id=None):
        self.events.append(
            {
                "kind": "status_changed",
                "entity_kind": entity_kind,
                "entity_id": entity_id,
                "label": label,
                "from_status": from_status,
                "to_status": to_status,
            }
        )
        if self.fail:
            raise RuntimeError("activity sink unavailable")


def make_token(user_id: str, roles: list[str] | None = None, expires_in: int = 3600) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": user_id,
        "roles": roles or [],
        "iss": settings.jwt_issuer,
        "aud": settings.jwt_audience,
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def auth_headers(user_id: str) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


@pytest.fixture
async def db_engine():
    """Create an in-memory SQLite async engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)() as seed_session:
        seed_session.add_all([
            OrgRow(org_id=ORG_ID, name="Acme Remediation", slug="acme"),
            OrgRow(org_id=OTHER_ORG_ID, name="Globex Abatement", slug="globex"),
        ])
        await seed_session.flush()
        seed_session.add_all([
            UserRow(user_id="usr_owner", org_id=ORG_ID, email="owner@acme.test", full_name="Olive Owner", role="owner"),
            UserRow(user_id="usr_admin", org_id=ORG_ID, email="admin@acme.test", full_name="Ada Admin", role="admin"),
            UserRow(user_id="usr_member", org_id=ORG_ID, email="member@acme.test", full_name="Sam Member", role="member"),
            UserRow(user_id="usr_globex", org_id=OTHER_ORG_ID, email="admin@globex.test", full_name="Gil Globex", role="admin"),
            UserRow(user_id="usr_orphan", org_id=None, email="orphan@nowhere.test", full_name="No Org", role="member"),
        ])
        await seed_session.commit()

    yield engine
    await engine.dispose()


@pytest.fixture
async def db_session(db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def admin():
    return Caller(user_id="usr_admin", org_id=ORG_ID, role="admin", full_name="Ada Admin")


@pytest.fixture
def member():
    return Caller(user_id="usr_member", org_id=ORG_ID, role="member", full_name="Sam Member")


@pytest.fixture
def owner():
    return Caller(user_id="usr_owner", org_id=ORG_ID, role="owner", full_name="Olive Owner")


@pytest.fixture
def globex_admin():
    return Caller(user_id="usr_globex", org_id=OTHER_ORG_ID, role="admin", full_name="Gil Globex")


@pytest.fixture
def app(db_engine, notifier):
    """Create a test application instance with in-memory DB."""
    from signoff.main import create_app

    _app = create_app()
    session_factory = async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)
    _app.state.db_engine = db_engine
    _app.state.db_session_factory = session_factory
    _app.state.activity_notifier = notifier
    _app.state.allow_redecision = False
    return _app


@pytest.fixture
async def client(app):
    """Async HTTP test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
