"""
Pytest fixtures for the team roster tests.

Every test gets its own in-memory SQLite database and a temporary uploads
directory, so tests never touch ./team_roster.db or static/uploads.
"""

import os

# Settings are read on first import of team_roster.core.config
os.environ["DATABASE_URI"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-1234"
os.environ["PUBLIC_API_BASE_URL"] = "http://test/api/v1"

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from team_roster import models  # noqa: F401
from team_roster.api.endpoints.team import get_cv_storage
from team_roster.auth.jwt import create_access_token
from team_roster.core.database import get_db
from team_roster.repositories.team_member import TeamMemberRepository
from team_roster.roster.gateway import HttpGateway, ServiceGateway
from team_roster.schemas.team_member import TeamMemberCreate
from team_roster.services.team_member import TeamMemberService
from team_roster.utils.cv_storage import CVStorage

PDF_BYTES = b"%PDF-1.4\n% test cv\n"


def make_token(role: str = "admin", actor_id: str = "actor-1") -> str:
    return create_access_token({"sub": actor_id, "role": role, "email": f"{actor_id}@example.com"})


def auth_headers(role: str = "admin") -> dict:
    return {"Authorization": f"Bearer {make_token(role)}"}


async def add_member(service: TeamMemberService, name: str, role: str = "Engineer", **fields):
    """Create a member through the service and return its response model."""
    return await service.create_team_member(TeamMemberCreate(name=name, role=role, **fields), "actor-1")


# =============================================================================
# DATABASE
# =============================================================================


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def cv_storage(tmp_path):
    return CVStorage(upload_base_path=str(tmp_path / "uploads"), url_prefix="/static/uploads")


@pytest.fixture
def repository(session):
    return TeamMemberRepository(session)


@pytest.fixture
def service(repository, cv_storage):
    return TeamMemberService(repository, cv_storage)


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
def app(session_factory, cv_storage):
    from team_roster.main import create_app

    app = create_app()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_cv_storage] = lambda: cv_storage
    return app


@pytest.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test/api/v1") as client:
        yield client


@pytest.fixture
def admin_headers():
    return auth_headers("admin")


@pytest.fixture
def editor_headers():
    return auth_headers("editor")


# =============================================================================
# GATEWAYS
# =============================================================================


@pytest.fixture
def service_gateway(session_factory, cv_storage):
    return ServiceGateway(session_factory, cv_storage, actor_id="actor-1")


@pytest.fixture
def http_gateway(client):
    return HttpGateway(client=client, token=make_token("admin"))
