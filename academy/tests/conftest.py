from __future__ import annotations

import os

os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret"
os.environ["SUPABASE_URL"] = "http://auth.test"
os.environ["SUPABASE_ANON_KEY"] = "anon-key"
os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "service-role-key"
os.environ["GITHUB_API_URL"] = "http://github.test"
os.environ["PUBLIC_BASE_URL"] = "http://academy.test"

import uuid
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import academy.models  # noqa: F401  (registers every table on Base.metadata)
from academy.clients.github import GitHubClient
from academy.clients.identity_provider import IdentityProviderClient
from academy.core.config import get_settings
from academy.core.deps import get_github_client, get_identity_provider
from academy.core.security import create_access_token
from academy.db.base import Base
from academy.db.session import get_db
from academy.main import create_app
from academy.models.participant import Participant

Responder = Union[httpx.Response, Callable[[httpx.Request], httpx.Response]]


class StubTransport:
    """
    Records outgoing requests and answers from a (method, path) table.
    Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.routes: Dict[Tuple[str, str], Responder] = {}

    def on(self, method: str, path: str, status_code: int = 200, json: Any = None) -> None:
        self.routes[(method, path)] = httpx.Response(status_code, json=json if json is not None else {})

    def on_call(self, method: str, path: str, fn: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = fn

    def calls(self, method: str, path: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get((request.method, request.url.path))
        if responder is None:
            return httpx.Response(404, json={"msg": "not found"})
        if callable(responder) and not isinstance(responder, httpx.Response):
            return responder(request)
        return responder

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


def _enforce_foreign_keys(dbapi_connection, _record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest.fixture
def session_factory() -> Iterator[sessionmaker]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine, "connect", _enforce_foreign_keys)
    Base.metadata.create_all(engine)
    factory = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    try:
        yield factory
    finally:
        Base.metadata.drop_all(engine)
        engine.dispose()


@pytest.fixture
def db(session_factory: sessionmaker) -> Iterator[Session]:
    with session_factory() as session:
        yield session


@pytest.fixture
def auth_service() -> StubTransport:
    return StubTransport()


@pytest.fixture
def github_api() -> StubTransport:
    return StubTransport()


@pytest.fixture
def identity_provider(auth_service: StubTransport) -> IdentityProviderClient:
    return IdentityProviderClient(auth_service.client(), get_settings())


@pytest.fixture
def github_client(github_api: StubTransport) -> GitHubClient:
    return GitHubClient(github_api.client(), api_url=get_settings().github_api_url)


@pytest.fixture
def app(session_factory, identity_provider, github_client):
    app = create_app()

    def override_get_db() -> Iterator[Session]:
        with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_provider] = lambda: identity_provider
    app.dependency_overrides[get_github_client] = lambda: github_client
    return app


@pytest.fixture
def client(app) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


def make_token(
    user_id: Optional[str] = None,
    *,
    email: Optional[str] = None,
    user_name: Optional[str] = None,
    full_name: Optional[str] = None,
) -> str:
    metadata: Dict[str, Any] = {}
    if user_name:
        metadata["user_name"] = user_name
    if full_name:
        metadata["full_name"] = full_name
    claims: Dict[str, Any] = {"user_metadata": metadata}
    if email:
        claims["email"] = email
    return create_access_token(user_id or str(uuid.uuid4()), claims)


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def add_participant(session: Session, **overrides: Any) -> Participant:
    values: Dict[str, Any] = {
        "name": "Ada Lovelace",
        "nickname": "ada",
        "email": "ada@example.com",
        "role": "AI-SE",
        "team": "Alpha",
        "stream": "Tech",
        "avatar_url": "https://ui-avatars.com/api/?name=AL",
        "status": "approved",
    }
    values.update(overrides)
    participant = Participant(**values)
    session.add(participant)
    session.commit()
    return participant


def registration_body(**overrides: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "name": "Grace Hopper",
        "nickname": "grace_h",
        "email": "grace@example.com",
        "role": "FDE",
        "team": "Beta",
        "stream": "Tech",
    }
    body.update(overrides)
    return body
