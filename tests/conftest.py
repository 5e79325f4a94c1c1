"""Pytest bootstrap configuration.

Ensure mandatory environment variables are set before test collection
and module imports that depend on application settings.
"""
from datetime import datetime, timedelta, timezone
import itertools
import os

# Mandatory secret key for settings validation
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest  # noqa: E402

from application.services.authorization_service import JWTAuthorizationService  # noqa: E402
from application.services.pvz_service import PickupPointApplicationService  # noqa: E402
from application.services.reception_service import ReceptionApplicationService  # noqa: E402
from application.services.token_service import TokenService  # noqa: E402
from application.services.user_service import UserApplicationService  # noqa: E402
from application.dto import DummyLoginDTO  # noqa: E402
from tests.fakes import InMemoryStore  # noqa: E402


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(expire_minutes=5)


@pytest.fixture
def authorization(store, token_service) -> JWTAuthorizationService:
    return JWTAuthorizationService(store.uow_factory, token_service)


@pytest.fixture
def user_service(store, authorization, token_service) -> UserApplicationService:
    return UserApplicationService(store.uow_factory, authorization, token_service)


@pytest.fixture
def pvz_service(store, authorization) -> PickupPointApplicationService:
    return PickupPointApplicationService(store.uow_factory, authorization)


@pytest.fixture
def reception_service(store, authorization) -> ReceptionApplicationService:
    return ReceptionApplicationService(store.uow_factory, authorization)


@pytest.fixture
async def moderator_token(user_service) -> str:
    await user_service.seed_dummy_users()
    token = await user_service.dummy_login(DummyLoginDTO(role="moderator"))
    return token.access_token


@pytest.fixture
async def client_token(user_service) -> str:
    await user_service.seed_dummy_users()
    token = await user_service.dummy_login(DummyLoginDTO(role="employee"))
    return token.access_token


CLOCK_START = datetime(2025, 4, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def ticking_clock(monkeypatch):
    """Reception/product timestamps advance one second per call, starting at CLOCK_START."""
    ticks = itertools.count()
    monkeypatch.setattr(
        "domain.reception.entity._utcnow",
        lambda: CLOCK_START + timedelta(seconds=next(ticks)),
    )
    return CLOCK_START
