import uuid

import pytest

from application.dto import DummyLoginDTO, LoginDTO, RegisterDTO
from core.config import settings
from domain.common.exceptions import (
    BadUserCredentialException,
    InsufficientPrivilegesException,
    InvalidEmailException,
    PasswordIsRequiredException,
    UnknownRoleNameException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from domain.user.entity import UserRole


async def test_register_then_login(user_service, authorization):
    user = await user_service.register(RegisterDTO(email="ivan@mail.ru", password="secret", role="moderator"))
    assert user.email == "ivan@mail.ru"
    assert user.role == "moderator"

    token = await user_service.login(LoginDTO(email="ivan@mail.ru", password="secret"))
    assert token.token_type == "bearer"
    assert token.expires_in == 300

    resolved = await authorization.user_from_credentials(token.access_token)
    assert resolved.id == user.id
    assert resolved.role is UserRole.MODERATOR


async def test_register_stores_hashed_password(user_service, store):
    user = await user_service.register(RegisterDTO(email="olga@mail.ru", password="secret", role="employee"))
    stored = store.users[user.id]
    assert stored.hashed_password != "secret"
    assert stored.role is UserRole.CLIENT


async def test_register_unknown_role_falls_back_to_client(user_service):
    user = await user_service.register(RegisterDTO(email="petr@mail.ru", password="secret", role="admin"))
    assert user.role == "employee"


async def test_register_validates_input(user_service):
    with pytest.raises(InvalidEmailException):
        await user_service.register(RegisterDTO(email="not-an-email", password="secret"))
    with pytest.raises(PasswordIsRequiredException):
        await user_service.register(RegisterDTO(email="anna@mail.ru", password=""))


async def test_register_duplicate_email(user_service):
    await user_service.register(RegisterDTO(email="dup@mail.ru", password="secret"))
    with pytest.raises(UserAlreadyExistsException):
        await user_service.register(RegisterDTO(email="dup@mail.ru", password="other"))


async def test_login_rejects_bad_credentials(user_service):
    await user_service.register(RegisterDTO(email="max@mail.ru", password="secret"))
    with pytest.raises(BadUserCredentialException):
        await user_service.login(LoginDTO(email="max@mail.ru", password="wrong"))
    with pytest.raises(BadUserCredentialException):
        await user_service.login(LoginDTO(email="nobody@mail.ru", password="secret"))


async def test_dummy_login_issues_token_for_fixed_user(user_service, authorization):
    await user_service.seed_dummy_users()
    token = await user_service.dummy_login(DummyLoginDTO(role="moderator"))
    user = await authorization.user_from_credentials(token.access_token)
    assert user.id == uuid.UUID(settings.DUMMY_MODERATOR_ID)
    assert user.is_moderator


async def test_dummy_login_unknown_role(user_service):
    with pytest.raises(UnknownRoleNameException):
        await user_service.dummy_login(DummyLoginDTO(role="admin"))


async def test_seed_dummy_users_is_idempotent(user_service, store):
    await user_service.seed_dummy_users()
    await user_service.seed_dummy_users()
    assert len(store.users) == 2


@pytest.mark.parametrize("credentials", ["", "garbage", "a.b.c"])
async def test_user_from_credentials_rejects_bad_tokens(authorization, credentials):
    with pytest.raises(InsufficientPrivilegesException):
        await authorization.user_from_credentials(credentials)


async def test_token_for_missing_user_is_rejected(authorization, token_service):
    token = token_service.create_access_token(uuid.uuid4())
    with pytest.raises(InsufficientPrivilegesException) as ei:
        await authorization.user_from_credentials(token)
    assert isinstance(ei.value.__cause__, UserNotFoundException)


async def test_get_user_unknown_id(authorization, moderator_token):
    missing = uuid.uuid4()
    with pytest.raises(UserNotFoundException) as ei:
        await authorization.get_user(missing)
    assert ei.value.error_type == "UserDoesNotExist"
    assert ei.value.details == {"user_id": str(missing)}

    seeded = await authorization.get_user(uuid.UUID(settings.DUMMY_MODERATOR_ID))
    assert seeded.role is UserRole.MODERATOR


async def test_validate_privileges_requires_exact_role(user_service, authorization, client_token, moderator_token):
    user = await authorization.validate_privileges(client_token)
    assert user.role is UserRole.CLIENT

    await authorization.validate_privileges(moderator_token, UserRole.MODERATOR)
    with pytest.raises(InsufficientPrivilegesException):
        await authorization.validate_privileges(client_token, UserRole.MODERATOR)
    with pytest.raises(InsufficientPrivilegesException):
        await authorization.validate_privileges(moderator_token, UserRole.CLIENT)
