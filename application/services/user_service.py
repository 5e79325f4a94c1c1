"""
用户应用服务（application/services）- 注册、登录与测试登录
"""
from typing import Callable
import secrets
import uuid

from email_validator import EmailNotValidError, validate_email

from application.dto import DummyLoginDTO, LoginDTO, RegisterDTO, TokenDTO, UserResponseDTO
from application.mappers import to_user_dto
from application.services.token_service import TokenService
from core.config import settings
from core.logging_config import get_logger
from domain.common.exceptions import (
    InvalidEmailException,
    PasswordIsRequiredException,
    UnknownRoleNameException,
)
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.services.authorization import AuthorizationService
from domain.user.entity import User, UserRole, parse_role
from domain.user.service import PasswordService


logger = get_logger(__name__)


def _normalize_email(email: str) -> str:
    try:
        return validate_email(email or "", check_deliverability=False).normalized
    except EmailNotValidError:
        raise InvalidEmailException(email)


def _require_password(password: str) -> str:
    if not password:
        raise PasswordIsRequiredException()
    return password


class UserApplicationService:
    """用户应用服务 - 处理应用层逻辑"""

    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        authorization: AuthorizationService,
        token_service: TokenService,
    ):
        self._uow_factory = uow_factory
        self._authorization = authorization
        self._token_service = token_service

    def _token(self, token: str) -> TokenDTO:
        return TokenDTO(access_token=token, expires_in=self._token_service.expires_in)

    async def register(self, data: RegisterDTO) -> UserResponseDTO:
        """注册新用户；未知角色名回退为 client"""
        email = _normalize_email(data.email)
        password = _require_password(data.password)

        role = parse_role(data.role)
        if role is None:
            logger.warning("register_unknown_role", role=data.role)
            role = UserRole.CLIENT

        user = await self._authorization.sign_up(email, password, role)
        logger.info("user_registered", user_id=str(user.id), role=user.role.role_name)
        return to_user_dto(user)

    async def login(self, data: LoginDTO) -> TokenDTO:
        email = _normalize_email(data.email)
        password = _require_password(data.password)
        return self._token(await self._authorization.sign_in(email, password))

    async def dummy_login(self, data: DummyLoginDTO) -> TokenDTO:
        """测试登录：直接为两个固定用户之一签发令牌，不校验密码"""
        role = parse_role(data.role)
        if role is None:
            raise UnknownRoleNameException(data.role)
        user_id = uuid.UUID(
            settings.DUMMY_MODERATOR_ID if role is UserRole.MODERATOR else settings.DUMMY_CLIENT_ID
        )
        return self._token(self._token_service.create_access_token(user_id))

    async def seed_dummy_users(self) -> None:
        """确保测试登录使用的两个固定用户存在（启动时调用，幂等）"""
        fixed = (
            (uuid.UUID(settings.DUMMY_MODERATOR_ID), UserRole.MODERATOR),
            (uuid.UUID(settings.DUMMY_CLIENT_ID), UserRole.CLIENT),
        )
        async with self._uow_factory() as uow:
            for user_id, role in fixed:
                if await uow.user_repository.get_by_id(user_id) is not None:
                    continue
                user = User(
                    id=user_id,
                    email=f"dummy-{role.role_name}@pvz.local",
                    # 随机密码：固定用户只能通过测试登录使用
                    hashed_password=PasswordService.hash_password(secrets.token_urlsafe(32)),
                    role=role,
                )
                await uow.user_repository.create(user)
                logger.info("dummy_user_seeded", user_id=str(user_id), role=role.role_name)
