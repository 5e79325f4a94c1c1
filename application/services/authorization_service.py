"""
认证/授权服务实现 - JWT 令牌 + 用户仓储
"""
from typing import Callable, Optional
import uuid

from application.services.token_service import TokenService
from core.exceptions import TokenExpiredException, TokenInvalidException
from core.logging_config import get_logger
from domain.common.exceptions import (
    BadUserCredentialException,
    InsufficientPrivilegesException,
    UserAlreadyExistsException,
    UserNotFoundException,
)
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.services.authorization import AuthorizationService
from domain.user.entity import User, UserRole
from domain.user.service import PasswordService


logger = get_logger(__name__)


class JWTAuthorizationService(AuthorizationService):
    """基于 JWT 的授权服务"""

    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        token_service: Optional[TokenService] = None,
    ):
        self._uow_factory = uow_factory
        self.token_service = token_service or TokenService()

    async def sign_in(self, email: str, password: str) -> str:
        async with self._uow_factory(readonly=True) as uow:
            user = await uow.user_repository.get_by_email(email)
        if user is None or not PasswordService.verify_password(password, user.hashed_password):
            logger.info("sign_in_rejected", email=email)
            raise BadUserCredentialException()
        return self.token_service.create_access_token(user.id)

    async def sign_up(self, email: str, password: str, role: UserRole) -> User:
        async with self._uow_factory() as uow:
            if await uow.user_repository.get_by_email(email) is not None:
                raise UserAlreadyExistsException(email)
            user = User.new(email, PasswordService.hash_password(password))
            if role is UserRole.MODERATOR:
                user.grant_moderator()
            return await uow.user_repository.create(user)

    async def user_from_credentials(self, credentials: str) -> User:
        if not credentials:
            raise InsufficientPrivilegesException()
        try:
            user_id = self.token_service.decode_user_id(credentials)
        except (TokenExpiredException, TokenInvalidException) as e:
            logger.info("credentials_rejected", reason=e.error_type)
            raise InsufficientPrivilegesException() from e

        try:
            return await self.get_user(user_id)
        except UserNotFoundException as e:
            logger.info("credentials_rejected", reason=e.error_type, user_id=str(user_id))
            raise InsufficientPrivilegesException() from e

    async def get_user(self, user_id: uuid.UUID) -> User:
        """按ID加载用户，不存在时抛出 UserNotFoundException"""
        async with self._uow_factory(readonly=True) as uow:
            user = await uow.user_repository.get_by_id(user_id)
        if user is None:
            raise UserNotFoundException(str(user_id))
        return user
