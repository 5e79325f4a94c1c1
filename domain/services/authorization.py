"""Authorization service port.

The token format is an implementation detail of the concrete service; the
domain only ever sees an opaque ``str`` credential.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.common.exceptions import InsufficientPrivilegesException
from domain.user.entity import User, UserRole


class AuthorizationService(ABC):
    """认证/授权端口：签发凭据、注册用户、凭据解析为用户"""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> str:
        """校验邮箱与密码并签发凭据"""

    @abstractmethod
    async def sign_up(self, email: str, password: str, role: UserRole) -> User:
        """注册新用户"""

    @abstractmethod
    async def user_from_credentials(self, credentials: str) -> User:
        """将凭据解析为用户；空、格式错误、过期或用户不存在均抛出 InsufficientPrivilegesException"""

    async def validate_privileges(self, credentials: str, *allowed_roles: UserRole) -> User:
        """访问控制闸门

        allowed_roles 为空时只要求已认证；否则用户角色必须与其中之一完全匹配。
        """
        user = await self.user_from_credentials(credentials)
        if not allowed_roles:
            return user
        if user.role in allowed_roles:
            return user
        raise InsufficientPrivilegesException()
