"""
用户仓储接口

用户只会被创建与查询：角色在注册时确定，之后不再变更。
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from .entity import User


class UserRepository(ABC):

    @abstractmethod
    async def create(self, user: User) -> User:
        """保存新用户；邮箱已被占用时抛出 UserAlreadyExistsException"""

    @abstractmethod
    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        """令牌解析后按 sub 查找用户"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """登录与注册查重使用；email 已规范化"""
