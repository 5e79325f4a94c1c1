"""
用户领域实体 - 包含核心业务规则
"""
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional
import uuid


class UserRole(IntEnum):
    """用户角色（固定两种，不单独持久化为实体）"""

    CLIENT = 1
    MODERATOR = 2

    @property
    def role_name(self) -> str:
        return "client" if self is UserRole.CLIENT else "moderator"


# 外部接口使用的角色名称 -> 角色；employee 是 client 在接口上的名字
_ROLE_NAMES = {
    "moderator": UserRole.MODERATOR,
    "employee": UserRole.CLIENT,
    "client": UserRole.CLIENT,
}


def parse_role(name: str) -> Optional[UserRole]:
    """解析角色名称，未知名称返回 None（由调用方决定如何处理）"""
    return _ROLE_NAMES.get((name or "").strip().lower())


@dataclass
class User:
    """用户实体 - 领域核心"""

    id: uuid.UUID
    email: str
    hashed_password: str
    role: UserRole = UserRole.CLIENT

    @classmethod
    def new(cls, email: str, hashed_password: str) -> "User":
        """业务规则：新用户总是以 client 角色创建"""
        return cls(id=uuid.uuid4(), email=email, hashed_password=hashed_password)

    @property
    def is_moderator(self) -> bool:
        return self.role is UserRole.MODERATOR

    def grant_moderator(self) -> None:
        """业务规则：授予 moderator 角色"""
        self.role = UserRole.MODERATOR
