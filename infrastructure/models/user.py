"""
用户数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import Column, String, SmallInteger, DateTime
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime, timezone

from .base import Base


class UserModel(Base):
    """
    用户数据库模型

    角色以 smallint 存储（1=client，2=moderator）
    """
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True)
    email = Column(String(255), unique=True, index=True, nullable=False, comment="邮箱")
    hashed_password = Column(String(255), nullable=False, comment="密码哈希")
    role_id = Column(SmallInteger, nullable=False, default=1, comment="角色")

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )

    def __repr__(self):
        return f"<UserModel(id={self.id}, email='{self.email}', role_id={self.role_id})>"
