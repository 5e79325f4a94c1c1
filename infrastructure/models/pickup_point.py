"""PVZ 数据库模型"""
from sqlalchemy import BigInteger, Column, DateTime, Identity, SmallInteger
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class PickupPointModel(Base):
    """
    PVZ 表

    record_number 为数据库分配的单调序号，报表分页以它为游标。
    """
    __tablename__ = "pvzs"

    id = Column(UUID(as_uuid=True), primary_key=True)
    record_number = Column(BigInteger, Identity(always=False), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, comment="注册时间")
    city_id = Column(SmallInteger, nullable=False, comment="城市")

    def __repr__(self):
        return f"<PickupPointModel(id={self.id}, city_id={self.city_id})>"
