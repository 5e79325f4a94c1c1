"""受理与商品数据库模型"""
from sqlalchemy import Column, DateTime, ForeignKey, Index, SmallInteger
from sqlalchemy.dialects.postgresql import UUID

from .base import Base


class ReceptionModel(Base):
    __tablename__ = "receptions"

    id = Column(UUID(as_uuid=True), primary_key=True)
    pvz_id = Column(UUID(as_uuid=True), ForeignKey("pvzs.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
    status = Column(SmallInteger, nullable=False, default=1, comment="1=in_progress, 2=closed")

    __table_args__ = (
        Index("ix_receptions_pvz_created", "pvz_id", "created_at"),
        # 每个 PVZ 最多一个进行中的受理
        Index(
            "uq_receptions_pvz_in_progress",
            "pvz_id",
            unique=True,
            postgresql_where=(status == 1),
        ),
    )

    def __repr__(self):
        return f"<ReceptionModel(id={self.id}, pvz_id={self.pvz_id}, status={self.status})>"


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(UUID(as_uuid=True), primary_key=True)
    reception_id = Column(
        UUID(as_uuid=True), ForeignKey("receptions.id", ondelete="CASCADE"), nullable=False
    )
    created_at = Column(DateTime(timezone=True), nullable=False)
    category_id = Column(SmallInteger, nullable=False)

    __table_args__ = (
        Index("ix_products_reception_created", "reception_id", "created_at"),
    )

    def __repr__(self):
        return f"<ProductModel(id={self.id}, reception_id={self.reception_id})>"
