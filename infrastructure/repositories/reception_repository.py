"""
受理与商品仓储实现
"""
from typing import List
import uuid

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging_config import get_logger
from domain.common.exceptions import (
    AnotherOpenedReceptionException,
    InfrastructureException,
    ReceptionNotFoundException,
)
from domain.reception.entity import Product, ProductCategory, Reception, ReceptionStatus
from domain.reception.repository import ProductRepository, ReceptionFilter, ReceptionRepository
from infrastructure.models.reception import ProductModel, ReceptionModel


logger = get_logger(__name__)


def to_reception(model: ReceptionModel) -> Reception:
    return Reception(
        id=model.id,
        pvz_id=model.pvz_id,
        created_at=model.created_at,
        status=ReceptionStatus(model.status),
    )


def to_product(model: ProductModel) -> Product:
    return Product(
        id=model.id,
        reception_id=model.reception_id,
        created_at=model.created_at,
        category=ProductCategory(model.category_id),
    )


class SQLAlchemyReceptionRepository(ReceptionRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, reception: Reception) -> Reception:
        model = ReceptionModel(
            id=reception.id,
            pvz_id=reception.pvz_id,
            created_at=reception.created_at,
            status=int(reception.status),
        )
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            # 部分唯一索引兜底：同一 PVZ 并发开启受理
            if "uq_receptions_pvz_in_progress" in str(e.orig):
                logger.warning("open_reception_conflict", pvz_id=str(reception.pvz_id))
                raise AnotherOpenedReceptionException(str(reception.pvz_id)) from e
            raise InfrastructureException("failed to create reception") from e
        return to_reception(model)

    async def update(self, reception: Reception) -> Reception:
        result = await self.session.execute(
            select(ReceptionModel).where(ReceptionModel.id == reception.id)
        )
        model = result.scalar_one_or_none()
        if model is None:
            raise ReceptionNotFoundException(str(reception.id))

        model.pvz_id = reception.pvz_id
        model.created_at = reception.created_at
        model.status = int(reception.status)
        await self.session.flush()
        return to_reception(model)

    async def find_all(self, reception_filter: ReceptionFilter) -> List[Reception]:
        order = ReceptionModel.created_at.desc() if reception_filter.descending else ReceptionModel.created_at.asc()
        query = (
            select(ReceptionModel)
            .where(
                ReceptionModel.pvz_id == reception_filter.pvz_id,
                ReceptionModel.status == int(reception_filter.status),
            )
            .order_by(order)
        )
        if reception_filter.limit:
            query = query.limit(reception_filter.limit)
        result = await self.session.execute(query)
        return [to_reception(m) for m in result.scalars().all()]


class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, product: Product) -> Product:
        model = ProductModel(
            id=product.id,
            reception_id=product.reception_id,
            created_at=product.created_at,
            category_id=int(product.category),
        )
        self.session.add(model)
        await self.session.flush()
        return to_product(model)

    async def delete(self, product: Product) -> None:
        await self.session.execute(delete(ProductModel).where(ProductModel.id == product.id))

    async def list_by_reception(self, reception_id: uuid.UUID) -> List[Product]:
        result = await self.session.execute(
            select(ProductModel)
            .where(ProductModel.reception_id == reception_id)
            .order_by(ProductModel.created_at.asc(), ProductModel.id.asc())
        )
        return [to_product(m) for m in result.scalars().all()]
