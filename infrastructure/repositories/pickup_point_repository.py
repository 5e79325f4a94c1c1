"""
PVZ 仓储实现
"""
from typing import Optional
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from core.logging_config import get_logger
from domain.common.exceptions import InfrastructureException
from domain.pvz.entity import City, PickupPoint
from domain.pvz.repository import PickupPointRepository
from infrastructure.models.pickup_point import PickupPointModel


logger = get_logger(__name__)


def to_pickup_point(model: PickupPointModel) -> PickupPoint:
    return PickupPoint(id=model.id, created_at=model.created_at, city=City(model.city_id))


class SQLAlchemyPickupPointRepository(PickupPointRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, pvz: PickupPoint) -> PickupPoint:
        model = PickupPointModel(id=pvz.id, created_at=pvz.created_at, city_id=int(pvz.city))
        self.session.add(model)
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.warning("create_pvz_conflict", pvz_id=str(pvz.id), error=str(e.orig))
            raise InfrastructureException(
                "failed to create pvz", details={"pvz_id": str(pvz.id)}
            ) from e
        return to_pickup_point(model)

    async def get_by_id(self, pvz_id: uuid.UUID, *, for_update: bool = False) -> Optional[PickupPoint]:
        query = select(PickupPointModel).where(PickupPointModel.id == pvz_id)
        if for_update:
            query = query.with_for_update()
        result = await self.session.execute(query)
        model = result.scalar_one_or_none()
        return to_pickup_point(model) if model else None
