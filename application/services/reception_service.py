"""
受理应用服务 - 受理与商品生命周期用例

每个变更用例在一个 Unit of Work 内执行，并以 FOR UPDATE 锁定 PVZ 行，
同一 PVZ 上的并发变更因此串行化。
"""
from typing import Callable, Optional
import uuid

from application.dto import ProductDTO, ReceptionDTO
from application.mappers import to_product_dto, to_reception_dto
from core.logging_config import get_logger
from domain.common.exceptions import IdIsRequiredException, PVZNotFoundException
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.pvz.entity import PickupPoint
from domain.reception.entity import parse_category
from domain.reception.events import ProductAdded, ProductRemoved, ReceptionClosed, ReceptionOpened
from domain.reception.service import ReceptionDomainService
from domain.services.authorization import AuthorizationService
from domain.user.entity import UserRole


logger = get_logger(__name__)


def _require_id(pvz_id: Optional[uuid.UUID]) -> uuid.UUID:
    if pvz_id is None or pvz_id.int == 0:
        raise IdIsRequiredException()
    return pvz_id


async def _locked_pvz(uow: AbstractUnitOfWork, pvz_id: uuid.UUID) -> PickupPoint:
    pvz = await uow.pickup_point_repository.get_by_id(pvz_id, for_update=True)
    if pvz is None:
        raise PVZNotFoundException(str(pvz_id))
    return pvz


def _publish(events) -> None:
    for event in events:
        if isinstance(event, ReceptionOpened):
            logger.info("reception_opened", reception_id=str(event.reception_id), pvz_id=str(event.pvz_id))
        elif isinstance(event, ReceptionClosed):
            logger.info("reception_closed", reception_id=str(event.reception_id), pvz_id=str(event.pvz_id))
        elif isinstance(event, ProductAdded):
            logger.info(
                "product_added",
                product_id=str(event.product_id),
                reception_id=str(event.reception_id),
                category=event.category,
            )
        elif isinstance(event, ProductRemoved):
            logger.info("product_removed", product_id=str(event.product_id), reception_id=str(event.reception_id))


class ReceptionApplicationService:
    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        authorization: AuthorizationService,
    ):
        self._uow_factory = uow_factory
        self._authorization = authorization

    async def create_reception(self, token: str, pvz_id: Optional[uuid.UUID]) -> ReceptionDTO:
        """开启新受理（仅 client）"""
        await self._authorization.validate_privileges(token, UserRole.CLIENT)
        pvz_id = _require_id(pvz_id)

        async with self._uow_factory() as uow:
            pvz = await _locked_pvz(uow, pvz_id)
            service = ReceptionDomainService(uow.reception_repository)
            reception = await service.open_reception(pvz)
        _publish(service.get_domain_events())
        return to_reception_dto(reception)

    async def close_last_reception(self, token: str, pvz_id: Optional[uuid.UUID]) -> ReceptionDTO:
        """关闭当前受理（任意已认证角色）"""
        await self._authorization.validate_privileges(token)
        pvz_id = _require_id(pvz_id)

        async with self._uow_factory() as uow:
            pvz = await _locked_pvz(uow, pvz_id)
            service = ReceptionDomainService(uow.reception_repository)
            reception = await service.current_reception(pvz)
            closed = await service.close_reception(reception)
        _publish(service.get_domain_events())
        return to_reception_dto(closed)

    async def add_product(self, token: str, pvz_id: Optional[uuid.UUID], category_name: str) -> ProductDTO:
        """向当前受理登记商品（仅 client）"""
        await self._authorization.validate_privileges(token, UserRole.CLIENT)
        pvz_id = _require_id(pvz_id)

        async with self._uow_factory() as uow:
            pvz = await _locked_pvz(uow, pvz_id)
            category = parse_category(category_name)
            service = ReceptionDomainService(uow.reception_repository, uow.product_repository)
            reception = await service.current_reception(pvz)
            product = await service.add_product(reception, category)
        _publish(service.get_domain_events())
        return to_product_dto(product)

    async def remove_last_product(self, token: str, pvz_id: Optional[uuid.UUID]) -> None:
        """删除当前受理中最后登记的商品（仅 client）"""
        await self._authorization.validate_privileges(token, UserRole.CLIENT)
        pvz_id = _require_id(pvz_id)

        async with self._uow_factory() as uow:
            pvz = await _locked_pvz(uow, pvz_id)
            service = ReceptionDomainService(uow.reception_repository, uow.product_repository)
            reception = await service.current_reception(pvz)
            await service.remove_last_product(reception)
        _publish(service.get_domain_events())
