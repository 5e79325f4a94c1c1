"""
PVZ 应用服务 - 创建 PVZ 与报表查询
"""
from typing import Callable, List
import uuid

from application.dto import PickupPointCreateDTO, PickupPointDTO, PickupPointReportDTO, ReportQueryDTO
from application.mappers import to_pickup_point_dto, to_report_dto
from core.config import settings
from core.logging_config import get_logger
from domain.common.exceptions import PVZNotFoundException
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.pvz.entity import PickupPoint
from domain.pvz.report import ReportFilter
from domain.services.authorization import AuthorizationService
from domain.user.entity import UserRole


logger = get_logger(__name__)


class PickupPointApplicationService:
    def __init__(
        self,
        uow_factory: Callable[..., AbstractUnitOfWork],
        authorization: AuthorizationService,
    ):
        self._uow_factory = uow_factory
        self._authorization = authorization

    async def create_pickup_point(self, token: str, data: PickupPointCreateDTO) -> PickupPointDTO:
        """创建 PVZ（仅 moderator）"""
        user = await self._authorization.validate_privileges(token, UserRole.MODERATOR)
        pvz = PickupPoint.register(data.id, data.city, data.registration_date)

        async with self._uow_factory() as uow:
            created = await uow.pickup_point_repository.create(pvz)

        logger.info("pvz_created", pvz_id=str(created.id), city=created.city.display_name, user_id=str(user.id))
        return to_pickup_point_dto(created)

    async def get_pickup_point(self, pvz_id: uuid.UUID) -> PickupPoint:
        async with self._uow_factory(readonly=True) as uow:
            pvz = await uow.pickup_point_repository.get_by_id(pvz_id)
        if pvz is None:
            raise PVZNotFoundException(str(pvz_id))
        return pvz

    async def list_reports(self, token: str, query: ReportQueryDTO) -> List[PickupPointReportDTO]:
        """报表查询：只要求已认证，不限角色"""
        await self._authorization.validate_privileges(token)
        report_filter = ReportFilter(
            page=query.page,
            limit=query.limit,
            start=query.start_date,
            end=query.end_date,
        ).normalized(default_limit=settings.REPORT_DEFAULT_LIMIT)

        async with self._uow_factory(readonly=True) as uow:
            reports = await uow.report_repository.find_all(report_filter)
        return [to_report_dto(r) for r in reports]
