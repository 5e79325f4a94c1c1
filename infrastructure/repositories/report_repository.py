"""
报表仓储实现 - PVZ -> 受理 -> 商品 三级聚合

分三次查询（PVZ 页、窗口内受理、这些受理的商品），在内存中组装，避免 N+1。
"""
from typing import Dict, List
import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from domain.pvz.report import (
    PickupPointReport,
    ReceptionReport,
    ReportFilter,
    ReportRepository,
)
from infrastructure.models.pickup_point import PickupPointModel
from infrastructure.models.reception import ProductModel, ReceptionModel
from infrastructure.repositories.pickup_point_repository import to_pickup_point
from infrastructure.repositories.reception_repository import to_product, to_reception


class SQLAlchemyReportRepository(ReportRepository):
    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_all(self, report_filter: ReportFilter) -> List[PickupPointReport]:
        f = report_filter.normalized()

        pvz_rows = await self.session.execute(
            select(PickupPointModel)
            .where(PickupPointModel.record_number > f.offset)
            .order_by(PickupPointModel.record_number.asc())
            .limit(f.limit)
        )
        reports = [PickupPointReport(pvz=to_pickup_point(m)) for m in pvz_rows.scalars().all()]
        if not reports:
            return []

        by_pvz: Dict[uuid.UUID, PickupPointReport] = {r.pvz.id: r for r in reports}
        reception_query = (
            select(ReceptionModel)
            .where(ReceptionModel.pvz_id.in_(list(by_pvz)))
            .order_by(ReceptionModel.created_at.asc())
        )
        if f.start is not None:
            reception_query = reception_query.where(ReceptionModel.created_at >= f.start)
        if f.end is not None:
            reception_query = reception_query.where(ReceptionModel.created_at < f.end)
        reception_rows = await self.session.execute(reception_query)

        by_reception: Dict[uuid.UUID, ReceptionReport] = {}
        for model in reception_rows.scalars().all():
            item = ReceptionReport(reception=to_reception(model))
            by_pvz[model.pvz_id].receptions.append(item)
            by_reception[model.id] = item

        if by_reception:
            product_rows = await self.session.execute(
                select(ProductModel)
                .where(ProductModel.reception_id.in_(list(by_reception)))
                .order_by(ProductModel.created_at.asc(), ProductModel.id.asc())
            )
            for model in product_rows.scalars().all():
                by_reception[model.reception_id].products.append(to_product(model))

        return reports
