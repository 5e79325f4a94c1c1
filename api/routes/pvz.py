"""
PVZ API路由 - 创建、报表、关闭受理、删除商品
"""
from datetime import datetime
from typing import List, Optional
import uuid

from fastapi import APIRouter, Depends, Query, status

from api.dependencies import get_pvz_service, get_reception_service, get_token
from application.dto import (
    MessageDTO,
    PickupPointCreateDTO,
    PickupPointDTO,
    PickupPointReportDTO,
    ReceptionDTO,
    ReportQueryDTO,
)
from application.services.pvz_service import PickupPointApplicationService
from application.services.reception_service import ReceptionApplicationService
from core.config import settings
from core.response import success_response, Response as ApiResponse

router = APIRouter(prefix="/pvz", tags=["PVZ"])


@router.post(
    "",
    summary="创建 PVZ",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[PickupPointDTO],
)
async def create_pvz(
    data: PickupPointCreateDTO,
    token: str = Depends(get_token),
    service: PickupPointApplicationService = Depends(get_pvz_service),
):
    """仅 moderator；城市为 Москва、Санкт-Петербург、Казань 之一"""
    pvz = await service.create_pickup_point(token, data)
    return success_response(data=pvz, message="PVZ created")


@router.get("", summary="PVZ 报表", response_model=ApiResponse[List[PickupPointReportDTO]])
async def list_pvz(
    start_date: Optional[datetime] = Query(None, alias="startDate"),
    end_date: Optional[datetime] = Query(None, alias="endDate"),
    page: int = Query(1),
    limit: int = Query(settings.REPORT_DEFAULT_LIMIT),
    token: str = Depends(get_token),
    service: PickupPointApplicationService = Depends(get_pvz_service),
):
    """
    按 PVZ 分页返回受理与商品

    受理按创建时间落在 [startDate, endDate) 内过滤；非法的分页参数回退为默认值。
    """
    query = ReportQueryDTO(start_date=start_date, end_date=end_date, page=page, limit=limit)
    reports = await service.list_reports(token, query)
    return success_response(data=reports)


@router.post(
    "/{pvz_id}/close_last_reception",
    summary="关闭当前受理",
    response_model=ApiResponse[ReceptionDTO],
)
async def close_last_reception(
    pvz_id: uuid.UUID,
    token: str = Depends(get_token),
    service: ReceptionApplicationService = Depends(get_reception_service),
):
    reception = await service.close_last_reception(token, pvz_id)
    return success_response(data=reception, message="Reception closed")


@router.post(
    "/{pvz_id}/delete_last_product",
    summary="删除最后登记的商品",
    response_model=ApiResponse[MessageDTO],
)
async def delete_last_product(
    pvz_id: uuid.UUID,
    token: str = Depends(get_token),
    service: ReceptionApplicationService = Depends(get_reception_service),
):
    await service.remove_last_product(token, pvz_id)
    return success_response(data=MessageDTO(message="product removed"), message="Product removed")
