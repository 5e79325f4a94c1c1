"""
受理与商品API路由
"""
from fastapi import APIRouter, Depends, status

from api.dependencies import get_reception_service, get_token
from application.dto import ProductCreateDTO, ProductDTO, ReceptionCreateDTO, ReceptionDTO
from application.services.reception_service import ReceptionApplicationService
from core.response import success_response, Response as ApiResponse

router = APIRouter(tags=["受理"])


@router.post(
    "/receptions",
    summary="开启新受理",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ReceptionDTO],
)
async def create_reception(
    data: ReceptionCreateDTO,
    token: str = Depends(get_token),
    service: ReceptionApplicationService = Depends(get_reception_service),
):
    """仅 employee；同一 PVZ 已有进行中的受理时返回 400"""
    reception = await service.create_reception(token, data.pvz_id)
    return success_response(data=reception, message="Reception created")


@router.post(
    "/products",
    summary="登记商品",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[ProductDTO],
)
async def add_product(
    data: ProductCreateDTO,
    token: str = Depends(get_token),
    service: ReceptionApplicationService = Depends(get_reception_service),
):
    product = await service.add_product(token, data.pvz_id, data.type)
    return success_response(data=product, message="Product added")
