"""
领域实体 -> DTO 映射（HTTP 与 gRPC 共用）

未知的枚举值记录告警并输出空字符串，不中断响应。
"""
from domain.pvz.entity import City, PickupPoint
from domain.pvz.report import PickupPointReport
from domain.reception.entity import Product, ProductCategory, Reception, ReceptionStatus
from domain.user.entity import User, UserRole
from application.dto import (
    PickupPointDTO,
    PickupPointReportDTO,
    ProductDTO,
    ReceptionDTO,
    ReceptionReportDTO,
    UserResponseDTO,
)
from core.logging_config import get_logger


logger = get_logger(__name__)

_STATUS_LABELS = {
    ReceptionStatus.IN_PROGRESS: "in_progress",
    ReceptionStatus.CLOSED: "close",
}

_ROLE_LABELS = {
    UserRole.CLIENT: "employee",
    UserRole.MODERATOR: "moderator",
}


def reception_status_label(status) -> str:
    label = _STATUS_LABELS.get(status)
    if label is None:
        logger.warning("unknown_reception_status", status=status)
        return ""
    return label


def product_category_label(category) -> str:
    try:
        return ProductCategory(category).label
    except ValueError:
        logger.warning("unknown_product_category", category=category)
        return ""


def city_label(city) -> str:
    try:
        return City(city).display_name
    except ValueError:
        logger.warning("unknown_city", city=city)
        return ""


def role_label(role) -> str:
    label = _ROLE_LABELS.get(role)
    if label is None:
        logger.warning("unknown_user_role", role=role)
        return ""
    return label


def to_user_dto(user: User) -> UserResponseDTO:
    return UserResponseDTO(id=user.id, email=user.email, role=role_label(user.role))


def to_pickup_point_dto(pvz: PickupPoint) -> PickupPointDTO:
    return PickupPointDTO(id=pvz.id, registration_date=pvz.created_at, city=city_label(pvz.city))


def to_reception_dto(reception: Reception) -> ReceptionDTO:
    return ReceptionDTO(
        id=reception.id,
        date_time=reception.created_at,
        pvz_id=reception.pvz_id,
        status=reception_status_label(reception.status),
    )


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,
        date_time=product.created_at,
        type=product_category_label(product.category),
        reception_id=product.reception_id,
    )


def to_report_dto(report: PickupPointReport) -> PickupPointReportDTO:
    return PickupPointReportDTO(
        pvz=to_pickup_point_dto(report.pvz),
        receptions=[
            ReceptionReportDTO(
                reception=to_reception_dto(item.reception),
                products=[to_product_dto(p) for p in item.products],
            )
            for item in report.receptions
        ],
    )
