"""
数据传输对象（DTO）- 应用层与表现层之间的数据传输

对外字段使用 camelCase 别名（pvzId、dateTime、registrationDate），
内部统一使用 snake_case。
"""
from pydantic import BaseModel, Field, model_serializer, ConfigDict
from typing import Optional, List
from datetime import datetime, timezone
import uuid

from core.config import settings


class DTOBase(BaseModel):
    """Base DTO: unify datetime serialization to UTC-Z for all subclasses."""

    model_config = ConfigDict(populate_by_name=True)

    @model_serializer(mode="wrap")
    def _serialize_model(self, handler):  # type: ignore[override]
        data = handler(self)

        def convert(value):
            if isinstance(value, datetime):
                ts = value if value.tzinfo else value.replace(tzinfo=timezone.utc)
                s = ts.astimezone(timezone.utc).isoformat()
                return s.replace("+00:00", "Z")
            if isinstance(value, list):
                return [convert(v) for v in value]
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            return value

        return convert(data)


# ---------------------------------------------------------------------------
# 用户与认证
# ---------------------------------------------------------------------------
class DummyLoginDTO(DTOBase):
    """测试登录DTO"""
    role: str = Field(..., description="moderator 或 employee")


class RegisterDTO(DTOBase):
    """用户注册DTO"""
    email: str = Field(..., description="邮箱地址")
    password: str = Field(..., description="密码")
    role: str = Field("employee", description="moderator 或 employee")


class LoginDTO(DTOBase):
    """登录DTO"""
    email: str = Field(..., description="邮箱")
    password: str = Field(..., description="密码")


class TokenDTO(DTOBase):
    """令牌DTO"""
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # 秒


class UserResponseDTO(DTOBase):
    """用户响应DTO"""
    id: uuid.UUID
    email: str
    role: str


# ---------------------------------------------------------------------------
# PVZ
# ---------------------------------------------------------------------------
class PickupPointCreateDTO(DTOBase):
    """PVZ 创建DTO（ID 与注册时间由调用方提供）"""
    id: Optional[uuid.UUID] = None
    city: str
    registration_date: Optional[datetime] = Field(None, alias="registrationDate")


class PickupPointDTO(DTOBase):
    id: uuid.UUID
    registration_date: datetime = Field(..., alias="registrationDate")
    city: str


# ---------------------------------------------------------------------------
# 受理与商品
# ---------------------------------------------------------------------------
class ReceptionCreateDTO(DTOBase):
    pvz_id: Optional[uuid.UUID] = Field(None, alias="pvzId")


class ReceptionDTO(DTOBase):
    id: uuid.UUID
    date_time: datetime = Field(..., alias="dateTime")
    pvz_id: uuid.UUID = Field(..., alias="pvzId")
    status: str


class ProductCreateDTO(DTOBase):
    type: str = Field(..., description="электроника / одежда / обувь")
    pvz_id: Optional[uuid.UUID] = Field(None, alias="pvzId")


class ProductDTO(DTOBase):
    id: uuid.UUID
    date_time: datetime = Field(..., alias="dateTime")
    type: str
    reception_id: uuid.UUID = Field(..., alias="receptionId")


# ---------------------------------------------------------------------------
# 报表
# ---------------------------------------------------------------------------
class ReportQueryDTO(DTOBase):
    """报表查询参数；缺省值与非法值的修正由用例完成"""
    start_date: Optional[datetime] = Field(None, alias="startDate")
    end_date: Optional[datetime] = Field(None, alias="endDate")
    page: int = 1
    limit: int = settings.REPORT_DEFAULT_LIMIT


class ReceptionReportDTO(DTOBase):
    reception: ReceptionDTO
    products: List[ProductDTO] = Field(default_factory=list)


class PickupPointReportDTO(DTOBase):
    pvz: PickupPointDTO
    receptions: List[ReceptionReportDTO] = Field(default_factory=list)


class MessageDTO(DTOBase):
    """消息响应DTO"""
    message: str
