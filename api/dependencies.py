"""
API依赖项 - 凭据提取与应用服务装配
"""
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from typing import Callable, Optional

from application.services.authorization_service import JWTAuthorizationService
from application.services.pvz_service import PickupPointApplicationService
from application.services.reception_service import ReceptionApplicationService
from application.services.token_service import TokenService
from application.services.user_service import UserApplicationService
from domain.common.unit_of_work import AbstractUnitOfWork
from domain.services.authorization import AuthorizationService
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork

# HTTP Bearer for direct API calls
http_bearer = HTTPBearer(
    scheme_name="Bearer",
    description="JWT Bearer token authentication",
    auto_error=False,
)


async def get_token(
    bearer_token: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer)
) -> str:
    """从 Bearer 头中提取令牌；缺失时返回空串，由用例统一拒绝"""
    if bearer_token and bearer_token.credentials:
        return bearer_token.credentials
    return ""


def get_uow_factory() -> Callable[..., AbstractUnitOfWork]:
    return SQLAlchemyUnitOfWork


def get_token_service() -> TokenService:
    return TokenService()


def get_authorization_service(
    uow_factory: Callable[..., AbstractUnitOfWork] = Depends(get_uow_factory),
    token_service: TokenService = Depends(get_token_service),
) -> AuthorizationService:
    return JWTAuthorizationService(uow_factory, token_service)


def get_user_service(
    uow_factory: Callable[..., AbstractUnitOfWork] = Depends(get_uow_factory),
    authorization: AuthorizationService = Depends(get_authorization_service),
    token_service: TokenService = Depends(get_token_service),
) -> UserApplicationService:
    return UserApplicationService(uow_factory, authorization, token_service)


def get_pvz_service(
    uow_factory: Callable[..., AbstractUnitOfWork] = Depends(get_uow_factory),
    authorization: AuthorizationService = Depends(get_authorization_service),
) -> PickupPointApplicationService:
    return PickupPointApplicationService(uow_factory, authorization)


def get_reception_service(
    uow_factory: Callable[..., AbstractUnitOfWork] = Depends(get_uow_factory),
    authorization: AuthorizationService = Depends(get_authorization_service),
) -> ReceptionApplicationService:
    return ReceptionApplicationService(uow_factory, authorization)
