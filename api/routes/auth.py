"""
认证API路由 - 测试登录、注册与登录
"""
from fastapi import APIRouter, Depends, status

from application.services.user_service import UserApplicationService
from application.dto import DummyLoginDTO, LoginDTO, RegisterDTO, TokenDTO, UserResponseDTO
from core.response import success_response, Response as ApiResponse
from api.dependencies import get_user_service

router = APIRouter(tags=["认证"])


@router.post("/dummyLogin", summary="测试登录", response_model=TokenDTO)
async def dummy_login(
    data: DummyLoginDTO,
    service: UserApplicationService = Depends(get_user_service),
):
    """按角色（moderator / employee）为固定测试用户签发令牌"""
    return await service.dummy_login(data)


@router.post(
    "/register",
    summary="用户注册",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse[UserResponseDTO],
)
async def register(
    data: RegisterDTO,
    service: UserApplicationService = Depends(get_user_service),
):
    """
    注册新用户

    - **email**: 邮箱地址
    - **password**: 密码（非空）
    - **role**: moderator 或 employee，未知角色按 employee 处理
    """
    user = await service.register(data)
    return success_response(data=user, message="User registered")


@router.post("/login", summary="用户登录", response_model=TokenDTO)
async def login(
    data: LoginDTO,
    service: UserApplicationService = Depends(get_user_service),
):
    # 返回扁平结构
    return await service.login(data)
