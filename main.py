"""
FastAPI应用主入口
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager

from api.routes import auth, pvz, reception
from api.middleware import RequestIDMiddleware, LoggingMiddleware
from application.services.authorization_service import JWTAuthorizationService
from application.services.token_service import TokenService
from application.services.user_service import UserApplicationService
from core.config import settings
from core.exceptions import register_exception_handlers
from core.response import success_response
from core.logging_config import get_logger, configure_logging
from grpc_app.server import GrpcServerRunner
from infrastructure.database import create_tables, dispose_engine, wait_for_database
from infrastructure.unit_of_work import SQLAlchemyUnitOfWork


# 初始化日志：在入口处显式配置，避免模块导入时的副作用
configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    await wait_for_database()

    # 启动时创建数据库表（仅开发环境）。生产应使用 Alembic 迁移
    if settings.DEBUG:
        await create_tables()
        logger.info("database_initialized", message="Database tables created (development)")
    else:
        logger.info(
            "database_migrations_required",
            message="No auto-create in production, use Alembic migrations (alembic upgrade head)"
        )

    token_service = TokenService()
    users = UserApplicationService(
        SQLAlchemyUnitOfWork,
        JWTAuthorizationService(SQLAlchemyUnitOfWork, token_service),
        token_service,
    )
    await users.seed_dummy_users()

    grpc_runner = None
    if settings.grpc.enabled:
        grpc_runner = GrpcServerRunner()
        await grpc_runner.start()
    app.state.grpc_runner = grpc_runner

    yield

    if grpc_runner is not None:
        await grpc_runner.stop()
    await dispose_engine()
    logger.info("application_shutdown", message="Application shutdown")


def create_app() -> FastAPI:
    docs_url = "/docs" if settings.http.include_docs else None
    application = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        debug=settings.DEBUG,
        lifespan=lifespan,
        description="PVZ 受理服务：PVZ 登记、受理与商品登记、报表查询",
        docs_url=docs_url,
        redoc_url="/redoc" if settings.http.include_docs else None,
    )

    # 添加中间件（注意顺序：后添加的先执行）
    application.add_middleware(LoggingMiddleware)
    application.add_middleware(RequestIDMiddleware)
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(application)

    application.include_router(auth.router)
    application.include_router(pvz.router)
    application.include_router(reception.router)

    @application.get("/health", tags=["Health"])
    async def health_check():
        """健康检查端点"""
        return success_response(data={"status": "healthy"}, message="OK")

    return application


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=settings.http.host,
        port=settings.http.port,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )
