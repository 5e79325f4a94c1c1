"""
数据库配置和连接管理
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlalchemy.engine import make_url
from sqlalchemy.exc import OperationalError, InterfaceError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from core.config import settings
from core.logging_config import get_logger
from infrastructure.models import Base


logger = get_logger(__name__)


def _build_async_url(database_url: str) -> str:
    """确保数据库URL使用异步驱动"""
    url = make_url(database_url)
    drivername = url.drivername

    if "+" in drivername:
        return database_url

    driver_map = {
        "postgresql": "postgresql+asyncpg",
        "postgres": "postgresql+asyncpg",
    }

    if drivername not in driver_map:
        raise ValueError(f"不支持的数据库驱动: {drivername}. 请使用 async 驱动或更新 DATABASE__URL")

    return url.set(drivername=driver_map[drivername]).render_as_string(hide_password=False)


engine = create_async_engine(
    _build_async_url(settings.database.url),
    echo=False,
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    expire_on_commit=False,
)


async def wait_for_database() -> None:
    """启动探测：按指数退避重试 SELECT 1，重试耗尽后抛出最后一次异常"""
    async for attempt in AsyncRetrying(
        stop=stop_after_attempt(max(1, settings.database.connect_attempts)),
        wait=wait_exponential(multiplier=settings.database.connect_retry_delay, max=30),
        retry=retry_if_exception_type((OperationalError, InterfaceError, OSError)),
        reraise=True,
    ):
        with attempt:
            n = attempt.retry_state.attempt_number
            if n > 1:
                logger.warning("database_connect_retry", attempt=n)
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
    logger.info("database_ready")


async def create_tables():
    """
    创建所有表

    仅用于开发环境；生产环境使用 alembic 迁移
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()
