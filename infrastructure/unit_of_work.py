"""SQLAlchemy Unit of Work 实现"""
from __future__ import annotations

from typing import Optional, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from domain.common.unit_of_work import AbstractUnitOfWork
from infrastructure.database import AsyncSessionLocal
from infrastructure.repositories.user_repository import SQLAlchemyUserRepository
from infrastructure.repositories.pickup_point_repository import SQLAlchemyPickupPointRepository
from infrastructure.repositories.reception_repository import (
    SQLAlchemyProductRepository,
    SQLAlchemyReceptionRepository,
)
from infrastructure.repositories.report_repository import SQLAlchemyReportRepository


class SQLAlchemyUnitOfWork(AbstractUnitOfWork):
    """基于SQLAlchemy的Unit of Work：一个用例一个事务"""

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession] = AsyncSessionLocal,
        session: Optional[AsyncSession] = None,
        *,
        readonly: bool = False,
    ) -> None:
        super().__init__(readonly=readonly)
        self._session_factory = session_factory
        self._external_session = session
        self.session: Optional[AsyncSession] = session

    def _bind_repositories(self, session: Optional[AsyncSession]) -> None:
        if session is None:
            self.user_repository = None  # type: ignore[assignment]
            self.pickup_point_repository = None  # type: ignore[assignment]
            self.reception_repository = None  # type: ignore[assignment]
            self.product_repository = None  # type: ignore[assignment]
            self.report_repository = None  # type: ignore[assignment]
            return
        self.user_repository = SQLAlchemyUserRepository(session)
        self.pickup_point_repository = SQLAlchemyPickupPointRepository(session)
        self.reception_repository = SQLAlchemyReceptionRepository(session)
        self.product_repository = SQLAlchemyProductRepository(session)
        self.report_repository = SQLAlchemyReportRepository(session)

    async def __aenter__(self) -> "SQLAlchemyUnitOfWork":
        if self.session is None:
            self.session = self._session_factory()
        self._bind_repositories(self.session)
        # 仅在非只读模式下显式开启事务
        if not self._readonly:
            await self.session.begin()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        try:
            await super().__aexit__(exc_type, exc, tb)
        finally:
            if self._external_session is None and self.session is not None:
                await self.session.close()
                self.session = None
            self._bind_repositories(None)

    async def commit(self) -> None:
        if self._readonly:
            self._committed = True
            return
        if self.session and self.session.in_transaction():
            await self.session.commit()
        self._committed = True

    async def rollback(self) -> None:
        if self.session and self.session.in_transaction():
            await self.session.rollback()
        self._committed = False
