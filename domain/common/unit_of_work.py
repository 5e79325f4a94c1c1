"""Unit of Work 抽象定义"""
from __future__ import annotations

from abc import ABC, abstractmethod

from domain.user.repository import UserRepository
from domain.pvz.repository import PickupPointRepository
from domain.pvz.report import ReportRepository
from domain.reception.repository import ProductRepository, ReceptionRepository


class AbstractUnitOfWork(ABC):
    """应用层事务边界控制抽象"""

    user_repository: UserRepository
    pickup_point_repository: PickupPointRepository
    reception_repository: ReceptionRepository
    product_repository: ProductRepository
    report_repository: ReportRepository

    def __init__(self, *, readonly: bool = False) -> None:
        self._committed = False
        self._readonly = readonly
        self.user_repository = None  # type: ignore[assignment]
        self.pickup_point_repository = None  # type: ignore[assignment]
        self.reception_repository = None  # type: ignore[assignment]
        self.product_repository = None  # type: ignore[assignment]
        self.report_repository = None  # type: ignore[assignment]

    async def __aenter__(self) -> "AbstractUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc:
            await self.rollback()
        else:
            # 只在非只读且未显式提交时自动提交
            if not self._readonly and not self._committed:
                await self.commit()

    @abstractmethod
    async def commit(self) -> None:
        """提交事务"""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """回滚事务"""
