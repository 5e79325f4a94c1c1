"""
PVZ 仓储接口
"""
from abc import ABC, abstractmethod
from typing import Optional
import uuid

from .entity import PickupPoint


class PickupPointRepository(ABC):
    """PVZ 仓储抽象接口"""

    @abstractmethod
    async def create(self, pvz: PickupPoint) -> PickupPoint:
        """保存新的 PVZ"""
        pass

    @abstractmethod
    async def get_by_id(self, pvz_id: uuid.UUID, *, for_update: bool = False) -> Optional[PickupPoint]:
        """根据ID获取 PVZ

        for_update=True 时在当前事务内锁定该行，用于串行化同一 PVZ 上的变更操作。
        """
        pass
