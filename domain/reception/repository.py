"""
受理与商品仓储接口
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional
import uuid

from .entity import Product, Reception, ReceptionStatus


@dataclass(frozen=True)
class ReceptionFilter:
    """受理查询条件"""
    pvz_id: uuid.UUID
    status: ReceptionStatus
    descending: bool = True
    limit: Optional[int] = None


class ReceptionRepository(ABC):
    """受理仓储抽象接口"""

    @abstractmethod
    async def create(self, reception: Reception) -> Reception:
        """保存新受理"""
        pass

    @abstractmethod
    async def update(self, reception: Reception) -> Reception:
        """整体更新受理"""
        pass

    @abstractmethod
    async def find_all(self, reception_filter: ReceptionFilter) -> List[Reception]:
        """按条件查询，按创建时间排序"""
        pass


class ProductRepository(ABC):
    """商品仓储抽象接口"""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        pass

    @abstractmethod
    async def delete(self, product: Product) -> None:
        pass

    @abstractmethod
    async def list_by_reception(self, reception_id: uuid.UUID) -> List[Product]:
        pass
