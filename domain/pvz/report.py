"""Report aggregates: a pickup point with its receptions and their products."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from domain.pvz.entity import PickupPoint, ensure_utc
from domain.reception.entity import Product, Reception

DEFAULT_REPORT_LIMIT = 10


@dataclass
class ReceptionReport:
    reception: Reception
    products: List[Product] = field(default_factory=list)


@dataclass
class PickupPointReport:
    pvz: PickupPoint
    receptions: List[ReceptionReport] = field(default_factory=list)


@dataclass
class ReportFilter:
    """报表查询条件

    受理时间窗口为半开区间 [start, end)；只给出一端时为单侧过滤。
    """

    page: int = 1
    limit: int = DEFAULT_REPORT_LIMIT
    start: Optional[datetime] = None
    end: Optional[datetime] = None

    def normalized(self, default_limit: int = DEFAULT_REPORT_LIMIT) -> "ReportFilter":
        """宽松策略：非法的结束时间被丢弃而不是报错，分页参数回退到默认值

        时间边界统一转换为 UTC；无时区的边界按 UTC 解释。
        """
        start = ensure_utc(self.start) if self.start is not None else None
        end = ensure_utc(self.end) if self.end is not None else None
        if start is not None and end is not None and end <= start:
            end = None
        return ReportFilter(
            page=self.page if self.page >= 1 else 1,
            limit=self.limit if self.limit > 0 else default_limit,
            start=start,
            end=end,
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def includes(self, moment: datetime) -> bool:
        """调用方须先 normalized()，边界才是 UTC"""
        moment = ensure_utc(moment)
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment >= self.end:
            return False
        return True


class ReportRepository(ABC):
    """报表聚合仓储"""

    @abstractmethod
    async def find_all(self, report_filter: ReportFilter) -> List[PickupPointReport]:
        """按 PVZ 序号游标分页返回聚合结果"""
        pass
