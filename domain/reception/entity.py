"""
受理（reception）与商品领域实体 - 包含生命周期规则
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
import uuid

from domain.common.exceptions import (
    ReceptionAlreadyClosedException,
    UnknownProductCategoryException,
)


class ReceptionStatus(IntEnum):
    IN_PROGRESS = 1
    CLOSED = 2


class ProductCategory(IntEnum):
    ELECTRONICS = 1
    CLOTHES = 2
    SHOES = 3

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    ProductCategory.ELECTRONICS: "электроника",
    ProductCategory.CLOTHES: "одежда",
    ProductCategory.SHOES: "обувь",
}
# 分类名区分大小写：只接受小写与全大写两种写法
_CATEGORIES_BY_NAME = {}
for _category, _label in _CATEGORY_LABELS.items():
    _CATEGORIES_BY_NAME[_label] = _category
    _CATEGORIES_BY_NAME[_label.upper()] = _category


def parse_category(name: str) -> ProductCategory:
    category = _CATEGORIES_BY_NAME.get(name)
    if category is None:
        raise UnknownProductCategoryException(name)
    return category


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Reception:
    """受理实体：in_progress -> closed，只能关闭一次且不可逆"""

    id: uuid.UUID
    pvz_id: uuid.UUID
    created_at: datetime
    status: ReceptionStatus = ReceptionStatus.IN_PROGRESS

    @classmethod
    def open(cls, pvz_id: uuid.UUID) -> "Reception":
        return cls(id=uuid.uuid4(), pvz_id=pvz_id, created_at=_utcnow())

    @property
    def is_closed(self) -> bool:
        return self.status == ReceptionStatus.CLOSED

    def ensure_open(self) -> None:
        """业务规则：已关闭的受理不允许增删商品"""
        if self.is_closed:
            raise ReceptionAlreadyClosedException(str(self.id))

    def close(self) -> None:
        """业务规则：关闭受理"""
        self.ensure_open()
        self.status = ReceptionStatus.CLOSED


@dataclass
class Product:
    """商品实体"""

    id: uuid.UUID
    reception_id: uuid.UUID
    created_at: datetime
    category: ProductCategory

    @classmethod
    def new(cls, reception_id: uuid.UUID, category: ProductCategory) -> "Product":
        return cls(id=uuid.uuid4(), reception_id=reception_id, created_at=_utcnow(), category=category)
