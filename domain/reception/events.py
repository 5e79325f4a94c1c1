"""
受理领域事件 - 记录重要的业务事件
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
import uuid


@dataclass
class ReceptionOpened:
    """受理开启事件"""
    reception_id: uuid.UUID
    pvz_id: uuid.UUID
    event_id: Optional[str] = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ReceptionClosed:
    """受理关闭事件"""
    reception_id: uuid.UUID
    pvz_id: uuid.UUID
    event_id: Optional[str] = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ProductAdded:
    """商品登记事件"""
    product_id: uuid.UUID
    reception_id: uuid.UUID
    category: int
    event_id: Optional[str] = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class ProductRemoved:
    """商品移除事件"""
    product_id: uuid.UUID
    reception_id: uuid.UUID
    event_id: Optional[str] = field(default_factory=lambda: str(uuid.uuid4()))
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
