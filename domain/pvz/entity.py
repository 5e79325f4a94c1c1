"""Pickup point (PVZ) domain entity."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional
import uuid

from domain.common.exceptions import (
    IdIsRequiredException,
    RegistrationTimeIsRequiredException,
    UnknownCityException,
)


class City(IntEnum):
    """可开设 PVZ 的城市（固定集合）"""

    KAZAN = 1
    MOSCOW = 2
    SAINT_PETERSBURG = 3

    @property
    def display_name(self) -> str:
        return _CITY_NAMES[self]


_CITY_NAMES = {
    City.KAZAN: "Казань",
    City.MOSCOW: "Москва",
    City.SAINT_PETERSBURG: "Санкт-Петербург",
}
_CITIES_BY_NAME = {name.lower(): city for city, name in _CITY_NAMES.items()}


def parse_city(name: str) -> City:
    """城市名不区分大小写匹配，未知城市抛出 UnknownCityException"""
    city = _CITIES_BY_NAME.get((name or "").strip().lower())
    if city is None:
        raise UnknownCityException(name)
    return city


# 无时区的时间按 UTC 解释
def ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


@dataclass
class PickupPoint:
    """PVZ 聚合根：创建后不可变"""

    id: uuid.UUID
    created_at: datetime
    city: City

    def __post_init__(self) -> None:
        self.created_at = ensure_utc(self.created_at)

    @classmethod
    def register(
        cls,
        pvz_id: Optional[uuid.UUID],
        city_name: str,
        registration_time: Optional[datetime],
    ) -> "PickupPoint":
        """业务规则：城市必须合法，ID 与注册时间必须由调用方提供"""
        city = parse_city(city_name)
        if registration_time is None:
            raise RegistrationTimeIsRequiredException()
        if pvz_id is None or pvz_id.int == 0:
            raise IdIsRequiredException("id")
        return cls(id=pvz_id, created_at=registration_time, city=city)
