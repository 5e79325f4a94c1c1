from datetime import datetime, timedelta, timezone
import uuid

import pytest

from domain.common.exceptions import (
    IdIsRequiredException,
    ReceptionAlreadyClosedException,
    RegistrationTimeIsRequiredException,
    UnknownCityException,
    UnknownProductCategoryException,
)
from domain.pvz.entity import City, PickupPoint, parse_city
from domain.pvz.report import ReportFilter
from domain.reception.entity import ProductCategory, Reception, ReceptionStatus, parse_category
from domain.user.entity import UserRole, parse_role


T0 = datetime(2025, 4, 1, 10, 0, tzinfo=timezone.utc)


@pytest.mark.parametrize("name,city", [
    ("Москва", City.MOSCOW),
    ("москва", City.MOSCOW),
    ("САНКТ-ПЕТЕРБУРГ", City.SAINT_PETERSBURG),
    ("Казань", City.KAZAN),
])
def test_parse_city_is_case_insensitive(name, city):
    assert parse_city(name) is city


def test_parse_city_rejects_unknown_city():
    with pytest.raises(UnknownCityException):
        parse_city("Новосибирск")


def test_parse_category_accepts_lower_and_upper_forms_only():
    assert parse_category("электроника") is ProductCategory.ELECTRONICS
    assert parse_category("ОДЕЖДА") is ProductCategory.CLOTHES
    assert parse_category("обувь") is ProductCategory.SHOES
    with pytest.raises(UnknownProductCategoryException):
        parse_category("Обувь")


def test_parse_role_maps_employee_to_client():
    assert parse_role("employee") is UserRole.CLIENT
    assert parse_role("client") is UserRole.CLIENT
    assert parse_role("moderator") is UserRole.MODERATOR
    assert parse_role("admin") is None


def test_register_pickup_point():
    pvz_id = uuid.uuid4()
    pvz = PickupPoint.register(pvz_id, "Москва", T0)
    assert pvz.id == pvz_id
    assert pvz.city.display_name == "Москва"
    assert pvz.created_at == T0


def test_register_pickup_point_requires_id_and_time():
    with pytest.raises(IdIsRequiredException):
        PickupPoint.register(None, "Москва", T0)
    with pytest.raises(IdIsRequiredException):
        PickupPoint.register(uuid.UUID(int=0), "Москва", T0)
    with pytest.raises(RegistrationTimeIsRequiredException):
        PickupPoint.register(uuid.uuid4(), "Москва", None)


def test_register_pickup_point_checks_city_first():
    with pytest.raises(UnknownCityException):
        PickupPoint.register(None, "Berlin", None)


def test_naive_registration_time_is_treated_as_utc():
    pvz = PickupPoint.register(uuid.uuid4(), "Казань", datetime(2025, 1, 1, 12, 0))
    assert pvz.created_at.tzinfo is not None
    assert pvz.created_at.utcoffset() == timedelta(0)


def test_closing_reception_is_irreversible():
    reception = Reception.open(uuid.uuid4())
    assert reception.status is ReceptionStatus.IN_PROGRESS
    created_at, reception_id = reception.created_at, reception.id

    reception.close()
    assert reception.is_closed

    with pytest.raises(ReceptionAlreadyClosedException):
        reception.close()
    assert reception.id == reception_id
    assert reception.created_at == created_at


class TestReportFilter:
    def test_end_not_after_start_is_dropped(self):
        f = ReportFilter(start=T0, end=T0).normalized()
        assert f.start == T0
        assert f.end is None

    def test_invalid_paging_falls_back_to_defaults(self):
        f = ReportFilter(page=0, limit=-5).normalized()
        assert (f.page, f.limit, f.offset) == (1, 10, 0)

    def test_offset(self):
        assert ReportFilter(page=3, limit=5).normalized().offset == 10

    def test_window_is_half_open(self):
        f = ReportFilter(start=T0, end=T0 + timedelta(hours=1))
        assert f.includes(T0)
        assert f.includes(T0 + timedelta(minutes=59))
        assert not f.includes(T0 + timedelta(hours=1))
        assert not f.includes(T0 - timedelta(seconds=1))

    def test_one_sided_window(self):
        f = ReportFilter(start=T0)
        assert f.includes(T0 + timedelta(days=365))
        assert not f.includes(T0 - timedelta(days=1))

    def test_mixed_naive_and_aware_bounds_are_compared_in_utc(self):
        naive_end = (T0 + timedelta(days=1)).replace(tzinfo=None)
        f = ReportFilter(start=T0, end=naive_end).normalized()
        assert f.end == T0 + timedelta(days=1)
        assert f.includes(T0 + timedelta(hours=1))

        dropped = ReportFilter(start=T0, end=T0.replace(tzinfo=None)).normalized()
        assert dropped.end is None

    def test_naive_start_filters_aware_timestamps(self):
        f = ReportFilter(start=T0.replace(tzinfo=None)).normalized()
        assert f.start == T0
        assert f.includes(T0)
        assert not f.includes(T0 - timedelta(seconds=1))

    def test_offset_bounds_are_converted_to_utc(self):
        moscow = timezone(timedelta(hours=3))
        f = ReportFilter(start=datetime(2025, 4, 1, 13, 0, tzinfo=moscow)).normalized()
        assert f.start == T0
        assert f.start.tzinfo == timezone.utc

    def test_invalid_limit_uses_given_default(self):
        assert ReportFilter(limit=0).normalized(default_limit=25).limit == 25
