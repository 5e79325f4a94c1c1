from datetime import datetime, timezone
import uuid

import pytest

from application.dto import PickupPointCreateDTO
from domain.common.exceptions import (
    AllReceptionsAreClosedException,
    AnotherOpenedReceptionException,
    IdIsRequiredException,
    InsufficientPrivilegesException,
    PVZNotFoundException,
    ReceptionIsEmptyException,
    UnknownProductCategoryException,
)
from domain.reception.entity import ProductCategory, ReceptionStatus


@pytest.fixture
async def pvz_id(pvz_service, moderator_token) -> uuid.UUID:
    u1 = uuid.uuid4()
    await pvz_service.create_pickup_point(
        moderator_token,
        PickupPointCreateDTO(id=u1, city="Москва", registration_date=datetime(2025, 4, 1, tzinfo=timezone.utc)),
    )
    return u1


async def test_second_open_reception_is_rejected(reception_service, client_token, pvz_id, store):
    reception = await reception_service.create_reception(client_token, pvz_id)
    assert reception.status == "in_progress"
    assert reception.pvz_id == pvz_id

    with pytest.raises(AnotherOpenedReceptionException):
        await reception_service.create_reception(client_token, pvz_id)
    assert len(store.receptions) == 1


async def test_mutations_lock_the_pickup_point(reception_service, client_token, pvz_id, store):
    await reception_service.create_reception(client_token, pvz_id)
    await reception_service.add_product(client_token, pvz_id, "одежда")
    assert store.locked == [pvz_id, pvz_id]


async def test_add_product_then_close(reception_service, client_token, pvz_id, store):
    reception = await reception_service.create_reception(client_token, pvz_id)
    product = await reception_service.add_product(client_token, pvz_id, "электроника")

    assert product.type == "электроника"
    assert product.reception_id == reception.id
    assert store.products[product.id].category is ProductCategory.ELECTRONICS

    closed = await reception_service.close_last_reception(client_token, pvz_id)
    assert closed.id == reception.id
    assert closed.status == "close"
    assert store.receptions[reception.id].status is ReceptionStatus.CLOSED

    with pytest.raises(AllReceptionsAreClosedException):
        await reception_service.add_product(client_token, pvz_id, "электроника")


async def test_close_is_allowed_for_any_role(reception_service, client_token, moderator_token, pvz_id):
    await reception_service.create_reception(client_token, pvz_id)
    closed = await reception_service.close_last_reception(moderator_token, pvz_id)
    assert closed.status == "close"

    with pytest.raises(AllReceptionsAreClosedException):
        await reception_service.close_last_reception(client_token, pvz_id)


async def test_remove_last_product_lifo(reception_service, client_token, pvz_id, store, ticking_clock):
    await reception_service.create_reception(client_token, pvz_id)
    p1 = await reception_service.add_product(client_token, pvz_id, "обувь")
    await reception_service.add_product(client_token, pvz_id, "ОДЕЖДА")

    await reception_service.remove_last_product(client_token, pvz_id)

    assert list(store.products) == [p1.id]


async def test_remove_from_empty_reception(reception_service, client_token, pvz_id):
    await reception_service.create_reception(client_token, pvz_id)
    with pytest.raises(ReceptionIsEmptyException):
        await reception_service.remove_last_product(client_token, pvz_id)


async def test_unknown_category(reception_service, client_token, pvz_id):
    await reception_service.create_reception(client_token, pvz_id)
    with pytest.raises(UnknownProductCategoryException):
        await reception_service.add_product(client_token, pvz_id, "мебель")


@pytest.mark.parametrize("use_case", ["create_reception", "remove_last_product"])
async def test_moderator_and_anonymous_are_rejected(reception_service, moderator_token, pvz_id, use_case):
    call = getattr(reception_service, use_case)
    with pytest.raises(InsufficientPrivilegesException):
        await call(moderator_token, pvz_id)
    with pytest.raises(InsufficientPrivilegesException):
        await call("", pvz_id)


async def test_moderator_cannot_add_product(reception_service, client_token, moderator_token, pvz_id):
    await reception_service.create_reception(client_token, pvz_id)
    with pytest.raises(InsufficientPrivilegesException):
        await reception_service.add_product(moderator_token, pvz_id, "обувь")


async def test_privileges_are_checked_before_arguments(reception_service, moderator_token):
    with pytest.raises(InsufficientPrivilegesException):
        await reception_service.create_reception(moderator_token, None)


async def test_missing_or_unknown_pickup_point(reception_service, client_token):
    with pytest.raises(IdIsRequiredException):
        await reception_service.create_reception(client_token, None)
    with pytest.raises(IdIsRequiredException):
        await reception_service.close_last_reception(client_token, uuid.UUID(int=0))
    with pytest.raises(PVZNotFoundException):
        await reception_service.create_reception(client_token, uuid.uuid4())


async def test_closed_reception_blocks_product_changes_at_use_case_level(reception_service, client_token, pvz_id, store):
    await reception_service.create_reception(client_token, pvz_id)
    await reception_service.add_product(client_token, pvz_id, "обувь")
    await reception_service.close_last_reception(client_token, pvz_id)

    with pytest.raises(AllReceptionsAreClosedException):
        await reception_service.add_product(client_token, pvz_id, "обувь")
    with pytest.raises(AllReceptionsAreClosedException):
        await reception_service.remove_last_product(client_token, pvz_id)
    assert len(store.products) == 1
