from datetime import datetime, timezone
import uuid

import pytest

from domain.common.exceptions import (
    AllReceptionsAreClosedException,
    AnotherOpenedReceptionException,
    ReceptionAlreadyClosedException,
    ReceptionIsEmptyException,
)
from domain.pvz.entity import City, PickupPoint
from domain.reception.entity import Product, ProductCategory
from domain.reception.events import ProductAdded, ProductRemoved, ReceptionClosed, ReceptionOpened
from domain.reception.service import ReceptionDomainService
from tests.fakes import FakeProductRepository, FakeReceptionRepository, InMemoryStore


@pytest.fixture
def pvz() -> PickupPoint:
    return PickupPoint(id=uuid.uuid4(), created_at=datetime.now(timezone.utc), city=City.MOSCOW)


@pytest.fixture
def service(store: InMemoryStore) -> ReceptionDomainService:
    return ReceptionDomainService(FakeReceptionRepository(store), FakeProductRepository(store))


async def test_only_one_reception_in_progress(service, pvz):
    await service.open_reception(pvz)
    with pytest.raises(AnotherOpenedReceptionException):
        await service.open_reception(pvz)


async def test_current_reception_requires_open_one(service, pvz):
    with pytest.raises(AllReceptionsAreClosedException):
        await service.current_reception(pvz)

    reception = await service.open_reception(pvz)
    await service.close_reception(reception)
    with pytest.raises(AllReceptionsAreClosedException):
        await service.current_reception(pvz)


async def test_new_reception_allowed_after_close(service, pvz):
    first = await service.open_reception(pvz)
    await service.close_reception(first)
    second = await service.open_reception(pvz)
    assert second.id != first.id
    assert (await service.current_reception(pvz)).id == second.id


async def test_remove_last_product_is_lifo(service, pvz, store, ticking_clock):
    reception = await service.open_reception(pvz)
    p1 = await service.add_product(reception, ProductCategory.ELECTRONICS)
    p2 = await service.add_product(reception, ProductCategory.SHOES)

    removed = await service.remove_last_product(reception)

    assert removed.id == p2.id
    assert list(store.products) == [p1.id]


async def test_remove_last_product_tie_breaks_by_greatest_id(service, pvz, store):
    reception = await service.open_reception(pvz)
    moment = datetime(2025, 4, 1, tzinfo=timezone.utc)
    low = Product(id=uuid.UUID(int=1), reception_id=reception.id, created_at=moment, category=ProductCategory.CLOTHES)
    high = Product(id=uuid.UUID(int=2), reception_id=reception.id, created_at=moment, category=ProductCategory.CLOTHES)
    await service.product_repository.create(high)
    await service.product_repository.create(low)

    removed = await service.remove_last_product(reception)
    assert removed.id == high.id


async def test_remove_from_empty_reception(service, pvz):
    reception = await service.open_reception(pvz)
    with pytest.raises(ReceptionIsEmptyException):
        await service.remove_last_product(reception)


async def test_closed_reception_rejects_product_changes(service, pvz):
    reception = await service.open_reception(pvz)
    await service.add_product(reception, ProductCategory.CLOTHES)
    await service.close_reception(reception)

    with pytest.raises(ReceptionAlreadyClosedException):
        await service.add_product(reception, ProductCategory.CLOTHES)
    with pytest.raises(ReceptionAlreadyClosedException):
        await service.remove_last_product(reception)
    with pytest.raises(ReceptionAlreadyClosedException):
        await service.close_reception(reception)


async def test_domain_events_are_collected_and_drained(service, pvz):
    reception = await service.open_reception(pvz)
    await service.add_product(reception, ProductCategory.ELECTRONICS)
    await service.remove_last_product(reception)
    await service.close_reception(reception)

    events = service.get_domain_events()
    assert [type(e) for e in events] == [ReceptionOpened, ProductAdded, ProductRemoved, ReceptionClosed]
    assert events[1].category == int(ProductCategory.ELECTRONICS)
    assert service.get_domain_events() == []
