"""
受理领域服务 - 编排受理与商品的生命周期规则
"""
from typing import List

from domain.common.exceptions import (
    AllReceptionsAreClosedException,
    AnotherOpenedReceptionException,
    ReceptionIsEmptyException,
)
from domain.pvz.entity import PickupPoint

from .entity import Product, ProductCategory, Reception, ReceptionStatus
from .events import ProductAdded, ProductRemoved, ReceptionClosed, ReceptionOpened
from .repository import ProductRepository, ReceptionFilter, ReceptionRepository


class ReceptionDomainService:
    """受理领域服务

    “每个 PVZ 至多一个进行中的受理”与“只能删除最后登记的商品”均为先查后写，
    调用方须在同一事务内（并锁定 PVZ 行）调用这里的方法。
    """

    def __init__(
        self,
        reception_repository: ReceptionRepository,
        product_repository: ProductRepository | None = None,
    ):
        self.reception_repository = reception_repository
        self.product_repository = product_repository
        self.events: List = []  # 领域事件收集

    async def current_reception(self, pvz: PickupPoint) -> Reception:
        """获取 PVZ 当前进行中的受理"""
        receptions = await self.reception_repository.find_all(
            ReceptionFilter(pvz_id=pvz.id, status=ReceptionStatus.IN_PROGRESS, descending=True, limit=1)
        )
        if not receptions:
            raise AllReceptionsAreClosedException(str(pvz.id))
        return receptions[0]

    async def open_reception(self, pvz: PickupPoint) -> Reception:
        """开启新受理的业务流程"""
        reception = Reception.open(pvz.id)

        opened = await self.reception_repository.find_all(
            ReceptionFilter(pvz_id=pvz.id, status=ReceptionStatus.IN_PROGRESS, descending=True, limit=1)
        )
        if opened:
            raise AnotherOpenedReceptionException(str(pvz.id))

        created = await self.reception_repository.create(reception)
        self.events.append(ReceptionOpened(reception_id=created.id, pvz_id=created.pvz_id))
        return created

    async def close_reception(self, reception: Reception) -> Reception:
        reception.close()
        updated = await self.reception_repository.update(reception)
        self.events.append(ReceptionClosed(reception_id=updated.id, pvz_id=updated.pvz_id))
        return updated

    async def add_product(self, reception: Reception, category: ProductCategory) -> Product:
        """登记商品：只允许加入进行中的受理"""
        reception.ensure_open()
        product = await self._products.create(Product.new(reception.id, category))
        self.events.append(ProductAdded(product_id=product.id, reception_id=reception.id, category=int(category)))
        return product

    async def remove_last_product(self, reception: Reception) -> Product:
        """删除最后登记的商品（后进先出）"""
        reception.ensure_open()

        products = await self._products.list_by_reception(reception.id)
        if not products:
            raise ReceptionIsEmptyException(str(reception.id))

        # 创建时间相同时按ID取最大者，保证结果确定
        last = max(products, key=lambda p: (p.created_at, p.id))
        await self._products.delete(last)
        self.events.append(ProductRemoved(product_id=last.id, reception_id=reception.id))
        return last

    def get_domain_events(self) -> List:
        """获取并清空领域事件"""
        events = self.events.copy()
        self.events.clear()
        return events

    @property
    def _products(self) -> ProductRepository:
        if self.product_repository is None:
            raise RuntimeError("product repository is not configured")
        return self.product_repository
