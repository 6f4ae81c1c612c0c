from datetime import datetime
import logging

from sqlalchemy.exc import IntegrityError

from ..envelope import paginated, success
from ..errors import ServiceError, category_not_found, item_already_exists, item_not_found
from ..models import Inventory
from ..repositories import CategoryRepository, InventoryRepository
from ..schemas import Item, PaginatedResponse, RestResponse

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, inventories: InventoryRepository, categories: CategoryRepository):
        self.inventories = inventories
        self.categories = categories

    def create_item(self, item: Item) -> RestResponse:
        if self.inventories.exists_by_barcode(item.barcode):
            logger.warning("Item with barcode: %s already exists", item.barcode)
            raise ServiceError.conflict(item_already_exists(item.barcode))

        requested = sorted(set(item.categories or []))
        categories = self.categories.find_by_names(requested)
        found = {category.name for category in categories}
        missing = [name for name in requested if name not in found]
        if missing:
            logger.warning("Item with barcode: %s references unknown categories: %s", item.barcode, missing)
            raise ServiceError.not_found(*(category_not_found(name) for name in missing))

        try:
            entity = self.inventories.add(Inventory(
                barcode=item.barcode,
                item_name=item.item_name,
                description=item.description,
                quantity=item.quantity,
                buying_price=item.buying_price,
                selling_price=item.selling_price,
                created_date=datetime.utcnow(),
                categories=categories,
            ))
            self.inventories.commit()
        except IntegrityError as exc:
            self.inventories.rollback()
            raise ServiceError.conflict(item_already_exists(item.barcode)) from exc

        logger.info("Success create: %s", item.barcode)
        return success(Item.from_entity(entity))

    def find_paginated_inventories(self, page: int, size: int, show_categories: bool = False) -> PaginatedResponse:
        rows, total = self.inventories.find_page(page, size, with_categories=show_categories)
        items = [Item.from_entity(row, show_categories) for row in rows]
        return paginated(items, page, size, total)

    def find_item_by_barcode(self, barcode: str, show_categories: bool = True) -> RestResponse:
        entity = self.inventories.find_by_barcode(barcode)
        if entity is None:
            raise ServiceError.not_found(item_not_found(barcode))
        return success(Item.from_entity(entity, show_categories))
