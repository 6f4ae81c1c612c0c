"""
Inventory Router - grocery items, listed page by page or looked up by barcode.
"""
import logging
from fastapi import APIRouter, Depends, Query

from ..dependencies import get_current_user, get_inventory_service
from ..models import User
from ..schemas import Item, PaginatedResponse, RestResponse
from ..services.inventory_service import InventoryService

router = APIRouter(prefix="/inventory", tags=["inventory"], dependencies=[Depends(get_current_user)])
logger = logging.getLogger(__name__)


@router.post("", response_model=RestResponse[Item], response_model_exclude_none=True)
def create_item(
    item: Item,
    user: User = Depends(get_current_user),
    service: InventoryService = Depends(get_inventory_service),
):
    logger.info("Create item %s requested by %s", item.barcode, user.username)
    return service.create_item(item)


@router.get("", response_model=PaginatedResponse[Item], response_model_exclude_none=True)
def list_items(
    page: int = Query(0, ge=0, description="0-based page index"),
    size: int = Query(10, ge=1, le=1000, description="Rows per page"),
    show_categories: bool = Query(False, alias="showCategories"),
    service: InventoryService = Depends(get_inventory_service),
):
    """
    List inventory items one page at a time.

    The response reports ``detailPages.page`` 1-based, so ``page=0`` comes back
    as page 1.
    """
    return service.find_paginated_inventories(page, size, show_categories)


@router.get("/{barcode}", response_model=RestResponse[Item], response_model_exclude_none=True)
def get_item(
    barcode: str,
    show_categories: bool = Query(True, alias="showCategories"),
    service: InventoryService = Depends(get_inventory_service),
):
    return service.find_item_by_barcode(barcode, show_categories)
