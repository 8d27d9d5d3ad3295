from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.core.record_store import SqlRecordStore
from stockroom.schemas.unit_stock import AvailableUnitStockItem, InventorySummary
from stockroom.services.unit_stock import (
    compute_available_unit_stock_from_store,
    compute_inventory_summary,
)


router = APIRouter()


@router.get(
    "/unit-stock",
    response_model=list[AvailableUnitStockItem],
    summary="Available unit stock",
    description="Stock units per SKU, color and size, net of quantities on outgoing documents.",
)
def get_available_unit_stock(db: Session = Depends(get_db)) -> list[AvailableUnitStockItem]:
    return compute_available_unit_stock_from_store(SqlRecordStore(db))


@router.get(
    "/summary",
    response_model=InventorySummary,
    summary="Inventory dashboard summary",
)
def get_inventory_summary(db: Session = Depends(get_db)) -> InventorySummary:
    return compute_inventory_summary(SqlRecordStore(db))
