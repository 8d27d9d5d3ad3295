from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.core.record_store import SqlRecordStore
from stockroom.schemas.box_stock import BoxStockItem
from stockroom.services.box_stock import (
    filter_and_sort_box_stock,
    load_box_stock,
    sync_box_stock,
)


router = APIRouter()


@router.get(
    "/",
    response_model=list[BoxStockItem],
    summary="List box stock",
    description=(
        "Returns the stored box-stock snapshot filtered by SKU/name search and sorted. "
        "When no snapshot has been stored yet it is synchronized first."
    ),
)
def list_box_stock(
    search: str | None = Query(None),
    sort_by: str = "box_count",
    sort_dir: str = "desc",
    db: Session = Depends(get_db),
) -> list[BoxStockItem]:
    items = load_box_stock(SqlRecordStore(db))
    try:
        return filter_and_sort_box_stock(items, search_term=search, sort_by=sort_by, sort_dir=sort_dir.lower())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post(
    "/sync",
    response_model=list[BoxStockItem],
    summary="Synchronize box stock",
    description=(
        "Recomputes box stock from deliveries, products and stock units and overwrites "
        "the stored snapshot."
    ),
)
def sync_box_stock_endpoint(db: Session = Depends(get_db)) -> list[BoxStockItem]:
    return sync_box_stock(SqlRecordStore(db))
