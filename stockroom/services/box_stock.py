from __future__ import annotations

import logging
import math
from typing import Iterable

from stockroom.core.record_store import (
    BOX_STOCK_KEY,
    DELIVERIES_KEY,
    PRODUCTS_KEY,
    STOCK_UNITS_KEY,
    RecordStore,
)
from stockroom.schemas.box_stock import BoxStockItem, StockLevel
from stockroom.schemas.delivery import DeliveryRead
from stockroom.schemas.product import ProductRead
from stockroom.schemas.stock_unit import StockUnitBase, StockUnitRead


logger = logging.getLogger(__name__)


LOW_STOCK_MAX_BOXES = 15
MEDIUM_STOCK_MAX_BOXES = 30

BOX_STOCK_SORT_FIELDS: tuple[str, ...] = ("box_count", "name")


def classify_stock_level(box_count: int) -> StockLevel:
    if box_count <= LOW_STOCK_MAX_BOXES:
        return "low"
    if box_count <= MEDIUM_STOCK_MAX_BOXES:
        return "medium"
    return "high"


def compute_allocated_pairs_by_sku(stock_units: Iterable[StockUnitRead]) -> dict[str, int]:
    """Units already broken out of box stock, keyed by lower-cased SKU."""

    allocated: dict[str, int] = {}
    for unit in stock_units:
        sku = unit.sku.lower()
        allocated[sku] = allocated.get(sku, 0) + unit.quantity
    return allocated


def reconcile_box_stock(
    deliveries: Iterable[DeliveryRead],
    products: Iterable[ProductRead],
    stock_units: Iterable[StockUnitRead],
) -> list[BoxStockItem]:
    """Derive box-level stock per SKU from deliveries.

    Deliveries are grouped by exact-case SKU; the first delivery of a SKU
    decides name, category and pairs_per_box. Units allocated to stock units
    (matched case-insensitively) are then netted out. The box deduction rounds
    up, so box stock never over-reports what is still sealed. Stock units
    whose SKU was never delivered are ignored.
    """

    products_by_sku: dict[str, ProductRead] = {}
    for product in products:
        products_by_sku.setdefault(product.sku, product)

    allocated_by_sku = compute_allocated_pairs_by_sku(stock_units)

    stock_by_sku: dict[str, BoxStockItem] = {}
    for delivery in deliveries:
        sku = delivery.sku
        item = stock_by_sku.get(sku)
        if item is None:
            product = products_by_sku.get(sku)
            item = BoxStockItem(
                id=f"box-{sku}",
                sku=sku,
                name=delivery.product_name or (product.name if product else None) or sku,
                category=(product.category if product else None) or "unknown",
                box_count=0,
                pairs_per_box=delivery.pairs_per_box,
                total_pairs=0,
            )
            stock_by_sku[sku] = item
        elif delivery.pairs_per_box != item.pairs_per_box:
            logger.warning(
                "Inconsistent pairs_per_box for sku=%s: delivery %s has %s, keeping first-seen %s",
                sku,
                delivery.id,
                delivery.pairs_per_box,
                item.pairs_per_box,
            )

        item.box_count += delivery.box_count
        item.total_pairs += delivery.total_pairs or 0

    for sku, item in stock_by_sku.items():
        allocated = allocated_by_sku.get(sku.lower(), 0)
        if allocated > 0 and item.pairs_per_box > 0:
            pairs_to_subtract = min(allocated, item.total_pairs)
            boxes_to_reduce = math.ceil(pairs_to_subtract / item.pairs_per_box)
            item.box_count = max(0, item.box_count - boxes_to_reduce)
            item.total_pairs = max(0, item.total_pairs - pairs_to_subtract)

        item.stock_level = classify_stock_level(item.box_count)

    return list(stock_by_sku.values())


def check_unit_allocation(
    deliveries: Iterable[DeliveryRead],
    products: Iterable[ProductRead],
    stock_units: Iterable[StockUnitRead],
    requested: Iterable[StockUnitBase],
) -> None:
    """Refuse unpacking more pairs than were delivered for a SKU.

    Delivered pairs come from the un-netted reconciliation; pairs already held
    in stock units count against them. SKUs with no deliveries are not
    checked. Raises ValueError naming the first SKU that is short.
    """

    delivered: dict[str, int] = {}
    for item in reconcile_box_stock(deliveries, products, []):
        delivered.setdefault(item.sku.lower(), item.total_pairs)

    allocated = compute_allocated_pairs_by_sku(stock_units)

    wanted: dict[str, int] = {}
    labels: dict[str, str] = {}
    for unit in requested:
        sku = unit.sku.lower()
        wanted[sku] = wanted.get(sku, 0) + unit.quantity
        labels.setdefault(sku, unit.sku)

    for sku, quantity in wanted.items():
        if sku not in delivered:
            continue
        available = max(0, delivered[sku] - allocated.get(sku, 0))
        if quantity > available:
            raise ValueError(
                f"Cannot add {quantity} pairs of {labels[sku]}. Only {available} pairs available."
            )


def sync_box_stock(store: RecordStore) -> list[BoxStockItem]:
    """Recompute box stock from stored records and overwrite the snapshot."""

    deliveries = store.load(DELIVERIES_KEY, [])
    products = store.load(PRODUCTS_KEY, [])
    stock_units = store.load(STOCK_UNITS_KEY, [])

    items = reconcile_box_stock(deliveries, products, stock_units)
    store.save(BOX_STOCK_KEY, items)

    logger.info(
        "Box stock synchronized: deliveries=%s stock_units=%s skus=%s",
        len(deliveries),
        len(stock_units),
        len(items),
    )
    return items


def check_unit_allocation_from_store(store: RecordStore, requested: Iterable[StockUnitBase]) -> None:
    check_unit_allocation(
        store.load(DELIVERIES_KEY, []),
        store.load(PRODUCTS_KEY, []),
        store.load(STOCK_UNITS_KEY, []),
        requested,
    )


def load_box_stock(store: RecordStore) -> list[BoxStockItem]:
    """Return the stored snapshot, syncing first when nothing is stored yet."""

    items = store.load(BOX_STOCK_KEY, [])
    if not items:
        items = sync_box_stock(store)
    return items


def filter_and_sort_box_stock(
    items: Iterable[BoxStockItem],
    search_term: str | None = None,
    sort_by: str = "box_count",
    sort_dir: str = "desc",
) -> list[BoxStockItem]:
    if sort_by not in BOX_STOCK_SORT_FIELDS:
        raise ValueError(f"Invalid sort_by '{sort_by}', must be one of: {list(BOX_STOCK_SORT_FIELDS)}")
    if sort_dir not in ("asc", "desc"):
        raise ValueError("Invalid sort_dir, must be 'asc' or 'desc'")

    result = list(items)
    if search_term:
        needle = search_term.lower()
        result = [
            item
            for item in result
            if needle in item.sku.lower() or needle in item.name.lower()
        ]

    reverse = sort_dir == "desc"
    if sort_by == "box_count":
        return sorted(result, key=lambda item: item.box_count, reverse=reverse)
    return sorted(result, key=lambda item: item.name.lower(), reverse=reverse)
