from __future__ import annotations

from typing import Iterable

from stockroom.core.record_store import (
    OUTGOING_DOCUMENTS_KEY,
    STOCK_UNITS_KEY,
    RecordStore,
)
from stockroom.schemas.box_stock import BoxStockItem
from stockroom.schemas.outgoing_document import OutgoingDocumentRead, OutgoingStockItemBase
from stockroom.schemas.stock_unit import StockUnitRead
from stockroom.schemas.unit_stock import (
    AvailableUnitStockItem,
    CategoryCount,
    InventorySummary,
)
from stockroom.services.box_stock import load_box_stock


def base_sku(sku: str) -> str:
    """First three "-" separated segments of a SKU (SKU-101-BLK-40 -> SKU-101-BLK)."""

    return "-".join(sku.split("-")[:3])


def _unit_key(sku: str, color: str, size: str) -> str:
    return f"{sku}-{color.lower()}-{size}"


def _find_matching_key(
    aggregated: dict[str, AvailableUnitStockItem],
    sku: str,
    color: str,
    size: str,
) -> str | None:
    wanted_base = base_sku(sku).lower()
    wanted_color = color.lower()
    for key, entry in aggregated.items():
        # The composite key is "sku-color-size"; its first three segments stand in for the base SKU.
        if (
            base_sku(key).lower() == wanted_base
            and entry.size == size
            and entry.color.lower() == wanted_color
        ):
            return key
    return None


def compute_available_unit_stock(
    stock_units: Iterable[StockUnitRead],
    documents: Iterable[OutgoingDocumentRead],
) -> list[AvailableUnitStockItem]:
    """Unit stock per SKU, color and size, net of quantities already shipped."""

    aggregated: dict[str, AvailableUnitStockItem] = {}
    for unit in stock_units:
        key = _unit_key(unit.sku, unit.color, unit.size)
        entry = aggregated.get(key)
        if entry is None:
            entry = AvailableUnitStockItem(
                id=key,
                sku=unit.sku,
                name=base_sku(unit.sku),
                category="unknown",
                size=unit.size,
                color=unit.color,
                total_pairs=0,
            )
            aggregated[key] = entry
        entry.total_pairs += unit.quantity

    for doc in documents:
        for item in doc.items:
            key = _unit_key(item.sku, item.color, item.size)
            if key not in aggregated:
                key = _find_matching_key(aggregated, item.sku, item.color, item.size)
            if key is None:
                continue
            entry = aggregated[key]
            entry.total_pairs = max(0, entry.total_pairs - item.quantity)

    return list(aggregated.values())


def check_outgoing_items(
    available: Iterable[AvailableUnitStockItem],
    items: Iterable[OutgoingStockItemBase],
) -> None:
    """Refuse shipping more pairs than are available for a SKU, color and size.

    Items resolve to available entries the same way shipped items are netted.
    Raises ValueError for the first item that is unknown or short.
    """

    by_key = {entry.id: entry for entry in available}
    wanted: dict[str, int] = {}
    for item in items:
        key = _unit_key(item.sku, item.color, item.size)
        if key not in by_key:
            key = _find_matching_key(by_key, item.sku, item.color, item.size)
        if key is None:
            raise ValueError(f"No unit stock for {item.sku} {item.color} {item.size}")
        wanted[key] = wanted.get(key, 0) + item.quantity
        if wanted[key] > by_key[key].total_pairs:
            raise ValueError(
                f"Insufficient stock for {item.sku} {item.color} {item.size}: "
                f"requested {wanted[key]}, available {by_key[key].total_pairs}"
            )


def summarize_inventory(
    box_stock: Iterable[BoxStockItem],
    stock_units: Iterable[StockUnitRead],
) -> InventorySummary:
    total_boxes = 0
    total_pairs = 0
    low_stock_items = 0
    categories: dict[str, int] = {}
    for item in box_stock:
        total_boxes += item.box_count
        total_pairs += item.total_pairs
        if item.stock_level == "low":
            low_stock_items += 1
        categories[item.category] = categories.get(item.category, 0) + 1

    total_units = sum(unit.quantity for unit in stock_units)

    return InventorySummary(
        total_boxes=total_boxes,
        total_pairs=total_pairs,
        total_units=total_units,
        low_stock_items=low_stock_items,
        categories=[CategoryCount(name=name, count=count) for name, count in categories.items()],
    )


def compute_available_unit_stock_from_store(store: RecordStore) -> list[AvailableUnitStockItem]:
    stock_units = store.load(STOCK_UNITS_KEY, [])
    documents = store.load(OUTGOING_DOCUMENTS_KEY, [])
    return compute_available_unit_stock(stock_units, documents)


def compute_inventory_summary(store: RecordStore) -> InventorySummary:
    box_stock = load_box_stock(store)
    stock_units = store.load(STOCK_UNITS_KEY, [])
    return summarize_inventory(box_stock, stock_units)


def check_outgoing_items_from_store(store: RecordStore, items: Iterable[OutgoingStockItemBase]) -> None:
    check_outgoing_items(compute_available_unit_stock_from_store(store), items)
