from __future__ import annotations

from pydantic import BaseModel


class AvailableUnitStockItem(BaseModel):
    id: str
    sku: str
    name: str
    category: str = "unknown"
    size: str
    color: str
    total_pairs: int = 0


class CategoryCount(BaseModel):
    name: str
    count: int


class InventorySummary(BaseModel):
    total_boxes: int
    total_pairs: int
    total_units: int
    low_stock_items: int
    categories: list[CategoryCount] = []
