from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


StockLevel = Literal["low", "medium", "high"]


class BoxStockItem(BaseModel):
    id: str
    sku: str
    name: str
    category: str
    box_count: int
    pairs_per_box: int
    total_pairs: int
    stock_level: StockLevel = "low"

    model_config = ConfigDict(from_attributes=True)
