from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class StockUnitBase(BaseModel):
    sku: str = Field(min_length=1)
    size: str
    color: str
    quantity: int = Field(ge=0)
    box_id: str | None = None


class StockUnitCreate(StockUnitBase):
    pass


class StockUnitRead(StockUnitBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
