from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ProductBase(BaseModel):
    sku: str = Field(min_length=1)
    name: str
    category: str = "unknown"
    pairs_per_box: int = Field(default=0, ge=0)
    sizes: str = ""
    colors: str = ""


class ProductCreate(ProductBase):
    pass


class ProductRead(ProductBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
