from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DeliveryBase(BaseModel):
    date: date
    sku: str = Field(min_length=1)
    box_count: int = Field(ge=0)
    pairs_per_box: int = Field(ge=0)
    total_pairs: int | None = Field(default=None, ge=0)
    product_name: str | None = None
    account: str | None = None

    @model_validator(mode="after")
    def _default_total_pairs(self) -> "DeliveryBase":
        # Deliveries carry box_count * pairs_per_box when no total is given.
        if self.total_pairs is None:
            self.total_pairs = self.box_count * self.pairs_per_box
        return self


class DeliveryCreate(DeliveryBase):
    @model_validator(mode="after")
    def _check_total_pairs(self) -> "DeliveryCreate":
        expected = self.box_count * self.pairs_per_box
        if self.total_pairs is not None and self.total_pairs != expected:
            raise ValueError(
                f"total_pairs must equal box_count * pairs_per_box ({expected}), got {self.total_pairs}"
            )
        return self


class DeliveryRead(DeliveryBase):
    id: int
    total_pairs: int = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)
