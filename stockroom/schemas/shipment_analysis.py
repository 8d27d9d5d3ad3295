from __future__ import annotations

from datetime import date

from pydantic import BaseModel, model_validator


class ShipmentAnalysisFilters(BaseModel):
    start_date: date
    end_date: date
    product_filter: str | None = None
    recipient_filter: str | None = None
    search_term: str | None = None

    @model_validator(mode="after")
    def _check_interval(self) -> "ShipmentAnalysisFilters":
        if self.start_date > self.end_date:
            raise ValueError("start_date cannot be later than end_date")
        return self


class ProductShipmentData(BaseModel):
    recipient: str
    recipient_id: str | None = None
    product: str
    sku: str
    total_pairs: int = 0
    shipment_count: int = 0
    last_shipment_date: date
    documents: list[int] = []


class ShipmentFacets(BaseModel):
    products: list[str] = []
    recipients: list[str] = []
