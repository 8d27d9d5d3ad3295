from __future__ import annotations

from datetime import date

from pydantic import BaseModel

from .outgoing_document import OutgoingDocumentRead


class ShippingReportFilters(BaseModel):
    search_term: str | None = None
    start_date: date | None = None
    end_date: date | None = None


class ProductSummary(BaseModel):
    sku: str
    name: str
    total_pairs: int = 0


class GroupedShipment(BaseModel):
    recipient: str
    total_shipments: int = 0
    total_pairs: int = 0
    shipments: list[OutgoingDocumentRead] = []


# recipient -> product key (sku + "-" + name) -> summary
RecipientProductSummary = dict[str, dict[str, ProductSummary]]


class ShippingReport(BaseModel):
    groups: list[GroupedShipment] = []
    product_summaries: RecipientProductSummary = {}
