from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator


class OutgoingStockItemBase(BaseModel):
    sku: str = Field(min_length=1)
    name: str = ""
    color: str = ""
    size: str = ""
    quantity: int = Field(ge=0)


class OutgoingStockItemCreate(OutgoingStockItemBase):
    pass


class OutgoingStockItemRead(OutgoingStockItemBase):
    id: int

    model_config = ConfigDict(from_attributes=True)


class OutgoingDocumentBase(BaseModel):
    document_number: str
    date: date
    time: str | None = None
    recipient_id: str | None = None
    recipient: str
    notes: str = ""


class OutgoingDocumentCreate(OutgoingDocumentBase):
    items: list[OutgoingStockItemCreate] = []
    total_items: int | None = Field(default=None, ge=0)

    @model_validator(mode="after")
    def _default_total_items(self) -> "OutgoingDocumentCreate":
        if self.total_items is None:
            self.total_items = sum(item.quantity for item in self.items)
        return self


class OutgoingDocumentRead(OutgoingDocumentBase):
    id: int
    items: list[OutgoingStockItemRead] = []
    total_items: int = Field(ge=0)

    model_config = ConfigDict(from_attributes=True)
