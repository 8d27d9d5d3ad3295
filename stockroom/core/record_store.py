from __future__ import annotations

import logging
from typing import Any, Callable, Protocol, Sequence

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from stockroom.models.models import (
    BoxStock,
    Delivery,
    OutgoingDocument,
    OutgoingDocumentItem,
    Product,
    StockUnit,
)
from stockroom.schemas.box_stock import BoxStockItem
from stockroom.schemas.delivery import DeliveryRead
from stockroom.schemas.outgoing_document import OutgoingDocumentRead
from stockroom.schemas.product import ProductRead
from stockroom.schemas.stock_unit import StockUnitRead


logger = logging.getLogger(__name__)


DELIVERIES_KEY = "warehouse-deliveries"
PRODUCTS_KEY = "warehouse-products"
STOCK_UNITS_KEY = "warehouse-stock-units"
OUTGOING_DOCUMENTS_KEY = "warehouse-outgoing-documents"
BOX_STOCK_KEY = "warehouse-box-stock"


class RecordStore(Protocol):
    """Key-based load/save of record collections.

    ``save`` replaces the whole collection stored under ``key``
    (last write wins).
    """

    def load(self, key: str, default: list[Any]) -> list[Any]:
        ...

    def save(self, key: str, records: Sequence[BaseModel]) -> None:
        ...


def _delivery_row(record: DeliveryRead, position: int) -> Delivery:
    return Delivery(**record.model_dump())


def _product_row(record: ProductRead, position: int) -> Product:
    return Product(**record.model_dump())


def _stock_unit_row(record: StockUnitRead, position: int) -> StockUnit:
    return StockUnit(**record.model_dump())


def _outgoing_document_row(record: OutgoingDocumentRead, position: int) -> OutgoingDocument:
    data = record.model_dump(exclude={"items"})
    doc = OutgoingDocument(**data)
    doc.items = [OutgoingDocumentItem(**item.model_dump()) for item in record.items]
    return doc


def _box_stock_row(record: BoxStockItem, position: int) -> BoxStock:
    return BoxStock(position=position, **record.model_dump())


class _Collection:
    def __init__(
        self,
        model: type,
        schema: type[BaseModel],
        to_row: Callable[[Any, int], Any],
        order_by: Any,
    ) -> None:
        self.model = model
        self.schema = schema
        self.to_row = to_row
        self.order_by = order_by


_COLLECTIONS: dict[str, _Collection] = {
    DELIVERIES_KEY: _Collection(Delivery, DeliveryRead, _delivery_row, Delivery.id),
    PRODUCTS_KEY: _Collection(Product, ProductRead, _product_row, Product.id),
    STOCK_UNITS_KEY: _Collection(StockUnit, StockUnitRead, _stock_unit_row, StockUnit.id),
    OUTGOING_DOCUMENTS_KEY: _Collection(
        OutgoingDocument, OutgoingDocumentRead, _outgoing_document_row, OutgoingDocument.id
    ),
    BOX_STOCK_KEY: _Collection(BoxStock, BoxStockItem, _box_stock_row, BoxStock.position),
}


def _collection(key: str) -> _Collection:
    try:
        return _COLLECTIONS[key]
    except KeyError:
        raise KeyError(f"Unknown record collection '{key}'") from None


class SqlRecordStore:
    """RecordStore backed by the SQLAlchemy tables of this service."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def load(self, key: str, default: list[Any]) -> list[Any]:
        collection = _collection(key)
        try:
            rows = self._db.query(collection.model).order_by(collection.order_by).all()
        except SQLAlchemyError:
            logger.exception("Failed to load records for key=%s, using default", key)
            self._db.rollback()
            return default
        return [collection.schema.model_validate(row) for row in rows]

    def save(self, key: str, records: Sequence[BaseModel]) -> None:
        collection = _collection(key)
        if collection.model is OutgoingDocument:
            # Bulk delete skips ORM cascades.
            self._db.query(OutgoingDocumentItem).delete()
        self._db.query(collection.model).delete()
        for position, record in enumerate(records):
            self._db.add(collection.to_row(record, position))
        self._db.commit()
        logger.info("Saved %s records for key=%s", len(records), key)
