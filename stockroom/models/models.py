from __future__ import annotations

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Product(Base):
    __tablename__ = "product"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sku: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="unknown")
    pairs_per_box: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sizes: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    colors: Mapped[str] = mapped_column(String(255), nullable=False, default="")


class Delivery(Base):
    __tablename__ = "delivery"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    date: Mapped[Date] = mapped_column(Date, nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    box_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    pairs_per_box: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    total_pairs: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    product_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    account: Mapped[str | None] = mapped_column(String(255), nullable=True)


class StockUnit(Base):
    __tablename__ = "stock_unit"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    sku: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    size: Mapped[str] = mapped_column(String(50), nullable=False)
    color: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    box_id: Mapped[str | None] = mapped_column(String(100), nullable=True)


class OutgoingDocument(Base):
    __tablename__ = "outgoing_document"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    document_number: Mapped[str] = mapped_column(String(100), nullable=False)
    date: Mapped[Date] = mapped_column(Date, nullable=False)
    time: Mapped[str | None] = mapped_column(String(20), nullable=True)
    recipient_id: Mapped[str | None] = mapped_column(String(100), nullable=True)
    recipient: Mapped[str] = mapped_column(String(255), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    total_items: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    items: Mapped[list["OutgoingDocumentItem"]] = relationship(
        "OutgoingDocumentItem",
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="OutgoingDocumentItem.id",
    )


class OutgoingDocumentItem(Base):
    __tablename__ = "outgoing_document_item"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    document_id: Mapped[int] = mapped_column(ForeignKey("outgoing_document.id"), nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    color: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    size: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    document: Mapped[OutgoingDocument] = relationship("OutgoingDocument", back_populates="items")


class BoxStock(Base):
    """Derived box-stock snapshot, overwritten wholesale on every sync."""

    __tablename__ = "box_stock"

    id: Mapped[str] = mapped_column(String(120), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    sku: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    box_count: Mapped[int] = mapped_column(Integer, nullable=False)
    pairs_per_box: Mapped[int] = mapped_column(Integer, nullable=False)
    total_pairs: Mapped[int] = mapped_column(Integer, nullable=False)
    stock_level: Mapped[str] = mapped_column(String(20), nullable=False)
