from __future__ import annotations

from typing import Iterable

from stockroom.core.record_store import OUTGOING_DOCUMENTS_KEY, RecordStore
from stockroom.schemas.outgoing_document import OutgoingDocumentRead, OutgoingStockItemRead
from stockroom.schemas.shipment_analysis import (
    ProductShipmentData,
    ShipmentAnalysisFilters,
    ShipmentFacets,
)


def derive_product_name(item: OutgoingStockItemRead) -> str:
    """Item name, or the SKU text before its first "-" when the name is empty."""

    return item.name or item.sku.split("-")[0]


def locale_sort_key(value: str) -> tuple[str, str]:
    # Case-insensitive order; on ties lowercase sorts before uppercase.
    return value.casefold(), value.swapcase()


def aggregate_shipments(
    documents: Iterable[OutgoingDocumentRead],
    filters: ShipmentAnalysisFilters,
) -> list[ProductShipmentData]:
    """Aggregate shipped quantities per recipient, product and SKU.

    shipment_count counts distinct documents per aggregate, so a document
    with several items of the same SKU is counted once.
    """

    aggregated: dict[str, ProductShipmentData] = {}

    for doc in documents:
        if not (filters.start_date <= doc.date <= filters.end_date):
            continue
        if filters.recipient_filter and doc.recipient != filters.recipient_filter:
            continue

        for item in doc.items:
            product_name = derive_product_name(item)
            if filters.product_filter and product_name != filters.product_filter:
                continue

            key = f"{doc.recipient}|{product_name}|{item.sku}"
            entry = aggregated.get(key)
            if entry is None:
                entry = ProductShipmentData(
                    recipient=doc.recipient,
                    recipient_id=doc.recipient_id,
                    product=product_name,
                    sku=item.sku,
                    total_pairs=0,
                    shipment_count=0,
                    last_shipment_date=doc.date,
                    documents=[],
                )
                aggregated[key] = entry

            entry.total_pairs += item.quantity

            if doc.id not in entry.documents:
                entry.documents.append(doc.id)
                entry.shipment_count += 1

            if doc.date > entry.last_shipment_date:
                entry.last_shipment_date = doc.date

    result = list(aggregated.values())

    if filters.search_term:
        needle = filters.search_term.lower()
        result = [
            entry
            for entry in result
            if needle in entry.recipient.lower()
            or needle in entry.product.lower()
            or needle in entry.sku.lower()
        ]

    result.sort(key=lambda entry: (locale_sort_key(entry.recipient), locale_sort_key(entry.product)))
    return result


def list_shipment_facets(documents: Iterable[OutgoingDocumentRead]) -> ShipmentFacets:
    """Distinct recipients and product names, for filter drop-downs."""

    products: set[str] = set()
    recipients: set[str] = set()
    for doc in documents:
        recipients.add(doc.recipient)
        for item in doc.items:
            products.add(derive_product_name(item))

    return ShipmentFacets(products=sorted(products), recipients=sorted(recipients))


def compute_shipment_analysis(
    store: RecordStore,
    filters: ShipmentAnalysisFilters,
) -> list[ProductShipmentData]:
    documents = store.load(OUTGOING_DOCUMENTS_KEY, [])
    return aggregate_shipments(documents, filters)
