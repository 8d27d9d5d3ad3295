from __future__ import annotations

import logging
from typing import Iterable

from stockroom.core.record_store import OUTGOING_DOCUMENTS_KEY, RecordStore
from stockroom.schemas.outgoing_document import OutgoingDocumentRead
from stockroom.schemas.shipping_report import (
    GroupedShipment,
    ProductSummary,
    RecipientProductSummary,
    ShippingReport,
    ShippingReportFilters,
)


logger = logging.getLogger(__name__)


def filter_report_documents(
    documents: Iterable[OutgoingDocumentRead],
    filters: ShippingReportFilters,
) -> list[OutgoingDocumentRead]:
    needle = filters.search_term.lower() if filters.search_term else None

    result: list[OutgoingDocumentRead] = []
    for doc in documents:
        if needle is not None and needle not in doc.recipient.lower():
            continue
        if filters.start_date is not None and doc.date < filters.start_date:
            continue
        if filters.end_date is not None and doc.date > filters.end_date:
            continue
        result.append(doc)
    return result


def group_shipments_by_recipient(
    documents: Iterable[OutgoingDocumentRead],
) -> ShippingReport:
    """Group documents per recipient, in order of first appearance.

    total_pairs of a group adds up each document's stored total_items; it is
    not recomputed from the items. Documents whose items disagree with their
    stored total are logged for audit.
    """

    groups: dict[str, GroupedShipment] = {}
    summaries: RecipientProductSummary = {}

    for doc in documents:
        recipient = doc.recipient
        group = groups.get(recipient)
        if group is None:
            group = GroupedShipment(recipient=recipient, total_shipments=0, total_pairs=0, shipments=[])
            groups[recipient] = group
        recipient_summaries = summaries.setdefault(recipient, {})

        group.shipments.append(doc)
        group.total_shipments += 1
        group.total_pairs += doc.total_items

        items_total = 0
        for item in doc.items:
            items_total += item.quantity
            product_key = f"{item.sku}-{item.name}"
            summary = recipient_summaries.get(product_key)
            if summary is None:
                summary = ProductSummary(sku=item.sku, name=item.name, total_pairs=0)
                recipient_summaries[product_key] = summary
            summary.total_pairs += item.quantity

        if items_total != doc.total_items:
            logger.warning(
                "Outgoing document %s (%s) declares total_items=%s but items sum to %s",
                doc.id,
                doc.document_number,
                doc.total_items,
                items_total,
            )

    return ShippingReport(groups=list(groups.values()), product_summaries=summaries)


def build_shipping_report(
    documents: Iterable[OutgoingDocumentRead],
    filters: ShippingReportFilters,
) -> ShippingReport:
    return group_shipments_by_recipient(filter_report_documents(documents, filters))


def compute_shipping_report(store: RecordStore, filters: ShippingReportFilters) -> ShippingReport:
    documents = store.load(OUTGOING_DOCUMENTS_KEY, [])
    return build_shipping_report(documents, filters)
