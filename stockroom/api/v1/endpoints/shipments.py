from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.core.record_store import OUTGOING_DOCUMENTS_KEY, SqlRecordStore
from stockroom.schemas.shipment_analysis import (
    ProductShipmentData,
    ShipmentAnalysisFilters,
    ShipmentFacets,
)
from stockroom.schemas.shipping_report import ShippingReport, ShippingReportFilters
from stockroom.services.shipment_analysis import compute_shipment_analysis, list_shipment_facets
from stockroom.services.shipping_report import compute_shipping_report


router = APIRouter()


def _check_date_range(start_date: date | None, end_date: date | None) -> None:
    if start_date is not None and end_date is not None and start_date > end_date:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="start_date cannot be later than end_date",
        )


@router.get(
    "/analysis",
    response_model=list[ProductShipmentData],
    summary="Shipment analysis per recipient and product",
    description=(
        "Aggregates shipped pairs per recipient, product and SKU for documents dated "
        "within [start_date, end_date], with optional exact product/recipient filters "
        "and a case-insensitive search over recipient, product and SKU."
    ),
)
def get_shipment_analysis(
    start_date: date = Query(...),
    end_date: date = Query(...),
    product: str | None = None,
    recipient: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
) -> list[ProductShipmentData]:
    _check_date_range(start_date, end_date)

    filters = ShipmentAnalysisFilters(
        start_date=start_date,
        end_date=end_date,
        product_filter=product,
        recipient_filter=recipient,
        search_term=search,
    )
    return compute_shipment_analysis(SqlRecordStore(db), filters)


@router.get(
    "/facets",
    response_model=ShipmentFacets,
    summary="List shipment filter values",
    description="Returns the distinct product names and recipients found in outgoing documents.",
)
def get_shipment_facets(db: Session = Depends(get_db)) -> ShipmentFacets:
    documents = SqlRecordStore(db).load(OUTGOING_DOCUMENTS_KEY, [])
    return list_shipment_facets(documents)


@router.get(
    "/report",
    response_model=ShippingReport,
    summary="Detailed shipping report",
    description=(
        "Groups outgoing documents by recipient with per-recipient totals and "
        "per-product summaries. Recipients appear in order of first shipment."
    ),
)
def get_shipping_report(
    search: str | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    db: Session = Depends(get_db),
) -> ShippingReport:
    _check_date_range(start_date, end_date)

    filters = ShippingReportFilters(search_term=search, start_date=start_date, end_date=end_date)
    return compute_shipping_report(SqlRecordStore(db), filters)
