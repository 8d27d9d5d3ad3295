from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from stockroom.core.record_store import SqlRecordStore
from stockroom.schemas.shipment_analysis import ShipmentAnalysisFilters
from stockroom.services.shipment_analysis import (
    aggregate_shipments,
    compute_shipment_analysis,
    derive_product_name,
    list_shipment_facets,
)
from tests.test_utils import create_outgoing_document, make_document, make_item


JAN_1 = date(2025, 1, 1)
JAN_31 = date(2025, 1, 31)


def _filters(**kwargs) -> ShipmentAnalysisFilters:
    kwargs.setdefault("start_date", JAN_1)
    kwargs.setdefault("end_date", JAN_31)
    return ShipmentAnalysisFilters(**kwargs)


def test_product_name_falls_back_to_sku_prefix():
    assert derive_product_name(make_item(1, "X-1", 1, name="")) == "X"
    assert derive_product_name(make_item(1, "X-1", 1, name="Runner")) == "Runner"
    assert derive_product_name(make_item(1, "PLAIN", 1, name="")) == "PLAIN"


def test_same_recipient_product_sku_is_merged():
    documents = [
        make_document(1, "Acme", date(2025, 1, 5), [make_item(1, "X-1", 5)]),
        make_document(2, "Acme", date(2025, 1, 20), [make_item(2, "X-1", 3)]),
    ]

    [entry] = aggregate_shipments(documents, _filters())

    assert entry.recipient == "Acme"
    assert entry.product == "X"
    assert entry.sku == "X-1"
    assert entry.total_pairs == 8
    assert entry.shipment_count == 2
    assert entry.documents == [1, 2]
    assert entry.last_shipment_date == date(2025, 1, 20)


def test_shipment_count_counts_distinct_documents():
    documents = [
        make_document(
            1,
            "Acme",
            date(2025, 1, 5),
            [make_item(1, "X-1", 5, size="40"), make_item(2, "X-1", 4, size="41")],
        ),
    ]

    [entry] = aggregate_shipments(documents, _filters())

    assert entry.total_pairs == 9
    assert entry.shipment_count == 1


def test_last_shipment_date_keeps_latest_regardless_of_order():
    documents = [
        make_document(1, "Acme", date(2025, 1, 25), [make_item(1, "X-1", 1)]),
        make_document(2, "Acme", date(2025, 1, 3), [make_item(2, "X-1", 1)]),
    ]

    [entry] = aggregate_shipments(documents, _filters())

    assert entry.last_shipment_date == date(2025, 1, 25)


def test_date_bounds_are_inclusive():
    documents = [
        make_document(1, "Acme", date(2024, 12, 31), [make_item(1, "A-1", 1)]),
        make_document(2, "Acme", JAN_1, [make_item(2, "A-1", 2)]),
        make_document(3, "Acme", JAN_31, [make_item(3, "A-1", 4)]),
        make_document(4, "Acme", date(2025, 2, 1), [make_item(4, "A-1", 8)]),
    ]

    [entry] = aggregate_shipments(documents, _filters())

    assert entry.total_pairs == 6
    assert entry.documents == [2, 3]


def test_recipient_and_product_filters_are_exact():
    documents = [
        make_document(1, "Acme", JAN_1, [make_item(1, "X-1", 1), make_item(2, "Y-1", 2, name="Yeti")]),
        make_document(2, "Acme Corp", JAN_1, [make_item(3, "X-1", 4)]),
    ]

    by_recipient = aggregate_shipments(documents, _filters(recipient_filter="Acme"))
    assert {(e.recipient, e.product) for e in by_recipient} == {("Acme", "X"), ("Acme", "Yeti")}

    by_product = aggregate_shipments(documents, _filters(product_filter="Yeti"))
    assert [(e.recipient, e.sku) for e in by_product] == [("Acme", "Y-1")]


@pytest.mark.parametrize("term", ["ACME", "runner", "zz-9"])
def test_search_matches_any_of_recipient_product_sku(term):
    documents = [
        make_document(1, "Acme", JAN_1, [make_item(1, "Q-1", 1, name="Boot")]),
        make_document(2, "Bravo", JAN_1, [make_item(2, "R-1", 1, name="Runner")]),
        make_document(3, "Charlie", JAN_1, [make_item(3, "ZZ-9", 1, name="Sandal")]),
    ]

    result = aggregate_shipments(documents, _filters(search_term=term))

    assert len(result) == 1


def test_results_sorted_by_recipient_then_product_case_insensitively():
    documents = [
        make_document(1, "bravo", JAN_1, [make_item(1, "B-1", 1, name="boot")]),
        make_document(2, "Alpha", JAN_1, [make_item(2, "Z-1", 1, name="Zip")]),
        make_document(3, "Alpha", JAN_1, [make_item(3, "A-1", 1, name="apex")]),
        make_document(4, "Charlie", JAN_1, [make_item(4, "C-1", 1, name="Clog")]),
    ]

    result = aggregate_shipments(documents, _filters())

    assert [(e.recipient, e.product) for e in result] == [
        ("Alpha", "apex"),
        ("Alpha", "Zip"),
        ("bravo", "boot"),
        ("Charlie", "Clog"),
    ]


def test_empty_documents_yield_empty_result():
    assert aggregate_shipments([], _filters()) == []


def test_inverted_interval_is_rejected():
    with pytest.raises(ValidationError):
        ShipmentAnalysisFilters(start_date=JAN_31, end_date=JAN_1)


def test_malformed_date_is_rejected():
    with pytest.raises(ValidationError):
        ShipmentAnalysisFilters(start_date="2025-13-45", end_date=JAN_31)


def test_facets_are_sorted_and_distinct():
    documents = [
        make_document(1, "Bravo", JAN_1, [make_item(1, "X-1", 1), make_item(2, "Y-2", 1, name="Yeti")]),
        make_document(2, "Acme", JAN_1, [make_item(3, "X-5", 1)]),
    ]

    facets = list_shipment_facets(documents)

    assert facets.products == ["X", "Yeti"]
    assert facets.recipients == ["Acme", "Bravo"]


@pytest.mark.usefixtures("db_session")
def test_compute_shipment_analysis_reads_from_store(db_session):
    create_outgoing_document(
        db_session,
        recipient="Acme",
        day=date(2025, 1, 5),
        items=[{"sku": "X-1", "quantity": 5}],
        document_number="AKS-1",
    )
    create_outgoing_document(
        db_session,
        recipient="Acme",
        day=date(2025, 1, 6),
        items=[{"sku": "X-1", "quantity": 3}],
        document_number="AKS-2",
    )

    [entry] = compute_shipment_analysis(SqlRecordStore(db_session), _filters())

    assert entry.total_pairs == 8
    assert entry.shipment_count == 2
