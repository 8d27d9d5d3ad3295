from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.core.record_store import SqlRecordStore
from stockroom.models.models import StockUnit
from stockroom.schemas.stock_unit import StockUnitCreate, StockUnitRead
from stockroom.services.box_stock import check_unit_allocation_from_store


router = APIRouter()


@router.get("/", response_model=list[StockUnitRead])
def list_stock_units(sku: str | None = None, db: Session = Depends(get_db)):
    query = db.query(StockUnit)
    if sku is not None:
        query = query.filter(StockUnit.sku == sku)
    return query.order_by(StockUnit.id).all()


@router.get("/{id}", response_model=StockUnitRead)
def get_stock_unit(id: int, db: Session = Depends(get_db)):
    unit = db.query(StockUnit).filter(StockUnit.id == id).first()
    if unit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="StockUnit not found")
    return unit


@router.post("/", response_model=list[StockUnitRead], status_code=status.HTTP_201_CREATED)
def create_stock_units(data: list[StockUnitCreate], db: Session = Depends(get_db)):
    """Unpack one or more stock units out of box stock.

    Box stock is not touched here; the next box-stock sync nets these
    quantities out. A batch asking for more pairs than were delivered for
    a SKU is refused with 409.
    """
    try:
        check_unit_allocation_from_store(SqlRecordStore(db), data)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    units = [StockUnit(**item.model_dump()) for item in data]
    db.add_all(units)
    db.commit()
    for unit in units:
        db.refresh(unit)
    return units


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_stock_unit(id: int, db: Session = Depends(get_db)):
    unit = db.query(StockUnit).filter(StockUnit.id == id).first()
    if unit is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="StockUnit not found")

    db.delete(unit)
    db.commit()
    return None
