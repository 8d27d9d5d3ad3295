from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.models.models import Delivery
from stockroom.schemas.delivery import DeliveryCreate, DeliveryRead


router = APIRouter()


@router.get("/", response_model=list[DeliveryRead])
def list_deliveries(db: Session = Depends(get_db)):
    deliveries = db.query(Delivery).order_by(Delivery.id).all()
    return deliveries


@router.get("/{id}", response_model=DeliveryRead)
def get_delivery(id: int, db: Session = Depends(get_db)):
    delivery = db.query(Delivery).filter(Delivery.id == id).first()
    if delivery is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")
    return delivery


@router.post("/", response_model=DeliveryRead, status_code=status.HTTP_201_CREATED)
def create_delivery(data: DeliveryCreate, db: Session = Depends(get_db)):
    delivery = Delivery(**data.model_dump())
    db.add(delivery)
    db.commit()
    db.refresh(delivery)
    return delivery


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_delivery(id: int, db: Session = Depends(get_db)):
    delivery = db.query(Delivery).filter(Delivery.id == id).first()
    if delivery is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Delivery not found")

    db.delete(delivery)
    db.commit()
    return None
