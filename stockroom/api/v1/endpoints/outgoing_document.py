from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from stockroom.core.db import get_db
from stockroom.core.record_store import SqlRecordStore
from stockroom.models.models import OutgoingDocument, OutgoingDocumentItem
from stockroom.schemas.outgoing_document import OutgoingDocumentCreate, OutgoingDocumentRead
from stockroom.services.unit_stock import check_outgoing_items_from_store


router = APIRouter()


@router.get("/", response_model=list[OutgoingDocumentRead])
def list_outgoing_documents(recipient: str | None = None, db: Session = Depends(get_db)):
    query = db.query(OutgoingDocument)
    if recipient is not None:
        query = query.filter(OutgoingDocument.recipient == recipient)
    return query.order_by(OutgoingDocument.id).all()


@router.get("/{id}", response_model=OutgoingDocumentRead)
def get_outgoing_document(id: int, db: Session = Depends(get_db)):
    doc = db.query(OutgoingDocument).filter(OutgoingDocument.id == id).first()
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="OutgoingDocument not found")
    return doc


@router.post("/", response_model=OutgoingDocumentRead, status_code=status.HTTP_201_CREATED)
def create_outgoing_document(data: OutgoingDocumentCreate, db: Session = Depends(get_db)):
    try:
        check_outgoing_items_from_store(SqlRecordStore(db), data.items)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc)) from exc

    doc = OutgoingDocument(**data.model_dump(exclude={"items"}))
    doc.items = [OutgoingDocumentItem(**item.model_dump()) for item in data.items]
    db.add(doc)
    db.commit()
    db.refresh(doc)
    return doc


@router.delete("/{id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_outgoing_document(id: int, db: Session = Depends(get_db)):
    doc = db.query(OutgoingDocument).filter(OutgoingDocument.id == id).first()
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="OutgoingDocument not found")

    db.delete(doc)
    db.commit()
    return None
