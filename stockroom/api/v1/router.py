from fastapi import APIRouter

from stockroom.api.v1.endpoints import (
    box_stock,
    delivery,
    inventory,
    outgoing_document,
    product,
    shipments,
    stock_unit,
)

api_router = APIRouter()

api_router.include_router(product.router, prefix="/product", tags=["product"])
api_router.include_router(delivery.router, prefix="/delivery", tags=["delivery"])
api_router.include_router(stock_unit.router, prefix="/stock-unit", tags=["stock-unit"])
api_router.include_router(outgoing_document.router, prefix="/outgoing-document", tags=["outgoing-document"])
api_router.include_router(box_stock.router, prefix="/box-stock", tags=["box-stock"])
api_router.include_router(shipments.router, prefix="/shipments", tags=["shipments"])
api_router.include_router(inventory.router, prefix="/inventory", tags=["inventory"])
