import logging

from fastapi import FastAPI

from stockroom.api.v1.router import api_router
from stockroom.core import config
from stockroom.services.box_stock_scheduler import build_scheduler_from_config


logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="Stockroom")
app.include_router(api_router, prefix="/api/v1")


@app.on_event("startup")
def _startup_event() -> None:
    scheduler = build_scheduler_from_config()
    scheduler.start()
    app.state.box_stock_scheduler = scheduler


@app.on_event("shutdown")
def _shutdown_event() -> None:
    scheduler = getattr(app.state, "box_stock_scheduler", None)
    if scheduler is not None:
        scheduler.shutdown()


@app.get("/")
def root():
    return {"status": "ok", "message": "Stockroom backend running"}
