from __future__ import annotations

from fastapi import FastAPI

from pinseekr.api.cups import router as cups_router
from pinseekr.api.expenses import router as expenses_router
from pinseekr.api.rounds import router as rounds_router
from pinseekr.api.settlements import router as settlements_router
from pinseekr.config import load_settings
from pinseekr.log import configure_logging

configure_logging(load_settings())

app = FastAPI(title="Pinseekr Scoring API")
app.include_router(rounds_router)
app.include_router(settlements_router)
app.include_router(expenses_router)
app.include_router(cups_router)
