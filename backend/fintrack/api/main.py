import logging

from fastapi import FastAPI

from fintrack.api.deps import get_app_settings

from fintrack.api.routes.health import router as health_router
from fintrack.api.routes.transactions import router as transactions_router
from fintrack.api.routes.search import router as search_router
from fintrack.api.routes.summary import router as summary_router


app = FastAPI(title="FINTRACK API", version="0.1.0")

@app.on_event("startup")
def _startup_logging() -> None:
    # Fail fast si la config env est invalide
    settings = get_app_settings()
    logging.basicConfig(level=settings.log_level)

app.include_router(health_router)
app.include_router(transactions_router)
app.include_router(search_router)
app.include_router(summary_router)
