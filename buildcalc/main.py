from fastapi import FastAPI
import logging

from .config import settings
from .database import engine, Base
from .defaults import store
from .routers import estimates, calculator, defaults

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("buildcalc")

# Create tables
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title=settings.APP_NAME,
    description="Material quantities for slabs, ceilings, flooring and concrete",
    version="1.0.0"
)

# API routes
app.include_router(estimates.router, prefix="/api")
app.include_router(calculator.router, prefix="/api")
app.include_router(defaults.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "buildcalc"}


@app.on_event("startup")
def load_defaults():
    """Load saved coefficient defaults once."""
    snapshot = store.load()
    logger.info("Loaded coefficient defaults: %s", snapshot.to_dict())
