import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routers import conversions, dimensions, tally, units, validation, yield_waste

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("lumbersuite")

app = FastAPI(
    title="LumberSuite Engine",
    description="Lumber unit-of-measure conversion and yield/waste engine",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(conversions.router, prefix="/api")
app.include_router(units.router, prefix="/api")
app.include_router(yield_waste.router, prefix="/api")
app.include_router(validation.router, prefix="/api")
app.include_router(dimensions.router, prefix="/api")
app.include_router(tally.router, prefix="/api")

logger.info("%s ready: BF precision %d, default yield %.1f%%",
            settings.APP_NAME, settings.BF_PRECISION, settings.DEFAULT_YIELD_PCT)


@app.get("/health")
def health():
    return {"status": "ok", "app": "lumbersuite"}
