from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import materials, pricing, quotes, state

logger = logging.getLogger("stickerking")

# Create tables: the kv_store table is the only one
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Sticker King Calculator",
    description="Per-sticker roll pricing and quotes for the Sticker King sidebar",
    version="1.0.0"
)

# The sidebar runs as a browser extension page, so its origin is not fixed
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(pricing.router, prefix="/api")
app.include_router(materials.router, prefix="/api")
app.include_router(quotes.router, prefix="/api")
app.include_router(state.router, prefix="/api")
app.include_router(state.saved_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "stickerking-calculator"}


@app.on_event("startup")
def log_pricing_config():
    logger.info(
        "Pricing: roll %smm, bleed %smm, min price/sticker %s (enforced: %s)",
        settings.ROLL_WIDTH_MM, settings.BLEED_MM,
        settings.MIN_PRICE_PER_STICKER, settings.ENFORCE_MIN_PRICE,
    )
