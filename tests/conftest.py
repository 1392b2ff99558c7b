"""
Shared test fixtures: SQLite test database, test client, pricing config.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Set DATABASE_URL before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from stickerking.calculators.materials import MaterialCatalog
from stickerking.calculators.sticker_price import (
    LayoutConstants,
    PricingConfig,
    StickerPriceCalculator,
)
from stickerking.database import Base, get_db
from stickerking.main import app


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def pricing_config():
    """The shop's production layout: 650mm roll, 1mm bleed, R0.20 floor (not enforced)."""
    return PricingConfig(
        catalog=MaterialCatalog(),
        layout=LayoutConstants(roll_width_mm=650, bleed_mm=1, min_price_per_sticker="0.20"),
        enforce_min_price=False,
    )


@pytest.fixture
def calculator(pricing_config):
    return StickerPriceCalculator(pricing_config)
