from sqlalchemy import Column, String, DateTime, JSON
from datetime import datetime
from .database import Base


# Well-known keys in the key-value store
APP_STATE_KEY = "appState"


class KeyValue(Base):
    """Single-table key-value store for sidebar state (settings, stickers, saved quotes)."""
    __tablename__ = "kv_store"

    key = Column(String, primary_key=True, index=True)
    value = Column(JSON, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
