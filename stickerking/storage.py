"""
Sidebar state persistence on top of the kv_store table.

The whole sidebar state (settings, current sticker lines, saved quotes) is
stored as one JSON document under APP_STATE_KEY. Stored state is merged over
DEFAULT_APP_STATE on load, so keys added later get their defaults.
"""

import copy
import logging

from sqlalchemy.orm import Session

from . import models
from .calculators.materials import UNSPECIFIED
from .config import settings

logger = logging.getLogger(__name__)

DEFAULT_APP_STATE = {
    "vat_rate": settings.DEFAULT_VAT_RATE,
    "include_vat": False,
    "dark_mode": False,
    "material": UNSPECIFIED,
    "rounded_corners": False,
    "stickers": [],
    "saved_quotes": [],
}


class SavedQuoteNotFound(LookupError):
    """No saved quote at the requested position."""

    def __init__(self, index: int):
        super().__init__(f"No saved quote at index {index}")
        self.index = index


def _get_row(db: Session, key: str):
    return db.query(models.KeyValue).filter(models.KeyValue.key == key).first()


def get_value(db: Session, key: str, default=None):
    row = _get_row(db, key)
    return default if row is None else row.value


def set_value(db: Session, key: str, value) -> None:
    """Insert or replace a JSON value."""
    row = _get_row(db, key)
    if row is None:
        db.add(models.KeyValue(key=key, value=value))
    else:
        # JSON columns only track reassignment, never in-place mutation
        row.value = value
    db.commit()


def load_app_state(db: Session) -> dict:
    state = copy.deepcopy(DEFAULT_APP_STATE)
    stored = get_value(db, models.APP_STATE_KEY)
    if isinstance(stored, dict):
        state.update(copy.deepcopy(stored))
    elif stored is not None:
        logger.warning("Ignoring malformed stored app state of type %s", type(stored).__name__)
    return state


def save_app_state(db: Session, state: dict) -> dict:
    merged = copy.deepcopy(DEFAULT_APP_STATE)
    merged.update(copy.deepcopy(state))
    set_value(db, models.APP_STATE_KEY, merged)
    return merged


# --- Saved quotes ---

def list_saved_quotes(db: Session) -> list:
    return load_app_state(db)["saved_quotes"]


def save_quote(db: Session, name: str, stickers: list) -> dict:
    """Append a named snapshot of sticker lines. Name is required."""
    name = (name or "").strip()
    if not name:
        raise ValueError("Please enter a name for the quote.")
    state = load_app_state(db)
    saved = {"name": name, "stickers": copy.deepcopy(stickers)}
    state["saved_quotes"].append(saved)
    save_app_state(db, state)
    logger.info("Saved quote %r with %d stickers", name, len(stickers))
    return saved


def _check_index(state: dict, index: int) -> None:
    if not 0 <= index < len(state["saved_quotes"]):
        raise SavedQuoteNotFound(index)


def load_saved_quote(db: Session, index: int) -> dict:
    """Replace the current sticker lines with those of a saved quote."""
    state = load_app_state(db)
    _check_index(state, index)
    state["stickers"] = copy.deepcopy(state["saved_quotes"][index]["stickers"])
    return save_app_state(db, state)


def delete_saved_quote(db: Session, index: int) -> list:
    state = load_app_state(db)
    _check_index(state, index)
    removed = state["saved_quotes"].pop(index)
    save_app_state(db, state)
    logger.info("Deleted saved quote %r", removed.get("name"))
    return state["saved_quotes"]
