"""
Sidebar state and saved quotes.

GET    /api/state                   - current settings + sticker lines
PUT    /api/state                   - replace them
GET    /api/saved-quotes/           - list saved quotes
POST   /api/saved-quotes/           - save current (or given) sticker lines under a name
POST   /api/saved-quotes/{i}/load   - make a saved quote the current one
DELETE /api/saved-quotes/{i}        - delete a saved quote
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from .. import schemas, storage
from ..database import get_db

router = APIRouter(prefix="/state", tags=["state"])
saved_router = APIRouter(prefix="/saved-quotes", tags=["saved-quotes"])


@router.get("", response_model=schemas.AppState)
def get_state(db: Session = Depends(get_db)):
    return storage.load_app_state(db)


@router.put("", response_model=schemas.AppState)
def put_state(state: schemas.AppState, db: Session = Depends(get_db)):
    return storage.save_app_state(db, state.model_dump(mode="json"))


@saved_router.get("/", response_model=List[schemas.SavedQuote])
def list_saved(db: Session = Depends(get_db)):
    return storage.list_saved_quotes(db)


@saved_router.post("/", response_model=schemas.SavedQuote)
def create_saved(request: schemas.SavedQuoteCreate, db: Session = Depends(get_db)):
    if request.stickers is None:
        stickers = storage.load_app_state(db)["stickers"]
    else:
        stickers = [s.model_dump(mode="json") for s in request.stickers]
    try:
        return storage.save_quote(db, request.name, stickers)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@saved_router.post("/{index}/load", response_model=schemas.AppState)
def load_saved(index: int, db: Session = Depends(get_db)):
    try:
        return storage.load_saved_quote(db, index)
    except storage.SavedQuoteNotFound:
        raise HTTPException(status_code=404, detail="Saved quote not found")


@saved_router.delete("/{index}", response_model=List[schemas.SavedQuote])
def delete_saved(index: int, db: Session = Depends(get_db)):
    try:
        return storage.delete_saved_quote(db, index)
    except storage.SavedQuoteNotFound:
        raise HTTPException(status_code=404, detail="Saved quote not found")
