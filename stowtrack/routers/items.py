import uuid
from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from stowtrack.config import settings
from stowtrack.database import get_db
from stowtrack.schemas.item import (
    ItemCreate, ItemUpdate, ItemResponse, MoveItemsRequest, MoveItemsResponse,
)
from stowtrack.schemas.pagination import SearchPage
import stowtrack.services.item_service as svc

router = APIRouter(prefix="/api/items", tags=["items"])


@router.get("", response_model=list[ItemResponse])
def list_items(db: Session = Depends(get_db)):
    return svc.get_items(db)


@router.get("/search", response_model=SearchPage[ItemResponse])
def search_items(
    q: str = Query(""),
    offset: int = Query(0),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT),
    db: Session = Depends(get_db),
):
    return svc.search_items(db, q, offset=offset, limit=limit)


@router.post("", response_model=ItemResponse, status_code=201)
def create_item(data: ItemCreate, db: Session = Depends(get_db)):
    return svc.create_item(db, data)


@router.post("/move", response_model=MoveItemsResponse)
def move_items(data: MoveItemsRequest, db: Session = Depends(get_db)):
    return MoveItemsResponse(moved=svc.move_items(db, data))


@router.get("/{item_id}", response_model=ItemResponse)
def get_item(item_id: uuid.UUID, db: Session = Depends(get_db)):
    return svc.get_item(db, item_id)


@router.put("/{item_id}", response_model=ItemResponse)
def update_item(item_id: uuid.UUID, data: ItemUpdate, db: Session = Depends(get_db)):
    return svc.update_item(db, item_id, data)


@router.delete("/{item_id}", status_code=204, response_class=Response)
def delete_item(item_id: uuid.UUID, db: Session = Depends(get_db)):
    svc.delete_item(db, item_id)
    return Response(status_code=204)
