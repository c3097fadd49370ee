from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session
from stowtrack.config import settings
from stowtrack.database import get_db
from stowtrack.schemas.location import (
    LocationCreate, LocationUpdate, LocationResponse, LocationTreeNodeResponse,
)
from stowtrack.schemas.item import ItemResponse
from stowtrack.schemas.pagination import SearchPage
import stowtrack.services.location_service as svc
import stowtrack.services.item_service as item_svc

router = APIRouter(prefix="/api/locations", tags=["locations"])


@router.get("", response_model=list[LocationResponse])
def list_locations(db: Session = Depends(get_db)):
    return svc.get_locations(db)


@router.get("/tree", response_model=list[LocationTreeNodeResponse])
def location_tree(db: Session = Depends(get_db)):
    return svc.get_location_tree(db)


@router.get("/search", response_model=SearchPage[LocationResponse])
def search_locations(
    q: str = Query(""),
    offset: int = Query(0),
    limit: int = Query(settings.SEARCH_DEFAULT_LIMIT),
    db: Session = Depends(get_db),
):
    return svc.search_locations(db, q, offset=offset, limit=limit)


@router.post("", response_model=LocationResponse, status_code=201)
def create_location(data: LocationCreate, db: Session = Depends(get_db)):
    return svc.create_location(db, data)


@router.get("/{location_id}", response_model=LocationResponse)
def get_location(location_id: str, db: Session = Depends(get_db)):
    return svc.get_location(db, location_id)


@router.put("/{location_id}", response_model=LocationResponse)
def update_location(location_id: str, data: LocationUpdate, db: Session = Depends(get_db)):
    return svc.update_location(db, location_id, data)


@router.delete("/{location_id}", status_code=204, response_class=Response)
def delete_location(location_id: str, db: Session = Depends(get_db)):
    svc.delete_location(db, location_id)
    return Response(status_code=204)


@router.get("/{location_id}/children", response_model=list[LocationResponse])
def location_children(location_id: str, db: Session = Depends(get_db)):
    return svc.get_children(db, location_id)


@router.get("/{location_id}/items", response_model=list[ItemResponse])
def items_at_location(location_id: str, db: Session = Depends(get_db)):
    return item_svc.get_items_at_location(db, location_id)
