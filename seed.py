"""Seed script: fills the database with a small sample hierarchy."""
import os
import sys

# Ensure we're in the project root
sys.path.insert(0, os.path.dirname(__file__))

from stowtrack.database import Base, engine, SessionLocal
import stowtrack.models  # noqa: F401  registers all models
from stowtrack.schemas.location import LocationCreate
from stowtrack.schemas.item import ItemCreate
from stowtrack.services import item_service, location_service
from stowtrack.stores import item_store, location_store


LOCATIONS = [
    # id, name, description, parent
    ("warehouse", "Warehouse", "Main storage building", None),
    ("shelf-1", "Shelf 1", "Hand tools", "warehouse"),
    ("shelf-2", "Shelf 2", "Fasteners and consumables", "warehouse"),
    ("garage", "Garage", None, None),
    ("garage-cabinet", "Wall cabinet", "Power tools and chargers", "garage"),
]

ITEMS = [
    # name, description, location, properties
    ("Red Hammer", "Claw hammer, 16 oz", "shelf-1", {"brand": "Stanley"}),
    ("Blue Hammer", "Rubber mallet", "shelf-1", {}),
    ("Red Wrench", "Adjustable wrench, 10 inch", "shelf-1", {"size": "10in"}),
    ("Wood screws", "Box of 200, 4x40", "shelf-2", {"count": "200"}),
    ("Cordless drill", "18V with two batteries", "garage-cabinet", {"voltage": "18V"}),
]


def seed():
    os.makedirs("data", exist_ok=True)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        for loc_id, name, description, parent in LOCATIONS:
            if not location_store.exists(db, loc_id):
                location_service.create_location(db, LocationCreate(
                    id=loc_id, name=name, description=description, parent_location_id=parent,
                ))

        existing_names = {item.name for item in item_store.get_all(db)}
        for name, description, loc_id, properties in ITEMS:
            if name not in existing_names:
                item_service.create_item(db, ItemCreate(
                    name=name, description=description, location_id=loc_id, properties=properties,
                ))

        print(f"Seeded {len(location_store.get_all(db))} locations, {len(item_store.get_all(db))} items")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
