import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from stowtrack.database import Base, make_engine
import stowtrack.models  # noqa: F401  registers all models
from stowtrack.schemas.item import ItemCreate
from stowtrack.schemas.location import LocationCreate
from stowtrack.services import item_service, location_service


TEST_DB_URL = "sqlite:///:memory:"


@pytest.fixture(scope="function")
def db():
    engine = make_engine(TEST_DB_URL, poolclass=StaticPool)
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
    engine.dispose()


@pytest.fixture
def add_location(db):
    def _add(location_id, name=None, parent=None, description=None):
        return location_service.create_location(db, LocationCreate(
            id=location_id,
            name=name or location_id,
            description=description,
            parent_location_id=parent,
        ))
    return _add


@pytest.fixture
def add_item(db):
    def _add(name, location_id, description=None, properties=None):
        return item_service.create_item(db, ItemCreate(
            name=name,
            description=description,
            location_id=location_id,
            properties=properties or {},
        ))
    return _add
