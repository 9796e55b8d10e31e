import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine
from parkshare.database import get_db
from parkshare.main import app
import parkshare.models.parking_models  # noqa: F401


@pytest.fixture(name="db")
def db_fixture():
    # ONE SHARED IN-MEMORY DATABASE PER TEST
    engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    SQLModel.metadata.create_all(engine)
    with Session(engine) as session:
        yield session
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="client")
def client_fixture(db: Session):
    def get_db_override():
        return db

    app.dependency_overrides[get_db] = get_db_override
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register_user(client):
    counter = {"n": 0}

    def _register(**overrides):
        counter["n"] += 1
        n = counter["n"]
        payload = {
            "name": f"Driver {n}",
            "email": f"driver{n}@example.com",
            "phone": f"98765000{n:02d}",
            "vehicle_type": "car",
            "vehicle_number": f"MH12AB{n:04d}",
        }
        payload.update(overrides)
        response = client.post("/users/register", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["userId"]

    return _register


@pytest.fixture
def list_space(client):
    def _list(**overrides):
        payload = {
            "owner_name": "Green Villa",
            "owner_email": "owner@example.com",
            "owner_phone": "9000000000",
            "address": "12 MG Road",
            "city": "Pune",
            "space_type": "driveway",
            "car_spots": 1,
            "bike_spots": 2,
            "ev_spots": 0,
        }
        payload.update(overrides)
        response = client.post("/parking-spaces", json=payload)
        assert response.status_code == 200, response.text
        return response.json()["spaceId"]

    return _list


@pytest.fixture(name="file_engine")
def file_engine_fixture(tmp_path):
    # FILE BACKED SO TWO SESSIONS USE TWO REAL CONNECTIONS
    engine = create_engine(f"sqlite:///{tmp_path / 'parkshare.db'}", connect_args={"check_same_thread": False})
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()
