from datetime import datetime, timedelta, timezone
from parkshare.controllers.analytics_controller import AnalyticsController
from parkshare.models.parking_models import ParkingSession, ParkingSpace, SessionStatus, VehicleType


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "OK"


def test_search_parking_spaces(client, list_space):
    pune_cars = list_space(city="Pune", car_spots=2, bike_spots=0)
    pune_bikes = list_space(city="Pune", car_spots=0, bike_spots=4)
    list_space(city="Mumbai", car_spots=1)
    closed = list_space(city="Pune", car_spots=3)
    client.put(f"/parking-spaces/{closed}", json={"is_active": False})

    # FILTER BY CITY ONLY RETURNS ACTIVE SPACES
    data = client.get("/parking-spaces", params={"city": "Pune"}).json()
    assert {space["id"] for space in data} == {pune_cars, pune_bikes}

    # FILTER BY VEHICLE TYPE NEEDS A FREE SPOT OF THAT CLASS
    data = client.get("/parking-spaces", params={"city": "Pune", "vehicle_type": "bike"}).json()
    assert [space["id"] for space in data] == [pune_bikes]

    data = client.get("/parking-spaces").json()
    assert len(data) == 3
    assert "available_spots" in data[0]
    assert "car_price_per_hour" in data[0]


def test_search_unknown_vehicle_type(client):
    response = client.get("/parking-spaces", params={"vehicle_type": "truck"})
    assert response.status_code == 400


def test_read_parking_space_with_reviews(client, register_user, list_space):
    space_id = list_space()
    user_id = register_user(name="Ravi")
    client.post("/reviews", json={"parking_space_id": space_id, "user_id": user_id, "rating": 4, "comment": "Tight turn"})

    response = client.get(f"/parking-spaces/{space_id}")
    assert response.status_code == 200
    reviews = response.json()["reviews"]
    assert len(reviews) == 1
    assert reviews[0]["name"] == "Ravi"
    assert reviews[0]["rating"] == 4

    response = client.get(f"/parking-spaces/{space_id}/reviews")
    assert response.status_code == 200
    assert response.json()[0]["comment"] == "Tight turn"


def test_read_missing_resources(client):
    assert client.get("/parking-spaces/missing").status_code == 404
    assert client.get("/users/missing").status_code == 404
    assert client.get("/sessions/missing").status_code == 404
    assert client.get("/payments/missing").status_code == 404


def test_read_user_sessions(client, db, register_user, list_space):
    space_id = list_space(address="7 Park Street", city="Kolkata", car_spots=2)
    user_id = register_user()

    first_id = client.post("/sessions/check-in", json={
        "parking_space_id": space_id, "user_id": user_id, "vehicle_type": "car",
    }).json()["sessionId"]
    # MOVE THE FIRST SESSION INTO THE PAST SO ORDERING IS STABLE
    first = db.get(ParkingSession, first_id)
    first.check_in_time = datetime.now(timezone.utc) - timedelta(minutes=150)
    db.add(first)
    db.commit()
    client.post("/sessions/check-out", json={"session_id": first_id})

    second_id = client.post("/sessions/check-in", json={
        "parking_space_id": space_id, "user_id": user_id, "vehicle_type": "car",
    }).json()["sessionId"]

    response = client.get(f"/users/{user_id}/sessions")
    assert response.status_code == 200
    data = response.json()
    assert [s["id"] for s in data] == [second_id, first_id]
    assert data[0]["status"] == "active"
    assert data[1]["status"] == "completed"
    assert data[1]["amount_charged"] == 60
    assert data[0]["address"] == "7 Park Street"
    assert data[0]["city"] == "Kolkata"


def test_owner_analytics_without_completed_sessions(client, register_user, list_space):
    space_id = list_space(owner_email="new-owner@example.com")
    user_id = register_user()
    client.post("/sessions/check-in", json={
        "parking_space_id": space_id, "user_id": user_id, "vehicle_type": "car",
    })

    response = client.get("/analytics/owner/new-owner@example.com")
    assert response.status_code == 200
    assert response.json() == [{
        "spaceId": space_id,
        "address": "12 MG Road",
        "totalSessions": 1,
        "completedSessions": 0,
        "totalRevenue": 0,
        "averageSessionPrice": 0,
    }]


def test_owner_analytics_revenue(client, db, register_user, list_space):
    space_id = list_space(owner_email="earner@example.com", car_spots=3, bike_spots=1)
    list_space(owner_email="earner@example.com", address="2 Side Lane")
    list_space(owner_email="someone-else@example.com")
    user_id = register_user()

    car_session = client.post("/sessions/check-in", json={
        "parking_space_id": space_id, "user_id": user_id, "vehicle_type": "car",
    }).json()["sessionId"]
    parking_session = db.get(ParkingSession, car_session)
    parking_session.check_in_time = datetime.now(timezone.utc) - timedelta(minutes=150)
    db.add(parking_session)
    db.commit()
    client.post("/sessions/check-out", json={"session_id": car_session})

    bike_session = client.post("/sessions/check-in", json={
        "parking_space_id": space_id, "user_id": user_id, "vehicle_type": "bike",
    }).json()["sessionId"]
    client.post("/sessions/check-out", json={"session_id": bike_session})

    data = client.get("/analytics/owner/earner@example.com").json()
    assert len(data) == 2
    summary = next(item for item in data if item["spaceId"] == space_id)
    # THREE STARTED CAR HOURS AT 20 PLUS ONE BIKE HOUR AT 10
    assert summary["completedSessions"] == 2
    assert summary["totalRevenue"] == 70
    assert summary["averageSessionPrice"] == 35

    other = next(item for item in data if item["spaceId"] != space_id)
    assert other["address"] == "2 Side Lane"
    assert other["totalSessions"] == 0


def test_owner_analytics_unknown_owner(client):
    response = client.get("/analytics/owner/nobody@example.com")
    assert response.status_code == 200
    assert response.json() == []


def test_summarize_space_ignores_active_sessions():
    space = ParkingSpace(
        id="space-1", owner_name="o", owner_email="o@example.com", owner_phone="1",
        address="1 Test Road", city="Pune", space_type="driveway", total_spots=2, available_spots=1,
    )
    sessions = [
        ParkingSession(parking_space_id="space-1", user_id="u", vehicle_type=VehicleType.car,
                       vehicle_number="X", qr_code="PARK-a", status=SessionStatus.completed, amount_charged=40),
        ParkingSession(parking_space_id="space-1", user_id="u", vehicle_type=VehicleType.car,
                       vehicle_number="X", qr_code="PARK-b", status=SessionStatus.active),
    ]
    summary = AnalyticsController.summarize_space(space, sessions)
    assert summary.totalSessions == 2
    assert summary.completedSessions == 1
    assert summary.totalRevenue == 40
    assert summary.averageSessionPrice == 40
