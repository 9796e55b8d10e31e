import pytest
from parkshare.exceptions import InvalidStateError
from parkshare.models.parking_models import ParkingSpace, SessionStatus, VehicleType, qr_code_for


def test_session_can_only_move_from_active_to_completed():
    assert SessionStatus.active.transition_to(SessionStatus.completed) == SessionStatus.completed

    with pytest.raises(InvalidStateError) as exc_info:
        SessionStatus.completed.transition_to(SessionStatus.completed)
    assert exc_info.value.detail == "Session already completed"

    with pytest.raises(InvalidStateError):
        SessionStatus.completed.transition_to(SessionStatus.active)


def test_qr_code_is_derived_from_session_id():
    session_id = "1f0c2a9e-7b3d-4c55-9a61-0d2e8f4b7c11"
    assert qr_code_for(session_id) == "PARK-1f0c2a9e"
    assert qr_code_for(session_id) == qr_code_for(session_id)


def test_rate_falls_back_to_default_when_unset():
    space = ParkingSpace(
        owner_name="a", owner_email="a@b.c", owner_phone="1", address="x", city="Pune",
        space_type="garage", total_spots=1, available_spots=1, car_spots=1,
        car_price_per_hour=0, ev_price_per_hour=45,
    )
    assert space.rate_for(VehicleType.car) == 20
    assert space.rate_for(VehicleType.bike) == 10
    assert space.rate_for(VehicleType.ev) == 45
    assert space.available_for("car") == 1
