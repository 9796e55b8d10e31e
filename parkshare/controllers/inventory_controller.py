from typing import Dict
from sqlalchemy import func, update
from sqlmodel import Session, select
from parkshare.exceptions import ValidationFailureError, InvalidStateError
from parkshare.models.parking_models import ParkingSpace, ParkingSession, SessionStatus, VehicleType


# PER-CLASS COLUMNS (car_spots, bike_spots, ev_spots) HOLD THE FREE SPOTS, available_spots IS THEIR SUM.
# EVERY WRITE IS ONE CONDITIONAL UPDATE SO THE CHECK AND THE CHANGE CANNOT BE SPLIT BY ANOTHER REQUEST.
class SpaceInventory:
    @staticmethod
    def reserve_spot(db: Session, space_id: str, vehicle_type: VehicleType) -> bool:
        column = ParkingSpace.spots_column(vehicle_type)
        statement = (
            update(ParkingSpace)
            .where(ParkingSpace.id == space_id, column > 0)
            .values({
                column: column - 1,
                ParkingSpace.available_spots: ParkingSpace.available_spots - 1,
            })
            .execution_options(synchronize_session=False)
        )
        return db.execute(statement).rowcount == 1

    @staticmethod
    def release_spot(db: Session, space_id: str, vehicle_type: VehicleType) -> None:
        column = ParkingSpace.spots_column(vehicle_type)
        statement = (
            update(ParkingSpace)
            .where(ParkingSpace.id == space_id)
            .values({
                column: column + 1,
                ParkingSpace.available_spots: ParkingSpace.available_spots + 1,
            })
            .execution_options(synchronize_session=False)
        )
        db.execute(statement)

    @staticmethod
    def active_sessions_count(space_id: str, vehicle_type: VehicleType):
        return (
            select(func.count())
            .select_from(ParkingSession)
            .where(
                ParkingSession.parking_space_id == space_id,
                ParkingSession.vehicle_type == vehicle_type,
                ParkingSession.status == SessionStatus.active,
            )
            .scalar_subquery()
        )

    @staticmethod
    def occupied_spots(db: Session, space_id: str) -> Dict[VehicleType, int]:
        statement = (
            select(ParkingSession.vehicle_type, func.count())
            .where(
                ParkingSession.parking_space_id == space_id,
                ParkingSession.status == SessionStatus.active,
            )
            .group_by(ParkingSession.vehicle_type)
        )
        occupied = {vehicle_type: 0 for vehicle_type in VehicleType}
        for vehicle_type, count in db.exec(statement).all():
            occupied[VehicleType(vehicle_type)] = count
        return occupied

    @staticmethod
    def resize(db: Session, space_id: str, capacities: Dict[VehicleType, int]) -> None:
        occupied = SpaceInventory.occupied_spots(db, space_id)
        for vehicle_type, new_total in capacities.items():
            if new_total < occupied[vehicle_type]:
                raise ValidationFailureError(
                    detail=f"Cannot reduce {vehicle_type.value} spots to {new_total}, "
                           f"{occupied[vehicle_type]} are currently occupied."
                )

        # FREE SPOTS ARE DERIVED FROM THE ACTIVE SESSIONS AT WRITE TIME, NOT FROM A LOADED ROW
        free_spots = {}
        class_totals = {}
        guards = []
        for vehicle_type in VehicleType:
            column = ParkingSpace.spots_column(vehicle_type)
            active = SpaceInventory.active_sessions_count(space_id, vehicle_type)
            if vehicle_type in capacities:
                new_total = capacities[vehicle_type]
                free_spots[vehicle_type] = new_total - active
                class_totals[vehicle_type] = new_total
                guards.append(active <= new_total)
            else:
                free_spots[vehicle_type] = column
                class_totals[vehicle_type] = column + active

        values = {ParkingSpace.spots_column(vehicle_type): free_spots[vehicle_type] for vehicle_type in capacities}
        values[ParkingSpace.available_spots] = sum(free_spots.values())
        values[ParkingSpace.total_spots] = sum(class_totals.values())

        statement = (
            update(ParkingSpace)
            .where(ParkingSpace.id == space_id, *guards)
            .values(values)
            .execution_options(synchronize_session=False)
        )
        if db.execute(statement).rowcount != 1:
            raise InvalidStateError(detail="Spot availability changed while updating, please retry.")
