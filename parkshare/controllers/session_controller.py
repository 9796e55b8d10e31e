import logging
from sqlalchemy import update
from sqlmodel import Session, select, col
from fastapi import HTTPException
from parkshare.controllers.inventory_controller import SpaceInventory
from parkshare.exceptions import NotFoundError, CapacityExceededError, InvalidStateError
from parkshare.models.parking_models import (
    ParkingSession, ParkingSpace, User, SessionStatus, PaymentStatus,
    generate_id, qr_code_for, utcnow,
)
from parkshare.schemas.parking_schemas import (
    CheckInRequest, CheckInResponse, CheckOutResponse, SessionResponse, SessionHistoryResponse,
)
from parkshare.utils.calculation import calculate_charge, calculate_duration_minutes, format_local_time

logger = logging.getLogger(__name__)


class SessionController:
    @staticmethod
    def check_in(check_in_request: CheckInRequest, db: Session) -> CheckInResponse:
        try:
            space = db.get(ParkingSpace, check_in_request.parking_space_id)
            if not space:
                raise NotFoundError(detail="Parking space not found")

            if not space.is_active:
                raise InvalidStateError(detail="Parking space is not accepting check-ins")

            user = db.get(User, check_in_request.user_id)
            if not user:
                raise NotFoundError(detail="User not found")

            vehicle_type = check_in_request.vehicle_type
            if not SpaceInventory.reserve_spot(db, space.id, vehicle_type):
                db.rollback()
                raise CapacityExceededError(detail=f"No {vehicle_type.value} spots available")

            session_id = generate_id()
            qr_code = qr_code_for(session_id)
            parking_session = ParkingSession(
                id=session_id,
                parking_space_id=space.id,
                user_id=user.id,
                vehicle_type=vehicle_type,
                vehicle_number=check_in_request.vehicle_number or user.vehicle_number,
                check_in_time=utcnow(),
                qr_code=qr_code,
                status=SessionStatus.active,
            )
            db.add(parking_session)
            db.commit()

            logger.info(f"Session {session_id} opened for {vehicle_type.value} at space {space.id}")
            return CheckInResponse(sessionId=session_id, qrCode=qr_code)

        except HTTPException as http_exc:
            raise http_exc

        except Exception as e:
            db.rollback()
            logger.error(f"Check-in failed: {e}")
            raise HTTPException(status_code=500, detail=f"Internal server error while checking in: {e}")

    @staticmethod
    def check_out(session_id: str, db: Session) -> CheckOutResponse:
        try:
            parking_session = db.get(ParkingSession, session_id)
            if not parking_session:
                raise NotFoundError(detail="Session not found")

            next_status = SessionStatus(parking_session.status).transition_to(SessionStatus.completed)

            space = db.get(ParkingSpace, parking_session.parking_space_id)
            if not space:
                raise NotFoundError(detail="Parking space not found")

            vehicle_type = parking_session.vehicle_type
            check_in_time = parking_session.check_in_time
            check_out_time = utcnow()
            duration_minutes = calculate_duration_minutes(check_in_time, check_out_time)
            price_per_hour = space.rate_for(vehicle_type)
            amount = calculate_charge(duration_minutes, price_per_hour)

            # ONLY AN ACTIVE ROW IS CLOSED, A CONCURRENT CHECK-OUT MATCHES NOTHING
            close_session = (
                update(ParkingSession)
                .where(ParkingSession.id == session_id, ParkingSession.status == SessionStatus.active)
                .values(
                    check_out_time=check_out_time,
                    duration_minutes=duration_minutes,
                    amount_charged=amount,
                    payment_status=PaymentStatus.pending,
                    status=next_status,
                )
                .execution_options(synchronize_session=False)
            )
            if db.execute(close_session).rowcount != 1:
                db.rollback()
                raise InvalidStateError(detail="Session already completed")

            SpaceInventory.release_spot(db, space.id, vehicle_type)
            db.commit()

            logger.info(f"Session {session_id} closed after {duration_minutes} min, charged {amount}")
            return CheckOutResponse(
                duration=duration_minutes,
                amount=amount,
                pricePerHour=price_per_hour,
                message=(
                    f"Check-out successful. Parked from {format_local_time(check_in_time)} "
                    f"to {format_local_time(check_out_time)}, the parking fee is {amount} Rs."
                ),
            )

        except HTTPException as http_exc:
            raise http_exc

        except Exception as e:
            db.rollback()
            logger.error(f"Check-out failed for session {session_id}: {e}")
            raise HTTPException(status_code=500, detail=f"Internal server error while checking out: {e}")

    @staticmethod
    def read_session(session_id: str, db: Session) -> SessionResponse:
        parking_session = db.get(ParkingSession, session_id)
        if not parking_session:
            raise NotFoundError(detail="Session not found")
        return SessionResponse.model_validate(parking_session)

    @staticmethod
    def read_user_sessions(user_id: str, db: Session):
        try:
            statement = (
                select(ParkingSession, ParkingSpace.address, ParkingSpace.city)
                .join(ParkingSpace, ParkingSession.parking_space_id == ParkingSpace.id)
                .where(ParkingSession.user_id == user_id)
                .order_by(col(ParkingSession.check_in_time).desc())
            )
            return [
                SessionHistoryResponse(**parking_session.model_dump(), address=address, city=city)
                for parking_session, address, city in db.exec(statement).all()
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"An error occured in read_user_sessions: {e}")
