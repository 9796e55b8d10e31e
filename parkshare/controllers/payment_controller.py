import logging
import math
from sqlalchemy import update
from sqlmodel import Session
from fastapi import HTTPException
from parkshare.exceptions import NotFoundError, InvalidStateError, ValidationFailureError
from parkshare.models.parking_models import (
    ParkingSession, Payment, User, SessionStatus, PaymentStatus, generate_id,
)
from parkshare.schemas.parking_schemas import PaymentRequest, PaymentRecordedResponse, PaymentResponse

logger = logging.getLogger(__name__)


class PaymentController:
    @staticmethod
    def record_payment(payment_request: PaymentRequest, db: Session) -> PaymentRecordedResponse:
        # THE AMOUNT PAID IS THE CHARGE STORED AT CHECK-OUT, A CLIENT AMOUNT IS ONLY COMPARED
        try:
            parking_session = db.get(ParkingSession, payment_request.session_id)
            if not parking_session:
                raise NotFoundError(detail="Session not found")

            user = db.get(User, payment_request.user_id)
            if not user:
                raise NotFoundError(detail="User not found")

            if parking_session.user_id != user.id:
                raise ValidationFailureError(detail="Session belongs to a different user")

            if parking_session.status != SessionStatus.completed:
                raise InvalidStateError(detail="Session must be checked out before payment")

            if parking_session.payment_status == PaymentStatus.completed:
                raise InvalidStateError(detail="Session already paid")

            amount = parking_session.amount_charged
            if payment_request.amount is not None and not math.isclose(payment_request.amount, amount, abs_tol=0.005):
                raise ValidationFailureError(
                    detail=f"Amount {payment_request.amount} does not match the charge of {amount} for this session"
                )

            mark_paid = (
                update(ParkingSession)
                .where(
                    ParkingSession.id == parking_session.id,
                    ParkingSession.payment_status == PaymentStatus.pending,
                )
                .values(payment_status=PaymentStatus.completed)
                .execution_options(synchronize_session=False)
            )
            if db.execute(mark_paid).rowcount != 1:
                db.rollback()
                raise InvalidStateError(detail="Session already paid")

            payment_id = generate_id()
            db.add(Payment(
                id=payment_id,
                session_id=parking_session.id,
                user_id=user.id,
                amount=amount,
                payment_method=payment_request.payment_method,
                status=PaymentStatus.completed,
            ))
            db.commit()

            logger.info(f"Payment {payment_id} of {amount} recorded for session {payment_request.session_id}")
            return PaymentRecordedResponse(paymentId=payment_id, amount=amount)

        except HTTPException as http_exc:
            raise http_exc

        except Exception as e:
            db.rollback()
            logger.error(f"Recording payment failed: {e}")
            raise HTTPException(status_code=500, detail=f"Internal server error while processing payment: {e}")

    @staticmethod
    def read_payment(payment_id: str, db: Session) -> PaymentResponse:
        payment = db.get(Payment, payment_id)
        if not payment:
            raise NotFoundError(detail="Payment not found")
        return PaymentResponse.model_validate(payment)
