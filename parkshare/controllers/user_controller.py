import logging
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select, or_
from fastapi import HTTPException
from parkshare.exceptions import NotFoundError, ValidationFailureError
from parkshare.models.parking_models import User, generate_id
from parkshare.schemas.parking_schemas import UserRegisterRequest, UserRegisteredResponse, UserResponse

logger = logging.getLogger(__name__)


class UserController:
    @staticmethod
    def register_user(user_request: UserRegisterRequest, db: Session) -> UserRegisteredResponse:
        try:
            query = select(User).where(
                or_(User.email == user_request.email, User.vehicle_number == user_request.vehicle_number)
            )
            existing_user = db.exec(query).first()
            if existing_user:
                if existing_user.email == user_request.email:
                    raise ValidationFailureError(detail="Email is already registered.")
                raise ValidationFailureError(detail="Vehicle is already registered.")

            user_id = generate_id()
            db.add(User(id=user_id, **user_request.model_dump()))
            db.commit()

            logger.info(f"User {user_id} registered")
            return UserRegisteredResponse(userId=user_id)

        except HTTPException as http_exc:
            raise http_exc

        # A PARALLEL REGISTRATION CAN STILL HIT THE UNIQUE CONSTRAINTS
        except IntegrityError:
            db.rollback()
            raise ValidationFailureError(detail="Email or vehicle is already registered.")

        except Exception as e:
            db.rollback()
            raise HTTPException(status_code=500, detail=f"Internal server error while registering user: {e}")

    @staticmethod
    def read_user(user_id: str, db: Session) -> UserResponse:
        user = db.get(User, user_id)
        if not user:
            raise NotFoundError(detail="User not found")
        return UserResponse.model_validate(user)
