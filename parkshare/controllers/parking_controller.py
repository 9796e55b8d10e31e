import logging
from typing import Optional
from sqlmodel import Session, select, col
from fastapi import HTTPException
from parkshare.config import Config
from parkshare.controllers.inventory_controller import SpaceInventory
from parkshare.exceptions import NotFoundError, ValidationFailureError
from parkshare.models.parking_models import ParkingSpace, Review, User, VehicleType, generate_id
from parkshare.schemas.parking_schemas import (
    ParkingSpaceCreate, ParkingSpaceUpdate, ParkingSpaceResponse, ParkingSpaceDetailResponse,
    SpaceCreatedResponse, ReviewRequest, ReviewResponse, ReviewCreatedResponse, GenericResponse,
)

logger = logging.getLogger(__name__)


class ParkingSpaceController:
    @staticmethod
    def create_parking_space(parking_space: ParkingSpaceCreate, db: Session) -> SpaceCreatedResponse:
        try:
            total_spots = parking_space.car_spots + parking_space.bike_spots + parking_space.ev_spots
            if total_spots < 1:
                raise ValidationFailureError(detail="A parking space needs at least one spot.")

            space_id = generate_id()
            new_space = ParkingSpace(
                id=space_id,
                **parking_space.model_dump(exclude_none=True),
                total_spots=total_spots,
                available_spots=total_spots,
            )
            db.add(new_space)
            db.commit()

            logger.info(f"Parking space {space_id} listed in {parking_space.city} with {total_spots} spots")
            return SpaceCreatedResponse(spaceId=space_id)

        # THIS EXCEPT BLOCK RERAISED HTTPException LIKE (A parking space needs at least one spot.)
        except HTTPException as http_exc:
            raise http_exc

        except Exception as e:
            db.rollback()
            raise HTTPException(status_code=500, detail=f"Internal server error while creating parking space: {e}")

    @staticmethod
    def search_parking_spaces(db: Session, city: Optional[str] = None, vehicle_type: Optional[VehicleType] = None):
        try:
            statement = select(ParkingSpace).where(ParkingSpace.is_active == True)  # noqa: E712
            if city:
                statement = statement.where(ParkingSpace.city == city)
            if vehicle_type:
                statement = statement.where(ParkingSpace.spots_column(vehicle_type) > 0)
            return db.exec(statement.limit(Config.SEARCH_LIMIT)).all()
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"An error occured in search_parking_spaces: {e}")

    @staticmethod
    def read_parking_space(space_id: str, db: Session) -> ParkingSpaceDetailResponse:
        space = db.get(ParkingSpace, space_id)
        if not space:
            raise NotFoundError(detail="Parking space not found")

        reviews = ReviewController.read_reviews(space_id, db)
        return ParkingSpaceDetailResponse(**space.model_dump(), reviews=reviews)

    @staticmethod
    def update_parking_space(space_id: str, space_update: ParkingSpaceUpdate, db: Session) -> GenericResponse:
        try:
            space = db.get(ParkingSpace, space_id)
            if not space:
                raise NotFoundError(detail="Parking space not found")

            changes = space_update.model_dump(exclude_none=True)
            # SPOT COUNTS ARE NEW TOTALS, THE INVENTORY TURNS THEM INTO AVAILABILITY
            capacities = {
                vehicle_type: changes.pop(f"{vehicle_type.value}_spots")
                for vehicle_type in VehicleType
                if f"{vehicle_type.value}_spots" in changes
            }
            for field, value in changes.items():
                setattr(space, field, value)
            db.add(space)

            if capacities:
                SpaceInventory.resize(db, space.id, capacities)

            db.commit()
            db.refresh(space)

            logger.info(f"Parking space {space_id} updated: {', '.join(changes) or 'capacity only'}")
            return GenericResponse(
                message="Parking space updated successfully",
                data=ParkingSpaceResponse.model_validate(space),
            )

        except HTTPException as http_exc:
            db.rollback()
            raise http_exc

        except Exception as e:
            db.rollback()
            raise HTTPException(status_code=500, detail=f"Internal server error while updating parking space: {e}")


class ReviewController:
    @staticmethod
    def create_review(review_request: ReviewRequest, db: Session) -> ReviewCreatedResponse:
        try:
            if not db.get(ParkingSpace, review_request.parking_space_id):
                raise NotFoundError(detail="Parking space not found")

            if not db.get(User, review_request.user_id):
                raise NotFoundError(detail="User not found")

            review_id = generate_id()
            db.add(Review(id=review_id, **review_request.model_dump()))
            db.commit()
            return ReviewCreatedResponse(reviewId=review_id)

        except HTTPException as http_exc:
            raise http_exc

        except Exception as e:
            db.rollback()
            raise HTTPException(status_code=500, detail=f"Internal server error while adding review: {e}")

    @staticmethod
    def read_reviews(space_id: str, db: Session):
        try:
            statement = (
                select(Review, User.name)
                .join(User, Review.user_id == User.id)
                .where(Review.parking_space_id == space_id)
                .order_by(col(Review.created_at).desc())
            )
            return [
                ReviewResponse(**review.model_dump(), name=name)
                for review, name in db.exec(statement).all()
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"An error occured in read_reviews: {e}")
