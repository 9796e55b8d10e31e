from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from typing import List, Optional
from sqlmodel import Session
from parkshare.controllers.analytics_controller import AnalyticsController
from parkshare.controllers.parking_controller import ParkingSpaceController, ReviewController
from parkshare.controllers.payment_controller import PaymentController
from parkshare.controllers.session_controller import SessionController
from parkshare.controllers.user_controller import UserController
from parkshare.models.parking_models import VehicleType
from parkshare.schemas.parking_schemas import (
    UserRegisterRequest, UserRegisteredResponse, UserResponse,
    ParkingSpaceCreate, ParkingSpaceUpdate, ParkingSpaceResponse, ParkingSpaceDetailResponse, SpaceCreatedResponse,
    CheckInRequest, CheckInResponse, CheckOutRequest, CheckOutResponse, SessionResponse, SessionHistoryResponse,
    PaymentRequest, PaymentRecordedResponse, PaymentResponse,
    ReviewRequest, ReviewCreatedResponse, ReviewResponse,
    OwnerSpaceSummary, GenericResponse,
)
from parkshare.database import get_db



router = APIRouter()

@router.get("/")
def hello():
    return {"message": "ParkShare Parking Marketplace"}

@router.get("/health")
def health():
    return {"status": "OK", "timestamp": datetime.now(timezone.utc).isoformat()}


# USERS

@router.post("/users/register", response_model=UserRegisteredResponse)
def register_user(user_request: UserRegisterRequest, db: Session = Depends(get_db)):
    return UserController.register_user(user_request, db)

@router.get("/users/{user_id}", response_model=UserResponse)
def read_user(user_id: str, db: Session = Depends(get_db)):
    return UserController.read_user(user_id, db)

@router.get("/users/{user_id}/sessions", response_model=List[SessionHistoryResponse])
def read_user_sessions(user_id: str, db: Session = Depends(get_db)):
    return SessionController.read_user_sessions(user_id, db)


# PARKING SPACES

@router.post("/parking-spaces", response_model=SpaceCreatedResponse)
def create_parking_space(parking_space: ParkingSpaceCreate, db: Session = Depends(get_db)):
    return ParkingSpaceController.create_parking_space(parking_space, db)

@router.get("/parking-spaces", response_model=List[ParkingSpaceResponse])
def search_parking_spaces(city: Optional[str] = None, vehicle_type: Optional[VehicleType] = None,
                          db: Session = Depends(get_db)):
    return ParkingSpaceController.search_parking_spaces(db, city, vehicle_type)

@router.get("/parking-spaces/{space_id}", response_model=ParkingSpaceDetailResponse)
def read_parking_space(space_id: str, db: Session = Depends(get_db)):
    return ParkingSpaceController.read_parking_space(space_id, db)

@router.put("/parking-spaces/{space_id}", response_model=GenericResponse)
def update_parking_space(space_id: str, space_update: ParkingSpaceUpdate, db: Session = Depends(get_db)):
    return ParkingSpaceController.update_parking_space(space_id, space_update, db)

@router.get("/parking-spaces/{space_id}/reviews", response_model=List[ReviewResponse])
def read_reviews(space_id: str, db: Session = Depends(get_db)):
    return ReviewController.read_reviews(space_id, db)


# PARKING SESSIONS

@router.post("/sessions/check-in", response_model=CheckInResponse)
def check_in(check_in_request: CheckInRequest, db: Session = Depends(get_db)):
    return SessionController.check_in(check_in_request, db)

@router.post("/sessions/check-out", response_model=CheckOutResponse)
def check_out(request: CheckOutRequest, db: Session = Depends(get_db)):
    return SessionController.check_out(request.session_id, db)

@router.get("/sessions/{session_id}", response_model=SessionResponse)
def read_session(session_id: str, db: Session = Depends(get_db)):
    return SessionController.read_session(session_id, db)


# PAYMENTS AND REVIEWS

@router.post("/payments", response_model=PaymentRecordedResponse)
def record_payment(payment_request: PaymentRequest, db: Session = Depends(get_db)):
    return PaymentController.record_payment(payment_request, db)

@router.get("/payments/{payment_id}", response_model=PaymentResponse)
def read_payment(payment_id: str, db: Session = Depends(get_db)):
    return PaymentController.read_payment(payment_id, db)

@router.post("/reviews", response_model=ReviewCreatedResponse)
def create_review(review_request: ReviewRequest, db: Session = Depends(get_db)):
    return ReviewController.create_review(review_request, db)


# ANALYTICS

@router.get("/analytics/owner/{owner_email}", response_model=List[OwnerSpaceSummary])
def owner_analytics(owner_email: str, db: Session = Depends(get_db)):
    return AnalyticsController.summarize_owner(owner_email, db)
