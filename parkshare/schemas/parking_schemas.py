from datetime import datetime
from sqlmodel import SQLModel, Field
from typing import Optional, Any, List
from parkshare.models.parking_models import VehicleType, SessionStatus, PaymentStatus

# REQUESTS

class UserRegisterRequest(SQLModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)
    vehicle_type: VehicleType
    vehicle_number: str = Field(min_length=1)

class ParkingSpaceCreate(SQLModel):
    owner_name: str = Field(min_length=1)
    owner_email: str = Field(min_length=3)
    owner_phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    space_type: str = Field(min_length=1)
    car_spots: int = Field(default=0, ge=0)
    bike_spots: int = Field(default=0, ge=0)
    ev_spots: int = Field(default=0, ge=0)
    car_price_per_hour: Optional[float] = Field(default=None, gt=0)
    bike_price_per_hour: Optional[float] = Field(default=None, gt=0)
    ev_price_per_hour: Optional[float] = Field(default=None, gt=0)
    images: Optional[str] = None
    description: Optional[str] = None

class ParkingSpaceUpdate(SQLModel):
    address: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    car_spots: Optional[int] = Field(default=None, ge=0)
    bike_spots: Optional[int] = Field(default=None, ge=0)
    ev_spots: Optional[int] = Field(default=None, ge=0)
    car_price_per_hour: Optional[float] = Field(default=None, gt=0)
    bike_price_per_hour: Optional[float] = Field(default=None, gt=0)
    ev_price_per_hour: Optional[float] = Field(default=None, gt=0)
    is_active: Optional[bool] = None

class CheckInRequest(SQLModel):
    parking_space_id: str
    user_id: str
    vehicle_type: VehicleType
    vehicle_number: Optional[str] = None

class CheckOutRequest(SQLModel):
    session_id: str

class PaymentRequest(SQLModel):
    session_id: str
    user_id: str
    # OPTIONAL, THE CHARGE IS ALWAYS TAKEN FROM THE SESSION
    amount: Optional[float] = None
    payment_method: Optional[str] = None

class ReviewRequest(SQLModel):
    parking_space_id: str
    user_id: str
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = None

# RESPONSES

class UserResponse(SQLModel):
    id: str
    name: str
    email: str
    phone: str
    vehicle_type: VehicleType
    vehicle_number: str
    created_at: Optional[datetime]

class UserRegisteredResponse(SQLModel):
    success: bool = True
    userId: str
    message: str = "User registered successfully"

class ReviewResponse(SQLModel):
    id: str
    parking_space_id: str
    user_id: str
    rating: int
    comment: Optional[str]
    created_at: Optional[datetime]
    name: Optional[str] = None

class ReviewCreatedResponse(SQLModel):
    success: bool = True
    reviewId: str
    message: str = "Review added successfully"

class ParkingSpaceResponse(SQLModel):
    id: str
    owner_name: str
    owner_email: str
    owner_phone: str
    address: str
    city: str
    space_type: str
    total_spots: int
    available_spots: int
    car_spots: int
    bike_spots: int
    ev_spots: int
    car_price_per_hour: float
    bike_price_per_hour: float
    ev_price_per_hour: float
    images: Optional[str]
    description: Optional[str]
    is_active: bool
    created_at: Optional[datetime]

class ParkingSpaceDetailResponse(ParkingSpaceResponse):
    reviews: List[ReviewResponse] = []

class SpaceCreatedResponse(SQLModel):
    success: bool = True
    spaceId: str
    message: str = "Parking space created successfully"

class SessionResponse(SQLModel):
    id: str
    parking_space_id: str
    user_id: str
    vehicle_type: VehicleType
    vehicle_number: str
    check_in_time: datetime
    check_out_time: Optional[datetime]
    duration_minutes: Optional[int]
    amount_charged: Optional[float]
    payment_status: PaymentStatus
    qr_code: str
    status: SessionStatus

class SessionHistoryResponse(SessionResponse):
    address: str
    city: str

class CheckInResponse(SQLModel):
    success: bool = True
    sessionId: str
    qrCode: str
    message: str = "Check-in successful"

class CheckOutResponse(SQLModel):
    success: bool = True
    duration: int
    amount: float
    pricePerHour: float
    message: str

class PaymentResponse(SQLModel):
    id: str
    session_id: str
    user_id: str
    amount: float
    payment_method: Optional[str]
    status: PaymentStatus
    created_at: Optional[datetime]

class PaymentRecordedResponse(SQLModel):
    success: bool = True
    paymentId: str
    amount: float
    message: str = "Payment processed successfully"

class OwnerSpaceSummary(SQLModel):
    spaceId: str
    address: str
    totalSessions: int
    completedSessions: int
    totalRevenue: float
    averageSessionPrice: float

class GenericResponse(SQLModel):
    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None
