from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from uuid import uuid4
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from parkshare.config import Config
from parkshare.exceptions import InvalidStateError


def generate_id() -> str:
    return str(uuid4())

def utcnow() -> datetime:
    return datetime.now(timezone.utc)

def qr_code_for(session_id: str) -> str:
    return f"{Config.QR_CODE_PREFIX}{session_id[:Config.QR_CODE_LENGTH]}"


class VehicleType(str, Enum):
    car = "car"
    bike = "bike"
    ev = "ev"


class SessionStatus(str, Enum):
    active = "active"
    completed = "completed"

    def transition_to(self, target: "SessionStatus") -> "SessionStatus":
        if (self, target) not in _SESSION_TRANSITIONS:
            raise InvalidStateError(detail=f"Session already {self.value}")
        return target


# ACTIVE -> COMPLETED IS THE ONLY LEGAL MOVE
_SESSION_TRANSITIONS = {(SessionStatus.active, SessionStatus.completed)}


class PaymentStatus(str, Enum):
    pending = "pending"
    completed = "completed"


class User(SQLModel, table=True):
    __tablename__ = "users"

    id: str = Field(default_factory=generate_id, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    phone: str
    vehicle_type: VehicleType
    vehicle_number: str = Field(unique=True)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class ParkingSpace(SQLModel, table=True):
    __tablename__ = "parking_spaces"

    id: str = Field(default_factory=generate_id, primary_key=True)
    owner_name: str
    owner_email: str = Field(index=True)
    owner_phone: str
    address: str
    city: str = Field(index=True)
    space_type: str
    total_spots: int
    available_spots: int
    # PER-CLASS COUNTERS HOLD THE SPOTS STILL AVAILABLE
    car_spots: int = 0
    bike_spots: int = 0
    ev_spots: int = 0
    car_price_per_hour: float = Config.DEFAULT_RATES["car"]
    bike_price_per_hour: float = Config.DEFAULT_RATES["bike"]
    ev_price_per_hour: float = Config.DEFAULT_RATES["ev"]
    images: Optional[str] = None
    description: Optional[str] = None
    is_active: bool = True
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))

    @classmethod
    def spots_column(cls, vehicle_type: VehicleType):
        return getattr(cls, f"{VehicleType(vehicle_type).value}_spots")

    def available_for(self, vehicle_type: VehicleType) -> int:
        return getattr(self, f"{VehicleType(vehicle_type).value}_spots")

    def rate_for(self, vehicle_type: VehicleType) -> float:
        vehicle_type = VehicleType(vehicle_type)
        return getattr(self, f"{vehicle_type.value}_price_per_hour") or Config.DEFAULT_RATES[vehicle_type.value]


class ParkingSession(SQLModel, table=True):
    __tablename__ = "parking_sessions"

    id: str = Field(default_factory=generate_id, primary_key=True)
    parking_space_id: str = Field(foreign_key="parking_spaces.id", index=True)
    user_id: str = Field(foreign_key="users.id", index=True)
    vehicle_type: VehicleType
    vehicle_number: str
    check_in_time: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
    check_out_time: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    duration_minutes: Optional[int] = None
    amount_charged: Optional[float] = None
    payment_status: PaymentStatus = PaymentStatus.pending
    qr_code: str = Field(unique=True)
    status: SessionStatus = SessionStatus.active


class Payment(SQLModel, table=True):
    __tablename__ = "payments"

    id: str = Field(default_factory=generate_id, primary_key=True)
    session_id: str = Field(foreign_key="parking_sessions.id", index=True)
    user_id: str = Field(foreign_key="users.id")
    amount: float
    payment_method: Optional[str] = None
    status: PaymentStatus = PaymentStatus.completed
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))


class Review(SQLModel, table=True):
    __tablename__ = "reviews"

    id: str = Field(default_factory=generate_id, primary_key=True)
    parking_space_id: str = Field(foreign_key="parking_spaces.id", index=True)
    user_id: str = Field(foreign_key="users.id")
    rating: int
    comment: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))
