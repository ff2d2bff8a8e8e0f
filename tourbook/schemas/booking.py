from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

BookingStatus = Literal["REQUESTED", "CONFIRMED", "CANCELLED", "COMPLETED"]


class CreateBookingPayload(BaseModel):
    """
    고객 예약 요청.

    status 등 알 수 없는 필드는 무시합니다 (초기 상태는 서버가 결정).
    """
    product_id: str
    travel_date: Optional[date] = None
    people_count: int = Field(default=1, ge=1)
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    memo_user: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class BookingCreated(BaseModel):
    id: str


class BookingProduct(BaseModel):
    id: str
    title: str = ""
    region: Optional[str] = None
    thumbnail_path: Optional[str] = None
    thumbnail_url: Optional[str] = None
    display_thumbnail_url: str = ""


class BookingProfile(BaseModel):
    user_id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


class MyBookingRow(BaseModel):
    id: str
    status: BookingStatus
    travel_date: Optional[date] = None
    people_count: int = 1
    created_at: Optional[datetime] = None
    product: Optional[BookingProduct] = None


class AdminBookingRow(BaseModel):
    id: str
    status: BookingStatus
    travel_date: Optional[date] = None
    people_count: int = 1
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    memo_user: Optional[str] = None
    memo_admin: Optional[str] = None
    created_at: Optional[datetime] = None
    product: Optional[BookingProduct] = None
    profile: Optional[BookingProfile] = None


class BookingPage(BaseModel):
    rows: List[AdminBookingRow]
    count: int


class BookingAdminPatch(BaseModel):
    status: Optional[BookingStatus] = None
    memo_admin: Optional[str] = None

    @field_validator("status")
    @classmethod
    def reject_null_status(cls, v):
        if v is None:
            raise ValueError("status 는 null 로 변경할 수 없습니다")
        return v
