from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class CancelOrderRequest(BaseModel):
    bookingId: str | None = None


class CancelOrderResponse(BaseModel):
    success: bool
    message: str | None = None
    error: str | None = None


# orderIds is checked in the route; anything but a non-empty list is a 400.
class OrderIdsRequest(BaseModel):
    orderIds: Any = None


class ZoneResponse(BaseModel):
    name: str


class RowResponse(BaseModel):
    row_number: str
    zones: ZoneResponse | None = None


class BookingSeatResponse(BaseModel):
    id: str
    seat_number: str
    category: str | None = None
    status: str
    name_on_ticket: str | None = None
    rows: RowResponse | None = None


class BookingRecordResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    amount: float
    image: str | None = None
    status: str
    created_at: datetime | None = None
    seats: list[BookingSeatResponse] = Field(default_factory=list)


class BookingDetailsResponse(BookingRecordResponse):
    categories: list[dict] = Field(default_factory=list)


class BookingsByIdsResponse(BaseModel):
    success: bool
    bookings: list[BookingRecordResponse] | None = None
    error: str | None = None


class ValidateOrderIdsResponse(BaseModel):
    validIds: list[str]
    invalidIds: list[Any]
    allBookings: list[BookingRecordResponse]


class PaymentProofRequest(BaseModel):
    image: str = Field(min_length=1)


class BookingResponse(BaseModel):
    booking_id: str
    status: str


class KashierWebhookRequest(BaseModel):
    data: dict[str, Any] = Field(default_factory=dict)
    event: str | None = None


class PaymentModeResponse(BaseModel):
    mode: str


class CategoryVisibilityRequest(BaseModel):
    isVisible: bool


class CategorySettingsRequest(BaseModel):
    settings: dict[str, bool]


class SuccessResponse(BaseModel):
    success: bool


class SeatMapEntryResponse(BaseModel):
    id: str
    seat_number: str
    category: str | None = None
    status: str
    rows: RowResponse | None = None


class RecentBookingResponse(BaseModel):
    id: str
    name: str
    email: str
    amount: float
    status: str
    created_at: datetime | None = None


class SeatStatsResponse(BaseModel):
    total: int
    available: int
    booked: int
    reserved: int
    available_percent: int
    booked_percent: int
    reserved_percent: int


class MonthlyRevenueResponse(BaseModel):
    month: str
    revenue: float


class CategoryCountResponse(BaseModel):
    name: str
    value: int


class DashboardResponse(BaseModel):
    pending_count: int
    approved_count: int
    rejected_count: int
    cancelled_count: int
    total_bookings: int
    total_revenue: float
    average_revenue: float
    approval_rate: int
    seats: SeatStatsResponse
    recent_bookings: list[RecentBookingResponse]
    revenue_by_month: list[MonthlyRevenueResponse]
    category_distribution: list[CategoryCountResponse]


class ScanRequest(BaseModel):
    qrCode: str = Field(min_length=1)


class TicketHolderResponse(BaseModel):
    name: str
    email: str
    phone: str


class ScannedSeatResponse(BaseModel):
    id: str
    seat_number: str
    name_on_ticket: str | None = None
    check_in: bool | None = None
    last_check_in: datetime | None = None
    booking_id: str | None = None
    row_id: str
    rows: RowResponse | None = None
    bookings: TicketHolderResponse | None = None


class ScanResponse(BaseModel):
    success: bool
    message: str
    seat: ScannedSeatResponse
