"""Service, calendar booking, booking request and availability schemas."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from trainer_aide.core.constants import GROUP_MAX_CAPACITY, SERVICE_DURATIONS
from trainer_aide.core.enums import (
    AvailabilityBlockType,
    BookingRequestStatus,
    BookingStatus,
    Recurrence,
    ServiceType,
)


def _check_duration(value: int | None) -> int | None:
    if value is not None and value not in SERVICE_DURATIONS:
        raise ValueError(f"duration must be one of {', '.join(str(d) for d in SERVICE_DURATIONS)}")
    return value


def check_service_capacity(service_type: ServiceType | None, capacity: int | None) -> None:
    if service_type is None or capacity is None:
        return
    if service_type == ServiceType.ONE_TO_ONE and capacity != 1:
        raise ValueError("1-2-1 services have a capacity of 1")
    if service_type == ServiceType.DUET and capacity != 2:
        raise ValueError("Duet services have a capacity of 2")
    if service_type == ServiceType.GROUP and not 1 <= capacity <= GROUP_MAX_CAPACITY:
        raise ValueError(f"Group services hold between 1 and {GROUP_MAX_CAPACITY} clients")


class ServiceBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    duration: int
    type: ServiceType = ServiceType.ONE_TO_ONE
    max_capacity: int = Field(default=1, ge=1)
    credits_required: float = Field(default=1, ge=0)
    color: str = Field(default="#12229D", pattern=r"^#[0-9A-Fa-f]{6}$")
    is_active: bool = True
    created_by: UUID | None = None
    assigned_studios: list[str] = []

    @field_validator("duration")
    @classmethod
    def check_duration(cls, value):
        return _check_duration(value)

    @model_validator(mode="after")
    def check_capacity(self):
        check_service_capacity(self.type, self.max_capacity)
        return self


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = None
    duration: int | None = None
    type: ServiceType | None = None
    max_capacity: int | None = Field(None, ge=1)
    credits_required: float | None = Field(None, ge=0)
    color: str | None = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    is_active: bool | None = None
    assigned_studios: list[str] | None = None

    @field_validator("duration")
    @classmethod
    def check_duration(cls, value):
        return _check_duration(value)


class ServiceRead(ServiceBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime
    updated_at: datetime


class BookingBase(BaseModel):
    scheduled_at: datetime
    trainer_id: UUID
    client_profile_id: UUID | None = None
    client_name: str = ""
    service_id: UUID | None = None
    status: BookingStatus = BookingStatus.CONFIRMED
    workout_id: str | None = None
    notes: str | None = None
    hold_expiry: datetime | None = None


class BookingCreate(BookingBase):
    pass


class BookingUpdate(BaseModel):
    scheduled_at: datetime | None = None
    client_profile_id: UUID | None = None
    client_name: str | None = None
    service_id: UUID | None = None
    status: BookingStatus | None = None
    workout_id: str | None = None
    notes: str | None = None
    hold_expiry: datetime | None = None


class BookingRead(BookingBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    created_at: datetime


class BookingRequestCreate(BaseModel):
    trainer_id: UUID
    client_profile_id: UUID
    service_id: UUID | None = None
    preferred_times: list[datetime] = Field(..., min_length=1)
    notes: str | None = None


class BookingRequestAccept(BaseModel):
    """Accept one of the proposed times (defaults to the first)."""

    scheduled_at: datetime | None = None


class BookingRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    trainer_id: UUID
    client_profile_id: UUID
    service_id: UUID | None = None
    preferred_times: list[datetime] = []
    notes: str | None = None
    status: BookingRequestStatus
    created_at: datetime
    expires_at: datetime


class AvailabilityBlockBase(BaseModel):
    block_type: AvailabilityBlockType = AvailabilityBlockType.AVAILABLE
    recurrence: Recurrence = Recurrence.WEEKLY
    day_of_week: int | None = Field(None, ge=0, le=6)
    specific_date: date | None = None
    end_date: date | None = None
    start_hour: int = Field(default=9, ge=0, le=23)
    start_minute: int = Field(default=0, ge=0, le=59)
    end_hour: int = Field(default=17, ge=0, le=24)
    end_minute: int = Field(default=0, ge=0, le=59)
    reason: str | None = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_window(self):
        if self.recurrence == Recurrence.WEEKLY and self.day_of_week is None:
            raise ValueError("Weekly blocks need day_of_week (0 = Sunday)")
        if self.recurrence == Recurrence.ONCE and self.specific_date is None:
            raise ValueError("One-time blocks need specific_date")
        if self.end_date and self.specific_date and self.end_date < self.specific_date:
            raise ValueError("end_date must not be before specific_date")
        if (self.end_hour, self.end_minute) <= (self.start_hour, self.start_minute):
            raise ValueError("Block must end after it starts")
        return self


class AvailabilityBlockCreate(AvailabilityBlockBase):
    pass


class AvailabilityBlockUpdate(BaseModel):
    block_type: AvailabilityBlockType | None = None
    day_of_week: int | None = Field(None, ge=0, le=6)
    specific_date: date | None = None
    end_date: date | None = None
    start_hour: int | None = Field(None, ge=0, le=23)
    start_minute: int | None = Field(None, ge=0, le=59)
    end_hour: int | None = Field(None, ge=0, le=24)
    end_minute: int | None = Field(None, ge=0, le=59)
    reason: str | None = None


class AvailabilityBlockRead(AvailabilityBlockBase):
    model_config = ConfigDict(from_attributes=True)
    id: UUID
    trainer_id: UUID
