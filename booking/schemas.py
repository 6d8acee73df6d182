from datetime import datetime
from typing import Any

from pydantic import BaseModel, field_validator

from booking.core.dates import to_local_naive


class CreateAppointmentRequest(BaseModel):
    date: datetime
    provider_id: int

    @field_validator('date')
    @classmethod
    def normalize_date(cls, value: datetime) -> datetime:
        try:
            return to_local_naive(value)
        except OverflowError as exc:
            raise ValueError('date is out of range') from exc

    @field_validator('provider_id', mode='before')
    @classmethod
    def reject_boolean_provider_id(cls, value: Any) -> Any:
        # bool is an int subclass and would otherwise coerce to 0 or 1.
        if isinstance(value, bool):
            raise ValueError('provider_id must be a number')
        return value


class AvatarResponse(BaseModel):
    path: str
    url: str

    class Config:
        from_attributes = True


class ProviderSummaryResponse(BaseModel):
    id: int
    name: str
    avatar: AvatarResponse | None = None

    class Config:
        from_attributes = True


class AppointmentSummaryResponse(BaseModel):
    id: int
    date: datetime
    past: bool
    cancelable: bool
    provider: ProviderSummaryResponse

    class Config:
        from_attributes = True


class AppointmentResponse(BaseModel):
    id: int
    date: datetime
    user_id: int
    provider_id: int
    canceled_at: datetime | None = None
    past: bool
    cancelable: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class ProviderContactResponse(BaseModel):
    name: str
    email: str

    class Config:
        from_attributes = True


class RequesterResponse(BaseModel):
    name: str

    class Config:
        from_attributes = True


class CanceledAppointmentResponse(AppointmentResponse):
    provider: ProviderContactResponse
    user: RequesterResponse
