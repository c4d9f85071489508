from __future__ import annotations

from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationInfo,
    field_validator,
)


class BookingDate(BaseModel):
    """One bookable day. Both fields are opaque and passed through as-is.

    Types are strict (a quoted status is a decode error) and absent or null
    fields fall back to their zero value.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    booking_date: StrictStr = Field(default="", alias="bookingDate")
    booking_date_status: StrictInt = Field(default=0, alias="bookingDateStatus")

    @field_validator("booking_date", "booking_date_status", mode="before")
    @classmethod
    def null_is_zero_value(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class CenterResult(BaseModel):
    """Outcome of fetching one center's dates.

    A failed fetch carries ``error`` and no dates; a successful one never
    carries ``error``. Zero dates without an error is a normal answer.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    center_id: int = Field(default=0, alias="centerId")
    center_name: str = Field(alias="centerName")
    dates: list[BookingDate] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class HealthOut(BaseModel):
    status: str = "ok"
