"""Stay request, discount policy and quote models."""

from datetime import date
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.utils import form_int, form_text

MAX_ADULTS = 8
MAX_CHILDREN = 8


class RoomType(str, Enum):
    STANDARD = "standard"
    COMFORT = "comfort"
    LUX = "lux"


class StayRequest(BaseModel):
    """Stay parameters; every field is clamped to its valid range on input."""

    model_config = ConfigDict(frozen=True)

    room_type: RoomType = RoomType.STANDARD
    nights: int = 1
    adults: int = 1
    children: int = 0
    checkin: Optional[date] = None

    @field_validator("room_type", mode="before")
    @classmethod
    def _fallback_room_type(cls, value: Any) -> RoomType:
        if isinstance(value, RoomType):
            return value
        try:
            return RoomType(form_text(value).lower())
        except ValueError:
            return RoomType.STANDARD

    @field_validator("nights", mode="before")
    @classmethod
    def _clamp_nights(cls, value: Any) -> int:
        return max(1, form_int(value, 1))

    @field_validator("adults", mode="before")
    @classmethod
    def _clamp_adults(cls, value: Any) -> int:
        return min(MAX_ADULTS, max(1, form_int(value, 1)))

    @field_validator("children", mode="before")
    @classmethod
    def _clamp_children(cls, value: Any) -> int:
        return min(MAX_CHILDREN, max(0, form_int(value, 0)))

    @field_validator("checkin", mode="before")
    @classmethod
    def _blank_checkin(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class DiscountPolicy(BaseModel):
    """Percentage discount for check-ins on or before ``valid_until``."""

    model_config = ConfigDict(frozen=True)

    percent: int = Field(ge=0, le=100)
    valid_until: date


class Quote(BaseModel):
    """Fully computed price breakdown for one stay request."""

    model_config = ConfigDict(frozen=True)

    guests: int
    nights: int
    per_night_rate: int
    base_amount: int
    discount_applied: bool
    discount_percent: int
    discount_amount: int
    total_amount: int
    prepay_percent: int
    prepay_amount: int
    remainder_amount: int
