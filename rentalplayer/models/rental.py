"""Response bodies of the rental backend (registerRental / startRental)."""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RentalData(BaseModel):
    """Prior rental window, if the tag has one."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: Optional[float] = Field(None, alias="startTime")  # epoch ms
    duration_hours: Optional[float] = Field(None, alias="durationHours")


class RegistrationResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    data: Optional[RentalData] = None


class StartRentalResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    message: Optional[str] = None
    hours_remaining: Optional[float] = Field(None, alias="hoursRemaining")
