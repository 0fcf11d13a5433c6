# core/models.py

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, JsonValue

from .constants import MAX_HISTORY_EVENTS


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def new_event_id() -> str:
    return uuid.uuid4().hex


class Language(str, Enum):
    EN = "en"
    HI = "hi"
    TE = "te"


class HistoryEventType(str, Enum):
    DIAGNOSIS = "DIAGNOSIS"
    NPK_UPDATE = "NPK_UPDATE"
    CROP_CHANGE = "CROP_CHANGE"
    ONBOARDING = "ONBOARDING"
    AI_CONSULT = "AI_CONSULT"


class Location(BaseModel):
    """Farm coordinates and an optional readable address."""
    lat: Optional[float] = None
    lng: Optional[float] = None
    address: Optional[str] = None


class HistoryEvent(BaseModel):
    """A single entry in a farmer's activity timeline."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_event_id)
    timestamp: datetime = Field(default_factory=utc_now)
    type: HistoryEventType
    title: str
    details: str
    # Full AI result that produced the event, kept as plain JSON data.
    metadata: Optional[JsonValue] = None


class FarmerProfile(BaseModel):
    """Defines the structure for a farmer's profile and activity history."""
    identifier: str = Field(min_length=1)
    language: Language = Language.EN
    location: Optional[Location] = None
    field_size: float = Field(gt=0, description="Field size in acres.")
    soil_type: str
    water_source: str
    current_crop: Optional[str] = None
    onboarded: bool = False
    last_sync: datetime = Field(default_factory=utc_now)
    history: List[HistoryEvent] = Field(default_factory=list, max_length=MAX_HISTORY_EVENTS)
