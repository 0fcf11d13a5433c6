# core/onboarding.py

from typing import Optional
from pydantic import BaseModel, Field

from .constants import CROP_TYPES, SOIL_TYPES, WATER_SOURCES
from .models import FarmerProfile, HistoryEvent, HistoryEventType, Language, Location
from .profile_manager import ProfileManager, prepend_event

class OnboardingForm(BaseModel):
    """Farm attributes collected during onboarding."""
    language: Language = Language.EN
    location: Optional[Location] = None
    field_size: float = Field(default=1, gt=0)
    soil_type: str = SOIL_TYPES[0]
    water_source: str = WATER_SOURCES[0]
    current_crop: Optional[str] = CROP_TYPES[0]


def complete_onboarding(profile_manager: ProfileManager, identifier: str, form: OnboardingForm) -> FarmerProfile:
    """Creates the farmer's profile with its first timeline entry and stores it."""
    profile = FarmerProfile(
        identifier=identifier,
        onboarded=True,
        history=[HistoryEvent(
            type=HistoryEventType.ONBOARDING,
            title="System Initialized",
            details="Farm profile and soil parameters calibrated.",
        )],
        **form.model_dump(),
    )
    profile_manager.save_profile(profile)
    print(f"---ONBOARDING: Completed for user {identifier}---")
    return profile_manager.get_profile(identifier) or profile


def is_onboarded(profile_manager: ProfileManager, identifier: str) -> bool:
    """A missing or malformed profile sends the user back to onboarding."""
    profile = profile_manager.get_profile(identifier)
    return bool(profile and profile.onboarded)


def change_language(profile_manager: ProfileManager, identifier: str, language: str) -> Optional[FarmerProfile]:
    profile = profile_manager.get_profile(identifier)
    if profile is None:
        return None
    updated = profile.model_copy(update={"language": Language(language)})
    profile_manager.save_profile(updated)
    return updated


def change_crop(profile_manager: ProfileManager, identifier: str, crop_name: str) -> Optional[FarmerProfile]:
    """Switches the active crop and records the change on the timeline in one write."""
    profile = profile_manager.get_profile(identifier)
    if profile is None:
        return None
    previous = profile.current_crop
    event = HistoryEvent(
        type=HistoryEventType.CROP_CHANGE,
        title=f"Crop changed to {crop_name}",
        details=f"Switched from {previous or 'no crop'} to {crop_name}.",
        metadata={"previous": previous, "current": crop_name},
    )
    profile_manager.save_profile(profile.model_copy(update={
        "current_crop": crop_name,
        "history": prepend_event(profile.history, event),
    }))
    return profile_manager.get_profile(identifier)
