from typing import List, Optional
from pydantic import JsonValue, ValidationError

from .change_notifier import ChangeNotifier
from .config import settings
from .constants import MAX_HISTORY_EVENTS
from .models import FarmerProfile, HistoryEvent, HistoryEventType, utc_now
from .storage import KeyValueStorage, StorageError

def prepend_event(history: List[HistoryEvent], event: HistoryEvent) -> List[HistoryEvent]:
    """Newest first, keeping at most MAX_HISTORY_EVENTS entries."""
    return [event, *history][:MAX_HISTORY_EVENTS]

class ProfileManager:
    """Handles farmer profile persistence and the bounded activity history attached to each profile."""

    def __init__(self, storage: KeyValueStorage, notifier: Optional[ChangeNotifier] = None,
                 key_prefix: str = settings.storage_key_prefix):
        self.storage = storage
        self.notifier = notifier or ChangeNotifier()
        self.key_prefix = key_prefix
        print(f"---PROFILE MANAGER: Using {type(storage).__name__}---")

    def _key(self, identifier: str) -> str:
        return f"{self.key_prefix}{identifier}"

    def get_profile(self, identifier: str) -> Optional[FarmerProfile]:
        """Returns the stored profile, or None if it is missing or unreadable."""
        try:
            data = self.storage.get_item(self._key(identifier))
        except StorageError as e:
            print(f"---PROFILE MANAGER: Read failed for {identifier}: {e}---")
            return None
        if data is None:
            return None
        try:
            return FarmerProfile.model_validate_json(data)
        except ValidationError as e:
            print(f"---PROFILE MANAGER: Discarding malformed profile {identifier} ({e.error_count()} errors)---")
            return None

    def save_profile(self, profile: FarmerProfile):
        """
        Overwrites the whole record. last_sync always becomes the write time.
        Raises ValidationError, leaving the stored record untouched, when the
        profile was mutated into an invalid state.
        """
        stamped = FarmerProfile.model_validate({**profile.model_dump(), "last_sync": utc_now()})
        self.storage.set_item(self._key(profile.identifier), stamped.model_dump_json())
        print(f"---PROFILE MANAGER: Saved profile for user {profile.identifier}---")
        self.notifier.publish(profile.identifier)

    def profile_exists(self, identifier: str) -> bool:
        try:
            return self.storage.contains_item(self._key(identifier))
        except StorageError as e:
            print(f"---PROFILE MANAGER: Read failed for {identifier}: {e}---")
            return False

    def delete_profile(self, identifier: str):
        self.storage.remove_item(self._key(identifier))
        print(f"---PROFILE MANAGER: Deleted profile for user {identifier}---")

    def add_history_event(self, identifier: str, event_type: HistoryEventType, title: str,
                          details: str, metadata: JsonValue = None) -> Optional[HistoryEvent]:
        """
        Prepends a new event to the profile's history, keeping the newest
        MAX_HISTORY_EVENTS entries. Events for unknown profiles are dropped.
        """
        profile = self.get_profile(identifier)
        if profile is None:
            print(f"---PROFILE MANAGER: No profile for {identifier}, dropping {HistoryEventType(event_type).value} event---")
            return None

        event = HistoryEvent(type=event_type, title=title, details=details, metadata=metadata)
        self.save_profile(profile.model_copy(update={"history": prepend_event(profile.history, event)}))
        return event
