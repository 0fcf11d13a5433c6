# core/memory_service.py

from datetime import datetime
from typing import Optional

from core.constants import language_name, season_for_month
from core.profile_manager import ProfileManager

class MemoryService:
    """
    A centralized service for providing farm context to all advisory agents.
    This is the single source of truth for what the AI knows about the farmer.
    """
    def __init__(self, profile_manager: ProfileManager, history_limit: int = 10):
        self.profile_manager = profile_manager
        self.history_limit = history_limit
        self._cache = {}
        # Drop cached context whenever the stored profile changes.
        profile_manager.notifier.subscribe(self.invalidate)

    def invalidate(self, user_id: str):
        self._cache.pop(user_id, None)

    def get_context(self, user_id: str) -> Optional[dict]:
        """
        Returns a dictionary containing all relevant context for a user,
        or None if the user has no profile (or it was deleted).
        This can be passed directly to agent prompts.
        """
        # Deletion does not publish a change, so every lookup re-checks the store.
        if not self.profile_manager.profile_exists(user_id):
            self.invalidate(user_id)
            return None

        farm_context = self._cache.get(user_id)
        if farm_context is None:
            farm_context = self._build_farm_context(user_id)
            if farm_context is None:
                return None
            self._cache[user_id] = farm_context

        now = datetime.now()
        return {
            **farm_context,
            "current_date": now.strftime("%Y-%m-%d"),
            "current_month": now.strftime("%B"),
            "current_season": season_for_month(now.month),
        }

    def _build_farm_context(self, user_id: str) -> Optional[dict]:
        profile = self.profile_manager.get_profile(user_id)
        if profile is None:
            return None

        location = profile.location
        if location and location.address:
            location_str = location.address
        elif location and location.lat is not None and location.lng is not None:
            location_str = f"Lat {location.lat:.4f}, Lng {location.lng:.4f}"
        else:
            location_str = "India"

        # Format history narrative, newest first
        if profile.history:
            history_list = []
            for event in profile.history[:self.history_limit]:
                date_str = event.timestamp.strftime("%Y-%m-%d")
                history_list.append(f"- [{date_str}] {event.type.value}: {event.title} ({event.details})")
            history_str = "\n".join(history_list)
        else:
            history_str = "No recorded activity yet."

        return {
            "user_id": profile.identifier,
            "language": profile.language.value,
            "language_name": language_name(profile.language.value),
            "field_size": profile.field_size,
            "soil_type": profile.soil_type,
            "water_source": profile.water_source,
            "current_crop": profile.current_crop or "Not decided",
            "location": location_str,
            "latitude": location.lat if location else None,
            "longitude": location.lng if location else None,
            "history_narrative": history_str,
        }

    def clear_cache(self):
        """Clear the cache after a request cycle."""
        self._cache = {}
