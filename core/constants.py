# core/constants.py

from typing import Optional

# Newest-first history is trimmed from the tail beyond this many events.
MAX_HISTORY_EVENTS = 50

LANGUAGE_NAMES = {
    "en": "English",
    "hi": "Hindi",
    "te": "Telugu",
}

# Suggested onboarding values. Profiles accept anything outside these lists.
SOIL_TYPES = ["Alluvial", "Black", "Red", "Laterite", "Sandy", "Clay"]
WATER_SOURCES = ["Well", "Borewell", "Canal", "Rain-fed", "River"]
CROP_TYPES = ["Rice", "Wheat", "Cotton", "Maize", "Sugarcane", "Tomato", "Chilli", "Groundnut"]

SEASONS = ["Kharif", "Rabi", "Zaid"]


def language_name(code: Optional[str]) -> str:
    """Human-readable name used inside prompts. Unknown codes fall back to English."""
    return LANGUAGE_NAMES.get(code or "en", "English")


def season_for_month(month: int) -> str:
    """Indian cropping season for a calendar month (1-12)."""
    if 6 <= month <= 10:
        return "Kharif"
    if month in (4, 5):
        return "Zaid"
    return "Rabi"
