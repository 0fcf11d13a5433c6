import pytest

from core.change_notifier import ChangeNotifier
from core.memory_service import MemoryService
from core.models import FarmerProfile, Location
from core.profile_manager import ProfileManager
from core.storage import InMemoryStorage


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def profile_manager(storage, notifier):
    return ProfileManager(storage, notifier)


@pytest.fixture
def memory_service(profile_manager):
    return MemoryService(profile_manager)


@pytest.fixture
def make_profile():
    def _make(identifier="u1", **overrides):
        data = {
            "identifier": identifier,
            "field_size": 2,
            "soil_type": "Alluvial",
            "water_source": "Canal",
            "current_crop": "Rice",
            "onboarded": True,
            "history": [],
        }
        data.update(overrides)
        return FarmerProfile(**data)
    return _make


@pytest.fixture
def saved_profile(profile_manager, make_profile):
    profile = make_profile(location=Location(lat=17.39, lng=78.32, address="Hyderabad, Telangana"))
    profile_manager.save_profile(profile)
    return profile
