import pytest
from pydantic import ValidationError

from core.models import HistoryEventType, Language, Location
from core.onboarding import OnboardingForm, change_crop, change_language, complete_onboarding, is_onboarded


def test_complete_onboarding_creates_profile_with_initial_event(profile_manager):
    form = OnboardingForm(
        language="te",
        field_size=3.5,
        soil_type="Black",
        water_source="Borewell",
        current_crop="Cotton",
        location=Location(lat=17.39, lng=78.32),
    )

    profile = complete_onboarding(profile_manager, "u1", form)

    assert profile.onboarded
    assert profile.language == Language.TE
    assert profile.field_size == 3.5
    assert profile.location.lat == 17.39
    assert [e.type for e in profile.history] == [HistoryEventType.ONBOARDING]
    assert profile.history[0].title == "System Initialized"
    assert profile_manager.get_profile("u1") == profile


def test_onboarding_defaults_use_first_suggestions(profile_manager):
    profile = complete_onboarding(profile_manager, "u1", OnboardingForm())
    assert profile.field_size == 1
    assert profile.soil_type == "Alluvial"
    assert profile.water_source == "Well"
    assert profile.current_crop == "Rice"
    assert profile.location is None


def test_onboarding_form_rejects_non_positive_field_size():
    with pytest.raises(ValidationError):
        OnboardingForm(field_size=-1)


def test_is_onboarded(profile_manager, storage, make_profile):
    assert not is_onboarded(profile_manager, "u1")

    profile_manager.save_profile(make_profile("u1", onboarded=False))
    assert not is_onboarded(profile_manager, "u1")

    complete_onboarding(profile_manager, "u1", OnboardingForm())
    assert is_onboarded(profile_manager, "u1")

    storage.set_item("sk_user_u1", "{broken")
    assert not is_onboarded(profile_manager, "u1")


def test_change_language(profile_manager, saved_profile):
    updated = change_language(profile_manager, "u1", "hi")
    assert updated.language == Language.HI
    assert profile_manager.get_profile("u1").language == Language.HI


def test_change_language_without_profile(profile_manager):
    assert change_language(profile_manager, "ghost", "hi") is None
    assert not profile_manager.profile_exists("ghost")


def test_change_crop_records_event(profile_manager, saved_profile):
    updated = change_crop(profile_manager, "u1", "Maize")

    assert updated.current_crop == "Maize"
    event = updated.history[0]
    assert event.type == HistoryEventType.CROP_CHANGE
    assert event.title == "Crop changed to Maize"
    assert event.details == "Switched from Rice to Maize."
    assert event.metadata == {"previous": "Rice", "current": "Maize"}


def test_change_crop_without_profile(profile_manager):
    assert change_crop(profile_manager, "ghost", "Maize") is None


def test_change_crop_is_a_single_write(profile_manager, notifier, saved_profile):
    received = []
    notifier.subscribe(received.append)

    change_crop(profile_manager, "u1", "Maize")

    assert received == ["u1"]
