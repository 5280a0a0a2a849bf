"""Unit tests for display formatting."""

import pytest

from core.config import Settings
from domain.entities.profile import Image, OverridableField, Profile
from domain.entities.rms import RMSPerson
from domain.services import presentation
from domain.services.attribute_resolver import AttributeResolver
from domain.services.derived_cache import DerivedValueCache


def resolver_for(**overrides: object) -> AttributeResolver:
    return AttributeResolver(Profile(overrides=dict(overrides)))


class TestNames:
    def test_display_name_without_middle_initial(self) -> None:
        attributes = resolver_for(first_name="Jane", last_name="Doe")

        assert presentation.display_name(attributes) == "Doe, Jane"

    def test_display_name_with_middle_initial(self) -> None:
        attributes = resolver_for(first_name="Jane", last_name="Doe", middle_initial="A")

        assert presentation.display_name(attributes) == "Doe, Jane A"

    def test_blank_middle_initial_is_ignored(self) -> None:
        attributes = resolver_for(first_name="Jane", last_name="Doe", middle_initial=" ")

        assert presentation.display_name(attributes) == "Doe, Jane"

    def test_full_name(self) -> None:
        attributes = resolver_for(first_name="Jane", last_name="Doe", middle_initial="A")

        assert presentation.full_name(attributes) == "Jane Doe"

    def test_missing_first_name_renders_empty(self) -> None:
        attributes = resolver_for(last_name="Doe")

        assert presentation.display_name(attributes) == "Doe, "
        assert presentation.full_name(attributes) == " Doe"

    def test_missing_last_name_renders_empty(self) -> None:
        attributes = resolver_for(first_name="Jane", middle_initial="A")

        assert presentation.display_name(attributes) == ", Jane A"
        assert presentation.full_name(attributes) == "Jane "

    def test_assign_two_part_name(self) -> None:
        attributes = resolver_for()

        presentation.assign_full_name(attributes, "Jane Doe")

        assert attributes.get(OverridableField.FIRST_NAME) == "Jane"
        assert attributes.get(OverridableField.LAST_NAME) == "Doe"
        assert attributes.get(OverridableField.MIDDLE_INITIAL) is None

    def test_assign_three_part_name_sets_middle_initial(self) -> None:
        attributes = resolver_for()

        presentation.assign_full_name(attributes, "Jane Ann Doe")

        assert attributes.get(OverridableField.MIDDLE_INITIAL) == "Ann"

    def test_assign_drops_extra_middle_names(self) -> None:
        # Known lossy behaviour: only the second token is kept.
        attributes = resolver_for()

        presentation.assign_full_name(attributes, "Jane Ann Marie Doe")

        assert presentation.display_name(attributes) == "Doe, Jane Ann"

    def test_assign_name_matching_rms_clears_overrides(self) -> None:
        profile = Profile(
            overrides={"first_name": "J", "last_name": "D"},
            rms_person=RMSPerson(first_name="Jane", last_name="Doe"),
        )

        presentation.assign_full_name(AttributeResolver(profile), "Jane Doe")

        assert profile.overrides == {}


class TestAddress:
    def test_splits_on_first_comma(self) -> None:
        attributes = resolver_for(location_address="123 Main St, Springfield, IL")

        assert presentation.address_line_one(attributes) == "123 Main St"
        assert presentation.address_line_two(attributes) == " Springfield, IL"

    def test_two_part_address(self) -> None:
        attributes = resolver_for(location_address="123 Main St,Springfield IL")

        assert presentation.address_line_one(attributes) == "123 Main St"
        assert presentation.address_line_two(attributes) == "Springfield IL"

    def test_single_part_address(self) -> None:
        attributes = resolver_for(location_address="Under the bridge")

        assert presentation.address_line_one(attributes) == "Under the bridge"
        assert presentation.address_line_two(attributes) == ""

    def test_trailing_empty_parts_are_dropped(self) -> None:
        attributes = resolver_for(location_address="123 Main St, Springfield,,")

        assert presentation.address_line_two(attributes) == " Springfield"

    def test_missing_address(self) -> None:
        attributes = resolver_for()

        assert presentation.address_line_one(attributes) is None
        assert presentation.address_line_two(attributes) == ""

    def test_falls_back_to_rms_address(self, saved_profile: Profile) -> None:
        attributes = AttributeResolver(saved_profile)

        assert presentation.address_line_one(attributes) == "123 Main St"


class TestShorthandDescription:
    def test_full_description(self) -> None:
        attributes = resolver_for(race="WHITE", sex="Male", height_in_inches=70, weight_in_pounds=180)

        assert presentation.shorthand_description(attributes) == "WM – 5'10\" – 180 lb"

    def test_omits_unknown_height(self) -> None:
        attributes = resolver_for(race="ASIAN", sex="Female", weight_in_pounds=120)

        assert presentation.shorthand_description(attributes) == "AF – 120 lb"

    def test_omits_missing_weight(self) -> None:
        attributes = resolver_for(race="BLACK_OR_AFRICAN_AMERICAN", sex="Male", height_in_inches=72)

        assert presentation.shorthand_description(attributes) == "BM – 6'0\""

    def test_unmapped_codes_fall_back_to_unknown(self) -> None:
        attributes = resolver_for(race="MARTIAN", sex=None)

        assert presentation.shorthand_description(attributes) == "UU"

    def test_zero_weight_is_still_shown(self) -> None:
        attributes = resolver_for(race="WHITE", sex="Female", weight_in_pounds=0)

        assert presentation.shorthand_description(attributes) == "WF – 0 lb"

    def test_uses_rms_values(self, saved_profile: Profile) -> None:
        attributes = AttributeResolver(saved_profile)

        assert presentation.shorthand_description(attributes) == "WF – 5'5\" – 140 lb"


class TestProfileImageUrl:
    def test_default_without_images(self, test_settings: Settings) -> None:
        attributes = resolver_for()

        assert presentation.profile_image_url(attributes, test_settings) == "/default_profile.png"

    def test_first_image_by_position(self, test_settings: Settings) -> None:
        profile = Profile(
            images=[
                Image(source_url="https://img.example/second.png", position=1),
                Image(source_url="https://img.example/first.png", position=0),
            ]
        )

        url = presentation.profile_image_url(AttributeResolver(profile), test_settings)

        assert url == "https://img.example/first.png"

    def test_cached_for_saved_profiles(
        self, test_settings: Settings, cache: DerivedValueCache, saved_profile: Profile
    ) -> None:
        attributes = AttributeResolver(saved_profile, cache)
        assert presentation.profile_image_url(attributes, test_settings, cache) == "/default_profile.png"

        saved_profile.images.append(Image(source_url="https://img.example/new.png"))

        assert presentation.profile_image_url(attributes, test_settings, cache) == "/default_profile.png"
        cache.invalidate(saved_profile.id)
        assert (
            presentation.profile_image_url(attributes, test_settings, cache)
            == "https://img.example/new.png"
        )


@pytest.mark.parametrize(
    ("inches", "expected"),
    [(None, None), (0, None), (11, "0'11\""), (12, "1'0\""), (70, "5'10\"")],
)
def test_height_in_feet_and_inches(inches: int | None, expected: str | None) -> None:
    attributes = resolver_for(height_in_inches=inches)

    assert presentation.height_in_feet_and_inches(attributes) == expected
