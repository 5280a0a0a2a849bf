"""Display formatting for resolved profile data."""

from core.config import Settings
from domain.entities.profile import OverridableField
from domain.entities.rms import RACE_CODES, SEX_CODES, UNKNOWN_CODE
from domain.services.attribute_resolver import AttributeResolver
from domain.services.derived_cache import DerivedValueCache

SEPARATOR = " – "


def _text(value: object) -> str:
    # Absent parts render as empty text
    return "" if value is None else str(value)


def display_name(attributes: AttributeResolver) -> str:
    """``"Doe, Jane A"``, or ``"Doe, Jane"`` without a middle initial."""
    first = _text(attributes.get(OverridableField.FIRST_NAME))
    last = _text(attributes.get(OverridableField.LAST_NAME))
    middle = attributes.get(OverridableField.MIDDLE_INITIAL)
    if middle is not None and str(middle).strip():
        return f"{last}, {first} {middle}"
    return f"{last}, {first}"


def full_name(attributes: AttributeResolver) -> str:
    first = _text(attributes.get(OverridableField.FIRST_NAME))
    last = _text(attributes.get(OverridableField.LAST_NAME))
    return f"{first} {last}"


def assign_full_name(attributes: AttributeResolver, value: str) -> None:
    """Split a full name into first, last and (optionally) middle initial.

    With three or more tokens only the second becomes the middle initial;
    any further middle tokens are dropped.
    """
    parts = value.split()
    attributes.set(OverridableField.FIRST_NAME, parts[0] if parts else None)
    attributes.set(OverridableField.LAST_NAME, parts[-1] if parts else None)
    if len(parts) >= 3:
        attributes.set(OverridableField.MIDDLE_INITIAL, parts[1])


def _address_parts(attributes: AttributeResolver) -> list[str]:
    address = attributes.get(OverridableField.LOCATION_ADDRESS)
    if not address:
        return []
    parts = str(address).split(",")
    while parts and not parts[-1]:
        parts.pop()
    return parts


def address_line_one(attributes: AttributeResolver) -> str | None:
    parts = _address_parts(attributes)
    return parts[0] if parts else None


def address_line_two(attributes: AttributeResolver) -> str:
    return ",".join(_address_parts(attributes)[1:])


def height_in_feet_and_inches(attributes: AttributeResolver) -> str | None:
    feet = attributes.height_feet
    inches = attributes.height_inches
    if feet == 0 and inches == 0:
        return None
    return f"{feet}'{inches}\""


def shorthand_description(attributes: AttributeResolver) -> str:
    """E.g. ``WM – 5'10" – 180 lb``."""
    race = attributes.get(OverridableField.RACE)
    sex = attributes.get(OverridableField.SEX)
    weight = attributes.get(OverridableField.WEIGHT_IN_POUNDS)

    segments = [
        RACE_CODES.get(race, UNKNOWN_CODE) + SEX_CODES.get(sex, UNKNOWN_CODE),
        height_in_feet_and_inches(attributes),
        f"{weight} lb" if weight is not None else None,
    ]
    return SEPARATOR.join(segment for segment in segments if segment is not None)


def profile_image_url(
    attributes: AttributeResolver,
    settings: Settings,
    cache: DerivedValueCache | None = None,
) -> str:
    """URL of the first profile image, or the default image."""
    profile = attributes.profile

    def compute() -> str:
        image = profile.profile_image
        if image is not None and image.source_url:
            return image.source_url
        return settings.default_profile_image_url

    if cache is None:
        return compute()
    return cache.cached(profile, "profile_image_url", compute)
